# app/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from dotenv import load_dotenv

from chain.registry import SUPPORTED_CHAIN_IDS, default_subgraph_url

load_dotenv()

# ------------------------------------------------------------
# Upstreams
# ------------------------------------------------------------
META_EVIDENCE_URL = os.getenv(
    "META_EVIDENCE_URL",
    "https://kleros-api.netlify.app/.netlify/functions/get-dispute-metaevidence",
)

IPFS_GATEWAY = os.getenv("IPFS_GATEWAY", "https://cdn.kleros.link").rstrip("/")

THEGRAPH_API_KEY = os.getenv("THEGRAPH_API_KEY", "d1d19cef4bc7647cc6cfad4ad2662628")

SUBGRAPH_URLS = {
    chain_id: os.getenv(f"SUBGRAPH_URL_{chain_id}") or default_subgraph_url(chain_id, THEGRAPH_API_KEY)
    for chain_id in SUPPORTED_CHAIN_IDS
}

# seconds
META_EVIDENCE_TIMEOUT = float(os.getenv("META_EVIDENCE_TIMEOUT", "15"))
SUBGRAPH_TIMEOUT = float(os.getenv("SUBGRAPH_TIMEOUT", "10"))
IPFS_TIMEOUT = float(os.getenv("IPFS_TIMEOUT", "10"))

# 0 = no cap on simultaneous content fetches
MAX_CONCURRENT_CONTENT_FETCHES = int(os.getenv("MAX_CONCURRENT_CONTENT_FETCHES", "0"))

# ------------------------------------------------------------
# Service
# ------------------------------------------------------------
SERVICE_NAME = os.getenv("SERVICE_NAME", "kleros-dispute-api")
USER_AGENT = os.getenv("USER_AGENT", "Kleros-Dispute-API/1.0.0")
ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "User-Agent": USER_AGENT,
}


@dataclass(frozen=True)
class UpstreamConfig:
    """Endpoints and timeouts shared by the fetchers. Built once, never mutated."""
    meta_evidence_url: str = META_EVIDENCE_URL
    ipfs_gateway: str = IPFS_GATEWAY
    subgraph_urls: Mapping[int, str] = field(default_factory=lambda: MappingProxyType(dict(SUBGRAPH_URLS)))
    meta_evidence_timeout: float = META_EVIDENCE_TIMEOUT
    subgraph_timeout: float = SUBGRAPH_TIMEOUT
    ipfs_timeout: float = IPFS_TIMEOUT
    max_concurrent_content_fetches: int = MAX_CONCURRENT_CONTENT_FETCHES

    def __post_init__(self):
        # freeze caller-supplied dicts too
        if not isinstance(self.subgraph_urls, MappingProxyType):
            object.__setattr__(self, "subgraph_urls", MappingProxyType(dict(self.subgraph_urls)))

    def subgraph_url(self, chain_id: int) -> Optional[str]:
        return self.subgraph_urls.get(chain_id)


def load_upstream_config() -> UpstreamConfig:
    return UpstreamConfig()


print("Config loaded:")
print("  META_EVIDENCE_URL:", META_EVIDENCE_URL[:60] + "…")
print("  IPFS_GATEWAY:", IPFS_GATEWAY)
print("  SUBGRAPHS:", ", ".join(str(c) for c in SUBGRAPH_URLS))
print("  THEGRAPH_API_KEY:", "<set>" if os.getenv("THEGRAPH_API_KEY") else "<default>")
