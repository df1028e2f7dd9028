# app/services/ipfs.py
"""
Evidence content retrieval through the IPFS HTTP gateway.
Every failure is raised as UpstreamError for the caller to record per item.
"""
from __future__ import annotations

import logging

import httpx

from config import UpstreamConfig
from errors import UpstreamError, describe
from models import EvidenceContent

logger = logging.getLogger(__name__)

IPFS_SCHEME = "ipfs://"
IPFS_PATH_PREFIX = "/ipfs/"
HASH_PREFIXES = ("Qm", "bafy")


def resolve_ipfs_uri(uri: str, gateway: str) -> str:
    """
    Map an evidence URI onto a fetchable gateway URL. First match wins:
        ipfs://<hash>      -> <gateway>/ipfs/<hash>
        /ipfs/<hash>       -> <gateway>/ipfs/<hash>
        Qm... / bafy...    -> <gateway>/ipfs/<hash>
        http(s)://...      -> unchanged
        anything else      -> treated as a bare hash
    """
    gateway = gateway.rstrip("/")
    if uri.startswith(IPFS_SCHEME):
        return gateway + IPFS_PATH_PREFIX + uri[len(IPFS_SCHEME):]
    if uri.startswith(IPFS_PATH_PREFIX):
        return gateway + uri
    if uri.startswith(HASH_PREFIXES):
        return gateway + IPFS_PATH_PREFIX + uri
    if uri.startswith(("http://", "https://")):
        return uri
    return gateway + IPFS_PATH_PREFIX + uri


class IpfsFetcher:
    def __init__(self, config: UpstreamConfig, client: httpx.AsyncClient):
        self._config = config
        self._client = client

    async def get_evidence_content(self, ipfs_uri: str) -> EvidenceContent:
        if not ipfs_uri:
            raise UpstreamError("IPFS URI is required", code="IPFS_ERROR")

        http_url = resolve_ipfs_uri(ipfs_uri, self._config.ipfs_gateway)
        details = {"ipfsUri": ipfs_uri, "httpUrl": http_url}
        try:
            r = await self._client.get(http_url, timeout=self._config.ipfs_timeout)
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamError.from_http_error(e, "Failed to retrieve IPFS content", **details) from e

        try:
            body = r.json()
            if not isinstance(body, dict):
                raise ValueError("expected a JSON object")
            return EvidenceContent.model_validate(body)
        except ValueError as e:
            raise UpstreamError(
                f"Failed to retrieve IPFS content: malformed payload ({describe(e)})",
                code="IPFS_ERROR",
                details={**details, "status": r.status_code},
            ) from e
