# app/services/meta_evidence.py
"""
Meta-evidence lookup against the centralized Kleros API.
One GET per dispute; a 404 or an empty body means "no meta-evidence", not an error.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from config import UpstreamConfig
from errors import UpstreamError, describe
from models import MetaEvidence

logger = logging.getLogger(__name__)


class MetaEvidenceFetcher:
    def __init__(self, config: UpstreamConfig, client: httpx.AsyncClient):
        self._config = config
        self._client = client

    async def get_meta_evidence(self, dispute_id: str, chain_id: int) -> Optional[MetaEvidence]:
        details = {"disputeId": dispute_id, "chainId": chain_id}
        try:
            r = await self._client.get(
                self._config.meta_evidence_url,
                params={"disputeId": dispute_id, "chainId": chain_id},
                timeout=self._config.meta_evidence_timeout,
            )
            if r.status_code == 404:
                logger.info("No meta-evidence for dispute=%s chain=%s", dispute_id, chain_id)
                return None
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamError.from_http_error(e, "Failed to retrieve meta-evidence", **details) from e

        if not r.content.strip():
            return None

        try:
            data = r.json()
            if data is None or data == "":
                return None
            return MetaEvidence.model_validate(data)
        except ValueError as e:
            raise UpstreamError(
                f"Failed to retrieve meta-evidence: malformed payload ({describe(e)})",
                code="META_EVIDENCE_ERROR",
                details={**details, "status": r.status_code},
            ) from e
