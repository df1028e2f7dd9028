# app/services/subgraph.py
"""
Evidence index lookup against the per-network Kleros subgraph (GraphQL over HTTP POST).
"""
from __future__ import annotations

import logging
from typing import List

import httpx

from config import UpstreamConfig
from errors import UpstreamError, describe
from models import EvidenceSubmission

logger = logging.getLogger(__name__)

EVIDENCE_QUERY = """
  query getDispute($id: String!) {
    dispute(id: $id) {
      evidenceGroup {
        evidence {
          URI
          sender
          creationTime
        }
      }
    }
  }
"""


def _member(parent, key, details):
    """parent[key], None when parent is absent; any non-object parent is malformed."""
    if parent is None:
        return None
    if not isinstance(parent, dict):
        raise UpstreamError(
            f"Failed to query subgraph: malformed payload (expected an object holding '{key}')",
            code="SUBGRAPH_ERROR",
            details=details,
        )
    return parent.get(key)


class SubgraphFetcher:
    def __init__(self, config: UpstreamConfig, client: httpx.AsyncClient):
        self._config = config
        self._client = client

    async def get_evidence_submissions(self, dispute_id: str, chain_id: int) -> List[EvidenceSubmission]:
        """
        Ordered evidence submissions for a dispute, as the index returns them.
        A dispute without an evidence group (or unknown to the index) yields [].
        """
        url = self._config.subgraph_url(chain_id)
        if not url:
            raise UpstreamError(
                f"No subgraph URL configured for chain ID {chain_id}",
                code="SUBGRAPH_NOT_CONFIGURED",
                details={"chainId": chain_id},
            )

        details = {"disputeId": dispute_id, "chainId": chain_id, "subgraphUrl": url}
        try:
            r = await self._client.post(
                url,
                json={"query": EVIDENCE_QUERY, "variables": {"id": dispute_id}},
                timeout=self._config.subgraph_timeout,
            )
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamError.from_http_error(e, "Failed to query subgraph", **details) from e

        try:
            payload = r.json()
        except ValueError as e:
            raise UpstreamError(
                f"Failed to query subgraph: malformed payload ({describe(e)})",
                code="SUBGRAPH_ERROR",
                details=details,
            ) from e
        if not isinstance(payload, dict):
            raise UpstreamError("Failed to query subgraph: malformed payload", code="SUBGRAPH_ERROR", details=details)

        # query errors are fatal even when partial data came back
        errors = payload.get("errors") or []
        if errors:
            messages = ", ".join(
                str(err.get("message")) if isinstance(err, dict) else str(err) for err in errors
            )
            raise UpstreamError(
                f"Subgraph query errors: {messages}",
                code="SUBGRAPH_QUERY_ERROR",
                details={**details, "errors": errors},
            )

        data = _member(payload, "data", details)
        dispute = _member(data, "dispute", details)
        group = _member(dispute, "evidenceGroup", details)
        evidence = _member(group, "evidence", details) or []
        if not isinstance(evidence, list):
            raise UpstreamError(
                "Failed to query subgraph: malformed payload (evidence is not a list)",
                code="SUBGRAPH_ERROR",
                details=details,
            )

        try:
            submissions = [EvidenceSubmission.model_validate(item) for item in evidence]
        except ValueError as e:
            raise UpstreamError(
                f"Failed to query subgraph: malformed evidence entry ({describe(e)})",
                code="SUBGRAPH_ERROR",
                details=details,
            ) from e

        logger.info("Subgraph returned %d evidence submissions for dispute=%s chain=%s",
                    len(submissions), dispute_id, chain_id)
        return submissions
