# app/services/dispute_service.py
"""
Dispute data aggregation.

Pattern: validate -> meta-evidence + evidence index (concurrently) ->
one IPFS fetch per evidence item (settle all) -> partition into contents / errors.

Meta-evidence and index failures abort the request. Content failures never do:
each one becomes an EvidenceError carrying the original URI.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Tuple

import httpx

from chain.registry import SUPPORTED_CHAIN_IDS, is_supported_chain_id, network_name
from config import UpstreamConfig
from errors import DisputeDataError, DisputeValidationError, error_message
from models import (
    DisputeData,
    DisputeInput,
    EvidenceContent,
    EvidenceError,
    EvidenceSubmission,
    MetaEvidence,
)
from services.ipfs import IpfsFetcher
from services.meta_evidence import MetaEvidenceFetcher
from services.subgraph import SubgraphFetcher

logger = logging.getLogger(__name__)


def validate_input(dispute_input: DisputeInput) -> Tuple[str, int]:
    dispute_id = dispute_input.dispute_id
    chain_id = dispute_input.chain_id

    if not isinstance(dispute_id, str) or not dispute_id.strip():
        raise DisputeValidationError("Dispute ID must be a non-empty string")

    if not is_supported_chain_id(chain_id):
        supported = ", ".join(str(c) for c in SUPPORTED_CHAIN_IDS)
        raise DisputeValidationError(f"Unsupported chain ID: {chain_id}. Supported chains: {supported}")

    return dispute_id, chain_id


class DisputeService:
    def __init__(
        self,
        config: UpstreamConfig,
        client: httpx.AsyncClient,
        meta_evidence: Optional[MetaEvidenceFetcher] = None,
        subgraph: Optional[SubgraphFetcher] = None,
        ipfs: Optional[IpfsFetcher] = None,
    ):
        self.config = config
        self.meta_evidence = meta_evidence or MetaEvidenceFetcher(config, client)
        self.subgraph = subgraph or SubgraphFetcher(config, client)
        self.ipfs = ipfs or IpfsFetcher(config, client)

    async def get_dispute_data(self, dispute_input: DisputeInput) -> DisputeData:
        dispute_id, chain_id = validate_input(dispute_input)
        network = network_name(chain_id)
        logger.info("Fetching dispute data: dispute=%s chain=%s (%s)", dispute_id, chain_id, network)

        # independent calls; both settle before either failure is raised
        meta_outcome, index_outcome = await asyncio.gather(
            self.meta_evidence.get_meta_evidence(dispute_id, chain_id),
            self.subgraph.get_evidence_submissions(dispute_id, chain_id),
            return_exceptions=True,
        )
        for outcome in (meta_outcome, index_outcome):
            if isinstance(outcome, Exception):
                logger.error("Dispute %s on %s failed: %s", dispute_id, network, error_message(outcome))
                raise DisputeDataError(dispute_id, network, outcome) from outcome
            if isinstance(outcome, BaseException):
                raise outcome

        meta_evidence: Optional[MetaEvidence] = meta_outcome
        submissions: List[EvidenceSubmission] = index_outcome

        contents, errors = await self._fetch_contents(submissions)

        logger.info("Dispute %s on %s: %d evidence items, %d failed",
                    dispute_id, network, len(submissions), len(errors))
        return DisputeData(
            dispute_id=dispute_id,
            chain_id=chain_id,
            meta_evidence=meta_evidence,
            evidence_contents=contents,
            evidence_errors=errors,
        )

    async def _fetch_contents(
        self, submissions: List[EvidenceSubmission]
    ) -> Tuple[List[EvidenceContent], List[EvidenceError]]:
        limit = self.config.max_concurrent_content_fetches
        semaphore = asyncio.Semaphore(limit) if limit > 0 else None

        async def fetch(uri: str) -> EvidenceContent:
            if semaphore is None:
                return await self.ipfs.get_evidence_content(uri)
            async with semaphore:
                return await self.ipfs.get_evidence_content(uri)

        outcomes = await asyncio.gather(*(fetch(s.uri) for s in submissions), return_exceptions=True)

        contents: List[EvidenceContent] = []
        errors: List[EvidenceError] = []
        for submission, outcome in zip(submissions, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Evidence %s failed: %s", submission.uri, error_message(outcome))
                errors.append(EvidenceError(evidence_uri=submission.uri, error=error_message(outcome)))
            elif isinstance(outcome, BaseException):
                # cancellation and interpreter exits are not per-item failures
                raise outcome
            else:
                contents.append(outcome)
        return contents, errors
