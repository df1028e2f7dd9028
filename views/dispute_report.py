# app/views/dispute_report.py
"""
Markdown rendering of a DisputeData envelope for human readers.
Stateless; no network access.
"""
from __future__ import annotations

from typing import List

from chain.registry import network_name
from models import DisputeData, EvidenceContent, MetaEvidence


def _meta_evidence_lines(meta: MetaEvidence) -> List[str]:
    lines = ["## Meta-Evidence"]
    if meta.title:
        lines.append(f"**Title:** {meta.title}")
    if meta.description:
        lines.append(f"**Description:** {meta.description}")
    if meta.question:
        lines.append(f"**Question:** {meta.question}")
    if meta.category:
        lines.append(f"**Category:** {meta.category}")
    if meta.ruling_options:
        lines.append("**Ruling Options:**")
        for i, title, description in meta.ruling_options.pairs():
            lines.append(f"  {i}: {title}")
            if description:
                lines.append(f"     {description}")
    return lines


def _evidence_lines(index: int, evidence: EvidenceContent) -> List[str]:
    lines = [f"### Evidence {index}"]
    if evidence.title:
        lines.append(f"**Title:** {evidence.title}")
    if evidence.description:
        lines.append(f"**Description:** {evidence.description}")
    if evidence.type:
        lines.append(f"**Type:** {evidence.type}")
    if evidence.file_uri:
        lines.append(f"**File URI:** {evidence.file_uri}")
    if evidence.file_type_extension:
        lines.append(f"**File Type:** {evidence.file_type_extension}")
    return lines


def render_dispute_report(data: DisputeData) -> str:
    lines = [
        "# Kleros Dispute Data",
        "",
        f"**Dispute ID:** {data.dispute_id}",
        f"**Chain:** {network_name(data.chain_id)} ({data.chain_id})",
        "",
    ]

    if data.meta_evidence is not None:
        lines += _meta_evidence_lines(data.meta_evidence)
    else:
        lines += ["## Meta-Evidence", "No meta-evidence found for this dispute."]
    lines.append("")

    if data.evidence_contents:
        lines += [f"## Evidence Submissions ({len(data.evidence_contents)})", ""]
        for i, evidence in enumerate(data.evidence_contents, start=1):
            lines += _evidence_lines(i, evidence)
            lines.append("")
    else:
        lines += ["## Evidence Submissions", "No evidence submissions found for this dispute.", ""]

    if data.evidence_errors:
        lines += [f"## Evidence Retrieval Errors ({len(data.evidence_errors)})", ""]
        for i, err in enumerate(data.evidence_errors, start=1):
            lines += [f"### Error {i}", f"**URI:** {err.evidence_uri}", f"**Error:** {err.error}", ""]

    return "\n".join(lines)


def render_error(message: str) -> str:
    return f"Error retrieving dispute data: {message}"
