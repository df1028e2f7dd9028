# app/models.py
"""
Dispute data records. Wire names (camelCase, URI, fileURI) are kept as
field aliases; Python code uses snake_case.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

_RECORD_CONFIG = {"populate_by_name": True, "coerce_numbers_to_str": True}


@dataclass(frozen=True)
class DisputeInput:
    dispute_id: str
    chain_id: int


class RulingOptions(BaseModel):
    model_config = _RECORD_CONFIG
    type: Optional[str] = None
    titles: List[str] = Field(default_factory=list)
    descriptions: List[str] = Field(default_factory=list)

    @field_validator("titles", "descriptions", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return [] if v is None else v

    def pairs(self) -> Iterator[Tuple[int, str, Optional[str]]]:
        """Titles paired positionally with descriptions; lengths may differ."""
        for i, title in enumerate(self.titles):
            description = self.descriptions[i] if i < len(self.descriptions) else None
            yield i, title, description


class MetaEvidence(BaseModel):
    model_config = _RECORD_CONFIG
    title: Optional[str] = None
    description: Optional[str] = None
    question: Optional[str] = None
    category: Optional[str] = None
    lang: Optional[str] = None
    version: Optional[str] = None
    ruling_options: Optional[RulingOptions] = Field(default=None, alias="rulingOptions")


class EvidenceSubmission(BaseModel):
    model_config = _RECORD_CONFIG
    uri: str = Field(alias="URI")
    sender: str
    creation_time: str = Field(alias="creationTime")


class EvidenceContent(BaseModel):
    model_config = _RECORD_CONFIG
    title: Optional[str] = None
    description: Optional[str] = None
    file_uri: Optional[str] = Field(default=None, alias="fileURI")
    file_type_extension: Optional[str] = Field(default=None, alias="fileTypeExtension")
    type: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_unusable_fields(cls, data):
        # content is third-party JSON: a field that is not text or a number is left out
        if isinstance(data, dict):
            return {
                k: v for k, v in data.items()
                if isinstance(v, (str, int, float)) and not isinstance(v, bool)
            }
        return data


class EvidenceError(BaseModel):
    model_config = {"populate_by_name": True}
    evidence_uri: str = Field(alias="evidenceUri")
    error: str


class DisputeData(BaseModel):
    model_config = {"populate_by_name": True}
    dispute_id: str = Field(alias="disputeId")
    chain_id: int = Field(alias="chainId")
    meta_evidence: Optional[MetaEvidence] = Field(default=None, alias="metaEvidence")
    evidence_contents: List[EvidenceContent] = Field(default_factory=list, alias="evidenceContents")
    evidence_errors: List[EvidenceError] = Field(default_factory=list, alias="evidenceErrors")

    def to_dict(self) -> Dict[str, Any]:
        """Wire envelope: absent optional fields are dropped, a missing metaEvidence stays null."""
        return {
            "disputeId": self.dispute_id,
            "chainId": self.chain_id,
            "metaEvidence": (
                self.meta_evidence.model_dump(by_alias=True, exclude_none=True)
                if self.meta_evidence is not None else None
            ),
            "evidenceContents": [c.model_dump(by_alias=True, exclude_none=True) for c in self.evidence_contents],
            "evidenceErrors": [e.model_dump(by_alias=True) for e in self.evidence_errors],
        }
