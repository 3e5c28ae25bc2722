from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


SEP_TOKEN = "[SEP]"
CLS_TOKEN = "[CLS]"
STRUCTURAL_MARKERS = frozenset({SEP_TOKEN, CLS_TOKEN})
LINK_TOKEN = "link"
CODE_TOKEN = "code"


class NormalizerSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    max_token_chars: int = Field(default=32, ge=1)
    long_token_placeholder: str = "random-word"
    repair_unicode: bool = True
    language_filter: bool = True
    allowed_script: str = "Latin"
    allowed_language: str = "en"
    language_confidence_threshold: float = Field(default=0.6, ge=0, le=1)
    fragment_separator: str = " . "
    code_mask_text: str = "Section contained code."
    skip_html_tags: List[str] = Field(default_factory=lambda: ["pre", "code"])

    @field_validator("long_token_placeholder")
    @classmethod
    def validate_placeholder(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("long_token_placeholder cannot be blank")
        return value.strip()

    @field_validator("allowed_language")
    @classmethod
    def normalize_language_code(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("skip_html_tags")
    @classmethod
    def normalize_tag_names(cls, tags: List[str]) -> List[str]:
        return [tag.strip().lower() for tag in tags if tag.strip()]


class TokenStats(BaseModel):
    model_config = ConfigDict(extra="forbid")

    accepted: int = Field(default=0, ge=0)
    rejected: int = Field(default=0, ge=0)


class NormalizeResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tokens: List[str] = Field(default_factory=list)
    accepted: int = Field(default=0, ge=0)
    rejected: int = Field(default=0, ge=0)
