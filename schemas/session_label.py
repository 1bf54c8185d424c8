from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

LABEL_SCHEMA_VERSION = "1.0"


class LabelSource(str, Enum):
    GENERATED = "generated"
    MANUAL = "manual"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionLabel(BaseModel):
    """Label metadata stored for a session, keyed by session key in a label store."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., alias="label", min_length=1)
    source: LabelSource = Field(LabelSource.GENERATED, alias="label_source")
    turn_threshold: int = Field(0, alias="label_turn", ge=0)
    schema_version: str = Field(LABEL_SCHEMA_VERSION, alias="label_version")
    updated_at: datetime = Field(default_factory=_utcnow, alias="label_updated_at")

    @field_validator("source", mode="before")
    @classmethod
    def _accept_legacy_source(cls, value: Any) -> Any:
        # Older label files record pipeline labels as "auto".
        if isinstance(value, str) and value.strip().lower() == "auto":
            return LabelSource.GENERATED
        return value

    def to_store_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
