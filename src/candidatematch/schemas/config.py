"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ScoringConfig(BaseModel):
    weights: dict[str, float] | None = None


class BatchConfig(BaseModel):
    max_concurrency: int | None = Field(default=None, ge=1)
    filters: dict[str, Any] | None = None


class FilteringConfig(BaseModel):
    timeout: float | None = Field(default=None, gt=0)
    max_summary_records: int | None = Field(default=None, ge=1)


class AppConfig(BaseModel):
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    filtering: FilteringConfig = Field(default_factory=FilteringConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("scoring", "batch", "filtering"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        return settings


def load_config(raw: Any) -> AppConfig:
    """Validate a raw mapping such as parsed YAML; non-mappings raise ValidationError."""
    return AppConfig.model_validate(raw)
