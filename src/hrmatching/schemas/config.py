"""Pydantic configuration schema for YAML engine settings."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class TextSimilaritySettings(BaseModel):
    strategy: Literal["jaccard", "fuzzy"] = "jaccard"
    min_token_length: int | None = None
    stop_words: list[str] | None = None

    model_config = ConfigDict(extra="forbid")


class EngineSettings(BaseModel):
    similar_limit: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    engine: EngineSettings = Field(default_factory=EngineSettings)
    text: TextSimilaritySettings | None = None
    aggregator: dict[str, Any] | None = None
    aptitude: dict[str, Any] | None = None
    matching: dict[str, Any] | None = None
    prediction: dict[str, Any] | None = None

    model_config = ConfigDict(extra="forbid")

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        engine_settings = self.engine.model_dump(exclude_none=True)
        if engine_settings:
            settings["engine"] = engine_settings
        if self.text is not None:
            settings["text"] = self.text.model_dump(exclude_none=True)
        for section in ("aggregator", "aptitude", "matching", "prediction"):
            value = getattr(self, section)
            if value:
                settings[section] = value
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
