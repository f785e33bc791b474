"""Configuration management utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..schemas import JobTypeConfig
from ..schemas.config import AppConfig, load_config


class ConfigManager:
    """YAML-backed loader for engine settings and job-type criteria."""

    def __init__(self, base_path: str | Path):
        self._base_path = Path(base_path)

    def load(self, name: str) -> dict[str, Any]:
        """Load a YAML mapping by name without file extension."""
        path = self._base_path / f"{name}.yaml"
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ValueError(f"{path} must contain a YAML mapping")
        return loaded

    def load_settings(self, name: str = "settings") -> AppConfig:
        return load_config(self.load(name))

    def load_job_types(self, name: str = "job_types") -> dict[str, JobTypeConfig]:
        """Load criteria catalogs keyed by job type, preserving criteria order."""
        raw = self.load(name)
        catalog: dict[str, JobTypeConfig] = {}
        for job_type, body in raw.items():
            payload = dict(body or {})
            payload.setdefault("job_type", job_type)
            catalog[job_type] = JobTypeConfig.model_validate(payload)
        return catalog


__all__ = ["ConfigManager"]
