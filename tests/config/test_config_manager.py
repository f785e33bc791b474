from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from hrmatching.config import ConfigManager
from hrmatching.schemas.config import AppConfig, load_config


def write_yaml(path: Path, text: str) -> None:
    path.write_text(text, encoding="utf-8")


def test_load_job_types_preserves_criteria_order(tmp_path: Path):
    write_yaml(
        tmp_path / "job_types.yaml",
        """
engineer:
  name: Engineer
  criteria:
    - id: technical_skill
      name: Technical skill
      weight: 40
      category: ability_experience
    - id: ownership
      weight: 30
      category: values
    - id: growth
      weight: 30
      category: orientation
fresh_sales:
  criteria: []
""",
    )

    catalog = ConfigManager(tmp_path).load_job_types()

    engineer = catalog["engineer"]
    assert engineer.job_type == "engineer"
    assert [criterion.criterion_id for criterion in engineer.criteria] == [
        "technical_skill",
        "ownership",
        "growth",
    ]
    assert engineer.total_weight == pytest.approx(100)
    assert catalog["fresh_sales"].criteria == []


def test_load_settings_validates(tmp_path: Path):
    write_yaml(
        tmp_path / "settings.yaml",
        """
engine:
  similar_limit: 3
text:
  strategy: fuzzy
matching:
  job_type_weight: 50
""",
    )

    app_config = ConfigManager(tmp_path).load_settings()

    assert isinstance(app_config, AppConfig)
    settings = app_config.to_settings()
    assert settings["engine"] == {"similar_limit": 3}
    assert settings["text"] == {"strategy": "fuzzy"}
    assert settings["matching"]["job_type_weight"] == 50


def test_load_rejects_non_mapping(tmp_path: Path):
    write_yaml(tmp_path / "broken.yaml", "- just\n- a list\n")

    with pytest.raises(ValueError):
        ConfigManager(tmp_path).load("broken")


def test_load_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(tmp_path).load("absent")


def test_empty_file_loads_as_empty_mapping(tmp_path: Path):
    write_yaml(tmp_path / "empty.yaml", "")

    assert ConfigManager(tmp_path).load("empty") == {}


def test_load_config_validation():
    with pytest.raises(ValidationError):
        load_config(["not", "a", "mapping"])
    with pytest.raises(ValidationError):
        load_config({"text": {"strategy": "cosine"}})
    assert load_config({}).to_settings() == {}
