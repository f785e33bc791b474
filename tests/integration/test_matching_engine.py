from __future__ import annotations

import json
import logging
from typing import Any

import pendulum
import pytest
import structlog
from structlog.testing import capture_logs

from hrmatching.container import create_container
from hrmatching.logging import configure_logging
from hrmatching.pipeline import build_history_pool
from hrmatching.schemas import Candidate, Evaluation, EvaluationCriterion


def build_candidate(candidate_id: str, **kwargs: Any) -> Candidate:
    defaults: dict[str, Any] = {
        "candidate_id": candidate_id,
        "name": "山田 花子",
        "age": 29,
        "education": "Keio University Faculty of Science",
        "major": "Information Engineering",
        "experience": "Web application development with Python Django",
        "self_summary": "Enjoys building reliable services",
        "applied_job_type": "engineer",
    }
    defaults.update(kwargs)
    return Candidate(**defaults)


def build_evaluation(candidate_id: str, decision: str | None, **kwargs: Any) -> Evaluation:
    defaults: dict[str, Any] = {
        "candidate_id": candidate_id,
        "job_type": "engineer",
        "scores": {"tech": 3, "ownership": 3},
        "is_complete": decision is not None,
        "final_decision": decision,
    }
    defaults.update(kwargs)
    return Evaluation(**defaults)


CRITERIA = [
    EvaluationCriterion(criterion_id="tech", weight=60, category="ability_experience"),
    EvaluationCriterion(criterion_id="ownership", weight=40, category="values"),
]


def test_build_history_pool_filters_store_snapshot():
    target = build_candidate("C-000")
    candidates = [
        target,
        build_candidate("C-001"),
        build_candidate("C-002"),
        build_candidate("C-003"),
        build_candidate("C-004"),
    ]
    evaluations = [
        build_evaluation("C-000", "hired"),
        build_evaluation("C-001", "hired"),
        build_evaluation("C-002", "pending"),
        build_evaluation("C-003", None),
    ]

    pool = build_history_pool(target, candidates, evaluations)

    assert [candidate.candidate_id for candidate, _ in pool] == ["C-001"]
    assert pool[0][1].final_decision == "hired"


def test_engine_produces_full_report():
    container = create_container()
    engine = container.engine(now_provider=lambda: pendulum.datetime(2025, 4, 1, tz="UTC"))

    target = build_candidate(
        "C-000",
        aptitude={
            "language": {"total_score": 62},
            "non_verbal": {"total_score": 66},
            "personality": {"job_fit": {"technical": 78}},
            "total_score": 64,
        },
    )
    candidates = [target] + [build_candidate(f"C-{idx:03d}") for idx in range(1, 6)]
    evaluations = [
        build_evaluation(f"C-{idx:03d}", "hired" if idx <= 4 else "rejected")
        for idx in range(1, 6)
    ]
    history = build_history_pool(target, candidates, evaluations)
    current = build_evaluation("C-000", None, scores={"tech": 4, "ownership": 2})

    report = engine.evaluate(
        candidate=target,
        evaluation=current,
        criteria=CRITERIA,
        history=history,
    )

    assert report.candidate_id == "C-000"
    assert report.scores is not None
    assert report.scores.total_score == pytest.approx(3.0)
    assert report.scores.weighted_score == pytest.approx(3.2)
    assert report.aptitude is not None
    assert 0 <= report.aptitude.job_fit_score <= 100
    assert len(report.similar_candidates) == 5
    assert report.prediction.prediction == "hire"
    assert report.prediction.confidence == pytest.approx(0.75)
    assert report.generated_at.startswith("2025-04-01T00:00:00")
    assert report.metadata == {"pool_size": 5}

    payload = report.to_dict()
    assert payload["similar_candidates"][0]["candidate"]["candidate_id"] == "C-001"
    assert payload["scores"]["criteria_scores"][0]["criterion"]["criterion_id"] == "tech"
    json.dumps(payload, ensure_ascii=False)


def test_engine_without_history_or_evaluation():
    engine = create_container().engine()
    target = build_candidate("C-000")

    report = engine.evaluate(candidate=target)

    assert report.scores is None
    assert report.aptitude is None
    assert report.similar_candidates == []
    assert report.prediction.prediction == "hire"
    assert report.prediction.confidence == 0.5
    assert report.job_type == "engineer"


def test_engine_emits_structured_events():
    engine = create_container().engine()
    target = build_candidate("C-000")

    with capture_logs() as logs:
        engine.evaluate(candidate=target, history=[])

    events = [entry["event"] for entry in logs]
    assert "prediction.no_history" in events
    report_event = next(entry for entry in logs if entry["event"] == "engine.report")
    assert report_event["pool_size"] == 0
    assert report_event["has_aptitude"] is False


def test_configure_logging_filters_below_level():
    try:
        configure_logging("warning")
        config = structlog.get_config()
        assert config["cache_logger_on_first_use"] is True
        assert config["wrapper_class"] is structlog.make_filtering_bound_logger(logging.WARNING)
    finally:
        structlog.reset_defaults()
