from __future__ import annotations

from typing import Any

import pytest

from hrmatching.core import OutcomePredictor, PredictionConfig, SimilarityMatcher
from hrmatching.core.prediction import NO_HISTORY_REASON
from hrmatching.schemas import Candidate, Evaluation


def build_candidate(candidate_id: str, **kwargs: Any) -> Candidate:
    defaults: dict[str, Any] = {
        "candidate_id": candidate_id,
        "age": 28,
        "education": "Waseda University",
        "experience": "Corporate sales for SaaS products",
        "self_summary": "Goal driven and persistent",
        "applied_job_type": "experienced_sales",
    }
    defaults.update(kwargs)
    return Candidate(**defaults)


def build_evaluation(
    candidate_id: str,
    scores: dict[str, int],
    decision: str | None = None,
) -> Evaluation:
    return Evaluation(
        candidate_id=candidate_id,
        job_type="experienced_sales",
        scores=scores,
        is_complete=decision is not None,
        final_decision=decision,
    )


def build_pool(hired: int, total: int, hired_scores: dict[str, int] | None = None) -> list:
    hired_scores = hired_scores or {"c1": 3, "c2": 4}
    pool = []
    for idx in range(total):
        candidate_id = f"H-{idx:03d}"
        decision = "hired" if idx < hired else "rejected"
        scores = hired_scores if decision == "hired" else {"c1": 2, "c2": 2}
        pool.append((build_candidate(candidate_id), build_evaluation(candidate_id, scores, decision)))
    return pool


def test_empty_pool_returns_low_confidence_default():
    predictor = OutcomePredictor()

    result = predictor.predict(build_candidate("C-001"), None, [])

    assert result.prediction == "hire"
    assert result.confidence == 0.5
    assert result.reasons == [NO_HISTORY_REASON]
    assert result.sample_size == 0


def test_high_hire_rate_predicts_hire():
    predictor = OutcomePredictor()
    current = build_evaluation("C-001", {"c1": 3, "c2": 3})

    result = predictor.predict(build_candidate("C-001"), current, build_pool(8, 10))

    assert result.prediction == "hire"
    assert result.confidence == pytest.approx(0.75)
    assert result.hire_rate == pytest.approx(0.8)
    assert result.reasons == [
        "8 of 10 similar candidates were hired (hire rate: 80.0%)",
        "Hired similar candidates averaged 3.5 points",
        "The current evaluation score (3.0) is below the hired candidates' average",
    ]


def test_high_current_score_overrides_reject():
    predictor = OutcomePredictor()
    current = build_evaluation("C-001", {"a": 4, "b": 4, "c": 4, "d": 3, "e": 4})

    result = predictor.predict(build_candidate("C-001"), current, build_pool(1, 10))

    # base: reject at 0.70 + (0.3 - 0.1) * 0.5 = 0.8
    assert result.prediction == "hire"
    assert result.confidence == pytest.approx(0.7)
    assert "high current evaluation score" in result.reasons[-1]
    assert "at or above" in result.reasons[2]


def test_low_current_score_overrides_hire():
    predictor = OutcomePredictor()
    current = build_evaluation("C-001", {"a": 2, "b": 2})

    result = predictor.predict(build_candidate("C-001"), current, build_pool(8, 10))

    assert result.prediction == "reject"
    assert result.confidence == pytest.approx(0.65)
    assert "low current evaluation score" in result.reasons[-1]


def test_override_confidence_has_floor():
    predictor = OutcomePredictor()
    current = build_evaluation("C-001", {"a": 1, "b": 2})

    result = predictor.predict(build_candidate("C-001"), current, build_pool(5, 10))

    assert result.prediction == "reject"
    assert result.confidence == pytest.approx(0.6)


def test_missing_current_scores_count_as_low():
    predictor = OutcomePredictor()

    result = predictor.predict(build_candidate("C-001"), None, build_pool(8, 10))

    assert result.prediction == "reject"
    assert result.confidence == pytest.approx(0.65)
    assert not any("current evaluation score (" in reason for reason in result.reasons)


def test_small_sample_skips_rate_reason():
    predictor = OutcomePredictor()
    current = build_evaluation("C-001", {"a": 3})

    result = predictor.predict(build_candidate("C-001"), current, build_pool(2, 2))

    assert result.prediction == "hire"
    assert result.confidence == pytest.approx(0.85)
    assert result.reasons[0] == "Hired similar candidates averaged 3.5 points"


def test_no_hired_matches_skips_hired_average():
    predictor = OutcomePredictor()
    current = build_evaluation("C-001", {"a": 3})

    result = predictor.predict(build_candidate("C-001"), current, build_pool(0, 4))

    assert result.prediction == "reject"
    assert result.confidence == pytest.approx(0.85)
    assert result.reasons == ["0 of 4 similar candidates were hired (hire rate: 0.0%)"]


def test_prediction_uses_top_ten_matches():
    predictor = OutcomePredictor()
    current = build_evaluation("C-001", {"a": 3})

    result = predictor.predict(build_candidate("C-001"), current, build_pool(8, 15))

    assert result.sample_size == 10
    assert len(result.similar_candidates) == 10
    assert result.hire_rate == pytest.approx(0.8)


@pytest.mark.parametrize(
    ("hire_rate", "prediction", "confidence"),
    [
        (1.0, "hire", 0.85),
        (0.7, "hire", 0.70),
        (0.6, "hire", 0.60),
        (0.5, "hire", 0.50),
        (0.4, "reject", 0.60),
        (0.3, "reject", 0.70),
        (0.0, "reject", 0.85),
    ],
)
def test_base_prediction_buckets(hire_rate: float, prediction: str, confidence: float):
    result_prediction, result_confidence = OutcomePredictor().base_prediction(hire_rate)

    assert result_prediction == prediction
    assert result_confidence == pytest.approx(confidence)


def test_confidence_bounds_for_non_empty_pools():
    predictor = OutcomePredictor()
    current = build_evaluation("C-001", {"a": 3})

    for hired in range(0, 11):
        result = predictor.predict(build_candidate("C-001"), current, build_pool(hired, 10))
        assert 0.5 <= result.confidence <= 0.95


def test_custom_matcher_and_config():
    predictor = OutcomePredictor(
        matcher=SimilarityMatcher(),
        config=PredictionConfig(match_limit=3, min_sample_for_rate_reason=1),
    )
    current = build_evaluation("C-001", {"a": 3})

    result = predictor.predict(build_candidate("C-001"), current, build_pool(3, 6))

    assert result.sample_size == 3
    assert result.reasons[0].startswith("3 of 3")
