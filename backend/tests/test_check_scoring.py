from __future__ import annotations

import itertools

from keycheck.services.check.errors import build_check_error
from keycheck.services.check.next_actions import build_next_actions
from keycheck.services.check.score import calculate_health_score

AUTH = build_check_error(error_code="AUTH_FAILED", category="auth", message="m", retry_advice="fix key")
TIMEOUT = build_check_error(error_code="PROVIDER_TIMEOUT", category="network", message="m", retry_advice="retry")
QUOTA = build_check_error(error_code="QUOTA_UNAVAILABLE", category="quota", message="m", retry_advice="console")
NO_ADVICE = build_check_error(error_code="PROVIDER_ERROR", category="provider", message="m", retry_advice="")


def test_full_score_for_available_with_models_and_quota() -> None:
    score = calculate_health_score(
        availability="available", models=["gpt-4o"], quota_status="available", errors=[]
    )
    assert score == 100


def test_quota_unknown_contributes_partial_credit() -> None:
    score = calculate_health_score(
        availability="available", models=["gpt-4o"], quota_status="unknown", errors=[QUOTA]
    )
    assert score == 88


def test_empty_catalog_scores_lower() -> None:
    score = calculate_health_score(availability="available", models=[], quota_status="unavailable", errors=[])
    assert score == 50


def test_auth_failure_is_capped() -> None:
    score = calculate_health_score(
        availability="unavailable", models=[], quota_status="unknown", errors=[AUTH]
    )
    assert score == 8

    # Even contradictory inputs never read as healthy once auth failed.
    capped = calculate_health_score(
        availability="available", models=["x"], quota_status="available", errors=[AUTH]
    )
    assert capped == 20


def test_timeout_penalty_floors_at_zero() -> None:
    score = calculate_health_score(
        availability="unavailable", models=[], quota_status="unknown", errors=[TIMEOUT]
    )
    assert score == 0


def test_score_bounds_hold_for_all_combinations() -> None:
    error_sets = [[], [AUTH], [TIMEOUT], [QUOTA], [AUTH, TIMEOUT], [QUOTA, TIMEOUT]]
    for availability, models, quota, errors in itertools.product(
        ("available", "unavailable"),
        ([], ["m1", "m2"]),
        ("available", "unavailable", "unknown"),
        error_sets,
    ):
        score = calculate_health_score(
            availability=availability, models=models, quota_status=quota, errors=errors
        )
        assert 0 <= score <= 100
        if any(e.category == "auth" for e in errors):
            assert score <= 20


def test_next_actions_for_healthy_key() -> None:
    actions = build_next_actions(
        availability="available", models=["gpt-4o", "gpt-4o-mini"], quota_status="available", errors=[]
    )
    assert actions == ["Try model first: gpt-4o"]


def test_next_actions_include_quota_and_first_retry_advice() -> None:
    actions = build_next_actions(
        availability="available", models=["gpt-4o"], quota_status="unknown", errors=[NO_ADVICE, QUOTA, AUTH]
    )
    assert actions[0] == "Try model first: gpt-4o"
    assert "provider console" in actions[1]
    assert actions[2] == "console"
    assert len(actions) == 3


def test_next_actions_fall_back_to_ready_message() -> None:
    actions = build_next_actions(availability="unavailable", models=[], quota_status="available", errors=[])
    assert len(actions) == 1
    assert actions[0].startswith("Check passed")


def test_next_actions_are_deduplicated_and_bounded() -> None:
    quota_dup = build_check_error(
        error_code="QUOTA_UNAVAILABLE",
        category="quota",
        message="m",
        retry_advice="Quota information is not available; check live usage in the provider console.",
    )
    actions = build_next_actions(
        availability="unavailable", models=[], quota_status="unknown", errors=[quota_dup]
    )
    assert len(actions) == len(set(actions)) == 1

    for quota, errors in itertools.product(("available", "unknown"), ([], [AUTH], [QUOTA, TIMEOUT])):
        out = build_next_actions(availability="available", models=["m"], quota_status=quota, errors=errors)
        assert 1 <= len(out) <= 5
        assert len(out) == len(set(out))
