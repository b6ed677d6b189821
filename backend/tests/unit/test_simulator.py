import random
import re

import pytest

from src.zenqa.domain.enums import TestStatus
from src.zenqa.services.simulator import (
    build_result,
    fixed_demo_report,
    parse_duration,
    simulate_batch,
    summarize,
)

DURATION_PATTERN = re.compile(r"\d+\.\ds")


class SequenceRandom:
    """Replays fixed draws in order."""

    def __init__(self, values):
        self._values = iter(values)

    def random(self):
        return next(self._values)


@pytest.fixture
def test_cases():
    return [
        "Verify successful login with valid credentials",
        "Verify search with valid keywords",
        "Verify remember me functionality",
    ]


def test_batch_shape(test_cases):
    report = simulate_batch(test_cases)

    assert len(report.test_results) == 3
    assert report.summary.total == 3
    assert report.summary.passed + report.summary.failed == 3
    for result in report.test_results:
        assert result.status in (TestStatus.PASSED, TestStatus.FAILED)
        assert DURATION_PATTERN.fullmatch(result.duration)
    assert DURATION_PATTERN.fullmatch(report.summary.duration)


def test_outcomes_follow_draws(test_cases):
    rng = SequenceRandom([0.9, 0.5, 0.05, 0.0, 0.6, 1 / 3])

    report = simulate_batch(test_cases, rng=rng)
    first, second, third = report.test_results

    assert first.name == "test_successful_login_with_valid_credentials"
    assert first.status == TestStatus.PASSED
    assert first.duration == "2.5s"
    assert first.details == "Verify successful login with valid credentials executed successfully"

    assert second.status == TestStatus.FAILED
    assert second.duration == "1.0s"
    assert second.details == "Verify search with valid keywords failed - assertion error or timeout"

    assert third.status == TestStatus.PASSED
    assert third.duration == "2.0s"

    assert report.summary.passed == 2
    assert report.summary.failed == 1
    assert report.summary.duration == "5.5s"


def test_summary_sums_rounded_durations():
    # Each raw duration is 1.04s: rounded entries sum to 2.0s, raw values to 2.08s.
    draw = 0.04 / 3
    rng = SequenceRandom([0.9, draw, 0.9, draw])

    report = simulate_batch(["Verify a", "Verify b"], rng=rng)

    assert [r.duration for r in report.test_results] == ["1.0s", "1.0s"]
    assert report.summary.duration == "2.0s"


def test_seeded_runs_are_reproducible(test_cases):
    first = simulate_batch(test_cases, rng=random.Random(42))
    second = simulate_batch(test_cases, rng=random.Random(42))

    assert first.test_results == second.test_results


def test_empty_batch():
    report = simulate_batch([])

    assert report.test_results == []
    assert report.summary.total == 0
    assert report.summary.passed == 0
    assert report.summary.failed == 0
    assert report.summary.duration == "0.0s"


def test_fixed_demo_report():
    report = fixed_demo_report()

    assert [(r.name, r.status, r.duration, r.details) for r in report.test_results] == [
        ("testValidLogin", TestStatus.PASSED, "2.3s", "Login successful with valid credentials"),
        ("testInvalidLogin", TestStatus.PASSED, "1.8s", "Error message displayed correctly"),
        ("testPasswordMasking", TestStatus.FAILED, "1.2s", "Password field masking not working"),
        ("testSearchFunctionality", TestStatus.PASSED, "3.1s", "Search functionality working as expected"),
        ("testUIResponsiveness", TestStatus.PASSED, "2.7s", "UI responsive across different screen sizes"),
    ]
    assert report.summary.total == 5
    assert report.summary.passed == 4
    assert report.summary.failed == 1
    assert report.summary.duration == "11.1s"


def test_result_serializes_with_test_name_key():
    result = build_result("test_a", TestStatus.PASSED, "1.5s", "ok")

    assert result.model_dump(by_alias=True, mode="json") == {
        "testName": "test_a",
        "status": "PASSED",
        "duration": "1.5s",
        "details": "ok",
    }


def test_summarize_rejects_malformed_duration():
    broken = build_result("test_a", TestStatus.PASSED, "fast", "ok")

    with pytest.raises(ValueError):
        summarize([broken])


def test_parse_duration():
    assert parse_duration("2.7s") == 2.7
