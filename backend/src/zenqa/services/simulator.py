import logging
import random
from collections.abc import Sequence
from datetime import datetime

from src.zenqa.domain.enums import TestStatus
from src.zenqa.domain.models import ExecutionReport, ExecutionSummary, TestResult
from src.zenqa.services.identifiers import to_identifier

logger = logging.getLogger(__name__)

# A draw at or below the threshold fails, roughly 15% of runs.
FAILURE_THRESHOLD = 0.15
MIN_DURATION_SECONDS = 1.0
DURATION_SPREAD_SECONDS = 3.0

DEMO_RESULTS = (
	("testValidLogin", TestStatus.PASSED, "2.3s", "Login successful with valid credentials"),
	("testInvalidLogin", TestStatus.PASSED, "1.8s", "Error message displayed correctly"),
	("testPasswordMasking", TestStatus.FAILED, "1.2s", "Password field masking not working"),
	("testSearchFunctionality", TestStatus.PASSED, "3.1s", "Search functionality working as expected"),
	("testUIResponsiveness", TestStatus.PASSED, "2.7s", "UI responsive across different screen sizes"),
)
DEMO_TOTAL_DURATION = "11.1s"


def format_duration(seconds: float) -> str:
	return f"{seconds:.1f}s"


def parse_duration(duration: str) -> float:
	# Raises ValueError if the string did not come from format_duration.
	return float(duration.replace("s", ""))


def build_result(name: str, status: TestStatus, duration: str, details: str) -> TestResult:
	return TestResult(name=name, status=status, duration=duration, details=details)


def summarize(results: Sequence[TestResult], duration: str | None = None) -> ExecutionSummary:
	"""
	Aggregates a batch of results.

	Without an explicit duration the total is the sum of the already rounded
	per-result durations, so it can drift from the sum of the raw draws.
	"""
	passed = sum(1 for r in results if r.status == TestStatus.PASSED)
	if duration is None:
		duration = format_duration(sum(parse_duration(r.duration) for r in results))

	return ExecutionSummary(
		total=len(results),
		passed=passed,
		failed=len(results) - passed,
		duration=duration,
		timestamp=datetime.now().isoformat(),
	)


def simulate_result(test_case: str, index: int, rng: random.Random) -> TestResult:
	passed = rng.random() > FAILURE_THRESHOLD
	duration = MIN_DURATION_SECONDS + rng.random() * DURATION_SPREAD_SECONDS

	if passed:
		status, details = TestStatus.PASSED, f"{test_case} executed successfully"
	else:
		status, details = TestStatus.FAILED, f"{test_case} failed - assertion error or timeout"

	return build_result(to_identifier(test_case, index), status, format_duration(duration), details)


def simulate_batch(test_cases: Sequence[str], rng: random.Random | None = None) -> ExecutionReport:
	"""
	Fabricates execution results for a list of test case descriptions.

	Nothing is run: each case passes with probability 0.85 and takes a
	uniform 1.0-4.0 seconds. Pass a seeded ``random.Random`` for
	reproducible output; otherwise every call gets its own generator.
	"""
	rng = rng or random.Random()
	results = [simulate_result(test_case, index, rng) for index, test_case in enumerate(test_cases)]
	summary = summarize(results)

	logger.debug(f"Simulated {summary.total} tests: {summary.passed} passed, {summary.failed} failed")
	return ExecutionReport(test_results=results, summary=summary)


def fixed_demo_report() -> ExecutionReport:
	"""Static sample report served when the caller supplies no test cases."""
	results = [build_result(*row) for row in DEMO_RESULTS]
	return ExecutionReport(
		test_results=results,
		summary=summarize(results, duration=DEMO_TOTAL_DURATION),
	)
