import logging
from datetime import datetime

from fastapi import APIRouter

from src.zenqa.api.models import ExecutionResponse, RunAutomationRequest
from src.zenqa.services.simulator import fixed_demo_report, simulate_batch

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/execution-results", response_model=ExecutionResponse, response_model_exclude_none=True)
def get_execution_results():
	"""
	Returns the static demo execution report.
	"""
	return ExecutionResponse(results=fixed_demo_report(), timestamp=datetime.now().isoformat())


@router.post("/run-automation", response_model=ExecutionResponse)
def run_automation(body: RunAutomationRequest):
	"""
	Simulates a test run. Nothing is executed; outcomes are random.
	Without test cases the static demo report is returned instead.
	"""
	if body.test_cases:
		logger.info(f"▶️ Simulating execution of {len(body.test_cases)} test cases...")
		report = simulate_batch(body.test_cases)
	else:
		logger.info("No test cases supplied, returning demo report")
		report = fixed_demo_report()

	summary = report.summary
	logger.info(f"📊 Run finished: {summary.passed}/{summary.total} passed in {summary.duration}")

	return ExecutionResponse(
		results=report,
		message="Test execution completed successfully",
		timestamp=datetime.now().isoformat(),
	)
