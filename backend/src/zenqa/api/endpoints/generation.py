import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException

from src.zenqa.api.models import (
	AutomationRequest,
	AutomationResponse,
	StepsAutomationRequest,
	StepsAutomationResponse,
	TestCaseGenerationRequest,
	TestCaseGenerationResponse,
	TestStepsRequest,
	TestStepsResponse,
)
from src.zenqa.core.config import get_settings
from src.zenqa.services.catalog import comprehensive_test_cases
from src.zenqa.services.deriver import analyze_story, derive_test_cases
from src.zenqa.services.planner import plan_test_cases
from src.zenqa.services.story_automation import synthesize_from_steps
from src.zenqa.services.synthesizer import synthesize_code

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/generate-testcases", response_model=TestCaseGenerationResponse)
def generate_test_cases(body: TestCaseGenerationRequest):
	"""
	Derives test case descriptions from a user story, plus the detailed
	test cases for the story's category.
	"""
	settings = get_settings()
	logger.info(f"🔄 Processing user story ({len(body.user_story)} chars)")

	test_cases = derive_test_cases(body.user_story)
	analysis = analyze_story(body.user_story)
	detailed = comprehensive_test_cases(body.user_story, analysis)
	logger.info(
		f"✅ Generated {len(test_cases)} test cases and {len(detailed)} detailed cases, category={analysis.category}"
	)

	return TestCaseGenerationResponse(
		user_story=body.user_story,
		test_cases=test_cases,
		analysis=analysis,
		detailed_test_cases=detailed,
		total_test_cases=len(detailed),
		timestamp=datetime.now().isoformat(),
		language=settings.LANGUAGE,
		framework=settings.FRAMEWORK,
	)


@router.post("/generate-automation", response_model=AutomationResponse)
def generate_automation(body: AutomationRequest):
	"""
	Synthesizes a Playwright test class for the given test cases.
	"""
	settings = get_settings()
	code = synthesize_code(body.test_cases, base_url=settings.TARGET_BASE_URL)
	logger.info(f"✅ Generated automation code for {len(body.test_cases)} test cases")

	return AutomationResponse(
		code=code,
		language=settings.LANGUAGE,
		framework=settings.FRAMEWORK,
		test_cases=body.test_cases,
		timestamp=datetime.now().isoformat(),
	)


@router.post("/create-test-steps", response_model=TestStepsResponse)
def create_test_steps(body: TestStepsRequest):
	"""
	Expands test cases into detailed manual steps with automation estimates.
	"""
	if not body.test_cases:
		raise HTTPException(status_code=400, detail="Test cases are required")

	detailed = plan_test_cases(body.test_cases, body.user_story)
	total_steps = sum(len(tc.test_steps) for tc in detailed)
	logger.info(f"✅ Created {total_steps} steps for {len(detailed)} test cases")

	return TestStepsResponse(
		detailed_test_cases=detailed,
		total_test_cases=len(detailed),
		total_steps=total_steps,
		timestamp=datetime.now().isoformat(),
	)


@router.post("/generate-automation-from-steps", response_model=StepsAutomationResponse)
def generate_automation_from_steps(body: StepsAutomationRequest):
	"""
	Synthesizes a data-driven Playwright test class from detailed test cases,
	using the URL, credentials and selectors found in the user story.
	"""
	if not body.detailed_test_cases:
		raise HTTPException(status_code=400, detail="Detailed test cases are required")

	settings = get_settings()
	logger.info(f"🔄 Generating automation code from {len(body.detailed_test_cases)} detailed test cases")
	code, data = synthesize_from_steps(body.detailed_test_cases, body.user_story)
	logger.info(f"✅ Generated automation code for {data.application} ({data.base_url})")

	return StepsAutomationResponse(
		automation_code=code,
		extracted_real_data=data,
		message="Java Playwright automation code generated successfully",
		test_case_count=len(body.detailed_test_cases),
		language=settings.LANGUAGE,
		framework=settings.FRAMEWORK,
		timestamp=datetime.now().isoformat(),
	)
