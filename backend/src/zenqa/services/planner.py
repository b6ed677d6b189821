import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from src.zenqa.domain.enums import Complexity, Priority, StepType, StoryCategory
from src.zenqa.domain.models import DetailedTestCase, TestStep

logger = logging.getLogger(__name__)

DEFAULT_PRECONDITIONS = "Application is accessible and ready for testing"
DEFAULT_TEST_DATA = "Valid test data as per requirements"

GENERIC_STEPS = (
	"Navigate to the relevant section of the application",
	"Verify the feature/functionality is accessible",
	"Perform the required action as described in the test case",
	"Verify the action completes successfully",
	"Check that the system state is updated correctly",
	"Verify any displayed messages or feedback",
)

FILE_UPLOAD_STEPS = (
	"Navigate to the file upload section",
	"Click on file upload button or drag-drop area",
	"Select a valid file from file system",
	"Verify file is selected and displayed",
	"Click upload button to start upload process",
	"Verify successful upload and file processing",
)


@dataclass
class CasePlan:
	category: StoryCategory = StoryCategory.GENERAL
	priority: Priority = Priority.MEDIUM
	preconditions: str = DEFAULT_PRECONDITIONS
	steps: tuple[str, ...] = GENERIC_STEPS
	expected_results: str | None = None
	test_data: str = DEFAULT_TEST_DATA


def _has(text: str, *keywords: str) -> bool:
	return any(keyword in text for keyword in keywords)


def _authentication_plan(case_lower: str) -> CasePlan:
	plan = CasePlan(
		category=StoryCategory.AUTHENTICATION,
		priority=Priority.HIGH,
		preconditions="User has valid credentials, Application login page is accessible",
		test_data="Valid username: testuser@example.com, Valid password: Test@123",
	)
	if _has(case_lower, "valid", "successful"):
		plan.steps = (
			"Navigate to the application login page",
			"Verify login form is displayed with username and password fields",
			"Enter valid username in the username field",
			"Enter valid password in the password field",
			"Click the Login/Sign In button",
			"Verify successful login and redirection to dashboard",
		)
		plan.expected_results = "User should be successfully authenticated and redirected to the main dashboard"
	elif _has(case_lower, "invalid", "error"):
		plan.steps = (
			"Navigate to the application login page",
			"Enter invalid username or password",
			"Click the Login/Sign In button",
			"Verify error message is displayed",
			"Verify user remains on login page",
		)
		plan.expected_results = "System should display appropriate error message and prevent unauthorized access"
		plan.test_data = "Invalid username: invalid@test.com, Invalid password: wrongpass123"
	return plan


def _search_plan(case_lower: str) -> CasePlan:
	return CasePlan(
		category=StoryCategory.SEARCH,
		priority=Priority.MEDIUM,
		preconditions="Application is loaded, Search functionality is accessible, Test data is available",
		test_data='Search keywords: "laptop", "mobile phone", "electronics"',
		steps=(
			"Navigate to the search section of the application",
			"Locate the search input field",
			"Enter search keywords in the search box",
			"Click the search button or press Enter",
			"Wait for search results to load",
			"Verify search results are displayed and relevant",
		),
		expected_results="Search should return relevant results based on the entered keywords",
	)


def _registration_plan(case_lower: str) -> CasePlan:
	return CasePlan(
		category=StoryCategory.REGISTRATION,
		priority=Priority.HIGH,
		preconditions="Registration page is accessible, Email service is working",
		test_data="Email: newuser@test.com, Password: NewUser@123, Name: John Doe",
		steps=(
			"Navigate to the registration page",
			"Fill in all mandatory fields with valid data",
			"Enter a valid email address",
			"Create a strong password meeting requirements",
			"Confirm password correctly",
			"Accept terms and conditions if required",
			"Submit the registration form",
			"Verify confirmation message or email",
		),
		expected_results="User should be successfully registered and receive confirmation",
	)


def _password_plan(case_lower: str) -> CasePlan:
	plan = CasePlan(
		category=StoryCategory.SECURITY,
		priority=Priority.MEDIUM,
		preconditions="Login or registration form is accessible",
	)
	if _has(case_lower, "mask", "hide"):
		plan.steps = (
			"Navigate to the login or registration page",
			"Click on the password input field",
			"Enter any characters in the password field",
			"Verify that characters are masked (shown as dots or asterisks)",
			"Check for password visibility toggle if available",
			"Test toggle functionality to show/hide password",
		)
		plan.expected_results = "Password characters should be properly masked for security"
		plan.test_data = "Test password: MySecretPassword123"
	return plan


def _ui_plan(case_lower: str) -> CasePlan:
	return CasePlan(
		category=StoryCategory.UI_UX,
		priority=Priority.LOW,
		preconditions="Application is accessible on different devices and browsers",
		test_data="Different browsers: Chrome, Firefox, Safari; Devices: Desktop, Mobile, Tablet",
		steps=(
			"Open the application in a desktop browser",
			"Verify all UI elements are properly displayed",
			"Resize browser window to test responsiveness",
			"Test on mobile device or use responsive mode",
			"Verify touch interactions work properly on mobile",
			"Test on different browsers (Chrome, Firefox, Safari)",
		),
		expected_results="Application should be responsive and functional across all tested platforms",
	)


CASE_RULES = [
	(("login", "sign in", "authenticate"), _authentication_plan),
	(("search", "find"), _search_plan),
	(("register", "signup", "create account"), _registration_plan),
	(("password",), _password_plan),
	(("ui", "interface", "responsive"), _ui_plan),
]

# Checked in order; the first matching keyword group decides the step type.
STEP_TYPE_RULES = [
	(("navigate", "open", "go to"), StepType.NAVIGATION),
	(("verify", "check", "assert", "confirm", "validate", "ensure"), StepType.VERIFICATION),
	(("enter", "fill", "input", "type", "provide"), StepType.DATA_ENTRY),
	(("click", "select", "choose", "press", "tap"), StepType.USER_INTERACTION),
	(("wait", "load", "delay"), StepType.WAIT),
	(("login", "authenticate", "sign in"), StepType.AUTHENTICATION),
	(("logout", "sign out", "exit"), StepType.CLEANUP),
]

BASE_STEP_SECONDS = {
	StepType.NAVIGATION: 3,
	StepType.USER_INTERACTION: 2,
	StepType.DATA_ENTRY: 5,
	StepType.VERIFICATION: 4,
	StepType.WAIT: 8,
	StepType.AUTHENTICATION: 6,
	StepType.CLEANUP: 3,
	StepType.ACTION: 4,
}

COMPLEXITY_MULTIPLIER = {
	Complexity.HIGH: 2,
	Complexity.MEDIUM: 1.5,
	Complexity.LOW: 1,
}


def classify_step(description: str) -> StepType:
	step_lower = description.lower()
	for keywords, step_type in STEP_TYPE_RULES:
		if _has(step_lower, *keywords):
			return step_type
	return StepType.ACTION


def estimate_complexity(description: str, step_type: StepType) -> Complexity:
	step_lower = description.lower()
	if step_type in (StepType.NAVIGATION, StepType.USER_INTERACTION):
		return Complexity.LOW
	if step_type in (StepType.DATA_ENTRY, StepType.AUTHENTICATION):
		return Complexity.MEDIUM
	if step_type == StepType.VERIFICATION and _has(step_lower, "complex", "multiple"):
		return Complexity.HIGH
	if _has(step_lower, "upload", "download", "api"):
		return Complexity.HIGH
	return Complexity.MEDIUM


def estimate_duration(step_type: StepType, complexity: Complexity) -> int:
	"""Estimated automation time in whole seconds, halves rounded up."""
	return math.floor(BASE_STEP_SECONDS[step_type] * COMPLEXITY_MULTIPLIER[complexity] + 0.5)


def build_steps(test_case_id: str, descriptions: Sequence[str], expected_results: str) -> list[TestStep]:
	steps = []
	for number, description in enumerate(descriptions, start=1):
		step_type = classify_step(description)
		complexity = estimate_complexity(description, step_type)
		is_last = number == len(descriptions)
		steps.append(TestStep(
			step_id=f"STEP_{test_case_id}_{number:02d}",
			step_number=number,
			description=description,
			step_type=step_type,
			automation_complexity=complexity,
			estimated_duration=estimate_duration(step_type, complexity),
			expected_result=expected_results if is_last else f"Step {number} should be completed successfully",
		))
	return steps


def plan_test_case(test_case: str, user_story: str = "", index: int = 1) -> DetailedTestCase:
	"""
	Expands a one-line test case into a manual test case with annotated steps.

	The test case text picks the template; the user story only matters for
	otherwise generic cases that mention uploads or files.
	"""
	case_lower = test_case.lower()

	for keywords, build_plan in CASE_RULES:
		if _has(case_lower, *keywords):
			plan = build_plan(case_lower)
			break
	else:
		plan = CasePlan()
		if _has(user_story.lower(), "upload", "file"):
			plan.category = StoryCategory.FILE_MANAGEMENT
			plan.steps = FILE_UPLOAD_STEPS
			plan.test_data = "Test files: document.pdf, image.jpg (valid formats and sizes)"

	test_case_id = f"TC_STEP_{index:03d}"
	expected_results = plan.expected_results or f'Test case "{test_case}" should be completed successfully'

	return DetailedTestCase(
		test_case_id=test_case_id,
		test_case_name=test_case,
		category=plan.category,
		priority=plan.priority,
		preconditions=plan.preconditions,
		test_steps=build_steps(test_case_id, plan.steps, expected_results),
		expected_results=expected_results,
		test_data=plan.test_data,
	)


def plan_test_cases(test_cases: Sequence[str], user_story: str = "") -> list[DetailedTestCase]:
	detailed = [plan_test_case(test_case, user_story, index) for index, test_case in enumerate(test_cases, start=1)]
	logger.debug(f"Planned {sum(len(tc.test_steps) for tc in detailed)} steps for {len(detailed)} test cases")
	return detailed
