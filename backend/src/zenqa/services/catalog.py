import logging
from dataclasses import dataclass

from src.zenqa.domain.enums import Priority, StoryCategory
from src.zenqa.domain.models import DetailedTestCase, StoryAnalysis
from src.zenqa.services.planner import build_steps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaseTemplate:
	name: str
	priority: Priority
	preconditions: str
	steps: tuple[str, ...]
	expected_results: str
	test_data: str


AUTHENTICATION_CASES = (
	CaseTemplate(
		name="Verify successful login with valid credentials",
		priority=Priority.HIGH,
		preconditions="User has a valid registered account, Application is accessible",
		steps=(
			"Navigate to the login page",
			"Enter valid username/email in the username field",
			"Enter valid password in the password field",
			"Click on the Login/Sign In button",
			"Verify successful redirection to dashboard/home page",
		),
		expected_results="User should be successfully logged in and redirected to the main application dashboard",
		test_data="Valid username: testuser@example.com, Valid password: Test@123456",
	),
	CaseTemplate(
		name="Verify login failure with invalid credentials",
		priority=Priority.HIGH,
		preconditions="Application is accessible, Login page is available",
		steps=(
			"Navigate to the login page",
			"Enter invalid username/email in the username field",
			"Enter invalid password in the password field",
			"Click on the Login/Sign In button",
			"Verify appropriate error message is displayed",
		),
		expected_results=(
			'System should display error message "Invalid username or password" '
			"and user should remain on login page"
		),
		test_data="Invalid username: invalid@test.com, Invalid password: wrongpass123",
	),
	CaseTemplate(
		name="Verify password field masking during input",
		priority=Priority.MEDIUM,
		preconditions="Login page is accessible",
		steps=(
			"Navigate to the login page",
			"Click on the password input field",
			"Type any password in the password field",
			"Verify that entered characters are masked (shown as dots or asterisks)",
			"Verify password visibility toggle functionality if available",
		),
		expected_results="Password characters should be masked for security, toggle should work if available",
		test_data="Test password: MySecretPassword123",
	),
	CaseTemplate(
		name="Verify account lockout after multiple failed attempts",
		priority=Priority.HIGH,
		preconditions="User account exists, Application security settings configured",
		steps=(
			"Navigate to the login page",
			"Enter valid username but invalid password",
			"Repeat login attempts 5 times with wrong password",
			"Attempt to login with correct credentials after lockout",
			"Verify account lockout message and behavior",
		),
		expected_results="Account should be locked after maximum failed attempts, appropriate lockout message displayed",
		test_data="Valid username: testuser@example.com, Invalid password: wrongpass123",
	),
)

SEARCH_CASES = (
	CaseTemplate(
		name="Verify search functionality with valid keywords",
		priority=Priority.HIGH,
		preconditions="Application is loaded, Search functionality is accessible, Test data is available",
		steps=(
			"Navigate to the search page/section",
			"Enter valid search keywords in search box",
			"Click search button or press Enter",
			"Verify search results are displayed",
			"Verify search results are relevant to entered keywords",
		),
		expected_results="Relevant search results should be displayed based on entered keywords",
		test_data='Search keywords: "laptop", "mobile phone", "electronics"',
	),
	CaseTemplate(
		name="Verify search with partial keywords",
		priority=Priority.MEDIUM,
		preconditions="Search functionality is available, Database contains searchable data",
		steps=(
			"Navigate to search interface",
			"Enter partial keywords (e.g., first few characters)",
			"Verify auto-complete suggestions if available",
			"Execute search with partial keyword",
			"Verify results include items matching partial search",
		),
		expected_results="System should return results matching partial keywords and show auto-complete if available",
		test_data='Partial keywords: "lap", "mob", "elect"',
	),
	CaseTemplate(
		name="Verify search with no results found",
		priority=Priority.MEDIUM,
		preconditions="Search functionality is accessible",
		steps=(
			"Navigate to search interface",
			"Enter search terms that have no matching results",
			"Execute the search",
			'Verify "No results found" message is displayed',
			"Verify suggested alternative searches if available",
		),
		expected_results='System should display appropriate "No results found" message with helpful suggestions',
		test_data='Non-existent search terms: "xyzzyx", "nonexistentproduct123"',
	),
	CaseTemplate(
		name="Verify search filters and sorting functionality",
		priority=Priority.MEDIUM,
		preconditions="Search results are available, Filter options are configured",
		steps=(
			"Perform a search that returns multiple results",
			"Apply various filters (price, category, date, etc.)",
			"Verify filtered results match selected criteria",
			"Test different sorting options (relevance, price, date)",
			"Verify sorting works correctly",
		),
		expected_results="Filters should narrow down results appropriately, sorting should reorder results correctly",
		test_data='Search term: "books", Filters: price range $10-$50, category: fiction',
	),
)

REGISTRATION_CASES = (
	CaseTemplate(
		name="Verify successful user registration with valid data",
		priority=Priority.HIGH,
		preconditions="Registration page is accessible, Email service is working",
		steps=(
			"Navigate to registration page",
			"Fill all mandatory fields with valid data",
			"Enter valid email address",
			"Create strong password meeting requirements",
			"Confirm password correctly",
			"Accept terms and conditions",
			"Submit registration form",
			"Verify confirmation message/email",
		),
		expected_results="User should be successfully registered and receive confirmation",
		test_data="Email: newuser@test.com, Password: NewUser@123, Name: John Doe",
	),
	CaseTemplate(
		name="Verify registration with existing email address",
		priority=Priority.HIGH,
		preconditions="User with test email already exists in system",
		steps=(
			"Navigate to registration page",
			"Enter email address that already exists in system",
			"Fill other required fields with valid data",
			"Submit registration form",
			"Verify appropriate error message is displayed",
		),
		expected_results="System should display error message indicating email already exists",
		test_data="Existing email: existing@test.com",
	),
	CaseTemplate(
		name="Verify password strength validation",
		priority=Priority.MEDIUM,
		preconditions="Registration form has password strength requirements",
		steps=(
			"Navigate to registration page",
			'Enter weak password (e.g., "123456")',
			"Verify password strength indicator shows weak",
			"Enter medium strength password",
			"Verify strength indicator updates",
			"Enter strong password meeting all criteria",
			"Verify strong password is accepted",
		),
		expected_results="Password strength should be validated and displayed to user in real-time",
		test_data='Weak: "123456", Medium: "password123", Strong: "StrongPass@123"',
	),
)

# Names here are suffixes; the story text is spliced in as "Verify <story> - <suffix>".
GENERIC_CASES = (
	CaseTemplate(
		name="positive flow",
		priority=Priority.HIGH,
		preconditions="Application is accessible and user has necessary permissions",
		steps=(
			"Navigate to the relevant application section",
			"Perform the action described in user story with valid inputs",
			"Verify successful completion of the action",
			"Verify appropriate success message is displayed",
			"Verify system state is updated correctly",
		),
		expected_results="User story requirements should be fulfilled successfully",
		test_data="Valid test data as per user story requirements",
	),
	CaseTemplate(
		name="error handling",
		priority=Priority.MEDIUM,
		preconditions="Application is accessible",
		steps=(
			"Navigate to the relevant application section",
			"Attempt to perform action with invalid inputs",
			"Verify appropriate error messages are displayed",
			"Verify system handles errors gracefully",
			"Verify system state remains consistent",
		),
		expected_results="System should handle errors gracefully with appropriate error messages",
		test_data="Invalid test data to trigger error conditions",
	),
	CaseTemplate(
		name="UI responsiveness and accessibility",
		priority=Priority.LOW,
		preconditions="Application is accessible on different devices/browsers",
		steps=(
			"Access application on desktop browser",
			"Verify UI elements are properly displayed",
			"Test on mobile device/responsive mode",
			"Verify accessibility features (keyboard navigation, screen reader compatibility)",
			"Test on different browsers (Chrome, Firefox, Safari)",
		),
		expected_results="Application should be responsive and accessible across different platforms",
		test_data="Different browsers, devices, and accessibility tools",
	),
)

# Categories without a dedicated set (Payment, User Management, ...) use the generic one.
CATALOG: dict[StoryCategory, tuple[str, tuple[CaseTemplate, ...]]] = {
	StoryCategory.AUTHENTICATION: ("TC_AUTH", AUTHENTICATION_CASES),
	StoryCategory.SEARCH: ("TC_SEARCH", SEARCH_CASES),
	StoryCategory.REGISTRATION: ("TC_REG", REGISTRATION_CASES),
}


def _detailed(template: CaseTemplate, test_case_id: str, name: str, category: StoryCategory) -> DetailedTestCase:
	return DetailedTestCase(
		test_case_id=test_case_id,
		test_case_name=name,
		category=category,
		priority=template.priority,
		preconditions=template.preconditions,
		test_steps=build_steps(test_case_id, template.steps, template.expected_results),
		expected_results=template.expected_results,
		test_data=template.test_data,
	)


def comprehensive_test_cases(user_story: str, analysis: StoryAnalysis, start: int = 1) -> list[DetailedTestCase]:
	"""
	Returns the full manual test case set for the story's category.

	IDs are ``<prefix>_<NNN>`` numbered from ``start``. Generic cases embed the
	story text in their names.
	"""
	if analysis.category in CATALOG:
		prefix, templates = CATALOG[analysis.category]
		cases = [
			_detailed(template, f"{prefix}_{number:03d}", template.name, analysis.category)
			for number, template in enumerate(templates, start=start)
		]
	else:
		cases = [
			_detailed(template, f"TC_GEN_{number:03d}", f"Verify {user_story} - {template.name}", StoryCategory.GENERAL)
			for number, template in enumerate(GENERIC_CASES, start=start)
		]

	logger.debug(f"Catalog produced {len(cases)} {analysis.category} test cases")
	return cases
