import logging
import re
from collections.abc import Sequence
from datetime import datetime
from urllib.parse import urlsplit

from src.zenqa.domain.models import DetailedTestCase, ExtractedStoryData, LoginSelectors
from src.zenqa.services.synthesizer import indent_body, java_comment, java_string

logger = logging.getLogger(__name__)

DEFAULT_USER_STORY = "Default user story"

URL_PATTERN = re.compile(r"https?://[^\s),]+")

# Public demo applications with known credentials and login page selectors.
KNOWN_SITES = (
	("saucedemo", "SauceDemo", "standard_user", "secret_sauce", LoginSelectors(
		username_field="#user-name",
		password_field="#password",
		login_button="#login-button",
		dashboard=".inventory_list",
	)),
	("demowebshop", "DemoWebShop", "testuser@tricentis.com", "TestPassword123", LoginSelectors(
		username_field="#Email",
		password_field="#Password",
		login_button=".login-button",
		dashboard=".header-links",
	)),
	("orangehrm", "OrangeHRM", "Admin", "admin123", LoginSelectors(
		username_field='[name="username"]',
		password_field='[name="password"]',
		login_button='[type="submit"]',
		dashboard=".dashboard",
	)),
	("automationexercise", "AutomationExercise", "testuser@automation.com", "TestPass123", LoginSelectors(
		username_field='[data-qa="login-email"]',
		password_field='[data-qa="login-password"]',
		login_button='[data-qa="login-button"]',
		dashboard=".nav",
	)),
	("parabank", "ParaBank", "john", "demo", LoginSelectors(
		username_field='[name="username"]',
		password_field='[name="password"]',
		login_button='[type="submit"]',
		dashboard=".account",
	)),
)

APP_NAME_PATTERNS = [
	re.compile(r"(?:on|in|to)\s+([A-Z][a-zA-Z\s]+)(?:\s+application|\s+app|\s+website|\s+platform)", re.I),
	re.compile(r"(?:login|access|use)\s+([A-Z][a-zA-Z\s]+)", re.I),
	re.compile(r"([A-Z][a-zA-Z\s]+)\s+(?:system|portal|dashboard)", re.I),
	re.compile(r"test\s+([a-zA-Z\s]+)\s+functionality", re.I),
]

EMAIL_PATTERN = re.compile(r"(?:username|user|email)[\s:=]+([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})", re.I)

USERNAME_PATTERNS = [
	re.compile(r"(?:username|user)[\s:=]+([a-zA-Z0-9._-]+)", re.I),
	re.compile(r"with\s+user\s+([a-zA-Z0-9._-]+)", re.I),
	re.compile(r"as\s+([a-zA-Z0-9._-]+)\s+user", re.I),
]

PASSWORD_PATTERNS = [
	re.compile(r"(?:password|pass)[\s:=]+([^\s,]+)", re.I),
	re.compile(r"with\s+password\s+([^\s,]+)", re.I),
	re.compile(r"pass(?:word)?:\s*([^\s,]+)", re.I),
]

FEATURE_PATTERNS = [
	re.compile(r"(?:want to|need to|able to)\s+([^,.]+)", re.I),
	re.compile(
		r"(?:login|search|create|update|delete|view|manage|access|add|select|buy|purchase|checkout)\s+([^,.]+)",
		re.I,
	),
	re.compile(r"test\s+([^,.]+)\s+functionality", re.I),
]
MIN_FEATURE_LENGTH = 4
MAX_FEATURE_LENGTH = 49

# Checked in order when the story has no password of its own.
ROLE_PASSWORDS = (("admin", "Admin@123"), ("manager", "Manager@123"))
APPLICATION_PASSWORDS = {"SauceDemo": "secret_sauce", "OrangeHRM": "admin123"}

EMAIL_USERNAME_SELECTOR = '[type="email"], #email, input[name="email"]'
ECOMMERCE_SELECTORS = {
	"username_field": '#ap_email, [name="email"]',
	"password_field": '#ap_password, [name="password"]',
	"login_button": '#signInSubmit, [type="submit"]',
}
GOOGLE_SELECTORS = {
	"username_field": '[type="email"]',
	"password_field": '[type="password"]',
	"login_button": '#passwordNext, [type="submit"]',
}

ERROR_SELECTOR = ".error-message, .alert-danger, [role='alert'], .error"
SEARCH_SELECTOR = "input[type='search'], #search, .search-input, [placeholder*='search']"
ADD_TO_CART_SELECTOR = "button:has-text('Add to Cart'), .add-to-cart, .btn-add-cart"
PRODUCT_SELECTOR = ".product-item, .product, [data-product-id]"
FIRST_PRODUCT_SELECTOR = ".product-item:first-child, .product:first-child, [data-product-id]:first-child"
ANY_BUTTON_SELECTOR = "button, [type='button'], [type='submit']"
LOGOUT_SELECTOR = ".logout, #logout, [href*='logout'], button:has-text('Logout')"
DEFAULT_SEARCH_TERM = "test product"

QUOTED_PATTERN = re.compile(r"[\"']([^\"']+)[\"']")
DOUBLE_QUOTED_PATTERN = re.compile(r'"([^"]+)"')
NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def _has(text: str, *keywords: str) -> bool:
	return any(keyword in text for keyword in keywords)


def _first_group(patterns: Sequence[re.Pattern], text: str) -> str | None:
	for pattern in patterns:
		match = pattern.search(text)
		if match:
			return match.group(1)
	return None


def _features(user_story: str) -> list[str]:
	features = []
	for pattern in FEATURE_PATTERNS:
		for match in pattern.finditer(user_story):
			feature = match.group(1).strip()
			if MIN_FEATURE_LENGTH <= len(feature) <= MAX_FEATURE_LENGTH:
				features.append(feature)
	return list(dict.fromkeys(features))


def extract_story_data(user_story: str) -> ExtractedStoryData:
	"""
	Pulls target application details out of a free-text user story.

	A URL in the story sets the base URL and names the application after its
	host. Known demo sites also bring their own credentials and selectors.
	Without a URL the application name is guessed from phrases such as
	"on Acme portal". Explicit "username: x" and "password: y" mentions win
	over role-based defaults for admin and manager stories.
	"""
	story_lower = user_story.lower()
	defaults = ExtractedStoryData()
	base_url = defaults.base_url
	application = defaults.application
	username = defaults.username
	password = defaults.password
	selectors = defaults.selectors

	url_match = URL_PATTERN.search(user_story)
	if url_match:
		base_url = url_match.group(0)
		try:
			hostname = urlsplit(base_url).hostname
		except ValueError:
			logger.warning(f"⚠️ Could not parse URL: {base_url}")
			hostname = None

		if hostname:
			hostname = hostname.replace("www.", "", 1)
			application = hostname.split(".")[0]
			for key, site_name, site_username, site_password, site_selectors in KNOWN_SITES:
				if key in hostname:
					application, username, password, selectors = site_name, site_username, site_password, site_selectors
					break
	else:
		app_name = _first_group(APP_NAME_PATTERNS, user_story)
		if app_name:
			application = app_name.strip()

	email_match = EMAIL_PATTERN.search(user_story)
	if email_match:
		username = email_match.group(1)
	else:
		domain = application.lower() if application.lower() != "application" else "example"
		for role in ("admin", "manager"):
			if role in story_lower:
				username = f"{role}@{domain}.com"
				break

	for pattern in USERNAME_PATTERNS:
		match = pattern.search(user_story)
		if match and "@" not in match.group(1):
			username = match.group(1)
			break

	explicit_password = _first_group(PASSWORD_PATTERNS, user_story)
	if explicit_password:
		password = explicit_password
	else:
		for role, role_password in ROLE_PASSWORDS:
			if role in story_lower:
				password = role_password
				break
		else:
			password = APPLICATION_PASSWORDS.get(application, password)

	if _has(story_lower, "login", "authenticate"):
		if "email" in story_lower:
			selectors = selectors.model_copy(update={"username_field": EMAIL_USERNAME_SELECTOR})
		if application == defaults.application:
			if _has(story_lower, "amazon", "ecommerce"):
				selectors = selectors.model_copy(update=ECOMMERCE_SELECTORS)
			elif "google" in story_lower:
				selectors = selectors.model_copy(update=GOOGLE_SELECTORS)

	data = ExtractedStoryData(
		base_url=base_url,
		username=username,
		password=password,
		application=application,
		features=_features(user_story),
		selectors=selectors,
	)
	logger.debug(f"🔍 Extracted story data: application={data.application}, base_url={data.base_url}")
	return data


def _wait_for(selector: str, timeout: int | None = None) -> str:
	if timeout is None:
		return f'page.waitForSelector("{java_string(selector)}");'
	return f'page.waitForSelector("{java_string(selector)}", new Page.WaitForSelectorOptions().setTimeout({timeout}));'


def step_code(step: str, data: ExtractedStoryData) -> list[str]:
	"""
	Java statements for one manual step, chosen by keywords in the step text.

	Rules are tried top to bottom and the first hit wins. Steps nothing
	matches become a commented one-second pause.
	"""
	step_lower = step.lower()
	selectors = data.selectors

	if _has(step_lower, "navigate", "open", "launch"):
		if "login" in step_lower:
			target = 'BASE_URL + "/login"'
		elif _has(step_lower, "dashboard", "home"):
			target = 'BASE_URL + "/dashboard"'
		else:
			target = "BASE_URL"
		return [
			f"page.navigate({target});",
			'page.waitForLoadState("networkidle");',
			'System.out.println("🌐 Navigated to: " + page.url());',
		]

	if "enter" in step_lower and _has(step_lower, "username", "email", "user"):
		return [
			_wait_for(selectors.username_field, 10000),
			f'page.fill("{java_string(selectors.username_field)}", USERNAME);',
			'System.out.println("✍️ Entered username: " + USERNAME);',
		]

	if "enter" in step_lower and "password" in step_lower:
		return [
			_wait_for(selectors.password_field, 10000),
			f'page.fill("{java_string(selectors.password_field)}", PASSWORD);',
			'System.out.println("🔒 Entered password");',
		]

	if "click" in step_lower and _has(step_lower, "login", "sign in"):
		return [
			f'page.click("{java_string(selectors.login_button)}");',
			'page.waitForLoadState("networkidle");',
			'System.out.println("🖱️ Clicked login button");',
		]

	if "verify" in step_lower and _has(step_lower, "login", "dashboard", "success"):
		return [
			_wait_for(selectors.dashboard, 15000),
			f'assertTrue(page.isVisible("{java_string(selectors.dashboard)}"), "Dashboard should be visible after login");',
			'System.out.println("✅ Successfully verified login - Dashboard is visible");',
		]

	if "verify" in step_lower and "error" in step_lower:
		return [
			_wait_for(ERROR_SELECTOR, 10000),
			f'assertTrue(page.isVisible("{ERROR_SELECTOR}"), "Error message should be displayed");',
			f'String errorText = page.textContent("{ERROR_SELECTOR}");',
			'System.out.println("⚠️ Error message displayed: " + errorText);',
		]

	if "search" in step_lower:
		term = java_string(next((f for f in data.features if "search" in f), DEFAULT_SEARCH_TERM))
		return [
			_wait_for(SEARCH_SELECTOR),
			f'page.fill("{SEARCH_SELECTOR}", "{term}");',
			f'page.press("{SEARCH_SELECTOR}", "Enter");',
			'page.waitForLoadState("networkidle");',
			f'System.out.println("🔍 Searched for: {term}");',
		]

	if "add" in step_lower and _has(step_lower, "cart", "basket"):
		return [
			_wait_for(ADD_TO_CART_SELECTOR),
			f'page.click("{ADD_TO_CART_SELECTOR}");',
			'System.out.println("🛒 Added item to cart");',
		]

	if "select" in step_lower and "product" in step_lower:
		return [
			_wait_for(PRODUCT_SELECTOR),
			f'page.click("{FIRST_PRODUCT_SELECTOR}");',
			'System.out.println("🛍️ Selected product");',
		]

	if "click" in step_lower and "button" in step_lower:
		quoted = QUOTED_PATTERN.search(step)
		if quoted:
			text = java_string(quoted.group(1))
			return [
				f"page.click(\"button:has-text('{text}'), [value='{text}']\");",
				f'System.out.println("🖱️ Clicked button: {text}");',
			]
		return [
			f'page.click("{ANY_BUTTON_SELECTOR}");',
			'System.out.println("🖱️ Clicked button");',
		]

	if _has(step_lower, "logout", "sign out"):
		return [
			f'page.click("{LOGOUT_SELECTOR}");',
			'page.waitForLoadState("networkidle");',
			'System.out.println("🚪 Logged out successfully");',
		]

	if _has(step_lower, "wait", "load"):
		return [
			'page.waitForLoadState("networkidle");',
			"Thread.sleep(2000);",
			'System.out.println("⏳ Waited for page to load");',
		]

	if "verify" in step_lower and "text" in step_lower:
		quoted = DOUBLE_QUOTED_PATTERN.search(step)
		if quoted:
			text = java_string(quoted.group(1))
			return [
				f'assertTrue(page.textContent("body").contains("{text}"), "Page should contain text: {text}");',
				f'System.out.println("✅ Verified text: {text}");',
			]
		return ['System.out.println("✅ Verified page content");']

	if _has(step_lower, "assert", "verify"):
		return [
			f"// Custom verification for: {java_comment(step)}",
			'assertTrue(page.isVisible("body"), "Page should be loaded");',
			f'System.out.println("✅ Verified: {java_string(step)}");',
		]

	return [
		f"// Executing: {java_comment(step)}",
		"Thread.sleep(1000);",
		f'System.out.println("🔄 Executed step: {java_string(step)}");',
	]


def screenshot_name(test_case_id: str) -> str:
	return NON_ALNUM.sub("_", test_case_id)


def steps_code(test_case: DetailedTestCase, data: ExtractedStoryData) -> str:
	lines = []
	for step in test_case.test_steps:
		lines.append(f"// Step {step.step_number}: {java_comment(step.description)}")
		lines.extend(step_code(step.description, data))
		lines.append("")

	lines.append("// Take screenshot for verification")
	lines.append(f'takeScreenshot("{screenshot_name(test_case.test_case_id)}");')
	return indent_body(*lines)


def javadoc(text: str) -> str:
	"""Flattens text onto one line that cannot close the surrounding /** */ block."""
	return java_comment(text).replace("*/", "*\\/")


CLASS_TEMPLATE = """\
package com.qa.tests;

import com.microsoft.playwright.*;
import com.microsoft.playwright.options.*;
import org.junit.jupiter.api.*;
import org.opentest4j.AssertionFailedError;
import static org.junit.jupiter.api.Assertions.*;
import java.nio.file.Paths;
import java.time.LocalDateTime;
import java.time.format.DateTimeFormatter;

/**
 * 🧘 Zen QA - Automated Test Suite
 * Generated from User Story: {story}
 *
 * Application: {application_doc}
 * Base URL: {base_url_doc}
 * Test User: {username_doc}
 * Generated on: {generated_at}
 *
 * Features to test: {features_doc}
 */
@TestMethodOrder(MethodOrderer.OrderAnnotation.class)
public class {class_name} {{

    // 🌐 Test Configuration - Data Extracted from User Story
    private static final String BASE_URL = "{base_url}";
    private static final String USERNAME = "{username}";
    private static final String PASSWORD = "{password}";
    private static final String APPLICATION_NAME = "{application}";

    private static Playwright playwright;
    private static Browser browser;
    private BrowserContext context;
    private Page page;

    @BeforeAll
    static void setUpClass() {{
        System.out.println("🧘 Starting Zen QA Test Suite for " + APPLICATION_NAME);
        System.out.println("🌐 Base URL: " + BASE_URL);
        System.out.println("👤 Test User: " + USERNAME);
        System.out.println("🎯 Test Features: {features}");

        playwright = Playwright.create();
        browser = playwright.chromium().launch(new BrowserType.LaunchOptions()
            .setHeadless(false)
            .setSlowMo(1000));
    }}

    @BeforeEach
    void setUp() {{
        context = browser.newContext(new Browser.NewContextOptions()
            .setViewportSize(1920, 1080));
        page = context.newPage();

        page.onRequest(request ->
            System.out.println("📤 Request: " + request.method() + " " + request.url()));
        page.onResponse(response ->
            System.out.println("📥 Response: " + response.status() + " " + response.url()));
    }}

    @AfterEach
    void tearDown() {{
        if (context != null) {{
            context.close();
        }}
    }}

    @AfterAll
    static void tearDownClass() {{
        if (browser != null) {{
            browser.close();
        }}
        if (playwright != null) {{
            playwright.close();
        }}
        System.out.println("🧘 Zen QA Test Suite completed peacefully");
    }}

    /**
     * 📸 Take screenshot for test verification
     */
    private void takeScreenshot(String testName) {{
        try {{
            String timestamp = LocalDateTime.now().format(DateTimeFormatter.ofPattern("yyyy-MM-dd_HH-mm-ss"));
            String screenshotPath = "screenshots/" + testName + "_" + timestamp + ".png";
            page.screenshot(new Page.ScreenshotOptions().setPath(Paths.get(screenshotPath)));
            System.out.println("📸 Screenshot saved: " + screenshotPath);
        }} catch (Exception e) {{
            System.out.println("⚠️ Could not take screenshot: " + e.getMessage());
        }}
    }}
"""

# Every handler logs, captures the page and rethrows to the test runner.
FAILURE_HANDLERS = (
	("PlaywrightException", "Playwright error in test", "PLAYWRIGHT_ERROR"),
	("AssertionFailedError", "Assertion failed in test", "ASSERTION_FAILED"),
	("Exception", "Unexpected error in test", "FAILED"),
)


def class_name(generated_at: datetime) -> str:
	return f"AutomationTest_{generated_at:%Y_%m_%d_%H_%M_%S}"


def render_case_method(test_case: DetailedTestCase, index: int, data: ExtractedStoryData) -> str:
	"""
	Renders one ordered JUnit method that replays a detailed test case's steps.

	The method declares ``throws Exception`` because the generated steps may
	call ``Thread.sleep``.
	"""
	name = f"test{screenshot_name(test_case.test_case_id)}"
	description = test_case.test_case_name or f"Test Case {index + 1}"
	literal = java_string(description)
	case_id = java_string(test_case.test_case_id)

	handlers = "".join(
		f"        }} catch ({exception} e) {{\n"
		f'            System.err.println("❌ {message}: {literal}");\n'
		'            System.err.println("💥 Error: " + e.getMessage());\n'
		f'            takeScreenshot("{name}_{suffix}");\n'
		"            throw e;\n"
		for exception, message, suffix in FAILURE_HANDLERS
	)

	return (
		"\n"
		"    /**\n"
		f"     * 🧪 {javadoc(description)}\n"
		f"     * Test Case ID: {javadoc(test_case.test_case_id)}\n"
		f"     * Category: {test_case.category}\n"
		f"     * Priority: {test_case.priority}\n"
		"     *\n"
		f"     * Preconditions: {javadoc(test_case.preconditions)}\n"
		f"     * Expected Results: {javadoc(test_case.expected_results)}\n"
		"     */\n"
		"    @Test\n"
		f"    @Order({index + 1})\n"
		f'    @DisplayName("{literal}")\n'
		f"    void {name}() throws Exception {{\n"
		"        try {\n"
		+ indent_body(
			f'System.out.println("\\n🧪 Starting Test: {literal}");',
			f'System.out.println("📋 Test Case ID: {case_id}");',
			f'System.out.println("🎯 Category: {test_case.category} | Priority: {test_case.priority}");',
			"",
		)
		+ steps_code(test_case, data)
		+ indent_body(
			"",
			f'System.out.println("✅ Test completed successfully: {literal}");',
		)
		+ handlers
		+ "        }\n"
		"    }\n"
	)


def synthesize_from_steps(
		detailed_test_cases: Sequence[DetailedTestCase],
		user_story: str = "",
		generated_at: datetime | None = None,
) -> tuple[str, ExtractedStoryData]:
	"""
	Builds a data-driven Playwright + JUnit 5 class from detailed test cases.

	Base URL, credentials and selectors come from ``extract_story_data``; each
	step becomes concrete Playwright calls. Returns the Java source together
	with the extracted data so callers can show what was inferred.
	"""
	user_story = user_story or DEFAULT_USER_STORY
	generated_at = generated_at or datetime.now()
	data = extract_story_data(user_story)
	features = ", ".join(data.features)

	code = CLASS_TEMPLATE.format(
		story=javadoc(user_story),
		application_doc=javadoc(data.application),
		base_url_doc=javadoc(data.base_url),
		username_doc=javadoc(data.username),
		generated_at=generated_at.isoformat(),
		features_doc=javadoc(features),
		class_name=class_name(generated_at),
		base_url=java_string(data.base_url),
		username=java_string(data.username),
		password=java_string(data.password),
		application=java_string(data.application),
		features=java_string(features),
	)
	code += "".join(
		render_case_method(test_case, index, data) for index, test_case in enumerate(detailed_test_cases)
	)
	code += "}\n"

	logger.debug(f"Synthesized {len(detailed_test_cases)} data-driven test methods for {data.application}")
	return code, data
