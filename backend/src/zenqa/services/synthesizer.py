import logging
import re
from collections.abc import Callable, Sequence
from datetime import datetime

from src.zenqa.services.identifiers import to_identifier

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://your-app-url.com"

CLASS_NAME = "ZenQATests"

HEADER = """\
package com.zenqa.tests;

import com.microsoft.playwright.*;
import org.junit.jupiter.api.*;
import static org.junit.jupiter.api.Assertions.*;

"""

FIELDS = """\
    private Playwright playwright;
    private Browser browser;
    private BrowserContext context;
    private Page page;

"""

SUITE_SETUP = """\
    @BeforeAll
    static void setupClass() {
        System.out.println("🧘 Starting Zen QA Test Suite");
    }

"""

# A full browser per test keeps cases isolated from each other's state.
TEST_SETUP = """\
    @BeforeEach
    void setUp() {
        playwright = Playwright.create();
        browser = playwright.chromium().launch(new BrowserType.LaunchOptions().setHeadless(false));
        context = browser.newContext();
        page = context.newPage();
    }

"""

TEST_TEARDOWN = """\
    @AfterEach
    void tearDown() {
        if (browser != null) {
            browser.close();
        }
        if (playwright != null) {
            playwright.close();
        }
    }

"""

SUITE_TEARDOWN = """\
    @AfterAll
    static void tearDownClass() {
        System.out.println("🧘 Zen QA Test Suite Completed");
    }
}
"""

BODY_INDENT = " " * 12

JAVA_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
JAVA_RESERVED = frozenset({
	"abstract", "assert", "boolean", "break", "byte", "case", "catch", "char", "class", "const",
	"continue", "default", "do", "double", "else", "enum", "extends", "final", "finally", "float",
	"for", "goto", "if", "implements", "import", "instanceof", "int", "interface", "long", "native",
	"new", "package", "private", "protected", "public", "return", "short", "static", "strictfp",
	"super", "switch", "synchronized", "this", "throw", "throws", "transient", "try", "void",
	"volatile", "while", "true", "false", "null", "_",
})
METHOD_PREFIX = "test_"


def java_string(text: str) -> str:
	"""Escapes text for use inside a Java string literal."""
	return (
		text.replace("\\", "\\\\")
		.replace('"', '\\"')
		.replace("\r", "\\r")
		.replace("\n", "\\n")
	)


def java_comment(text: str) -> str:
	"""Flattens text onto one line so it can follow a // comment."""
	return " ".join(text.split()).replace("\\", "\\\\")


def indent_body(*lines: str) -> str:
	return "".join(f"{BODY_INDENT}{line}".rstrip(" ") + "\n" for line in lines)


def login_steps(test_case: str) -> str:
	case_lower = test_case.lower()
	if "valid" in case_lower or "successful" in case_lower:
		expected = ".dashboard"
	else:
		expected = ".error-message"

	return indent_body(
		"// Perform login test steps",
		'page.click("#loginButton");',
		'page.fill("#username", "test@example.com");',
		'page.fill("#password", "password123");',
		'page.click("#submitLogin");',
		"",
		"// Verify login result",
		f'page.waitForSelector("{expected}");',
		f'assertTrue(page.isVisible("{expected}"));',
	)


def search_steps(test_case: str) -> str:
	return indent_body(
		"// Perform search test steps",
		'page.fill("#searchInput", "test query");',
		'page.click("#searchButton");',
		"",
		"// Verify search results",
		'page.waitForSelector(".search-results");',
		'assertTrue(page.isVisible(".search-results"));',
	)


def generic_steps(test_case: str) -> str:
	return indent_body(
		"// Generic test implementation",
		f"// TODO: Implement specific test steps for: {java_comment(test_case)}",
		"",
		"// Example assertion",
		"assertTrue(page.title().length() > 0);",
	)


# Evaluated top to bottom against the lower-cased description, first hit wins.
STEP_RULES: list[tuple[str, Callable[[str], str]]] = [
	("login", login_steps),
	("search", search_steps),
]


def steps_for(test_case: str) -> str:
	case_lower = test_case.lower()
	for keyword, render in STEP_RULES:
		if keyword in case_lower:
			return render(test_case)
	return generic_steps(test_case)


def header(test_case_count: int, generated_at: datetime | None = None) -> str:
	generated_at = generated_at or datetime.now()
	return (
		HEADER
		+ "/**\n"
		+ " * 🧘 Zen QA - Auto-generated Playwright Tests\n"
		+ f" * Generated on: {generated_at.isoformat()}\n"
		+ f" * Test Cases: {test_case_count}\n"
		+ " */\n"
		+ f"public class {CLASS_NAME} {{\n\n"
	)


def method_name(test_case: str, index: int, taken: set[str] | None = None) -> str:
	"""
	Java method name for a test case, based on ``to_identifier``.

	Names that Java would reject (empty, leading digit, reserved word) get a
	"test_" prefix. Names already in ``taken`` get an "_<index>" suffix.
	"""
	name = to_identifier(test_case, index)
	if not JAVA_IDENTIFIER.fullmatch(name) or name in JAVA_RESERVED:
		name = METHOD_PREFIX + name

	if taken is not None:
		while name in taken:
			name = f"{name}_{index}"
		taken.add(name)

	return name


def render_test_method(
		test_case: str,
		index: int,
		base_url: str = DEFAULT_BASE_URL,
		name: str | None = None,
) -> str:
	"""
	Renders one JUnit test method for a test case description.

	Steps run inside try/catch that only prints a pass/fail marker; the
	original exception is always rethrown to the test runner.
	"""
	name = name or method_name(test_case, index)
	literal = java_string(test_case)

	return (
		"    @Test\n"
		f'    @DisplayName("{literal}")\n'
		f"    void {name}() {{\n"
		f"        // 🧘 Test: {java_comment(test_case)}\n"
		"        try {\n"
		+ indent_body(
			"// Navigate to application",
			f'page.navigate("{java_string(base_url)}");',
			"",
			"// Wait for page to load",
			"page.waitForLoadState();",
			"",
		)
		+ steps_for(test_case)
		+ indent_body(
			"",
			f'System.out.println("✅ Test passed: {literal}");',
			"",
		)
		+ "        } catch (Exception e) {\n"
		f'            System.err.println("❌ Test failed: {literal}");\n'
		"            throw e;\n"
		"        }\n"
		"    }\n\n"
	)


def synthesize_code(
		test_cases: Sequence[str],
		base_url: str = DEFAULT_BASE_URL,
		generated_at: datetime | None = None,
) -> str:
	"""
	Builds a complete Playwright + JUnit 5 test class with one method per case.

	Method order follows the input order and method names are unique. Only
	the "Generated on" header line depends on the clock.
	"""
	logger.debug(f"Synthesizing {len(test_cases)} test methods")

	taken: set[str] = set()
	methods = "".join(
		render_test_method(test_case, index, base_url, method_name(test_case, index, taken))
		for index, test_case in enumerate(test_cases)
	)

	return (
		header(len(test_cases), generated_at)
		+ FIELDS
		+ SUITE_SETUP
		+ TEST_SETUP
		+ TEST_TEARDOWN
		+ methods
		+ SUITE_TEARDOWN
	)
