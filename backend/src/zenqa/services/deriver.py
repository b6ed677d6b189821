import logging
from collections.abc import Callable

from src.zenqa.domain.enums import Complexity, Priority, StoryCategory
from src.zenqa.domain.models import StoryAnalysis

logger = logging.getLogger(__name__)

LOGIN_TEST_CASES = (
	"Verify successful login with valid credentials",
	"Verify login failure with invalid credentials",
	"Verify password field is masked during input",
	"Verify remember me functionality",
	"Verify forgot password link functionality",
)

SEARCH_TEST_CASES = (
	"Verify search with valid keywords",
	"Verify search with invalid keywords",
	"Verify search with special characters",
	"Verify search filters functionality",
	"Verify search results pagination",
)

REGISTRATION_TEST_CASES = (
	"Verify successful registration with valid data",
	"Verify registration with invalid email format",
	"Verify registration with weak password",
	"Verify email verification process",
	"Verify duplicate email handling",
)

GENERIC_TEST_CASE_TEMPLATES = (
	"Verify {story} with valid inputs",
	"Verify {story} with invalid inputs",
	"Verify {story} with boundary values",
	"Verify {story} error handling",
	"Verify {story} UI responsiveness",
)


def _fixed(cases: tuple[str, ...]) -> Callable[[str], list[str]]:
	return lambda _story: list(cases)


def _generic(story: str) -> list[str]:
	return [template.format(story=story) for template in GENERIC_TEST_CASE_TEMPLATES]


# Evaluated top to bottom, first keyword hit wins.
DERIVATION_RULES: list[tuple[tuple[str, ...], Callable[[str], list[str]]]] = [
	(("login",), _fixed(LOGIN_TEST_CASES)),
	(("search",), _fixed(SEARCH_TEST_CASES)),
	(("register", "signup"), _fixed(REGISTRATION_TEST_CASES)),
]


def derive_test_cases(user_story: str) -> list[str]:
	"""
	Derives five canonical test case descriptions from a user story.

	The story is matched against DERIVATION_RULES by keyword; stories that
	match nothing (including the empty string) get the generic templates
	filled with the lower-cased story text.
	"""
	story_lower = user_story.lower()

	for keywords, build in DERIVATION_RULES:
		if any(keyword in story_lower for keyword in keywords):
			logger.debug(f"Story matched rule {keywords}")
			return build(story_lower)

	return _generic(story_lower)


# (keywords, category, priority override, complexity override)
CATEGORY_RULES: list[tuple[tuple[str, ...], StoryCategory, Priority | None, Complexity | None]] = [
	(("login", "authenticate", "sign in"), StoryCategory.AUTHENTICATION, Priority.HIGH, None),
	(("search", "find", "filter"), StoryCategory.SEARCH, Priority.MEDIUM, None),
	(("register", "signup", "create account"), StoryCategory.REGISTRATION, Priority.HIGH, None),
	(("payment", "checkout", "purchase"), StoryCategory.PAYMENT, Priority.HIGH, Complexity.HIGH),
	(("profile", "settings", "preferences"), StoryCategory.USER_MANAGEMENT, Priority.MEDIUM, None),
	(("upload", "download", "file"), StoryCategory.FILE_MANAGEMENT, None, Complexity.HIGH),
	(("notification", "email", "alert"), StoryCategory.COMMUNICATION, Priority.LOW, None),
]

HIGH_COMPLEXITY_KEYWORDS = ("integration", "api", "database")
LONG_STORY_LENGTH = 200
SHORT_STORY_LENGTH = 50


def analyze_story(user_story: str) -> StoryAnalysis:
	"""
	Classifies a user story into category, priority and complexity.

	Length and integration keywords take precedence over the complexity
	implied by the category.
	"""
	story_lower = user_story.lower()
	category = StoryCategory.GENERAL
	priority = Priority.MEDIUM
	complexity = Complexity.MEDIUM

	for keywords, rule_category, rule_priority, rule_complexity in CATEGORY_RULES:
		if any(keyword in story_lower for keyword in keywords):
			category = rule_category
			priority = rule_priority or priority
			complexity = rule_complexity or complexity
			break

	if len(user_story) > LONG_STORY_LENGTH or any(k in story_lower for k in HIGH_COMPLEXITY_KEYWORDS):
		complexity = Complexity.HIGH
	elif len(user_story) < SHORT_STORY_LENGTH:
		complexity = Complexity.LOW

	return StoryAnalysis(category=category, priority=priority, complexity=complexity)
