import pytest

from src.zenqa.domain.enums import Priority, StepType, StoryCategory
from src.zenqa.domain.models import StoryAnalysis
from src.zenqa.services.catalog import comprehensive_test_cases
from src.zenqa.services.deriver import analyze_story


def ids(cases):
    return [case.test_case_id for case in cases]


@pytest.mark.parametrize(
    "category, expected_ids",
    [
        (StoryCategory.AUTHENTICATION, ["TC_AUTH_001", "TC_AUTH_002", "TC_AUTH_003", "TC_AUTH_004"]),
        (StoryCategory.SEARCH, ["TC_SEARCH_001", "TC_SEARCH_002", "TC_SEARCH_003", "TC_SEARCH_004"]),
        (StoryCategory.REGISTRATION, ["TC_REG_001", "TC_REG_002", "TC_REG_003"]),
        (StoryCategory.GENERAL, ["TC_GEN_001", "TC_GEN_002", "TC_GEN_003"]),
    ],
)
def test_category_dispatch_and_numbering(category, expected_ids):
    cases = comprehensive_test_cases("As a user I want things", StoryAnalysis(category=category))

    assert ids(cases) == expected_ids


@pytest.mark.parametrize(
    "category",
    [
        StoryCategory.PAYMENT,
        StoryCategory.USER_MANAGEMENT,
        StoryCategory.FILE_MANAGEMENT,
        StoryCategory.COMMUNICATION,
        StoryCategory.SECURITY,
        StoryCategory.UI_UX,
    ],
)
def test_categories_without_own_set_fall_back_to_generic(category):
    cases = comprehensive_test_cases("pay the invoice", StoryAnalysis(category=category))

    assert ids(cases) == ["TC_GEN_001", "TC_GEN_002", "TC_GEN_003"]
    assert all(case.category == StoryCategory.GENERAL for case in cases)


def test_numbering_can_start_elsewhere():
    cases = comprehensive_test_cases("", StoryAnalysis(category=StoryCategory.REGISTRATION), start=7)

    assert ids(cases) == ["TC_REG_007", "TC_REG_008", "TC_REG_009"]


def test_dispatch_follows_story_analysis():
    story = "As a user I want to login with my password"

    cases = comprehensive_test_cases(story, analyze_story(story))

    assert cases[0].test_case_name == "Verify successful login with valid credentials"
    assert all(case.category == StoryCategory.AUTHENTICATION for case in cases)
    assert [case.priority for case in cases] == [Priority.HIGH, Priority.HIGH, Priority.MEDIUM, Priority.HIGH]


def test_generic_names_embed_story():
    cases = comprehensive_test_cases("export monthly report", StoryAnalysis())

    assert [case.test_case_name for case in cases] == [
        "Verify export monthly report - positive flow",
        "Verify export monthly report - error handling",
        "Verify export monthly report - UI responsiveness and accessibility",
    ]
    assert [case.priority for case in cases] == [Priority.HIGH, Priority.MEDIUM, Priority.LOW]


def test_steps_are_annotated():
    cases = comprehensive_test_cases("", StoryAnalysis(category=StoryCategory.REGISTRATION))
    first = cases[0]

    assert len(first.test_steps) == 8
    assert [len(case.test_steps) for case in cases] == [8, 5, 7]
    assert first.test_steps[0].step_id == "STEP_TC_REG_001_01"
    assert first.test_steps[0].step_type == StepType.NAVIGATION
    assert first.test_steps[-1].expected_result == first.expected_results
    assert first.test_steps[0].expected_result == "Step 1 should be completed successfully"
