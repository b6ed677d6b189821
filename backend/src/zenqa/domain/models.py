from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.zenqa.domain.enums import Complexity, Priority, StepType, StoryCategory, TestStatus


class DomainModel(BaseModel):
	"""
	Immutable record serialized with camelCase keys on the wire.
	"""
	model_config = ConfigDict(
		alias_generator=to_camel,
		populate_by_name=True,
		frozen=True,
	)


class TestResult(DomainModel):
	name: str = Field(alias="testName")
	status: TestStatus
	duration: str
	details: str


class ExecutionSummary(DomainModel):
	total: int
	passed: int
	failed: int
	duration: str
	timestamp: str


class ExecutionReport(DomainModel):
	test_results: list[TestResult]
	summary: ExecutionSummary


class StoryAnalysis(DomainModel):
	category: StoryCategory = StoryCategory.GENERAL
	priority: Priority = Priority.MEDIUM
	complexity: Complexity = Complexity.MEDIUM


class TestStep(DomainModel):
	step_id: str
	step_number: int
	description: str
	step_type: StepType
	automation_complexity: Complexity
	estimated_duration: int
	expected_result: str


class DetailedTestCase(DomainModel):
	test_case_id: str
	test_case_name: str
	category: StoryCategory
	priority: Priority
	preconditions: str
	test_steps: list[TestStep]
	expected_results: str
	test_data: str


class LoginSelectors(DomainModel):
	username_field: str = "#username"
	password_field: str = "#password"
	login_button: str = "#loginBtn"
	dashboard: str = ".dashboard"


class ExtractedStoryData(DomainModel):
	"""
	Target application details pulled out of a user story for generated scripts.
	"""
	base_url: str = "https://example.com"
	username: str = "testuser@example.com"
	password: str = "Test@123456"
	application: str = "Application"
	features: list[str] = []
	selectors: LoginSelectors = LoginSelectors()
