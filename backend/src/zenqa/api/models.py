from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.zenqa.domain.models import DetailedTestCase, ExecutionReport, ExtractedStoryData, StoryAnalysis


class ApiModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TestCaseGenerationRequest(ApiModel):
	user_story: str


class TestCaseGenerationResponse(ApiModel):
	success: bool = True
	user_story: str
	test_cases: list[str]
	analysis: StoryAnalysis
	detailed_test_cases: list[DetailedTestCase]
	total_test_cases: int
	generated: bool = True
	timestamp: str
	language: str
	framework: str


class AutomationRequest(ApiModel):
	test_cases: list[str]


class AutomationResponse(ApiModel):
	success: bool = True
	code: str
	language: str
	framework: str
	test_cases: list[str]
	timestamp: str


class RunAutomationRequest(ApiModel):
	test_cases: list[str] = []


class ExecutionResponse(ApiModel):
	success: bool = True
	results: ExecutionReport
	message: str | None = None
	timestamp: str


class TestStepsRequest(ApiModel):
	test_cases: list[str]
	user_story: str = ""


class TestStepsResponse(ApiModel):
	success: bool = True
	detailed_test_cases: list[DetailedTestCase]
	total_test_cases: int
	total_steps: int
	timestamp: str


class StepsAutomationRequest(ApiModel):
	detailed_test_cases: list[DetailedTestCase] = []
	user_story: str = ""


class StepsAutomationResponse(ApiModel):
	success: bool = True
	automation_code: str
	extracted_real_data: ExtractedStoryData
	message: str
	test_case_count: int
	language: str
	framework: str
	timestamp: str


class HealthResponse(ApiModel):
	status: str
	service: str
	timestamp: str
