from enum import StrEnum


class TestStatus(StrEnum):
	"""
	Outcome of a single simulated test execution.
	"""
	PASSED = "PASSED"
	FAILED = "FAILED"


class StoryCategory(StrEnum):
	"""
	Functional area a user story (or a single test case) belongs to.
	"""
	AUTHENTICATION = "Authentication"
	SEARCH = "Search"
	REGISTRATION = "Registration"
	PAYMENT = "Payment"
	USER_MANAGEMENT = "User Management"
	FILE_MANAGEMENT = "File Management"
	COMMUNICATION = "Communication"
	SECURITY = "Security"
	UI_UX = "UI/UX"
	GENERAL = "General"


class Priority(StrEnum):
	HIGH = "High"
	MEDIUM = "Medium"
	LOW = "Low"


class Complexity(StrEnum):
	HIGH = "High"
	MEDIUM = "Medium"
	LOW = "Low"


class StepType(StrEnum):
	"""
	Kind of action a manual test step performs. Drives the automation estimate.
	"""
	NAVIGATION = "Navigation"
	VERIFICATION = "Verification"
	DATA_ENTRY = "Data Entry"
	USER_INTERACTION = "User Interaction"
	WAIT = "Wait/Synchronization"
	AUTHENTICATION = "Authentication"
	CLEANUP = "Cleanup"
	ACTION = "Action"
