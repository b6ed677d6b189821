import re
from unittest.mock import patch

from fastapi.testclient import TestClient

from src.zenqa.api.models import RunAutomationRequest
from src.zenqa.main import app
from src.zenqa.services.deriver import LOGIN_TEST_CASES
from src.zenqa.services.simulator import fixed_demo_report

client = TestClient(app)


def test_generate_testcases_endpoint() -> None:
    response = client.post("/api/java/generate-testcases", json={"userStory": "As a user I want to login"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["generated"] is True
    assert data["userStory"] == "As a user I want to login"
    assert data["testCases"] == list(LOGIN_TEST_CASES)
    assert data["analysis"] == {"category": "Authentication", "priority": "High", "complexity": "Low"}
    assert data["language"] == "java"
    assert data["framework"] == "playwright"
    assert "timestamp" in data
    assert data["totalTestCases"] == 4
    assert [tc["testCaseId"] for tc in data["detailedTestCases"]] == [
        "TC_AUTH_001", "TC_AUTH_002", "TC_AUTH_003", "TC_AUTH_004",
    ]
    assert data["detailedTestCases"][0]["testSteps"][0]["stepId"] == "STEP_TC_AUTH_001_01"


def test_generate_testcases_missing_story() -> None:
    response = client.post("/api/java/generate-testcases", json={})

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["details"][0]["field"] == "body.userStory"


def test_generate_automation_endpoint() -> None:
    cases = ["Verify search with valid keywords", "Verify remember me functionality"]

    response = client.post("/api/java/generate-automation", json={"testCases": cases})

    assert response.status_code == 200
    data = response.json()
    assert data["testCases"] == cases
    assert "public class ZenQATests {" in data["code"]
    assert "void test_search_with_valid_keywords()" in data["code"]
    assert 'page.navigate("https://your-app-url.com");' in data["code"]


def test_generate_automation_rejects_non_list() -> None:
    response = client.post("/api/java/generate-automation", json={"testCases": "Verify login"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_execution_results_is_demo_report() -> None:
    response = client.get("/api/java/execution-results")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert "message" not in data
    results = data["results"]
    assert results["testResults"][0] == {
        "testName": "testValidLogin",
        "status": "PASSED",
        "duration": "2.3s",
        "details": "Login successful with valid credentials",
    }
    assert results["summary"]["total"] == 5
    assert results["summary"]["passed"] == 4
    assert results["summary"]["failed"] == 1
    assert results["summary"]["duration"] == "11.1s"


def test_run_automation_simulates_each_case() -> None:
    cases = ["Verify successful login with valid credentials", "Verify search with valid keywords"]

    response = client.post("/api/java/run-automation", json={"testCases": cases, "code": "class X {}"})

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Test execution completed successfully"
    results = data["results"]
    assert [r["testName"] for r in results["testResults"]] == [
        "test_successful_login_with_valid_credentials",
        "test_search_with_valid_keywords",
    ]
    for result in results["testResults"]:
        assert re.fullmatch(r"\d+\.\ds", result["duration"])
    summary = results["summary"]
    assert summary["total"] == 2
    assert summary["passed"] + summary["failed"] == 2


@patch("src.zenqa.api.endpoints.execution.simulate_batch")
def test_run_automation_without_cases_uses_demo_report(mock_simulate) -> None:
    response = client.post("/api/java/run-automation", json={})

    assert response.status_code == 200
    assert response.json()["results"]["summary"]["duration"] == "11.1s"
    mock_simulate.assert_not_called()


@patch("src.zenqa.api.endpoints.execution.simulate_batch")
def test_run_automation_delegates_to_simulator(mock_simulate) -> None:
    mock_simulate.return_value = fixed_demo_report()

    response = client.post("/api/java/run-automation", json={"testCases": ["Verify a"]})

    assert response.status_code == 200
    mock_simulate.assert_called_once_with(["Verify a"])


def test_create_test_steps_endpoint() -> None:
    payload = {
        "testCases": ["Verify successful login with valid credentials", "Verify remember me functionality"],
        "userStory": "As a user I want to login",
    }

    response = client.post("/api/java/create-test-steps", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["totalTestCases"] == 2
    assert data["totalSteps"] == 12
    first = data["detailedTestCases"][0]
    assert first["testCaseId"] == "TC_STEP_001"
    assert first["testSteps"][0]["stepId"] == "STEP_TC_STEP_001_01"
    assert first["testSteps"][0]["stepType"] == "Navigation"
    assert first["testSteps"][0]["estimatedDuration"] == 3


def test_create_test_steps_requires_cases() -> None:
    response = client.post("/api/java/create-test-steps", json={"testCases": []})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Test cases are required"}


def test_health_check() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "UP"
    assert data["service"] == "Zen QA Java Service"


def test_generate_testcases_generic_story() -> None:
    response = client.post("/api/java/generate-testcases", json={"userStory": "Export the monthly report"})

    assert response.status_code == 200
    data = response.json()
    assert data["totalTestCases"] == 3
    assert data["detailedTestCases"][0]["testCaseName"] == "Verify Export the monthly report - positive flow"


def test_run_automation_ignores_submitted_code() -> None:
    assert "code" not in RunAutomationRequest.model_fields

    response = client.post("/api/java/run-automation", json={"code": "class X {}"})

    assert response.status_code == 200
    assert response.json()["results"]["summary"]["duration"] == "11.1s"


def test_generate_automation_from_steps_endpoint() -> None:
    steps = client.post(
        "/api/java/create-test-steps",
        json={"testCases": ["Verify successful login with valid credentials"]},
    ).json()
    payload = {
        "detailedTestCases": steps["detailedTestCases"],
        "userStory": "As a shopper I want to login on https://www.saucedemo.com",
    }

    response = client.post("/api/java/generate-automation-from-steps", json=payload)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["testCaseCount"] == 1
    assert data["language"] == "java"
    assert data["extractedRealData"]["application"] == "SauceDemo"
    assert data["extractedRealData"]["selectors"]["usernameField"] == "#user-name"
    assert "void testTC_STEP_001() throws Exception {" in data["automationCode"]
    assert 'page.fill("#user-name", USERNAME);' in data["automationCode"]


def test_generate_automation_from_steps_requires_cases() -> None:
    response = client.post("/api/java/generate-automation-from-steps", json={"detailedTestCases": []})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Detailed test cases are required"}


def test_generate_automation_from_steps_rejects_malformed_case() -> None:
    payload = {"detailedTestCases": [{"testCaseId": "TC_1"}], "userStory": "x"}

    response = client.post("/api/java/generate-automation-from-steps", json=payload)

    assert response.status_code == 400
    assert response.json()["success"] is False
