"""
HTTP tests for the assessment endpoints.

The application is built with in-memory storage and the delivery facade
dependency is overridden with one over seeded stores.
"""

import pytest
from fastapi.testclient import TestClient

from skillassess import create_app
from skillassess.common.auth import JWTConfig, create_access_token
from skillassess.config import Settings
from skillassess.services import get_delivery_service

from .conftest import make_question_payload

JWT_CONFIG = JWTConfig(secret_key="test-secret")


def auth_header(user_id, role, **kwargs):
    return {"Authorization": f"Bearer {create_access_token(JWT_CONFIG, user_id, role, **kwargs)}"}


STUDENT = auth_header("student-1", "student")
COMPANY = auth_header("company-1", "company")


@pytest.fixture
def client(service):
    app = create_app(Settings(STORAGE_BACKEND="memory", JWT_SECRET_KEY=JWT_CONFIG.secret_key))
    app.dependency_overrides[get_delivery_service] = lambda: service
    return TestClient(app)


def authoring_body(**overrides):
    body = {
        "title": "SQL Joins",
        "skill": "sql",
        "questions": [
            {"question": f"Join {i}?", "options": ["A", "B", "C"], "correctAnswerIndex": i % 3}
            for i in range(5)
        ],
        "duration": 15,
        "passingScore": 2,
        "subsetSize": 3,
    }
    body.update(overrides)
    return body


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["data"] == {"storage": "memory"}


def test_list_is_public_and_hides_questions(client, bank):
    response = client.get("/api/assessments")

    assert response.status_code == 200
    listed = response.json()
    assert [a["id"] for a in listed] == [bank.assessment_id]
    assert listed[0]["totalQuestions"] == 10
    assert "questions" not in listed[0]


def test_get_single_summary(client, bank):
    response = client.get(f"/api/assessments/{bank.assessment_id}")

    assert response.status_code == 200
    assert response.json()["subsetSize"] == bank.subset_size


def test_get_unknown_assessment_is_404(client):
    response = client.get("/api/assessments/missing")

    assert response.status_code == 404
    assert response.json()["status"] == "error"
    assert response.json()["code"] == "not_found_error"


def test_create_requires_token(client):
    response = client.post("/api/assessments/create", json=authoring_body())

    assert response.status_code == 401


def test_create_rejects_student_role(client):
    response = client.post("/api/assessments/create", json=authoring_body(), headers=STUDENT)

    assert response.status_code == 403
    assert response.json()["code"] == "authorization_error"


def test_create_returns_summary(client):
    response = client.post("/api/assessments/create", json=authoring_body(), headers=COMPANY)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Assessment created successfully"
    assert body["assessment"]["totalQuestions"] == 5
    assert body["assessment"]["subsetSize"] == 3
    assert "questions" not in body["assessment"]

    listed = client.get("/api/assessments").json()
    assert body["assessment"]["id"] in {a["id"] for a in listed}


def test_create_accepts_legacy_field_names(client):
    questions = [
        {"text": "Legacy?", "options": ["yes", "no"], "correctAnswer": 1},
        make_question_payload(1, correct=0),
    ]
    questions[1]["question"] = questions[1].pop("text")
    questions[1]["correctAnswerIndex"] = questions[1].pop("correct_answer_index")

    response = client.post(
        "/api/assessments/create",
        json=authoring_body(questions=questions, subsetSize=None),
        headers=auth_header("admin-1", "admin"),
    )

    assert response.status_code == 201
    assert response.json()["assessment"]["subsetSize"] == 20


@pytest.mark.parametrize("overrides, message", [
    ({"title": " "}, "Title is required"),
    ({"questions": []}, "Questions array is required and cannot be empty"),
    ({"subsetSize": 5}, "Subset size must be an integer between 1 and 4"),
    ({"duration": 0}, "Duration must be a positive number (in minutes)"),
    ({"duration": "30"}, "Duration must be a positive number (in minutes)"),
    ({"subsetSize": True}, "Subset size must be an integer between 1 and 4"),
    ({"subsetSize": "3"}, "Subset size must be an integer between 1 and 4"),
    ({"passingScore": "2"}, "Passing score must be a non-negative integer"),
    ({"passingScore": 1.5}, "Passing score must be a non-negative integer"),
])
def test_create_rejects_invalid_bank(client, overrides, message):
    response = client.post("/api/assessments/create", json=authoring_body(**overrides), headers=COMPANY)

    assert response.status_code == 400
    assert response.json()["message"] == message


def test_create_reports_question_position(client):
    questions = authoring_body()["questions"]
    questions[2]["correctAnswerIndex"] = 7

    response = client.post(
        "/api/assessments/create", json=authoring_body(questions=questions), headers=COMPANY
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Question 3: Correct answer must be a valid option index"


def test_start_strips_answers(client, bank):
    response = client.get(f"/api/assessments/{bank.assessment_id}/start", headers=STUDENT)

    assert response.status_code == 200
    body = response.json()
    assert body["subsetSize"] == bank.subset_size
    assert len(body["questions"]) == bank.subset_size
    for question in body["questions"]:
        assert set(question) == {"displayIndex", "originalIndex", "question", "options", "difficulty"}


def test_start_requires_student(client, bank):
    response = client.get(f"/api/assessments/{bank.assessment_id}/start", headers=COMPANY)

    assert response.status_code == 403


def test_tokens_are_checked_against_configured_secret(client, bank):
    foreign = JWTConfig(secret_key="dev-secret-key")
    token = create_access_token(foreign, "student-1", "student")
    headers = {"Authorization": f"Bearer {token}"}

    response = client.get(f"/api/assessments/{bank.assessment_id}/start", headers=headers)

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_app_settings_provide_signing_key(service, bank):
    config = JWTConfig(secret_key="app-secret")
    app = create_app(Settings(STORAGE_BACKEND="memory", JWT_SECRET_KEY=config.secret_key))
    app.dependency_overrides[get_delivery_service] = lambda: service
    token = create_access_token(config, "student-1", "student")
    headers = {"Authorization": f"Bearer {token}"}

    response = TestClient(app).get(f"/api/assessments/{bank.assessment_id}/start", headers=headers)

    assert response.status_code == 200


def test_start_rejects_expired_token(client, bank):
    headers = auth_header("student-1", "student", expires_minutes=-1)

    response = client.get(f"/api/assessments/{bank.assessment_id}/start", headers=headers)

    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


def test_submit_scores_and_updates_results(client, bank):
    delivered = client.get(f"/api/assessments/{bank.assessment_id}/start", headers=STUDENT).json()
    answers = {str(q["originalIndex"]): q["originalIndex"] % 4 for q in delivered["questions"]}

    response = client.post(
        f"/api/assessments/{bank.assessment_id}/submit", json={"answers": answers}, headers=STUDENT
    )

    assert response.status_code == 200
    assert response.json() == {
        "score": 5,
        "maxScore": 5,
        "totalAnswered": 5,
        "percentage": 100.0,
        "level": "Advanced",
        "passed": True,
    }

    results = client.get("/api/assessments/results", headers=STUDENT).json()
    assert results["count"] == 1
    assert results["results"][0]["skill"] == bank.skill
    assert results["results"][0]["level"] == "Advanced"


def test_submit_without_answers_is_400(client, bank):
    response = client.post(f"/api/assessments/{bank.assessment_id}/submit", json={}, headers=STUDENT)

    assert response.status_code == 400


def test_submit_with_malformed_answers_is_400(client, bank):
    response = client.post(
        f"/api/assessments/{bank.assessment_id}/submit",
        json={"answers": {"first": 1}},
        headers=STUDENT,
    )

    assert response.status_code == 400
    assert client.get("/api/assessments/results", headers=STUDENT).json()["count"] == 0


def test_submit_unknown_assessment_is_404(client):
    response = client.post("/api/assessments/missing/submit", json={"answers": {}}, headers=STUDENT)

    assert response.status_code == 404


def test_submit_without_profile_is_404(client, bank):
    response = client.post(
        f"/api/assessments/{bank.assessment_id}/submit",
        json={"answers": {"0": 0}},
        headers=auth_header("student-404", "student"),
    )

    assert response.status_code == 404
    assert response.json()["message"] == "Student profile with ID student-404 not found"
