import uuid

from gradebook.models.gradebook import Assessment, Score

OWNER_ID = uuid.UUID("00000000-0000-0000-0000-0000000000aa")
OTHER_OWNER_ID = uuid.UUID("00000000-0000-0000-0000-0000000000bb")

HEADERS = {"X-Owner-Id": str(OWNER_ID)}

EXAMPLE_PAYLOAD = {
    "categories": [
        {"id": "quizzes", "name": "Quizzes", "percentage_weight": 30, "is_active": True},
        {"id": "exams", "name": "Exams", "percentage_weight": 70, "is_active": True},
    ],
    "assessments": [
        {"id": "q1", "category_id": "quizzes", "max_score": 20},
        {"id": "q2", "category_id": "quizzes", "max_score": 20},
        {"id": "e1", "category_id": "exams", "max_score": 100},
    ],
    "scores": [
        {"assessment_id": "q1", "raw_score": 18},
        {"assessment_id": "q2", "raw_score": 15},
        {"assessment_id": "e1", "raw_score": 85},
    ],
}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_post_final_grade(client):
    response = client.post("/grades/final", json=EXAMPLE_PAYLOAD)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] is True
    assert body["data"]["final_percentage"] == 84.25
    assert body["data"]["letter_grade"] == "B"
    assert body["data"]["is_complete"] is True
    assert len(body["data"]["breakdown_by_category"]) == 2


def test_post_final_grade_without_categories(client):
    response = client.post("/grades/final", json={"categories": []})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "No active assessment types configured"
    assert body["data"]["no_data"] is True
    assert body["data"]["letter_grade"] == "F"
    assert body["data"]["breakdown_by_category"] == []


def test_post_final_grade_rejects_score_above_max(client):
    payload = dict(EXAMPLE_PAYLOAD, scores=[{"assessment_id": "q1", "raw_score": 25}])

    response = client.post("/grades/final", json=payload)

    assert response.status_code == 422
    body = response.json()
    assert body["status"] is False
    assert body["error"]["type"] == "InvalidInputError"
    assert body["error"]["detail"]["assessment_id"] == "q1"


def test_post_final_grade_rejects_malformed_body(client):
    response = client.post("/grades/final", json={"categories": [{"id": "x"}]})

    assert response.status_code == 422


def test_post_trend(client):
    response = client.post("/grades/trend", json={"percentages": [60, 62, 58, 70, 75, 80]})

    assert response.status_code == 200
    assert response.json()["data"] == {
        "improving": True,
        "consistent": False,
        "declining": False,
    }


def test_final_grade_from_database(client, seeded):
    url = f"/classes/{seeded['class_id']}/students/{seeded['ada_id']}/final-grade"

    response = client.get(url, headers=HEADERS)

    assert response.status_code == 200
    data = response.json()["data"]
    # The inactive Homework type is left out
    assert data["final_percentage"] == 84.25
    assert data["letter_grade"] == "B"
    assert data["total_weight_used"] == 100
    assert data["is_complete"] is True
    assert [entry["name"] for entry in data["breakdown_by_category"]] == ["Exams", "Quizzes"]


def test_partially_graded_student_from_database(client, seeded):
    url = f"/classes/{seeded['class_id']}/students/{seeded['bob_id']}/final-grade"

    data = client.get(url, headers=HEADERS).json()["data"]

    assert data["final_percentage"] == 60.0
    assert data["letter_grade"] == "F"
    assert data["total_weight_used"] == 30
    assert data["is_complete"] is False


def test_final_grade_is_owner_scoped(client, seeded):
    url = f"/classes/{seeded['class_id']}/students/{seeded['ada_id']}/final-grade"

    response = client.get(url, headers={"X-Owner-Id": str(OTHER_OWNER_ID)})

    assert response.status_code == 404
    assert response.json()["message"] == "Class not found"


def test_final_grade_unknown_student(client, seeded):
    url = f"/classes/{seeded['class_id']}/students/{uuid.uuid4()}/final-grade"

    response = client.get(url, headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["message"] == "Student not found"


def test_owner_header_is_required(client, seeded):
    url = f"/classes/{seeded['class_id']}/students/{seeded['ada_id']}/final-grade"

    assert client.get(url).status_code == 422


def test_student_report(client, seeded):
    url = f"/classes/{seeded['class_id']}/students/{seeded['ada_id']}/report"

    response = client.get(url, headers=HEADERS)

    assert response.status_code == 200
    report = response.json()["data"]
    assert report["student_name"] == "Lovelace, Ada"
    assert report["class_name"] == "Grade 10 Maths"
    assert report["subject"] == "Mathematics"
    assert report["final_grade"]["final_percentage"] == 84.25
    # Plain mean over every graded assessment, homework included
    assert report["overall_average"] == 67.5
    assert report["overall_letter_grade"] == "D+"
    assert [s["title"] for s in report["scores"]] == ["Quiz 1", "Homework 1", "Quiz 2", "Midterm"]


def test_class_summary(client, seeded):
    response = client.get(f"/classes/{seeded['class_id']}/summary", headers=HEADERS)

    assert response.status_code == 200
    summary = response.json()["data"]
    assert summary["total_students"] == 2
    assert summary["total_assessments"] == 4
    assert summary["class_average"] == 66.0
    assert summary["highest_score"] == 90.0
    assert summary["lowest_score"] == 20.0
    assert summary["completion_rate"] == 62.5
    assert [b["count"] for b in summary["grade_distribution"]] == [1, 1, 1, 1, 1]
    assert [p["student_name"] for p in summary["struggling_students"]] == [
        "Bobby Brown",
        "Lovelace, Ada",
    ]


def test_class_summary_unknown_class(client, seeded):
    response = client.get(f"/classes/{uuid.uuid4()}/summary", headers=HEADERS)

    assert response.status_code == 404


def test_class_summary_rejects_bad_stored_score(client, db_session, seeded):
    broken = Assessment(owner_id=OWNER_ID, class_id=seeded["class_id"], title="Pop quiz", max_score=10)
    db_session.add(broken)
    db_session.commit()
    db_session.add(
        Score(owner_id=OWNER_ID, assessment_id=broken.id, student_id=seeded["bob_id"], raw_score=15)
    )
    db_session.commit()

    response = client.get(f"/classes/{seeded['class_id']}/summary", headers=HEADERS)

    assert response.status_code == 422
    body = response.json()
    assert body["status"] is False
    assert body["error"]["type"] == "InvalidInputError"
    assert body["error"]["detail"]["assessment_id"] == str(broken.id)
