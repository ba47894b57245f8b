from datetime import timedelta

from portal.core.auth import create_access_token, decode_token


def test_register_login_me(client, make_user):
    headers = make_user("me@example.com")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "me@example.com"
    assert resp.json()["is_admin"] is False


def test_duplicate_registration_rejected(client, make_user):
    make_user("dup@example.com")
    resp = client.post("/api/auth/register", json={"email": "dup@example.com", "password": "secret123"})
    assert resp.status_code == 400


def test_bad_password_rejected(client, make_user):
    make_user("pw@example.com")
    resp = client.post("/api/auth/login", json={"email": "pw@example.com", "password": "wrongpass"})
    assert resp.status_code == 401


def test_mutation_without_token_is_not_authenticated(client):
    resp = client.put("/api/students/me", json={
        "usn": "1AB21CS001", "name": "Nobody", "branch": "CSE", "semester": 3, "batch": "2021"
    })
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Not authenticated"


def test_token_expiry_is_checked():
    assert decode_token(create_access_token({"sub": "1"}))["sub"] == "1"
    assert decode_token(create_access_token({"sub": "1"}, timedelta(minutes=-1))) is None


def test_garbage_token_is_not_authenticated(client):
    resp = client.post("/api/chat/sessions", json={"title": "x"}, headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401


def test_profile_is_null_until_created(client, make_user):
    headers = make_user()
    assert client.get("/api/students/me", headers=headers).json() is None
    assert client.get("/api/students/me").json() is None


def test_profile_create_then_update(client, make_user, store):
    headers = make_user()
    body = {"usn": "1ab21cs001", "name": "Asha Rao", "branch": "CSE", "semester": 3, "batch": "2021-25"}

    first = client.put("/api/students/me", headers=headers, json=body)
    assert first.status_code == 200
    assert first.json()["created"] is True

    body["semester"] = 4
    second = client.put("/api/students/me", headers=headers, json=body)
    assert second.json() == {"student_id": first.json()["student_id"], "created": False}
    assert store.get("students", first.json()["student_id"])["updated_at"] is not None

    profile = client.get("/api/students/me", headers=headers).json()
    assert profile["semester"] == 4
    assert profile["usn"] == "1AB21CS001"
    assert profile["cgpa"] is None


def test_profile_semester_out_of_range(client, make_user):
    headers = make_user()
    resp = client.put("/api/students/me", headers=headers, json={
        "usn": "1AB21CS001", "name": "Asha", "branch": "CSE", "semester": 9, "batch": "2021"
    })
    assert resp.status_code == 422


def test_stats_counts_results_and_current_materials(client, make_student):
    headers = make_student(branch="CSE", semester=5)
    client.post("/api/results", headers=headers, json={
        "semester": 4, "subject": "OS", "subject_code": "21CS44", "grade": "A",
        "credits": 4, "exam_type": "regular", "academic_year": "2023-24"
    })
    for semester in (5, 5, 3):
        client.post("/api/materials", headers=headers, json={
            "title": "Notes", "subject": "DBMS", "branch": "CSE", "semester": semester, "type": "notes"
        })

    stats = client.get("/api/students/me/stats", headers=headers).json()
    assert stats["results_count"] == 1
    assert stats["materials_count"] == 2
    assert stats["student"]["branch"] == "CSE"
