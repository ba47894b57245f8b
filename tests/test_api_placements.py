def post(client, headers, company, branches, criteria=None, status="upcoming"):
    resp = client.post("/api/placements", headers=headers, json={
        "company_name": company,
        "role": "Graduate Engineer",
        "package": "6 LPA",
        "eligible_branches": branches,
        "cgpa_criteria": criteria,
        "description": "Campus drive",
        "status": status,
        "requirements": ["Aptitude test"],
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def names(resp):
    return sorted(p["company_name"] for p in resp.json())


def test_create_requires_auth(client):
    resp = client.post("/api/placements", json={
        "company_name": "Acme", "role": "SDE", "eligible_branches": ["All"],
        "description": "x", "status": "upcoming"
    })
    assert resp.status_code == 401


def test_eligible_branches_must_not_be_empty(client, make_user):
    headers = make_user()
    resp = client.post("/api/placements", headers=headers, json={
        "company_name": "Acme", "role": "SDE", "eligible_branches": [],
        "description": "x", "status": "upcoming"
    })
    assert resp.status_code == 422


def test_list_newest_first_and_status_filter(client, make_user):
    headers = make_user()
    post(client, headers, "First", ["All"])
    post(client, headers, "Second", ["All"], status="completed")
    post(client, headers, "Third", ["All"])

    everything = client.get("/api/placements").json()
    assert [p["company_name"] for p in everything] == ["Third", "Second", "First"]

    completed = client.get("/api/placements", params={"status": "completed"}).json()
    assert [p["company_name"] for p in completed] == ["Second"]


def test_eligible_for_student_without_cgpa(client, make_student):
    headers = make_student(branch="Civil")
    post(client, headers, "OpenToAll", ["All"], criteria=7.5)
    post(client, headers, "CSEOnly", ["CSE"])
    post(client, headers, "CivilHigh", ["Civil"], criteria=9.5)
    post(client, headers, "Finished", ["All"], status="completed")
    post(client, headers, "Running", ["Civil"], status="ongoing")

    resp = client.get("/api/placements/eligible", headers=headers)
    assert names(resp) == ["CivilHigh", "OpenToAll"]


def test_eligible_respects_cgpa_once_computed(client, make_student):
    headers = make_student(branch="CSE")
    for grade in ("A", "B+"):
        client.post("/api/results", headers=headers, json={
            "semester": 1, "subject": grade, "subject_code": grade, "grade": grade,
            "credits": 4, "exam_type": "regular", "academic_year": "2021-22"
        })
    client.post("/api/results/cgpa/refresh", headers=headers)  # 7.50

    post(client, headers, "Strict", ["CSE"], criteria=8.0)
    post(client, headers, "Exact", ["CSE"], criteria=7.5)
    post(client, headers, "ECEOnly", ["ECE"])

    assert names(client.get("/api/placements/eligible", headers=headers)) == ["Exact"]


def test_eligible_empty_for_anonymous_or_no_profile(client, make_user):
    headers = make_user()
    post(client, headers, "Acme", ["All"])
    assert client.get("/api/placements/eligible").json() == []
    assert client.get("/api/placements/eligible", headers=headers).json() == []


def test_status_changes_only_by_hand(client, make_user):
    poster = make_user("poster@example.com")
    other = make_user("other@example.com")
    placement = post(client, poster, "Acme", ["All"])
    url = f"/api/placements/{placement['placement_id']}/status"

    assert client.put(url, headers=other, json={"status": "ongoing"}).status_code == 403
    resp = client.put(url, headers=poster, json={"status": "ongoing"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "ongoing"

    assert client.put("/api/placements/999/status", headers=poster, json={"status": "completed"}).status_code == 404


def test_past_deadline_stays_upcoming(client, make_student):
    headers = make_student(branch="CSE")
    resp = client.post("/api/placements", headers=headers, json={
        "company_name": "Late", "role": "SDE", "eligible_branches": ["CSE"],
        "description": "Deadline passed long ago", "status": "upcoming",
        "application_deadline": "2001-01-01T00:00:00", "drive_date": "2001-02-01T00:00:00"
    })
    assert resp.json()["status"] == "upcoming"
    assert names(client.get("/api/placements/eligible", headers=headers)) == ["Late"]
