import io
from datetime import datetime, timedelta, timezone

import pytest

from referhub.core import media

from conftest import UPLOADED_URL


def refer(client, headers, name="Jane Doe", job_title="Frontend Engineer", resume=None, **extra):
    data = {
        "name": name,
        "email": extra.get("email", f"{name.split()[0].lower()}@example.com"),
        "phone": extra.get("phone", "555-0100"),
        "job_title": job_title,
    }
    files = {"resume": resume} if resume else None
    response = client.post("/api/candidates", data=data, files=files, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_candidates_require_auth(client):
    assert client.get("/api/candidates").status_code == 401
    assert client.get("/api/candidates/stats").status_code == 401
    assert client.post("/api/candidates", data={"name": "x"}).status_code == 401


def test_create_candidate_without_resume(client, auth_headers):
    candidate = refer(client, auth_headers)

    assert candidate["status"] == "Pending"
    assert candidate["resume_url"] is None
    assert candidate["name"] == "Jane Doe"
    assert candidate["id"]


def test_created_at_is_current_utc_time(client, auth_headers):
    candidate = refer(client, auth_headers)

    created = datetime.fromisoformat(candidate["created_at"])
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    assert abs(datetime.now(timezone.utc) - created) < timedelta(minutes=1)


def test_create_candidate_with_resume(client, auth_headers, uploads):
    resume = ("cv.pdf", io.BytesIO(b"%PDF-1.4 fake"), "application/pdf")

    candidate = refer(client, auth_headers, resume=resume)

    assert candidate["resume_url"] == UPLOADED_URL
    assert uploads == [{"filename": "cv.pdf", "content": b"%PDF-1.4 fake"}]


def test_resume_upload_failure_creates_nothing(client, auth_headers, monkeypatch):
    def failing_upload(fileobj, filename=None):
        raise media.MediaUploadError("boom")

    monkeypatch.setattr(media, "upload_resume", failing_upload)

    response = client.post(
        "/api/candidates",
        data={"name": "A", "email": "a@example.com", "phone": "1", "job_title": "Dev"},
        files={"resume": ("cv.pdf", io.BytesIO(b"x"), "application/pdf")},
        headers=auth_headers,
    )

    assert response.status_code == 502
    assert response.json()["detail"] == "Resume upload failed"
    assert client.get("/api/candidates", headers=auth_headers).json() == []


def test_create_candidate_rejects_blank_fields(client, auth_headers):
    response = client.post(
        "/api/candidates",
        data={"name": "  ", "email": "a@example.com", "phone": "1", "job_title": "Dev"},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert "name" in response.json()["detail"]


def test_create_candidate_missing_field(client, auth_headers):
    response = client.post(
        "/api/candidates",
        data={"name": "A", "email": "a@example.com", "phone": "1"},
        headers=auth_headers,
    )

    assert response.status_code == 422


def test_list_search_and_status_filter(client, auth_headers):
    front = refer(client, auth_headers, name="Alice Front", job_title="Frontend Engineer")
    refer(client, auth_headers, name="Bob Back", job_title="Backend Engineer")
    frontier = refer(client, auth_headers, name="Frontier Carl", job_title="Designer")
    client.put(
        f"/api/candidates/{frontier['id']}/status",
        json={"status": "Reviewed"},
        headers=auth_headers,
    )

    by_search = client.get("/api/candidates", params={"search": "FRONT"}, headers=auth_headers)
    assert {c["id"] for c in by_search.json()} == {front["id"], frontier["id"]}

    both = client.get(
        "/api/candidates",
        params={"search": "front", "status_filter": "Pending"},
        headers=auth_headers,
    )
    assert [c["id"] for c in both.json()] == [front["id"]]

    none = client.get(
        "/api/candidates",
        params={"search": "front", "status_filter": "Hired"},
        headers=auth_headers,
    )
    assert none.json() == []


def test_search_wildcards_match_literally(client, auth_headers):
    refer(client, auth_headers, name="Ann A", job_title="Top 50% Seller")
    refer(client, auth_headers, name="Ben B", job_title="Top 500 Seller")
    refer(client, auth_headers, name="Cat C", job_title="qa_lead")
    refer(client, auth_headers, name="Dan D", job_title="qaxlead")

    def names(term):
        response = client.get("/api/candidates", params={"search": term}, headers=auth_headers)
        assert response.status_code == 200
        return {c["name"] for c in response.json()}

    assert names("50%") == {"Ann A"}
    assert names("qa_lead") == {"Cat C"}
    assert names("%") == {"Ann A"}


def test_empty_filters_mean_no_filter(client, auth_headers):
    refer(client, auth_headers, name="Alice A")
    refer(client, auth_headers, name="Bob B")

    response = client.get(
        "/api/candidates", params={"search": "", "status_filter": ""}, headers=auth_headers
    )

    assert len(response.json()) == 2


def test_stats_counts_by_status(client, auth_headers):
    ids = [refer(client, auth_headers, name=f"Person {i}")["id"] for i in range(4)]
    for candidate_id, new_status in zip(ids[2:], ["Reviewed", "Hired"]):
        client.put(
            f"/api/candidates/{candidate_id}/status",
            json={"status": new_status},
            headers=auth_headers,
        )

    stats = client.get("/api/candidates/stats", headers=auth_headers).json()

    assert stats == {"total": 4, "pending": 2, "reviewed": 1, "hired": 1}


def test_stats_empty(client, auth_headers):
    stats = client.get("/api/candidates/stats", headers=auth_headers).json()

    assert stats == {"total": 0, "pending": 0, "reviewed": 0, "hired": 0}


def test_update_status_to_hired(client, auth_headers):
    candidate = refer(client, auth_headers)

    response = client.put(
        f"/api/candidates/{candidate['id']}/status",
        json={"status": "Hired"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "Hired"
    fetched = client.get(f"/api/candidates/{candidate['id']}", headers=auth_headers).json()
    assert fetched["status"] == "Hired"


@pytest.mark.parametrize("bad_status", ["Rejected", "hired", ""])
def test_update_status_rejects_unknown_values(client, auth_headers, bad_status):
    candidate = refer(client, auth_headers)

    response = client.put(
        f"/api/candidates/{candidate['id']}/status",
        json={"status": bad_status},
        headers=auth_headers,
    )

    assert response.status_code == 400
    fetched = client.get(f"/api/candidates/{candidate['id']}", headers=auth_headers).json()
    assert fetched["status"] == "Pending"


def test_update_status_unknown_candidate(client, auth_headers):
    response = client.put(
        "/api/candidates/doesnotexist/status",
        json={"status": "Hired"},
        headers=auth_headers,
    )

    assert response.status_code == 404


def test_delete_candidate(client, auth_headers):
    candidate = refer(client, auth_headers)

    response = client.delete(f"/api/candidates/{candidate['id']}", headers=auth_headers)

    assert response.status_code == 204
    assert response.content == b""
    assert client.get("/api/candidates", headers=auth_headers).json() == []
    assert client.delete(f"/api/candidates/{candidate['id']}", headers=auth_headers).status_code == 404


def test_referrals_are_scoped_to_referrer(client, auth_headers, register):
    candidate = refer(client, auth_headers)
    other = register("other@example.com")
    other_headers = {"Authorization": f"Bearer {other['access_token']}"}

    assert client.get("/api/candidates", headers=other_headers).json() == []
    assert client.get("/api/candidates/stats", headers=other_headers).json()["total"] == 0
    assert client.delete(f"/api/candidates/{candidate['id']}", headers=other_headers).status_code == 404
    assert len(client.get("/api/candidates", headers=auth_headers).json()) == 1


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert "ReferHub" in client.get("/").json()["message"]
