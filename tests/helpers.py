"""Request helpers shared by the API tests."""

from fastapi.testclient import TestClient


def upload(client: TestClient, file_type: str = "cv", name: str = "cv.pdf",
           content: bytes = b"%PDF-1.4 test", content_type: str = "application/pdf") -> str:
    response = client.post(
        "/api/upload",
        files={"file": (name, content, content_type)},
        data={"fileType": file_type},
    )
    assert response.status_code == 200, response.text
    return response.json()["fileId"]


def create_job(client: TestClient, **overrides) -> dict:
    payload = {
        "title": "Junior Front-end Developer",
        "description": "Build responsive pages with React.",
        "type": "FULL_TIME",
        "location": "Freetown",
        "salaryRange": "3,000,000 - 5,000,000 SLL",
    }
    payload.update(overrides)
    response = client.post("/api/employer/jobs", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["job"]


def seeker_profile_id(client: TestClient) -> int:
    response = client.get("/api/profile/seeker")
    assert response.status_code == 200, response.text
    return response.json()["profile"]["id"]
