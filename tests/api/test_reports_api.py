# tests/api/test_reports_api.py
from fastapi import status

from factories import OTHER_USER_ID

def test_create_report(client, auth_headers):
    """Test report creation"""
    response = client.post(
        "/api/reports",
        json={"title": "  New Report ", "description": "Report Description"},
        headers=auth_headers
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["title"] == "New Report"
    assert data["description"] == "Report Description"
    assert data["deleted_at"] is None
    assert "id" in data
    assert "created_at" in data

def test_create_report_requires_user(client):
    response = client.post("/api/reports", json={"title": "New Report"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

def test_create_report_blank_title(client, auth_headers):
    response = client.post("/api/reports", json={"title": "   "}, headers=auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "cannot be empty" in response.json()["detail"]

def test_create_report_missing_title(client, auth_headers):
    response = client.post("/api/reports", json={"description": "No title"}, headers=auth_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

def test_get_report(client, auth_headers, sample_report):
    response = client.get(f"/api/reports/{sample_report.id}", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == sample_report.title
    assert data["user_id"] == sample_report.user_id

def test_get_report_of_other_user(client, sample_report):
    response = client.get(f"/api/reports/{sample_report.id}", headers={"X-User-Id": OTHER_USER_ID})
    assert response.status_code == status.HTTP_403_FORBIDDEN

def test_get_nonexistent_report(client, auth_headers):
    response = client.get("/api/reports/99999", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND

def test_list_reports(client, auth_headers, sample_report):
    response = client.get("/api/reports", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [r["id"] for r in data] == [sample_report.id]

def test_list_reports_only_own(client, sample_report):
    response = client.get("/api/reports", headers={"X-User-Id": OTHER_USER_ID})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []

def test_update_report(client, auth_headers, sample_report):
    response = client.patch(
        f"/api/reports/{sample_report.id}",
        json={"title": "Updated Report"},
        headers=auth_headers
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["title"] == "Updated Report"
    assert data["description"] == "Test Description"

def test_update_report_without_fields(client, auth_headers, sample_report):
    response = client.patch(f"/api/reports/{sample_report.id}", json={}, headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

def test_delete_report(client, auth_headers, sample_report):
    response = client.delete(f"/api/reports/{sample_report.id}", headers=auth_headers)

    assert response.status_code == status.HTTP_204_NO_CONTENT

    get_response = client.get(f"/api/reports/{sample_report.id}", headers=auth_headers)
    assert get_response.status_code == status.HTTP_404_NOT_FOUND

def test_search_reports(client, auth_headers, sample_report):
    response = client.get("/api/reports/search", params={"q": "DESCRIPTION"}, headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert [r["id"] for r in response.json()] == [sample_report.id]

    miss = client.get("/api/reports/search", params={"q": "nothing"}, headers=auth_headers)
    assert miss.json() == []
