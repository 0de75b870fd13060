import csv
import io

import pytest
from fastapi import status


def test_csv_export(client, employee_user, manager_user, admin_user, auth_headers, create_goal):
    goal = create_goal(employee_user, title="Write docs")
    client.put(
        f"/api/goals/{goal['id']}/review",
        headers=auth_headers(manager_user),
        json={"status": "Approved", "achievementRating": 4, "managerFeedback": "Good"},
    )
    client.post(
        "/api/evaluations/manager-review",
        headers=auth_headers(manager_user),
        json={"userId": employee_user.id, "reviewPeriod": "2026-H1", "overallScore": 3.5},
    )

    response = client.get("/api/reports/export/csv", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["Employee", "Department", "Goal Title", "Status", "Achievement Rating", "Overall Evaluation Score"]
    assert rows[1] == ["Alice", "Engineering", "Write docs", "Approved", "4", "3.50"]


def test_csv_export_requires_hr_admin(client, manager_user, auth_headers):
    response = client.get("/api/reports/export/csv", headers=auth_headers(manager_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_own_pdf_report(client, employee_user, auth_headers, create_goal):
    create_goal(employee_user)
    response = client.get(f"/api/reports/pdf/{employee_user.id}", headers=auth_headers(employee_user))
    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


def test_pdf_report_of_someone_else(client, employee_user, manager_user, admin_user, auth_headers):
    response = client.get(f"/api/reports/pdf/{employee_user.id}", headers=auth_headers(manager_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN

    response = client.get(f"/api/reports/pdf/{employee_user.id}", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_200_OK


def test_pdf_report_unknown_user(client, admin_user, auth_headers):
    response = client.get("/api/reports/pdf/9999", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_404_NOT_FOUND
