import pytest
from fastapi import status


def test_list_users_requires_hr_admin(client, employee_user, manager_user, admin_user, auth_headers):
    response = client.get("/api/admin/users", headers=auth_headers(manager_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["details"]["rule"] == "user.manage.role"

    response = client.get("/api/admin/users", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_200_OK
    emails = {u["email"] for u in response.json()}
    assert {employee_user.email, manager_user.email, admin_user.email} <= emails


def test_update_role_and_manager(client, other_employee, manager_user, admin_user, auth_headers):
    response = client.put(
        f"/api/admin/users/{other_employee.id}/role",
        headers=auth_headers(admin_user),
        json={"role": "Manager", "managerId": manager_user.id},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["role"] == "Manager"
    assert data["managerId"] == manager_user.id


def test_reassigning_manager_changes_visibility(
    client, other_employee, manager_user, admin_user, auth_headers, create_goal
):
    goal = create_goal(other_employee)
    response = client.get(f"/api/goals/{goal['id']}", headers=auth_headers(manager_user))
    assert response.status_code == status.HTTP_403_FORBIDDEN

    client.put(
        f"/api/admin/users/{other_employee.id}/role",
        headers=auth_headers(admin_user),
        json={"managerId": manager_user.id},
    )
    response = client.get(f"/api/goals/{goal['id']}", headers=auth_headers(manager_user))
    assert response.status_code == status.HTTP_200_OK


def test_user_cannot_manage_themselves(client, admin_user, auth_headers):
    response = client.put(
        f"/api/admin/users/{admin_user.id}/role",
        headers=auth_headers(admin_user),
        json={"managerId": admin_user.id},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_role_unknown_user(client, admin_user, auth_headers):
    response = client.put("/api/admin/users/9999/role", headers=auth_headers(admin_user), json={"role": "Manager"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_update_role_rejects_unknown_role(client, other_employee, admin_user, auth_headers):
    response = client.put(
        f"/api/admin/users/{other_employee.id}/role",
        headers=auth_headers(admin_user),
        json={"role": "Overlord"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_delete_user(client, other_employee, admin_user, auth_headers):
    response = client.delete(f"/api/admin/users/{other_employee.id}", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_200_OK

    response = client.delete(f"/api/admin/users/{other_employee.id}", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_stats(client, employee_user, admin_user, auth_headers, create_goal):
    create_goal(employee_user)
    response = client.get("/api/admin/stats", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["goals"] == 1
    assert data["users"] >= 3
    assert data["evaluations"] == 0


def test_user_id_out_of_range(client, admin_user, auth_headers):
    response = client.delete("/api/admin/users/99999999999999999999", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["code"] == "VALIDATION_FAILED"

    response = client.get("/api/reports/pdf/99999999999999999999", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    response = client.put("/api/notifications/99999999999999999999/read", headers=auth_headers(admin_user))
    assert response.status_code == status.HTTP_400_BAD_REQUEST
