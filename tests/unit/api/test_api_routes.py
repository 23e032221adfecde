"""
Name: /v1 API Tests

Responsibilities:
  - Users: approval flow, self-deletion guard
  - Tasks: per-field authorization surfaced as RFC7807 errors
  - Reports: generation + listing
  - Health endpoints and request-id propagation
"""

import pytest

pytestmark = pytest.mark.unit

FUTURE = "2099-01-01T00:00:00Z"


def _create_task(client, headers, assignee_id, **overrides):
    payload = {
        "title": "Prepare release",
        "description": "Cut the branch and tag it",
        "assignee_id": str(assignee_id),
        "target_date": FUTURE,
    }
    payload.update(overrides)
    return client.post("/v1/tasks", json=payload, headers=headers)


# ============================================================================
# Users
# ============================================================================


class TestUsersApi:
    def test_admin_approves_pending_member(self, client, org, user_factory, auth_headers):
        pending = user_factory.pending(name="Newcomer")

        res = client.post(
            f"/v1/users/{pending.id}/approve",
            json={
                "role": "member",
                "supervisor_id": str(org.supervisor.id),
                "manager_id": str(org.manager.id),
            },
            headers=auth_headers(org.admin),
        )

        assert res.status_code == 200
        body = res.json()
        assert body["status"] == "active"
        assert body["supervisor"]["id"] == str(org.supervisor.id)

    def test_approve_member_without_manager(self, client, org, user_factory, auth_headers):
        pending = user_factory.pending()

        res = client.post(
            f"/v1/users/{pending.id}/approve",
            json={"role": "member", "supervisor_id": str(org.supervisor.id)},
            headers=auth_headers(org.admin),
        )

        assert res.status_code == 422
        body = res.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["detail"] == (
            "Team members must have both a supervisor and manager assigned"
        )

    def test_manager_cannot_approve(self, client, org, user_factory, auth_headers):
        pending = user_factory.pending()

        res = client.post(
            f"/v1/users/{pending.id}/approve",
            json={"role": "supervisor", "manager_id": str(org.manager.id)},
            headers=auth_headers(org.manager),
        )

        assert res.status_code == 403

    def test_admin_cannot_delete_self(self, client, org, auth_headers):
        res = client.delete(
            f"/v1/users/{org.admin.id}", headers=auth_headers(org.admin)
        )

        assert res.status_code == 403
        assert res.json()["detail"] == "You cannot delete your own account."

    def test_requires_authentication(self, client):
        res = client.get("/v1/users")
        assert res.status_code == 401


# ============================================================================
# Tasks
# ============================================================================


class TestTasksApi:
    def test_supervisor_can_update_status_but_not_details(
        self, client, org, auth_headers
    ):
        created = _create_task(client, auth_headers(org.manager), org.member.id)
        assert created.status_code == 201
        task_id = created.json()["id"]
        assert created.json()["creator"]["name"] == "Manager"

        supervisor = auth_headers(org.supervisor)
        denied = client.patch(
            f"/v1/tasks/{task_id}", json={"title": "Renamed"}, headers=supervisor
        )
        assert denied.status_code == 403
        assert denied.headers["content-type"].startswith("application/problem+json")
        assert denied.json()["code"] == "FORBIDDEN"

        allowed = client.patch(
            f"/v1/tasks/{task_id}",
            json={"status": "in-progress", "remarks": "on it"},
            headers=supervisor,
        )
        assert allowed.status_code == 200
        assert allowed.json()["status"] == "in-progress"
        assert allowed.json()["title"] == "Prepare release"

    def test_permissions_endpoint(self, client, org, auth_headers):
        task_id = _create_task(client, auth_headers(org.manager), org.member.id).json()[
            "id"
        ]

        res = client.get(
            f"/v1/tasks/{task_id}/permissions", headers=auth_headers(org.supervisor)
        )

        assert res.status_code == 200
        assert res.json() == {
            "task_id": task_id,
            "editable_fields": ["remarks", "status"],
            "can_delete": False,
        }

    def test_other_team_cannot_view(self, client, org, auth_headers):
        task_id = _create_task(client, auth_headers(org.manager), org.member.id).json()[
            "id"
        ]

        res = client.get(f"/v1/tasks/{task_id}", headers=auth_headers(org.member2))
        assert res.status_code == 403

    def test_member_cannot_create(self, client, org, auth_headers):
        res = _create_task(client, auth_headers(org.member), org.member.id)
        assert res.status_code == 403

    def test_unknown_task(self, client, org, auth_headers):
        res = client.get(
            "/v1/tasks/00000000-0000-0000-0000-000000000000",
            headers=auth_headers(org.admin),
        )
        assert res.status_code == 404
        assert res.json()["code"] == "NOT_FOUND"

    def test_creator_deletes(self, client, org, auth_headers):
        headers = auth_headers(org.manager)
        task_id = _create_task(client, headers, org.member.id).json()["id"]

        res = client.delete(f"/v1/tasks/{task_id}", headers=headers)

        assert res.status_code == 200
        assert res.json() == {"task_id": task_id, "deleted": True}

    def test_list_is_filtered_by_visibility(self, client, org, auth_headers):
        _create_task(client, auth_headers(org.manager), org.member.id)
        _create_task(client, auth_headers(org.manager2), org.member2.id)

        res = client.get("/v1/tasks", headers=auth_headers(org.member))

        assert res.status_code == 200
        tasks = res.json()["tasks"]
        assert [t["assignee_id"] for t in tasks] == [str(org.member.id)]

    def test_team_of_query(self, client, org, auth_headers):
        _create_task(client, auth_headers(org.manager), org.member.id)
        _create_task(client, auth_headers(org.manager2), org.member2.id)

        res = client.get(
            "/v1/tasks",
            params={"team_of": str(org.supervisor2.id)},
            headers=auth_headers(org.admin),
        )
        denied = client.get(
            "/v1/tasks",
            params={"team_of": str(org.supervisor2.id)},
            headers=auth_headers(org.manager),
        )

        assert res.status_code == 200
        assert [t["assignee_id"] for t in res.json()["tasks"]] == [str(org.member2.id)]
        assert denied.status_code == 403

    def test_request_validation_is_422(self, client, org, auth_headers):
        res = client.post(
            "/v1/tasks", json={"title": "x"}, headers=auth_headers(org.manager)
        )
        assert res.status_code == 422


# ============================================================================
# Reports
# ============================================================================


class TestReportsApi:
    def test_generate_and_list(self, client, org, auth_headers):
        _create_task(client, auth_headers(org.manager), org.member.id)
        headers = auth_headers(org.member)

        res = client.post(
            "/v1/reports", json={"title": "Today", "type": "daily"}, headers=headers
        )

        assert res.status_code == 201
        report = res.json()
        assert report["type"] == "daily"
        assert report["summary"]["total"] == 1
        assert len(report["task_ids"]) == 1

        listed = client.get("/v1/reports", headers=headers).json()["reports"]
        assert [r["id"] for r in listed] == [report["id"]]

    def test_invalid_type(self, client, org, auth_headers):
        res = client.post(
            "/v1/reports",
            json={"title": "Year", "type": "yearly"},
            headers=auth_headers(org.admin),
        )
        assert res.status_code == 422


# ============================================================================
# Health
# ============================================================================


def test_healthz(client):
    res = client.get("/healthz", headers={"X-Request-Id": "req-123"})

    assert res.status_code == 200
    assert res.json() == {"ok": True, "db": "connected", "request_id": "req-123"}
    assert res.headers["X-Request-Id"] == "req-123"


def test_readyz(client):
    res = client.get("/readyz")
    assert res.status_code == 200
    assert res.json()["ok"] is True


def test_readyz_reports_unreachable_storage(client, monkeypatch):
    from teamtasks.api import main
    from teamtasks.crosscutting.exceptions import DatabaseError

    class _DownRepo:
        def ping(self):
            raise DatabaseError("connection refused")

    monkeypatch.setattr(main, "get_user_repository", lambda: _DownRepo())

    ready = client.get("/readyz")
    live = client.get("/healthz")

    assert ready.status_code == 503
    assert ready.json()["db"] == "disconnected"
    assert live.status_code == 200
    assert live.json()["ok"] is False
