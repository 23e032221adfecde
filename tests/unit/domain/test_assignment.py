"""
Name: Hierarchy Assignment Validator Tests

Responsibilities:
  - Required links per role (messages are part of the contract)
  - Link targets must be active users of the expected role
  - Self-references are rejected
"""

from uuid import uuid4

import pytest

from teamtasks.domain.assignment import (
    INVALID_MANAGER,
    INVALID_ROLE,
    INVALID_SUPERVISOR,
    MEMBER_LINKS_REQUIRED,
    SELF_REFERENCE,
    SUPERVISOR_MANAGER_REQUIRED,
    TEAM_STILL_LINKED,
    check_role_change,
    validate_assignment,
)
from teamtasks.domain.entities import UserStatus
from teamtasks.domain.roles import UserRole

pytestmark = pytest.mark.unit


def test_member_with_both_links_is_valid(org, user_repo):
    check = validate_assignment(
        "member", org.supervisor.id, org.manager.id, users=user_repo
    )
    assert check.valid is True
    assert check.role == UserRole.MEMBER
    assert check.error is None


def test_member_without_supervisor_fails_with_exact_message(org, user_repo):
    check = validate_assignment("member", None, org.manager.id, users=user_repo)
    assert check.valid is False
    assert check.error == "Team members must have both a supervisor and manager assigned"
    assert check.error == MEMBER_LINKS_REQUIRED


def test_member_without_manager_fails(org, user_repo):
    check = validate_assignment("member", org.supervisor.id, None, users=user_repo)
    assert check.error == MEMBER_LINKS_REQUIRED


def test_supervisor_requires_manager(user_repo):
    check = validate_assignment(UserRole.SUPERVISOR, users=user_repo)
    assert check.valid is False
    assert check.error == SUPERVISOR_MANAGER_REQUIRED


def test_supervisor_ignores_supervisor_link(org, user_repo):
    check = validate_assignment(
        "supervisor", uuid4(), org.manager.id, users=user_repo
    )
    assert check.valid is True


@pytest.mark.parametrize("role", ["manager", "super_admin"])
def test_top_roles_need_no_links(role, user_repo):
    check = validate_assignment(role, uuid4(), uuid4(), users=user_repo)
    assert check.valid is True


def test_unknown_role(user_repo):
    check = validate_assignment("owner", users=user_repo)
    assert check.valid is False
    assert check.error == INVALID_ROLE


def test_supervisor_link_must_point_to_a_supervisor(org, user_repo):
    check = validate_assignment(
        "member", org.manager2.id, org.manager.id, users=user_repo
    )
    assert check.error == INVALID_SUPERVISOR


def test_manager_link_must_point_to_a_manager(org, user_repo):
    check = validate_assignment(
        "member", org.supervisor.id, org.supervisor2.id, users=user_repo
    )
    assert check.error == INVALID_MANAGER


def test_link_to_missing_user(org, user_repo):
    check = validate_assignment("member", uuid4(), org.manager.id, users=user_repo)
    assert check.error == INVALID_SUPERVISOR


def test_link_to_pending_user(org, user_factory, user_repo):
    pending_manager = user_factory.create(
        UserRole.MANAGER, status=UserStatus.PENDING_APPROVAL
    )
    check = validate_assignment("supervisor", None, pending_manager.id, users=user_repo)
    assert check.error == INVALID_MANAGER


def test_self_reference_rejected(org, user_repo):
    check = validate_assignment(
        "supervisor",
        None,
        org.manager.id,
        users=user_repo,
        subject_id=org.manager.id,
    )
    assert check.valid is False
    assert check.error == SELF_REFERENCE


def test_role_change_with_reports_linked(org, user_repo):
    everyone = user_repo.list_users()

    to_manager = check_role_change(org.supervisor.id, UserRole.MANAGER, everyone)
    to_supervisor = check_role_change(org.manager.id, UserRole.SUPERVISOR, everyone)

    assert to_manager.error == TEAM_STILL_LINKED
    assert to_supervisor.error == TEAM_STILL_LINKED


def test_role_change_without_reports(org, user_repo):
    check = check_role_change(org.member.id, UserRole.MANAGER, user_repo.list_users())
    assert check.valid is True
    assert check.role == UserRole.MANAGER
