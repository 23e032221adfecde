"""
Name: Role Model Tests

Responsibilities:
  - Total order between roles
  - Required upward links per role
  - Tolerant role parsing
"""

import pytest

from teamtasks.domain.roles import (
    MANAGER_LINK,
    SUPERVISOR_LINK,
    UserRole,
    is_ancestor_of,
    level,
    parse_role,
    required_links,
)

pytestmark = pytest.mark.unit


def test_levels_follow_hierarchy_order():
    ordered = [
        UserRole.SUPER_ADMIN,
        UserRole.MANAGER,
        UserRole.SUPERVISOR,
        UserRole.MEMBER,
    ]
    levels = [level(role) for role in ordered]
    assert levels == sorted(levels, reverse=True)
    assert len(set(levels)) == len(levels)


@pytest.mark.parametrize(
    "upper,lower",
    [
        (UserRole.SUPER_ADMIN, UserRole.MANAGER),
        (UserRole.MANAGER, UserRole.SUPERVISOR),
        (UserRole.SUPERVISOR, UserRole.MEMBER),
        (UserRole.SUPER_ADMIN, UserRole.MEMBER),
    ],
)
def test_is_ancestor_of_is_strict(upper, lower):
    assert is_ancestor_of(upper, lower) is True
    assert is_ancestor_of(lower, upper) is False


def test_role_is_not_its_own_ancestor():
    for role in UserRole:
        assert is_ancestor_of(role, role) is False


def test_required_links_table():
    assert required_links(UserRole.SUPER_ADMIN) == frozenset()
    assert required_links(UserRole.MANAGER) == frozenset()
    assert required_links(UserRole.SUPERVISOR) == frozenset({MANAGER_LINK})
    assert required_links(UserRole.MEMBER) == frozenset(
        {SUPERVISOR_LINK, MANAGER_LINK}
    )


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("member", UserRole.MEMBER),
        ("SUPER_ADMIN", UserRole.SUPER_ADMIN),
        ("super-admin", UserRole.SUPER_ADMIN),
        (" Super Admin ", UserRole.SUPER_ADMIN),
        (UserRole.MANAGER, UserRole.MANAGER),
        ("owner", None),
        ("", None),
        (None, None),
        (3, None),
    ],
)
def test_parse_role(raw, expected):
    assert parse_role(raw) == expected
