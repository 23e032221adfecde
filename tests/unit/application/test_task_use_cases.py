"""
Name: Task Use Case Tests

Responsibilities:
  - Creation within the actor's reporting set
  - Field-level authorization on update (details / assignee / status)
  - completed_date + last_updated invariants through the use case
  - Visibility on get / list / permissions, and deletion
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from teamtasks.application.usecases import (
    CreateTaskInput,
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskPermissionsUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    ServiceErrorCode,
    UpdateTaskUseCase,
)
from teamtasks.domain.entities import TaskStatus, UserStatus
from teamtasks.domain.roles import UserRole
from teamtasks.domain.task_policy import UserSnapshot
from teamtasks.domain.value_objects import TaskFilter

pytestmark = pytest.mark.unit

TARGET = datetime(2024, 6, 1, 17, 0, tzinfo=timezone.utc)


def _actor(user) -> UserSnapshot:
    return UserSnapshot.from_user(user)


@pytest.fixture
def create_task(task_repo, user_repo, clock):
    use_case = CreateTaskUseCase(task_repo, user_repo, clock=clock)

    def _create(creator, assignee, **overrides):
        data = dict(
            title="Write onboarding guide",
            description="Cover local setup and review flow",
            assignee_id=assignee.id,
            target_date=TARGET,
            actor=_actor(creator),
        )
        data.update(overrides)
        return use_case.execute(CreateTaskInput(**data))

    return _create


@pytest.fixture
def update_task(task_repo, user_repo, clock):
    return UpdateTaskUseCase(task_repo, user_repo, clock=clock)


# ============================================================================
# Create
# ============================================================================


class TestCreateTask:
    def test_supervisor_assigns_to_own_member(self, org, create_task, clock):
        result = create_task(org.supervisor, org.member)

        assert result.error is None
        task = result.task
        assert task.creator_id == org.supervisor.id
        assert task.assignee_id == org.member.id
        assert task.status == TaskStatus.NOT_STARTED
        assert task.assigned_date == clock.now
        assert task.last_updated == clock.now
        assert task.completed_date is None
        assert result.refs[org.member.id].name == "Member"

    def test_supervisor_assigns_to_self(self, org, create_task):
        assert create_task(org.supervisor, org.supervisor).error is None

    def test_manager_assigns_to_supervisor(self, org, create_task):
        assert create_task(org.manager, org.supervisor).error is None

    def test_created_completed_has_completed_date(self, org, create_task, clock):
        result = create_task(org.admin, org.member, status="completed")
        assert result.task.completed_date == clock.now

    def test_member_cannot_create(self, org, create_task):
        result = create_task(org.member, org.member)
        assert result.error.code == ServiceErrorCode.FORBIDDEN

    def test_supervisor_cannot_assign_outside_team(self, org, create_task):
        result = create_task(org.supervisor, org.member2)
        assert result.error.code == ServiceErrorCode.FORBIDDEN

    def test_pending_assignee_rejected(self, org, user_factory, create_task):
        pending = user_factory.create(
            UserRole.MEMBER,
            supervisor_id=org.supervisor.id,
            manager_id=org.manager.id,
            status=UserStatus.PENDING_APPROVAL,
        )
        result = create_task(org.supervisor, pending)
        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR
        assert result.error.message == "Assignee must be an active user."

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"title": "  "}, "Title is required."),
            ({"description": ""}, "Description is required."),
            ({"target_date": None}, "Target date is required."),
            ({"status": "archived"}, "Invalid task status."),
        ],
    )
    def test_required_fields(self, org, create_task, overrides, message):
        result = create_task(org.supervisor, org.member, **overrides)
        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR
        assert result.error.message == message

    def test_unknown_assignee(self, org, task_repo, user_repo):
        use_case = CreateTaskUseCase(task_repo, user_repo)
        result = use_case.execute(
            CreateTaskInput(
                title="t",
                description="d",
                assignee_id=uuid4(),
                target_date=TARGET,
                actor=_actor(org.admin),
            )
        )
        assert result.error.code == ServiceErrorCode.NOT_FOUND

    def test_title_limit(self, org, task_repo, user_repo):
        use_case = CreateTaskUseCase(task_repo, user_repo, max_title_chars=5)
        result = use_case.execute(
            CreateTaskInput(
                title="Too long",
                description="d",
                assignee_id=org.member.id,
                target_date=TARGET,
                actor=_actor(org.admin),
            )
        )
        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR


# ============================================================================
# Update
# ============================================================================


class TestUpdateTask:
    def test_supervisor_cannot_edit_title_of_task_they_did_not_create(
        self, org, create_task, update_task
    ):
        task = create_task(org.manager, org.member).task

        result = update_task.execute(
            task.id, {"title": "Renamed"}, _actor(org.supervisor)
        )

        assert result.error.code == ServiceErrorCode.FORBIDDEN
        assert "title" in result.error.message

    def test_supervisor_changes_status_only(
        self, org, create_task, update_task, task_repo, clock
    ):
        task = create_task(org.manager, org.member).task
        clock.advance(hours=1)

        completed = update_task.execute(
            task.id, {"status": "completed"}, _actor(org.supervisor)
        )
        assert completed.error is None
        assert completed.task.status == TaskStatus.COMPLETED
        assert completed.task.completed_date == clock.now

        clock.advance(hours=1)
        reopened = update_task.execute(
            task.id, {"status": "in-progress"}, _actor(org.supervisor)
        )
        assert reopened.error is None
        assert reopened.task.completed_date is None

    def test_mixed_change_is_rejected_as_a_whole(
        self, org, create_task, update_task, task_repo
    ):
        task = create_task(org.manager, org.member).task

        result = update_task.execute(
            task.id,
            {"status": "completed", "title": "Renamed"},
            _actor(org.member),
        )

        assert result.error.code == ServiceErrorCode.FORBIDDEN
        stored = task_repo.get_task(task.id)
        assert stored.status == TaskStatus.NOT_STARTED
        assert stored.title == task.title

    def test_round_trip_then_get(
        self, org, create_task, update_task, task_repo, user_repo, clock
    ):
        task = create_task(org.supervisor, org.member).task
        before = task.last_updated
        new_target = TARGET + timedelta(days=2)

        result = update_task.execute(
            task.id,
            {
                "title": "Updated title",
                "description": "Updated description",
                "target_date": new_target,
                "remarks": "Blocked on review",
            },
            _actor(org.supervisor),
        )
        assert result.error is None

        fetched = GetTaskUseCase(task_repo, user_repo).execute(
            task.id, _actor(org.supervisor)
        )
        assert fetched.task.title == "Updated title"
        assert fetched.task.description == "Updated description"
        assert fetched.task.target_date == new_target
        assert fetched.task.remarks == "Blocked on review"
        assert fetched.task.last_updated > before

    def test_last_updated_advances_even_with_frozen_clock(
        self, org, create_task, update_task
    ):
        task = create_task(org.supervisor, org.member).task
        first = update_task.execute(
            task.id, {"remarks": "one"}, _actor(org.member)
        ).task
        second = update_task.execute(
            task.id, {"remarks": "two"}, _actor(org.member)
        ).task
        assert task.last_updated < first.last_updated < second.last_updated

    def test_no_effective_change_does_not_touch(self, org, create_task, update_task):
        task = create_task(org.supervisor, org.member).task
        result = update_task.execute(
            task.id, {"title": task.title, "status": "not-started"}, _actor(org.member)
        )
        assert result.error is None
        assert result.task.last_updated == task.last_updated

    def test_empty_update_is_invalid(self, org, create_task, update_task):
        task = create_task(org.supervisor, org.member).task
        result = update_task.execute(task.id, {}, _actor(org.supervisor))
        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_unknown_field_is_invalid(self, org, create_task, update_task):
        task = create_task(org.supervisor, org.member).task
        result = update_task.execute(
            task.id, {"creator_id": uuid4()}, _actor(org.supervisor)
        )
        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_invalid_status_value(self, org, create_task, update_task):
        task = create_task(org.supervisor, org.member).task
        result = update_task.execute(task.id, {"status": "done"}, _actor(org.member))
        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR
        assert result.error.message == "Invalid task status."

    def test_outsider_cannot_see_task(self, org, create_task, update_task):
        task = create_task(org.supervisor, org.member).task
        result = update_task.execute(
            task.id, {"status": "completed"}, _actor(org.member2)
        )
        assert result.error.code == ServiceErrorCode.FORBIDDEN
        assert result.error.message == "Access denied."

    def test_missing_task(self, org, update_task):
        result = update_task.execute(uuid4(), {"status": "completed"}, _actor(org.admin))
        assert result.error.code == ServiceErrorCode.NOT_FOUND

    def test_manager_reassigns_within_team(
        self, org, user_factory, create_task, update_task, clock
    ):
        other_member = user_factory.create(
            UserRole.MEMBER, supervisor_id=org.supervisor.id, manager_id=org.manager.id
        )
        task = create_task(org.admin, org.member).task
        clock.advance(minutes=5)

        result = update_task.execute(
            task.id, {"assignee_id": other_member.id}, _actor(org.manager)
        )

        assert result.error is None
        assert result.task.assignee_id == other_member.id
        assert result.task.assigned_date == clock.now

    def test_manager_cannot_reassign_outside_team(
        self, org, create_task, update_task
    ):
        task = create_task(org.admin, org.member).task
        result = update_task.execute(
            task.id, {"assignee_id": org.member2.id}, _actor(org.manager)
        )
        assert result.error.code == ServiceErrorCode.FORBIDDEN

    def test_reassign_to_missing_user(self, org, create_task, update_task):
        task = create_task(org.supervisor, org.member).task
        result = update_task.execute(
            task.id, {"assignee_id": uuid4()}, _actor(org.supervisor)
        )
        assert result.error.code == ServiceErrorCode.NOT_FOUND


# ============================================================================
# Read / Permissions / Delete
# ============================================================================


class TestReadAndDelete:
    def test_list_is_filtered_by_visibility(
        self, org, create_task, task_repo, user_repo
    ):
        mine = create_task(org.supervisor, org.member).task
        create_task(org.supervisor2, org.member2)

        use_case = ListTasksUseCase(task_repo, user_repo)
        assert [t.id for t in use_case.execute(None, _actor(org.member)).tasks] == [
            mine.id
        ]
        assert len(use_case.execute(None, _actor(org.admin)).tasks) == 2
        assert use_case.execute(None, _actor(org.manager2)).tasks[0].assignee_id == (
            org.member2.id
        )

    def test_list_applies_filter(self, org, create_task, task_repo, user_repo):
        create_task(org.supervisor, org.member)
        done = create_task(org.supervisor, org.supervisor, status="completed").task

        result = ListTasksUseCase(task_repo, user_repo).execute(
            TaskFilter(status=TaskStatus.COMPLETED), _actor(org.admin)
        )
        assert [t.id for t in result.tasks] == [done.id]

    def test_team_of_lists_tasks_of_the_whole_team(
        self, org, create_task, task_repo, user_repo
    ):
        for_member = create_task(org.supervisor, org.member).task
        for_supervisor = create_task(org.manager, org.supervisor).task
        create_task(org.supervisor2, org.member2)

        result = ListTasksUseCase(task_repo, user_repo).execute(
            None, _actor(org.admin), team_of_user=org.manager.id
        )

        assert result.error is None
        assert {t.id for t in result.tasks} == {for_member.id, for_supervisor.id}

    def test_team_of_another_manager_is_forbidden(self, org, task_repo, user_repo):
        result = ListTasksUseCase(task_repo, user_repo).execute(
            None, _actor(org.manager2), team_of_user=org.manager.id
        )
        assert result.error.code == ServiceErrorCode.FORBIDDEN

    def test_team_of_unknown_user(self, org, task_repo, user_repo):
        result = ListTasksUseCase(task_repo, user_repo).execute(
            None, _actor(org.admin), team_of_user=uuid4()
        )
        assert result.error.code == ServiceErrorCode.NOT_FOUND

    def test_team_of_member_is_empty(self, org, create_task, task_repo, user_repo):
        create_task(org.supervisor, org.member)
        result = ListTasksUseCase(task_repo, user_repo).execute(
            None, _actor(org.member), team_of_user=org.member.id
        )
        assert result.tasks == []

    def test_get_forbidden_for_outsider(self, org, create_task, task_repo, user_repo):
        task = create_task(org.supervisor, org.member).task
        result = GetTaskUseCase(task_repo, user_repo).execute(
            task.id, _actor(org.supervisor2)
        )
        assert result.error.code == ServiceErrorCode.FORBIDDEN

    def test_permissions_for_assignee(self, org, create_task, task_repo, user_repo):
        task = create_task(org.supervisor, org.member).task
        result = GetTaskPermissionsUseCase(task_repo, user_repo).execute(
            task.id, _actor(org.member)
        )
        assert result.error is None
        assert result.editable_fields == frozenset({"status", "remarks"})
        assert result.can_delete is False

    def test_creator_deletes(self, org, create_task, task_repo, user_repo):
        task = create_task(org.supervisor, org.member).task
        result = DeleteTaskUseCase(task_repo, user_repo).execute(
            task.id, _actor(org.supervisor)
        )
        assert result.deleted is True
        assert task_repo.get_task(task.id) is None

    def test_assignee_cannot_delete(self, org, create_task, task_repo, user_repo):
        task = create_task(org.supervisor, org.member).task
        result = DeleteTaskUseCase(task_repo, user_repo).execute(
            task.id, _actor(org.member)
        )
        assert result.error.code == ServiceErrorCode.FORBIDDEN
        assert task_repo.get_task(task.id) is not None
