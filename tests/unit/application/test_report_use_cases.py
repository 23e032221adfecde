"""
Name: Report Use Case Tests

Responsibilities:
  - Period boundary selection (weekly report generated on a Wednesday)
  - Frozen task snapshot + status counts
  - Listing / fetching stored reports
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4
from zoneinfo import ZoneInfo

import pytest

from teamtasks.application.usecases import (
    GenerateReportUseCase,
    GetReportUseCase,
    ListReportsUseCase,
    ServiceErrorCode,
)
from teamtasks.application.usecases.reports.generate_report import summarize
from teamtasks.domain.entities import ReportType, Task, TaskStatus
from teamtasks.domain.task_policy import UserSnapshot

pytestmark = pytest.mark.unit


def _store_task(task_repo, *, last_updated, status=TaskStatus.NOT_STARTED, target=None):
    task = Task(
        id=uuid4(),
        title="t",
        description="d",
        assignee_id=uuid4(),
        target_date=target or last_updated + timedelta(days=30),
        status=status,
        last_updated=last_updated,
    )
    return task_repo.create_task(task)


@pytest.fixture
def generate(report_repo, task_repo, clock):
    return GenerateReportUseCase(report_repo, task_repo, clock=clock)


def test_weekly_report_on_wednesday_uses_sunday_boundary(org, generate, task_repo, clock):
    # clock: Wednesday 2024-05-15 10:30 UTC -> boundary Sunday 2024-05-12 00:00
    boundary = datetime(2024, 5, 12, tzinfo=timezone.utc)
    on_boundary = _store_task(task_repo, last_updated=boundary)
    monday = _store_task(task_repo, last_updated=boundary + timedelta(days=1))
    _store_task(task_repo, last_updated=boundary - timedelta(microseconds=1))
    _store_task(task_repo, last_updated=boundary - timedelta(days=3))

    result = generate.execute("Week 20", "weekly", UserSnapshot.from_user(org.member))

    assert result.error is None
    report = result.report
    assert report.type == ReportType.WEEKLY
    assert report.period_start == boundary
    assert set(report.task_ids) == {on_boundary.id, monday.id}
    assert report.created_by == org.member.id
    assert report.generated_at == clock.now


def test_report_snapshot_is_frozen(org, generate, task_repo, report_repo, clock):
    task = _store_task(task_repo, last_updated=clock.now - timedelta(hours=1))
    report = generate.execute(
        "Today", ReportType.DAILY, UserSnapshot.from_user(org.admin)
    ).report

    _store_task(task_repo, last_updated=clock.now)
    task_repo.delete_task(task.id)

    stored = report_repo.get_report(report.id)
    assert stored.task_ids == (task.id,)
    assert stored.summary.total == 1


def test_summary_counts(clock):
    now = clock.now
    tasks = [
        Task(
            id=uuid4(),
            title="a",
            description="d",
            assignee_id=uuid4(),
            target_date=now - timedelta(days=1),
            status=TaskStatus.IN_PROGRESS,
        ),
        Task(
            id=uuid4(),
            title="b",
            description="d",
            assignee_id=uuid4(),
            target_date=now - timedelta(days=1),
            status=TaskStatus.COMPLETED,
        ),
        Task(
            id=uuid4(),
            title="c",
            description="d",
            assignee_id=uuid4(),
            target_date=now + timedelta(days=1),
        ),
    ]
    summary = summarize(tasks, now)
    assert summary.total == 3
    assert summary.completed == 1
    assert summary.in_progress == 1
    assert summary.not_started == 1
    assert summary.overdue == 1


def test_report_uses_local_zone(org, report_repo, task_repo, clock):
    zone = ZoneInfo("America/Argentina/Buenos_Aires")
    # 2024-05-16 01:00 UTC is still 2024-05-15 22:00 in Buenos Aires
    clock.now = datetime(2024, 5, 16, 1, 0, tzinfo=timezone.utc)
    use_case = GenerateReportUseCase(report_repo, task_repo, zone=zone, clock=clock)

    report = use_case.execute("Daily", "daily", UserSnapshot.from_user(org.admin)).report
    assert report.period_start == datetime(2024, 5, 15, tzinfo=zone)


@pytest.mark.parametrize(
    "title,report_type",
    [("", "weekly"), ("   ", "daily"), ("Q2", "yearly")],
)
def test_invalid_input(org, generate, title, report_type):
    result = generate.execute(title, report_type, UserSnapshot.from_user(org.admin))
    assert result.error.code == ServiceErrorCode.VALIDATION_ERROR


def test_missing_actor_is_forbidden(generate):
    result = generate.execute("Week", "weekly", None)
    assert result.error.code == ServiceErrorCode.FORBIDDEN


def test_list_and_get_reports(org, generate, report_repo, clock):
    actor = UserSnapshot.from_user(org.admin)
    first = generate.execute("First", "daily", actor).report
    clock.advance(minutes=1)
    second = generate.execute("Second", "monthly", actor).report

    listed = ListReportsUseCase(report_repo).execute().reports
    assert [r.id for r in listed] == [second.id, first.id]

    assert GetReportUseCase(report_repo).execute(first.id).report.title == "First"
    missing = GetReportUseCase(report_repo).execute(uuid4())
    assert missing.error.code == ServiceErrorCode.NOT_FOUND
