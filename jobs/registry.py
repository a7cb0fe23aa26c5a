"""
정적 잡 목록

프로세스 시작 시 한 번 생성되며 이후 변경되지 않습니다.
"""

from scheduler.model import JobDescriptor
from jobs import tasks
from jobs.exception import JobNotFoundError

JOBS: tuple[JobDescriptor, ...] = (
    JobDescriptor(
        name="Process Pending Payments",
        slug="process-pending-payments",
        schedule="0 1 * * *",  # 매일 01:00
        task=tasks.process_pending_payments,
        retries=3,
    ),
    JobDescriptor(
        name="Expire Inactive Subscriptions",
        slug="expire-inactive-subscriptions",
        schedule="0 2 * * *",  # 매일 02:00
        task=tasks.expire_inactive_subscriptions,
    ),
    JobDescriptor(
        name="Assign Support Agents to New Cases",
        slug="assign-support-agents",
        schedule="0 0,6,12,18 * * *",  # 6시간마다
        task=tasks.assign_support_agents,
        retries=2,
    ),
    JobDescriptor(
        name="Generate Daily Reports",
        slug="generate-daily-reports",
        schedule="30 3 * * *",  # 매일 03:30
        task=tasks.generate_daily_reports,
    ),
    JobDescriptor(
        name="Update User Status",
        slug="update-user-status",
        schedule="30 0,12 * * *",  # 12시간마다
        task=tasks.update_user_status,
        retries=3,
    ),
    JobDescriptor(
        name="Sync External Data Sources",
        slug="sync-external-data",
        schedule="0 4 * * *",  # 매일 04:00
        task=tasks.sync_external_data,
    ),
    JobDescriptor(
        name="Clear Old Logs and Cache",
        slug="clear-old-logs",
        schedule="0 5 * * *",  # 매일 05:00
        task=tasks.clear_old_logs,
    ),
)


def get_job(slug: str, jobs: tuple[JobDescriptor, ...] = JOBS) -> JobDescriptor:
    """slug로 잡 조회"""
    for job in jobs:
        if job.slug == slug:
            return job
    raise JobNotFoundError(slug)
