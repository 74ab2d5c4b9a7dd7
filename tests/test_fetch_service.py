import threading

import pytest

from ats_analytics.exceptions import AggregationFailed
from ats_analytics.repositories.application_repository import ApplicationRepository
from ats_analytics.repositories.candidate_repository import CandidateRepository
from ats_analytics.repositories.interview_repository import InterviewRepository
from ats_analytics.repositories.job_repository import JobRepository
from ats_analytics.repositories.organization_repository import OrganizationRepository
from ats_analytics.services.fetch_service import BulkFetchService, fan_out


def make_fetch_service(client, timeout_seconds=None):
    return BulkFetchService(
        JobRepository(client),
        CandidateRepository(client),
        ApplicationRepository(client),
        InterviewRepository(client),
        OrganizationRepository(client),
        timeout_seconds=timeout_seconds,
    )


def test_fetches_every_collection_scoped_to_tenant(seeded_client, ctx):
    collections = make_fetch_service(seeded_client).fetch_dashboard_collections(ctx)

    assert {job.id for job in collections.jobs} == {"job-1", "job-2", "job-3"}
    assert len(collections.candidates) == 3
    assert "app-x" not in {application.id for application in collections.applications}
    assert len(collections.applications) == 4
    assert len(collections.departments) == 3
    assert len(collections.profiles) == 2

    for table_name, filters in seeded_client.executed:
        assert ("eq", "org_id", "org-1") in filters, table_name


def test_only_active_interview_statuses_are_fetched(seeded_client, ctx):
    collections = make_fetch_service(seeded_client).fetch_dashboard_collections(ctx)

    assert {interview.id for interview in collections.interviews} == {"int-1", "int-2"}


def test_empty_tables_yield_empty_collections(fake_client, ctx):
    collections = make_fetch_service(fake_client).fetch_dashboard_collections(ctx)

    assert collections.jobs == []
    assert collections.applications == []
    assert collections.profiles == []


def test_timestamps_are_parsed_as_utc(seeded_client, ctx):
    collections = make_fetch_service(seeded_client).fetch_dashboard_collections(ctx)

    created = collections.applications[0].created_at
    assert created.tzinfo is not None
    assert created.utcoffset().total_seconds() == 0


def test_single_query_failure_fails_whole_fetch(seeded_client, ctx):
    cause = RuntimeError("connection reset")
    seeded_client.failures["interviews"] = cause

    with pytest.raises(AggregationFailed) as excinfo:
        make_fetch_service(seeded_client).fetch_dashboard_collections(ctx)

    assert "interviews" in str(excinfo.value)
    assert "connection reset" in str(excinfo.value.cause)
    assert excinfo.value.__cause__ is excinfo.value.cause


def test_slow_query_times_out(seeded_client, ctx):
    seeded_client.delays["profiles"] = 0.5

    with pytest.raises(AggregationFailed) as excinfo:
        make_fetch_service(seeded_client, timeout_seconds=0.05).fetch_dashboard_collections(ctx)

    assert isinstance(excinfo.value.cause, TimeoutError)
    assert "profiles" in str(excinfo.value)


def test_invalid_row_fails_at_the_boundary(fake_client, ctx):
    fake_client.add("applications", id="app-bad", created_at="not a timestamp")

    with pytest.raises(AggregationFailed):
        make_fetch_service(fake_client).fetch_dashboard_collections(ctx)


def test_fan_out_runs_tasks_concurrently():
    barrier = threading.Barrier(3, timeout=2)

    def task(value):
        def run():
            barrier.wait()
            return value
        return run

    results = fan_out({"a": task(1), "b": task(2), "c": task(3)}, timeout_seconds=5, max_workers=3)

    assert results == {"a": 1, "b": 2, "c": 3}


def test_fan_out_with_no_tasks():
    assert fan_out({}) == {}
