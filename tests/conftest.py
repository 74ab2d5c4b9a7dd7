"""Shared fixtures: an in-memory stand-in for the Supabase query builder."""

import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from ats_analytics.models import TenantContext

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)
ORG_ID = "org-1"
OTHER_ORG_ID = "org-2"


def days_ago(days: float, now: datetime = NOW) -> datetime:
    return now - timedelta(days=days)


def iso(moment: datetime) -> str:
    return moment.isoformat()


def _at_or_after(stored: Optional[str], bound: str) -> bool:
    if stored is None:
        return False
    return datetime.fromisoformat(stored) >= datetime.fromisoformat(bound)


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data
        self.count = len(data)


class FakeQuery:
    """Supports the subset of the PostgREST builder the repositories use."""

    def __init__(self, client: "FakeSupabaseClient", table_name: str):
        self.client = client
        self.table_name = table_name
        self.filters: List[tuple] = []
        self.order_by: Optional[tuple] = None
        self.row_limit: Optional[int] = None

    def select(self, columns: str = "*", count: Optional[str] = None):
        return self

    def eq(self, column: str, value: Any):
        self.filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value: Any):
        self.filters.append(("gte", column, value))
        return self

    def in_(self, column: str, values: List[Any]):
        self.filters.append(("in", column, list(values)))
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, count: int):
        self.row_limit = count
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        for operator, column, value in self.filters:
            if operator == "eq" and row.get(column) != value:
                return False
            if operator == "in" and row.get(column) not in value:
                return False
            if operator == "gte" and not _at_or_after(row.get(column), value):
                return False
        return True

    def execute(self) -> FakeResponse:
        self.client.executed.append((self.table_name, list(self.filters)))

        delay = self.client.delays.get(self.table_name)
        if delay:
            time.sleep(delay)

        failure = self.client.failures.get(self.table_name)
        if failure is not None:
            raise failure

        rows = [dict(row) for row in self.client.tables.get(self.table_name, []) if self._matches(row)]

        if self.order_by:
            column, desc = self.order_by
            present = [row for row in rows if row.get(column) is not None]
            missing = [row for row in rows if row.get(column) is None]
            present.sort(key=lambda row: row[column], reverse=desc)
            rows = present + missing

        if self.row_limit is not None:
            rows = rows[:self.row_limit]

        return FakeResponse(rows)


class FakeSupabaseClient:
    """Holds table rows in memory; ``failures`` and ``delays`` inject faults."""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables = tables or {}
        self.failures: Dict[str, Exception] = {}
        self.delays: Dict[str, float] = {}
        self.executed: List[tuple] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def add(self, table_name: str, org_id: str = ORG_ID, **row: Any) -> Dict[str, Any]:
        record = {"org_id": org_id, **row}
        self.tables.setdefault(table_name, []).append(record)
        return record


@pytest.fixture
def ctx() -> TenantContext:
    return TenantContext(org_id=ORG_ID, user_id="user-1")


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def seeded_client() -> FakeSupabaseClient:
    """A small organization with a second tenant's rows mixed in."""
    client = FakeSupabaseClient()

    client.add("departments", id="dept-eng", name="Engineering", is_active=True)
    client.add("departments", id="dept-sales", name="Sales", is_active=True)
    client.add("departments", id="dept-old", name="Legacy", is_active=False)

    client.add("jobs", id="job-1", title="Backend Engineer", status="published",
               department_id="dept-eng", created_at=iso(days_ago(60)))
    client.add("jobs", id="job-2", title="Account Executive", status="open",
               department_id="dept-sales", created_at=iso(days_ago(50)))
    client.add("jobs", id="job-3", title="Designer", status="closed",
               department_id=None, created_at=iso(days_ago(200)))

    client.add("candidates", id="cand-1", first_name="Lina", last_name="Haddad", email="lina@example.com")
    client.add("candidates", id="cand-2", first_name="Omar", last_name="Saleh", email="omar@example.com")
    client.add("candidates", id="cand-3", first_name="Sara", last_name=None, email=None)

    client.add("applications", id="app-1", status="hired", source="linkedin", job_id="job-1",
               candidate_id="cand-1", created_at=iso(days_ago(20)), updated_at=iso(days_ago(10)))
    client.add("applications", id="app-2", status="interviewing", source="referral", job_id="job-1",
               candidate_id="cand-2", created_at=iso(days_ago(15)), updated_at=iso(days_ago(5)))
    client.add("applications", id="app-3", status="new", source=None, job_id="job-2",
               candidate_id="cand-3", created_at=iso(days_ago(3)), updated_at=iso(days_ago(3)))
    client.add("applications", id="app-4", status="rejected", source="linkedin", job_id="job-2",
               candidate_id="cand-1", created_at=iso(days_ago(45)), updated_at=iso(days_ago(40)))

    client.add("profiles", id="user-1", first_name="Nora", last_name="Aziz", email="nora@example.com",
               is_active=True, created_at=iso(days_ago(100)))
    client.add("profiles", id="user-2", first_name="Karim", last_name="Fares", email="karim@example.com",
               is_active=False, created_at=iso(days_ago(10)))

    client.add("interviews", id="int-1", interviewer_id="user-1", status="completed",
               scheduled_at=iso(days_ago(8)), application_id="app-1", title="Technical")
    client.add("interviews", id="int-2", interviewer_id="user-1", status="scheduled",
               scheduled_at=iso(days_ago(-2)), application_id="app-2", title=None)
    client.add("interviews", id="int-3", interviewer_id="user-2", status="cancelled",
               scheduled_at=iso(days_ago(4)), application_id="app-2", title="Culture")

    client.add("offers", id="offer-1", status="accepted", application_id="app-1",
               created_at=iso(days_ago(12)))
    client.add("offers", id="offer-2", status="declined", application_id="app-4",
               created_at=iso(days_ago(42)))

    # Another tenant's data must never leak in
    client.add("offers", org_id=OTHER_ORG_ID, id="offer-x", status="sent", application_id="app-x",
               created_at=iso(days_ago(1)))
    client.add("applications", org_id=OTHER_ORG_ID, id="app-x", status="hired", source="indeed",
               job_id="job-x", created_at=iso(days_ago(2)), updated_at=iso(days_ago(1)))
    client.add("jobs", org_id=OTHER_ORG_ID, id="job-x", title="Other", status="open")

    return client
