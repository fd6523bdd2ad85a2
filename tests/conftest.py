"""
Shared test fixtures.

Provides an in-memory mock of the Supabase query builder and patched
service singletons for route tests.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings require Supabase credentials at import time
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from collections import defaultdict
from contextlib import ExitStack
from unittest.mock import patch
from datetime import datetime
from typing import Generator
from uuid import uuid4

# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data=None, count: int = None):
        self.data = data if data is not None else []
        self.count = count


class MockSupabaseQuery:
    """Mock Supabase query builder with chainable methods."""

    def __init__(self, client: "MockSupabaseClient", table_name: str, data: list = None, count: int = None):
        self._client = client
        self._table_name = table_name
        self._data = [dict(row) for row in (data or [])]
        self._count = count
        self._is_single = False
        self._operation = "select"

    def select(self, *args, **kwargs):
        return self

    def insert(self, data):
        # Simulate insert - add id and timestamps
        self._operation = "insert"
        rows = [data] if isinstance(data, dict) else data
        now = datetime.utcnow().isoformat() + "Z"
        inserted = []
        for item in rows:
            row = dict(item)
            row.setdefault("id", str(uuid4()))
            row.setdefault("created_at", now)
            row.setdefault("updated_at", now)
            inserted.append(row)
        self._data = inserted
        self._count = None
        return self

    def update(self, data):
        # Simulate update - merge into existing rows, narrowed later by eq()
        self._operation = "update"
        now = datetime.utcnow().isoformat() + "Z"
        self._data = [{**row, **data, "updated_at": now} for row in self._data]
        return self

    def delete(self):
        self._operation = "delete"
        return self

    def eq(self, column, value):
        self._data = [row for row in self._data if row.get(column) == value]
        return self

    def neq(self, column, value):
        self._data = [row for row in self._data if row.get(column) != value]
        return self

    def in_(self, column, values):
        self._data = [row for row in self._data if row.get(column) in values]
        return self

    def single(self):
        self._is_single = True
        return self

    def order(self, column, desc: bool = False, **kwargs):
        # Nulls sort last
        self._data.sort(
            key=lambda row: (row.get(column) is None, row.get(column) if row.get(column) is not None else 0),
            reverse=desc
        )
        return self

    def range(self, start, end):
        self._data = self._data[start:end + 1]
        return self

    def limit(self, count):
        self._data = self._data[:count]
        return self

    def execute(self) -> MockSupabaseResponse:
        error = self._client.failure_for(self._table_name, self._operation)
        if error:
            raise Exception(error)

        self._client.record(self._table_name, self._operation, self._data)

        if self._is_single:
            # Return first item or None for single()
            data = self._data[0] if self._data else None
            return MockSupabaseResponse(data=data, count=1 if data else 0)

        count = self._count if self._count is not None else len(self._data)
        return MockSupabaseResponse(data=self._data, count=count)


class MockSupabaseTable:
    """Mock Supabase table with configurable responses."""

    def __init__(self, client: "MockSupabaseClient", name: str, data: list, count: int = None):
        self._client = client
        self._name = name
        self._data = data
        self._count = count

    def _query(self) -> MockSupabaseQuery:
        return MockSupabaseQuery(self._client, self._name, self._data, self._count)

    def select(self, *args, **kwargs):
        return self._query()

    def insert(self, data):
        return self._query().insert(data)

    def update(self, data):
        return self._query().update(data)

    def delete(self):
        return self._query().delete()


class MockSupabaseClient:
    """
    Mock Supabase client.

    Table data is static: writes are recorded in inserted/updated/deleted
    but never change what later selects return.
    """

    def __init__(self):
        self._tables = {}
        self._failures = {}
        self.inserted = defaultdict(list)
        self.updated = defaultdict(list)
        self.deleted = defaultdict(list)

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure mock data for a table."""
        self._tables[table_name] = {"data": data, "count": count}

    def fail_on(self, table_name: str, operation: str, message: str = "database unavailable"):
        """Make every <operation> on <table_name> raise."""
        self._failures[(table_name, operation)] = message

    def failure_for(self, table_name: str, operation: str):
        return self._failures.get((table_name, operation))

    def record(self, table_name: str, operation: str, rows: list):
        if operation == "insert":
            self.inserted[table_name].extend(rows)
        elif operation == "update":
            self.updated[table_name].extend(rows)
        elif operation == "delete":
            self.deleted[table_name].extend(rows)

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        config = self._tables.get(name, {"data": [], "count": None})
        return MockSupabaseTable(self, name, config["data"], config["count"])


# ===================
# FIXTURES
# ===================

SERVICE_MODULES = (
    "services.product_service",
    "services.variant_service",
    "services.category_service",
)


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("products", [
                {"id": "1", "name": "Glass Cleaner", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with mock.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("products", [...])
            # Now any service using get_supabase_client() gets the mock
    """
    with ExitStack() as stack:
        stack.enter_context(patch("config.database.get_supabase_client", return_value=mock_supabase))
        for module in SERVICE_MODULES:
            stack.enter_context(patch(f"{module}.get_supabase_client", return_value=mock_supabase))
        yield mock_supabase


@pytest.fixture
def sample_product_data() -> dict:
    """Sample product data for testing."""
    return {
        "id": "test-uuid-123",
        "name": "Glass Cleaner",
        "description": "Streak-free glass cleaner",
        "category_id": "cat-cleaners",
        "product_code": "GLASS-CLEANER",
        "status": "active",
        "featured": False,
        "image_url": None,
        "created_at": "2025-06-01T10:00:00Z",
        "updated_at": "2025-06-01T10:00:00Z"
    }


@pytest.fixture
def sample_bulk_text() -> str:
    """Pasted spreadsheet rows in Name<TAB>Price form."""
    return "\n".join([
        "Glass Cleaner 500ml\t39.90",
        "Glass Cleaner 1L\t64.90",
        "Orange Foam Pad 6Inch (Heavy Cut)\t89.00",
        "Lambswool Pad 150mm\t120.00",
        "Mystery Item\t10.00",
    ])


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_db(mock_supabase):
    """
    Create FastAPI test client with mocked database.

    Service singletons are reset so every test gets services bound to
    its own mock.

    Usage:
        def test_endpoint(test_client_with_mock_db, mock_supabase):
            mock_supabase.set_table_data("products", [...])
            response = test_client_with_mock_db.get("/api/products")
    """
    from fastapi.testclient import TestClient
    from main import app

    with ExitStack() as stack:
        stack.enter_context(patch("config.database.get_supabase_client", return_value=mock_supabase))
        for module in SERVICE_MODULES:
            stack.enter_context(patch(f"{module}.get_supabase_client", return_value=mock_supabase))
        stack.enter_context(patch("services.product_service._product_service", None))
        stack.enter_context(patch("services.variant_service._variant_service", None))
        stack.enter_context(patch("services.category_service._category_service", None))
        stack.enter_context(patch("services.bulk_import_service._bulk_import_service", None))
        stack.enter_context(patch("services.bulk_import_service.get_admin_client", return_value=mock_supabase))
        yield TestClient(app)
