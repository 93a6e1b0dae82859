"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest

from familyledger.core.config import reload_config
from familyledger.core.models import TransactionRecord
from tests.fixtures.synthetic_data import make_row


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_rows() -> list[dict[str, Any]]:
    """Two months of family transactions across two members."""
    return [
        make_row("inc-jan", "Income", "3000.00", "2024-01-05", [("ana", "1500.00"), ("luis", "1500.00")],
                 declared_month="2024-01", category_id="cat-salary", category_name="Salary"),
        make_row("exp-jan-food", "Expense", "400.00", "2024-01-10", [("ana", "200.00"), ("luis", "200.00")],
                 declared_month="2024-01", category_id="cat-food", category_name="Food",
                 subcategory_id="sub-groceries", subcategory_name="Groceries", comment="Weekly market"),
        make_row("exp-jan-home", "Expense", "1000.00", "2024-01-01", [("ana", "500.00"), ("luis", "500.00")],
                 declared_month="2024-01", category_id="cat-home", category_name="Home",
                 subcategory_id="sub-rent", subcategory_name="Rent", tag_id="tag-fixed", tag_name="Fixed"),
        make_row("inc-feb", "Income", "3200.00", "2024-02-05", [("ana", "1600.00"), ("luis", "1600.00")],
                 declared_month="2024-02", category_id="cat-salary", category_name="Salary"),
        make_row("exp-feb-food", "Expense", "600.00", "2024-02-12", [("ana", "600.00")],
                 declared_month="2024-02", category_id="cat-food", category_name="Food",
                 subcategory_id="sub-restaurants", subcategory_name="Restaurants", comment="Birthday dinner"),
        make_row("exp-feb-home", "Expense", "1000.00", "2024-01-31", [("ana", "500.00"), ("luis", "500.00")],
                 declared_month="2024-02", category_id="cat-home", category_name="Home",
                 subcategory_id="sub-rent", subcategory_name="Rent", tag_id="tag-fixed", tag_name="Fixed"),
    ]


@pytest.fixture
def sample_records(sample_rows) -> list[TransactionRecord]:
    """Sample rows parsed into TransactionRecords."""
    return [TransactionRecord.from_dict(row) for row in sample_rows]


@pytest.fixture
def transactions_file(temp_dir, sample_rows) -> Path:
    """Sample rows written as a JSON export."""
    path = temp_dir / "transactions.json"
    path.write_text(json.dumps({"transactions": sample_rows}), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't use real ledger data
    monkeypatch.setenv("LEDGER_ENV", "test")
    monkeypatch.setenv("LEDGER_DATA_DIR", str(tmp_path / "ledger_data"))
    monkeypatch.delenv("LEDGER_TRANSACTIONS_FILE", raising=False)
    monkeypatch.delenv("LEDGER_TOP_N", raising=False)
    monkeypatch.delenv("LEDGER_CURRENCY_SYMBOL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    reload_config()


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "split: Tests for transaction split allocation")
    config.addinivalue_line("markers", "analysis: Tests for aggregation and comparison")
    config.addinivalue_line("markers", "cli: Tests for command-line interface")
