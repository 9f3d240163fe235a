"""Tests for the data-quality checker"""
import pytest
from sqlalchemy import text

from urbannest import dq_checks


def test_empty_table_flagged(engine):
    assert dq_checks.collect_issues(engine) == ["property table is empty."]


def test_clean_data_passes(engine, brooklyn_manhattan):
    assert dq_checks.collect_issues(engine) == []


def test_problems_reported(engine, seed, make_row):
    seed(
        make_row("Ok", "Brooklyn", "10"),
        make_row("   ", "Queens", "10"),
        make_row("Cheap", "Bronx", "-1"),
    )
    # bypass the column type to write an over-long description
    with engine.begin() as conn:
        conn.execute(text("UPDATE property SET description = :d WHERE id = 1"), {"d": "x" * 1001})

    issues = dq_checks.collect_issues(engine)
    assert "1 rows with empty title." in issues
    assert "1 descriptions longer than 1000 characters." in issues
    assert "1 rows with a negative price." in issues
    assert "No property has an image_url." in issues


def test_run_checks_exit_codes(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(SystemExit) as exc:
        dq_checks.run_checks()
    assert exc.value.code == 2
