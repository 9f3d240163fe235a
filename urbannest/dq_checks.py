# -*- coding: utf-8 -*-
"""
Standalone Data-Quality Checker for the property table

Checks:
  • property not empty
  • required fields (title, location, price) never NULL or blank
  • description within 1000 characters
  • price not negative
  • at least one listing carries an image_url

Exit codes:
  0 = OK
  1 = DQ issues found
  2 = configuration/connection error
"""

import os
import sys
from typing import List

from sqlalchemy import func, or_, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from urbannest.deps import build_engine
from urbannest.sql import property_table as p

MAX_DESCRIPTION = 1000

def _count(conn: Connection, *conds) -> int:
    stmt = select(func.count()).select_from(p)
    if conds:
        stmt = stmt.where(*conds)
    return conn.execute(stmt).scalar_one()

def collect_issues(engine: Engine) -> List[str]:
    issues = []
    with engine.connect() as conn:
        # 1) Non-empty?
        total = _count(conn)
        if not total:
            issues.append("property table is empty.")
            return issues

        # 2) Required fields (rows written outside the loader may skip its cleaning)
        for col in (p.c.title, p.c.location):
            missing = _count(conn, or_(col.is_(None), func.trim(col) == ""))
            if missing:
                issues.append(f"{missing} rows with empty {col.name}.")
        if (missing := _count(conn, p.c.price.is_(None))):
            issues.append(f"{missing} rows with NULL price.")

        # 3) Description bound
        too_long = _count(conn, func.length(p.c.description) > MAX_DESCRIPTION)
        if too_long:
            issues.append(f"{too_long} descriptions longer than {MAX_DESCRIPTION} characters.")

        # 4) Price sanity
        negative = _count(conn, p.c.price < 0)
        if negative:
            issues.append(f"{negative} rows with a negative price.")

        # 5) Image coverage
        with_img = _count(conn, p.c.image_url.is_not(None), p.c.image_url != "")
        if with_img == 0:
            issues.append("No property has an image_url.")

    return issues

def run_checks():
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        print("ERROR: Set DATABASE_URL", file=sys.stderr)
        sys.exit(2)

    engine = build_engine(database_url)
    try:
        issues = collect_issues(engine)
    except SQLAlchemyError as e:
        print(f"ERROR: DQ checks could not run: {e}", file=sys.stderr)
        sys.exit(2)
    finally:
        engine.dispose()

    # Report
    if issues:
        print("❌ Data Quality Issues Detected:")
        for i in issues:
            print(" -", i)
        sys.exit(1)
    else:
        print("✅ Data Quality Passed")
        sys.exit(0)

if __name__ == "__main__":
    run_checks()
