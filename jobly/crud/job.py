"""
CRUD operations for jobs.

Each operation issues a single parameterized statement through run_query
and returns plain dict records shaped
{id, title, salary, equity, companyHandle}.
"""

import logging
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.orm import Session

from jobly.core.database import run_query
from jobly.core.errors import BadRequestError, NotFoundError
from jobly.core.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

# Updatable record field -> physical column
JOB_COLUMNS: Mapping[str, str] = MappingProxyType({
    "title": "title",
    "salary": "salary",
    "equity": "equity",
})

# Set at creation, never changed by update
IMMUTABLE_FIELDS = frozenset({"id", "companyHandle"})

JOB_RETURNING = 'id, title, salary, equity, company_handle AS "companyHandle"'


def _to_record(row: Dict[str, Any]) -> Dict[str, Any]:
    """Equity is exposed as a plain decimal string (no exponent) whatever the driver returns."""
    record = dict(row)
    if record.get("equity") is not None:
        record["equity"] = format(Decimal(str(record["equity"])), "f")
    return record


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job and return it with its assigned id.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}; salary and equity optional

    Returns:
        The new job record
    """
    rows = run_query(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_RETURNING}""",
        [data["title"], data.get("salary"), data.get("equity"), data["companyHandle"]],
    )
    db.commit()

    job = _to_record(rows[0])
    logger.info(f"Created job {job['id']}: {job['title']} ({job['companyHandle']})")
    return job


def find_all(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
) -> List[Dict[str, Any]]:
    """
    Find jobs, optionally filtered, ordered by title.

    Args:
        db: Database session
        title: Case-insensitive substring of the title
        min_salary: Inclusive salary lower bound
        has_equity: When True, only jobs with equity > 0

    Returns:
        List of job records (empty when nothing matches)
    """
    where_parts = []
    values: List[Any] = []

    if title:
        values.append(f"%{title}%")
        where_parts.append(f"lower(title) LIKE lower(${len(values)})")
    if min_salary is not None:
        values.append(min_salary)
        where_parts.append(f"salary >= ${len(values)}")
    if has_equity is True:
        where_parts.append("equity > 0")

    where_clause = f"WHERE {' AND '.join(where_parts)}" if where_parts else ""

    rows = run_query(
        db,
        f"""SELECT {JOB_RETURNING}
            FROM jobs
            {where_clause}
            ORDER BY title""",
        values,
    )
    return [_to_record(row) for row in rows]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no job has this id
    """
    rows = run_query(
        db,
        f"""SELECT {JOB_RETURNING}
            FROM jobs
            WHERE id = $1""",
        [job_id],
    )
    if not rows:
        raise NotFoundError(f"No job: {job_id}")
    return _to_record(rows[0])


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Apply a partial update to a job.

    Only title, salary and equity may change; fields not in `data` are
    left untouched.

    Raises:
        BadRequestError: If data is empty or names id, companyHandle or an
            unknown field
        NotFoundError: If no job has this id
    """
    immutable = IMMUTABLE_FIELDS.intersection(data)
    if immutable:
        raise BadRequestError(f"Cannot update: {', '.join(sorted(immutable))}")
    unknown = [field for field in data if field not in JOB_COLUMNS]
    if unknown:
        raise BadRequestError(f"Unknown fields: {', '.join(unknown)}")

    set_cols, values = sql_for_partial_update(data, JOB_COLUMNS)
    id_idx = f"${len(values) + 1}"

    rows = run_query(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE id = {id_idx}
            RETURNING {JOB_RETURNING}""",
        [*values, job_id],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")
    db.commit()

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return _to_record(rows[0])


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no job has this id
    """
    rows = run_query(
        db,
        """DELETE FROM jobs
           WHERE id = $1
           RETURNING id""",
        [job_id],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")
    db.commit()

    logger.info(f"Deleted job {job_id}")
