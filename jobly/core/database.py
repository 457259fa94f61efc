import re
from typing import Any, Dict, List, Sequence, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from jobly.core.config import settings

# Positional placeholders ($1, $2, ...) as emitted by jobly.core.sql
POSITIONAL_PARAM = re.compile(r"\$(\d+)")

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Initialize database.

    Imports the models so they register on Base.metadata, then creates
    any missing tables.
    """
    from jobly.models import company, job, user  # Import models to register them
    Base.metadata.create_all(bind=engine)


def bind_positional(sql: str, values: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite `$n` placeholders into SQLAlchemy named binds.

    `$1` becomes `:p1` and is bound to values[0], so the placeholder
    numbering and the value order stay coupled.

    Raises:
        ValueError: If a placeholder has no matching value
    """
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}

    def _replace(match: "re.Match[str]") -> str:
        name = f"p{match.group(1)}"
        if name not in params:
            raise ValueError(f"No value bound for placeholder ${match.group(1)}")
        return f":{name}"

    return POSITIONAL_PARAM.sub(_replace, sql), params


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Execute a parameterized statement and return its rows as plain dicts.

    Args:
        db: Database session
        sql: Statement using `$n` positional placeholders
        values: Values bound to the placeholders, in order

    Returns:
        List of row dicts (empty for statements that return no rows)
    """
    statement, params = bind_positional(sql, values)
    result = db.execute(text(statement), params)
    if not result.returns_rows:
        return []
    return [dict(row._mapping) for row in result]
