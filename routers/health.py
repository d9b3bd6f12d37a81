"""Liveness and readiness checks."""

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from fastapi import APIRouter, Depends
from sqlalchemy import create_engine, pool

from routers.deps import get_service
from service import I9Service
from settings import settings

router = APIRouter()


def pending_migrations(database_url: str) -> int:
    """0 when the schema is at alembic head, 1 when behind, -1 when unknown."""
    engine = create_engine(database_url, poolclass=pool.NullPool)
    try:
        with engine.connect() as sa_conn:
            current = MigrationContext.configure(sa_conn).get_current_revision()
        head = ScriptDirectory.from_config(Config("alembic.ini")).get_current_head()
    except Exception:
        return -1
    finally:
        engine.dispose()
    return 0 if current == head else 1


@router.get("/health", tags=["meta"])
def health():
    return {"status": "ok"}


@router.get("/health/deep", tags=["meta"])
def health_deep(service: I9Service = Depends(get_service)):
    if not settings.DATABASE_URL:
        return {"status": "degraded", "db": "no DATABASE_URL configured", "pending_migrations": -1}

    try:
        service.store.ping()
    except Exception as e:
        return {"status": "degraded", "db": "error", "error": type(e).__name__}

    return {"status": "ok", "db": "connected", "pending_migrations": pending_migrations(settings.DATABASE_URL)}
