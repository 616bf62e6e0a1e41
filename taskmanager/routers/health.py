"""Health check router."""

import logging
from pathlib import Path
from typing import Optional

from alembic.config import Config
from alembic.script import ScriptDirectory
from fastapi import APIRouter, Request
from sqlalchemy import text

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_alembic_head() -> Optional[str]:
    project_root = Path(__file__).resolve().parents[2]
    cfg_path = project_root / "alembic.ini"
    script_location = project_root / "alembic"
    if not cfg_path.exists() or not script_location.exists():
        return None

    config = Config(str(cfg_path))
    config.set_main_option("script_location", str(script_location))
    script = ScriptDirectory.from_config(config)
    return script.get_current_head()


@router.get("/health")
async def health_check(request: Request):
    """Lightweight health endpoint with store + alembic checks."""

    db_ok = False
    alembic_current: Optional[str] = None
    alembic_head: Optional[str] = None

    memory_repository = getattr(request.app.state, "memory_repository", None)
    database = getattr(request.app.state, "database", None)

    if memory_repository is not None:
        db_ok = await memory_repository.ping()
    elif database is not None:
        db_ok = await database.ping()

    if db_ok and database is not None:
        try:
            async with database.session() as session:
                version_result = await session.execute(text("SELECT version_num FROM alembic_version"))
                alembic_current = version_result.scalar_one_or_none()
        except Exception:
            logger.debug("alembic_version table not readable", exc_info=True)
            alembic_current = None

    try:
        alembic_head = _load_alembic_head()
    except Exception:
        logger.warning("Could not load alembic head", exc_info=True)
        alembic_head = None

    alembic_head_ok = bool(alembic_current and alembic_head and alembic_current == alembic_head)

    return {
        "api_ok": True,
        "db_ok": db_ok,
        "alembic_head_ok": alembic_head_ok,
        "alembic_current": alembic_current,
        "alembic_head": alembic_head,
    }
