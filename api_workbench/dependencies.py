"""
FastAPI dependencies shared by the routers.

Tests override these with ``app.dependency_overrides`` to swap in a mock
transport or a different script engine.
"""

import httpx
from fastapi import Depends
from sqlalchemy.orm import Session

from .config import get_settings
from .database import get_db
from .services.environment_store import EnvironmentStore
from .services.script_sandbox import AstevalScriptEngine, NullScriptEngine, ScriptEngine


def get_environment_store(db: Session = Depends(get_db)) -> EnvironmentStore:
    return EnvironmentStore(db)


def get_transport() -> httpx.AsyncBaseTransport | None:
    """Transport used for outgoing requests; None means real network I/O."""
    return None


def get_script_engine() -> ScriptEngine:
    settings = get_settings()
    if not settings.scripts_enabled:
        return NullScriptEngine()
    return AstevalScriptEngine(max_script_length=settings.max_script_length)
