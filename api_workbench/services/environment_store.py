"""
Read-only access to stored environments.

The request pipeline never reads the active environment implicitly: routers
look it up here and pass the resulting snapshot into the compiler.
"""

from sqlalchemy.orm import Session

from ..exceptions import ResourceNotFoundError
from ..models.environment import Environment as EnvironmentModel
from ..schemas.environment import Environment


class EnvironmentStore:
    """Environment lookups backed by a database session."""

    def __init__(self, db: Session):
        self.db = db

    def get_environment(self, environment_id: int) -> Environment | None:
        env = self.db.query(EnvironmentModel).filter(EnvironmentModel.id == environment_id).first()
        return env.to_snapshot() if env else None

    def active_environment(self) -> Environment | None:
        env = self.db.query(EnvironmentModel).filter(EnvironmentModel.is_active == True).first()
        return env.to_snapshot() if env else None

    def get_variable(self, name: str) -> str | None:
        """Value of ``name`` in the active environment, or None."""
        env = self.active_environment()
        if env is None:
            return None
        return env.get_variable(name)

    def select(self, environment_id: int | None) -> Environment | None:
        """
        Pick the environment used for a compile or send.

        An explicit id must exist; otherwise the active environment (if any)
        is used.

        Raises:
            ResourceNotFoundError: if ``environment_id`` is given but unknown
        """
        if environment_id is None:
            return self.active_environment()
        env = self.get_environment(environment_id)
        if env is None:
            raise ResourceNotFoundError("Environment", environment_id)
        return env
