"""
Environment and Variable models backing the environment store.

An environment is a named set of key/value variables. Request descriptors
reference variables with {{name}} placeholders, so one descriptor can be
compiled against development, staging or production targets.
"""

from datetime import datetime
from typing import List

from sqlalchemy import String, Text, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import Base
from ..schemas.environment import Environment as EnvironmentSnapshot


class Environment(Base):
    """
    SQLAlchemy model for environments.

    At most one environment is active at a time. Deleting an environment
    cascades to all its variables.

    Attributes:
        id: Unique identifier for the environment
        name: Human-readable name
        is_active: Whether this is the environment used for resolution
        created_at: Creation timestamp
        updated_at: Last update timestamp
        variables: Variables defined in this environment
    """
    __tablename__ = "environments"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    variables: Mapped[List["Variable"]] = relationship(
        "Variable",
        back_populates="environment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Variable.id",
    )

    def to_snapshot(self) -> EnvironmentSnapshot:
        """Freeze the current variables into a resolution snapshot.

        When a key is defined more than once the last definition wins.
        """
        return EnvironmentSnapshot(
            id=self.id,
            name=self.name,
            variables={var.key: var.value for var in self.variables},
        )


class Variable(Base):
    """
    SQLAlchemy model for a single environment variable.

    Attributes:
        id: Unique identifier
        environment_id: Parent environment
        key: Name referenced by {{key}} placeholders
        value: Replacement text
    """
    __tablename__ = "variables"

    id: Mapped[int] = mapped_column(primary_key=True)
    environment_id: Mapped[int] = mapped_column(
        ForeignKey("environments.id", ondelete="CASCADE")
    )
    key: Mapped[str] = mapped_column(String(255))
    value: Mapped[str] = mapped_column(Text)

    environment: Mapped["Environment"] = relationship(
        "Environment",
        back_populates="variables"
    )
