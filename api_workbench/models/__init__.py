"""
Models package for API Workbench.

Exports the SQLAlchemy models backing the environment store.
"""

from .environment import Environment, Variable

__all__ = [
    "Environment",
    "Variable",
]
