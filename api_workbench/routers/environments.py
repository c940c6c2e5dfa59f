"""
Environment management API routes.

Environments hold the variables that {{placeholders}} resolve against. At
most one environment is active; compile and execute requests that do not
name an environment use the active one.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.environment import Environment, Variable
from ..schemas.environment import (
    EnvironmentCreate,
    EnvironmentUpdate,
    EnvironmentWithVariables,
    VariableCreate,
    VariableUpdate,
    VariableResponse,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/environments", tags=["environments"])


def _get_environment_or_404(db: Session, environment_id: int) -> Environment:
    db_environment = db.query(Environment).filter(Environment.id == environment_id).first()
    if db_environment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Environment with id {environment_id} not found"
        )
    return db_environment


def _deactivate_all(db: Session, except_id: int | None = None) -> None:
    query = db.query(Environment).filter(Environment.is_active == True)
    if except_id is not None:
        query = query.filter(Environment.id != except_id)
    query.update({"is_active": False})


# Environment endpoints

@router.post("", response_model=EnvironmentWithVariables, status_code=status.HTTP_201_CREATED)
def create_environment(environment_data: EnvironmentCreate, db: Session = Depends(get_db)):
    """
    Create a new environment with optional initial variables.

    If is_active is True, all other environments are deactivated.
    """
    if environment_data.is_active:
        _deactivate_all(db)

    db_environment = Environment(
        name=environment_data.name,
        is_active=environment_data.is_active,
    )
    db.add(db_environment)
    db.flush()  # Get the ID before adding variables

    for var_data in environment_data.variables:
        db.add(Variable(
            environment_id=db_environment.id,
            key=var_data.key,
            value=var_data.value,
        ))

    db.commit()
    db.refresh(db_environment)
    logger.info("Created environment %d (%s)", db_environment.id, db_environment.name)
    return db_environment


@router.get("", response_model=list[EnvironmentWithVariables])
def list_environments(db: Session = Depends(get_db)):
    """List all environments with their variables."""
    return db.query(Environment).all()


@router.get("/active", response_model=EnvironmentWithVariables | None)
def get_active_environment(db: Session = Depends(get_db)):
    """Return the active environment, or null when none is active."""
    return db.query(Environment).filter(Environment.is_active == True).first()


@router.post("/deactivate", status_code=status.HTTP_204_NO_CONTENT)
def deactivate_environments(db: Session = Depends(get_db)):
    """Deactivate every environment so placeholders resolve against nothing."""
    _deactivate_all(db)
    db.commit()
    return None


@router.get("/{environment_id}", response_model=EnvironmentWithVariables)
def get_environment(environment_id: int, db: Session = Depends(get_db)):
    """
    Get an environment by ID with all its variables.

    Raises:
        HTTPException: 404 if environment not found
    """
    return _get_environment_or_404(db, environment_id)


@router.put("/{environment_id}", response_model=EnvironmentWithVariables)
def update_environment(
    environment_id: int,
    environment_data: EnvironmentUpdate,
    db: Session = Depends(get_db)
):
    """
    Update an existing environment. Only provided fields are changed.

    Setting is_active to True deactivates all other environments.
    """
    db_environment = _get_environment_or_404(db, environment_id)

    update_data = environment_data.model_dump(exclude_unset=True)
    if update_data.get("is_active") is True:
        _deactivate_all(db, except_id=environment_id)

    for field, value in update_data.items():
        setattr(db_environment, field, value)

    db.commit()
    db.refresh(db_environment)
    return db_environment


@router.delete("/{environment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_environment(environment_id: int, db: Session = Depends(get_db)):
    """Delete an environment and, by cascade, all of its variables."""
    db_environment = _get_environment_or_404(db, environment_id)
    db.delete(db_environment)
    db.commit()
    return None


@router.post("/{environment_id}/activate", response_model=EnvironmentWithVariables)
def activate_environment(environment_id: int, db: Session = Depends(get_db)):
    """Make an environment the single active environment."""
    db_environment = _get_environment_or_404(db, environment_id)
    _deactivate_all(db)
    db_environment.is_active = True
    db.commit()
    db.refresh(db_environment)
    logger.info("Activated environment %d (%s)", db_environment.id, db_environment.name)
    return db_environment


# Variable endpoints

@router.post("/{environment_id}/variables", response_model=VariableResponse, status_code=status.HTTP_201_CREATED)
def add_variable(
    environment_id: int,
    variable_data: VariableCreate,
    db: Session = Depends(get_db)
):
    """
    Add a new variable to an environment.

    Raises:
        HTTPException: 404 if environment not found
    """
    _get_environment_or_404(db, environment_id)

    db_variable = Variable(
        environment_id=environment_id,
        key=variable_data.key,
        value=variable_data.value,
    )
    db.add(db_variable)
    db.commit()
    db.refresh(db_variable)
    return db_variable


@router.put("/variables/{variable_id}", response_model=VariableResponse)
def update_variable(
    variable_id: int,
    variable_data: VariableUpdate,
    db: Session = Depends(get_db)
):
    """Update an existing variable. Only provided fields are changed."""
    db_variable = db.query(Variable).filter(Variable.id == variable_id).first()
    if db_variable is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Variable with id {variable_id} not found"
        )

    update_data = variable_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(db_variable, field, value)

    db.commit()
    db.refresh(db_variable)
    return db_variable


@router.delete("/variables/{variable_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_variable(variable_id: int, db: Session = Depends(get_db)):
    """Delete a variable by ID."""
    db_variable = db.query(Variable).filter(Variable.id == variable_id).first()
    if db_variable is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Variable with id {variable_id} not found"
        )

    db.delete(db_variable)
    db.commit()
    return None
