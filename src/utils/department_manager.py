"""Department management utilities."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import (
    DependentRecordsError,
    DepartmentNotFoundError,
    DuplicateEntityError,
)
from models.department import DepartmentModel
from models.user import UserModel
from utils.pagination import paginate

logger = logging.getLogger(__name__)

NAME_IN_USE_MESSAGE = "Já existe um departamento com este nome"


class DepartmentManager:
    """Manages department records and their user listings."""

    def __init__(self, db: Session):
        self.db = db

    def get_department(self, department_id: str) -> DepartmentModel:
        model = (
            self.db.query(DepartmentModel)
            .filter(DepartmentModel.id == department_id)
            .first()
        )
        if not model:
            raise DepartmentNotFoundError(department_id)
        return model

    def get_department_by_name(self, name: str) -> Optional[DepartmentModel]:
        return self.db.query(DepartmentModel).filter(DepartmentModel.name == name).first()

    def list_departments(
        self, page: int, limit: int, search: Optional[str] = None
    ) -> Tuple[List[DepartmentModel], int]:
        query = self.db.query(DepartmentModel)
        if search:
            query = query.filter(DepartmentModel.name.icontains(search, autoescape=True))
        return paginate(query, page, limit, order_by=(DepartmentModel.name.asc(),))

    def create_department(self, **fields: Any) -> DepartmentModel:
        """Create a department.

        Args:
            **fields: Column values; ``name`` is required.

        Returns:
            Created DepartmentModel.

        Raises:
            DuplicateEntityError: If the name is already taken.
        """
        if self.get_department_by_name(fields["name"]):
            raise DuplicateEntityError(NAME_IN_USE_MESSAGE)

        model = DepartmentModel(**fields)
        try:
            self.db.add(model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEntityError(NAME_IN_USE_MESSAGE) from e
        self.db.refresh(model)
        logger.info("Created department: %s (%s)", model.id, model.name)
        return model

    def update_department(
        self, department_id: str, updates: Dict[str, Any]
    ) -> DepartmentModel:
        """Apply a partial update; name uniqueness is checked only on change."""
        model = self.get_department(department_id)
        updates = {key: value for key, value in updates.items() if value is not None}

        name = updates.get("name")
        if name and name != model.name and self.get_department_by_name(name):
            raise DuplicateEntityError(NAME_IN_USE_MESSAGE)

        for key, value in updates.items():
            setattr(model, key, value)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEntityError(NAME_IN_USE_MESSAGE) from e
        self.db.refresh(model)
        logger.info("Updated department %s: %s", department_id, sorted(updates))
        return model

    def delete_department(self, department_id: str) -> None:
        """Delete a department that no user references.

        Raises:
            DepartmentNotFoundError: If the department does not exist.
            DependentRecordsError: If users still belong to it.
        """
        model = self.get_department(department_id)
        users_count = (
            self.db.query(UserModel)
            .filter(UserModel.department_id == department_id)
            .count()
        )
        if users_count > 0:
            logger.info(
                "Refused to delete department %s with %d users",
                department_id,
                users_count,
            )
            raise DependentRecordsError(
                "Não é possível excluir o departamento pois existem "
                "usuários associados a ele"
            )
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted department: %s", department_id)

    def list_department_users(
        self, department_id: str, page: int, limit: int
    ) -> Tuple[List[UserModel], int]:
        self.get_department(department_id)
        query = self.db.query(UserModel).filter(UserModel.department_id == department_id)
        return paginate(query, page, limit, order_by=(UserModel.name.asc(),))
