"""User management utilities.

This module provides user management functionality including user storage,
password hashing, credential checks, listing and enrollment lookups.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import bcrypt
import pytz
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from config import BCRYPT_ROUNDS
from core.exceptions import (
    DepartmentNotFoundError,
    DuplicateEntityError,
    InactiveAccountError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)
from models.department import DepartmentModel
from models.enums import UserRole, UserStatus
from models.user import UserModel
from models.user_course import UserCourseModel
from utils.pagination import paginate

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72

EMAIL_IN_USE_MESSAGE = "Email já está em uso"


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _name_or_email_contains(term: str):
    # Literal substring: % and _ in the term are escaped
    return or_(
        UserModel.name.icontains(term, autoescape=True),
        UserModel.email.icontains(term, autoescape=True),
    )


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        try:
            return bcrypt.checkpw(
                _password_bytes(plain_password), hashed_password.encode("utf-8")
            )
        except ValueError as e:
            # Malformed hash stored for the account
            logger.error("Password verification error: %s", e)
            return False

    def authenticate(self, email: str, password: str) -> UserModel:
        """Check credentials and record the login time.

        Unknown email and wrong password raise the same error so callers
        cannot tell which accounts exist.

        Args:
            email: Login email.
            password: Plain text password.

        Returns:
            The authenticated UserModel (department loaded).

        Raises:
            InvalidCredentialsError: If the email is unknown or the password
                does not match.
            InactiveAccountError: If the account is disabled.
        """
        user = self.get_user_by_email(email)
        if user is None or not self.verify_password(password, user.password):
            logger.info("Rejected login for %s", email)
            raise InvalidCredentialsError()
        if user.status == UserStatus.INACTIVE:
            logger.info("Rejected login for inactive account %s", user.id)
            raise InactiveAccountError()

        user.last_login = datetime.now(pytz.utc)
        self.db.commit()
        self.db.refresh(user)
        logger.info("User %s logged in", user.id)
        return user

    def get_user(self, user_id: str) -> UserModel:
        """Get a user by ID with its department loaded.

        Raises:
            UserNotFoundError: If no user has this ID.
        """
        model = (
            self.db.query(UserModel)
            .options(joinedload(UserModel.department))
            .filter(UserModel.id == user_id)
            .first()
        )
        if not model:
            raise UserNotFoundError(user_id)
        return model

    def get_user_by_email(self, email: str) -> Optional[UserModel]:
        return (
            self.db.query(UserModel)
            .options(joinedload(UserModel.department))
            .filter(UserModel.email == email)
            .first()
        )

    def list_users(
        self,
        page: int,
        limit: int,
        search: Optional[str] = None,
        department_id: Optional[str] = None,
        status: Optional[UserStatus] = None,
    ) -> Tuple[List[UserModel], int]:
        """List users ordered by name.

        Args:
            page: Page number, starting at 1.
            limit: Page size.
            search: Case-insensitive substring of name or email.
            department_id: Exact department ID.
            status: Exact status.

        Returns:
            Tuple of (users on the page, total matches).
        """
        query = self.db.query(UserModel)
        if search:
            query = query.filter(_name_or_email_contains(search))
        if department_id:
            query = query.filter(UserModel.department_id == department_id)
        if status:
            query = query.filter(UserModel.status == status)
        return paginate(
            query,
            page,
            limit,
            order_by=(UserModel.name.asc(),),
            options=(joinedload(UserModel.department),),
        )

    def search_users(self, term: str, limit: int) -> List[UserModel]:
        """Unpaginated name/email lookup.

        Raises:
            ValidationError: If the search term is blank.
        """
        if not term or not term.strip():
            raise ValidationError("Termo de busca não fornecido")
        return (
            self.db.query(UserModel)
            .options(joinedload(UserModel.department))
            .filter(_name_or_email_contains(term.strip()))
            .order_by(UserModel.name.asc())
            .limit(limit)
            .all()
        )

    def _ensure_department(self, department_id: str) -> None:
        exists = (
            self.db.query(DepartmentModel.id)
            .filter(DepartmentModel.id == department_id)
            .first()
        )
        if not exists:
            raise DepartmentNotFoundError(department_id)

    def _ensure_email_free(self, email: str) -> None:
        if self.db.query(UserModel.id).filter(UserModel.email == email).first():
            raise DuplicateEntityError(EMAIL_IN_USE_MESSAGE)

    def create_user(
        self,
        name: str,
        email: str,
        password: str,
        department_id: str,
        role: UserRole = UserRole.USER,
    ) -> UserModel:
        """Create a new, active user.

        Args:
            name: Display name.
            email: Unique login email.
            password: Plain text password (stored as a bcrypt hash).
            department_id: ID of an existing department.
            role: USER or ADMIN.

        Returns:
            Created UserModel.

        Raises:
            DuplicateEntityError: If the email is already in use.
            DepartmentNotFoundError: If the department does not exist.
        """
        self._ensure_email_free(email)
        self._ensure_department(department_id)

        model = UserModel(
            name=name,
            email=email,
            password=self.hash_password(password),
            department_id=department_id,
            role=role,
            status=UserStatus.ACTIVE,
            completed_courses=0,
        )
        # Two concurrent requests may both pass the email check; the unique
        # constraint decides
        try:
            self.db.add(model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEntityError(EMAIL_IN_USE_MESSAGE) from e

        logger.info("Created user: %s (%s)", model.id, email)
        return self.get_user(model.id)

    def update_user(self, user_id: str, updates: Dict[str, Any]) -> UserModel:
        """Apply a partial update.

        Args:
            user_id: ID of the user to update.
            updates: Field values keyed by column name; ``None`` values are
                ignored.

        Returns:
            Updated UserModel.

        Raises:
            UserNotFoundError: If the user does not exist.
            DuplicateEntityError: If the new email belongs to another user.
            DepartmentNotFoundError: If the new department does not exist.
        """
        model = self.get_user(user_id)
        updates = {key: value for key, value in updates.items() if value is not None}

        email = updates.get("email")
        if email and email != model.email:
            self._ensure_email_free(email)
        if "department_id" in updates:
            self._ensure_department(updates["department_id"])

        for key, value in updates.items():
            setattr(model, key, value)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEntityError(EMAIL_IN_USE_MESSAGE) from e

        logger.info("Updated user %s: %s", user_id, sorted(updates))
        return self.get_user(user_id)

    def delete_user(self, user_id: str) -> None:
        """Delete a user and, through the cascade, its enrollments."""
        model = self.get_user(user_id)
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted user: %s", user_id)

    def list_user_courses(
        self, user_id: str, page: int, limit: int
    ) -> Tuple[List[UserCourseModel], int]:
        """List a user's enrollments, newest first.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        self.get_user(user_id)
        query = self.db.query(UserCourseModel).filter(UserCourseModel.user_id == user_id)
        return paginate(
            query,
            page,
            limit,
            order_by=(UserCourseModel.start_date.desc(),),
            options=(joinedload(UserCourseModel.course),),
        )

    def count_admins(self) -> int:
        return self.db.query(UserModel).filter(UserModel.role == UserRole.ADMIN).count()
