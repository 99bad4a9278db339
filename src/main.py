"""Main entry point for bootstrapping the LMS Admin database.

This module provides a command-line interface that creates the database
tables and, when no administrator exists yet, the first department and ADMIN
user. Values come from the ADMIN_* environment variables; anything missing
is asked for interactively.
"""

import getpass
import logging
from typing import Optional

from sqlalchemy.orm import Session

from config import ADMIN_DEPARTMENT, ADMIN_EMAIL, ADMIN_NAME, ADMIN_PASSWORD
from core.database import SessionLocal, init_db
from core.exceptions import LmsAdminError
from core.logging_config import setup_logging
from models.enums import UserRole
from models.user import UserModel
from schemas.user import MIN_PASSWORD_LENGTH
from utils.department_manager import DepartmentManager
from utils.user_manager import UserManager

logger = logging.getLogger(__name__)


def print_banner() -> None:
    """Print program banner and description."""
    print("=" * 70)
    print("  LMS Admin API - Bootstrap")
    print("=" * 70)
    print()
    print("Creates the database tables and the first administrator account.")
    print("Set ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME / ADMIN_DEPARTMENT")
    print("to skip the prompts.")
    print()
    print("=" * 70)
    print()


def prompt(label: str, default: Optional[str] = None, secret: bool = False) -> str:
    """Ask for a value until a non-empty one is given.

    Args:
        label: Prompt text.
        default: Value used when the answer is empty.
        secret: Read without echo.

    Returns:
        The answer, stripped.
    """
    suffix = f" [{default}]" if default else ""
    while True:
        read = getpass.getpass if secret else input
        answer = read(f"{label}{suffix}: ").strip()
        if answer:
            return answer
        if default:
            return default
        print("❌ Value is required.\n")


def bootstrap_admin(
    db: Session,
    email: str,
    password: str,
    name: str = ADMIN_NAME,
    department_name: str = ADMIN_DEPARTMENT,
) -> Optional[UserModel]:
    """Create the first ADMIN user unless an admin already exists.

    The department is reused when one with the same name exists.

    Args:
        db: SQLAlchemy Session.
        email: Admin login email.
        password: Admin password in plain text.
        name: Admin display name.
        department_name: Name of the admin's department.

    Returns:
        The created admin, or None when an admin was already present.
    """
    user_manager = UserManager(db)
    if user_manager.count_admins() > 0:
        logger.info("Admin user already present, nothing to do")
        return None

    department_manager = DepartmentManager(db)
    department = department_manager.get_department_by_name(department_name)
    if department is None:
        department = department_manager.create_department(name=department_name)

    admin = user_manager.create_user(
        name=name,
        email=email.lower(),
        password=password,
        department_id=department.id,
        role=UserRole.ADMIN,
    )
    logger.info("Created admin user %s in department %s", admin.email, department.name)
    return admin


def main() -> None:
    """Main entry point."""
    setup_logging()
    print_banner()

    init_db()

    with SessionLocal() as db:
        if UserManager(db).count_admins() > 0:
            print("✅ An administrator already exists. Nothing to do.")
            return

        email = ADMIN_EMAIL or prompt("Admin email")
        password = ADMIN_PASSWORD
        while not password or len(password) < MIN_PASSWORD_LENGTH:
            if password:
                print(f"❌ Password must have at least {MIN_PASSWORD_LENGTH} characters.\n")
            password = prompt("Admin password", secret=True)
        name = prompt("Admin name", default=ADMIN_NAME) if not ADMIN_EMAIL else ADMIN_NAME
        department_name = (
            prompt("Department", default=ADMIN_DEPARTMENT)
            if not ADMIN_EMAIL
            else ADMIN_DEPARTMENT
        )

        try:
            admin = bootstrap_admin(db, email, password, name, department_name)
        except LmsAdminError as e:
            logger.error("Bootstrap failed: %s", e)
            print(f"\n❌ Bootstrap failed: {e}\n")
            raise SystemExit(1)

    print("\n" + "=" * 70)
    print("✅ Administrator created")
    print("=" * 70)
    print(f"Email: {admin.email}")
    print(f"Name: {admin.name}")
    print("=" * 70 + "\n")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user.")
