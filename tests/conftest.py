import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from api.routes.auth import create_user_token
from app import app
from core.database import SessionLocal, engine
from models.base import Base
from models.course import CourseModel
from models.enums import UserRole
from utils.course_manager import CourseManager
from utils.department_manager import DepartmentManager
from utils.user_manager import UserManager

PASSWORD = "segredo123"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def department(db):
    return DepartmentManager(db).create_department(name="Engenharia", simultaneous_courses=2)


@pytest.fixture
def make_user(db, department):
    def _make_user(email, name="Usuário", role=UserRole.USER, department_id=None):
        return UserManager(db).create_user(
            name=name,
            email=email,
            password=PASSWORD,
            department_id=department_id or department.id,
            role=role,
        )

    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user("admin@empresa.com.br", name="Admin", role=UserRole.ADMIN)


@pytest.fixture
def user(make_user):
    return make_user("maria@empresa.com.br", name="Maria")


def bearer(user_model):
    return {"Authorization": f"Bearer {create_user_token(user_model)}"}


@pytest.fixture
def headers_for():
    return bearer


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def user_headers(user):
    return bearer(user)


@pytest.fixture
def make_course(db):
    def _make_course(title, description=None, **kwargs) -> CourseModel:
        return CourseManager(db).create_course(title=title, description=description, **kwargs)

    return _make_course


@pytest.fixture
def fresh_user(db):
    """Reload a user from the database, bypassing the fixture session cache."""

    def _fresh_user(user_id):
        db.expire_all()
        return UserManager(db).get_user(user_id)

    return _fresh_user
