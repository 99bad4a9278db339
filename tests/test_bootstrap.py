from main import bootstrap_admin
from models.enums import UserRole
from utils.department_manager import DepartmentManager
from utils.user_manager import UserManager


def test_bootstrap_creates_department_and_admin(db):
    admin = bootstrap_admin(
        db, "Root@Empresa.com.br", "segredo123", name="Root", department_name="TI"
    )
    assert admin.role == UserRole.ADMIN
    assert admin.email == "root@empresa.com.br"
    assert admin.department.name == "TI"
    assert UserManager(db).authenticate("root@empresa.com.br", "segredo123").id == admin.id


def test_bootstrap_reuses_existing_department(db, department):
    admin = bootstrap_admin(db, "root@empresa.com.br", "segredo123", department_name="Engenharia")
    assert admin.department_id == department.id
    assert len(DepartmentManager(db).list_departments(1, 10)[0]) == 1


def test_bootstrap_is_a_no_op_when_admin_exists(db, admin):
    assert bootstrap_admin(db, "other@empresa.com.br", "segredo123") is None
    assert UserManager(db).get_user_by_email("other@empresa.com.br") is None
