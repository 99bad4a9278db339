from models.enums import UserStatus
from models.user import UserModel
from utils.department_manager import DepartmentManager
from utils.user_course_manager import UserCourseManager
from utils.user_manager import UserManager


def _create_payload(**overrides):
    payload = {
        "name": "João Silva",
        "email": "joao@empresa.com.br",
        "password": "senha123",
        "departmentId": None,
    }
    payload.update(overrides)
    return payload


def test_create_user(client, db, admin_headers, department):
    resp = client.post(
        "/api/users",
        json=_create_payload(departmentId=department.id),
        headers=admin_headers,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "João Silva"
    assert body["role"] == "USER"
    assert body["status"] == "ACTIVE"
    assert body["completedCourses"] == 0
    assert body["department"]["id"] == department.id
    assert "password" not in body

    stored = db.query(UserModel).filter(UserModel.email == "joao@empresa.com.br").one()
    assert stored.password != "senha123"
    assert UserManager(db).verify_password("senha123", stored.password)


def test_create_user_requires_admin(client, user_headers, department):
    resp = client.post(
        "/api/users",
        json=_create_payload(departmentId=department.id),
        headers=user_headers,
    )
    assert resp.status_code == 403


def test_create_user_duplicate_email(client, admin_headers, user, department):
    resp = client.post(
        "/api/users",
        json=_create_payload(email="maria@empresa.com.br", departmentId=department.id),
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email já está em uso"


def test_create_user_unknown_department(client, admin_headers):
    resp = client.post(
        "/api/users", json=_create_payload(departmentId="nope"), headers=admin_headers
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Departamento não encontrado"


def test_create_user_validation_errors(client, admin_headers):
    resp = client.post(
        "/api/users",
        json={"name": "", "email": "invalido", "password": "123"},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Erro de validação"
    errors = {error["field"]: error["message"] for error in body["errors"]}
    assert errors["name"] == "Nome é obrigatório"
    assert errors["password"] == "Senha deve ter pelo menos 6 caracteres"
    assert errors["departmentId"] == "Campo obrigatório"
    assert "email" in errors


def test_list_users_paginates_by_name(client, user_headers, make_user):
    for name in ["Carla", "Bruno", "Ana"]:
        make_user(f"{name.lower()}@empresa.com.br", name=name)

    resp = client.get("/api/users", params={"page": 1, "limit": 2}, headers=user_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert [u["name"] for u in body["data"]] == ["Ana", "Bruno"]
    assert body["pagination"] == {"total": 4, "pages": 2, "page": 1, "limit": 2}

    second = client.get(
        "/api/users", params={"page": 2, "limit": 2}, headers=user_headers
    ).json()
    assert [u["name"] for u in second["data"]] == ["Carla", "Maria"]
    assert all("password" not in u for u in body["data"] + second["data"])


def test_list_users_filters(client, db, user_headers, make_user, department):
    vendas = DepartmentManager(db).create_department(name="Vendas")
    make_user("pedro@empresa.com.br", name="Pedro", department_id=vendas.id)
    inactive = make_user("lia@empresa.com.br", name="Lia")
    UserManager(db).update_user(inactive.id, {"status": UserStatus.INACTIVE})

    by_department = client.get(
        "/api/users", params={"department": vendas.id}, headers=user_headers
    ).json()
    assert [u["name"] for u in by_department["data"]] == ["Pedro"]

    by_status = client.get(
        "/api/users", params={"status": "INACTIVE"}, headers=user_headers
    ).json()
    assert [u["name"] for u in by_status["data"]] == ["Lia"]

    by_search = client.get(
        "/api/users", params={"search": "PEDRO@"}, headers=user_headers
    ).json()
    assert [u["name"] for u in by_search["data"]] == ["Pedro"]


def test_list_users_rejects_invalid_page(client, user_headers):
    resp = client.get("/api/users", params={"page": 0}, headers=user_headers)
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "page"


def test_search_users(client, user_headers, make_user):
    make_user("ana@empresa.com.br", name="Ana")
    make_user("anabela@empresa.com.br", name="Anabela")

    resp = client.get("/api/users/search", params={"q": "ana"}, headers=user_headers)
    assert resp.status_code == 200
    assert [u["name"] for u in resp.json()] == ["Ana", "Anabela"]

    limited = client.get(
        "/api/users/search", params={"q": "ana", "limit": 1}, headers=user_headers
    )
    assert len(limited.json()) == 1


def test_search_users_requires_term(client, user_headers):
    for params in ({}, {"q": "   "}):
        resp = client.get("/api/users/search", params=params, headers=user_headers)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Termo de busca não fornecido"


def test_get_user(client, user, user_headers):
    resp = client.get(f"/api/users/{user.id}", headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "maria@empresa.com.br"
    assert "password" not in resp.json()


def test_get_user_not_found(client, user_headers):
    resp = client.get("/api/users/missing", headers=user_headers)
    assert resp.status_code == 404
    assert resp.json() == {"message": "Usuário não encontrado", "code": 404}


def test_update_user(client, admin_headers, user):
    resp = client.put(
        f"/api/users/{user.id}",
        json={"name": "Maria Souza", "role": "ADMIN"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Maria Souza"
    assert body["role"] == "ADMIN"
    assert body["email"] == "maria@empresa.com.br"


def test_update_user_keeps_own_email(client, admin_headers, user):
    resp = client.put(
        f"/api/users/{user.id}",
        json={"email": "maria@empresa.com.br"},
        headers=admin_headers,
    )
    assert resp.status_code == 200


def test_update_user_email_taken(client, admin_headers, user):
    resp = client.put(
        f"/api/users/{user.id}",
        json={"email": "admin@empresa.com.br"},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email já está em uso"


def test_update_user_not_found(client, admin_headers):
    resp = client.put("/api/users/missing", json={"name": "X"}, headers=admin_headers)
    assert resp.status_code == 404


def test_delete_user_cascades_enrollments(client, db, admin_headers, user, make_course):
    course = make_course("Python")
    enrollment = UserCourseManager(db).enroll(user.id, course.id)

    resp = client.delete(f"/api/users/{user.id}", headers=admin_headers)
    assert resp.status_code == 204
    assert resp.content == b""

    assert client.get(f"/api/users/{user.id}", headers=admin_headers).status_code == 404
    assert (
        client.get(f"/api/user-courses/{enrollment.id}", headers=admin_headers).status_code
        == 404
    )


def test_delete_user_not_found(client, admin_headers):
    assert client.delete("/api/users/missing", headers=admin_headers).status_code == 404


def test_list_user_courses(client, db, user, user_headers, make_course):
    manager = UserCourseManager(db)
    manager.enroll(user.id, make_course("Python").id)
    manager.enroll(user.id, make_course("SQL").id)

    resp = client.get(f"/api/users/{user.id}/courses", headers=user_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["pagination"]["total"] == 2
    assert [item["course"]["title"] for item in body["data"]] == ["SQL", "Python"]


def test_list_user_courses_unknown_user(client, user_headers):
    resp = client.get("/api/users/missing/courses", headers=user_headers)
    assert resp.status_code == 404


def test_search_treats_wildcards_literally(client, user_headers, make_user):
    make_user("bruno@empresa.com.br", name="Bruno")
    make_user("ana_paula@empresa.com.br", name="Ana Paula")

    for term, expected in (("_", ["Ana Paula"]), ("%", []), ("a_p", ["Ana Paula"])):
        listed = client.get("/api/users", params={"search": term}, headers=user_headers)
        assert [u["name"] for u in listed.json()["data"]] == expected

        searched = client.get("/api/users/search", params={"q": term}, headers=user_headers)
        assert [u["name"] for u in searched.json()] == expected
