from datetime import datetime, timedelta

import pytest
import pytz

from models.enums import CourseStatus
from models.metrics import MetricsSnapshotModel
from utils.department_manager import DepartmentManager
from utils.metrics_manager import MetricsManager, month_start, percentage
from utils.user_course_manager import UserCourseManager


@pytest.fixture
def populated(db, admin, user, make_course):
    """Two users, two courses (one inactive) and two enrollments of course A.

    Maria completed A with grade 8 and logged in recently; the admin's
    enrollment is still active and the admin never logged in.
    """
    course_a = make_course("A")
    course_b = make_course("B", status=CourseStatus.INACTIVE)
    manager = UserCourseManager(db)
    mine = manager.enroll(user.id, course_a.id)
    manager.enroll(admin.id, course_a.id)
    manager.complete(mine.id, grade=8)

    user.last_login = datetime.now(pytz.utc) - timedelta(days=5)
    db.commit()
    return {"course_a": course_a, "course_b": course_b}


def test_percentage():
    assert percentage(1, 4) == 25.0
    assert percentage(3, 0) == 0.0


def test_month_start_crosses_year_boundary():
    reference = datetime(2024, 2, 10, tzinfo=pytz.utc)
    assert month_start(reference, 0) == datetime(2024, 2, 1, tzinfo=pytz.utc)
    assert month_start(reference, 2) == datetime(2023, 12, 1, tzinfo=pytz.utc)
    assert month_start(reference, -1) == datetime(2024, 3, 1, tzinfo=pytz.utc)


def test_dashboard_summary(client, db, admin_headers, populated):
    resp = client.get("/api/metrics/dashboard", headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["summary"] == {
        "totalUsers": 2,
        "activeUsers": 1,
        "totalCourses": 2,
        "activeCourses": 1,
        "completionRate": 50.0,
        "averageGrade": 8.0,
    }
    assert len(body["userEngagement"]) == 6
    assert body["departmentDistribution"] == [{"department": "Engenharia", "users": 2}]


def test_dashboard_on_empty_database(client, db, admin_headers):
    summary = client.get("/api/metrics/dashboard", headers=admin_headers).json()["summary"]
    assert summary["completionRate"] == 0
    assert summary["averageGrade"] == 0


def test_dashboard_appends_one_snapshot_per_call(client, db, admin_headers, populated):
    client.get("/api/metrics/dashboard", headers=admin_headers)
    client.get("/api/metrics/dashboard", headers=admin_headers)

    snapshots = db.query(MetricsSnapshotModel).all()
    assert len(snapshots) == 2
    assert snapshots[0].total_users == 2
    assert snapshots[0].completion_rate == 50.0


def test_user_engagement_uses_calendar_months(db, make_user):
    def logged_in(email, when):
        user = make_user(email)
        user.last_login = when
        db.commit()

    logged_in("a@empresa.com.br", datetime(2024, 3, 2, tzinfo=pytz.utc))
    logged_in("b@empresa.com.br", datetime(2024, 1, 20, tzinfo=pytz.utc))
    logged_in("c@empresa.com.br", datetime(2023, 10, 5, tzinfo=pytz.utc))
    logged_in("d@empresa.com.br", datetime(2023, 9, 30, tzinfo=pytz.utc))

    manager = MetricsManager(db, now=datetime(2024, 3, 15, tzinfo=pytz.utc))
    series = [
        (item.month, item.year, item.active_users)
        for item in manager.dashboard().user_engagement
    ]
    assert series == [
        ("October", 2023, 1),
        ("November", 2023, 0),
        ("December", 2023, 0),
        ("January", 2024, 1),
        ("February", 2024, 0),
        ("March", 2024, 1),
    ]


def test_user_metrics(client, admin_headers, populated, user):
    body = client.get("/api/metrics/users", headers=admin_headers).json()
    assert body["totalUsers"] == 2
    assert body["byStatus"] == {"active": 2, "inactive": 0}
    assert body["byRole"] == {"admin": 1, "user": 1}
    assert body["byDepartment"] == [{"department": "Engenharia", "users": 2}]
    top = body["topUsers"][0]
    assert top == {
        "id": user.id,
        "name": "Maria",
        "email": "maria@empresa.com.br",
        "completedCourses": 1,
        "department": {"name": "Engenharia"},
    }


def test_course_metrics(client, admin_headers, populated):
    body = client.get("/api/metrics/courses", headers=admin_headers).json()
    assert body["totalCourses"] == 2
    assert body["byStatus"] == {"active": 1, "inactive": 1}
    assert [(c["title"], c["enrollments"]) for c in body["popularCourses"]] == [
        ("A", 2),
        ("B", 0),
    ]
    top = body["topCompletionRate"][0]
    assert top["title"] == "A"
    assert top["totalEnrollments"] == 2
    assert top["completedEnrollments"] == 1
    assert top["completionRate"] == 50.0


def test_department_metrics(client, db, admin_headers, populated):
    DepartmentManager(db).create_department(name="Vazio")

    body = client.get("/api/metrics/departments", headers=admin_headers).json()
    assert [d["name"] for d in body] == ["Engenharia", "Vazio"]
    engenharia, vazio = body
    assert engenharia["usersCount"] == 2
    assert engenharia["completedCoursesCount"] == 1
    assert engenharia["avgCompletedCourses"] == 0.5
    assert engenharia["activeUsersCount"] == 1
    assert engenharia["activeUsersPercentage"] == 50.0
    assert vazio["usersCount"] == 0
    assert vazio["avgCompletedCourses"] == 0
    assert vazio["activeUsersPercentage"] == 0


def test_metrics_require_admin(client, user_headers):
    for path in ("dashboard", "users", "courses", "departments"):
        assert client.get(f"/api/metrics/{path}", headers=user_headers).status_code == 403
