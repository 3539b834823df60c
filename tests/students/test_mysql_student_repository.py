from __future__ import annotations

import pytest
from mysql.connector import errors

from src.attentrack.attentrack.core.exceptions import ConnectionRefused, ConstraintViolation
from src.attentrack.attentrack.students.model import Student
from src.attentrack.attentrack.students.mysql_student_repository import MySQLStudentRepository


def test_list_all_orders_by_name(fake_db):
    fake_db.responses["FROM students"] = [
        {"id": 2, "name": "Aditi Patel", "rollNumber": "R002"},
        {"id": 1, "name": "Zara Ahmed", "rollNumber": "R001"},
    ]

    students = MySQLStudentRepository(fake_db).list_all()

    assert "ORDER BY name" in fake_db.statements()[0]
    assert students == [Student(2, "Aditi Patel", "R002"), Student(1, "Zara Ahmed", "R001")]
    assert fake_db.released == 1


def test_create_returns_assigned_id(fake_db):
    student = MySQLStudentRepository(fake_db).create(name="Aarav Sharma", roll_number="R001")

    assert student == Student(id=1, name="Aarav Sharma", roll_number="R001")
    assert fake_db.executed[0][1] == ("Aarav Sharma", "R001")
    assert fake_db.commits == 1


def test_create_duplicate_roll_number_is_constraint_violation(fake_db):
    fake_db.failures.append(
        ("INSERT INTO students", errors.IntegrityError(msg="Duplicate entry 'R001' for key 'rollNumber'", errno=1062))
    )

    with pytest.raises(ConstraintViolation):
        MySQLStudentRepository(fake_db).create(name="Other", roll_number="R001")

    assert fake_db.rollbacks == 1
    assert fake_db.released == 1


def test_update_missing_id_is_not_an_error(fake_db):
    fake_db.rowcount = 0
    student = Student(id=99, name="Nobody", roll_number="R099")

    assert MySQLStudentRepository(fake_db).update(student) == student
    assert fake_db.executed[0][1] == ("Nobody", "R099", 99)


def test_delete_reports_whether_a_row_went(fake_db):
    repo = MySQLStudentRepository(fake_db)
    assert repo.delete_by_id(1) is True

    fake_db.rowcount = 0
    assert repo.delete_by_id(1) is False
    assert fake_db.released == 2


def test_connectivity_loss_is_classified(fake_db):
    fake_db.failures.append(("SELECT", errors.OperationalError(msg="MySQL server has gone away", errno=2006)))

    with pytest.raises(ConnectionRefused):
        MySQLStudentRepository(fake_db).list_all()

    assert fake_db.released == 1
