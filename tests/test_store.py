"""
Record store tests against an in-memory database.
"""

import pytest
from sqlalchemy import insert

from student_api.core.exceptions import StoreError
from student_api.models.student import Student as StudentRow
from student_api.schemas.student import Student, StudentCreate, StudentUpdate


def make_student(email="grace@example.com", name="Grace Hopper"):
    return StudentCreate(
        name=name,
        email=email,
        linkedin_profile="https://linkedin.com/in/grace",
        phone="+1-555-000-1111",
    )


class TestInsert:

    def test_returns_assigned_id(self, store):
        assert store.insert(make_student()) == 1
        assert store.insert(make_student(email="other@example.com")) == 2

    def test_duplicate_email_is_rejected(self, store):
        store.insert(make_student())

        with pytest.raises(StoreError) as exc_info:
            store.insert(make_student(name="Someone Else"))

        assert "UNIQUE constraint failed" in exc_info.value.message
        assert exc_info.value.status_code == 500
        assert store.count() == 1

    def test_store_usable_after_failed_insert(self, store):
        store.insert(make_student())
        with pytest.raises(StoreError):
            store.insert(make_student())

        assert store.insert(make_student(email="next@example.com")) == 2


class TestGet:

    def test_get_returns_stored_fields(self, store):
        student_id = store.insert(make_student())

        student = store.get(student_id)

        assert student.id == student_id
        assert student.name == "Grace Hopper"
        assert student.email == "grace@example.com"
        assert student.linkedin_profile == "https://linkedin.com/in/grace"
        assert student.phone == "+1-555-000-1111"

    def test_get_missing_returns_none(self, store):
        assert store.get(42) is None

    def test_get_all_empty(self, store):
        assert store.get_all() == []

    def test_get_all_in_id_order(self, store):
        store.insert(make_student(email="a@example.com", name="A"))
        store.insert(make_student(email="b@example.com", name="B"))

        assert [s.name for s in store.get_all()] == ["A", "B"]


class TestUpdate:

    def test_update_replaces_all_fields(self, store):
        student_id = store.insert(make_student())

        changed = store.update(
            student_id,
            StudentUpdate(name="G. Hopper", email="gh@example.com", linkedin_profile="", phone=""),
        )

        assert changed == 1
        student = store.get(student_id)
        assert student.name == "G. Hopper"
        assert student.email == "gh@example.com"
        assert student.linkedin_profile == ""
        assert student.phone == ""

    def test_update_with_identical_values_counts_the_row(self, store):
        student_id = store.insert(make_student())

        assert store.update(student_id, make_student()) == 1

    def test_update_missing_returns_zero(self, store):
        assert store.update(7, make_student()) == 0
        assert store.count() == 0

    def test_update_to_taken_email_fails(self, store):
        store.insert(make_student(email="a@example.com"))
        second = store.insert(make_student(email="b@example.com"))

        with pytest.raises(StoreError):
            store.update(second, make_student(email="a@example.com"))


class TestDelete:

    def test_delete_then_missing(self, store):
        student_id = store.insert(make_student())

        assert store.delete(student_id) == 1
        assert store.get(student_id) is None
        assert store.delete(student_id) == 0

    def test_ids_are_not_reused(self, store):
        first = store.insert(make_student())
        store.delete(first)

        assert store.insert(make_student()) == first + 1


class TestIdRange:

    def test_out_of_range_id_matches_nothing(self, store):
        store.insert(make_student())

        assert store.get(2 ** 63) is None
        assert store.update(2 ** 63, make_student()) == 0
        assert store.delete(2 ** 63) == 0
        assert store.count() == 1


class TestNullText:

    def test_null_input_is_stored_as_empty_string(self, store):
        student_id = store.insert(StudentCreate(name="Ada", email="ada@example.com", phone=None))

        assert store.get(student_id).phone == ""

    def test_sql_null_row_serializes_as_empty_string(self, store):
        with store.engine.begin() as connection:
            connection.execute(
                insert(StudentRow.__table__).values(name="Ada", email="ada@example.com", phone=None)
            )

        student = Student.model_validate(store.get_all()[0])

        assert student.phone == ""
        assert student.linkedin_profile == ""


class TestUpsert:

    def test_upsert_replaces_row_with_same_email(self, store):
        store.upsert(make_student(name="Old Name"))
        store.upsert(make_student(name="New Name"))

        students = store.get_all()
        assert len(students) == 1
        assert students[0].name == "New Name"
