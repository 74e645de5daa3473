"""
Sample data loader.
"""

import pytest

from student_api.core.database import init_storage
from student_api.schemas.student import StudentCreate
from student_api.seed import SAMPLE_STUDENTS, main, seed_data
from student_api.services.student.store import StudentStore


def test_seed_inserts_samples(store):
    assert seed_data(store) == 3

    emails = sorted(s.email for s in store.get_all())
    assert emails == sorted(s.email for s in SAMPLE_STUDENTS)


def test_seed_twice_keeps_three_rows(store):
    seed_data(store)
    seed_data(store)

    assert store.count() == 3


def test_seed_replaces_existing_row_with_same_email(store):
    store.insert(StudentCreate(name="Old John", email="john.doe@example.com"))

    seed_data(store)

    names = sorted(s.name for s in store.get_all())
    assert names == ["Bob Johnson", "Jane Smith", "John Doe"]


def test_main_initializes_database_file(tmp_path):
    db_path = tmp_path / "data" / "students.db"

    main(["--db", str(db_path)])

    store = StudentStore(init_storage(str(db_path)))
    try:
        assert store.count() == 3
    finally:
        store.close()


def test_main_exits_on_storage_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a regular file")

    with pytest.raises(SystemExit) as exc_info:
        main(["--db", str(blocker / "students.db")])

    assert exc_info.value.code == 1
