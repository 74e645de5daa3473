import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from student_api.core.exceptions import StoreError
from student_api.models.student import Student
from student_api.schemas.student import StudentBase

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value; no row can have an id outside it
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def storable_id(student_id: int) -> bool:
    return MIN_ID <= student_id <= MAX_ID


class StudentStore:
    """
    Parameterized statements over the students table.

    One instance is built at startup and shared by every request. Failures
    surface as StoreError carrying the raw database message.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(
            bind=engine,
            autoflush=False,
            expire_on_commit=False,  # Rows stay readable after the session closes
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            message = str(getattr(e, "orig", None) or e)
            logger.error(f"Database error: {message}")
            raise StoreError(message) from e
        finally:
            db.close()

    def insert(self, student: StudentBase) -> int:
        """Insert a student and return the assigned id."""
        with self.session() as db:
            db_student = Student(**student.model_dump())
            db.add(db_student)
            db.commit()
            return db_student.id

    def get(self, student_id: int) -> Optional[Student]:
        """Return the student with this id, None when there is none."""
        if not storable_id(student_id):
            return None
        with self.session() as db:
            return db.get(Student, student_id)

    def get_all(self) -> List[Student]:
        with self.session() as db:
            return list(db.scalars(select(Student).order_by(Student.id)))

    def update(self, student_id: int, student: StudentBase) -> int:
        """Overwrite all four fields. Returns the number of rows changed."""
        if not storable_id(student_id):
            return 0
        with self.session() as db:
            result = db.execute(
                update(Student)
                .where(Student.id == student_id)
                .values(**student.model_dump()),
                execution_options={"synchronize_session": False},
            )
            db.commit()
            return result.rowcount

    def delete(self, student_id: int) -> int:
        """Remove a student. Returns the number of rows removed."""
        if not storable_id(student_id):
            return 0
        with self.session() as db:
            result = db.execute(
                delete(Student).where(Student.id == student_id),
                execution_options={"synchronize_session": False},
            )
            db.commit()
            return result.rowcount

    def upsert(self, student: StudentBase) -> int:
        """INSERT OR REPLACE keyed on the unique email. Returns the new id."""
        with self.session() as db:
            result = db.execute(
                insert(Student.__table__).prefix_with("OR REPLACE").values(**student.model_dump())
            )
            db.commit()
            return result.inserted_primary_key[0]

    def count(self) -> int:
        """Number of stored students."""
        with self.session() as db:
            return db.scalar(select(func.count()).select_from(Student))

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")
