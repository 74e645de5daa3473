import argparse
import logging
import sys
from typing import List, Optional

from student_api.core.config import Settings, settings
from student_api.core.database import init_storage
from student_api.core.exceptions import StorageError, StoreError
from student_api.core.logging import setup_logging
from student_api.schemas.student import StudentCreate
from student_api.services.student.store import StudentStore

logger = logging.getLogger(__name__)

SAMPLE_STUDENTS = [
    StudentCreate(
        name="John Doe",
        email="john.doe@example.com",
        linkedin_profile="https://linkedin.com/in/johndoe",
        phone="+1-555-123-4567",
    ),
    StudentCreate(
        name="Jane Smith",
        email="jane.smith@example.com",
        linkedin_profile="https://linkedin.com/in/janesmith",
        phone="+1-555-234-5678",
    ),
    StudentCreate(
        name="Bob Johnson",
        email="bob.johnson@example.com",
        linkedin_profile="https://linkedin.com/in/bobjohnson",
        phone="+1-555-345-6789",
    ),
]


def seed_data(store: StudentStore, students: List[StudentCreate] = SAMPLE_STUDENTS) -> int:
    """
    Insert or replace the sample students, keyed on email.
    A failing row is logged and skipped. Returns the number of rows written.
    """
    logger.info("Seeding data...")
    written = 0
    for student in students:
        try:
            store.upsert(student)
            written += 1
        except StoreError as e:
            logger.error(f"❌ Error inserting data for {student.name}: {e}")
            continue

    logger.info(f"✅ Seeded {written} students")
    return written


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Initialize the students database with sample data")
    parser.add_argument("--db", default=settings.DATABASE_PATH, help="Path to SQLite database file")
    args = parser.parse_args(argv)

    config = Settings(DATABASE_PATH=args.db)
    setup_logging(config.LOG_LEVEL)

    try:
        engine = init_storage(config.DATABASE_PATH, strict=config.STRICT_STORAGE_CHECKS)
    except StorageError as e:
        logger.critical(f"❌ Failed to initialize database: {e}")
        sys.exit(1)

    store = StudentStore(engine)
    try:
        seed_data(store)
        logger.info(f"Database now holds {store.count()} students")
    finally:
        store.close()

    logger.info(f"Database initialized successfully at: {config.DATABASE_PATH}")


if __name__ == "__main__":
    main()
