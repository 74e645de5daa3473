from sqlalchemy import Column, Integer, String
from student_api.core.database import Base


class Student(Base):
    __tablename__ = "students"
    # AUTOINCREMENT: ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    linkedin_profile = Column(String)
    phone = Column(String)
