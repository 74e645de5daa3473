from typing import List

from fastapi import APIRouter, Depends, Response, status

from student_api.api.deps import get_store
from student_api.core.exceptions import NotFoundException
from student_api.schemas.student import Student, StudentCreate, StudentUpdate
from student_api.services.student.store import StudentStore

router = APIRouter()

NOT_FOUND_MESSAGE = "Student not found"


@router.get("", response_model=List[Student])
def get_students(store: StudentStore = Depends(get_store)):
    """
    List every student. An empty table yields an empty array.
    """
    return store.get_all()


@router.get("/{student_id}", response_model=Student)
def get_student(
    student_id: int,
    store: StudentStore = Depends(get_store)
):
    """
    Get one student by ID
    """
    student = store.get(student_id)
    if student is None:
        raise NotFoundException(NOT_FOUND_MESSAGE)
    return student


@router.post("", response_model=Student, status_code=status.HTTP_201_CREATED)
def create_student(
    student: StudentCreate,
    store: StudentStore = Depends(get_store)
):
    """
    Create a student

    - **name**: required
    - **email**: required, must be unique (enforced by the database)
    - **linkedin_profile**: optional
    - **phone**: optional
    """
    student_id = store.insert(student)
    return Student(id=student_id, **student.model_dump())


@router.put("/{student_id}", response_model=Student)
def update_student(
    student_id: int,
    student: StudentUpdate,
    store: StudentStore = Depends(get_store)
):
    """
    Replace all fields of a student. The id comes from the path.
    """
    if store.update(student_id, student) == 0:
        raise NotFoundException(NOT_FOUND_MESSAGE)
    return Student(id=student_id, **student.model_dump())


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(
    student_id: int,
    store: StudentStore = Depends(get_store)
):
    """
    Delete a student
    """
    if store.delete(student_id) == 0:
        raise NotFoundException(NOT_FOUND_MESSAGE)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
