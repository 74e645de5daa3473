from fastapi import Request

from student_api.services.student.store import StudentStore


def get_store(request: Request) -> StudentStore:
    """
    Dependency returning the record store built at startup.
    The store is attached to the application by create_app().
    """
    return request.app.state.store
