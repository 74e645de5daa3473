from fastapi import status


class BaseAPIException(Exception):
    """
    Parent class for every error rendered by the HTTP layer.
    The message is sent to the client as a plain text body.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(self.message)


# =========================================================
# 1. REQUEST ERRORS
# =========================================================

class NotFoundException(BaseAPIException):
    """404: no row matches the requested id"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )


# =========================================================
# 2. STORAGE ERRORS
# =========================================================

class StoreError(BaseAPIException):
    """
    500: a statement failed inside the database.
    Covers constraint violations (duplicate email), connection and I/O errors.
    The message is the raw driver message.
    """
    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="STORE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


class StorageError(Exception):
    """The database location cannot be prepared. Fatal at startup."""


class PortInUseError(Exception):
    """The configured listen port is already bound by another process."""
    def __init__(self, host: str, port: int):
        self.host = host
        self.port = port
        super().__init__(f"port {port} on {host} is already in use")
