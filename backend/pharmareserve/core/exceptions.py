"""
Доменні помилки. Сервіси кидають їх, а main.py перетворює на HTTP відповіді.
"""
from fastapi import status


class DomainError(Exception):
    kind = "error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(DomainError):
    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(DomainError):
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class ValidationError(DomainError):
    kind = "validation"
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
