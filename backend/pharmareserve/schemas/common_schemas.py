from typing import Generic, List, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Pagination(BaseModel):
    page: int
    limit: int
    pages: int


# Формат списків: {count, total, pagination, data}
class PageResponse(BaseModel, Generic[T]):
    count: int
    total: int
    pagination: Pagination
    data: List[T]


def page_response(page) -> dict:
    return {
        "count": len(page.items),
        "total": page.total,
        "pagination": {"page": page.page, "limit": page.limit, "pages": page.pages},
        "data": page.items,
    }


class MessageResponse(BaseModel):
    message: str
