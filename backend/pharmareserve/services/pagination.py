import math
from dataclasses import dataclass
from typing import Any, List

from sqlalchemy.orm import Query


@dataclass
class Page:
    items: List[Any]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def paginate(query: Query, page: int, limit: int) -> Page:
    page = max(page, 1)
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return Page(items=items, total=total, page=page, limit=limit)
