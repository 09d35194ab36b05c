import math
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

class CamelRequest(BaseModel):
    """Request body accepting both camelCase and snake_case keys"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class PageMeta(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int

def page_meta(total: int, page: int, limit: int) -> dict:
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }

class Message(BaseModel):
    message: str
