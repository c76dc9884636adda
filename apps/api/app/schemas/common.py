from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # Wire format is camelCase (memberId, shiftTime, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Pagination(BaseModel):
    current: int
    pages: int
    total: int
    limit: int


def paginate(page: int, limit: int, total: int) -> Pagination:
    pages = (total + limit - 1) // limit if limit else 0
    return Pagination(current=page, pages=pages, total=total, limit=limit)
