from typing import Optional

from fastapi import Query

from services.strategic import current_year

def get_year(year: Optional[int] = Query(None, ge=2000, le=2100)) -> int:
    return year if year is not None else current_year()
