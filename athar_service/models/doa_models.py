from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class DoaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    api_id: int
    group: str
    name: str
    arabic: str
    latin: str
    meaning: str
    description: str
    tags: List[str] = []


class DoaRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    api_id: int
    name: str


class DoaDetail(DoaOut):
    prev_info: Optional[DoaRef] = None
    next_info: Optional[DoaRef] = None
