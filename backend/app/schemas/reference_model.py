from typing import List

from app.schemas.common import CamelModel


class ReferenceModelResponse(CamelModel):
    id: str
    name: str
    short_name: str
    description: str
    component_types: List[str]
    icon: str
