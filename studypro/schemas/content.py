from pydantic import BaseModel, ConfigDict

from studypro.schemas.common import OptionalText, UtcDatetime

class ContentIn(BaseModel):
    title: OptionalText = None
    description: OptionalText = None
    meta: OptionalText = None
    status: OptionalText = None

class ContentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    section: str
    title: str
    description: str
    meta: str
    status: str
    created_at: UtcDatetime
    updated_at: UtcDatetime

class ContentListOut(BaseModel):
    section: str
    rows: list[ContentOut]
