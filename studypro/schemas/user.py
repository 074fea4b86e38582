from pydantic import BaseModel, ConfigDict

from studypro.schemas.billing import SubscriptionOut
from studypro.schemas.common import UtcDatetime

class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    created_at: UtcDatetime

class MeOut(BaseModel):
    user: UserOut
    subscription: SubscriptionOut | None
