from pydantic import BaseModel

from studypro.schemas.billing import PaymentOut
from studypro.schemas.common import OptionalText

class OverviewOut(BaseModel):
    users: int
    payments: int
    revenue: int
    active_subscriptions: int
    courses: int
    books: int
    pyqs: int
    mock: int

class AdminPaymentOut(PaymentOut):
    # Joined from the owning user, "-" when the user row is gone
    name: str
    email: str

class DeclineIn(BaseModel):
    reason: OptionalText = ""
