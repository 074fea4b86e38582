from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from studypro.schemas.common import OptionalText, UtcDatetime

class PlanOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    amount: int
    days: int

class SubmitPaymentIn(BaseModel):
    # Shape checks live in the payment workflow so they surface as 400s, not 422s
    plan_key: OptionalText = Field(default=None, validation_alias=AliasChoices("plan_key", "planKey"))
    reference_code: OptionalText = Field(
        default=None,
        validation_alias=AliasChoices("reference_code", "referenceCode", "utr"),
    )

class PaymentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    plan_key: str
    amount: int
    payment_ref: str
    utr: str
    status: str
    review_note: str
    reviewed_by: int | None
    reviewed_at: UtcDatetime | None
    created_at: UtcDatetime

class SubscriptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    payment_id: int | None
    plan_key: str
    amount: int
    starts_at: UtcDatetime
    ends_at: UtcDatetime
    status: str
    created_at: UtcDatetime

class AccessOut(BaseModel):
    section: str
    allowed: bool
    subscription: SubscriptionOut | None
