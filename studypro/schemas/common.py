from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator

from studypro.utils.dt import as_utc_aware

# SQLite returns naive datetimes; always emit them as UTC
UtcDatetime = Annotated[datetime, AfterValidator(as_utc_aware)]


def _scalar_to_text(value: Any) -> Any:
    # JSON numbers arrive for numeric UTRs and passwords; the services judge the text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


# Free-form text field whose content checks belong to the service layer
OptionalText = Annotated[str | None, BeforeValidator(_scalar_to_text)]


class OkOut(BaseModel):
    ok: bool = True
