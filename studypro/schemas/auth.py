from pydantic import BaseModel

from studypro.schemas.common import OptionalText
from studypro.schemas.user import UserOut

class RegisterIn(BaseModel):
    name: OptionalText = None
    email: OptionalText = None
    password: OptionalText = None

class LoginIn(BaseModel):
    email: OptionalText = None
    password: OptionalText = None

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
