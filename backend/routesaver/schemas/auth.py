"""Auth Schemas — register/login payloads and the user summary envelope.

Invariants:
    - Request fields are optional at the schema level so that a missing field
      produces the pt-BR message from core/validation.py, not a Pydantic one
    - UserOut never has a password field
"""

from pydantic import BaseModel

from routesaver.core.domain_types import UserSummary


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "Ana",
                "email": "a@x.com",
                "password": "secret1",
            }
        }
    }


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOut(BaseModel):
    id: str
    name: str
    email: str

    @classmethod
    def from_summary(cls, user: UserSummary) -> "UserOut":
        return cls(**user.to_dict())


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    user: UserOut


class MeResponse(BaseModel):
    success: bool = True
    user: UserOut
