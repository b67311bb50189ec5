from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ---------- Inputs ----------

class CredentialsIn(BaseModel):
    email: str = Field(min_length=1, max_length=254, examples=["a@x.com"])
    password: str = Field(min_length=1, max_length=128, examples=["secret1"])

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        value = value.strip()
        if not value or "@" not in value:
            raise ValueError("A valid email is required")
        return value

    @field_validator("password")
    @classmethod
    def non_blank_password(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Password must not be blank")
        return value


class RegisterIn(CredentialsIn):
    pass


class LoginIn(CredentialsIn):
    pass


# ---------- Outputs ----------

class TokenOut(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int  # secondes
    user_id: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
