from pydantic import BaseModel, EmailStr, Field, field_validator


def validate_password_strength(v: str) -> str:
    if len(v) < 6:
        raise ValueError("Password must be at least 6 characters")
    return v


# ─── Register ─────────────────────────────────────────────────────────────────
class RegisterRequest(BaseModel):
    name:     str = Field(default="", max_length=150)
    email:    EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def check_password(cls, v): return validate_password_strength(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v): return v.strip()

    @field_validator("email")
    @classmethod
    def lower_email(cls, v): return str(v).lower()


# ─── Login ────────────────────────────────────────────────────────────────────
class LoginRequest(BaseModel):
    email:    EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, v): return str(v).lower()
