import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from msc_api.core.validators import check_date, check_password, check_phone
from msc_api.models.account import Gender, Role


class RegisterRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(max_length=72)

    first_name: str = Field(min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    name_suffix: str | None = Field(default=None, max_length=20)
    birthdate: datetime.date
    gender: Gender

    student_no: str = Field(min_length=1, max_length=30)
    year_level: str = Field(min_length=1, max_length=20)
    college: str = Field(min_length=1, max_length=150)
    program: str = Field(min_length=1, max_length=150)
    section: str | None = Field(default=None, max_length=50)

    address: str | None = Field(default=None, max_length=255)
    phone: str | None = None
    facebook_link: str | None = Field(default=None, max_length=255)

    # officer accounts can only be created by an authenticated officer
    role: Role = Role.MEMBER

    @field_validator("password")
    @classmethod
    def _password(cls, v):
        return check_password(v)

    @field_validator("birthdate", mode="before")
    @classmethod
    def _birthdate(cls, v):
        return check_date(v)

    @field_validator("year_level", mode="before")
    @classmethod
    def _year_level(cls, v):
        return str(v) if isinstance(v, int) else v

    @field_validator("phone")
    @classmethod
    def _phone(cls, v):
        return check_phone(v)


class LoginRequest(BaseModel):
    # username or email
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., max_length=72)

    @field_validator("new_password")
    @classmethod
    def _new_password(cls, v):
        return check_password(v)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr
