import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from msc_api.core.validators import check_date, check_phone
from msc_api.models.account import Gender, Role


# Account as returned to clients (never includes the password hash)
class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    membership_id: str | None
    role: Role
    is_active: bool

    first_name: str | None
    middle_name: str | None
    last_name: str | None
    name_suffix: str | None
    birthdate: datetime.date | None
    gender: Gender | None

    student_no: str | None
    year_level: str | None
    college: str | None
    program: str | None
    section: str | None

    address: str | None
    phone: str | None
    facebook_link: str | None
    profile_image_path: str | None

    created_at: datetime.datetime
    updated_at: datetime.datetime


class ProfileUpdateRequest(BaseModel):
    """Partial profile update: omitted or null fields keep their value."""

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    name_suffix: str | None = Field(default=None, max_length=20)
    birthdate: datetime.date | None = None
    gender: Gender | None = None

    student_no: str | None = Field(default=None, min_length=1, max_length=30)
    year_level: str | None = Field(default=None, min_length=1, max_length=20)
    college: str | None = Field(default=None, min_length=1, max_length=150)
    program: str | None = Field(default=None, min_length=1, max_length=150)
    section: str | None = Field(default=None, max_length=50)

    address: str | None = Field(default=None, max_length=255)
    phone: str | None = None
    facebook_link: str | None = Field(default=None, max_length=255)
    profile_image_path: str | None = Field(default=None, max_length=255)

    @field_validator("birthdate", mode="before")
    @classmethod
    def _birthdate(cls, v):
        return None if v is None else check_date(v)

    @field_validator("year_level", mode="before")
    @classmethod
    def _year_level(cls, v):
        return str(v) if isinstance(v, int) else v

    @field_validator("phone")
    @classmethod
    def _phone(cls, v):
        return check_phone(v)
