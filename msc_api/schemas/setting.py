from pydantic import BaseModel, ConfigDict


class SchoolYearUpdateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    # 4 digits, e.g. "2526" for SY 2025-2026
    school_year_code: str


class SchoolYearResponse(BaseModel):
    school_year_code: str
    is_default: bool
