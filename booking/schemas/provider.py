from typing import Optional
from pydantic import BaseModel, Field, field_validator


class ProviderCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    specialty: Optional[str] = Field(None, max_length=200)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class ProviderResponse(BaseModel):
    id: int
    business_id: int
    name: str
    specialty: Optional[str] = None
    is_active: bool
