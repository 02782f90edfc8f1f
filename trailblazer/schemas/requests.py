"""
Pydantic schemas for API request bodies
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


class UserAuthRequest(BaseModel):
    """Request body for POST /auth/token"""
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class UserRegisterRequest(BaseModel):
    """Request body for POST /auth/register"""
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=5, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class UserUpdateRequest(BaseModel):
    """Request body for PATCH /users/{username}; only the fields sent are changed"""
    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=5, max_length=72)


class TripCreateRequest(BaseModel):
    """Request body for POST /trips"""
    trip_name: str = Field(..., min_length=1, max_length=200, examples=["Paris Trip"])
    start_date: date = Field(..., examples=["2025-06-01"])
    end_date: date = Field(..., examples=["2025-06-10"])
    location_city: str = Field(..., min_length=1, max_length=200, examples=["Paris"])
    location_country: str = Field(..., min_length=1, max_length=200, examples=["France"])
    interests: str = Field(..., min_length=1, examples=["art, food"])

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class TripUpdateRequest(BaseModel):
    """Request body for PATCH /trips/{trip_id}; only the fields sent are changed"""
    model_config = ConfigDict(extra="forbid")

    trip_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    location_city: Optional[str] = Field(default=None, min_length=1, max_length=200)
    location_country: Optional[str] = Field(default=None, min_length=1, max_length=200)
    interests: Optional[str] = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self
