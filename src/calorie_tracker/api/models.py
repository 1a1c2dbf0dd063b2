"""Pydantic models for tracker request and response payloads."""

from pydantic import BaseModel, ConfigDict, Field


class EntryCreate(BaseModel):
    """Payload for logging a meal or workout."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    calories: float = Field(ge=0, allow_inf_nan=False)


class LimitUpdate(BaseModel):
    """Payload for changing the daily calorie limit."""

    limit: float = Field(ge=0, allow_inf_nan=False)


class EntryOut(BaseModel):
    """A logged meal or workout."""

    id: str
    name: str
    calories: float


class SummaryOut(BaseModel):
    """Derived tracker values."""

    calorie_limit: float
    total_calories: float
    calories_consumed: float
    calories_burned: float
    calories_remaining: float
    progress_percentage: float
    over_limit: bool
