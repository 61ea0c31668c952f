import math
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeviceTypeModel(str, Enum):
    mobile = "mobile"
    desktop = "desktop"

    @classmethod
    def from_query(cls, value: str | None) -> "DeviceTypeModel":
        """Only "mobile" selects the mobile board, anything else is desktop."""
        if value == cls.mobile.value:
            return cls.mobile
        return cls.desktop


class ScoreSubmissionModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    score: float
    device_type: DeviceTypeModel = Field(alias="deviceType")

    @field_validator("name", mode="before")
    @classmethod
    def check_name_is_text(cls, value):
        # Numbers are accepted and kept as their text, e.g. 12345 -> "12345".
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValueError("name must be a string")
        if isinstance(value, str):
            return value
        if not value:
            raise ValueError("name is required")
        return str(value)

    @field_validator("score", mode="before")
    @classmethod
    def check_score_is_number(cls, value):
        # bool is an int subclass but not a JSON number
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("score must be a number")
        try:
            finite = math.isfinite(value)
        except OverflowError:
            finite = False
        if not finite:
            raise ValueError("score must be finite")
        return value


class LeaderboardEntryModel(BaseModel):
    name: str
    score: Union[int, float]


class SubmitResultModel(BaseModel):
    success: bool


class QualificationModel(BaseModel):
    qualifies: bool


class ErrorModel(BaseModel):
    error: str


class MessageModel(BaseModel):
    message: str
