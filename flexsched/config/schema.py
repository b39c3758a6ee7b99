"""Configuration schema using Pydantic."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from flexsched.frequency.windows import DEFAULT_TIMEZONE

SUPPORTED_LOCALES = ("en", "fr")


class SchedulerSettings(BaseModel):
    """Settings shared by every next-run computation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timezone: str = Field(
        default=DEFAULT_TIMEZONE,
        description="IANA timezone whose civil time windows and weekdays refer to",
    )
    locale: str = Field(
        default="en",
        description="Language of run descriptions and formatted frequencies",
    )
    preview_count: int = Field(
        default=5,
        description="Number of upcoming runs shown by `flexsched next`",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            raise ValueError(f"unknown timezone '{v}'") from None
        return v

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        if v not in SUPPORTED_LOCALES:
            raise ValueError(f"unsupported locale '{v}' (expected one of: {', '.join(SUPPORTED_LOCALES)})")
        return v

    @field_validator("preview_count")
    @classmethod
    def validate_preview_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError("preview_count must be at least 1")
        return v
