"""Pydantic models for API request payloads."""

import datetime

from pydantic import BaseModel, ConfigDict, Field


class RequestModel(BaseModel):
    """Base for request bodies; numbers must be finite."""

    model_config = ConfigDict(allow_inf_nan=False)


class VialCreate(RequestModel):
    """Request to register a vial."""

    compound_id: str
    size: float
    custom_size: float | None = None


class VialRemainingUpdate(RequestModel):
    """Administrative correction of a vial's remaining content."""

    remaining: float


class InjectionCreate(RequestModel):
    """Request to log a dose."""

    date: datetime.date = Field(default_factory=datetime.date.today)
    compound_id: str
    dose: float
    vial_id: str | None = None


class CycleUpdate(RequestModel):
    """Cycle override in days."""

    days: int


class WeightCreate(RequestModel):
    """Request to record a weight."""

    date: datetime.date = Field(default_factory=datetime.date.today)
    weight: float


class TargetWeightUpdate(RequestModel):
    """Target weight; null clears it."""

    target_weight: float | None = None
