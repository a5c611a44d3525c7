"""
Health data models for the FitnessMedia application.

Classes:
    HealthDataType: Health data the application reads
    HealthSample: One quantity sample from a health data source
    HealthSnapshot: Today's health values shown on the detail view
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class HealthDataType(str, Enum):
    """
    Health data types the application requests read access to.

    Values are the HealthKit type identifiers, which are also the record
    types used in Apple Health exports.
    """

    DATE_OF_BIRTH = "HKCharacteristicTypeIdentifierDateOfBirth"
    STEP_COUNT = "HKQuantityTypeIdentifierStepCount"
    ACTIVE_ENERGY_BURNED = "HKQuantityTypeIdentifierActiveEnergyBurned"


QUANTITY_TYPES = (HealthDataType.STEP_COUNT, HealthDataType.ACTIVE_ENERGY_BURNED)
READ_TYPES = frozenset(HealthDataType)


class HealthSample(BaseModel):
    """
    A single quantity sample.

    Values are in the canonical unit of their type: a count for steps and
    kilocalories for active energy.

    Attributes:
        data_type: Quantity type of the sample
        value: Sample value in the canonical unit
        start_date: Timezone-aware start of the sample
        end_date: Timezone-aware end of the sample
    """

    model_config = ConfigDict(frozen=True)

    data_type: HealthDataType
    value: float = Field(..., ge=0.0)
    start_date: datetime
    end_date: datetime

    @field_validator("data_type")
    @classmethod
    def validate_quantity_type(cls, v: HealthDataType) -> HealthDataType:
        if v not in QUANTITY_TYPES:
            raise ValueError(f"{v.value} is not a quantity type")
        return v

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_timezone(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("Sample dates must be timezone-aware")
        return v

    @model_validator(mode="after")
    def validate_range(self) -> "HealthSample":
        if self.end_date < self.start_date:
            raise ValueError("Sample end_date precedes start_date")
        return self


class HealthSnapshot(BaseModel):
    """
    Today's health values.

    Snapshots are immutable; the health service replaces its snapshot with
    an updated copy on each delivered result. Missing data keeps the
    defaults.

    Attributes:
        date_of_birth: Date of birth, None if unavailable
        steps: Steps taken today
        active_energy_burned: Active energy burned today in kilocalories
    """

    model_config = ConfigDict(frozen=True)

    date_of_birth: Optional[date] = None
    steps: int = Field(0, ge=0)
    active_energy_burned: float = Field(0.0, ge=0.0)
