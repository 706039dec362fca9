"""Daily metric and metabolic score models."""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..parsing import parse_optional_float, parse_optional_int


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


# =============================================================================
# Enums
# =============================================================================

class Factor(str, Enum):
    """Inputs to the composite metabolic score, in recommendation order."""
    SLEEP = "sleep"
    NUTRITION = "nutrition"
    PROTEIN = "protein"
    ACTIVITY = "activity"


class Impact(str, Enum):
    """How strongly a factor moves the composite score."""
    HIGH = "high"
    MEDIUM = "medium"


# =============================================================================
# Daily Entries
# =============================================================================

class DayEntry(BaseModel):
    """A single day's check-in.

    Every numeric field is optional. Values that fail to parse are stored as
    None rather than rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    weight: Optional[float] = Field(None, description="Body weight in kg")
    sleep_hours: Optional[float] = Field(None, description="Hours slept last night")
    calories: Optional[int] = Field(None, description="Calories eaten")
    steps: Optional[int] = Field(None, description="Step count")
    protein: Optional[float] = Field(None, description="Protein eaten in grams")
    flow_score: Optional[int] = Field(None, description="Subjective flow score 1-10")
    submitted_at: Optional[datetime] = None
    date: Optional[str] = None

    @field_validator("weight", "sleep_hours", "protein", mode="before")
    @classmethod
    def _parse_float(cls, value):
        return parse_optional_float(value)

    @field_validator("calories", "steps", mode="before")
    @classmethod
    def _parse_int(cls, value):
        return parse_optional_int(value)

    @field_validator("flow_score", mode="before")
    @classmethod
    def _parse_flow_score(cls, value):
        parsed = parse_optional_int(value)
        if parsed is None or not 1 <= parsed <= 10:
            return None
        return parsed

    @property
    def is_submitted(self) -> bool:
        return self.submitted_at is not None

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


DailyMetrics = Dict[str, DayEntry]


def as_day_entry(entry: Union[DayEntry, dict, None]) -> DayEntry:
    """Accept either a DayEntry or its JSON form."""
    if isinstance(entry, DayEntry):
        return entry
    return DayEntry.model_validate(entry or {})


def daily_metrics_from_dict(data: Optional[dict]) -> DailyMetrics:
    """Build DailyMetrics from its persisted JSON form."""
    return {day: DayEntry.model_validate(entry or {}) for day, entry in (data or {}).items()}


def daily_metrics_to_dict(metrics: DailyMetrics) -> dict:
    """Convert DailyMetrics to its persisted JSON form."""
    return {day: entry.to_dict() for day, entry in metrics.items()}


# =============================================================================
# Score Models
# =============================================================================

class FactorScore(BaseModel):
    """Score for one factor of the metabolic score."""

    score: float = Field(..., ge=0, le=100)
    impact: Impact


class AverageData(BaseModel):
    """Window averages the factor scores were computed from."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    sleep_hours: float
    calories: float
    protein: float
    steps: float


class ScoreResult(BaseModel):
    """Composite metabolic efficiency score with recommendations."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    score: int = Field(..., ge=0, le=100)
    factors: Dict[str, FactorScore]
    recommendations: List[str] = Field(default_factory=list)
    avg_data: AverageData


class Compliance(BaseModel):
    """Single-day compliance values (0-100) for one check-in."""

    sleep: float = Field(..., ge=0, le=100)
    nutrition: float = Field(..., ge=0, le=100)
    movement: float = Field(..., ge=0, le=100)


# =============================================================================
# Weight Progress
# =============================================================================

class WeightPoint(BaseModel):
    """One logged body weight."""

    date: str = Field(..., description="ISO date of the check-in")
    weight: float = Field(..., gt=0, description="Body weight in kg")


class WeightProgress(BaseModel):
    """Logged body weights in date order."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    history: List[WeightPoint] = Field(default_factory=list)

    @property
    def data_points(self) -> int:
        return len(self.history)

    @property
    def latest_weight(self) -> Optional[float]:
        return self.history[-1].weight if self.history else None
