"""Strength training models: exercises, weekly plans and completions."""

from datetime import date as date_type, datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .metrics import to_camel


DEFAULT_TARGET = 100.0
ACCESSORY = "accessory"


class WorkoutType(str, Enum):
    """Kind of training day."""
    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    RECOVERY = "recovery"
    REST = "rest"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SetRecord(_CamelModel):
    """One logged working set."""

    date: date_type
    reps: int = Field(..., gt=0)
    weight: float = Field(..., gt=0, description="Load in kg")
    timestamp: datetime


class Exercise(_CamelModel):
    """Tracked lift with its set history and estimated 1RM."""

    current_1rm: float = Field(0.0, ge=0, alias="current1RM")
    sets: List[SetRecord] = Field(default_factory=list)
    target: float = Field(DEFAULT_TARGET, gt=0, description="Goal 1RM in kg")
    last_worked: Optional[date_type] = None

    @field_validator("current_1rm", mode="before")
    @classmethod
    def _unset_1rm(cls, value):
        return 0.0 if value is None else value

    @field_validator("target", mode="before")
    @classmethod
    def _unset_target(cls, value):
        # Missing or zero targets fall back to the default goal.
        return value or DEFAULT_TARGET


class ExercisePrescription(_CamelModel):
    """A planned exercise slot within a training day."""

    name: str
    sets: Optional[int] = Field(None, ge=0)
    reps: Optional[int] = Field(None, ge=0)
    intensity: Optional[float] = Field(None, gt=0, le=1, description="Fraction of 1RM")
    description: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0, description="Minutes, for recovery work")
    variant: Optional[str] = None

    @property
    def is_accessory(self) -> bool:
        return self.name == ACCESSORY


class DayWorkout(_CamelModel):
    """The workout prescribed for one weekday."""

    name: str
    type: WorkoutType
    exercises: List[ExercisePrescription] = Field(default_factory=list)
    estimated_time: int = Field(0, ge=0, description="Minutes")

    @property
    def total_sets(self) -> int:
        """Prescribed sets; slots without a set count contribute nothing."""
        return sum(ex.sets or 0 for ex in self.exercises)


# weekday name -> workout
WeekPlan = Dict[str, DayWorkout]


class CompletedWorkout(_CamelModel):
    """Record of a finished training day."""

    name: str
    type: WorkoutType
    completed_at: datetime
    total_sets: int = Field(0, ge=0)


class WorkoutState(_CamelModel):
    """Everything the progression engine reads and writes."""

    exercises: Dict[str, Exercise] = Field(default_factory=dict)
    # ISO Monday date -> weekday name -> workout
    weekly_plan: Dict[str, WeekPlan] = Field(default_factory=dict)
    # ISO date -> completion
    completed_workouts: Dict[str, CompletedWorkout] = Field(default_factory=dict)

    @classmethod
    def default(cls) -> "WorkoutState":
        """Starting lifts and targets for a new user."""
        return cls(
            exercises={
                "deadlift": Exercise(current_1rm=100, target=190),
                "squat": Exercise(current_1rm=80, target=150),
                "bench": Exercise(current_1rm=70, target=120),
                "pullup": Exercise(current_1rm=0, target=25),
                "row": Exercise(current_1rm=60, target=100),
                "ohp": Exercise(current_1rm=50, target=80),
            }
        )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class WeeklySummary(_CamelModel):
    """Completion counts for the current training week."""

    completed_days: int = 0
    total_days: int = 5
    total_sets: int = 0


class StrengthLevel(BaseModel):
    """Progress of one lift towards its target 1RM."""

    name: str
    current_1rm: float
    target: float
    progress_pct: float

    @property
    def reached(self) -> bool:
        return self.progress_pct >= 100
