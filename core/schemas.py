from datetime import date, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from core.utils.dates import from_date_key, to_date_key


def _coerce_number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number or number < 0:  # NaN or negative
        return 0.0
    return number


def _coerce_id(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


class ExerciseTemplate(BaseModel):
    name: str = ""
    sets: int = Field(default=0, ge=0)
    reps: int = Field(default=0, ge=0)
    model_config = ConfigDict(extra="ignore")

    @field_validator("sets", "reps", mode="before")
    @classmethod
    def _normalize_target(cls, value: Any) -> int:
        return int(_coerce_number(value))


class Routine(BaseModel):
    id: str | None = None
    user_id: str | None = None
    name: str = ""
    exercises: list[ExerciseTemplate] = Field(default_factory=list)
    model_config = ConfigDict(extra="ignore")

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _normalize_ids(cls, value: Any) -> str | None:
        return _coerce_id(value)

    @property
    def is_valid(self) -> bool:
        return bool(self.name) and bool(self.exercises)

    @property
    def is_saved(self) -> bool:
        return self.id is not None


class WorkoutSet(BaseModel):
    weight: float = Field(default=0.0, ge=0)
    reps: int = Field(default=0, ge=0)
    model_config = ConfigDict(extra="ignore")

    @field_validator("weight", mode="before")
    @classmethod
    def _normalize_weight(cls, value: Any) -> float:
        return _coerce_number(value)

    @field_validator("reps", mode="before")
    @classmethod
    def _normalize_reps(cls, value: Any) -> int:
        return int(_coerce_number(value))

    @property
    def volume(self) -> float:
        return self.weight * self.reps

    @property
    def is_empty(self) -> bool:
        return self.weight == 0 and self.reps == 0


class WorkoutExercise(BaseModel):
    name: str = ""
    sets: list[WorkoutSet] = Field(default_factory=list)
    model_config = ConfigDict(extra="ignore")


def _normalize_date_key(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return to_date_key(value)
    if isinstance(value, str):
        if not value.strip():
            raise ValueError("workout date is empty")
        # unpadded or timestamped keys would never match the calendar lookups
        return to_date_key(from_date_key(value))
    return value


class Workout(BaseModel):
    """A persisted training session.

    ``routine_name`` is a snapshot of the routine's name at logging time; it is
    never updated when the source routine is renamed or deleted.
    """

    id: str | None = None
    user_id: str | None = None
    routine_name: str = Field(default="", validation_alias=AliasChoices("routine_name", "routineName"))
    date: str
    exercises: list[WorkoutExercise] = Field(default_factory=list)
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _normalize_ids(cls, value: Any) -> str | None:
        return _coerce_id(value)

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> Any:
        return _normalize_date_key(value)

    @property
    def is_saved(self) -> bool:
        return self.id is not None


class WorkoutSession(BaseModel):
    """An in-progress (draft) workout being logged or re-edited."""

    id: str | None = None
    name: str = ""
    date: str
    exercises: list[WorkoutExercise] = Field(default_factory=list)
    is_editing: bool = False
    from_calendar: bool = False
    model_config = ConfigDict(extra="ignore")

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> Any:
        return _normalize_date_key(value)


class ExerciseSummary(BaseModel):
    name: str
    total_sets: int
    total_reps: int
    total_volume: float
    max_weight: float
    performed: bool


class ChartPoint(BaseModel):
    date: str
    max_weight: float
    total_volume: float


class CalendarDay(BaseModel):
    date: date
    is_current_month: bool


class ProgressStats(BaseModel):
    workouts: int = 0
    exercises: int = 0
    active_days: int = 0
