from datetime import date, datetime, time
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from fortis.schemas.exercise import ExerciseCatalogEntry


class LoggedSetEntry(BaseModel):
    """
    Одна запись журнала: упражнение, плановые и фактические значения, дата тренировки.
    Дата может прийти вложенной, как в выборке `workouts(date)`.
    """

    model_config = ConfigDict(populate_by_name=True)

    exercise: Optional[ExerciseCatalogEntry] = Field(
        None, validation_alias=AliasChoices("exercise", "exercises")
    )
    actual_weight: Optional[float] = Field(
        None, validation_alias=AliasChoices("actual_weight", "actualWeight")
    )
    planned_weight: Optional[float] = Field(
        None, validation_alias=AliasChoices("planned_weight", "plannedWeight", "weight")
    )
    actual_reps: Optional[int] = Field(
        None, validation_alias=AliasChoices("actual_reps", "actualReps")
    )
    planned_reps: Optional[int] = Field(
        None, validation_alias=AliasChoices("planned_reps", "plannedReps", "reps")
    )
    workout_date: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("workout_date", "workoutDate", "date")
    )

    @model_validator(mode="before")
    @classmethod
    def _lift_workout_date(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("workouts"), dict):
            nested_date = data["workouts"].get("date")
            if nested_date is not None and not any(
                key in data for key in ("workout_date", "workoutDate", "date")
            ):
                data = {**data, "workout_date": nested_date}
        return data

    @field_validator("workout_date", mode="before")
    @classmethod
    def _date_to_datetime(cls, value: Any) -> Any:
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        return value


class PersonalRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    weight: float
    reps: int
    date: Optional[datetime] = None
    exercise_id: Optional[int | str] = None
    target: Optional[str] = None
    bodypart: Optional[str] = None
    equipment: Optional[str] = None
    volume: float
    is_pr: bool = True
