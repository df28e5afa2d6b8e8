from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class WorkoutSelection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    equipment: List[str]
    muscle_group: str | List[str] = Field(
        validation_alias=AliasChoices("muscle_group", "muscleGroup")
    )
    fitness_level: Optional[str] = Field(
        None, validation_alias=AliasChoices("fitness_level", "fitnessLevel")
    )
    goal: Optional[str] = None


class GeneratedExercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int | str] = None
    name: Optional[str] = None
    equipment: Optional[str] = None
    target: Optional[str] = None
    body_part: Optional[str] = None
    gif_url: Optional[str] = None
    sets: int
    reps: int
    weight: int


class CompletedSet(BaseModel):
    weight: float = 0
    reps: int = 0


class PlannedExercise(BaseModel):
    exercise_id: Optional[int | str] = None
    exercise_name: Optional[str] = None
    planned_sets: int = 3
    planned_reps: int = 10
    planned_weight: Optional[float] = None
    equipment: str = ""
    completed_sets: List[CompletedSet] = Field(default_factory=list)


class CompletedWorkout(BaseModel):
    is_custom: bool = False
    equipment: List[str] = Field(default_factory=list)
    muscle_group: str | List[str] = ""
    date: datetime
    duration: int
    total_volume: float
    exercises: List[PlannedExercise]


class WorkoutExerciseCreate(BaseModel):
    exercise_id: int
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight: Optional[float] = None


class WorkoutHistoryExercise(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    exercise_id: Optional[int] = None
    exercise_name: Optional[str] = None
    sets: Optional[int] = None
    reps: Optional[int] = None
    weight: Optional[float] = None
    actual_reps: Optional[int] = None
    actual_weight: Optional[float] = None


class WorkoutHistoryItem(BaseModel):
    """Тренировка из истории пользователя с посчитанным общим объемом."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    date: datetime
    intensity: Optional[int] = None
    muscle_group: Optional[str] = None
    duration: Optional[int] = None
    exercises: List[WorkoutHistoryExercise] = Field(default_factory=list)
    total_volume: float = 0


class DashboardStats(BaseModel):
    weekly_workouts: int = 0
    current_streak: int = 0
    total_volume: float = 0
    last_workout: Optional[WorkoutHistoryItem] = None
    weekly_goal: int
    weekly_progress: float = 0
    today_workout: bool = False
    calories_burned: int = 0


class ProgressStats(BaseModel):
    total_workouts: int = 0
    total_volume: float = 0
    avg_workout_time: int = 0
    favorite_exercise: str = "None yet"
    volume_change: int = 0
    muscle_group_distribution: dict[str, int] = Field(default_factory=dict)
