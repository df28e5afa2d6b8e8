import logging
from datetime import datetime
from typing import Any, Iterable

from fortis.schemas.workout import (
    CompletedSet,
    CompletedWorkout,
    GeneratedExercise,
    PlannedExercise,
)


class WorkoutSession:
    """
    Текущая тренировка пользователя: план, выполненные подходы, время начала.
    После `complete` состояние сбрасывается.
    """

    def __init__(self):
        self._reset()

    def _reset(self) -> None:
        self.exercises: list[PlannedExercise] = []
        self.equipment: list[str] = []
        self.muscle_group: str | list[str] = ""
        self.is_custom = False
        self.started_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.started_at is not None

    def start(
        self,
        generated: Iterable[GeneratedExercise],
        equipment: list[str],
        muscle_group: str | list[str],
        is_custom: bool = False,
        started_at: datetime | None = None,
    ) -> list[PlannedExercise]:
        self.equipment = list(equipment)
        self.muscle_group = muscle_group
        self.is_custom = is_custom
        self.started_at = started_at or datetime.now()
        # Для своей тренировки план собирается вручную через add_exercise
        self.exercises = [] if is_custom else [
            PlannedExercise(
                exercise_id=ex.id,
                exercise_name=ex.name,
                planned_sets=ex.sets,
                planned_reps=ex.reps,
                planned_weight=ex.weight,
                equipment=ex.equipment or "",
            )
            for ex in generated
        ]
        logging.info(
            f"Started workout: {len(self.exercises)} exercises, "
            f"muscle_group={muscle_group!r}, custom={is_custom}"
        )
        return self.exercises

    def _find(self, exercise_id: Any) -> PlannedExercise | None:
        return next((ex for ex in self.exercises if ex.exercise_id == exercise_id), None)

    def add_set(
        self, exercise_id: Any, set_data: CompletedSet | dict, index: int | None = None
    ) -> None:
        """Добавляет подход или обновляет подход с индексом `index`, если он есть."""
        exercise = self._find(exercise_id)
        if not self.is_active or exercise is None:
            return

        if isinstance(set_data, CompletedSet):
            set_data = set_data.model_dump(exclude_unset=True)

        if index is not None and index < len(exercise.completed_sets):
            current = exercise.completed_sets[index]
            exercise.completed_sets[index] = current.model_copy(update=set_data)
        else:
            exercise.completed_sets.append(CompletedSet.model_validate(set_data))

    def add_exercise(self, exercise: PlannedExercise | dict) -> None:
        if not self.is_active:
            return
        if isinstance(exercise, PlannedExercise):
            exercise = exercise.model_dump(exclude={"planned_sets", "planned_reps", "completed_sets"})
        if self._find(exercise.get("exercise_id")) is not None:
            return

        self.exercises.append(
            PlannedExercise.model_validate(
                {**exercise, "planned_sets": 3, "planned_reps": 10, "completed_sets": []}
            )
        )

    def remove_exercise(self, exercise_id: Any) -> None:
        if not self.is_active:
            return
        self.exercises = [ex for ex in self.exercises if ex.exercise_id != exercise_id]
        logging.info(f"Removed exercise {exercise_id} from workout")

    def complete(self, finished_at: datetime | None = None) -> CompletedWorkout | None:
        """Завершает тренировку и возвращает итог: длительность в секундах и общий объем."""
        if not self.is_active:
            return None

        finished_at = finished_at or datetime.now()
        total_volume = sum(
            s.weight * s.reps for ex in self.exercises for s in ex.completed_sets
        )
        completed = CompletedWorkout(
            is_custom=self.is_custom,
            equipment=self.equipment,
            muscle_group=self.muscle_group,
            date=finished_at,
            duration=int((finished_at - self.started_at).total_seconds()),
            total_volume=total_volume,
            exercises=self.exercises,
        )
        self._reset()
        return completed
