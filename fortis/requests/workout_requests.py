from datetime import datetime
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from database.models import Workout, WorkoutExercise
from fortis.schemas.exercise import ExerciseCatalogEntry
from fortis.schemas.record import LoggedSetEntry
from fortis.schemas.workout import WorkoutExerciseCreate


async def save_workout(
    session: AsyncSession,
    user_id: int,
    exercises: list[WorkoutExerciseCreate],
    intensity: int | None = None,
    muscle_group: str | list[str] | None = None,
    duration: int | None = None,
    date: datetime | None = None,
) -> Workout:
    """
    Создает тренировку и плановые упражнения к ней в одной транзакции.
    """
    if isinstance(muscle_group, list):
        muscle_group = ", ".join(muscle_group)

    workout = Workout(
        user_id=user_id,
        date=date or datetime.now(),
        intensity=intensity,
        muscle_group=muscle_group,
        duration=duration,
    )
    session.add(workout)
    await session.flush()  # Получаем ID тренировки

    session.add_all(
        [
            WorkoutExercise(
                workout_id=workout.id,
                exercise_id=ex.exercise_id,
                sets=ex.sets,
                reps=ex.reps,
                weight=ex.weight,
            )
            for ex in exercises
        ]
    )
    await session.commit()

    return await get_workout_with_exercises(session, workout.id)


async def get_workout_with_exercises(
    session: AsyncSession, workout_id: int
) -> Workout | None:
    """
    Получает тренировку со всеми связанными упражнениями.
    """
    stmt = (
        select(Workout)
        .where(Workout.id == workout_id)
        .options(selectinload(Workout.workout_exercises).selectinload(WorkoutExercise.exercise))
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def log_actual_performance(
    session: AsyncSession,
    workout_exercise_id: int,
    actual_weight: float | None,
    actual_reps: int | None,
) -> WorkoutExercise | None:
    """Записывает фактически выполненные вес и повторения."""
    workout_exercise = await session.get(WorkoutExercise, workout_exercise_id)
    if workout_exercise:
        workout_exercise.actual_weight = actual_weight
        workout_exercise.actual_reps = actual_reps
        await session.commit()
        await session.refresh(workout_exercise)
    return workout_exercise


async def get_workouts_with_exercises(
    session: AsyncSession, user_id: int
) -> Sequence[Workout]:
    """Все тренировки пользователя, от новых к старым."""
    stmt = (
        select(Workout)
        .where(Workout.user_id == user_id)
        .order_by(Workout.date.desc())
        .options(selectinload(Workout.workout_exercises).selectinload(WorkoutExercise.exercise))
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_logged_entries(
    session: AsyncSession, user_id: int
) -> list[LoggedSetEntry]:
    """
    Журнал выполненных упражнений пользователя вместе с датой тренировки.
    Порядок не гарантируется, сортировкой занимается расчет рекордов.
    """
    stmt = (
        select(WorkoutExercise, Workout.date)
        .join(Workout, Workout.id == WorkoutExercise.workout_id)
        .where(Workout.user_id == user_id)
        .options(selectinload(WorkoutExercise.exercise))
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)

    return [
        LoggedSetEntry(
            exercise=ExerciseCatalogEntry.model_validate(we.exercise) if we.exercise else None,
            actual_weight=we.actual_weight,
            planned_weight=we.weight,
            actual_reps=we.actual_reps,
            planned_reps=we.reps,
            workout_date=workout_date,
        )
        for we, workout_date in result.all()
    ]
