import logging
from typing import List, Sequence

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Exercise, WorkoutExercise
from fortis.schemas.exercise import ExerciseCreate


async def clear_exercises(session: AsyncSession) -> None:
    """
    Удаляет упражнения, на которые не ссылается ни одна тренировка.
    Упражнения из истории тренировок остаются, иначе история потеряет связь с ними.
    """
    referenced = select(WorkoutExercise.exercise_id)
    await session.execute(delete(Exercise).where(Exercise.id.not_in(referenced)))
    await session.commit()


async def add_exercises_bulk(
    session: AsyncSession, exercises: list[ExerciseCreate]
) -> None:
    """Добавляет несколько упражнений в базу данных."""
    exercise_objects = [Exercise(**ex.model_dump()) for ex in exercises]
    session.add_all(exercise_objects)
    await session.commit()


async def upsert_exercises(
    session: AsyncSession, exercises: list[ExerciseCreate]
) -> tuple[int, int]:
    """
    Обновляет упражнения с совпадающим названием и добавляет новые.
    ID существующих упражнений не меняются. Возвращает (добавлено, обновлено).
    """
    result = await session.execute(select(Exercise))
    existing: dict[str, Exercise] = {}
    for exercise in result.scalars().all():
        existing.setdefault(exercise.name, exercise)

    created, updated = 0, 0
    for ex in exercises:
        fields = ex.model_dump()
        exercise = existing.get(ex.name)
        if exercise is None:
            exercise = Exercise(**fields)
            session.add(exercise)
            existing[ex.name] = exercise
            created += 1
        else:
            for key, value in fields.items():
                setattr(exercise, key, value)
            updated += 1

    await session.commit()
    logging.info(f"Exercises upserted: {created} created, {updated} updated")
    return created, updated


async def get_all_exercises(session: AsyncSession) -> Sequence[Exercise]:
    """Весь справочник упражнений."""
    result = await session.execute(select(Exercise).order_by(Exercise.id))
    return result.scalars().all()


async def get_exercises_by_equipment(
    session: AsyncSession, equipment: List[str]
) -> Sequence[Exercise]:
    """Упражнения, у которых оборудование содержит любое из указанных названий."""
    if not equipment:
        return []
    conditions = [
        func.lower(Exercise.equipment).contains(name.lower().strip()) for name in equipment
    ]
    stmt = select(Exercise).where(or_(*conditions)).order_by(Exercise.id)
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_exercise_by_name(
    session: AsyncSession, name: str
) -> Exercise | None:
    """Получает одно упражнение по его точному названию."""
    stmt = select(Exercise).where(Exercise.name == name)
    result = await session.execute(stmt)
    return result.scalars().first()
