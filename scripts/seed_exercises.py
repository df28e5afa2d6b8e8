import argparse
import asyncio
import json
import logging
import os
import sys

from pydantic import ValidationError

# Добавляем корневую директорию проекта в sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.logging import setup_logging
from database.connection import create_session_pool, create_tables
from fortis.requests.exercise_requests import clear_exercises, upsert_exercises
from fortis.schemas.exercise import ExerciseCreate


def load_exercises(path: str) -> list[ExerciseCreate]:
    """Читает справочник в формате ExerciseDB (список объектов) и валидирует записи."""
    with open(path, "r", encoding="utf-8") as f:
        raw_exercises = json.load(f)

    exercises: list[ExerciseCreate] = []
    for raw in raw_exercises:
        try:
            exercises.append(ExerciseCreate.model_validate(raw))
        except ValidationError as e:
            logging.warning(f"Skipping invalid exercise {raw.get('name')!r}: {e}")
    return exercises


async def seed_catalog(session, exercises: list[ExerciseCreate]) -> tuple[int, int]:
    """
    Заменяет справочник упражнений. Упражнения из истории тренировок
    сохраняют свои ID и обновляются по названию.
    """
    await clear_exercises(session)
    return await upsert_exercises(session, exercises)


async def main(path: str):
    """
    Заполняет справочник упражнений из JSON-файла.
    """
    setup_logging()
    logging.info(f"Seeding exercises from {path}")

    try:
        exercises_to_create = load_exercises(path)
    except FileNotFoundError:
        logging.error(f"File {path!r} not found.")
        return
    except json.JSONDecodeError:
        logging.error(f"Could not decode JSON from {path!r}.")
        return

    if not exercises_to_create:
        logging.warning("No exercises to add.")
        return

    await create_tables()
    session_factory = create_session_pool()

    async with session_factory() as session:
        await seed_catalog(session, exercises_to_create)

    logging.info(f"Exercise catalog seeded with {len(exercises_to_create)} exercises.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the exercise catalog")
    parser.add_argument("path", nargs="?", default="exercises.json")
    args = parser.parse_args()

    try:
        asyncio.run(main(args.path))
    except Exception as e:
        logging.error(f"Seeding failed: {e}", exc_info=True)
        sys.exit(1)
