import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from database.models import Workout
from fortis.requests import exercise_requests, profile_requests, workout_requests
from fortis.schemas.record import PersonalRecord
from fortis.schemas.workout import (
    DashboardStats,
    GeneratedExercise,
    ProgressStats,
    WorkoutExerciseCreate,
)
from fortis.services.record_service import calculate_personal_records
from fortis.services.stats_service import dashboard_stats, progress_stats, to_history_item
from fortis.services.workout_generator import Shuffler, generate_workout


class WorkoutService:
    def __init__(self, session_pool: async_sessionmaker):
        self.session_pool = session_pool

    async def generate_for_user(
        self,
        session: AsyncSession,
        user_id: int,
        equipment: list[str],
        muscle_group: str | list[str],
        rng: Shuffler | None = None,
    ) -> list[GeneratedExercise] | None:
        """
        Генерирует тренировку по профилю пользователя и выбранному оборудованию.
        Возвращает None, если профиль не найден.
        """
        profile = await profile_requests.get_profile(session, user_id)
        if not profile:
            logging.error(f"Profile {user_id} not found.")
            return None

        catalog = await exercise_requests.get_all_exercises(session)
        if not catalog:
            logging.warning("Exercise catalog is empty, nothing to generate from.")

        workout = generate_workout(
            catalog,
            equipment,
            muscle_group,
            fitness_level=profile.fitness_level,
            goal=profile.goal,
            rng=rng,
        )
        logging.info(
            f"Generated {len(workout)} exercises for user {user_id} "
            f"(level={profile.fitness_level}, goal={profile.goal})"
        )
        return workout

    async def log_workout(
        self,
        session: AsyncSession,
        user_id: int,
        exercises: list[GeneratedExercise],
        intensity: int | None = None,
        muscle_group: str | list[str] | None = None,
        duration: int | None = None,
        date: datetime | None = None,
    ) -> Workout | None:
        """Сохраняет сгенерированную тренировку как плановую."""
        profile = await profile_requests.get_profile(session, user_id)
        if not profile:
            logging.error(f"Profile {user_id} not found, workout was not saved.")
            return None

        to_create = []
        for ex in exercises:
            if ex.id is None:
                logging.warning(f"Skipping exercise without id: {ex.name!r}")
                continue
            to_create.append(
                WorkoutExerciseCreate(
                    exercise_id=ex.id, sets=ex.sets, reps=ex.reps, weight=ex.weight
                )
            )

        workout = await workout_requests.save_workout(
            session,
            user_id,
            to_create,
            intensity=intensity,
            muscle_group=muscle_group,
            duration=duration,
            date=date,
        )
        logging.info(f"Saved workout #{workout.id} with {len(to_create)} exercises for user {user_id}")
        return workout

    async def get_personal_records(
        self, session: AsyncSession, user_id: int
    ) -> dict[str, PersonalRecord]:
        entries = await workout_requests.get_logged_entries(session, user_id)
        records = calculate_personal_records(entries)
        logging.info(
            f"Calculated {len(records)} personal records for user {user_id} from {len(entries)} entries"
        )
        return records

    async def get_dashboard(
        self, session: AsyncSession, user_id: int, now: datetime | None = None
    ) -> DashboardStats:
        workouts = await workout_requests.get_workouts_with_exercises(session, user_id)
        history = [to_history_item(workout) for workout in workouts]
        return dashboard_stats(history, now=now)

    async def get_progress(
        self,
        session: AsyncSession,
        user_id: int,
        period_days: int,
        now: datetime | None = None,
    ) -> ProgressStats:
        workouts = await workout_requests.get_workouts_with_exercises(session, user_id)
        history = [to_history_item(workout) for workout in workouts]
        return progress_stats(history, period_days, now=now)

    async def recalculate_personal_records(self, user_id: int) -> dict[str, PersonalRecord]:
        """Пересчитывает рекорды в отдельной сессии, например после сохранения тренировки."""
        async with self.session_pool() as session:
            return await self.get_personal_records(session, user_id)
