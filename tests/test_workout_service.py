"""
WorkoutService целиком: профиль -> тренировка -> история -> рекорды.
"""
from datetime import datetime

import pytest

from database.models import FitnessLevelEnum, GoalEnum
from fortis.requests import exercise_requests, profile_requests, workout_requests
from fortis.schemas.exercise import ExerciseCreate
from fortis.services.workout_service import WorkoutService


@pytest.fixture
def service(session_pool):
    return WorkoutService(session_pool)


@pytest.fixture
async def profile(session, catalog):
    await exercise_requests.add_exercises_bulk(
        session, [ExerciseCreate.model_validate(entry) for entry in catalog]
    )
    return await profile_requests.create_profile(
        session, username="lifter", fitness_level=FitnessLevelEnum.advanced, goal=GoalEnum.strength
    )


class TestGenerateForUser:
    async def test_uses_profile_level_and_goal(self, service, session, profile, identity_rng):
        workout = await service.generate_for_user(session, profile.id, ["dumbbell"], "arms", rng=identity_rng)

        assert [ex.name for ex in workout] == [
            "Bicep Curls", "Hammer Curl", "Triceps Kickback", "Concentration Curl",
        ]
        assert {(ex.sets, ex.reps, ex.weight) for ex in workout} == {(5, 5, 60)}

    async def test_profile_without_preferences_uses_defaults(self, service, session, catalog):
        await exercise_requests.add_exercises_bulk(
            session, [ExerciseCreate.model_validate(entry) for entry in catalog]
        )
        profile = await profile_requests.create_profile(session, username="new")

        workout = await service.generate_for_user(session, profile.id, ["dumbbell"], ["arms"])

        assert len(workout) == 3
        assert {(ex.sets, ex.reps, ex.weight) for ex in workout} == {(3, 10, 50)}

    async def test_missing_profile(self, service, session):
        assert await service.generate_for_user(session, 404, ["dumbbell"], "arms") is None

    async def test_no_matching_equipment(self, service, session, profile):
        assert await service.generate_for_user(session, profile.id, ["kettlebell"], "arms") == []


class TestRecordsAndDashboard:
    async def test_logged_workouts_produce_records(self, service, session, profile, identity_rng):
        generated = await service.generate_for_user(session, profile.id, ["barbell"], "chest", rng=identity_rng)
        assert [ex.name for ex in generated] == ["Bench Press"]

        first = await service.log_workout(
            session, profile.id, generated, intensity=3, muscle_group="chest", date=datetime(2024, 1, 1)
        )
        second = await service.log_workout(
            session, profile.id, generated, intensity=4, muscle_group="chest", date=datetime(2024, 1, 8)
        )
        await workout_requests.log_actual_performance(
            session, first.workout_exercises[0].id, actual_weight=60, actual_reps=5
        )
        await workout_requests.log_actual_performance(
            session, second.workout_exercises[0].id, actual_weight=65, actual_reps=5
        )

        records = await service.get_personal_records(session, profile.id)

        record = records["Bench Press"]
        assert (record.weight, record.reps, record.volume) == (65, 5, 325)
        assert record.date == datetime(2024, 1, 8)
        assert record.bodypart == "chest"

    async def test_single_workout_has_no_records(self, service, session, profile, identity_rng):
        generated = await service.generate_for_user(session, profile.id, ["barbell"], "chest", rng=identity_rng)
        await service.log_workout(session, profile.id, generated)

        assert await service.recalculate_personal_records(profile.id) == {}

    async def test_log_workout_for_missing_profile(self, service, session):
        assert await service.log_workout(session, 404, []) is None

    async def test_dashboard(self, service, session, profile, identity_rng):
        generated = await service.generate_for_user(session, profile.id, ["barbell"], "chest", rng=identity_rng)
        now = datetime(2024, 1, 8, 20, 0)
        await service.log_workout(session, profile.id, generated, date=datetime(2024, 1, 7, 18, 0))
        await service.log_workout(session, profile.id, generated, date=datetime(2024, 1, 8, 18, 0))

        stats = await service.get_dashboard(session, profile.id, now=now)

        assert stats.weekly_workouts == 2
        assert stats.current_streak == 2
        assert stats.today_workout is True
        # advanced + strength: 5 подходов x 5 повторений x 60
        assert stats.total_volume == 2 * 5 * 5 * 60

    async def test_progress(self, service, session, profile, identity_rng):
        generated = await service.generate_for_user(session, profile.id, ["barbell"], "chest", rng=identity_rng)
        await service.log_workout(
            session, profile.id, generated, muscle_group="chest", duration=1800, date=datetime(2024, 1, 7, 18, 0)
        )
        await service.log_workout(
            session, profile.id, generated, muscle_group="chest", duration=3600, date=datetime(2024, 1, 8, 18, 0)
        )

        stats = await service.get_progress(session, profile.id, period_days=7, now=datetime(2024, 1, 8, 20, 0))

        assert stats.total_workouts == 2
        assert stats.total_volume == 2 * 5 * 5 * 60
        assert stats.avg_workout_time == 45
        assert stats.favorite_exercise == "Bench Press"
        assert stats.muscle_group_distribution == {"chest": 2}
        assert stats.volume_change == 0
