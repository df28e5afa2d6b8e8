"""
Текущая тренировка: план, подходы, завершение.
"""
from datetime import datetime, timedelta

import pytest

from fortis.schemas.workout import CompletedSet, GeneratedExercise, PlannedExercise
from fortis.services.session_service import WorkoutSession

STARTED = datetime(2024, 3, 10, 18, 0)


@pytest.fixture
def generated():
    return [
        GeneratedExercise(id=1, name="Bench Press", equipment="barbell", target="pectorals", sets=3, reps=10, weight=50),
        GeneratedExercise(id=2, name="Push-ups", equipment="body weight", target="pectorals", sets=3, reps=10, weight=50),
    ]


@pytest.fixture
def session(generated):
    workout_session = WorkoutSession()
    workout_session.start(generated, ["barbell"], "chest", started_at=STARTED)
    return workout_session


class TestWorkoutSession:
    def test_start_builds_plan(self, session):
        assert session.is_active
        assert [ex.exercise_id for ex in session.exercises] == [1, 2]
        first = session.exercises[0]
        assert (first.planned_sets, first.planned_reps, first.planned_weight) == (3, 10, 50)
        assert first.completed_sets == []

    def test_custom_workout_starts_empty(self, generated):
        workout_session = WorkoutSession()
        workout_session.start(generated, ["barbell"], "chest", is_custom=True)
        assert workout_session.exercises == []

    def test_add_set(self, session):
        session.add_set(1, {"weight": 60, "reps": 8})
        session.add_set(1, CompletedSet(weight=60, reps=7))
        assert [(s.weight, s.reps) for s in session.exercises[0].completed_sets] == [(60, 8), (60, 7)]

    def test_update_existing_set(self, session):
        session.add_set(1, {"weight": 60, "reps": 8})
        session.add_set(1, {"reps": 10}, index=0)
        assert [(s.weight, s.reps) for s in session.exercises[0].completed_sets] == [(60, 10)]

    def test_index_past_end_appends(self, session):
        session.add_set(1, {"weight": 60, "reps": 8}, index=5)
        assert len(session.exercises[0].completed_sets) == 1

    def test_add_set_for_unknown_exercise_is_ignored(self, session):
        session.add_set(99, {"weight": 60, "reps": 8})
        assert all(not ex.completed_sets for ex in session.exercises)

    def test_add_exercise_uses_default_prescription(self, session):
        session.add_exercise({"exercise_id": 3, "exercise_name": "Cable Fly", "equipment": "cable"})
        added = session.exercises[-1]
        assert (added.exercise_id, added.planned_sets, added.planned_reps) == (3, 3, 10)
        assert added.equipment == "cable"

    def test_add_existing_exercise_is_ignored(self, session):
        session.add_exercise(PlannedExercise(exercise_id=1, exercise_name="Bench Press"))
        assert len(session.exercises) == 2

    def test_remove_exercise(self, session):
        session.remove_exercise(1)
        assert [ex.exercise_id for ex in session.exercises] == [2]

    def test_complete(self, session):
        session.add_set(1, {"weight": 60, "reps": 8})
        session.add_set(1, {"weight": 60, "reps": 6})
        session.add_set(2, {"weight": 0, "reps": 20})

        completed = session.complete(finished_at=STARTED + timedelta(minutes=45, seconds=30))

        assert completed.duration == 2730
        assert completed.total_volume == 840
        assert completed.muscle_group == "chest"
        assert len(completed.exercises) == 2
        assert not session.is_active
        assert session.exercises == []

    def test_complete_without_start(self):
        assert WorkoutSession().complete() is None

    def test_changes_ignored_when_not_started(self):
        workout_session = WorkoutSession()
        workout_session.add_exercise({"exercise_id": 3})
        assert workout_session.exercises == []
