from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable

from database.models import Workout
from fortis.config.settings import settings
from fortis.schemas.workout import (
    DashboardStats,
    ProgressStats,
    WorkoutHistoryExercise,
    WorkoutHistoryItem,
)
from fortis.services.record_service import resolve_value
from fortis.utils.workout_utils import round_half_up


def workout_total_volume(exercises: Iterable[WorkoutHistoryExercise]) -> float:
    """Сумма повторения x вес x подходы; фактические значения важнее плановых."""
    total = 0
    for ex in exercises:
        reps = resolve_value(ex.actual_reps, ex.reps)
        weight = resolve_value(ex.actual_weight, ex.weight)
        total += reps * weight * (ex.sets or 1)
    return total


def to_history_item(workout: Workout) -> WorkoutHistoryItem:
    """Конвертирует тренировку из БД (с загруженными упражнениями) в элемент истории."""
    exercises = [
        WorkoutHistoryExercise(
            exercise_id=we.exercise_id,
            exercise_name=we.exercise.name if we.exercise else None,
            sets=we.sets,
            reps=we.reps,
            weight=we.weight,
            actual_reps=we.actual_reps,
            actual_weight=we.actual_weight,
        )
        for we in workout.workout_exercises
    ]
    return WorkoutHistoryItem(
        id=workout.id,
        date=workout.date,
        intensity=workout.intensity,
        muscle_group=workout.muscle_group,
        duration=workout.duration,
        exercises=exercises,
        total_volume=workout_total_volume(exercises),
    )


def calculate_streak(workouts: list[WorkoutHistoryItem], today) -> int:
    """Количество подряд идущих дней с тренировкой, заканчивая сегодняшним."""
    training_days = sorted({w.date.date() for w in workouts}, reverse=True)
    streak = 0
    for offset, day in enumerate(training_days):
        if (today - day).days != offset:
            break
        streak += 1
    return streak


def dashboard_stats(
    workouts: list[WorkoutHistoryItem],
    now: datetime | None = None,
    weekly_goal: int | None = None,
) -> DashboardStats:
    now = now or datetime.now()
    weekly_goal = weekly_goal or settings.WEEKLY_WORKOUT_GOAL
    one_week_ago = now - timedelta(days=7)

    weekly_workouts = [w for w in workouts if w.date >= one_week_ago]
    today = now.date()

    return DashboardStats(
        weekly_workouts=len(weekly_workouts),
        current_streak=calculate_streak(workouts, today),
        total_volume=sum(w.total_volume for w in weekly_workouts),
        last_workout=max(workouts, key=lambda w: w.date) if workouts else None,
        weekly_goal=weekly_goal,
        weekly_progress=len(weekly_workouts) / weekly_goal * 100,
        today_workout=any(w.date.date() == today for w in workouts),
        # Грубая оценка, без учета интенсивности
        calories_burned=len(weekly_workouts) * settings.CALORIES_PER_WORKOUT,
    )


def progress_stats(
    workouts: list[WorkoutHistoryItem],
    period_days: int,
    now: datetime | None = None,
) -> ProgressStats:
    """
    Статистика за последние `period_days` дней и изменение объема
    относительно предыдущего периода такой же длины.
    """
    now = now or datetime.now()
    cutoff = now - timedelta(days=period_days)
    previous_cutoff = cutoff - timedelta(days=period_days)

    period_workouts = [w for w in workouts if w.date >= cutoff]
    if not period_workouts:
        return ProgressStats()

    total_volume = sum(w.total_volume for w in period_workouts)
    total_time = sum(w.duration or 0 for w in period_workouts)

    muscle_groups = Counter(w.muscle_group or "other" for w in period_workouts)
    exercise_counts = Counter(
        ex.exercise_name or "Unknown" for w in period_workouts for ex in w.exercises
    )
    favorite_exercise = (
        exercise_counts.most_common(1)[0][0] if exercise_counts else "None yet"
    )

    previous_volume = sum(
        w.total_volume for w in workouts if previous_cutoff <= w.date < cutoff
    )
    volume_change = (
        round_half_up((total_volume - previous_volume) / previous_volume * 100)
        if previous_volume > 0
        else 0
    )

    return ProgressStats(
        total_workouts=len(period_workouts),
        total_volume=total_volume,
        avg_workout_time=round_half_up(total_time / len(period_workouts) / 60),
        favorite_exercise=favorite_exercise,
        volume_change=volume_change,
        muscle_group_distribution=dict(muscle_groups),
    )
