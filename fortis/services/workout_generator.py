import logging
import random
from typing import Any, Iterable, MutableSequence, Protocol

from fortis.schemas.exercise import ExerciseCatalogEntry
from fortis.schemas.workout import GeneratedExercise, WorkoutSelection
from fortis.utils.workout_utils import (
    BASE_EXERCISE_COUNT,
    BASE_WEIGHT,
    MUSCLE_GROUP_TARGETS,
    as_token_list,
    normalize_equipment,
    normalize_muscle_group,
    normalize_text,
    resolve_goal,
    resolve_level_modifier,
    round_half_up,
)


class Shuffler(Protocol):
    """Источник случайности: `random.Random`, модуль `random` или заглушка в тестах."""

    def shuffle(self, x: MutableSequence[Any]) -> None: ...


def _as_catalog_entry(exercise: Any) -> ExerciseCatalogEntry:
    if isinstance(exercise, ExerciseCatalogEntry):
        return exercise
    return ExerciseCatalogEntry.model_validate(exercise)


def _muscle_matches(target: str, muscle_tokens: list[str]) -> bool:
    for token in muscle_tokens:
        mapped_targets = MUSCLE_GROUP_TARGETS.get(token)
        if mapped_targets is None:
            if token == normalize_muscle_group(target):
                return True
        elif target in mapped_targets:
            return True
    return False


def _equipment_matches(equipment: str, equipment_tokens: list[str]) -> bool:
    return any(token == equipment or token in equipment for token in equipment_tokens)


def filter_exercises(
    catalog: Iterable[Any] | None,
    equipment: Any,
    muscle_group: Any,
) -> list[ExerciseCatalogEntry]:
    """
    Отбирает упражнения, подходящие и по группе мышц, и по оборудованию.
    Порядок справочника сохраняется.
    """
    muscle_tokens = [
        token for token in map(normalize_muscle_group, as_token_list(muscle_group)) if token
    ]
    equipment_tokens = [
        token for token in map(normalize_equipment, as_token_list(equipment)) if token
    ]
    if not muscle_tokens or not equipment_tokens:
        return []

    candidates = []
    for exercise in catalog or []:
        if exercise is None:
            continue
        entry = _as_catalog_entry(exercise)
        target = normalize_text(entry.target)
        entry_equipment = normalize_text(entry.equipment)
        if _muscle_matches(target, muscle_tokens) and _equipment_matches(
            entry_equipment, equipment_tokens
        ):
            candidates.append(entry)
    return candidates


def generate_workout(
    catalog: Iterable[Any] | None,
    equipment: Any,
    muscle_group: Any,
    fitness_level: Any = None,
    goal: Any = None,
    rng: Shuffler | None = None,
) -> list[GeneratedExercise]:
    """
    Генерирует тренировку из справочника упражнений.

    Уровень подготовки масштабирует количество упражнений, подходы и рабочий вес,
    цель задает базовые подходы и повторения. Отбор упражнений случайный:
    `rng` - любой объект с методом `shuffle` (по умолчанию модуль `random`).
    Неизвестные уровень и цель заменяются значениями по умолчанию.
    """
    candidates = filter_exercises(catalog, equipment, muscle_group)
    if not candidates:
        logging.info(
            f"No exercises matched equipment={equipment!r} muscle_group={muscle_group!r}"
        )
        return []

    base_sets, base_reps = resolve_goal(goal)
    modifier = resolve_level_modifier(fitness_level)
    total_exercises = max(BASE_EXERCISE_COUNT, round_half_up(BASE_EXERCISE_COUNT * modifier))

    (rng or random).shuffle(candidates)
    selected = candidates[:total_exercises]

    sets = round_half_up(base_sets * modifier)
    weight = round_half_up(BASE_WEIGHT * modifier)
    logging.debug(
        f"Selected {len(selected)} of {len(candidates)} candidates: {sets}x{base_reps} @ {weight}"
    )

    return [
        GeneratedExercise(
            id=entry.id,
            name=entry.name,
            equipment=entry.equipment,
            target=entry.target,
            body_part=entry.body_part,
            gif_url=entry.gif_url,
            sets=sets,
            reps=base_reps,
            weight=weight,
        )
        for entry in selected
    ]


def generate(
    catalog: Iterable[Any] | None,
    selection: WorkoutSelection,
    rng: Shuffler | None = None,
) -> list[GeneratedExercise]:
    return generate_workout(
        catalog,
        selection.equipment,
        selection.muscle_group,
        selection.fitness_level,
        selection.goal,
        rng=rng,
    )
