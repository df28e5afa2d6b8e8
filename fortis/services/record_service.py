import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from fortis.schemas.record import LoggedSetEntry, PersonalRecord


# Основная категория -> значения body_part из справочника
CATEGORY_MAPPING = {
    "legs": ["legs", "upper legs", "lower legs"],
    "chest": ["chest"],
    "back": ["back"],
    "shoulders": ["shoulders"],
    "arms": ["upper arms", "lower arms"],
    "core": ["waist"],
    "cardio": ["cardio"],
    "neck": ["neck"],
}

# Запасной вариант, когда body_part не сохранен: ключевые слова в названии
CATEGORY_NAME_KEYWORDS = {
    "chest": ["chest", "bench", "push up", "fly", "dip"],
    "back": ["back", "lat", "row", "pull", "deadlift"],
    "legs": ["leg", "quad", "hamstring", "calf", "squat", "lunge", "glute"],
    "shoulders": ["shoulder", "delt", "raise", "shrug"],
    "arms": ["bicep", "tricep", "curl", "extension", "arm", "forearm"],
    "core": ["abs", "core", "plank", "crunch", "oblique"],
    "cardio": ["cardio", "running", "cycling"],
}


def resolve_value(actual: Optional[float], planned: Optional[float]) -> float:
    """Фактическое значение, если оно есть (включая 0), иначе плановое, иначе 0."""
    if actual is not None:
        return actual
    if planned is not None:
        return planned
    return 0


def attempt_score(weight: float, reps: int) -> float:
    """С весом - объем (вес x повторения), без веса - только повторения."""
    if weight > 0:
        return weight * reps
    return reps


def _date_sort_key(entry: LoggedSetEntry) -> tuple[int, datetime]:
    # Сравниваем моменты в UTC, даты без часового пояса считаем UTC
    value = entry.workout_date
    if value is None:
        return (0, datetime.min)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return (1, value)


def _as_logged_entry(entry: Any) -> LoggedSetEntry:
    if isinstance(entry, LoggedSetEntry):
        return entry
    return LoggedSetEntry.model_validate(entry)


def calculate_personal_records(
    entries: Iterable[Any] | None,
) -> dict[str, PersonalRecord]:
    """
    Рассчитывает личные рекорды по журналу подходов.

    Записи проигрываются в хронологическом порядке. Рекорд фиксируется, только
    если попытка строго лучше всех предыдущих попыток этого упражнения, поэтому
    первая попытка рекордом не бывает. Записи без упражнения и без повторений
    пропускаются.
    """
    logged = sorted((_as_logged_entry(entry) for entry in entries or []), key=_date_sort_key)

    records: dict[str, PersonalRecord] = {}
    best_scores: dict[str, float] = {}

    for entry in logged:
        exercise = entry.exercise
        if exercise is None or not exercise.name:
            continue

        weight = resolve_value(entry.actual_weight, entry.planned_weight)
        reps = resolve_value(entry.actual_reps, entry.planned_reps)
        if reps <= 0:
            continue

        score = attempt_score(weight, reps)
        prior_max = best_scores.get(exercise.name)

        if prior_max is not None and score > prior_max:
            records[exercise.name] = PersonalRecord(
                weight=weight,
                reps=reps,
                date=entry.workout_date,
                exercise_id=exercise.id,
                target=exercise.target,
                bodypart=exercise.body_part,
                equipment=exercise.equipment,
                volume=weight * reps,
            )

        if prior_max is None or score > prior_max:
            best_scores[exercise.name] = score

    logging.debug(f"Calculated {len(records)} personal records from {len(logged)} entries")
    return records


def record_category(exercise_name: str, record: PersonalRecord) -> str | None:
    """Основная категория рекорда: по body_part, иначе по названию упражнения."""
    if record.bodypart:
        bodypart = record.bodypart.lower()
        for category, bodyparts in CATEGORY_MAPPING.items():
            if bodypart in bodyparts:
                return category
        return None

    name = exercise_name.lower()
    for category, keywords in CATEGORY_NAME_KEYWORDS.items():
        if any(keyword in name for keyword in keywords):
            return category
    return None


def filter_records(
    records: dict[str, PersonalRecord],
    query: str | None = None,
    category: str = "all",
) -> list[tuple[str, PersonalRecord]]:
    """
    Фильтрует рекорды по строке поиска и категории.
    Сортировка: по объему по убыванию, для упражнений без веса - по повторениям.
    """
    filtered = list(records.items())

    if query:
        needle = query.lower()
        filtered = [
            (name, record) for name, record in filtered
            if needle in name.lower().replace("_", " ")
        ]

    if category != "all":
        filtered = [
            (name, record) for name, record in filtered
            if record_category(name, record) == category
        ]

    filtered.sort(
        key=lambda item: (item[1].volume, item[1].reps if item[1].volume == 0 else 0),
        reverse=True,
    )
    return filtered


def format_exercise_name(exercise_name: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in exercise_name.replace("_", " ").split(" "))
