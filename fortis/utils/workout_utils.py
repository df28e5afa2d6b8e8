import math
import re
from types import MappingProxyType
from typing import Any, Iterable


DEFAULT_FITNESS_LEVEL = "intermediate"
DEFAULT_GOAL = "hypertrophy"

# Группа мышц из интерфейса -> значения `target` в справочнике упражнений
MUSCLE_GROUP_TARGETS = MappingProxyType({
    "chest": ("pectorals",),
    "back": ("lats", "upper back", "traps", "spine"),
    "legs": ("quads", "hamstrings", "glutes", "calves", "adductors", "abductors"),
    "shoulders": ("delts",),
    "arms": ("biceps", "triceps", "forearms"),
    "core": ("abs",),
    "abs": ("abs",),
    "cardio": ("cardiovascular system",),
    "full_body": (
        "pectorals", "lats", "upper back", "traps", "quads", "hamstrings",
        "glutes", "calves", "delts", "biceps", "triceps", "abs",
    ),
})

# Цель -> (подходы, повторения)
GOAL_CONFIG = MappingProxyType({
    "strength": (4, 5),
    "hypertrophy": (3, 10),
    "muscle": (3, 10),
    "endurance": (2, 15),
})

LEVEL_MODIFIER = MappingProxyType({
    "beginner": 0.8,
    "intermediate": 1.0,
    "advanced": 1.2,
})

EQUIPMENT_SYNONYMS = MappingProxyType({
    "bodyweight": "body weight",
})

BASE_EXERCISE_COUNT = 3
BASE_WEIGHT = 50


def round_half_up(value: float) -> int:
    """Округление как в интерфейсе: 2.5 -> 3, а не банковское."""
    return int(math.floor(value + 0.5))


def enum_value(value: Any) -> Any:
    """Достает `.value` у Enum, остальное возвращает как есть."""
    return getattr(value, "value", value)


def normalize_text(value: Any) -> str:
    value = enum_value(value)
    if value is None:
        return ""
    return str(value).lower().strip()


def normalize_muscle_group(value: Any) -> str:
    return re.sub(r"\s+", "_", normalize_text(value))


def normalize_equipment(value: Any) -> str:
    normalized = normalize_text(value)
    return EQUIPMENT_SYNONYMS.get(normalized, normalized)


def as_token_list(value: Any) -> list:
    """Строку превращает в список из одного элемента, None - в пустой список."""
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def resolve_goal(goal: Any) -> tuple[int, int]:
    return GOAL_CONFIG.get(normalize_text(goal), GOAL_CONFIG[DEFAULT_GOAL])


def resolve_level_modifier(fitness_level: Any) -> float:
    return LEVEL_MODIFIER.get(normalize_text(fitness_level), LEVEL_MODIFIER[DEFAULT_FITNESS_LEVEL])
