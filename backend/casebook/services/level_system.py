"""Level progression system.

Each level has a cumulative point requirement for completing it and a daily
point minimum for keeping privileges. Points carry over into the next level
on promotion; demotion resets the points earned in the new level.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class LevelData:
    name: str
    index: int
    cumulative_points_required: float  # points needed to complete this level
    daily_points_for_privileges: int


@dataclass(frozen=True)
class LevelChange:
    new_level_index: int
    points_in_new_level: int
    points_earned_on_completed_level: int = 0


LEVELS: list[LevelData] = [
    LevelData("Orientation", 0, 120, 10),
    LevelData("Level 1", 1, 840, 20),
    LevelData("Level 2", 2, 2000, 20),
    LevelData("Level 3", 3, 3060, 30),
    LevelData("Level 4", 4, 4740, 40),
    LevelData("Level 5", 5, 6840, 50),
    LevelData("Level 6", 6, 9360, 60),
    LevelData("Level 7", 7, 12300, 70),
    LevelData("Level 8", 8, 15660, 80),
    LevelData("Level 9", 9, 19440, 90),
    LevelData("Level 10", 10, math.inf, 100),
]

MAX_LEVEL = LEVELS[-1].index


def get_current_level(level_index: int) -> LevelData:
    """Return the level for an index, falling back to Orientation."""
    if 0 <= level_index < len(LEVELS):
        return LEVELS[level_index]
    return LEVELS[0]


def get_next_level(level_index: int) -> LevelData | None:
    if level_index < MAX_LEVEL:
        return get_current_level(level_index + 1)
    return None


def can_level_up(level_index: int, points_in_current_level: int) -> bool:
    current = get_current_level(level_index)
    return points_in_current_level >= current.cumulative_points_required and level_index < MAX_LEVEL


def meets_privilege_requirement(level_index: int, daily_points: int) -> bool:
    return daily_points >= get_current_level(level_index).daily_points_for_privileges


def process_level_up(level_index: int, points_in_current_level: int) -> LevelChange | None:
    """Promote one level, carrying surplus points into the new level."""
    if not can_level_up(level_index, points_in_current_level):
        return None
    required = int(get_current_level(level_index).cumulative_points_required)
    return LevelChange(
        new_level_index=level_index + 1,
        points_in_new_level=points_in_current_level - required,
        points_earned_on_completed_level=required,
    )


def process_level_demotion(level_index: int) -> LevelChange | None:
    if level_index > 0:
        return LevelChange(new_level_index=level_index - 1, points_in_new_level=0)
    return None


def level_progress(level_index: int, points_in_current_level: int) -> float:
    """Percent complete for the current level, capped at 100."""
    required = get_current_level(level_index).cumulative_points_required
    if math.isinf(required):
        return 0.0
    return round(min(points_in_current_level / required * 100, 100.0), 1)
