"""Behavior card state changes on a youth: points, levels, restriction, subsystem.

Functions mutate the passed youth in place; callers own the session.
"""

import logging
from datetime import date

from casebook.models.youth import Youth
from casebook.services.level_system import (
    LevelChange,
    get_current_level,
    process_level_demotion,
    process_level_up,
)
from casebook.services.points import validate_corrected_total, validate_point_entry

logger = logging.getLogger(__name__)

RESTRICTION_LEVELS = (1, 2)


class LevelTransitionError(ValueError):
    """Raised when a youth cannot move to the requested level or status."""


def add_card_points(youth: Youth, points: int) -> int:
    """Add points from a physical card to the youth's totals. Returns the new total."""
    validate_point_entry(points, allow_zero=False)
    youth.point_total = (youth.point_total or 0) + points
    youth.points_in_current_level = (youth.points_in_current_level or 0) + points
    if youth.restriction_level:
        youth.restriction_points_earned = (youth.restriction_points_earned or 0) + points
    if youth.subsystem_active:
        youth.subsystem_points_earned = (youth.subsystem_points_earned or 0) + points
    logger.info(f"Added {points} points for youth {youth.id} (total {youth.point_total})")
    return youth.point_total


def set_corrected_total(youth: Youth, total: int) -> int:
    youth.point_total = validate_corrected_total(total)
    return youth.point_total


def level_up(youth: Youth) -> LevelChange:
    change = process_level_up(youth.level or 0, youth.points_in_current_level or 0)
    if change is None:
        current = get_current_level(youth.level or 0)
        raise LevelTransitionError(
            f"Not eligible to advance from {current.name}: "
            f"{youth.points_in_current_level or 0} of {current.cumulative_points_required} points"
        )
    youth.level = change.new_level_index
    youth.points_in_current_level = change.points_in_new_level
    logger.info(f"Youth {youth.id} advanced to {get_current_level(youth.level).name}")
    return change


def demote(youth: Youth) -> LevelChange:
    change = process_level_demotion(youth.level or 0)
    if change is None:
        raise LevelTransitionError("Youth is already at Orientation")
    youth.level = change.new_level_index
    youth.points_in_current_level = change.points_in_new_level
    logger.info(f"Youth {youth.id} demoted to {get_current_level(youth.level).name}")
    return change


def place_on_restriction(
    youth: Youth,
    restriction_level: int | None,
    reason: str | None = None,
    points_required: int | None = None,
    today: date | None = None,
) -> None:
    if restriction_level not in RESTRICTION_LEVELS:
        raise LevelTransitionError("Please select restriction level")
    youth.restriction_level = restriction_level
    youth.restriction_reason = reason or "N/A"
    youth.restriction_start_date = today or date.today()
    youth.restriction_points_required = points_required
    youth.restriction_points_earned = 0


def remove_restriction(youth: Youth) -> None:
    youth.restriction_level = None
    youth.restriction_reason = None
    youth.restriction_start_date = None
    youth.restriction_points_required = None
    youth.restriction_points_earned = 0


def place_on_subsystem(
    youth: Youth,
    reason: str | None = None,
    points_required: int | None = None,
    today: date | None = None,
) -> None:
    youth.subsystem_active = True
    youth.subsystem_reason = reason or "N/A"
    youth.subsystem_start_date = today or date.today()
    youth.subsystem_points_required = points_required
    youth.subsystem_points_earned = 0


def remove_subsystem(youth: Youth) -> None:
    youth.subsystem_active = False
    youth.subsystem_reason = None
    youth.subsystem_start_date = None
    youth.subsystem_points_required = None
    youth.subsystem_points_earned = 0


def restriction_complete(youth: Youth) -> bool:
    if not youth.restriction_level or not youth.restriction_points_required:
        return False
    return (youth.restriction_points_earned or 0) >= youth.restriction_points_required


def subsystem_complete(youth: Youth) -> bool:
    if not youth.subsystem_active or not youth.subsystem_points_required:
        return False
    return (youth.subsystem_points_earned or 0) >= youth.subsystem_points_required


DISCHARGE_CATEGORIES = {
    "successful": "Successful Discharge / Completion of Program",
    "maximum_benefit": "Maximum Benefit",
    "unsuccessful": "Unsuccessful Discharge",
}

UNSUCCESSFUL_REASONS = {
    "aggression": "Aggression",
    "continued_non_compliance": "Continued Non-Compliance",
    "failure_to_move_forward": "Failure to Move Forward",
    "continued_substance_abuse": "Continued Substance Abuse",
    "continued_program_violations": "Continued Significant Program Violations",
}


def discharge(
    youth: Youth,
    category: str,
    reason: str | None = None,
    notes: str | None = None,
    discharged_by: str | None = None,
    today: date | None = None,
) -> None:
    """Mark a youth discharged. Unsuccessful discharges need a listed reason."""
    if youth.status == "discharged":
        raise LevelTransitionError("Youth is already discharged")
    if category not in DISCHARGE_CATEGORIES:
        raise LevelTransitionError(f"Unknown discharge category: {category}")
    if category == "unsuccessful":
        if reason not in UNSUCCESSFUL_REASONS:
            raise LevelTransitionError("Select a reason for an unsuccessful discharge")
        reason_label = UNSUCCESSFUL_REASONS[reason]
    else:
        reason_label = DISCHARGE_CATEGORIES[category]

    youth.status = "discharged"
    youth.discharge_date = today or date.today()
    youth.discharge_category = category
    youth.discharge_reason = reason_label
    youth.discharge_notes = notes or None
    youth.discharged_by = discharged_by or None
