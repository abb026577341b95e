from datetime import date

import pytest

from casebook.models.youth import Youth
from casebook.services import behavior_service
from casebook.services.behavior_service import LevelTransitionError
from casebook.services.points import PointsValidationError


def make_youth(**overrides) -> Youth:
    fields = dict(
        first_name="Dante",
        last_name="Cole",
        status="active",
        level=0,
        point_total=0,
        points_in_current_level=0,
        restriction_points_earned=0,
        subsystem_active=False,
        subsystem_points_earned=0,
    )
    fields.update(overrides)
    return Youth(**fields)


def test_card_points_update_totals():
    youth = make_youth()
    assert behavior_service.add_card_points(youth, 5000) == 5000
    assert youth.points_in_current_level == 5000


def test_card_points_must_be_positive_multiple():
    youth = make_youth()
    with pytest.raises(PointsValidationError):
        behavior_service.add_card_points(youth, 0)
    with pytest.raises(PointsValidationError):
        behavior_service.add_card_points(youth, 2500)
    assert youth.point_total == 0


def test_card_points_count_toward_restriction_and_subsystem():
    youth = make_youth()
    behavior_service.place_on_restriction(youth, 1, "Fighting", points_required=3000, today=date(2026, 2, 1))
    behavior_service.place_on_subsystem(youth, None, points_required=2000)
    behavior_service.add_card_points(youth, 3000)
    assert behavior_service.restriction_complete(youth)
    assert behavior_service.subsystem_complete(youth)
    assert youth.subsystem_reason == "N/A"


def test_restriction_requires_level():
    youth = make_youth()
    with pytest.raises(LevelTransitionError):
        behavior_service.place_on_restriction(youth, None)
    with pytest.raises(LevelTransitionError):
        behavior_service.place_on_restriction(youth, 3)


def test_remove_restriction_clears_fields():
    youth = make_youth()
    behavior_service.place_on_restriction(youth, 2, points_required=1000)
    behavior_service.remove_restriction(youth)
    assert youth.restriction_level is None
    assert not behavior_service.restriction_complete(youth)


def test_level_up_and_demote():
    youth = make_youth(points_in_current_level=200)
    change = behavior_service.level_up(youth)
    assert youth.level == 1
    assert youth.points_in_current_level == 80
    assert change.points_earned_on_completed_level == 120

    behavior_service.demote(youth)
    assert youth.level == 0
    assert youth.points_in_current_level == 0

    with pytest.raises(LevelTransitionError):
        behavior_service.demote(youth)


def test_level_up_refused_when_not_eligible():
    youth = make_youth(level=1, points_in_current_level=100)
    with pytest.raises(LevelTransitionError):
        behavior_service.level_up(youth)
    assert youth.level == 1


def test_corrected_total():
    youth = make_youth(point_total=9000)
    behavior_service.set_corrected_total(youth, 4000)
    assert youth.point_total == 4000


def test_unsuccessful_discharge_needs_reason():
    youth = make_youth()
    with pytest.raises(LevelTransitionError):
        behavior_service.discharge(youth, "unsuccessful")
    behavior_service.discharge(youth, "unsuccessful", reason="aggression", today=date(2026, 5, 1))
    assert youth.status == "discharged"
    assert youth.discharge_reason == "Aggression"
    assert youth.discharge_date == date(2026, 5, 1)


def test_cannot_discharge_twice():
    youth = make_youth()
    behavior_service.discharge(youth, "successful")
    with pytest.raises(LevelTransitionError):
        behavior_service.discharge(youth, "maximum_benefit")
