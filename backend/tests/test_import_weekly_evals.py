from datetime import date

import pytest

from casebook.models.scores import WeeklyEval
from casebook.models.youth import Youth
from scripts.import_weekly_evals import find_columns, import_rows, parse_eval_date

HEADER = ["Youth Name", "Eval Date", "Peer Interaction", "Adult Interaction", "Investment", "Dealing w/ Authority"]


def test_find_columns_by_hint():
    assert find_columns(HEADER) == {"name": 0, "date": 1, "peer": 2, "adult": 3, "investment": 4, "authority": 5}
    with pytest.raises(ValueError):
        find_columns(["Peer", "Adult"])


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2026-03-04", date(2026, 3, 4)),
        ("3/4/2026", date(2026, 3, 4)),
        ("46085", date(2026, 3, 4)),
        ("12", None),
        ("", None),
    ],
)
def test_parse_eval_date(raw, expected):
    assert parse_eval_date(raw) == expected


def test_import_files_under_monday_and_replaces_upload(sync_db):
    youth = Youth(first_name="Marcus", last_name="Reed")
    sync_db.add(youth)
    sync_db.commit()

    rows = [
        HEADER,
        ["Marcus Reed", "2026-03-04", "3.5", "3", "9", "2.1"],
        ["Reed", "3/6/2026", "2", "2", "2", "2"],
        ["Nobody", "2026-03-04", "3", "3", "3", "3"],
        ["Marcus", "not a date", "3", "3", "3", "3"],
        ["Marcus", "2026-03-09", "", "", "", ""],
    ]
    result = import_rows(sync_db, rows)
    sync_db.commit()

    assert result.imported == 2
    assert [line.split(":")[0] for line in result.skipped] == ["line 4", "line 5", "line 6"]

    stored = sync_db.query(WeeklyEval).one()
    assert stored.week_date == date(2026, 3, 2)
    assert stored.source == "uploaded"
    assert (stored.peer, stored.adult, stored.investment, stored.authority) == (20, 20, 20, 20)


def test_import_rejects_missing_data(sync_db):
    with pytest.raises(ValueError):
        import_rows(sync_db, [HEADER])
