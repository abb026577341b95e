import csv
import io
from datetime import date

from casebook.models.youth import Youth
from scripts.import_youth_csv import build_youth_fields, import_rows, next_id_number

CSV = """First Name,Last Name,DOB,Sex,Admission Date,Allergies,Trauma History,Gang Involvement,Current School
Amos,Tamang,12/07/2009,Male,2025-01-27,N/A,"Neglect, Loss",Yes,Brown
Chance,Thaller,2010-02-15,M,2025-07-29,Peanuts,,No,
,Nobody,2010-01-01,M,2025-07-29,,,,
"""


def rows():
    return list(csv.DictReader(io.StringIO(CSV)))


def test_build_fields_maps_columns_and_profile():
    fields = build_youth_fields(rows()[0])
    assert fields["first_name"] == "Amos"
    assert fields["dob"] == date(2009, 12, 7)
    assert fields["sex"] == "M"
    assert "allergies" not in fields
    assert fields["trauma_history"] == ["Neglect", "Loss"]
    assert fields["profile"] == {"gang_involvement": True, "current_school": "Brown"}


def test_next_id_number_continues_highest():
    assert next_id_number([], 2025) == "HBH-2025-001"
    assert next_id_number(["HBH-2024-007", None, "OTHER-1"], 2025) == "HBH-2025-008"


def test_import_creates_youth_and_skips_duplicates(sync_db):
    result = import_rows(sync_db, rows(), today=date(2026, 3, 1))
    sync_db.commit()

    assert len(result.created) == 2
    assert len(result.errors) == 1
    assert result.errors[0].startswith("line 4:")

    amos = sync_db.query(Youth).filter(Youth.last_name == "Tamang").one()
    assert amos.id_number == "HBH-2025-001"
    assert amos.level == 0
    assert amos.status == "active"
    chance = sync_db.query(Youth).filter(Youth.last_name == "Thaller").one()
    assert chance.id_number == "HBH-2025-002"
    assert chance.allergies == "Peanuts"

    again = import_rows(sync_db, rows())
    assert again.created == []
    assert again.skipped == 2
