import asyncio
import json
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

import httpx
import pytest

from casebook.services.ai_client import AIClient
from casebook.services.report_service import (
    AI_SECTION_HEADER,
    ReportError,
    ReportOptions,
    build_report_text,
    collect_report_data,
    dpn_performance_level,
    fmt_date,
    fmt_timestamp,
    generate_report,
    get_date_range,
    rating_label,
    risk_level,
)
from casebook.services.score_service import NormalizedScore

TODAY = date(2026, 3, 31)
NOW = datetime(2026, 3, 31, 14, 5)


@dataclass
class Youth:
    id: str = "youth-1"
    first_name: str = "Marcus"
    last_name: str = "Reed"
    dob: date | None = date(2009, 4, 12)
    admission_date: date | None = date(2026, 1, 1)
    level: int = 2
    id_number: str | None = None
    restriction_level: int | None = None
    subsystem_active: bool = False
    trauma_history: list = field(default_factory=list)
    referral_source: str | None = None
    referral_reason: str | None = None
    education_info: str | None = None
    medical_info: str | None = None
    mental_health_info: str | None = None
    legal_status: str | None = None
    legal_guardian: str | None = None
    guardian_relationship: str | None = None
    probation_officer: str | None = None
    placement_authority: str | None = None
    estimated_stay: str | None = None
    current_diagnoses: str | None = None
    current_medications: str | None = None
    allergies: str | None = None


@dataclass
class Points:
    date: date
    total_points: int
    morning_points: int = 0
    afternoon_points: int = 0
    evening_points: int = 0


@dataclass
class Note:
    date: date
    note: str
    note_type: str = "general"
    label: str | None = None
    summary: str | None = None


def points_for_week():
    return [Points(TODAY - timedelta(days=i), 84000, 28000, 28000, 28000) for i in range(7)]


def score(day: date, value: float) -> NormalizedScore:
    return NormalizedScore("youth-1", day, value, value, value, value, value)


def test_date_ranges():
    assert get_date_range(ReportOptions(period="last7"), TODAY) == (date(2026, 3, 24), TODAY)
    assert get_date_range(ReportOptions(period="allTime"), TODAY)[0] == date(2020, 1, 1)
    custom = ReportOptions(period="custom", custom_start_date=date(2026, 2, 1), custom_end_date=date(2026, 2, 28))
    assert get_date_range(custom, TODAY) == (date(2026, 2, 1), date(2026, 2, 28))


def test_bad_ranges_raise():
    with pytest.raises(ReportError):
        get_date_range(ReportOptions(period="lastYear"), TODAY)
    with pytest.raises(ReportError):
        get_date_range(
            ReportOptions(period="custom", custom_start_date=date(2026, 3, 2), custom_end_date=date(2026, 3, 1)),
            TODAY,
        )


def test_formatting():
    assert fmt_date(date(2026, 3, 9)) == "3/9/2026"
    assert fmt_date(None) == "Not provided"
    assert fmt_timestamp(NOW) == "3/31/2026 2:05 PM"
    assert fmt_timestamp(datetime(2026, 1, 1, 0, 30)) == "1/1/2026 12:30 AM"


def test_rating_helpers():
    assert rating_label(3.5) == "Excellent"
    assert rating_label(2.4) == "Good"
    assert rating_label(1.0) == "Needs Improvement"
    assert dpn_performance_level(80) == "Excellent"
    assert dpn_performance_level(65) == "Satisfactory"
    assert risk_level(Youth(restriction_level=2)) == "Moderate-High"
    assert risk_level(Youth(restriction_level=1)) == "Moderate"


def test_collect_filters_to_period_and_options():
    old = Points(TODAY - timedelta(days=60), 1000)
    options = ReportOptions(include_notes=False)
    data = collect_report_data(
        options, TODAY - timedelta(days=6), TODAY,
        points=points_for_week() + [old],
        notes=[Note(TODAY, "hidden")],
    )
    assert len(data.behavior_points) == 7
    assert data.case_notes == []
    assert len(data.all_points) == 8


def test_comprehensive_report():
    start = TODAY - timedelta(days=6)
    data = collect_report_data(
        ReportOptions(), start, TODAY,
        points=points_for_week(),
        notes=[Note(TODAY, "Helped a peer with homework", label="Academic Update")],
        scores=[score(TODAY, 3.0)],
    )
    text = build_report_text(Youth(), data, ReportOptions(), start, TODAY, NOW)
    assert text.startswith("COMPREHENSIVE REPORT\n")
    assert "Current Level: Level 2" in text
    assert "Total Points This Period: 588000" in text
    assert "Average Morning Points: 28000.0" in text
    assert "Peer Interaction Average: 3.0 / 4" in text
    assert "3/31/2026 - Academic Update: Helped a peer with homework" in text
    assert text.endswith("Report Generated: 3/31/2026 2:05 PM")


def test_profile_section_omitted_when_excluded():
    options = ReportOptions(include_profile=False)
    text = build_report_text(Youth(), collect_report_data(options, TODAY, TODAY), options, TODAY, TODAY, NOW)
    assert "PROFILE INFORMATION" not in text


def test_dpn_report_percentage_and_next_evaluation():
    options = ReportOptions(report_type="dpnWeekly")
    start = TODAY - timedelta(days=6)
    data = collect_report_data(options, start, TODAY, points=points_for_week())
    text = build_report_text(Youth(), data, options, start, TODAY, NOW)
    assert text.startswith("DPN WEEKLY PROGRESS EVALUATION")
    assert "Total Points Earned: 588000 out of 735000 possible (80%)" in text
    assert "Performance Level: Excellent" in text
    assert "NEXT EVALUATION: 4/7/2026" in text
    assert "No significant incidents reported" in text


def test_court_report_uses_all_time_points():
    options = ReportOptions(report_type="court")
    start = TODAY - timedelta(days=6)
    points = points_for_week() + [Points(TODAY - timedelta(days=60), 12000)]
    data = collect_report_data(options, start, TODAY, points=points)
    text = build_report_text(Youth(), data, options, start, TODAY, NOW)
    assert "Total Points Earned (All Time): 600,000" in text
    assert "Points Earned This Period: 588,000" in text
    assert "Days in Program: 89" in text
    assert "No progress notes recorded during this period." in text


def test_unknown_report_type():
    options = ReportOptions(report_type="weekly")
    with pytest.raises(ReportError):
        build_report_text(Youth(), collect_report_data(options, TODAY, TODAY), options, TODAY, TODAY, NOW)


def _ai_client(handler) -> AIClient:
    return AIClient(api_key="test-key", base_url="https://ai.test/v1", transport=httpx.MockTransport(handler))


def test_ai_narrative_appended():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": " Marcus had a steady week. "}}]})

    options = ReportOptions(report_type="summary", use_ai=True)
    data = collect_report_data(options, TODAY, TODAY, points=points_for_week())
    text = asyncio.run(generate_report(Youth(), data, options, TODAY, TODAY, _ai_client(handler), NOW))

    assert seen["url"] == "https://ai.test/v1/chat/completions"
    assert seen["body"]["max_tokens"] == 500
    assert "Youth: Marcus Reed (Level 2)" in seen["body"]["messages"][1]["content"]
    assert text.endswith(f"\n\n{AI_SECTION_HEADER}\nMarcus had a steady week.")


def test_ai_failure_keeps_plain_report():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="overloaded")

    options = ReportOptions(report_type="summary", use_ai=True)
    data = collect_report_data(options, TODAY, TODAY)
    text = asyncio.run(generate_report(Youth(), data, options, TODAY, TODAY, _ai_client(handler), NOW))
    assert AI_SECTION_HEADER not in text
    assert text.startswith("SUMMARY REPORT")


def test_ai_skipped_without_key():
    options = ReportOptions(report_type="summary", use_ai=True)
    data = collect_report_data(options, TODAY, TODAY)
    text = asyncio.run(generate_report(Youth(), data, options, TODAY, TODAY, AIClient(api_key=""), NOW))
    assert AI_SECTION_HEADER not in text
