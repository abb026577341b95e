"""Plain-text report generation.

A report is assembled from a youth record plus the behavior points, case
notes and shift scores that fall inside the requested period. Every report
type shares the same header conventions; the court and DPN reports add
narrative boilerplate used for probation and court submissions.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, Literal, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casebook.config import get_settings
from casebook.models.behavior_points import BehaviorPoints
from casebook.models.case_note import CaseNote
from casebook.models.scores import DailyShiftScore, WeeklyEval
from casebook.services.ai_client import AIClient, AIServiceError, SummaryRequest
from casebook.services.case_note_service import note_text
from casebook.services.level_system import get_current_level
from casebook.services.points import (
    calculate_points_for_period,
    calculate_total_points,
    filter_entries,
    get_point_statistics,
    group_by_week,
)
from casebook.services.score_service import DOMAINS, NormalizedScore, normalize, normalize_weekly

logger = logging.getLogger(__name__)
settings = get_settings()

ReportType = Literal[
    "comprehensive", "summary", "progress", "progressMonthly",
    "court", "dpnWeekly", "dpnBiWeekly", "dpnMonthly",
]
ReportPeriod = Literal["allTime", "last7", "last30", "last90", "custom"]

REPORT_TYPES: tuple[str, ...] = (
    "comprehensive", "summary", "progress", "progressMonthly",
    "court", "dpnWeekly", "dpnBiWeekly", "dpnMonthly",
)
REPORT_TITLES = {
    "comprehensive": "Comprehensive Report",
    "summary": "Summary Report",
    "progress": "Progress Report",
    "progressMonthly": "Monthly Progress Report",
    "court": "Court Report",
    "dpnWeekly": "DPN Weekly Progress Evaluation",
    "dpnBiWeekly": "DPN Bi-Weekly Progress Evaluation",
    "dpnMonthly": "DPN Monthly Progress Evaluation",
}
DPN_FREQUENCIES = {"dpnWeekly": "weekly", "dpnBiWeekly": "bi-weekly", "dpnMonthly": "monthly"}
NEXT_EVALUATION_DAYS = {"weekly": 7, "bi-weekly": 14, "monthly": 30}

ALL_TIME_START = date(2020, 1, 1)
AI_SECTION_HEADER = "AI-GENERATED NARRATIVE:"

DOMAIN_LABELS = {
    "peer": "Peer Interaction",
    "adult": "Adult Interaction",
    "investment": "Program Investment",
    "authority": "Authority Response",
}


class ReportError(ValueError):
    """Raised for an unknown report type or period."""


@dataclass
class ReportOptions:
    report_type: str = "comprehensive"
    period: str = "last30"
    custom_start_date: Optional[date] = None
    custom_end_date: Optional[date] = None
    include_profile: bool = True
    include_points: bool = True
    include_notes: bool = True
    use_ai: bool = False


@dataclass
class ReportData:
    behavior_points: list = field(default_factory=list)
    case_notes: list = field(default_factory=list)
    scores: list[NormalizedScore] = field(default_factory=list)
    # Every point entry on record, for all-time figures in court reports
    all_points: list = field(default_factory=list)


def get_date_range(options: ReportOptions, today: date | None = None) -> tuple[date, date]:
    today = today or date.today()
    if options.period == "last7":
        return today - timedelta(days=7), today
    if options.period == "last30":
        return today - timedelta(days=30), today
    if options.period == "last90":
        return today - timedelta(days=90), today
    if options.period == "custom":
        start = options.custom_start_date or today - timedelta(days=30)
        end = options.custom_end_date or today
        if start > end:
            raise ReportError("Custom start date must be on or before the end date")
        return start, end
    if options.period == "allTime":
        return ALL_TIME_START, today
    raise ReportError(f"Unknown report period: {options.period}")


def collect_report_data(
    options: ReportOptions,
    start: date,
    end: date,
    points: Iterable = (),
    notes: Iterable = (),
    scores: Iterable[NormalizedScore] = (),
) -> ReportData:
    """Keep only the records inside [start, end] that the options ask for."""
    points = list(points)
    data = ReportData(all_points=points)
    if options.include_points:
        data.behavior_points = sorted(filter_entries(points, start, end), key=lambda p: p.date)
    if options.include_notes:
        data.case_notes = sorted(
            (n for n in notes if n.date and start <= n.date <= end),
            key=lambda n: n.date,
            reverse=True,
        )
    data.scores = [s for s in scores if start <= s.date <= end]
    return data


async def load_report_data(db: AsyncSession, youth, options: ReportOptions, start: date, end: date) -> ReportData:
    """Fetch a youth's points, notes and scores and filter them to the period."""
    points = (await db.execute(
        select(BehaviorPoints).where(BehaviorPoints.youth_id == youth.id)
    )).scalars().all()
    notes = (await db.execute(
        select(CaseNote).where(CaseNote.youth_id == youth.id)
    )).scalars().all()
    shift_rows = (await db.execute(
        select(DailyShiftScore).where(DailyShiftScore.youth_id == youth.id)
    )).scalars().all()
    weekly_rows = (await db.execute(
        select(WeeklyEval).where(WeeklyEval.youth_id == youth.id)
    )).scalars().all()

    scores = [normalize(row) for row in shift_rows] + normalize_weekly(weekly_rows)
    return collect_report_data(options, start, end, points, notes, scores)


def fmt_date(value: date | datetime | None, missing: str = "Not provided") -> str:
    if not value:
        return missing
    return f"{value.month}/{value.day}/{value.year}"


def fmt_timestamp(value: datetime) -> str:
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{fmt_date(value)} {hour}:{value.minute:02d} {meridiem}"


def _level_name(youth) -> str:
    return get_current_level(youth.level or 0).name


def _round1(value: float) -> float:
    return round(value * 10) / 10


def _shift_average(entries: list, attr: str) -> float:
    if not entries:
        return 0
    return _round1(sum(getattr(e, attr) or 0 for e in entries) / len(entries))


def domain_average(scores: list[NormalizedScore], domain: str) -> float:
    """Average of the non-zero scores for one domain, one decimal place."""
    values = [getattr(s, domain) for s in scores if getattr(s, domain)]
    return _round1(sum(values) / len(values)) if values else 0


def rating_label(value: float) -> str:
    if value >= 3.2:
        return "Excellent"
    if value >= 2.4:
        return "Good"
    return "Needs Improvement"


def dpn_performance_level(percentage: int) -> str:
    if percentage >= 80:
        return "Excellent"
    if percentage >= 70:
        return "Good"
    if percentage >= 60:
        return "Satisfactory"
    return "Needs Improvement"


def risk_level(youth) -> str:
    if youth.restriction_level == 2 or youth.subsystem_active:
        return "Moderate-High"
    return "Moderate"


def next_evaluation_date(frequency: str, end: date) -> date:
    return end + timedelta(days=NEXT_EVALUATION_DAYS[frequency])


def _note_lines(notes: list, limit: int, bullet: str = "", missing_date: str = "No date", with_category: bool = True) -> str:
    lines = []
    for note in notes[:limit]:
        text = note_text(note) or "No note"
        if with_category:
            category = note.label or (note.note_type or "general").title()
            lines.append(f"{bullet}{fmt_date(note.date, missing_date)} - {category}: {text}")
        else:
            lines.append(f"{bullet}{fmt_date(note.date, missing_date)}: {text}")
    return "\n".join(lines) + ("\n" if lines else "")


def _header(title: str) -> str:
    return f"{title.upper()}\n{settings.facility_name}\n"


def _comprehensive(youth, data: ReportData, start: date, end: date, options: ReportOptions, now: datetime) -> str:
    report = (
        f"{_header('Comprehensive Report')}\n"
        "Youth Information:\n"
        f"Name: {youth.first_name} {youth.last_name}\n"
        f"Date of Birth: {fmt_date(youth.dob)}\n"
        f"Admission Date: {fmt_date(youth.admission_date)}\n"
        f"Current Level: {_level_name(youth)}\n\n"
        f"Report Period: {fmt_date(start)} to {fmt_date(end)}\n\n"
    )

    if options.include_profile:
        report += (
            "PROFILE INFORMATION:\n"
            f"Referral Source: {youth.referral_source or 'Not provided'}\n"
            f"Referral Reason: {youth.referral_reason or 'Not provided'}\n"
            f"Education Info: {youth.education_info or 'Not provided'}\n"
            f"Medical Info: {youth.medical_info or 'Not provided'}\n"
            f"Mental Health Info: {youth.mental_health_info or 'Not provided'}\n"
            f"Legal Status: {youth.legal_status or 'Not provided'}\n\n"
        )

    if options.include_points:
        points = data.behavior_points
        report += (
            "BEHAVIOR POINT SUMMARY:\n"
            f"Total Points This Period: {calculate_total_points(points)}\n"
            f"Average Morning Points: {_shift_average(points, 'morning_points')}\n"
            f"Average Afternoon Points: {_shift_average(points, 'afternoon_points')}\n"
            f"Average Evening Points: {_shift_average(points, 'evening_points')}\n"
            f"Days Recorded: {len(points)}\n\n"
        )

    if data.scores:
        report += "DAILY RATINGS SUMMARY:\n"
        for domain in DOMAINS:
            report += f"{DOMAIN_LABELS[domain]} Average: {domain_average(data.scores, domain)} / 4\n"
        report += "\n"

    if options.include_notes:
        report += f"PROGRESS NOTES ({len(data.case_notes)} entries):\n"
        report += _note_lines(data.case_notes, 50)
        report += "\n"

    report += f"Report Generated: {fmt_timestamp(now)}"
    return report


def _summary(youth, data: ReportData, start: date, end: date, options: ReportOptions, now: datetime) -> str:
    report = (
        f"{_header('Summary Report')}\n"
        f"Youth: {youth.first_name} {youth.last_name}\n"
        f"Period: {fmt_date(start)} to {fmt_date(end)}\n"
        f"Current Level: {_level_name(youth)}\n\n"
    )

    if options.include_points:
        points = data.behavior_points
        total = calculate_total_points(points)
        report += (
            "BEHAVIOR SUMMARY:\n"
            f"Total Points: {total}\n"
            f"Days Recorded: {len(points)}\n"
            f"Daily Average: {round(total / len(points)) if points else 0}\n\n"
        )

    if data.scores:
        overall = _round1(sum(domain_average(data.scores, d) for d in DOMAINS) / len(DOMAINS))
        report += f"RATINGS SUMMARY:\nOverall Performance: {overall} / 4\n\n"

    report += f"Report Generated: {fmt_timestamp(now)}"
    return report


def _progress(youth, data: ReportData, start: date, end: date, options: ReportOptions, now: datetime) -> str:
    title = REPORT_TITLES[options.report_type]
    report = (
        f"{_header(title)}\n"
        f"Youth: {youth.first_name} {youth.last_name}\n"
        f"Period: {fmt_date(start)} to {fmt_date(end)}\n\n"
    )

    if options.include_points:
        points = data.behavior_points
        total = calculate_total_points(points)
        report += (
            "BEHAVIOR PROGRESS:\n"
            f"Total Points Earned: {total}\n"
            f"Days with Data: {len(points)}\n"
            f"Average Points per Day: {round(total / len(points)) if points else 0}\n\n"
            "Weekly Breakdown:\n"
        )
        for week, entries in group_by_week(points).items():
            report += f"Week of {fmt_date(week)}: {calculate_total_points(entries)} points ({len(entries)} days)\n"
        report += "\n"

    if data.scores:
        report += "SKILL DEVELOPMENT PROGRESS:\n"
        for domain in DOMAINS:
            report += f"{DOMAIN_LABELS[domain]}: {domain_average(data.scores, domain)} / 4\n"
        report += "\n"

    report += f"Report Generated: {fmt_timestamp(now)}"
    return report


def _court(youth, data: ReportData, start: date, end: date, options: ReportOptions, now: datetime) -> str:
    today = now.date()
    stats = get_point_statistics(data.all_points, 30, today)
    period_total = calculate_points_for_period(data.all_points, start, end)
    all_time_total = calculate_total_points(data.all_points)
    days_in_program = (today - youth.admission_date).days if youth.admission_date else "Not calculated"
    first = youth.first_name

    report = (
        f"{_header('Court Report')}Group Home\n\n"
        "YOUTH INFORMATION:\n"
        f"Name: {youth.first_name} {youth.last_name}\n"
        f"Date of Birth: {fmt_date(youth.dob)}\n"
        f"ID Number: {youth.id_number or 'Not provided'}\n"
        f"Admission Date: {fmt_date(youth.admission_date)}\n"
        f"Current Level: {_level_name(youth)}\n"
        f"Days in Program: {days_in_program}\n\n"
        "PLACEMENT INFORMATION:\n"
        f"Legal Guardian: {youth.legal_guardian or 'Not provided'}\n"
        f"Relationship: {youth.guardian_relationship or 'Not provided'}\n"
        f"Probation Officer: {youth.probation_officer or 'Not provided'}\n"
        f"Placing Authority: {youth.placement_authority or 'Not provided'}\n"
        f"Estimated Length of Stay: {youth.estimated_stay or 'To be determined'}\n\n"
        "CLINICAL INFORMATION:\n"
        f"Current Diagnoses: {youth.current_diagnoses or 'Not provided'}\n"
        f"Trauma History: {', '.join(youth.trauma_history or []) or 'Not documented'}\n"
        f"Current Medications: {youth.current_medications or 'None reported'}\n"
        f"Allergies: {youth.allergies or 'None known'}\n\n"
        "BEHAVIORAL PERFORMANCE:\n"
        f"Total Points Earned (All Time): {all_time_total:,}\n"
        f"Points Earned This Period: {period_total:,}\n"
        f"Average Daily Points: {stats.average_daily}\n"
        f"Highest Single Day: {stats.highest_day} points\n"
        f"Performance Trend: {stats.trend}\n"
        f"Days Above Average: {stats.days_above_average} of last 30 days\n"
        f"Legal Status: {youth.legal_status or 'Not provided'}\n\n"
        f"REPORT PERIOD: {fmt_date(start)} to {fmt_date(end)}\n\n"
        "PROGRAM PARTICIPATION:\n"
        f"{first} has been actively participating in the group home program at {settings.facility_name}. "
        "The program focuses on behavioral modification, educational advancement, and therapeutic intervention.\n\n"
        "BEHAVIORAL PROGRESS:\n"
    )

    points = data.behavior_points
    if points:
        total = calculate_total_points(points)
        report += (
            f"During the reporting period, {first} earned a total of {total} behavior points over "
            f"{len(points)} days, averaging {round(total / len(points))} points per day. The point system "
            "measures compliance with program expectations, peer interactions, and staff cooperation.\n\n"
        )
    else:
        report += "No behavior points were recorded during the reporting period.\n\n"

    if data.scores:
        report += "SKILL DEVELOPMENT ASSESSMENT:\n"
        for domain in DOMAINS:
            value = domain_average(data.scores, domain)
            report += f"- {DOMAIN_LABELS[domain]}: {value}/4 - {rating_label(value)}\n"
        report += "\n"

    report += (
        "THERAPEUTIC PROGRESS:\n"
        f"{first} has been engaged in individual and group therapy sessions focusing on behavioral "
        "modification and social skill development.\n\n"
        "EDUCATIONAL STATUS:\n"
        f"{youth.education_info or f'{first} is enrolled in educational programming appropriate for their academic level.'}\n\n"
        "MEDICAL/MENTAL HEALTH:\n"
        f"{youth.medical_info or 'Medical needs are monitored by qualified healthcare professionals.'}\n"
        f"{youth.mental_health_info or 'Mental health services are provided as part of the comprehensive treatment approach.'}\n\n"
        "RECENT PROGRESS NOTES:\n"
    )
    report += _note_lines(data.case_notes, 30, missing_date="Recent") or "No progress notes recorded during this period.\n"

    report += (
        "\nRECOMMENDATIONS:\n"
        "1. Continue current treatment plan with regular progress monitoring\n"
        "2. Maintain structured environment with clear expectations and consequences\n"
        "3. Provide ongoing therapeutic support for behavioral and emotional development\n"
        "4. Consider gradual increase in privileges and responsibilities as progress continues\n"
        "5. Prepare for transition planning as appropriate milestones are achieved\n\n"
        f"Report Prepared By: {settings.facility_name} Clinical Staff\n"
        f"Date: {fmt_date(today)}\n"
    )
    return report


def _dpn(youth, data: ReportData, start: date, end: date, options: ReportOptions, now: datetime) -> str:
    frequency = DPN_FREQUENCIES[options.report_type]
    title = "Bi-Weekly" if frequency == "bi-weekly" else frequency.capitalize()
    first = youth.first_name

    report = (
        f"DPN {title.upper()} PROGRESS EVALUATION\n"
        f"{settings.facility_name}\n"
        "Department of Probation and Parole Reporting\n\n"
        "YOUTH INFORMATION:\n"
        f"Name: {youth.first_name} {youth.last_name}\n"
        f"Date of Birth: {fmt_date(youth.dob)}\n"
        f"Admission Date: {fmt_date(youth.admission_date)}\n"
        f"Current Level: {_level_name(youth)}\n"
        f"Legal Status: {youth.legal_status or 'Court-ordered residential placement'}\n\n"
        f"EVALUATION PERIOD: {fmt_date(start)} to {fmt_date(end)}\n\n"
        "BEHAVIORAL PERFORMANCE:\n"
    )

    points = data.behavior_points
    if points:
        total = calculate_total_points(points)
        max_possible = len(points) * settings.max_entry_points
        percentage = round(total / max_possible * 100)
        report += (
            "Behavior Point Summary:\n"
            f"- Total Points Earned: {total} out of {max_possible} possible ({percentage}%)\n"
            f"- Daily Average: {round(total / len(points))} points\n"
            f"- Days Evaluated: {len(points)}\n"
            f"- Performance Level: {dpn_performance_level(percentage)}\n\n"
        )
    else:
        report += "No behavior points were recorded during this evaluation period.\n\n"

    if data.scores:
        report += "SKILL DEVELOPMENT RATINGS:\n"
        for domain in DOMAINS:
            value = domain_average(data.scores, domain)
            report += f"- {DOMAIN_LABELS[domain]}: {value}/4 - {rating_label(value)}\n"
        report += "\n"

    report += (
        "EDUCATIONAL ENGAGEMENT:\n"
        f"{youth.education_info or f'{first} is participating in educational programming with regular attendance and effort.'}\n\n"
        "SIGNIFICANT INCIDENTS/ACHIEVEMENTS:\n"
    )
    if data.case_notes:
        report += _note_lines(data.case_notes, 15, bullet="• ", missing_date="Recent", with_category=False)
    else:
        report += "• No significant incidents reported during this period\n"

    report += (
        "\nRISK ASSESSMENT:\n"
        f"Current risk level: {risk_level(youth)}\n\n"
        "RECOMMENDATIONS FOR NEXT PERIOD:\n"
        "1. Continue current treatment interventions and behavioral expectations\n"
        "2. Monitor progress toward established treatment goals\n"
        "3. Provide ongoing support for skill development and emotional regulation\n"
        "4. Maintain regular communication with probation officer regarding progress\n"
        "5. Consider advancement opportunities as milestones are achieved\n\n"
        f"NEXT EVALUATION: {fmt_date(next_evaluation_date(frequency, end))}\n\n"
        f"Report Prepared By: {settings.facility_name} Clinical Team\n"
        f"Date: {fmt_date(now.date())}\n"
    )
    return report


_GENERATORS = {
    "comprehensive": _comprehensive,
    "summary": _summary,
    "progress": _progress,
    "progressMonthly": _progress,
    "court": _court,
    "dpnWeekly": _dpn,
    "dpnBiWeekly": _dpn,
    "dpnMonthly": _dpn,
}


def build_report_text(
    youth,
    data: ReportData,
    options: ReportOptions,
    start: date,
    end: date,
    now: datetime | None = None,
) -> str:
    generator = _GENERATORS.get(options.report_type)
    if generator is None:
        raise ReportError(f"Unknown report type: {options.report_type}")
    return generator(youth, data, start, end, options, now or datetime.now())


def build_summary_request(youth, data: ReportData, options: ReportOptions, start: date, end: date) -> SummaryRequest:
    return SummaryRequest(
        report_type=options.report_type,
        youth_name=f"{youth.first_name} {youth.last_name}",
        level=youth.level,
        period_label=f"{start.isoformat()} - {end.isoformat()}",
        points_total=calculate_total_points(data.behavior_points),
        ratings={d: domain_average(data.scores, d) for d in DOMAINS} if data.scores else {},
        notes=[
            {"date": n.date.isoformat(), "category": n.label or n.note_type, "note": note_text(n)}
            for n in sorted(data.case_notes, key=lambda n: n.date)
        ],
    )


async def generate_report(
    youth,
    data: ReportData,
    options: ReportOptions,
    start: date,
    end: date,
    ai_client: AIClient | None = None,
    now: datetime | None = None,
) -> str:
    """Build the report text, appending an AI narrative when requested and available."""
    report = build_report_text(youth, data, options, start, end, now)
    if not options.use_ai or ai_client is None:
        return report

    try:
        narrative = await ai_client.summarize_report(build_summary_request(youth, data, options, start, end))
    except AIServiceError as e:
        logger.warning(f"AI enhancement failed for youth {youth.id}: {e}")
        return report

    if narrative:
        return f"{report}\n\n{AI_SECTION_HEADER}\n{narrative}"
    return report
