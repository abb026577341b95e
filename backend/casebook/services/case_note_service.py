"""Case note parsing, classification, and statistics."""

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable

logger = logging.getLogger(__name__)

NOTE_TYPES = ("session", "general", "shift", "school")

SHIFT_KEYWORDS = [
    "shift", "morning shift", "day shift", "evening shift", "night shift",
    "overnight", "handoff", "on duty", "staffing",
]
INCIDENT_KEYWORDS = ["incident", "escalation", "crisis", "fight", "threat", "restraint", "safety"]
SKILL_KEYWORDS = [
    "skill", "skill building", "coping", "intervention", "practice", "role play",
    "processing", "therapy", "session",
]
FAMILY_KEYWORDS = ["family", "guardian", "parent", "visit", "phone call", "home"]
ACADEMIC_KEYWORDS = ["school", "class", "academic", "teacher", "assignment", "grade"]

_MONTHS = (
    "January|February|March|April|May|June|July|August|September|October|November|December|"
    "Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"
)
DATE_LINE_RE = re.compile(
    rf"^(\d{{1,2}}[/\-]\d{{1,2}}[/\-]\d{{2,4}}|(?:{_MONTHS})\s+\d{{1,2}},?\s+\d{{2,4}}|\d{{4}}-\d{{2}}-\d{{2}})\s*[:\-–]?\s*",
    re.IGNORECASE,
)


@dataclass
class Classification:
    note_type: str
    label: str
    tags: list[str]
    confidence: float


@dataclass
class ParsedEntry:
    date: date
    content: str


def _hits(text: str, keywords: list[str]) -> int:
    return sum(1 for keyword in keywords if keyword in text)


def classify_entry(entry: str) -> Classification:
    """Keyword-based label for a general or shift note."""
    text = entry.lower()
    shift_hits = _hits(text, SHIFT_KEYWORDS)
    incident_hits = _hits(text, INCIDENT_KEYWORDS)
    skill_hits = _hits(text, SKILL_KEYWORDS)
    family_hits = _hits(text, FAMILY_KEYWORDS)
    academic_hits = _hits(text, ACADEMIC_KEYWORDS)

    is_shift = shift_hits > 0 or "during the shift" in text
    note_type = "shift" if is_shift else "general"

    if incident_hits:
        label = "Incident Follow-Up"
    elif skill_hits:
        label = "Skill Building"
    elif family_hits:
        label = "Family Contact"
    elif academic_hits:
        label = "Academic Update"
    elif is_shift:
        label = "Shift Summary"
    else:
        label = "General Log"

    tags = [
        tag for tag, hit in (
            ("incident", incident_hits),
            ("skill-building", skill_hits),
            ("family", family_hits),
            ("academic", academic_hits),
        ) if hit
    ]
    tags.append(note_type)

    confidence = min(
        0.98,
        0.55 + shift_hits * 0.08 + incident_hits * 0.1 + skill_hits * 0.08
        + family_hits * 0.06 + academic_hits * 0.06,
    )
    return Classification(note_type=note_type, label=label, tags=tags, confidence=round(confidence, 2))


def split_combined_entries(raw: str) -> list[str]:
    """Split pasted text into entries: by paragraph, else by bullet line."""
    normalized = raw.replace("\r\n", "\n").strip()
    if not normalized:
        return []

    paragraphs = [p.strip() for p in re.split(r"\n\s*\n", normalized) if p.strip()]
    if len(paragraphs) > 1:
        return paragraphs

    bullets = [re.sub(r"^[-*]\s*", "", line).strip() for line in normalized.split("\n")]
    bullets = [b for b in bullets if b]
    return bullets if len(bullets) > 1 else [normalized]


def parse_short_date(raw: str) -> date | None:
    """Parse M/D/YY, M-D-YY, M/D/YYYY; two-digit years 00-49 are 2000s."""
    parts = re.split(r"[/\-]", raw.strip())
    if len(parts) != 3:
        return None
    try:
        month, day, year = (int(p) for p in parts)
    except ValueError:
        return None
    if year < 100:
        year += 2000 if year < 50 else 1900
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_note_date(raw: str, today: date | None = None) -> date:
    """Best-effort date parse; unrecognized input falls back to today."""
    parsed = parse_short_date(raw)
    if parsed:
        return parsed
    cleaned = raw.strip().replace(",", "")
    for fmt in ("%Y-%m-%d", "%B %d %Y", "%b %d %Y", "%B %d %y", "%b %d %y"):
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    logger.debug(f"Unrecognized note date {raw!r}, using today")
    return today or date.today()


def _parse_json_notes(data, today: date) -> list[ParsedEntry]:
    """Daily progress notes export: a list, or ``{resident_name, daily_progress_notes: [...]}``."""
    if isinstance(data, list):
        entries, resident = data, ""
    elif isinstance(data, dict) and isinstance(data.get("daily_progress_notes"), list):
        entries, resident = data["daily_progress_notes"], data.get("resident_name") or ""
    else:
        return []

    notes = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        day = parse_note_date(entry["date"], today) if entry.get("date") else today
        parts = []
        if resident:
            parts.append(f"Resident: {resident}")
        shift_notes = entry.get("shift_notes") or {}
        for key, title in (("overnight", "Overnight"), ("day", "Day"), ("evening", "Evening")):
            if shift_notes.get(key):
                parts.append(f"{title}: {shift_notes[key]}")
        if entry.get("scores_and_skills"):
            parts.append(f"Scores: {entry['scores_and_skills']}")
        if entry.get("negatives_for_the_day"):
            parts.append(f"Negatives: {entry['negatives_for_the_day']}")
        if entry.get("notes_of_concern"):
            parts.append(f"Notes of Concern: {entry['notes_of_concern']}")
        if parts:
            notes.append(ParsedEntry(date=day, content="\n".join(parts)))
    return notes


def parse_bulk_notes(text: str, today: date | None = None) -> list[ParsedEntry]:
    """Split pasted notes into dated entries.

    Accepts the JSON daily progress notes export, text with a date at the
    start of each note ("1/15/2026:", "January 15, 2026 -", "2026-01-15"),
    or plain paragraphs, which are all dated today.
    """
    today = today or date.today()
    normalized = text.replace("\r\n", "\n").strip()
    if not normalized:
        return []

    if normalized[0] in "{[":
        try:
            json_notes = _parse_json_notes(json.loads(normalized), today)
        except json.JSONDecodeError:
            json_notes = []
        if json_notes:
            return json_notes

    notes: list[ParsedEntry] = []
    current_date: date | None = None
    current_lines: list[str] = []

    for line in normalized.split("\n"):
        match = DATE_LINE_RE.match(line)
        if match:
            if current_date and current_lines:
                notes.append(ParsedEntry(current_date, "\n".join(current_lines).strip()))
            current_date = parse_note_date(match.group(1), today)
            remainder = line[match.end():].strip()
            current_lines = [remainder] if remainder else []
        else:
            current_lines.append(line)

    if current_date and current_lines:
        notes.append(ParsedEntry(current_date, "\n".join(current_lines).strip()))

    if not notes:
        paragraphs = [p.strip() for p in re.split(r"\n\s*\n", normalized) if p.strip()]
        return [ParsedEntry(today, p) for p in paragraphs]

    return [n for n in notes if n.content]


def note_text(note) -> str:
    """Readable text for a note whose body may be a structured JSON document."""
    if not note.note:
        return note.summary or ""
    try:
        parsed = json.loads(note.note)
    except (json.JSONDecodeError, TypeError):
        return note.note
    if not isinstance(parsed, dict):
        return note.note

    sections = parsed.get("sections") or {}
    if parsed.get("noteType") == "session":
        return sections.get("content") or sections.get("summary") or parsed.get("summary") or note.summary or ""
    if parsed.get("noteType") == "school":
        parts = [
            sections.get(key) for key in ("overview", "behavior", "academics", "interventions", "followUp")
        ]
        combined = "\n\n".join(p.strip() for p in parts if isinstance(p, str) and p.strip())
        return combined or note.summary or ""
    return parsed.get("summary") or note.summary or note.note


def truncate_for_summary(text: str, max_length: int = 100) -> str:
    return f"{text[:max_length]}..." if len(text) > max_length else text


def search_notes(notes: Iterable, term: str) -> list:
    """Case-insensitive match on note text, summary, label, or type."""
    term = term.lower().strip()
    if not term:
        return list(notes)
    matches = []
    for note in notes:
        haystack = " ".join(
            filter(None, [note_text(note), note.summary, note.label, note.note_type])
        ).lower()
        if term in haystack:
            matches.append(note)
    return matches


@dataclass
class NoteStatistics:
    total_notes: int = 0
    type_counts: dict[str, int] = field(default_factory=dict)
    staff_counts: dict[str, int] = field(default_factory=dict)


def note_statistics(notes: Iterable) -> NoteStatistics:
    stats = NoteStatistics()
    for note in notes:
        stats.total_notes += 1
        if note.note_type:
            stats.type_counts[note.note_type] = stats.type_counts.get(note.note_type, 0) + 1
        if note.staff and note.staff.strip():
            stats.staff_counts[note.staff] = stats.staff_counts.get(note.staff, 0) + 1
    return stats
