"""Pydantic schemas package."""

from casebook.schemas.youth import (
    YouthBase,
    YouthCreate,
    YouthUpdate,
    YouthRead,
    YouthWithProgress,
    YouthSummary,
    CardPointsRequest,
    CorrectedTotalRequest,
    RestrictionRequest,
    SubsystemRequest,
    DischargeRequest,
    LevelChangeResponse,
)
from casebook.schemas.behavior_points import (
    BehaviorPointsBase,
    BehaviorPointsCreate,
    BehaviorPointsRead,
    WeeklyAverageRead,
    PointStatisticsRead,
    ShiftAveragesRead,
    PointSummary,
)
from casebook.schemas.case_note import (
    CaseNoteBase,
    CaseNoteCreate,
    CaseNoteUpdate,
    CaseNoteRead,
    BulkNotesRequest,
    BulkNotesResponse,
    ClassificationRead,
    ClassifyRequest,
    NoteStatisticsRead,
)
from casebook.schemas.academics import (
    CreditCreate,
    CreditRead,
    GradeCreate,
    GradeRead,
    StepsCreate,
    StepsRead,
    AcademicSummaryRead,
)
from casebook.schemas.school_incident import (
    SchoolIncidentBase,
    SchoolIncidentCreate,
    SchoolIncidentRead,
    SchoolIncidentSummary,
    InvolvedResident,
    TimelineEntry,
    FollowUp,
)
from casebook.schemas.scores import (
    ShiftScoreCreate,
    WeeklyEvalCreate,
    NormalizedScoreRead,
    DomainAveragesRead,
    ScoreAveragesResponse,
    SchoolScoreCreate,
    SchoolScoreRead,
    ScoreStatsRead,
)
from casebook.schemas.alert import AlertCreate, AlertRead
from casebook.schemas.report import (
    ReportRequest,
    ReportResponse,
    EnhanceRequest,
    EnhanceResponse,
    DraftWrite,
    DraftRead,
)

__all__ = [
    # Youth
    "YouthBase",
    "YouthCreate",
    "YouthUpdate",
    "YouthRead",
    "YouthWithProgress",
    "YouthSummary",
    "CardPointsRequest",
    "CorrectedTotalRequest",
    "RestrictionRequest",
    "SubsystemRequest",
    "DischargeRequest",
    "LevelChangeResponse",
    # BehaviorPoints
    "BehaviorPointsBase",
    "BehaviorPointsCreate",
    "BehaviorPointsRead",
    "WeeklyAverageRead",
    "PointStatisticsRead",
    "ShiftAveragesRead",
    "PointSummary",
    # CaseNote
    "CaseNoteBase",
    "CaseNoteCreate",
    "CaseNoteUpdate",
    "CaseNoteRead",
    "BulkNotesRequest",
    "BulkNotesResponse",
    "ClassificationRead",
    "ClassifyRequest",
    "NoteStatisticsRead",
    # Academics
    "CreditCreate",
    "CreditRead",
    "GradeCreate",
    "GradeRead",
    "StepsCreate",
    "StepsRead",
    "AcademicSummaryRead",
    # SchoolIncident
    "SchoolIncidentBase",
    "SchoolIncidentCreate",
    "SchoolIncidentRead",
    "SchoolIncidentSummary",
    "InvolvedResident",
    "TimelineEntry",
    "FollowUp",
    # Scores
    "ShiftScoreCreate",
    "WeeklyEvalCreate",
    "NormalizedScoreRead",
    "DomainAveragesRead",
    "ScoreAveragesResponse",
    "SchoolScoreCreate",
    "SchoolScoreRead",
    "ScoreStatsRead",
    # Alert
    "AlertCreate",
    "AlertRead",
    # Reports & drafts
    "ReportRequest",
    "ReportResponse",
    "EnhanceRequest",
    "EnhanceResponse",
    "DraftWrite",
    "DraftRead",
]
