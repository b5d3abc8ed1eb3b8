from .ai import ExtractedParameter, ExtractionResult, InsightSuggestion, RiskResult, TaskSuggestion
from .assessment import (
    AssessmentCreate,
    AssessmentRead,
    AssessmentResult,
    DailyTaskRead,
    InsightRead,
    QuestionRead,
    RiskScoreRead,
    TaskUpdate,
)
from .chat import ChatMessageRead, ChatReply, ChatSend
from .report import ExtractionJobRead, ParameterRead, ParameterTrend, ReportRead, ReportStatusRead, TrendPoint
from .safety import (
    EmergencyContactCreate,
    EmergencyContactRead,
    HospitalRead,
    SosAlertRead,
    SosTrigger,
    SosTriggerResponse,
)
from .tracking import (
    DailyTotal,
    PeriodCycleCreate,
    PeriodCycleRead,
    StepsCreate,
    StepsRead,
    WaterIntakeCreate,
    WaterIntakeRead,
)

__all__ = [
    "AssessmentCreate",
    "AssessmentRead",
    "AssessmentResult",
    "ChatMessageRead",
    "ChatReply",
    "ChatSend",
    "DailyTaskRead",
    "DailyTotal",
    "EmergencyContactCreate",
    "EmergencyContactRead",
    "ExtractedParameter",
    "ExtractionJobRead",
    "ExtractionResult",
    "HospitalRead",
    "InsightRead",
    "InsightSuggestion",
    "ParameterRead",
    "ParameterTrend",
    "PeriodCycleCreate",
    "PeriodCycleRead",
    "QuestionRead",
    "ReportRead",
    "ReportStatusRead",
    "RiskResult",
    "RiskScoreRead",
    "SosAlertRead",
    "SosTrigger",
    "SosTriggerResponse",
    "StepsCreate",
    "StepsRead",
    "TaskSuggestion",
    "TaskUpdate",
    "TrendPoint",
    "WaterIntakeCreate",
    "WaterIntakeRead",
]
