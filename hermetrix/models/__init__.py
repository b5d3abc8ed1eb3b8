from .assessment import Assessment, RiskScore
from .chat import ChatMessage
from .error_log import ErrorLog
from .extraction_job import ExtractionJob
from .insight import Insight
from .parameter import MedicalParameter
from .report import InvalidStatusTransition, MedicalReport, ReportStatus
from .safety import EmergencyContact, SosAlert
from .task import DailyTask
from .tracking import PeriodCycle, StepsTracker, WaterIntake

__all__ = [
    "Assessment",
    "ChatMessage",
    "DailyTask",
    "EmergencyContact",
    "ErrorLog",
    "ExtractionJob",
    "Insight",
    "InvalidStatusTransition",
    "MedicalParameter",
    "MedicalReport",
    "PeriodCycle",
    "ReportStatus",
    "RiskScore",
    "SosAlert",
    "StepsTracker",
    "WaterIntake",
]
