"""Report summary and rendering."""

from .generator import (
    build_report_summary,
    generate_ai_summary_report,
    generate_non_technical_report,
    generate_technical_report,
)
from .models import ReportData, ReportSummary

__all__ = [
    "ReportData",
    "ReportSummary",
    "build_report_summary",
    "generate_ai_summary_report",
    "generate_technical_report",
    "generate_non_technical_report",
]
