from .report_service import ReportService, OutputFormat

__all__ = ["ReportService", "OutputFormat"]
