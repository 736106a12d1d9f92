from sloreport.report.generator import ReportGenerator, ReportSummary
from sloreport.report.writer import REPORT_COLUMNS, ReportWriter

__all__ = ["REPORT_COLUMNS", "ReportGenerator", "ReportSummary", "ReportWriter"]
