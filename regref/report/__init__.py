"""Report output: JSON file and terminal rendering."""

from regref.report.console import render_analysis
from regref.report.writer import build_report, save_report, serialize_report

__all__ = ["build_report", "render_analysis", "save_report", "serialize_report"]
