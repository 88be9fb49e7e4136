"""Document analysis orchestration."""

from regref.analysis.analyzer import AnalysisResult, ReferenceAnalyzer

__all__ = ["AnalysisResult", "ReferenceAnalyzer"]
