"""
JSON compliance report.

The report lists every materialized reference twice: once in its partition
(local_references / external_references) and once in all_references, which
keeps the order the model reported them in. Self-references never appear.
"""

import json
from pathlib import Path
from typing import Any, Dict

from regref.analysis.analyzer import AnalysisResult
from regref.core.logging import get_logger

logger = get_logger(__name__)

ANALYSIS_METHOD = "Enhanced AI with comprehensive prompting for compliance"
COMPLIANCE_NOTE = (
    "Complete regulatory reference analysis. Local references are immediately "
    "available for review. External references should be obtained for full "
    "compliance assessment."
)
TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S"


def build_report(result: AnalysisResult) -> Dict[str, Any]:
    """Build the report dict; key order is the serialized order."""
    aggregate = result.aggregate
    return {
        "source_file": result.source_file,
        "source_file_full_path": str(result.source_path),
        "analysis_date": result.analyzed_at.isoformat(),
        "analysis_method": ANALYSIS_METHOD,
        "local_circulars_scanned": result.collection_size,
        "summary": aggregate.summary.to_dict(),
        "compliance_note": COMPLIANCE_NOTE,
        "local_references": [r.to_dict() for r in aggregate.local],
        "external_references": [r.to_dict() for r in aggregate.external],
        "all_references": [r.to_dict() for r in result.references],
        "candidate_error": result.candidate_error,
    }


def serialize_report(report: Dict[str, Any]) -> str:
    """Serialize with a 2-space indent, keys in insertion order."""
    return json.dumps(report, indent=2, ensure_ascii=False)


def report_filename(result: AnalysisResult, prefix: str) -> str:
    stem = Path(result.source_file).stem
    timestamp = result.analyzed_at.strftime(TIMESTAMP_FORMAT)
    return f"{prefix}_{stem}_{timestamp}.json"


def save_report(
    result: AnalysisResult, directory: Path, prefix: str = "compliance_references"
) -> Path:
    """
    Write the report for result into directory.

    Returns:
        Path of the written file
    """
    directory.mkdir(parents=True, exist_ok=True)
    output_path = directory / report_filename(result, prefix)
    output_path.write_text(serialize_report(build_report(result)), encoding="utf-8")
    logger.info("Report saved", path=str(output_path))
    return output_path
