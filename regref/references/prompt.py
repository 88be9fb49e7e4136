"""
Prompt assembly for reference extraction.

The prompt carries the full document text (with page markers), one entry per
local circular the model should try to match, and the JSON record schema the
normalizer expects back.
"""

import json
from typing import List

from regref.extraction.models import CircularMetadata
from regref.index.local_index import LocalIndex
from regref.references.normalizer import EXTERNAL_SENTINEL

# Local target entries list at most this many key terms
MAX_TARGET_KEY_TERMS = 5

# ---------------------------------------------------------------------------
# Prompt Templates
# ---------------------------------------------------------------------------

REFERENCE_TYPES = (
    "sebi_circular",
    "sebi_regulation",
    "rbi_circular",
    "companies_act",
    "other_law",
    "other",
)

RECORD_SCHEMA = f"""
## Fields For Each Reference

- exact_text: The exact text as it appears in the document
- reference_type: One of {", ".join(f'"{t}"' for t in REFERENCE_TYPES)}
- circular_number: Any circular or regulation number mentioned
- title: The title or subject of the referenced document
- page_number: The page the reference appears on (see the PAGE markers)
- context: The surrounding sentence where the reference appears
- confidence: How confident you are this is a real reference (high/medium/low)
- reasoning: Why you identified this as a reference
- matched_target: The filename of the matching local circular listed above,
  otherwise "{EXTERNAL_SENTINEL}"
"""

EXAMPLE_RECORD = {
    "exact_text": "SEBI/HO/MIRSD/CIR/2021/670 dated March 15, 2021",
    "reference_type": "sebi_circular",
    "circular_number": "SEBI/HO/MIRSD/CIR/2021/670",
    "title": "Investment Adviser Guidelines",
    "page_number": 3,
    "context": (
        "As per SEBI/HO/MIRSD/CIR/2021/670 dated March 15, 2021, all advisers "
        "must comply with disclosure norms."
    ),
    "confidence": "high",
    "reasoning": "Specific SEBI circular number with exact date reference",
    "matched_target": EXTERNAL_SENTINEL,
}

REFERENCE_PROMPT_TEMPLATE = """
You are an expert SEBI compliance analyst. Find ALL references to other
regulatory documents (circulars, regulations, laws, etc.) in the document
below.

## Document To Analyze

{document_text}

## Local Circulars To Watch For

{targets}

## Find All References To

1. SEBI circulars (any circular number like SEBI/HO/MIRSD/CIR/2021/670)
2. SEBI regulations (like SEBI (Research Analysts) Regulations, 2014)
3. RBI circulars and guidelines
4. Companies Act provisions
5. Other regulatory documents
6. Indirect references such as "previous circular" or "earlier guidelines"
{record_schema}
IMPORTANT:
1. Find ALL regulatory references, not just ones in the local list
2. If a reference matches a local circular, set matched_target to its filename
3. If a reference is to an external document, set matched_target to "{sentinel}"
4. Include specific circular numbers AND general references like "earlier circular"

Return ONLY a valid JSON array. Compliance teams need a complete regulatory
mapping.

Example:
{example}
"""


def format_target(metadata: CircularMetadata) -> str:
    """One local circular as listed in the prompt."""
    lines = [f"- {metadata.filename}:"]
    if metadata.circular_number:
        lines.append(f"   Number: {metadata.circular_number}")
    if metadata.subject:
        lines.append(f"   Subject: {metadata.subject}")
    if metadata.date:
        lines.append(f"   Date: {metadata.date}")
    if metadata.key_terms:
        terms = ", ".join(metadata.key_terms[:MAX_TARGET_KEY_TERMS])
        lines.append(f"   Key terms: {terms}")
    return "\n".join(lines)


def build_reference_prompt(document_text: str, index: LocalIndex) -> str:
    """Build the extraction prompt for document_text against index."""
    targets: List[str] = [format_target(metadata) for metadata in index.values()]
    return REFERENCE_PROMPT_TEMPLATE.format(
        document_text=document_text,
        targets="\n".join(targets) if targets else "(none)",
        record_schema=RECORD_SCHEMA,
        sentinel=EXTERNAL_SENTINEL,
        example=json.dumps([EXAMPLE_RECORD], indent=2),
    )
