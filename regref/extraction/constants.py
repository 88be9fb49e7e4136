"""Pattern tables for circular metadata extraction.

Each field has an ordered rule list; the first rule that yields an accepted
value wins.
"""

import re

# Canonical regulator identifier, e.g. SEBI/HO/IMD/DF3/CIR/P/2019/17.
# Tried over the whole text before the generic label pattern.
CANONICAL_CIRCULAR_PATTERN = re.compile(
    r"SEBI/[A-Z0-9/_-]+/(?:CIR|P)/[A-Z0-9/_-]+/\d{4}/\d+",
    re.IGNORECASE,
)

# "Circular No. <value>" / "Circular: No <value>". Only the captured value is
# returned, never the "Circular No." label, even for values containing "/".
GENERIC_CIRCULAR_PATTERN = re.compile(
    r"Circular[:\s]+No\.?\s*([A-Z0-9/._-]+)",
    re.IGNORECASE,
)

# \b keeps words ending in "re:" (e.g. "are:") from matching as a "Re:" label.
SUBJECT_PATTERNS = [
    re.compile(r"\bSubject:\s*(.+?)(?:\n|$)", re.IGNORECASE),
    re.compile(r"\bRe:\s*(.+?)(?:\n|$)", re.IGNORECASE),
]

# Subjects must be strictly longer than this after whitespace collapsing
MIN_SUBJECT_LENGTH = 10

DATE_PATTERN = re.compile(
    r"(?:January|February|March|April|May|June|July|August|September|October"
    r"|November|December)\s+\d{1,2},?\s+\d{4}",
    re.IGNORECASE,
)

# Vocabulary order is the output order of extract_key_terms()
KEY_TERM_VOCABULARY = (
    "investment adviser",
    "registrar",
    "depository",
    "mutual fund",
    "portfolio",
    "compliance",
    "audit",
    "charter",
    "framework",
    "guidelines",
    "norms",
    "requirements",
    "risk management",
    "kyc",
    "aml",
    "disclosure",
    "governance",
    "intermediary",
)
