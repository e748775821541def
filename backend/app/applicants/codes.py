"""
Program-scoped applicant code generation
"""
import re
from typing import Iterable

from app.applicants.constants import CODE_PREFIXES
from app.core.exceptions import ValidationError

CODE_DIGITS = 6


def code_prefix(program: str) -> str:
    try:
        return CODE_PREFIXES[program]
    except KeyError:
        raise ValidationError(f"Unknown program: {program}", details={"program": program})


def next_code(program: str, existing_codes: Iterable[str]) -> str:
    """
    Next sequential code for a program, e.g. ``GIP-000008`` after ``GIP-000007``.

    Only codes of the form ``PREFIX-NNNNNN`` count toward the maximum;
    anything else (other prefix, wrong width, free text) is ignored.
    """
    prefix = code_prefix(program)
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d{{{CODE_DIGITS}}})$")

    highest = 0
    for code in existing_codes:
        match = pattern.match(code or "")
        if match:
            highest = max(highest, int(match.group(1)))

    return f"{prefix}-{highest + 1:0{CODE_DIGITS}d}"
