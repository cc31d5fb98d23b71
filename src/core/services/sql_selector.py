"""Deterministic SQL answer selection.

The registration number decides which of the two canned answers is sent:
strip every non-digit, take the last two digits as an integer and pick
query A when it is odd, query B when it is even.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from core.domain.errors import ValidationError

QUERY_ODD = (
    "SELECT p.* FROM Patients p WHERE p.admission_date = "
    "(SELECT p2.admission_date FROM Patients p2 WHERE p2.name = 'John Smith');"
)
QUERY_EVEN = (
    "SELECT d.* FROM Doctors d LEFT JOIN Department_Assignments da "
    "ON d.doctor_id = da.doctor_id WHERE da.department_id IS NULL;"
)

_NON_DIGITS = re.compile(r"[^0-9]+")


@dataclass(frozen=True)
class QuerySelection:
    """Outcome of the selection rule, kept for logging and previews."""

    reg_no: str
    digits: str
    last_two: int
    query: str

    @property
    def is_odd(self) -> bool:
        return self.last_two % 2 != 0

    @property
    def parity(self) -> str:
        return "odd" if self.is_odd else "even"


def extract_digits(reg_no: str) -> str:
    return _NON_DIGITS.sub("", reg_no)


def describe_selection(reg_no: str) -> QuerySelection:
    """Apply the selection rule and keep the intermediate values."""

    digits = extract_digits(reg_no)
    if len(digits) < 2:
        raise ValidationError(
            f"Registration number {reg_no!r} must contain at least two digits.",
            step="select_query",
        )

    last_two = int(digits[-2:])
    query = QUERY_ODD if last_two % 2 != 0 else QUERY_EVEN
    return QuerySelection(reg_no=reg_no, digits=digits, last_two=last_two, query=query)


def select_query(reg_no: str) -> str:
    return describe_selection(reg_no).query
