"""
Course section records and normalization of raw Open Course List table rows
"""

import re
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import List, Optional, Sequence

from .errors import ArityError, InvalidFieldError, InvalidStatusError

ROW_LENGTH = 11

_LINE_BREAKS = re.compile(r'(\r\n|\n|\r)')
_CREDIT_RANGE = re.compile(r'^\d+\s*-\s*\d+$')


class Status(str, Enum):
    """Seat availability as shown on the course list"""
    OPEN = "OPEN"
    CLOSED = "CLOSED"

    @classmethod
    def from_token(cls, token) -> "Status":
        """Accept exactly 'OPEN' or 'CLOSED'; anything else is rejected"""
        if token == cls.OPEN.value:
            return cls.OPEN
        if token == cls.CLOSED.value:
            return cls.CLOSED
        raise InvalidStatusError(token)

    @classmethod
    def from_bool(cls, is_open) -> "Status":
        return cls.OPEN if is_open else cls.CLOSED

    def as_bool(self) -> bool:
        return self is Status.OPEN


@dataclass
class CourseRecord:
    """One class section from the Open Course List"""
    crn: int
    course_id: str
    attributes: List[str] = field(default_factory=list)
    title: str = ""
    instructor: str = ""
    credits: Optional[int] = None
    times: str = ""
    projected_enrollment: int = 0
    current_enrollment: int = 0
    seats_available: int = 0
    status: Status = Status.CLOSED

    def __post_init__(self):
        if not isinstance(self.status, Status):
            self.status = Status.from_token(self.status)
        self.attributes = list(self.attributes)
        for name in ('projected_enrollment', 'current_enrollment'):
            if getattr(self, name) < 0:
                raise InvalidFieldError(name, getattr(self, name))

    @property
    def crn_display(self) -> str:
        """CRN as the five digit string used on the course list"""
        return f"{self.crn:05d}"

    @property
    def is_open(self) -> bool:
        return self.status.as_bool()

    # Name used by the JSON format
    status_as_bool = is_open

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]


def clean_text(value) -> str:
    """Remove line breaks and surrounding whitespace"""
    if value is None:
        return ""
    return _LINE_BREAKS.sub("", str(value)).strip()


def parse_attributes(value) -> List[str]:
    """Split a comma separated attribute cell into cleaned, non-empty tokens"""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        tokens = value
    else:
        tokens = str(value).split(',')
    cleaned = [clean_text(token) for token in tokens]
    return [token for token in cleaned if token]


def parse_int(value, field_name: str, strip_asterisk: bool = False) -> int:
    text = clean_text(value)
    if strip_asterisk:
        text = text.replace('*', '').strip()
    try:
        return int(text)
    except ValueError:
        raise InvalidFieldError(field_name, value) from None


def parse_credits(value) -> Optional[int]:
    """Credits for fixed-credit courses, None for variable credit (blank or a range like 1-4)"""
    if value is None:
        return None
    text = clean_text(value)
    if not text:
        return None
    if _CREDIT_RANGE.match(text):
        return None
    return parse_int(text, 'credits')


def normalize_row(row: Sequence) -> CourseRecord:
    """Build a CourseRecord from the 11 cell texts of a course list table row.

    Columns: CRN, course ID, attributes, title, instructor, credits, times,
    projected enrollment, current enrollment, seats available, status.
    """
    if not isinstance(row, Sequence) or isinstance(row, (str, bytes)):
        raise ArityError(0 if row is None else 1)
    if len(row) != ROW_LENGTH:
        raise ArityError(len(row))

    (crn, course_id, attributes, title, instructor, credits, times,
     projected, current, seats, status) = row

    return CourseRecord(
        crn=parse_int(crn, 'crn'),
        course_id=clean_text(course_id),
        attributes=parse_attributes(attributes),
        title=clean_text(title),
        instructor=clean_text(instructor),
        credits=parse_credits(credits),
        times=clean_text(times),
        projected_enrollment=parse_int(projected, 'projected_enrollment'),
        current_enrollment=parse_int(current, 'current_enrollment'),
        seats_available=parse_int(seats, 'seats_available', strip_asterisk=True),
        status=Status.from_token(None if status is None else clean_text(status)),
    )
