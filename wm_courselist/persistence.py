"""
Saving and loading course records as JSON or CSV

JSON files are a list of objects keyed by the record field names with a leading
underscore, with the status stored as a boolean (true = OPEN). They reload
exactly.

CSV files have a header row and one row per record, with attributes joined by
hyphens. Loading CSV is best-effort: it is reliable for files written by
``save_csv`` whose values contain no hyphens inside attributes.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from .course_record import (CourseRecord, Status, clean_text, parse_credits,
                            parse_int)
from .errors import (ConfigurationError, FormatError, InvalidFieldError,
                     InvalidStatusError)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

ATTRIBUTE_DELIMITER = '-'
FIELD_NAMES = CourseRecord.field_names()
JSON_KEYS = ['_' + name for name in FIELD_NAMES]


def record_to_json(record: CourseRecord) -> Dict[str, Any]:
    data = {}
    for name, key in zip(FIELD_NAMES, JSON_KEYS):
        value = getattr(record, name)
        if name == 'status':
            value = value.as_bool()
        elif name == 'attributes':
            value = list(value)
        data[key] = value
    return data


def _expect(entry: Dict[str, Any], key: str, types, index: int, optional: bool = False):
    if key not in entry:
        raise FormatError(f"Entry {index} is missing '{key}'")
    value = entry[key]
    if value is None and optional:
        return None
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) or not isinstance(value, types):
        raise FormatError(f"Entry {index} has invalid '{key}': {value!r}")
    return value


def record_from_json(entry: Dict[str, Any], index: int = 0) -> CourseRecord:
    if not isinstance(entry, dict):
        raise FormatError(f"Entry {index} is not an object")

    attributes = _expect(entry, '_attributes', list, index)
    if not all(isinstance(attribute, str) for attribute in attributes):
        raise FormatError(f"Entry {index} has non-string attributes")

    crn = _expect(entry, '_crn', (int, str), index)
    try:
        crn = int(crn)
    except ValueError:
        raise FormatError(f"Entry {index} has invalid '_crn': {crn!r}") from None

    values = dict(
        crn=crn,
        course_id=_expect(entry, '_course_id', str, index),
        attributes=attributes,
        title=_expect(entry, '_title', str, index),
        instructor=_expect(entry, '_instructor', str, index),
        credits=_expect(entry, '_credits', int, index, optional=True),
        times=_expect(entry, '_times', str, index),
        projected_enrollment=_expect(entry, '_projected_enrollment', int, index),
        current_enrollment=_expect(entry, '_current_enrollment', int, index),
        seats_available=_expect(entry, '_seats_available', int, index),
        status=_status_from_json(entry.get('_status'), index),
    )
    try:
        return CourseRecord(**values)
    except InvalidFieldError as e:
        raise FormatError(f"Entry {index} is invalid: {e}") from e


def _status_from_json(value, index: int) -> Status:
    # A missing status is treated as closed
    if value is None or isinstance(value, bool):
        return Status.from_bool(value)
    # Older files stored the status token itself
    try:
        return Status.from_token(value)
    except InvalidStatusError as e:
        raise FormatError(f"Entry {index} has invalid '_status': {value!r}") from e


def save_json(records: Sequence[CourseRecord], path: PathLike, log: Optional[logging.Logger] = None):
    """Write records as a pretty-printed JSON array"""
    data = [record_to_json(record) for record in records]
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=4)
    (log or logger).info(f"💾 Saved {len(data)} classes to {path}")


def load_json(path: PathLike, log: Optional[logging.Logger] = None) -> List[CourseRecord]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise FormatError(f"Error loading JSON file {path}: {e}") from e

    if not isinstance(data, list):
        raise FormatError(f"Expected a list of classes in {path}, got {type(data).__name__}")

    records = [record_from_json(entry, index) for index, entry in enumerate(data)]
    (log or logger).info(f"📂 Loaded {len(records)} classes from {path}")
    return records


def record_to_row(record: CourseRecord) -> Dict[str, Any]:
    return {
        'crn': record.crn,
        'course_id': record.course_id,
        'attributes': ATTRIBUTE_DELIMITER.join(record.attributes),
        'title': record.title,
        'instructor': record.instructor,
        'credits': '' if record.credits is None else record.credits,
        'times': record.times,
        'projected_enrollment': record.projected_enrollment,
        'current_enrollment': record.current_enrollment,
        'seats_available': record.seats_available,
        'status': record.status.value,
    }


def record_from_row(row: Dict[str, str]) -> CourseRecord:
    # pandas has already removed the CSV quoting
    values = {name: clean_text(row[name]) for name in FIELD_NAMES}
    return CourseRecord(
        crn=parse_int(values['crn'], 'crn'),
        course_id=values['course_id'],
        attributes=[token for token in (clean_text(t) for t in values['attributes'].split(ATTRIBUTE_DELIMITER)) if token],
        title=values['title'],
        instructor=values['instructor'],
        credits=parse_credits(values['credits']),
        times=values['times'],
        projected_enrollment=parse_int(values['projected_enrollment'], 'projected_enrollment'),
        current_enrollment=parse_int(values['current_enrollment'], 'current_enrollment'),
        seats_available=parse_int(values['seats_available'], 'seats_available', strip_asterisk=True),
        status=Status.from_token(values['status']),
    )


def save_csv(records: Sequence[CourseRecord], path: PathLike, log: Optional[logging.Logger] = None):
    """Write records as CSV with a header row"""
    df = pd.DataFrame([record_to_row(record) for record in records], columns=FIELD_NAMES)
    df.to_csv(path, index=False)
    (log or logger).info(f"💾 Saved {len(df)} classes to {path}")


def load_csv(path: PathLike, log: Optional[logging.Logger] = None) -> List[CourseRecord]:
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, UnicodeDecodeError, pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise FormatError(f"Error loading CSV file {path}: {e}") from e

    missing = [name for name in FIELD_NAMES if name not in df.columns]
    if missing:
        raise FormatError(f"CSV file {path} is missing columns: {', '.join(missing)}")

    records = []
    for line_number, row in enumerate(df.to_dict(orient='records'), start=2):
        try:
            records.append(record_from_row(row))
        except (InvalidFieldError, InvalidStatusError) as e:
            raise FormatError(f"Invalid row at line {line_number} of {path}: {e}") from e
    (log or logger).info(f"📂 Loaded {len(records)} classes from {path}")
    return records


def save_results(records: Sequence[CourseRecord], output_file: PathLike, format_type: str = 'json',
                 log: Optional[logging.Logger] = None):
    """Save records in the given format ('json' or 'csv')"""
    if format_type.lower() == 'json':
        save_json(records, output_file, log)
    elif format_type.lower() == 'csv':
        save_csv(records, output_file, log)
    else:
        raise ConfigurationError(f"Unknown output format: {format_type}")


def load_results(input_file: PathLike, format_type: str = 'json',
                 log: Optional[logging.Logger] = None) -> List[CourseRecord]:
    if format_type.lower() == 'json':
        return load_json(input_file, log)
    if format_type.lower() == 'csv':
        return load_csv(input_file, log)
    raise ConfigurationError(f"Unknown input format: {format_type}")
