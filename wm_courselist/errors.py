"""
Exception types raised by the W&M Open Course List scraper
"""


class CourseListError(Exception):
    """Base class for every error raised by this package"""


class ConfigurationError(CourseListError, ValueError):
    """Invalid identity string, logging flag, rate limit or missing term"""


class DiscoveryError(CourseListError):
    """Expected dropdown or table elements were not found in a page"""


class UnknownSubjectError(CourseListError, ValueError):
    """Subject code is not part of the discovered subject list"""

    def __init__(self, subject: str):
        super().__init__(
            f"Subject code {subject} is not found. Have you called get_terms_and_subjects()?"
        )
        self.subject = subject


class ArityError(CourseListError, ValueError):
    """A course row does not have exactly 11 fields"""

    def __init__(self, count: int, expected: int = 11):
        super().__init__(f"Course row must have {expected} fields, got {count}")
        self.count = count
        self.expected = expected


class InvalidStatusError(CourseListError, ValueError):
    """Status token is neither OPEN nor CLOSED"""

    def __init__(self, token):
        super().__init__(f"Incorrect status {token!r}. Must be OPEN or CLOSED.")
        self.token = token


class InvalidFieldError(CourseListError, ValueError):
    """A numeric course field could not be parsed"""

    def __init__(self, field_name: str, raw_value):
        super().__init__(f"Invalid value for {field_name}: {raw_value!r}")
        self.field_name = field_name
        self.raw_value = raw_value


class FormatError(CourseListError):
    """A persisted file does not have the expected shape"""


class TransportError(CourseListError):
    """A page could not be fetched"""

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"Request to {url} failed: {cause}")
        self.url = url
        self.cause = cause
