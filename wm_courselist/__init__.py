"""
William & Mary Open Course List scraper
"""

from .catalog import CourseCatalog
from .config import ScraperConfig
from .course_record import CourseRecord, Status, normalize_row
from .errors import (ArityError, ConfigurationError, CourseListError,
                     DiscoveryError, FormatError, InvalidFieldError,
                     InvalidStatusError, TransportError, UnknownSubjectError)
from .fetcher import PageFetcher
from .persistence import (load_csv, load_json, load_results, save_csv,
                          save_json, save_results)
from .rate_limiter import RateLimiter, RateLimitWarning
from .scraper import CourseListScraper, ScrapeState

__version__ = "1.0.0"

__all__ = [
    'ArityError',
    'ConfigurationError',
    'CourseCatalog',
    'CourseListError',
    'CourseListScraper',
    'CourseRecord',
    'DiscoveryError',
    'FormatError',
    'InvalidFieldError',
    'InvalidStatusError',
    'PageFetcher',
    'RateLimitWarning',
    'RateLimiter',
    'ScrapeState',
    'ScraperConfig',
    'Status',
    'TransportError',
    'UnknownSubjectError',
    'load_csv',
    'load_json',
    'load_results',
    'normalize_row',
    'save_csv',
    'save_json',
    'save_results',
]
