"""
William & Mary Open Course List Scraper
Discovers terms and subjects, then walks subjects one at a time, strictly in
order and rate limited, collecting every class section into a CourseCatalog.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from .catalog import CourseCatalog
from .config import (COURSELIST_URL, SEARCH_FILTERS, SEARCH_URL, ScraperConfig,
                     validate_logging_flag)
from .course_record import CourseRecord, Status, normalize_row
from .dom import (SUBJECT_SELECT_ID, TERM_SELECT_ID, dropdown_values,
                  parse_html, table_rows)
from .errors import ConfigurationError, DiscoveryError, UnknownSubjectError
from .fetcher import PageFetcher
from .persistence import load_csv, load_json, save_csv, save_json
from .rate_limiter import DEFAULT_INTERVAL_MS, RateLimiter


@dataclass
class ScrapeState:
    """Term and subject codes discovered from the course list dropdowns"""
    term: Optional[str] = None
    all_terms: List[str] = field(default_factory=list)
    subjects: List[str] = field(default_factory=list)


def silent_logger() -> logging.Logger:
    """Logger that discards everything, used when no logger is injected"""
    log = logging.getLogger('wm_courselist.silent')
    if not log.handlers:
        log.addHandler(logging.NullHandler())
    log.propagate = False
    return log


class SwitchableLogger(logging.LoggerAdapter):
    """Logger adapter that can be switched off without touching the wrapped logger"""

    def __init__(self, logger: logging.Logger, enabled: bool = True):
        super().__init__(logger, {})
        self.enabled = enabled

    def isEnabledFor(self, level):
        return self.enabled and self.logger.isEnabledFor(level)


class CourseListScraper:
    """Scrapes class sections from the W&M Open Course List.

    Every request goes through a single RateLimiter and requests are never
    issued concurrently. Records accumulate in ``catalog`` across calls;
    loading from a file replaces them.
    """

    def __init__(self,
                 user_agent: str,
                 rate_limit: Optional[float] = None,
                 logger: Optional[logging.Logger] = None,
                 logging_enabled: bool = True,
                 fetcher=None,
                 rate_limiter: Optional[RateLimiter] = None):
        config = ScraperConfig(
            user_agent=user_agent,
            rate_limit_ms=DEFAULT_INTERVAL_MS if rate_limit is None else rate_limit,
            logging_enabled=logging_enabled,
        )
        self.config = config

        self.logger = SwitchableLogger(logger or silent_logger(), config.logging_enabled)
        self.fetcher = fetcher or PageFetcher(config.user_agent, logger=self.logger)
        if rate_limiter is None:
            rate_limiter = RateLimiter(config.rate_limit_ms, logger=self.logger)
        elif rate_limit is not None:
            rate_limiter.set_interval(config.rate_limit_ms)
        self.rate_limiter = rate_limiter

        self.state = ScrapeState()
        self.catalog = CourseCatalog()

    @classmethod
    def from_config(cls, config: ScraperConfig, **kwargs) -> "CourseListScraper":
        return cls(config.user_agent,
                   rate_limit=config.rate_limit_ms,
                   logging_enabled=config.logging_enabled,
                   **kwargs)

    @property
    def user_agent(self) -> str:
        return self.config.user_agent

    @property
    def rate_limit(self) -> float:
        """Minimum milliseconds between requests"""
        return self.rate_limiter.interval_ms

    def set_rate_limit(self, ms: float):
        """Set a custom rate limit. You are responsible for keeping it reasonable."""
        self.rate_limiter.set_interval(ms)
        self.config.rate_limit_ms = ms

    def set_logging(self, enabled: bool):
        self.logger.enabled = validate_logging_flag(enabled)
        self.config.logging_enabled = enabled

    @property
    def records(self) -> List[CourseRecord]:
        return self.catalog.records

    async def _fetch(self, url: str, params: Optional[Dict[str, str]] = None) -> str:
        await self.rate_limiter.wait()
        return await self.fetcher.fetch(url, params)

    async def get_terms_and_subjects(self) -> ScrapeState:
        """Read the term and subject dropdowns from the course list page.

        The last term option is not selectable, so the one before it is the
        latest term. The first subject option is a placeholder and is skipped.
        """
        html = await self._fetch(COURSELIST_URL)
        soup = parse_html(html)

        terms = dropdown_values(soup, TERM_SELECT_ID)
        subjects = dropdown_values(soup, SUBJECT_SELECT_ID)
        if len(terms) < 2:
            raise DiscoveryError(f"Expected at least 2 term options, found {len(terms)}")

        self.state = ScrapeState(term=terms[-2], all_terms=terms, subjects=subjects[1:])
        self.logger.debug(f"Discovered {len(self.state.all_terms)} terms and {len(self.state.subjects)} subjects")
        return self.state

    async def get_course_data(self,
                              subject: Optional[str] = None,
                              term: Optional[Union[str, int]] = None) -> List[CourseRecord]:
        """Scrape one subject, or every known subject in order when none is given.

        Returns the records added by this call. A failure stops the traversal;
        records already added stay in the catalog.
        """
        if self.state.term is None and not self.state.subjects:
            self.logger.warning('No term or subjects found. Attempting to get data from Open Course List...')
            await self.get_terms_and_subjects()
            if self.state.subjects:
                self.logger.info(f"Subjects found ({self.state.subjects[0]}...{self.state.subjects[-1]}). "
                                 f"Term set to {self.state.term}.")

        term = str(term) if term is not None else self.state.term
        if not term:
            raise ConfigurationError('Term not set. Unable to get term from Open Course List.')

        if subject is not None:
            return await self._scrape_subject(subject, term)

        added = []
        for code in list(self.state.subjects):
            added.extend(await self._scrape_subject(code, term))
        self.logger.info(f"✅ Scraped {len(added)} classes across {len(self.state.subjects)} subjects for term {term}")
        return added

    async def _scrape_subject(self, subject: str, term: str) -> List[CourseRecord]:
        if subject not in self.state.subjects:
            raise UnknownSubjectError(subject)

        params = {'term_code': term, 'term_subj': subject, **SEARCH_FILTERS, 'search': 'Search'}
        html = await self._fetch(SEARCH_URL, params)

        added = []
        for row in table_rows(parse_html(html)):
            record = normalize_row(row)
            self.catalog.add(record)
            added.append(record)
        self.logger.info(f"{subject}: {len(added)} classes")
        return added

    def save_to_json(self, path: Union[str, Path]):
        save_json(self.catalog.records, path, self.logger)

    def load_from_json(self, path: Union[str, Path]):
        """Replace the current records with those stored in a JSON file"""
        self.catalog.replace(load_json(path, self.logger))

    def save_to_csv(self, path: Union[str, Path]):
        save_csv(self.catalog.records, path, self.logger)

    def load_from_csv(self, path: Union[str, Path]):
        """Replace the current records with those stored in a CSV file (best-effort)"""
        self.catalog.replace(load_csv(path, self.logger))

    def find_class_by_crn(self, crn: Union[str, int]) -> Optional[CourseRecord]:
        return self.catalog.find_by_crn(crn)

    def find_class_by_course_id(self, course_id: str) -> Optional[CourseRecord]:
        return self.catalog.find_by_course_id(course_id)

    def find_classes_by_attribute(self, attribute: str) -> List[CourseRecord]:
        return self.catalog.find_by_attribute(attribute)

    def find_classes_by_instructor(self, instructor: str) -> List[CourseRecord]:
        return self.catalog.find_by_instructor(instructor)

    def find_classes_by_credits(self, credits: Optional[int]) -> List[CourseRecord]:
        return self.catalog.find_by_credits(credits)

    def find_classes_by_times(self, times: str) -> List[CourseRecord]:
        return self.catalog.find_by_times(times)

    def find_classes_by_projected_enrollment(self, projected_enrollment: int) -> List[CourseRecord]:
        return self.catalog.find_by_projected_enrollment(projected_enrollment)

    def find_classes_by_current_enrollment(self, current_enrollment: int) -> List[CourseRecord]:
        return self.catalog.find_by_current_enrollment(current_enrollment)

    def find_classes_by_seats_available(self, seats_available: int) -> List[CourseRecord]:
        return self.catalog.find_by_seats_available(seats_available)

    def find_classes_by_status(self, status: Union[Status, str]) -> List[CourseRecord]:
        return self.catalog.find_by_status(status)

    async def close(self):
        close = getattr(self.fetcher, 'close', None)
        if close is not None:
            await close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
