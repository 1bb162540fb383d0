"""
Scraper configuration: identifying user agent, rate limit and logging toggle
"""

import re
from dataclasses import dataclass

from .errors import ConfigurationError
from .rate_limiter import DEFAULT_INTERVAL_MS, validate_interval

COURSELIST_URL = "https://courselist.wm.edu/courselist/courseinfo/"
SEARCH_URL = "https://courselist.wm.edu/courselist/courseinfo/searchresults"

# Only @wm.edu and @email.wm.edu addresses (optionally with a subdomain) are accepted
USER_AGENT_PATTERN = re.compile(
    r'^[a-zA-Z0-9_.+-]+@(?:(?:[a-zA-Z0-9-]+\.)?[a-zA-Z]+\.)?(wm|email\.wm)\.edu$'
)

# Search filters other than term and subject are left open
SEARCH_FILTERS = {
    'attr': '0',
    'attr2': '0',
    'levl': '0',
    'status': '0',
    'ptrm': '0',
}


def validate_user_agent(user_agent: str) -> str:
    """Return the user agent unchanged or raise ConfigurationError"""
    if not isinstance(user_agent, str) or not USER_AGENT_PATTERN.match(user_agent):
        raise ConfigurationError('Invalid user agent. Must be a W&M email address.')
    return user_agent


def validate_logging_flag(enabled) -> bool:
    if not isinstance(enabled, bool):
        raise ConfigurationError(
            f"Logging can be set to True or False (bool). You passed a {type(enabled).__name__} argument."
        )
    return enabled


@dataclass
class ScraperConfig:
    """Settings for a scraping session, validated on construction"""
    user_agent: str
    rate_limit_ms: float = DEFAULT_INTERVAL_MS
    logging_enabled: bool = True

    def __post_init__(self):
        self.validate()

    def validate(self):
        validate_user_agent(self.user_agent)
        validate_logging_flag(self.logging_enabled)
        validate_interval(self.rate_limit_ms)
