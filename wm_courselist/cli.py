#!/usr/bin/env python3
"""
Command line entry point for the W&M Open Course List scraper
"""

import argparse
import asyncio
import logging
import sys

from .errors import CourseListError
from .persistence import save_results
from .scraper import CourseListScraper

logger = logging.getLogger('wm_courselist')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='William & Mary Open Course List Scraper')
    parser.add_argument('--user-agent', '-u', required=True, help='Your @wm.edu or @email.wm.edu address')
    parser.add_argument('--subject', '-s', help='Only scrape this subject code (e.g. BIOL)')
    parser.add_argument('--term', '-t', help='Term code to scrape (defaults to the latest term)')
    parser.add_argument('--rate-limit', type=float, default=500, help='Milliseconds between requests')
    parser.add_argument('--output', '-o', default='wm_courses.json', help='Output file')
    parser.add_argument('--format', choices=['json', 'csv'], default='json', help='Output format')
    parser.add_argument('--log-file', help='Also write log output to this file')
    parser.add_argument('--quiet', '-q', action='store_true', help='Disable scraper logging')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser


def configure_logging(debug: bool = False, log_file: str = None):
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w'))
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


async def run(args) -> int:
    async with CourseListScraper(
        args.user_agent,
        rate_limit=args.rate_limit,
        logger=logger,
        logging_enabled=not args.quiet,
    ) as scraper:
        await scraper.get_terms_and_subjects()
        records = await scraper.get_course_data(subject=args.subject, term=args.term)
        save_results(scraper.records, args.output, args.format, log=scraper.logger)
    logger.info(f"🎓 Scraped {len(records)} classes, results saved to {args.output}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug, args.log_file)

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("⏹️ Scraping interrupted by user")
        return 130
    except CourseListError as e:
        logger.error(f"💥 Error during scraping: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
