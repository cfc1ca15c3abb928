import argparse
import asyncio
import sys

from utils.logger import logger
from config import SCRAPE_CREATORS_API_KEY, HASHTAG_MAX_PAGES, DEBUG_MODE

from api.scrape_creators_client import (
    ScrapeCreatorsClient,
    PROFILE_SORT_ORDERS,
    clean_handle,
    clean_hashtag,
)
from services.video_scraper import VideoScraperService
from services.file_service import (
    format_est_date_time,
    save_profile_results,
    save_hashtag_results,
    save_raw_response,
)


def _raw_page_dumper(mode, identifier):
    """
    In debug mode, returns an on_page callback that saves every raw page to disk.
    """
    if not DEBUG_MODE:
        return None
    timestamp = format_est_date_time()

    def dump(page_number, data):
        save_raw_response(mode, identifier, page_number, data, timestamp)

    return dump


async def run_profile(service, args):
    username = clean_handle(args.username)
    session = await service.scrape_profile_videos(
        args.username,
        sort_by=args.sort_by,
        trim=args.trim,
        on_page=_raw_page_dumper('profile', username)
    )
    return save_profile_results(username, session['videos'])


async def run_hashtag(service, args):
    hashtag = clean_hashtag(args.hashtag)
    session = await service.scrape_hashtag_videos(
        args.hashtag,
        region=args.region,
        trim=args.trim,
        max_pages=args.max_pages,
        on_page=_raw_page_dumper('hashtag', hashtag)
    )
    return save_hashtag_results(hashtag, session['videos'])


async def run_entry(args):
    """
    Runs the selected subcommand and returns the path of the saved results file.
    Nothing is written if any page fetch fails.
    """
    client = ScrapeCreatorsClient(SCRAPE_CREATORS_API_KEY)
    service = VideoScraperService(client)

    if args.command == 'profile':
        return await run_profile(service, args)
    if args.command == 'hashtag':
        return await run_hashtag(service, args)
    raise ValueError(f"Unknown command: {args.command}")


def _non_negative_int(value):
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {value}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(description="Scrape TikTok video metadata via the ScrapeCreators API.")
    subparsers = parser.add_subparsers(dest='command')

    profile = subparsers.add_parser('profile', help="Scrape every video posted by a profile.")
    profile.add_argument('username', help="TikTok username (with or without @).")
    profile.add_argument('--sort-by', choices=PROFILE_SORT_ORDERS, help="Order videos by recency or popularity.")
    profile.add_argument('--trim', action='store_true', default=None, help="Request a trimmed API response.")

    hashtag = subparsers.add_parser('hashtag', help="Scrape videos found by a hashtag search.")
    hashtag.add_argument('hashtag', help="Hashtag to search for (with or without #).")
    hashtag.add_argument('--region', help="Region code the API proxy should use, e.g. US.")
    hashtag.add_argument('--trim', action='store_true', default=None, help="Request a trimmed API response.")
    hashtag.add_argument('--max-pages', type=_non_negative_int, default=HASHTAG_MAX_PAGES,
                         help="Stop after this many pages (0 = no limit).")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_usage(sys.stderr)
        return 1

    if not SCRAPE_CREATORS_API_KEY:
        logger.error('TIKTOK_SCRAPPER_API is not set in environment variables')
        return 1

    try:
        logger.log(f'🚀 Starting TikTok {args.command} scrape...')
        filepath = asyncio.run(run_entry(args))
        logger.success(f'TikTok {args.command} scrape completed, results in {filepath}')
        return 0
    except Exception as error:
        logger.error(f'❌ TikTok {args.command} scrape failed: {error}')
        return 1


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
