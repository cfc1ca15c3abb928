from api.scrape_creators_client import clean_handle, clean_hashtag
from api.tiktok_parser import parse_page_result
from services.paginator import PaginatedSource, paginate
from utils.logger import logger


def profile_videos_source(client, handle, sort_by=None, trim=None):
    """
    Profile pagination follows max_cursor until the server stops returning one.
    """
    display_name = clean_handle(handle)

    async def fetch_page(cursor):
        return await client.fetch_profile_videos(handle, max_cursor=cursor, sort_by=sort_by, trim=trim)

    def extract_cursor(data):
        return parse_page_result(data, 'max_cursor')['cursor']

    def should_stop(data, cursor, page_count):
        return not cursor

    return PaginatedSource(f"@{display_name}", fetch_page, extract_cursor, should_stop)


def hashtag_search_source(client, hashtag, region=None, trim=None, max_pages=None):
    """
    Hashtag pagination needs both a cursor and has_more == 1 to continue.
    max_pages of None or 0 means no cap.
    """
    if max_pages is not None and max_pages < 0:
        raise ValueError(f"max_pages must be 0 or greater, got {max_pages!r}")
    display_name = clean_hashtag(hashtag)

    async def fetch_page(cursor):
        return await client.search_by_hashtag(hashtag, cursor=cursor, region=region, trim=trim)

    def extract_cursor(data):
        return parse_page_result(data, 'cursor')['cursor']

    def should_stop(data, cursor, page_count):
        if not cursor:
            return True
        # Only the integer 1 continues; booleans are rejected even though True == 1
        has_more = parse_page_result(data, 'cursor')['hasMore']
        if isinstance(has_more, bool) or has_more != 1:
            return True
        if max_pages and page_count >= max_pages:
            logger.log(f"Reached max pages ({max_pages}) for #{display_name}")
            return True
        return False

    return PaginatedSource(f"#{display_name}", fetch_page, extract_cursor, should_stop)


class VideoScraperService:
    def __init__(self, client):
        self.client = client

    async def scrape_profile_videos(self, handle, sort_by=None, trim=None, on_page=None):
        """
        Scrapes every video on a profile. Returns the session dict from paginate().
        """
        source = profile_videos_source(self.client, handle, sort_by=sort_by, trim=trim)
        return await paginate(source, on_page=on_page)

    async def scrape_hashtag_videos(self, hashtag, region=None, trim=None, max_pages=None, on_page=None):
        """
        Scrapes hashtag search results, optionally capped at max_pages.
        """
        source = hashtag_search_source(self.client, hashtag, region=region, trim=trim, max_pages=max_pages)
        return await paginate(source, on_page=on_page)
