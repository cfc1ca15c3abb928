import time

from api.tiktok_parser import format_tiktok, extract_items
from utils.logger import logger


class PaginatedSource:
    """
    One cursor-driven endpoint.

    fetch_page(cursor) -> awaitable response body
    extract_cursor(data) -> next cursor (falsy when the server has nothing more)
    should_stop(data, cursor, page_count) -> True once pagination must end
    """
    def __init__(self, name, fetch_page, extract_cursor, should_stop):
        self.name = name
        self.fetch_page = fetch_page
        self.extract_cursor = extract_cursor
        self.should_stop = should_stop


async def paginate(source, on_page=None):
    """
    Drives source page by page, normalizing every aweme item, until its stop predicate fires.
    Fetch errors propagate; whatever was collected before the failure is discarded with them.
    """
    start_time = time.time()
    logger.log(f"Starting scrape for {source.name}...")

    videos = []
    cursor = None
    page_count = 0

    while True:
        data = await source.fetch_page(cursor)
        page_count += 1

        items = extract_items(data)
        if items:
            logger.log(f"Fetched {len(items)} videos (page {page_count})")
            videos.extend(format_tiktok(item) for item in items)
            logger.log(f"Total videos scraped: {len(videos)}")
        else:
            logger.debug(f"Page {page_count} returned no videos")

        if on_page:
            on_page(page_count, data)

        cursor = source.extract_cursor(data)
        if source.should_stop(data, cursor, page_count):
            break
        logger.debug(f"Next cursor from page {page_count}: {cursor}")

    duration = time.time() - start_time
    logger.log(f"Scraping completed in {duration:.2f} seconds")
    logger.log(f"Total videos scraped: {len(videos)}")

    return {
        "videos": videos,
        "pageCount": page_count,
        "elapsedSeconds": round(duration, 2),
    }
