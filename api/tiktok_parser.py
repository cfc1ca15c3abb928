from utils.logger import logger


def _dig(data, *path):
    """
    Walks nested dicts/lists along path. Returns None as soon as a step is missing
    or lands on something that can't be indexed.
    """
    node = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or len(node) <= key:
                return None
            node = node[key]
        else:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        if node is None:
            return None
    return node


def canonical_url(share_url):
    """
    Strips the query string from a TikTok share URL.
    """
    if not isinstance(share_url, str):
        return None
    return share_url.split('?', 1)[0]


def format_tiktok(raw_data):
    """
    Flattens one aweme item from the ScrapeCreators API into the record we persist.
    Missing fields come back as None.
    """
    if not isinstance(raw_data, dict):
        logger.debug(f"Non-dict aweme item ({type(raw_data).__name__}); emitting an empty record")
        raw_data = {}

    video = raw_data.get('video')

    return {
        "aweme_id": raw_data.get('aweme_id'),
        "desc": raw_data.get('desc'),
        "url": canonical_url(raw_data.get('share_url')),
        "likes": _dig(raw_data, 'statistics', 'digg_count'),
        "comments": _dig(raw_data, 'statistics', 'comment_count'),
        "shares": _dig(raw_data, 'statistics', 'share_count'),
        "views": _dig(raw_data, 'statistics', 'play_count'),
        "create_time": raw_data.get('create_time'),
        "video": _dig(video, 'bit_rate', 0, 'play_addr', 'url_list', 0),
        "videoCover": _dig(video, 'cover'),
        "videoHeight": _dig(video, 'height'),
        "videoWidth": _dig(video, 'width'),
        "thumbnail": _dig(video, 'dynamic_cover', 'url_list', 0),
        "videoWithoutWatermark": _dig(video, 'play_addr', 'url_list', 0),
        "actualVideo": _dig(video, 'play_addr', 'url_list', 0),
    }


def extract_items(data):
    """
    Returns the aweme_list of a response. A missing or malformed list counts as an empty page.
    """
    items = data.get('aweme_list') if isinstance(data, dict) else None
    if not isinstance(items, list):
        return []
    return items


def parse_page_result(data, cursor_key):
    """
    Reads one API response into {items, cursor, hasMore}.
    """
    if not isinstance(data, dict):
        data = {}

    return {
        "items": extract_items(data),
        "cursor": data.get(cursor_key),
        "hasMore": data.get('has_more'),
    }
