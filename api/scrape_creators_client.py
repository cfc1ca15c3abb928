import requests
import json
import asyncio
from utils.logger import logger
from config import (
    PROFILE_VIDEOS_URL,
    HASHTAG_SEARCH_URL,
    REQUEST_TIMEOUT_SECONDS
)

PROFILE_SORT_ORDERS = ('latest', 'popular')

async def make_http_request(options):
    """
    Helper function to make HTTP requests using requests library.
    """
    method = options.get('method', 'GET')
    url = options.get('url')
    params = options.get('params')
    headers = options.get('headers')

    try:
        # Run the blocking request in an executor so the loop suspends on the network call
        loop = asyncio.get_event_loop()
        response = await loop.run_in_executor(
            None,
            lambda: requests.request(method, url, params=params, headers=headers, timeout=REQUEST_TIMEOUT_SECONDS)
        )
        response.raise_for_status() # Raise HTTPError for bad responses (4xx or 5xx)

        content_type = response.headers.get('Content-Type', '')

        if 'application/json' in content_type or response.text.strip().startswith(('{', '[')):
            try:
                parsed_data = response.json()
            except json.JSONDecodeError:
                logger.error(f"Error parsing JSON response from {url}: {response.text[:500]}...")
                parsed_data = {"error": "Failed to parse JSON", "body": response.text}
        else:
            logger.log(f"Received non-JSON response ({content_type}) from {url}")
            logger.log(f"Response status: {response.status_code} {response.reason}")
            logger.log(f"Response body: {response.text[:500]}...")
            parsed_data = {"error": "Non-JSON response", "body": response.text, "statusCode": response.status_code}

        return {
            "status": response.status_code,
            "statusText": response.reason,
            "headers": dict(response.headers),
            "data": parsed_data
        }
    except requests.exceptions.HTTPError as http_err:
        body = http_err.response.text[:500] if http_err.response is not None else ''
        logger.error(f"HTTP error occurred: {http_err} - Response: {body}...")
        raise
    except requests.exceptions.ConnectionError as conn_err:
        logger.error(f"Connection error occurred: {conn_err}")
        raise
    except requests.exceptions.Timeout as timeout_err:
        logger.error(f"Timeout error occurred: {timeout_err}")
        raise
    except requests.exceptions.RequestException as req_err:
        logger.error(f"An unexpected error occurred: {req_err}")
        raise

def clean_handle(handle):
    handle = handle.strip()
    return handle[1:] if handle.startswith('@') else handle

def clean_hashtag(hashtag):
    hashtag = hashtag.strip()
    return hashtag[1:] if hashtag.startswith('#') else hashtag

def _bool_param(value):
    return 'true' if value else 'false'

def build_profile_params(handle, max_cursor=None, sort_by=None, trim=None):
    """
    Query string for the profile videos endpoint. Optional keys are left out when unset.
    """
    params = {'handle': clean_handle(handle)}
    if max_cursor:
        params['max_cursor'] = str(max_cursor)
    if sort_by:
        if sort_by not in PROFILE_SORT_ORDERS:
            raise ValueError(f"sort_by must be one of {PROFILE_SORT_ORDERS}, got {sort_by!r}")
        params['sort_by'] = sort_by
    if trim is not None:
        params['trim'] = _bool_param(trim)
    return params

def build_hashtag_params(hashtag, cursor=None, region=None, trim=None):
    """
    Query string for the hashtag search endpoint. A leading '#' is dropped from the hashtag.
    """
    params = {'hashtag': clean_hashtag(hashtag)}
    if region:
        params['region'] = region
    if cursor is not None:
        params['cursor'] = str(cursor)
    if trim is not None:
        params['trim'] = _bool_param(trim)
    return params

class ScrapeCreatorsClient:
    def __init__(self, api_key):
        if not api_key:
            raise ValueError("ScrapeCreators API key must be set.")

        self.headers = {
            'x-api-key': api_key
        }

    async def _get(self, url, params):
        options = {
            'method': 'GET',
            'url': url,
            'params': params,
            'headers': self.headers
        }
        response = await make_http_request(options)
        return response.get('data')

    async def fetch_profile_videos(self, handle, max_cursor=None, sort_by=None, trim=None):
        """
        Fetches one page of a profile's videos. Pass the previous page's max_cursor to continue.
        """
        params = build_profile_params(handle, max_cursor=max_cursor, sort_by=sort_by, trim=trim)
        try:
            return await self._get(PROFILE_VIDEOS_URL, params)
        except requests.exceptions.RequestException as error:
            logger.error(f"Error fetching TikTok videos for @{params['handle']}: {error}")
            raise

    async def search_by_hashtag(self, hashtag, cursor=None, region=None, trim=None):
        """
        Fetches one page of hashtag search results.
        """
        params = build_hashtag_params(hashtag, cursor=cursor, region=region, trim=trim)
        try:
            return await self._get(HASHTAG_SEARCH_URL, params)
        except requests.exceptions.RequestException as error:
            logger.error(f"Error searching TikTok by hashtag #{params['hashtag']}: {error}")
            raise
