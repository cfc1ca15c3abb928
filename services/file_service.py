import json
import os
from datetime import datetime

import pytz

from config import PROFILE_RESULTS_DIR, HASHTAG_RESULTS_DIR, RAW_RESPONSES_DIR
from utils.logger import logger


def format_est_date_time():
    """
    Returns a timestamp string in EST for filenames.
    """
    now = datetime.now(pytz.timezone('America/New_York'))
    return now.strftime('%Y-%m-%d_%H-%M-%S')


def ensure_directory_exists(dir_path):
    os.makedirs(dir_path, exist_ok=True)


def save_to_json(filepath, payload):
    """
    Writes payload as indented JSON, creating the parent directory if needed.
    """
    try:
        ensure_directory_exists(os.path.dirname(filepath))
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        logger.log(f"Data saved to: {filepath}")
        return filepath
    except OSError as e:
        logger.error(f"Error saving file {filepath}: {e}")
        raise


def profile_results_path(username, result_dir=None):
    return os.path.join(result_dir or PROFILE_RESULTS_DIR, f"{username}-results.json")


def hashtag_results_path(hashtag, result_dir=None):
    return os.path.join(result_dir or HASHTAG_RESULTS_DIR, f"{hashtag}-results.json")


def save_profile_results(username, videos, result_dir=None):
    """
    Saves the scraped videos of one profile. Returns the file path.
    """
    return save_to_json(profile_results_path(username, result_dir), videos)


def save_hashtag_results(hashtag, videos, result_dir=None):
    """
    Saves the scraped videos of one hashtag search. Returns the file path.
    """
    return save_to_json(hashtag_results_path(hashtag, result_dir), videos)


def save_raw_response(mode, identifier, page_number, data, timestamp, raw_dir=None):
    """
    Dumps one raw API page for debugging.
    """
    filename = f"{mode}_{identifier}_{timestamp}_page{page_number}.json"
    return save_to_json(os.path.join(raw_dir or RAW_RESPONSES_DIR, filename), data)


def file_exists(filepath):
    return os.path.exists(filepath)


def read_json(filepath):
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error reading file {filepath}: {e}")
        raise
