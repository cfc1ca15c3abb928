
import os
from dotenv import load_dotenv

# Load environment variables from .env file
# Look for .env in the same directory (project root)
env_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), '.env')
load_dotenv(env_path)

# Base directory for the Python source files
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# File paths
RESULTS_DIR = os.getenv('RESULTS_DIR', os.path.join(BASE_DIR, 'result'))
PROFILE_RESULTS_DIR = os.path.join(RESULTS_DIR, 'profile-videos')
HASHTAG_RESULTS_DIR = os.path.join(RESULTS_DIR, 'hashtag-videos')
RAW_RESPONSES_DIR = os.path.join(BASE_DIR, 'raw_api_responses')
LOGS_DIR = os.path.join(BASE_DIR, 'logs')

# ScrapeCreators configuration
SCRAPE_CREATORS_API_KEY = os.getenv('TIKTOK_SCRAPPER_API')
SCRAPE_CREATORS_BASE_URL = 'https://api.scrapecreators.com'
PROFILE_VIDEOS_URL = f"{SCRAPE_CREATORS_BASE_URL}/v3/tiktok/profile/videos"
HASHTAG_SEARCH_URL = f"{SCRAPE_CREATORS_BASE_URL}/v1/tiktok/search/hashtag"
REQUEST_TIMEOUT_SECONDS = 30

# Hashtag pagination cap (0 = no cap)
HASHTAG_MAX_PAGES = int(os.getenv('HASHTAG_MAX_PAGES', 0))

# Debug mode
DEBUG_MODE = os.getenv('DEBUG_MODE', 'False').lower() == 'true'
