import logging
import os
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# TMDB
TMDB_API_KEY = os.getenv('TMDB_API_KEY', '')
TMDB_BASE_URL = os.getenv('TMDB_BASE_URL', 'https://api.themoviedb.org/3')
TMDB_IMAGE_BASE_URL = os.getenv('TMDB_IMAGE_BASE_URL', 'https://image.tmdb.org/t/p/')
TMDB_TIMEOUT = float(os.getenv('TMDB_TIMEOUT', '10'))

# Server
PORT = int(os.getenv('PORT', '3000'))
DEBUG = os.getenv('FLASK_DEBUG', '0') in ('1', 'true', 'True')
PUBLIC_DIR = PROJECT_ROOT / 'public'

# Candidate pools
POOL_CAP = 50
UPSTREAM_PAGE_SIZE = 20
DEFAULT_LIMIT = 20
MAX_SELECTIONS = 5
RECOMMENDATION_PAGES = 2
MIN_VOTE_COUNT = 50


def check_api_key(api_key=None):
    """Warn once at startup if the TMDB key is missing (calls will then fail with 401)."""
    key = TMDB_API_KEY if api_key is None else api_key
    if not key:
        logger.warning("TMDB_API_KEY is not set. Every upstream call will be rejected by TMDB.")
        return False
    return True
