"""
Discovery: maps the frontend's filter vocabulary (type, mood, duration,
country, language) onto TMDB /discover parameters and builds a capped,
rating-sorted candidate pool from several upstream pages.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor, as_completed

from .config import MIN_VOTE_COUNT, POOL_CAP, UPSTREAM_PAGE_SIZE
from .errors import ValidationError
from .pagination import paginate

logger = logging.getLogger(__name__)

VALID_TYPES = ('movie', 'tv', 'anime', 'documentary')

ANIMATION_GENRE = '16'
DOCUMENTARY_GENRE = '99'

MOOD_GENRES = {
    'happy': ['35', '10751'],         # Comedy, Family
    'dark': ['53', '27', '80'],       # Thriller, Horror, Crime
    'relaxing': ['10749'],            # Romance
    'exciting': ['28', '12'],         # Action, Adventure
    'thoughtful': ['18', '36'],       # Drama, History
}

DURATION_RUNTIME = {
    'short': {'with_runtime.lte': 90},
    'medium': {'with_runtime.gte': 90, 'with_runtime.lte': 120},
    'long': {'with_runtime.gte': 120},
}

DEFAULT_SORT = 'vote_average.desc'

# Enough ~20-item upstream pages to fill the pool
DISCOVERY_PAGES = math.ceil(POOL_CAP / UPSTREAM_PAGE_SIZE)


def merge_genres(*contributions):
    """Comma-join unique genre ids, first-seen order, no empty segments."""
    seen = []
    for contribution in contributions:
        if not contribution:
            continue
        if isinstance(contribution, str):
            contribution = contribution.split(',')
        for genre_id in contribution:
            genre_id = str(genre_id).strip()
            if genre_id and genre_id not in seen:
                seen.append(genre_id)
    return ','.join(seen)


def build_discover_query(filters):
    """
    Turn a filter set into (endpoint media type, upstream params).

    filters keys, all optional: type, genre, rating, mood, duration,
    country, language, sort_by. Raises ValidationError for an unknown type.
    """
    content_type = filters.get('type') or 'movie'
    if content_type not in VALID_TYPES:
        raise ValidationError(
            "Invalid 'type' parameter. Must be one of: movie, tv, anime, documentary."
        )

    endpoint = 'tv' if content_type in ('tv', 'anime') else 'movie'
    forced_genre = None
    language = filters.get('language') or None

    if content_type == 'anime':
        forced_genre = ANIMATION_GENRE
        language = language or 'ja'
    elif content_type == 'documentary':
        forced_genre = DOCUMENTARY_GENRE

    params = {
        'sort_by': filters.get('sort_by') or DEFAULT_SORT,
        'vote_count.gte': MIN_VOTE_COUNT,
        'include_adult': 'false',
    }

    genres = merge_genres(
        filters.get('genre'),
        MOOD_GENRES.get(filters.get('mood') or ''),
        forced_genre,
    )
    if genres:
        params['with_genres'] = genres

    params.update(DURATION_RUNTIME.get(filters.get('duration') or '', {}))

    if filters.get('rating'):
        params['vote_average.gte'] = filters['rating']
    if filters.get('country'):
        params['with_origin_country'] = filters['country']
    if language:
        params['with_original_language'] = language

    return endpoint, params


def _fetch_page(client, endpoint, params, page):
    data = client.discover(endpoint, {**params, 'page': page})
    return data.get('results', []) if isinstance(data, dict) else []


def fetch_candidate_pool(client, endpoint, params, pages=DISCOVERY_PAGES):
    """
    Fetch pages 1..N in parallel, tolerate individual page failures,
    then dedup by id, sort by rating and cap the pool.
    """
    page_results = {}
    failures = 0

    with ThreadPoolExecutor(max_workers=pages) as executor:
        future_map = {
            executor.submit(_fetch_page, client, endpoint, params, page): page
            for page in range(1, pages + 1)
        }
        for future in as_completed(future_map):
            page = future_map[future]
            try:
                page_results[page] = future.result()
            except Exception as exc:
                logger.warning(f"Discover page {page} failed for /discover/{endpoint}: {exc}")
                page_results[page] = []
                failures += 1

    if failures == pages:
        raise RuntimeError(f"All {pages} discover pages failed for /discover/{endpoint}")

    pool = []
    seen_ids = set()
    for page in sorted(page_results):
        for item in page_results[page]:
            item_id = item.get('id')
            if item_id is None or item_id in seen_ids:
                continue
            seen_ids.add(item_id)
            pool.append({**item, 'media_type': item.get('media_type') or endpoint})

    pool.sort(key=lambda x: (x.get('vote_average') or 0, x.get('popularity') or 0), reverse=True)
    return pool[:POOL_CAP]


def discover(client, filters, page=1, limit=None):
    """Discovery Filter Builder entry point: one page of the capped pool."""
    endpoint, params = build_discover_query(filters)
    pool = fetch_candidate_pool(client, endpoint, params)
    return paginate(pool, page, limit)
