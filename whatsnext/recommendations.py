"""
Aggregated recommendations.

For up to five selected titles, fetch TMDB's recommendations for each one,
merge them by how many selections recommended the same title, break ties on
popularity and serve a capped, paginated pool.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

from .config import MAX_SELECTIONS, POOL_CAP, RECOMMENDATION_PAGES
from .errors import ValidationError
from .pagination import paginate

logger = logging.getLogger(__name__)


def validate_items(items):
    """Reject malformed selection lists before any upstream call."""
    if not items or not isinstance(items, list):
        raise ValidationError("An array of 'items' is required in the request body.")
    if len(items) > MAX_SELECTIONS:
        raise ValidationError(f"Maximum of {MAX_SELECTIONS} items allowed for recommendations.")
    for item in items:
        if not isinstance(item, dict) or not item.get('id') or not item.get('type'):
            raise ValidationError(
                "Each item must contain an 'id' and 'type' (e.g., 'movie' or 'tv')."
            )
    return items


def canonical_id(value):
    """TMDB ids as int where they are numeric (550, 550.0, "550"), else the stripped string."""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    text = str(value).strip()
    return int(text) if text.isdecimal() else text


def normalize_selections(items):
    """(media_type, id) pairs in input order, unknown types as movie, duplicates dropped."""
    selections = []
    for item in items:
        media_type = 'tv' if item.get('type') == 'tv' else 'movie'
        selection = (media_type, canonical_id(item['id']))
        if selection not in selections:
            selections.append(selection)
    return selections


def infer_media_type(item):
    # multi-type lists carry media_type; otherwise only movies have 'title'
    media_type = item.get('media_type')
    if media_type in ('movie', 'tv'):
        return media_type
    return 'movie' if 'title' in item else 'tv'


def fetch_recommendation_lists(client, selections, pages=RECOMMENDATION_PAGES):
    """
    Fetch pages 1..N of recommendations for every selection in parallel.
    Returns one list per selection, in selection order. A selection with any
    failed page contributes an empty list.
    """
    page_results = {index: {} for index in range(len(selections))}
    failed = set()

    with ThreadPoolExecutor(max_workers=max(1, len(selections) * pages)) as executor:
        future_map = {
            executor.submit(client.get_recommendations, media_type, media_id, page): (index, page)
            for index, (media_type, media_id) in enumerate(selections)
            for page in range(1, pages + 1)
        }
        for future in as_completed(future_map):
            index, page = future_map[future]
            try:
                data = future.result()
            except Exception as exc:
                if index not in failed:
                    media_type, media_id = selections[index]
                    logger.warning(f"Recommendations unavailable for {media_type} {media_id}: {exc}")
                failed.add(index)
                continue
            page_results[index][page] = data.get('results', []) if isinstance(data, dict) else []

    lists = []
    for index in range(len(selections)):
        if index in failed:
            lists.append([])
            continue
        merged = []
        for page in sorted(page_results[index]):
            merged.extend(page_results[index][page])
        lists.append(merged)
    return lists


def aggregate(selections, recommendation_lists):
    """
    Merge per-selection lists into a scored pool.

    score = number of selections whose list contains the candidate.
    Candidates whose id matches a selection id are never returned.
    """
    excluded_ids = {media_id for _, media_id in selections}
    scored = {}

    for results in recommendation_lists:
        counted = set()
        for item in results:
            item_id = item.get('id')
            if item_id is None or canonical_id(item_id) in excluded_ids:
                continue

            media_type = infer_media_type(item)
            unique_key = f"{media_type}-{canonical_id(item_id)}"
            if unique_key in counted:
                continue
            counted.add(unique_key)

            if unique_key in scored:
                scored[unique_key]['score'] += 1
            else:
                scored[unique_key] = {**item, 'media_type': media_type, 'score': 1}

    pool = list(scored.values())
    pool.sort(key=lambda x: (x['score'], x.get('popularity') or 0), reverse=True)
    return pool[:POOL_CAP]


def get_aggregated_recommendations(client, items, page=1, limit=None):
    """Recommendation Aggregator entry point."""
    selections = normalize_selections(validate_items(items))
    recommendation_lists = fetch_recommendation_lists(client, selections)
    pool = aggregate(selections, recommendation_lists)
    logger.info(f"Aggregated {len(pool)} recommendations from {len(selections)} selections")
    return paginate(pool, page, limit)
