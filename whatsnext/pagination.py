import math

from .config import DEFAULT_LIMIT


def parse_positive_int(value, default):
    """Query-string int >= 1, or the default when missing/invalid."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def paginate(pool, page=1, limit=DEFAULT_LIMIT):
    """
    Slice a (already capped) pool into one page.
    page is clamped into [1, total_pages or 1].
    """
    limit = parse_positive_int(limit, DEFAULT_LIMIT)
    page = parse_positive_int(page, 1)

    total_results = len(pool)
    total_pages = math.ceil(total_results / limit)
    page = max(1, min(page, total_pages or 1))

    start = (page - 1) * limit
    return {
        'page': page,
        'results': pool[start:start + limit],
        'total_pages': total_pages,
        'total_results': total_results,
    }
