from .errors import ValidationError
from .pagination import parse_positive_int

MEDIA_TYPES = ('movie', 'tv')


def search_media(client, query, page=1):
    """Multi-search with person results dropped."""
    query = (query or '').strip()
    if not query:
        raise ValidationError("Query parameter 'query' is required.")

    data = client.search_multi(query, parse_positive_int(page, 1))
    results = [item for item in data.get('results', []) if item.get('media_type') in MEDIA_TYPES]
    return {**data, 'results': results}
