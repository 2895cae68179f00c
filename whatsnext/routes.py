import logging

import requests
from flask import Blueprint, current_app, request

from .details import get_media_detail
from .discovery import discover
from .errors import ValidationError
from .metadata import get_countries, get_languages
from .pagination import parse_positive_int
from .recommendations import get_aggregated_recommendations
from .responses import send_response
from .search import search_media

logger = logging.getLogger(__name__)

api = Blueprint('api', __name__, url_prefix='/api')


def get_client():
    return current_app.extensions['tmdb_client']


@api.route('/health')
def health():
    return send_response(200, True, {'status': 'ok'})


@api.route('/config')
def get_config():
    try:
        return send_response(200, True, get_client().get_configuration())
    except Exception as e:
        logger.error(f"Error fetching TMDB config: {e}")
        return send_response(500, False, error='Failed to fetch configuration from TMDB')


@api.route('/genres')
def get_genres():
    try:
        media_type = request.args.get('type') or 'movie'
        return send_response(200, True, get_client().get_genres(media_type))
    except Exception as e:
        logger.error(f"Error fetching genres: {e}")
        return send_response(500, False, error='Failed to fetch genres from TMDB')


@api.route('/metadata/languages')
def metadata_languages():
    try:
        return send_response(200, True, get_languages(get_client()))
    except Exception as e:
        logger.error(f"Error fetching languages: {e}")
        return send_response(500, False, error='Failed to fetch languages')


@api.route('/metadata/countries')
def metadata_countries():
    try:
        return send_response(200, True, get_countries(get_client()))
    except Exception as e:
        logger.error(f"Error fetching countries: {e}")
        return send_response(500, False, error='Failed to fetch countries')


@api.route('/suggestions')
def get_suggestions():
    """Discovery filtered by type/genre/rating/mood/duration/country/language."""
    filters = {
        key: request.args.get(key)
        for key in ('type', 'genre', 'rating', 'mood', 'duration', 'country', 'language', 'sort_by')
    }
    page = parse_positive_int(request.args.get('page'), 1)
    limit = request.args.get('limit')

    try:
        return send_response(200, True, discover(get_client(), filters, page, limit))
    except ValidationError as e:
        return send_response(400, False, error=str(e))
    except Exception as e:
        logger.error(f"Error fetching suggestions: {e}")
        return send_response(500, False, error='Failed to fetch suggestions from TMDB')


@api.route('/search')
def search():
    try:
        data = search_media(get_client(), request.args.get('query'), request.args.get('page'))
        return send_response(200, True, data)
    except ValidationError as e:
        return send_response(400, False, error=str(e))
    except Exception as e:
        logger.error(f"Error searching media: {e}")
        return send_response(500, False, error='Failed to perform search')


@api.route('/recommendations', methods=['POST'])
def recommendations():
    """
    Body: {"items": [{"id": 123, "type": "movie"}, {"id": 456, "type": "tv"}]}
    Query: ?page=1&limit=20
    """
    body = request.get_json(silent=True)
    items = body.get('items') if isinstance(body, dict) else None
    page = parse_positive_int(request.args.get('page'), 1)
    limit = request.args.get('limit')

    try:
        data = get_aggregated_recommendations(get_client(), items, page, limit)
        return send_response(200, True, data)
    except ValidationError as e:
        return send_response(400, False, error=str(e))
    except Exception as e:
        logger.error(f"Error fetching aggregated recommendations: {e}")
        return send_response(500, False, error='Failed to fetch recommendations from TMDB')


@api.route('/details/<media_type>/<media_id>')
def details(media_type, media_id):
    try:
        return send_response(200, True, get_media_detail(get_client(), media_type, media_id))
    except ValidationError as e:
        return send_response(400, False, error=str(e))
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        if status == 404:
            return send_response(404, False, error='Media item not found on TMDB.')
        logger.error(f"Error fetching media details for {media_type} {media_id}: {e}")
        return send_response(500, False, error='Failed to fetch media details from TMDB')
    except Exception as e:
        logger.error(f"Error fetching media details for {media_type} {media_id}: {e}")
        return send_response(500, False, error='Failed to fetch media details from TMDB')
