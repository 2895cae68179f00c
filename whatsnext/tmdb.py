"""
TMDB API client.
One session per client, api_key sent as a query parameter, no retries.
"""

import logging

import requests

from . import config

logger = logging.getLogger(__name__)

SESSION_HEADERS = {
    'Accept': 'application/json',
    'User-Agent': 'whatsnext/1.0',
}


class TMDbClient:
    """The Movie Database API client."""

    def __init__(self, api_key=None, base_url=None, timeout=None, session=None):
        self.api_key = config.TMDB_API_KEY if api_key is None else api_key
        self.base_url = (base_url or config.TMDB_BASE_URL).rstrip('/')
        self.timeout = timeout or config.TMDB_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update(SESSION_HEADERS)

    def get(self, endpoint, params=None):
        """GET an endpoint and return the decoded JSON. Raises requests.HTTPError on non-2xx."""
        query = {'api_key': self.api_key}
        query.update({k: v for k, v in (params or {}).items() if v is not None})

        response = self.session.get(
            f"{self.base_url}{endpoint}",
            params=query,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def get_configuration(self):
        return self.get('/configuration')

    def get_genres(self, media_type='movie'):
        target = 'tv' if media_type == 'tv' else 'movie'
        return self.get(f'/genre/{target}/list')

    def get_languages(self):
        return self.get('/configuration/languages')

    def get_countries(self):
        return self.get('/configuration/countries')

    def discover(self, media_type, params):
        return self.get(f'/discover/{media_type}', params)

    def search_multi(self, query, page=1):
        return self.get('/search/multi', {
            'query': query,
            'page': page,
            'include_adult': 'false',
        })

    def get_recommendations(self, media_type, media_id, page=1):
        return self.get(f'/{media_type}/{media_id}/recommendations', {'page': page})

    def get_details(self, media_type, media_id):
        """Full record with credits appended (cast/crew for the detail page)."""
        return self.get(f'/{media_type}/{media_id}', {'append_to_response': 'credits'})
