import pytest
import requests

from app import create_app


def http_error(status_code):
    response = requests.Response()
    response.status_code = status_code
    return requests.HTTPError(f"{status_code} Client Error", response=response)


class FakeTMDbClient:
    """
    Stands in for TMDbClient. Canned payloads are keyed the way the real
    endpoints are addressed; an Exception value is raised instead of returned.
    """

    def __init__(self):
        self.calls = []
        self.configuration = {'images': {'secure_base_url': 'https://image.tmdb.org/t/p/'}}
        self.genres = {'movie': {'genres': [{'id': 28, 'name': 'Action'}]},
                       'tv': {'genres': [{'id': 16, 'name': 'Animation'}]}}
        self.languages = []
        self.countries = []
        self.discover_pages = {}
        self.search_results = {'page': 1, 'results': [], 'total_pages': 0, 'total_results': 0}
        self.recommendations = {}
        self.details = {}

    def _answer(self, value):
        if isinstance(value, Exception):
            raise value
        return value

    def get_configuration(self):
        self.calls.append(('configuration',))
        return self._answer(self.configuration)

    def get_genres(self, media_type='movie'):
        self.calls.append(('genres', media_type))
        return self._answer(self.genres['tv' if media_type == 'tv' else 'movie'])

    def get_languages(self):
        self.calls.append(('languages',))
        return self._answer(self.languages)

    def get_countries(self):
        self.calls.append(('countries',))
        return self._answer(self.countries)

    def discover(self, media_type, params):
        self.calls.append(('discover', media_type, dict(params)))
        results = self._answer(self.discover_pages.get(params['page'], []))
        return {'page': params['page'], 'results': results}

    def search_multi(self, query, page=1):
        self.calls.append(('search', query, page))
        return self._answer(self.search_results)

    def get_recommendations(self, media_type, media_id, page=1):
        self.calls.append(('recommendations', media_type, str(media_id), page))
        results = self._answer(self.recommendations.get((media_type, str(media_id), page), []))
        return {'page': page, 'results': results}

    def get_details(self, media_type, media_id):
        self.calls.append(('details', media_type, media_id))
        return self._answer(self.details[(media_type, media_id)])

    def calls_to(self, name):
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def fake_client():
    return FakeTMDbClient()


@pytest.fixture
def flask_app(fake_client):
    app = create_app(fake_client)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()
