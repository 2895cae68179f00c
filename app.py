from flask import Flask, request, send_from_directory
from flask_cors import CORS
from werkzeug.exceptions import MethodNotAllowed, NotFound
import logging

from whatsnext import config
from whatsnext.responses import send_response
from whatsnext.routes import api
from whatsnext.tmdb import TMDbClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

API_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']


def _allowed_methods(app, request):
    """Methods a real /api route accepts for this path (the catch-all takes them all)."""
    adapter = app.url_map.bind_to_environ(request.environ)
    allowed = []
    for method in API_METHODS:
        if method == request.method:
            continue
        endpoint, _ = adapter.match(request.path, method=method)
        if endpoint != 'api_not_found':
            allowed.append(method)
    return allowed


def create_app(client=None):
    """Build the Flask app. Pass a client to point the API at something other than live TMDB."""
    app = Flask(__name__, static_folder=None)
    CORS(app)

    if client is None:
        config.check_api_key()
        client = TMDbClient()
    app.extensions['tmdb_client'] = client

    app.register_blueprint(api)

    @app.after_request
    def log_request(response):
        logger.info(f"{request.method} {request.full_path.rstrip('?')} {response.status_code}")
        return response

    @app.route('/api', methods=API_METHODS)
    @app.route('/api/<path:path>', methods=API_METHODS)
    def api_not_found(path=None):
        allowed = _allowed_methods(app, request)
        if allowed:
            raise MethodNotAllowed(valid_methods=allowed)
        return send_response(404, False, error='API endpoint not found')

    @app.errorhandler(404)
    def not_found(e):
        if request.path.startswith('/api'):
            return send_response(404, False, error='API endpoint not found')
        return e

    @app.errorhandler(405)
    def method_not_allowed(e):
        if request.path.startswith('/api'):
            return send_response(405, False, error='Method not allowed')
        return e

    # Static frontend, with index.html for any unknown page
    @app.route('/', defaults={'path': ''})
    @app.route('/<path:path>')
    def frontend(path):
        if path:
            try:
                return send_from_directory(config.PUBLIC_DIR, path)
            except NotFound:
                pass
        return send_from_directory(config.PUBLIC_DIR, 'index.html')

    return app


app = create_app()

if __name__ == '__main__':
    logger.info(f"Frontend accessible at http://localhost:{config.PORT}")
    logger.info(f"API accessible at http://localhost:{config.PORT}/api")
    app.run(debug=config.DEBUG, host='0.0.0.0', port=config.PORT)
