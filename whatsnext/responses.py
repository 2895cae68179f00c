from flask import jsonify


def send_response(status_code, success, data=None, error=None):
    """Uniform {success, data, error} envelope used by every /api route."""
    return jsonify({
        'success': success,
        'data': data,
        'error': error,
    }), status_code
