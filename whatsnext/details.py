"""
Detail normalization.

Movie and TV records name the same things differently (title/name,
release_date/first_air_date, runtime/episode_run_time). Each variant has
its own normalizer; both produce the same shape.
"""

from . import config
from .errors import ValidationError

VALID_TYPES = ('movie', 'tv')

KEY_CREW_JOBS = (
    'Director', 'Producer', 'Executive Producer', 'Screenplay', 'Story',
    'Writer', 'Director of Photography', 'Composer', 'Original Music Composer',
)
MAX_CAST = 24
MAX_CREW = 16


def poster_url(poster_path, size='w500'):
    if not poster_path:
        return None
    return f"{config.TMDB_IMAGE_BASE_URL.rstrip('/')}/{size}{poster_path}"


def _credits(raw):
    credits = raw.get('credits') or {}
    cast = [
        {
            'name': person.get('name'),
            'character': person.get('character', ''),
            'profile_path': person.get('profile_path'),
        }
        for person in (credits.get('cast') or [])[:MAX_CAST]
    ]
    crew = [
        {
            'name': person.get('name'),
            'job': person.get('job'),
            'profile_path': person.get('profile_path'),
        }
        for person in (credits.get('crew') or [])
        if person.get('job') in KEY_CREW_JOBS
    ][:MAX_CREW]
    return cast, crew


def _common(raw, media_type):
    cast, crew = _credits(raw)
    return {
        'id': raw.get('id'),
        'media_type': media_type,
        'synopsis': raw.get('overview') or '',
        'poster_path': raw.get('poster_path'),
        'poster_url': poster_url(raw.get('poster_path')),
        'rating': raw.get('vote_average'),
        'vote_count': raw.get('vote_count'),
        'genres': raw.get('genres') or [],
        'original_language': raw.get('original_language'),
        'status': raw.get('status'),
        'cast': cast,
        'crew': crew,
        'raw': raw,
    }


def normalize_movie(raw):
    detail = _common(raw, 'movie')
    origin_country = raw.get('origin_country') or [
        c.get('iso_3166_1') for c in raw.get('production_countries') or [] if c.get('iso_3166_1')
    ]
    detail.update({
        'title': raw.get('title'),
        'original_title': raw.get('original_title'),
        'release_date': raw.get('release_date') or None,
        'runtime': raw.get('runtime'),
        'origin_country': origin_country,
    })
    return detail


def normalize_tv(raw):
    detail = _common(raw, 'tv')
    run_times = raw.get('episode_run_time') or []
    detail.update({
        'title': raw.get('name'),
        'original_title': raw.get('original_name'),
        'release_date': raw.get('first_air_date') or None,
        'runtime': run_times[0] if run_times else None,
        'origin_country': raw.get('origin_country') or [],
    })
    return detail


NORMALIZERS = {
    'movie': normalize_movie,
    'tv': normalize_tv,
}


def validate_detail_request(media_type, media_id):
    if media_type not in VALID_TYPES:
        raise ValidationError("Invalid 'type' parameter. Must be 'movie' or 'tv'.")
    if not media_id or not str(media_id).isdecimal():
        raise ValidationError("A valid numeric 'id' is required.")
    return media_type, int(media_id)


def get_media_detail(client, media_type, media_id):
    """
    Fetch and normalize one title. An upstream 404 propagates as
    requests.HTTPError for the route to report as not found.
    """
    media_type, media_id = validate_detail_request(media_type, media_id)
    raw = client.get_details(media_type, media_id)
    return NORMALIZERS[media_type](raw)
