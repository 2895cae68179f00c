import pytest

from whatsnext.errors import ValidationError
from whatsnext.recommendations import (
    aggregate,
    canonical_id,
    get_aggregated_recommendations,
    infer_media_type,
    normalize_selections,
    validate_items,
)
from conftest import http_error


def movie(movie_id, popularity=10.0):
    return {'id': movie_id, 'title': f"Movie {movie_id}", 'popularity': popularity}


def show(show_id, popularity=10.0):
    return {'id': show_id, 'name': f"Show {show_id}", 'popularity': popularity}


@pytest.mark.parametrize('items', [None, [], 'abc', {'id': 1}])
def test_missing_or_empty_items_rejected(items):
    with pytest.raises(ValidationError, match="array of 'items'"):
        validate_items(items)


def test_more_than_five_items_rejected():
    items = [{'id': i, 'type': 'movie'} for i in range(1, 7)]
    with pytest.raises(ValidationError, match='Maximum of 5'):
        validate_items(items)


@pytest.mark.parametrize('bad_item', [{'id': 1}, {'type': 'movie'}, {}, 'movie-1'])
def test_item_without_id_or_type_rejected(bad_item):
    with pytest.raises(ValidationError, match="'id' and 'type'"):
        validate_items([{'id': 1, 'type': 'movie'}, bad_item])


def test_validation_happens_before_any_upstream_call(fake_client):
    with pytest.raises(ValidationError):
        get_aggregated_recommendations(fake_client, [{'id': i, 'type': 'movie'} for i in range(6)])
    assert fake_client.calls == []


def test_normalize_selections_defaults_type_and_drops_duplicates():
    selections = normalize_selections([
        {'id': 1, 'type': 'tv'},
        {'id': 2, 'type': 'anime'},
        {'id': '1', 'type': 'tv'},
    ])
    assert selections == [('tv', 1), ('movie', 2)]


def test_infer_media_type():
    assert infer_media_type({'id': 1, 'media_type': 'tv', 'title': 'x'}) == 'tv'
    assert infer_media_type(movie(1)) == 'movie'
    assert infer_media_type(show(1)) == 'tv'


def test_score_counts_selections_recommending_the_item():
    selections = [('movie', 1), ('movie', 2), ('movie', 3)]
    lists = [
        [movie(100), movie(200)],
        [movie(200)],
        [movie(100), movie(300)],
    ]
    pool = aggregate(selections, lists)
    scores = {item['id']: item['score'] for item in pool}
    assert scores == {100: 2, 200: 2, 300: 1}


def test_same_item_twice_in_one_list_counts_once():
    pool = aggregate([('movie', 1)], [[movie(100), movie(100)]])
    assert pool[0]['score'] == 1


def test_selected_ids_are_never_recommended():
    selections = [('movie', 1), ('tv', 2)]
    lists = [[movie(2), movie(100)], [movie(1), show(1), show(200)]]
    ids = {item['id'] for item in aggregate(selections, lists)}
    assert ids == {100, 200}


def test_movie_and_tv_with_same_id_are_distinct():
    pool = aggregate([('movie', 1)], [[movie(100), show(100)]])
    assert sorted(item['media_type'] for item in pool) == ['movie', 'tv']


def test_sort_by_score_then_popularity_then_encounter_order():
    selections = [('movie', 1), ('movie', 2)]
    lists = [
        [movie(10, popularity=5), movie(11, popularity=99), movie(12, popularity=5), movie(13, popularity=1)],
        [movie(13, popularity=1)],
    ]
    pool = aggregate(selections, lists)
    assert [item['id'] for item in pool] == [13, 11, 10, 12]


def test_pool_capped_at_fifty():
    lists = [[movie(i) for i in range(100, 140)], [movie(i) for i in range(200, 240)]]
    pool = aggregate([('movie', 1), ('movie', 2)], lists)
    assert len(pool) == 50


def test_fetches_two_pages_per_selection(fake_client):
    get_aggregated_recommendations(fake_client, [{'id': 550, 'type': 'movie'}, {'id': 1396, 'type': 'tv'}])
    calls = sorted(fake_client.calls_to('recommendations'))
    assert calls == [
        ('recommendations', 'movie', '550', 1),
        ('recommendations', 'movie', '550', 2),
        ('recommendations', 'tv', '1396', 1),
        ('recommendations', 'tv', '1396', 2),
    ]


def test_end_to_end_scores_across_pages(fake_client):
    fake_client.recommendations = {
        ('movie', '1', 1): [movie(100, popularity=1)],
        ('movie', '1', 2): [movie(200)],
        ('movie', '2', 1): [movie(300)],
        ('movie', '3', 2): [movie(100, popularity=1)],
    }
    items = [{'id': 1, 'type': 'movie'}, {'id': 2, 'type': 'movie'}, {'id': 3, 'type': 'movie'}]
    result = get_aggregated_recommendations(fake_client, items)

    by_id = {item['id']: item for item in result['results']}
    assert by_id[100]['score'] == 2
    assert by_id[200]['score'] == 1
    assert result['results'][0]['id'] == 100
    assert result['total_results'] == 3


def test_failed_selection_is_isolated(fake_client):
    fake_client.recommendations = {
        ('movie', '1', 1): [movie(100)],
        ('movie', '2', 1): http_error(500),
        ('movie', '2', 2): [movie(999)],
    }
    result = get_aggregated_recommendations(fake_client, [{'id': 1, 'type': 'movie'}, {'id': 2, 'type': 'movie'}])
    assert [item['id'] for item in result['results']] == [100]


def test_pagination_clamps_page(fake_client):
    fake_client.recommendations = {('movie', '1', 1): [movie(i) for i in range(100, 125)]}
    result = get_aggregated_recommendations(fake_client, [{'id': 1, 'type': 'movie'}], page=9, limit=10)
    assert result['page'] == 3
    assert len(result['results']) == 5


@pytest.mark.parametrize('raw, expected', [
    (550, 550), (550.0, 550), ('550', 550), (' 550 ', 550), (550.5, '550.5'), ('tt0137523', 'tt0137523'),
])
def test_canonical_id(raw, expected):
    assert canonical_id(raw) == expected


def test_float_and_string_selection_ids_are_excluded(fake_client):
    fake_client.recommendations = {
        ('movie', '550', 1): [{'id': 550, 'title': 'Fight Club'}, {'id': 7, 'title': 'Se7en'}],
        ('tv', '1396', 1): [{'id': 1396, 'name': 'Breaking Bad'}, {'id': 8, 'name': 'Ozark'}],
    }
    items = [{'id': 550.0, 'type': 'movie'}, {'id': '1396', 'type': 'tv'}]
    result = get_aggregated_recommendations(fake_client, items)

    assert sorted(item['id'] for item in result['results']) == [7, 8]
    assert ('recommendations', 'movie', '550', 1) in fake_client.calls
