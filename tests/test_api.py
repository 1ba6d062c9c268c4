from highscores import db
from tests.conftest import signed


def test_submit_and_fetch_player_scores(client):
    res = client.post('/submit_high_score', json=signed())
    assert res.status_code == 200
    assert res.get_json() == {'success': True, 'message': 'High score submitted successfully'}

    res = client.post('/get_high_scores', json={'uniqueid': 'u42'})
    assert res.status_code == 200
    assert res.get_json() == {
        'success': True,
        'scores': [{'initials': 'ABC', 'score': 500, 'timestamp': '6/15/2024, 10:30:00 AM'}],
    }


def test_same_submission_twice_creates_two_records(client, services):
    body = signed()
    assert client.post('/submit_high_score', json=body).status_code == 200
    assert client.post('/submit_high_score', json=body).status_code == 200
    assert services.store.count() == 2
    assert len(client.post('/get_high_scores', json={'uniqueid': 'u42'}).get_json()['scores']) == 2


def test_zero_score_accepted(client):
    assert client.post('/submit_high_score', json=signed(score=0)).status_code == 200


def test_integral_float_score_accepted(client, services):
    body = signed(score=500)
    body['score'] = 500.0
    assert client.post('/submit_high_score', json=body).status_code == 200
    assert services.store.query_top_n(1)[0].score == 500


def test_negative_score_is_validation_error(client, services):
    res = client.post('/submit_high_score', json=signed(score=-1))
    assert res.status_code == 400
    assert res.get_json() == {'success': False, 'error': "Invalid or missing 'score'"}
    assert services.store.count() == 0


def test_score_beyond_64_bit_integer_rejected(client, services):
    for score in (2 ** 63, 2 ** 64):
        res = client.post('/submit_high_score', json=signed(score=score))
        assert res.status_code == 400
        assert res.get_json() == {'success': False, 'error': "Invalid or missing 'score'"}

    body = signed()
    body['score'] = 1e20
    assert client.post('/submit_high_score', json=body).status_code == 400
    assert services.store.count() == 0


def test_largest_storable_score_accepted(client, services):
    assert client.post('/submit_high_score', json=signed(score=2 ** 63 - 1)).status_code == 200
    assert services.store.query_top_n(1)[0].score == 2 ** 63 - 1


def test_lone_surrogate_text_rejected(client, services):
    raw = (
        '{"initials":"\\ud800","score":1,"uniqueid":"u42",'
        '"timestamp":"15/06/2024 10:30:00","hash":"x"}'
    )
    res = client.post('/submit_high_score', data=raw, content_type='application/json')
    assert res.status_code == 400
    assert res.get_json() == {'success': False, 'error': "Invalid or missing 'initials'"}
    assert services.store.count() == 0


def test_blank_fields_rejected(client):
    for field, value in [('initials', '   '), ('uniqueid', ''), ('uniqueid', '   '), ('timestamp', ' ')]:
        res = client.post('/submit_high_score', json=signed(**{field: value}))
        assert res.status_code == 400
        assert res.get_json()['success'] is False
        assert field in res.get_json()['error']


def test_missing_or_wrong_typed_fields_rejected(client):
    body = signed()
    del body['hash']
    assert client.post('/submit_high_score', json=body).status_code == 400

    body = signed()
    body['score'] = '500'
    assert client.post('/submit_high_score', json=body).status_code == 400

    body = signed()
    body['score'] = True
    assert client.post('/submit_high_score', json=body).status_code == 400

    assert client.post('/submit_high_score', data='not json', content_type='text/plain').status_code == 400
    assert client.post('/submit_high_score', json=[1, 2, 3]).status_code == 400


def test_tampered_score_is_forbidden(client, services):
    body = signed()
    body['score'] = 9999
    res = client.post('/submit_high_score', json=body)
    assert res.status_code == 403
    assert res.get_json() == {'success': False, 'error': 'Invalid hash'}
    assert services.store.count() == 0


def test_bad_timestamp_after_valid_hash(client, services):
    res = client.post('/submit_high_score', json=signed(timestamp='2024/06/15'))
    assert res.status_code == 400
    assert res.get_json() == {'success': False, 'error': 'Invalid timestamp format'}
    assert services.store.count() == 0


def test_storage_failure_is_500(client, monkeypatch):
    from highscores.errors import StorageError

    def broken_commit():
        raise StorageError('database is locked')

    monkeypatch.setattr(db.session, 'commit', broken_commit)
    res = client.post('/submit_high_score', json=signed())
    assert res.status_code == 500
    assert res.get_json()['success'] is False


def test_get_high_scores_requires_uniqueid(client):
    res = client.post('/get_high_scores', json={})
    assert res.status_code == 400
    assert res.get_json() == {'success': False, 'error': 'Missing unique ID'}


def test_get_high_scores_pagination(client):
    for s in (10, 20, 30):
        client.post('/submit_high_score', json=signed(score=s))
    res = client.post('/get_high_scores', json={'uniqueid': 'u42', 'limit': 1, 'offset': 1})
    assert [r['score'] for r in res.get_json()['scores']] == [20]
    assert client.post('/get_high_scores', json={'uniqueid': 'u42', 'limit': 'all'}).status_code == 400


def test_get_high_scores_is_case_sensitive(client):
    client.post('/submit_high_score', json=signed(uniqueid='Player'))
    assert client.post('/get_high_scores', json={'uniqueid': 'player'}).get_json()['scores'] == []


def test_top_10_endpoint(client):
    for s in range(12):
        client.post('/submit_high_score', json=signed(score=s * 10, uniqueid=f'p{s}'))
    res = client.get('/get_top_10_scores')
    assert res.status_code == 200
    data = res.get_json()
    assert data['success'] is True
    assert [r['score'] for r in data['scores']] == [110, 100, 90, 80, 70, 60, 50, 40, 30, 20]


def test_top_100_endpoint_returns_raw_list(client):
    client.post('/submit_high_score', json=signed())
    res = client.get('/api/top_100')
    assert res.status_code == 200
    assert res.get_json() == [{'initials': 'ABC', 'score': 500, 'timestamp': 1718447400}]


def test_top_100_storage_failure_shape(client, services, monkeypatch):
    from highscores.errors import StorageError

    def broken(n):
        raise StorageError('no such table: scores')

    monkeypatch.setattr(services.store, 'query_top_n', broken)
    res = client.get('/api/top_100')
    assert res.status_code == 500
    assert res.get_json() == {'error': 'Error retrieving high scores.'}


def test_health(client):
    client.post('/submit_high_score', json=signed())
    assert client.get('/health').get_json() == {'status': 'ok', 'scores': 1}


def test_cors_allows_itch_origins(client):
    res = client.get('/get_top_10_scores', headers={'Origin': 'https://someone.itch.io'})
    assert res.headers.get('Access-Control-Allow-Origin') == 'https://someone.itch.io'
    res = client.get('/get_top_10_scores', headers={'Origin': 'https://evil.example.com'})
    assert 'Access-Control-Allow-Origin' not in res.headers


def test_sign_score_cli_matches_client_digest(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=[
        'sign-score', '--initials', 'ABC', '--score', '500',
        '--uniqueid', 'u42', '--timestamp', '15/06/2024 10:30:00',
    ])
    assert result.exit_code == 0
    assert result.output.strip() == signed()['hash']
