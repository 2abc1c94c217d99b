def test_health(client):
    res = client.get('/health')
    assert res.status_code == 200
    assert res.get_json() == {'status': 'ok'}


def test_open_games_empty(client):
    res = client.get('/api/games/open')
    assert res.status_code == 200
    assert res.get_json() == []


def test_open_games_and_stats_reflect_socket_activity(client, make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    alice.emit('register', 'Alice')
    bob.emit('register', 'Bob')
    alice.emit('createGame')
    bob.emit('joinQueue')

    games = client.get('/api/games/open').get_json()
    assert [g['hostName'] for g in games] == ['Alice']

    stats = client.get('/api/games/stats').get_json()
    assert stats == {
        'players': 2,
        'open_games': 1,
        'pending_invites': 0,
        'queued': 1,
        'sessions': 0,
    }

    bob.emit('joinGame', games[0]['id'])
    stats = client.get('/api/games/stats').get_json()
    assert stats['open_games'] == 0
    assert stats['sessions'] == 1
