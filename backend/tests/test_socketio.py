def _events(sio_client, name):
    return [pkt['args'][0] for pkt in sio_client.get_received('/ws') if pkt['name'] == name]


def _player_id(test_client):
    [connected] = _events(test_client, 'connected')
    return connected['player_id']


def test_socket_connect_and_ping(sio_client):
    assert sio_client.is_connected('/ws')
    assert _player_id(sio_client)

    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    assert _events(sio_client, 'pong') == [{'n': 1}]


def test_host_creates_game_and_sees_players_join(flask_app, sio_client, quiz_id):
    from quizhub import socketio as _sio
    host_client = sio_client
    host_id = _player_id(host_client)
    host_client.emit('create_game', {'quiz_id': quiz_id}, namespace='/ws')
    [created] = _events(host_client, 'game_state')
    assert created['current_question']['id'] == 'q1'
    assert created['last_answer_id'] is None
    game_id = created['game_id']

    player_client = _sio.test_client(flask_app, namespace='/ws')
    player_id = _player_id(player_client)
    player_client.emit('join_game', {'game_id': game_id, 'name': 'Alice'}, namespace='/ws')

    [state] = _events(player_client, 'game_state')
    assert state['game_id'] == game_id
    assert state['quiz_title'] == 'Capitals'
    assert _events(host_client, 'player_joined') == [{'player_id': player_id, 'name': 'Alice'}]

    game = flask_app.extensions['game_engine'].get_game(game_id)
    assert game.host_id == host_id
    assert game.player_ids == [player_id]
    player_client.disconnect(namespace='/ws')


def test_play_round_over_socket(flask_app, client, sio_client, quiz_id):
    game_id = client.post(f'/quizzes/{quiz_id}/start').get_json()['id']
    sio_client.get_received('/ws')  # flush

    sio_client.emit('join_game', {'game_id': game_id, 'name': 'Alice'}, namespace='/ws')
    sio_client.emit('pick_answer', {'question_id': 'q1', 'answer_id': 'a1'}, namespace='/ws')
    sio_client.get_received('/ws')

    sio_client.emit('change_game_state', {'game_id': game_id, 'question_id': 'q1', 'state': 'ANSWER'},
                    namespace='/ws')
    [reveal] = _events(sio_client, 'game_state')
    assert reveal['state'] == 'ANSWER'
    assert reveal['right_answer_ids'] == ['a1']
    assert reveal['last_answer_id'] == 'a1'

    scores = client.get(f'/games/{game_id}/scores').get_json()['scores']
    assert scores == [{'name': 'Alice', 'score': 1}]

    sio_client.emit('leave_game', namespace='/ws')
    assert client.get(f'/games/{game_id}/scores').get_json()['scores'] == []


def test_http_update_pushes_to_players(client, sio_client, quiz_id):
    game_id = client.post(f'/quizzes/{quiz_id}/start').get_json()['id']
    sio_client.emit('join_game', {'game_id': game_id, 'name': 'Alice'}, namespace='/ws')
    sio_client.get_received('/ws')

    client.post(f'/games/{game_id}', json={'question_id': 'q2', 'state': 'QUESTION'})
    [pushed] = _events(sio_client, 'game_state')
    assert pushed['current_question']['id'] == 'q2'


def test_command_errors_reported_to_sender(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_game', {'game_id': 'deadbeef', 'name': 'Alice'}, namespace='/ws')
    [error] = _events(sio_client, 'error')
    assert error['kind'] == 'game_not_found'

    sio_client.emit('pick_answer', {'question_id': 'q1', 'answer_id': 'a1'}, namespace='/ws')
    [error] = _events(sio_client, 'error')
    assert error['kind'] == 'player_not_found'

    sio_client.emit('join_game', {'name': 'Alice'}, namespace='/ws')
    [error] = _events(sio_client, 'error')
    assert error['kind'] == 'invalid_payload'


def test_disconnect_leaves_game(flask_app, client, quiz_id):
    from quizhub import socketio as _sio
    game_id = client.post(f'/quizzes/{quiz_id}/start').get_json()['id']
    player_client = _sio.test_client(flask_app, namespace='/ws')
    player_client.emit('join_game', {'game_id': game_id, 'name': 'Alice'}, namespace='/ws')
    assert len(client.get(f'/games/{game_id}').get_json()['player_ids']) == 1

    player_client.disconnect(namespace='/ws')
    assert client.get(f'/games/{game_id}').get_json()['player_ids'] == []


def test_non_object_payload_reported_to_sender(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_game', ['x'], namespace='/ws')
    [error] = _events(sio_client, 'error')
    assert error['kind'] == 'invalid_payload'

    sio_client.emit('pick_answer', 'q1', namespace='/ws')
    [error] = _events(sio_client, 'error')
    assert error['kind'] == 'invalid_payload'
