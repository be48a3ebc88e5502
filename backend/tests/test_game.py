import threading


def test_start_seeds_one_collectible(game):
    assert len(game.world.list_collectibles()) == 1


def test_join_sends_snapshot_and_announces(game, recorder):
    game.join('a')
    recorder.emitted.clear()
    player = game.join('b')

    players = recorder.events('currentPlayers')
    assert len(players) == 1
    assert players[0]['to'] == 'b'
    assert {p['id'] for p in players[0]['payload']} == {'a', 'b'}

    collectibles = recorder.events('currentCollectibles')
    assert collectibles[0]['to'] == 'b'
    assert len(collectibles[0]['payload']) == 1

    announced = recorder.events('newPlayer')
    assert announced[0]['skip_sid'] == 'b'
    assert announced[0]['payload'] == player.to_dict()


def test_move_relays_to_others(game, recorder):
    game.join('a')
    recorder.emitted.clear()
    game.move('a', 200, 150)
    moved = recorder.events('playerMoved')
    assert moved == [{
        'event': 'playerMoved',
        'payload': {'id': 'a', 'x': 200, 'y': 150},
        'to': None,
        'skip_sid': 'a',
        'namespace': '/',
    }]


def test_move_out_of_bounds_is_accepted(game):
    game.join('a')
    game.move('a', 1000, 1000)
    player = game.world.get_player('a')
    assert (player.x, player.y) == (1000, 1000)


def test_move_after_disconnect_is_silent(game, recorder):
    game.join('a')
    game.leave('a')
    recorder.emitted.clear()
    assert game.move('a', 10, 10) is None
    assert recorder.emitted == []


def test_leave_broadcasts_once(game, recorder):
    game.join('a')
    game.join('b')
    recorder.emitted.clear()
    assert game.leave('b').id == 'b'
    assert game.leave('b') is None
    departed = recorder.events('playerDisconnected')
    assert len(departed) == 1
    assert departed[0]['payload'] == 'b'
    assert departed[0]['skip_sid'] == 'b'
    assert [p.id for p in game.world.list_players()] == ['a']


def test_no_unicast_to_departed_session(game, recorder):
    game.join('a')
    game.leave('a')
    recorder.emitted.clear()
    assert game.broadcaster.unicast('a', 'currentPlayers', []) is False
    assert recorder.emitted == []


def test_two_players_race_for_same_collectible(game, recorder):
    game.join('a')
    game.join('b')
    target = game.world.list_collectibles()[0]
    recorder.emitted.clear()

    first = game.collect('a', target.id)
    second = game.collect('b', target.id)

    assert first.player_id == 'a'
    assert second is None
    scores = {p.id: p.score for p in game.world.list_players()}
    assert scores == {'a': 1, 'b': 0}
    remaining = game.world.list_collectibles()
    assert len(remaining) == 1
    assert remaining[0].id != target.id
    sent = recorder.events('collectibleCollected')
    assert len(sent) == 1
    assert sent[0]['payload']['playerId'] == 'a'


def test_leaderboard_orders_by_score(game):
    for sid in ('a', 'b', 'c'):
        game.join(sid)
    game.world.credit_player('b', 3)
    game.world.credit_player('c', 1)
    assert game.leaderboard() == [
        {'id': 'b', 'score': 3, 'rank': 1},
        {'id': 'c', 'score': 1, 'rank': 2},
        {'id': 'a', 'score': 0, 'rank': 3},
    ]


def test_leave_during_move_suppresses_relay(game, recorder):
    game.join('a')
    game.join('b')
    recorder.emitted.clear()
    update = game.world.update_player_position

    def update_then_leave(sid, x, y):
        moved = update(sid, x, y)
        game.leave(sid)
        return moved

    game.world.update_player_position = update_then_leave
    assert game.move('a', 50, 60) is None
    assert [e['event'] for e in recorder.emitted] == ['playerDisconnected']


def test_leave_during_pickup_is_not_announced_as_credit(game, recorder):
    game.join('a')
    game.join('b')
    target = game.world.list_collectibles()[0]
    recorder.emitted.clear()
    spawn = game.world.add_collectible

    def spawn_then_leave():
        replacement = spawn()
        game.leave('a')
        return replacement

    game.world.add_collectible = spawn_then_leave
    outcome = game.collect('a', target.id)

    assert [e['event'] for e in recorder.emitted] == ['playerDisconnected', 'collectibleCollected']
    payload = recorder.events('collectibleCollected')[0]['payload']
    assert payload['playerId'] is None
    assert payload['newScore'] is None
    assert not outcome.credited


def test_move_blocks_while_another_thread_holds_the_world(game, recorder):
    game.join('a')
    game.join('b')
    recorder.emitted.clear()
    started = threading.Event()

    with game.world.lock:
        mover = threading.Thread(target=lambda: (started.set(), game.move('a', 70, 80)))
        mover.start()
        started.wait()
        game.leave('a')
    mover.join()

    assert [e['event'] for e in recorder.emitted] == ['playerDisconnected']
