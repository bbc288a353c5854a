import json

import pytest

from cryptic_hunt.levels import DEFAULT_LEVELS, Level, load_levels


def test_default_table_is_contiguous():
    assert [lvl.number for lvl in DEFAULT_LEVELS] == list(range(1, len(DEFAULT_LEVELS) + 1))
    assert all(lvl.prompt and lvl.answer for lvl in DEFAULT_LEVELS)


def test_level_is_immutable_and_hides_answer():
    level = DEFAULT_LEVELS[0]
    assert level.to_dict() == {'level': 1, 'prompt': level.prompt}
    with pytest.raises(AttributeError):
        level.answer = 'changed'


def test_load_levels_from_file(tmp_path):
    path = tmp_path / 'levels.json'
    path.write_text(json.dumps([
        {'prompt': 'First?', 'answer': 'one'},
        {'prompt': 'Second?', 'answer': 'two'},
    ]), encoding='utf-8')
    assert load_levels(str(path)) == (Level(1, 'First?', 'one'), Level(2, 'Second?', 'two'))


@pytest.mark.parametrize('payload', [[], {'prompt': 'x'}, [{'prompt': 'x'}], ['just text'], [{'prompt': '', 'answer': 'y'}]])
def test_load_levels_rejects_malformed_files(tmp_path, payload):
    path = tmp_path / 'levels.json'
    path.write_text(json.dumps(payload), encoding='utf-8')
    with pytest.raises(ValueError):
        load_levels(str(path))


def test_configured_levels_drive_seeding_and_gate(tmp_path, app_factory):
    path = tmp_path / 'levels.json'
    path.write_text(json.dumps([
        {'prompt': 'First?', 'answer': 'one'},
        {'prompt': 'Second?', 'answer': 'two'},
    ]), encoding='utf-8')
    client = app_factory(LEVELS_FILE=str(path)).test_client()

    client.post('/api/register', json={'username': 'alice', 'password': 'secret1'})
    me = client.get('/api/me').get_json()
    assert me['total_levels'] == 2
    assert len(me['progress']) == 2
    assert client.get('/api/level/3').get_json() == {'error': 'bad_level'}
    assert client.post('/api/answer', json={'level': 1, 'answer': 'ONE'}).get_json() == {'correct': True}
    assert client.post('/api/answer', json={'level': 2, 'answer': 'two'}).get_json() == {'correct': True}
    assert client.get('/api/me').get_json()['highest_solved'] == 2


def test_username_bounds_come_from_config(app_factory):
    client = app_factory(USERNAME_MIN_LENGTH=1, PASSWORD_MIN_LENGTH=10).test_client()
    assert client.post('/api/register', json={'username': 'a', 'password': 'long-enough'}).status_code == 201
    res = client.post('/api/register', json={'username': 'b', 'password': 'short'})
    assert res.get_json() == {'error': 'password_length'}
