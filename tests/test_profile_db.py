import json

from flappy_ball.constants import LEVEL_CAP, PROFILE_KEY
from flappy_ball.data_models import PlayerProfile
from flappy_ball.profile_db import ProfileStore


def _write_raw(store, data: str):
    store.cur.execute(
        "INSERT OR REPLACE INTO Profiles (key, data) VALUES (?, ?)", (PROFILE_KEY, data))
    store.conn.commit()


def test_empty_store_gives_default_profile(store):
    profile = store.load_profile()
    assert profile == PlayerProfile()
    assert profile.name == "Player 1"
    assert profile.current_level == 1
    assert profile.achieved_ranks == {"Bronze"}


def test_save_then_load(store):
    profile = PlayerProfile(name="Ada", total_xp=300, current_level=7,
                            total_playtime_seconds=900, total_pipes_crossed=120,
                            highest_pipes_in_run=33, achieved_ranks={"Bronze", "Silver"})
    assert store.save_profile(profile)
    assert store.load_profile() == profile


def test_profile_survives_reopening(tmp_path):
    db_file = str(tmp_path / "profile.db")
    first = ProfileStore(db_file)
    first.save_profile(PlayerProfile(total_xp=42))
    first.close()

    second = ProfileStore(db_file)
    assert second.load_profile().total_xp == 42
    second.close()


def test_corrupt_record_falls_back_to_defaults(store):
    _write_raw(store, "{not json")
    assert store.load_profile() == PlayerProfile()


def test_wrong_shape_falls_back_to_defaults(store):
    _write_raw(store, json.dumps([1, 2, 3]))
    assert store.load_profile() == PlayerProfile()

    _write_raw(store, json.dumps({"total_xp": "lots"}))
    assert store.load_profile() == PlayerProfile()


def test_missing_fields_take_defaults(store):
    _write_raw(store, json.dumps({"name": "Old Save", "total_xp": 50, "current_level": 3}))
    profile = store.load_profile()

    assert profile.name == "Old Save"
    assert profile.total_xp == 50
    assert profile.current_level == 3
    assert profile.total_pipes_crossed == 0
    assert profile.achieved_ranks == {"Bronze"}


def test_starting_rank_is_always_present(store):
    _write_raw(store, json.dumps({"achieved_ranks": ["Silver"], "current_level": 0}))
    profile = store.load_profile()
    assert profile.achieved_ranks == {"Bronze", "Silver"}
    assert profile.current_level == 1


def test_failed_write_is_reported_not_raised():
    store = ProfileStore(":memory:")
    store.close()
    assert store.save_profile(PlayerProfile()) is False
    assert store.load_profile() == PlayerProfile()


def test_unopenable_database_does_not_stop_the_game(tmp_path):
    store = ProfileStore(str(tmp_path / "missing" / "profile.db"))

    assert not store.persistent
    assert store.load_profile() == PlayerProfile()
    assert store.save_profile(PlayerProfile(total_xp=5))
    assert store.load_profile().total_xp == 5
    store.close()


def test_stored_level_above_cap_is_clamped(store):
    _write_raw(store, json.dumps({"total_xp": 0, "current_level": 150}))
    assert store.load_profile().current_level == LEVEL_CAP
