from flappy_ball.constants import PLAYER_X
from flappy_ball.data_models import (
    CollisionEvent, CollisionKind, DestroyEvent, Obstacle, PassEvent
)

from conftest import make_leader


def test_pass_is_counted_once_per_pair(evaluator, run, profile):
    top = make_leader(PLAYER_X - 1)
    bottom = Obstacle(x=PLAYER_X - 1, y=500.0, height=200.0, velocity_x=-150.0)
    run.obstacles.extend([top, bottom])

    events = evaluator.evaluate(run, profile, PLAYER_X)
    assert [type(e) for e in events] == [PassEvent]
    assert events[0].pipes_passed == 1
    assert top.scored and not bottom.scored
    assert run.pipes_passed == 1

    assert evaluator.evaluate(run, profile, PLAYER_X) == []
    assert run.pipes_passed == 1


def test_pair_ahead_of_player_is_not_scored(evaluator, run, profile):
    run.obstacles.append(make_leader(PLAYER_X + 10))
    assert evaluator.evaluate(run, profile, PLAYER_X) == []
    assert run.pipes_passed == 0


def test_off_screen_pipes_are_destroyed(evaluator, run, profile):
    gone = make_leader(-100.0)
    gone.scored = True
    kept = make_leader(-10.0)
    kept.scored = True
    run.obstacles.extend([gone, kept])

    events = evaluator.evaluate(run, profile, PLAYER_X)
    assert events == [DestroyEvent(obstacle=gone)]
    assert run.obstacles == [kept]


def test_tenth_pass_pays_the_milestone(evaluator, run, profile):
    run.pipes_passed = 9
    run.obstacles.append(make_leader(PLAYER_X - 1))

    evaluator.evaluate(run, profile, PLAYER_X)

    assert run.pipes_passed == 10
    assert profile.total_xp == 10
    assert evaluator.last_award.threshold == 10


def test_collision_ends_run_once(evaluator, run, profile, store):
    run.pipes_passed = 4
    run.elapsed_millis = 130_500

    report = evaluator.handle_collision(run, profile, CollisionEvent(CollisionKind.OBSTACLE))
    assert run.is_over
    assert report.score == 4
    assert report.pipes_crossed == 4
    assert report.elapsed_seconds == 130
    totals = store.load_profile()

    again = evaluator.handle_collision(run, profile, CollisionEvent(CollisionKind.BOUNDARY))
    assert again is None
    assert store.load_profile() == totals
    assert profile.total_pipes_crossed == 4
    assert profile.total_playtime_seconds == 130


def test_nothing_is_scored_after_the_run_ends(evaluator, run, profile):
    run.is_over = True
    run.obstacles.append(make_leader(PLAYER_X - 1))
    assert evaluator.evaluate(run, profile, PLAYER_X) == []
    assert run.pipes_passed == 0
