from conftest import TIERS, participant
from standings.models.schemas import ContestPhase
from standings.services.engine import StandingsEngine
from standings.services.rank_tracker import RankChangeTracker

engine = StandingsEngine(default_tiers=TIERS)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def _standings(values):
    ps = [participant(wallet, value, "0") for wallet, value in values.items()]
    return engine.compute_standings(ContestPhase.ACTIVE, ps, 100)


def test_first_update_reports_nothing():
    tracker = RankChangeTracker(clock=FakeClock())
    assert tracker.update(_standings({"0xa": "3", "0xb": "2"})) == {}
    assert tracker.changes() == {}


def test_reports_moves_up_and_down():
    tracker = RankChangeTracker(clock=FakeClock())
    tracker.update(_standings({"0xa": "3", "0xb": "2", "0xc": "1"}))
    deltas = tracker.update(_standings({"0xa": "1", "0xb": "2", "0xc": "3"}))
    assert deltas == {"0xa": -2, "0xc": 2}


def test_new_participants_are_not_reported():
    tracker = RankChangeTracker(clock=FakeClock())
    tracker.update(_standings({"0xa": "3"}))
    assert tracker.update(_standings({"0xa": "3", "0xnew": "9"})) == {"0xa": -1}


def test_changes_expire_after_hold_window():
    clock = FakeClock()
    tracker = RankChangeTracker(hold_seconds=2.0, clock=clock)
    tracker.update(_standings({"0xa": "1", "0xb": "2"}))
    tracker.update(_standings({"0xa": "2", "0xb": "1"}))

    clock.now += 1.5
    assert tracker.changes() == {"0xa": -1, "0xb": 1}
    clock.now += 0.5
    assert tracker.changes() == {}


def test_untracked_updates_only_record_positions():
    tracker = RankChangeTracker(clock=FakeClock())
    tracker.update(_standings({"0xa": "1", "0xb": "2"}))
    assert tracker.update(_standings({"0xa": "2", "0xb": "1"}), track=False) == {}
    assert tracker.update(_standings({"0xa": "2", "0xb": "1"})) == {}


def test_reset_forgets_history():
    tracker = RankChangeTracker(clock=FakeClock())
    tracker.update(_standings({"0xa": "1", "0xb": "2"}))
    tracker.reset()
    assert tracker.update(_standings({"0xa": "2", "0xb": "1"})) == {}


def test_hold_window_defaults_to_settings(monkeypatch):
    from standings.services import rank_tracker

    monkeypatch.setattr(rank_tracker.settings, "rank_change_hold_seconds", 7.5)
    assert RankChangeTracker().hold_seconds == 7.5
    assert RankChangeTracker(hold_seconds=0).hold_seconds == 0
