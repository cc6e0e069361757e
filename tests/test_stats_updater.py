"""Tests for the stats store and the stats updater."""

from courtpairing.models import Game, Results, Score, Team
from courtpairing.stats import PlayerStatsStore, StatsUpdater

from conftest import make_constraint, stats_for


def _game(game_id="g1", court_id="c1", serve=("a", "b"), receive=("c", "d")):
    return Game(
        id=game_id,
        session_id="s1",
        game_number=1,
        court_id=court_id,
        serve_team=Team(*serve),
        receive_team=Team(*receive),
    )


class TestPlayerStatsStore:
    """Seeding, lazy creation and snapshots."""

    def test_seeded_players_get_zero_stats(self):
        store = PlayerStatsStore(player_ids=["a", "b"])
        assert len(store) == 2
        assert "a" in store
        assert store["a"].games_played == 0

    def test_unknown_player_is_created_on_access(self, empty_store):
        assert "z" not in empty_store
        assert empty_store.get("z").games_sat_out == 0
        assert "z" in empty_store

    def test_existing_stats_are_copied(self):
        original = stats_for("a", games_played=3)
        store = PlayerStatsStore(existing=[original], player_ids=["a", "b"])
        store["a"].games_played += 1
        assert original.games_played == 3
        assert store["a"].games_played == 4
        assert len(store) == 2

    def test_duplicate_existing_keeps_first(self):
        store = PlayerStatsStore(
            existing=[stats_for("a", games_played=1), stats_for("a", games_played=9)]
        )
        assert store["a"].games_played == 1

    def test_snapshot_is_independent(self):
        store = PlayerStatsStore(player_ids=["a"])
        snapshot = store.snapshot()
        store["a"].games_played = 7
        assert snapshot[0].games_played == 0
        assert store.as_dict()["a"].games_played == 7


class TestStatsUpdater:
    """Counters after played games and sit-outs."""

    def test_record_game_counts_partners_and_opponents(self, empty_store):
        StatsUpdater(empty_store).record_game(_game())
        a = empty_store["a"]
        assert a.games_played == 1
        assert a.consecutive_games == 1
        assert a.partners == {"b": 1}
        assert a.opponents == {"c": 1, "d": 1}
        assert a.games_on_court == {"c1": 1}
        assert a.last_partner_id == "b"
        assert a.last_opponent_ids == ["c", "d"]
        d = empty_store["d"]
        assert d.partners == {"c": 1}
        assert d.last_opponent_ids == ["a", "b"]

    def test_last_fields_are_overwritten(self, empty_store):
        updater = StatsUpdater(empty_store)
        updater.record_game(_game())
        updater.record_game(_game("g2", serve=("a", "c"), receive=("b", "d")))
        a = empty_store["a"]
        assert a.games_played == 2
        assert a.partners == {"b": 1, "c": 1}
        assert a.opponents == {"c": 1, "d": 2, "b": 1}
        assert a.last_partner_id == "c"
        assert a.last_opponent_ids == ["b", "d"]

    def test_scores_are_added_per_side(self, empty_store):
        StatsUpdater(empty_store).record_game(_game(), Score(11, 6))
        assert empty_store["a"].total_score == 11
        assert empty_store["a"].total_score_against == 6
        assert empty_store["c"].total_score == 6
        assert empty_store["c"].total_score_against == 11

    def test_no_score_leaves_totals(self, empty_store):
        StatsUpdater(empty_store).record_game(_game())
        assert empty_store["a"].total_score == 0
        assert empty_store["a"].total_score_against == 0

    def test_fixed_partnership_games(self, empty_store):
        updater = StatsUpdater(empty_store, make_constraint(("a", "b")))
        updater.record_game(_game())
        assert empty_store["a"].fixed_partnership_games == 1
        assert empty_store["b"].fixed_partnership_games == 1
        assert empty_store["c"].fixed_partnership_games == 0

    def test_sit_out_resets_streak(self, empty_store):
        updater = StatsUpdater(empty_store)
        updater.record_game(_game())
        updater.record_game(_game("g2"))
        assert empty_store["a"].consecutive_games == 2
        updater.record_sit_outs(["a"])
        assert empty_store["a"].consecutive_games == 0
        assert empty_store["a"].games_sat_out == 1
        assert empty_store["a"].games_played == 2

    def test_record_round_returns_snapshot(self):
        store = PlayerStatsStore(player_ids=["a", "b", "c", "d", "e"])
        game = _game()
        snapshot = StatsUpdater(store).record_round(
            [game], Results(scores={"g1": Score(11, 9)}), ["e"]
        )
        by_id = {s.player_id: s for s in snapshot}
        assert by_id["a"].total_score == 11
        assert by_id["e"].games_sat_out == 1
        by_id["a"].games_played = 99
        assert store["a"].games_played == 1

    def test_missing_result_counts_without_score(self, empty_store):
        StatsUpdater(empty_store).record_round([_game()], Results(), [])
        assert empty_store["a"].games_played == 1
        assert empty_store["a"].total_score == 0
