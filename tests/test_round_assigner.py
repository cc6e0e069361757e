"""End-to-end tests for round generation and stats updates."""

import pytest

from courtpairing.exceptions import InvalidSessionError, RoundIndexError
from courtpairing.models import Results
from courtpairing.pairing import FreshnessScorer, RoundAssigner, StrategyKind
from courtpairing.session import append_round, complete_round
from courtpairing.utils import RandomSource

from conftest import (
    make_constraint,
    make_court,
    make_courts,
    make_player,
    make_players,
    make_session,
    stats_for,
)


def _assigner(session, players, seed=11, **kwargs):
    return RoundAssigner(session, players, random_source=RandomSource(seed), **kwargs)


def _check_invariants(assignment, available, courts, constraint=None):
    available_ids = {p.id for p in available}
    playing = assignment.playing_ids
    sitting = assignment.sitting_out_ids

    assert 4 * len(assignment.game_assignments) + len(sitting) == len(available)
    assert len(set(playing)) == len(playing)
    assert len(set(sitting)) == len(sitting)
    assert not set(playing) & set(sitting)
    assert set(playing) | set(sitting) == available_ids

    by_id = {p.id: p for p in available}
    courts_by_id = {c.id: c for c in courts}
    for game in assignment.game_assignments:
        court = courts_by_id[game.court_id]
        assert court.is_active
        for player_id in game.player_ids:
            assert court.accepts(by_id[player_id])

    if constraint is None or not constraint.enforce_all_pairings:
        return
    teams = set()
    for game in assignment.game_assignments:
        teams.add(frozenset(game.serve_team.player_ids))
        teams.add(frozenset(game.receive_team.player_ids))
    for partnership in constraint.active_partnerships():
        pair = {partnership.player1_id, partnership.player2_id}
        if not pair <= available_ids:
            continue
        assert frozenset(pair) in teams or pair <= set(sitting)


class TestScenarios:
    def test_two_full_courts(self):
        players = make_players(8)
        session = make_session(players, make_courts(2))
        assignment = _assigner(session, players).generate_round_assignment()
        assert len(assignment.game_assignments) == 2
        assert assignment.sitting_out_ids == []
        assert sorted(assignment.playing_ids) == sorted(p.id for p in players)

    def test_rated_court_without_enough_players(self):
        players = [make_player("Hi1", 4.5), make_player("Hi2", 4.0)] + [
            make_player(f"Lo{i}", 3.0) for i in range(6)
        ]
        courts = [make_court("Court 1", minimum_rating=4.0), make_court("Court 2")]
        session = make_session(players, courts)
        assignment = _assigner(session, players).generate_round_assignment()
        assert [g.court_id for g in assignment.game_assignments] == ["court_2"]
        assert len(assignment.sitting_out_ids) == 4
        _check_invariants(assignment, players, courts)

    def test_extra_players_sit_out(self):
        players = make_players(10)
        session = make_session(players, make_courts(2))
        assignment = _assigner(session, players).generate_round_assignment()
        assert len(assignment.game_assignments) == 2
        assert len(assignment.sitting_out_ids) == 2

    @pytest.mark.parametrize("seed", range(10))
    def test_enforced_partners_on_same_team(self, seed):
        players = [make_player(name) for name in ("A", "B", "C", "D")]
        constraint = make_constraint(("a", "b"))
        session = make_session(players, make_courts(1), constraint)
        assignment = _assigner(session, players, seed).generate_round_assignment()
        game = assignment.game_assignments[0]
        assert game.teammate_of("a") == "b"

    def test_everyone_paused(self):
        players = make_players(8)
        session = make_session(players, make_courts(2))
        assigner = _assigner(session, players, paused_players=players)
        assignment = assigner.generate_round_assignment()
        assert assignment.game_assignments == []
        assert assignment.sitting_out_ids == []

    def test_best_trial_wins(self):
        players = make_players(10)
        stats = [
            stats_for("p1", partners={"p2": 3}, last_partner_id="p2"),
            stats_for("p3", opponents={"p4": 2}, last_opponent_ids=["p4", "p5"]),
        ]
        session = make_session(players, make_courts(2), stats=stats)
        assigner = _assigner(session, players)
        assignment = assigner.generate_round_assignment()
        assert len(assigner.trial_scores) == 3
        scorer = FreshnessScorer(assigner.stats, assigner.round_number)
        chosen = scorer.score_round(assignment.game_assignments)
        assert chosen == min(assigner.trial_scores)


class TestInvariants:
    @pytest.mark.parametrize("kind", list(StrategyKind))
    @pytest.mark.parametrize("seed", range(8))
    def test_mixed_roster(self, kind, seed):
        players = (
            [make_player(f"R{i}", 4.5) for i in range(5)]
            + [make_player(f"M{i}", 3.0) for i in range(5)]
            + [make_player(f"U{i}") for i in range(3)]
        )
        courts = [
            make_court("Court 1"),
            make_court("Court 2", minimum_rating=4.0),
            make_court("Court 3"),
            make_court("Court 4", is_active=False),
        ]
        constraint = make_constraint(("r0", "r1"), ("m0", "u0"), ("r2", "m1"))
        session = make_session(players, courts, constraint)
        assigner = _assigner(
            session, players, seed, strategy_class=kind.strategy_class
        )
        assignment = assigner.generate_round_assignment()
        _check_invariants(assignment, players, courts, constraint)

    @pytest.mark.parametrize("kind", list(StrategyKind))
    @pytest.mark.parametrize("seed", range(5))
    def test_odd_roster_with_pairs(self, kind, seed):
        players = make_players(11)
        constraint = make_constraint(("p1", "p2"), ("p3", "p4"), ("p5", "p6"))
        courts = make_courts(2)
        session = make_session(players, courts, constraint)
        assignment = _assigner(
            session, players, seed, strategy_class=kind.strategy_class
        ).generate_round_assignment()
        _check_invariants(assignment, players, courts, constraint)

    @pytest.mark.parametrize("kind", list(StrategyKind))
    @pytest.mark.parametrize("seed", range(20))
    def test_enforced_pairs_fill_every_court(self, kind, seed):
        players = make_players(9)
        constraint = make_constraint(("p1", "p2"), ("p3", "p4"), ("p5", "p6"))
        courts = make_courts(2)
        session = make_session(players, courts, constraint)
        assignment = _assigner(
            session, players, seed, strategy_class=kind.strategy_class
        ).generate_round_assignment()
        _check_invariants(assignment, players, courts, constraint)
        assert len(assignment.game_assignments) == 2
        assert len(assignment.sitting_out_ids) == 1
        assert set(assignment.sitting_out_ids) <= {"p7", "p8", "p9"}

    def test_fewer_than_four_players(self):
        players = make_players(3)
        courts = make_courts(1)
        session = make_session(players, courts)
        assignment = _assigner(session, players).generate_round_assignment()
        assert assignment.is_empty
        assert sorted(assignment.sitting_out_ids) == ["p1", "p2", "p3"]

    def test_paused_players_are_left_out(self):
        players = make_players(9)
        courts = make_courts(2)
        session = make_session(players, courts)
        assigner = _assigner(session, players, paused_players=players[:1])
        assignment = assigner.generate_round_assignment()
        assert "p1" not in assignment.playing_ids
        assert "p1" not in assignment.sitting_out_ids
        _check_invariants(assignment, players[1:], courts)

    def test_paused_partner_leaves_the_other_unpaired(self, alerter):
        players = make_players(8)
        constraint = make_constraint(("p1", "p2"))
        courts = make_courts(2)
        session = make_session(players, courts, constraint)
        assigner = _assigner(
            session, players, paused_players=players[1:2], alerter=alerter
        )
        assert not assigner.partnership_context.is_paired("p1")
        assignment = assigner.generate_round_assignment()
        _check_invariants(assignment, players[:1] + players[2:], courts)
        assert alerter.alerts == []

    def test_same_seed_same_round(self):
        players = make_players(13)
        session = make_session(players, make_courts(3))
        first = _assigner(session, players, 5).generate_round_assignment()
        second = _assigner(session, players, 5).generate_round_assignment()
        assert first == second


class TestConstruction:
    def test_missing_live_data(self):
        players = make_players(4)
        session = make_session(players, make_courts(1))
        session.live_data = None
        with pytest.raises(InvalidSessionError):
            RoundAssigner(session, players)

    def test_trials_must_be_positive(self):
        players = make_players(4)
        session = make_session(players, make_courts(1))
        with pytest.raises(ValueError):
            RoundAssigner(session, players, num_trials=0)

    def test_round_number_is_the_round_being_generated(self):
        players = make_players(4)
        session = make_session(players, make_courts(1))
        assigner = _assigner(session, players)
        assert assigner.round_number == 1
        append_round(session, assigner.generate_round_assignment())
        assert _assigner(session, players).round_number == 2

    def test_stats_seeding_is_idempotent(self):
        players = make_players(6)
        stats = [stats_for("p1", games_played=2, partners={"p2": 2})]
        session = make_session(players, make_courts(1), stats=stats)
        first = _assigner(session, players).get_player_stats()
        second = _assigner(session, players).get_player_stats()
        assert first == second
        assert len(first) == 6
        assert session.live_data.player_stats == stats

    def test_generation_does_not_touch_session(self):
        players = make_players(10)
        session = make_session(players, make_courts(2))
        before = session.to_dict()
        _assigner(session, players).generate_round_assignment()
        assert session.to_dict() == before

    def test_bad_partnership_alerts_and_continues(self, alerter):
        players = make_players(8)
        constraint = make_constraint(("p1", "ghost"))
        session = make_session(players, make_courts(2), constraint)
        assigner = _assigner(session, players, alerter=alerter)
        assignment = assigner.generate_round_assignment()
        assert len(assignment.game_assignments) == 2
        assert alerter.alerts == [
            ("Error", "Partnership has invalid data: p1 / ghost")
        ]


class TestForcedSitOuts:
    def test_forced_players_sit_out(self):
        players = make_players(10)
        session = make_session(players, make_courts(2))
        assignment = _assigner(session, players).generate_round_assignment(
            sitting_out=players[:2]
        )
        assert assignment.sitting_out_ids == ["p1", "p2"]
        assert len(assignment.game_assignments) == 2

    def test_unknown_forced_player_is_ignored(self):
        players = make_players(8)
        session = make_session(players, make_courts(2))
        assignment = _assigner(session, players).generate_round_assignment(
            sitting_out=[make_player("Stranger")]
        )
        assert assignment.sitting_out_ids == []
        assert len(assignment.game_assignments) == 2

    def test_too_few_forced_leaves_extras_unplaced(self):
        players = make_players(10)
        session = make_session(players, make_courts(2))
        assignment = _assigner(session, players).generate_round_assignment(
            sitting_out=players[:1]
        )
        assert assignment.sitting_out_ids[0] == "p1"
        assert len(assignment.sitting_out_ids) == 2
        _check_invariants(assignment, players, make_courts(2))


class TestUpdateStats:
    def _play_round(self, session, players, seed):
        assigner = _assigner(session, players, seed)
        stored = append_round(session, assigner.generate_round_assignment())
        updated = assigner.update_stats_for_round(
            stored.games, Results.scoreless(stored.games)
        )
        complete_round(session, None, updated)
        return stored, {s.player_id: s for s in updated}

    def test_played_and_sat_out_counters(self):
        players = make_players(10)
        session = make_session(players, make_courts(2))
        stored, stats = self._play_round(session, players, 1)
        for player_id in stored.sitting_out_ids:
            assert stats[player_id].games_sat_out == 1
            assert stats[player_id].games_played == 0
        for game in stored.games:
            for player_id in game.player_ids:
                assert stats[player_id].games_played == 1
                assert stats[player_id].last_partner_id == game.teammate_of(player_id)

    def test_sit_outs_rotate_fairly(self):
        players = make_players(10)
        session = make_session(players, make_courts(2))
        previous = {p.id: 0 for p in players}
        for seed in range(5):
            stored, stats = self._play_round(session, players, seed)
            for player in players:
                expected = previous[player.id] + (
                    1 if player.id in stored.sitting_out_ids else 0
                )
                assert stats[player.id].games_sat_out == expected
                previous[player.id] = expected
            counts = [s.games_sat_out for s in stats.values()]
            assert max(counts) - min(counts) <= 1
        assert set(previous.values()) == {1}

    def test_explicit_round_index(self):
        players = make_players(10)
        session = make_session(players, make_courts(2))
        first, _ = self._play_round(session, players, 1)
        self._play_round(session, players, 2)
        assigner = _assigner(session, players)
        updated = assigner.update_stats_for_round(
            first.games, Results.scoreless(first.games), round_index=0
        )
        by_id = {s.player_id: s for s in updated}
        for player_id in first.sitting_out_ids:
            assert by_id[player_id].games_sat_out >= 2

    def test_no_rounds(self):
        players = make_players(4)
        session = make_session(players, make_courts(1))
        with pytest.raises(RoundIndexError):
            _assigner(session, players).update_stats_for_round([], Results())

    def test_round_index_out_of_range(self):
        players = make_players(4)
        session = make_session(players, make_courts(1))
        self._play_round(session, players, 1)
        with pytest.raises(RoundIndexError):
            _assigner(session, players).update_stats_for_round(
                [], Results(), round_index=3
            )

    def test_round_index_error_is_an_index_error(self):
        assert issubclass(RoundIndexError, IndexError)
