"""Tests for round assignment validation."""

from courtpairing.models import GameAssignment, RoundAssignment, Team
from courtpairing.validation import (
    AssignmentChecker,
    CriterionStatus,
    ViolationType,
    validate_round_assignment,
)

from conftest import make_constraint, make_court, make_courts, make_players, stats_for


def _assignment(*teams, sitting_out=(), court_ids=None):
    games = []
    for index in range(0, len(teams), 2):
        court_id = court_ids[index // 2] if court_ids else f"court_{index // 2 + 1}"
        serve, receive = Team(*teams[index]), Team(*teams[index + 1])
        games.append(GameAssignment(court_id, serve, receive))
    return RoundAssignment(
        round_number=1, game_assignments=games, sitting_out_ids=list(sitting_out)
    )


class TestValidateRoundAssignment:
    def test_valid_round(self):
        players = make_players(5)
        assignment = _assignment(("p1", "p2"), ("p3", "p4"), sitting_out=["p5"])
        report = validate_round_assignment(assignment, players, make_courts(1))
        assert report.is_valid
        assert report.summary == "Round valid, 0 warnings"

    def test_missing_player(self):
        players = make_players(5)
        assignment = _assignment(("p1", "p2"), ("p3", "p4"))
        report = validate_round_assignment(assignment, players, make_courts(1))
        assert not report.is_valid
        assert report.violations[0].criterion == "conservation"
        assert report.violations[0].details["missing"] == ["p5"]

    def test_player_twice(self):
        players = make_players(4)
        assignment = _assignment(("p1", "p2"), ("p3", "p1"), sitting_out=["p4"])
        report = validate_round_assignment(assignment, players, make_courts(1))
        criteria = {r.criterion for r in report.violations}
        assert "distinct_players" in criteria

    def test_inactive_court(self):
        players = make_players(4)
        courts = [make_court("Court 1", is_active=False)]
        assignment = _assignment(("p1", "p2"), ("p3", "p4"))
        report = validate_round_assignment(assignment, players, courts)
        assert [r.criterion for r in report.violations] == ["courts"]

    def test_rating_gate(self):
        players = make_players(4, rating=3.0)
        courts = [make_court("Court 1", minimum_rating=4.0)]
        assignment = _assignment(("p1", "p2"), ("p3", "p4"))
        report = validate_round_assignment(assignment, players, courts)
        assert [r.criterion for r in report.violations] == ["rating_gates"]
        assert len(report.violations[0].details["offenders"]) == 4

    def test_split_partnership(self):
        players = make_players(4)
        assignment = _assignment(("p1", "p3"), ("p2", "p4"))
        report = validate_round_assignment(
            assignment, players, make_courts(1), make_constraint(("p1", "p2"))
        )
        assert [r.criterion for r in report.violations] == ["partnerships"]

    def test_unenforced_partnership_not_checked(self):
        players = make_players(4)
        assignment = _assignment(("p1", "p3"), ("p2", "p4"))
        report = validate_round_assignment(
            assignment,
            players,
            make_courts(1),
            make_constraint(("p1", "p2"), enforce=False),
        )
        assert report.is_valid
        statuses = {r.criterion: r.status for r in report.criteria_results}
        assert statuses["partnerships"] == CriterionStatus.NOT_APPLICABLE

    def test_pair_sitting_out_together_is_fine(self):
        players = make_players(6)
        assignment = _assignment(("p3", "p4"), ("p5", "p6"), sitting_out=["p1", "p2"])
        report = validate_round_assignment(
            assignment, players, make_courts(1), make_constraint(("p1", "p2"))
        )
        assert report.is_valid

    def test_repeat_partner_is_a_warning(self):
        players = make_players(4)
        assignment = _assignment(("p1", "p2"), ("p3", "p4"))
        report = validate_round_assignment(
            assignment,
            players,
            make_courts(1),
            stats=[stats_for("p1", last_partner_id="p2")],
        )
        assert report.is_valid
        assert len(report.warnings) == 1
        assert report.warnings[0].violation_type == ViolationType.WARNING


class TestAssignmentChecker:
    def test_two_games_on_one_court(self):
        assignment = _assignment(
            ("p1", "p2"),
            ("p3", "p4"),
            ("p5", "p6"),
            ("p7", "p8"),
            court_ids=["court_1", "court_1"],
        )
        result = AssignmentChecker().check_courts(assignment, make_courts(2))
        assert result.is_violation
        assert result.details["courts"] == ["court_1"]

    def test_empty_round_is_conserving(self):
        assignment = _assignment(sitting_out=["p1", "p2", "p3"])
        result = AssignmentChecker().check_conservation(assignment, ["p1", "p2", "p3"])
        assert result.status == CriterionStatus.COMPLIANT
