"""Checks that a generated round respects the engine's hard rules."""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from courtpairing.constants import PLAYERS_PER_GAME
from courtpairing.models import (
    Court,
    PartnershipConstraint,
    Player,
    PlayerStats,
    RoundAssignment,
)
from courtpairing.type_hints import PlayerId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    ABSOLUTE = "ABSOLUTE"  # the round must not be used
    WARNING = "WARNING"  # legal but stale


@dataclass
class CriterionResult:
    """Outcome of one check."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def is_violation(self) -> bool:
        return self.status == CriterionStatus.VIOLATION


@dataclass
class ValidationReport:
    """All check results for one round."""

    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def violations(self) -> List[CriterionResult]:
        return [
            r
            for r in self.criteria_results
            if r.is_violation and r.violation_type == ViolationType.ABSOLUTE
        ]

    @property
    def warnings(self) -> List[CriterionResult]:
        return [
            r
            for r in self.criteria_results
            if r.is_violation and r.violation_type == ViolationType.WARNING
        ]

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def summary(self) -> str:
        if self.is_valid:
            return f"Round valid, {len(self.warnings)} warnings"
        return "; ".join(r.description for r in self.violations)


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion, status=CriterionStatus.COMPLIANT, description=description
    )


def _violation(
    criterion: str,
    description: str,
    details: Dict[str, object],
    violation_type: ViolationType = ViolationType.ABSOLUTE,
) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.VIOLATION,
        violation_type=violation_type,
        description=description,
        details=details,
    )


class AssignmentChecker:
    """Individual checks, each returning a :class:`CriterionResult`."""

    def check_conservation(
        self, assignment: RoundAssignment, available_ids: List[PlayerId]
    ) -> CriterionResult:
        """Every available player plays or sits out, nobody else appears."""
        placed = assignment.playing_ids + list(assignment.sitting_out_ids)
        expected = PLAYERS_PER_GAME * len(assignment.game_assignments) + len(
            assignment.sitting_out_ids
        )
        missing = sorted(set(available_ids) - set(placed))
        unknown = sorted(set(placed) - set(available_ids))
        if missing or unknown or expected != len(available_ids):
            return _violation(
                "conservation",
                f"{len(available_ids)} available players, {expected} placed",
                {"missing": missing, "unknown": unknown},
            )
        return _compliant("conservation", "Every available player placed once")

    def check_distinct_players(self, assignment: RoundAssignment) -> CriterionResult:
        """No player is placed twice, on court or on the bench."""
        counts = Counter(assignment.playing_ids + list(assignment.sitting_out_ids))
        duplicates = sorted(pid for pid, count in counts.items() if count > 1)
        if duplicates:
            return _violation(
                "distinct_players",
                f"Players placed more than once: {', '.join(duplicates)}",
                {"players": duplicates},
            )
        return _compliant("distinct_players", "No player placed twice")

    def check_courts(
        self, assignment: RoundAssignment, courts: List[Court]
    ) -> CriterionResult:
        """Games use active courts, at most one game per court."""
        active_ids = {c.id for c in courts if c.is_active}
        used = Counter(g.court_id for g in assignment.game_assignments)
        bad = sorted(
            cid for cid, count in used.items() if cid not in active_ids or count > 1
        )
        if bad:
            return _violation(
                "courts", f"Invalid court usage: {', '.join(bad)}", {"courts": bad}
            )
        return _compliant("courts", "Each game on its own active court")

    def check_rating_gates(
        self,
        assignment: RoundAssignment,
        players: Dict[PlayerId, Player],
        courts: List[Court],
    ) -> CriterionResult:
        """Players on a rated court meet its minimum rating."""
        by_id = {c.id: c for c in courts}
        offenders = []
        for game in assignment.game_assignments:
            court = by_id.get(game.court_id)
            if court is None or not court.is_rated:
                continue
            for player_id in game.player_ids:
                player = players.get(player_id)
                if player is None or not court.accepts(player):
                    offenders.append({"court": court.name, "player": player_id})
        if offenders:
            return _violation(
                "rating_gates",
                f"{len(offenders)} players below their court's minimum rating",
                {"offenders": offenders},
            )
        return _compliant("rating_gates", "All rated courts respected")

    def check_partnerships(
        self,
        assignment: RoundAssignment,
        available_ids: List[PlayerId],
        constraint: Optional[PartnershipConstraint],
    ) -> CriterionResult:
        """Enforced partnerships share a team or sit out together."""
        if constraint is None or not constraint.enforce_all_pairings:
            return CriterionResult(
                criterion="partnerships",
                status=CriterionStatus.NOT_APPLICABLE,
                description="Partnerships not enforced",
            )
        available = set(available_ids)
        sitting = set(assignment.sitting_out_ids)
        split = []
        for partnership in constraint.active_partnerships():
            p1, p2 = partnership.player1_id, partnership.player2_id
            if p1 not in available or p2 not in available:
                continue
            if p1 in sitting and p2 in sitting:
                continue
            together = any(
                game.teammate_of(p1) == p2 for game in assignment.game_assignments
            )
            if not together:
                split.append(partnership.id)
        if split:
            return _violation(
                "partnerships",
                f"Split partnerships: {', '.join(split)}",
                {"partnerships": split},
            )
        return _compliant("partnerships", "No enforced partnership split")

    def check_repeat_partners(
        self, assignment: RoundAssignment, stats: Dict[PlayerId, PlayerStats]
    ) -> CriterionResult:
        """Teams that also played together in their previous game."""
        repeats = []
        for game in assignment.game_assignments:
            for team in (game.serve_team, game.receive_team):
                first = stats.get(team.player1_id)
                if first is not None and first.was_last_partner(team.player2_id):
                    repeats.append(list(team.player_ids))
        if repeats:
            return _violation(
                "repeat_partners",
                f"{len(repeats)} teams repeat their last partnership",
                {"teams": repeats},
                ViolationType.WARNING,
            )
        return _compliant("repeat_partners", "No team repeats its last partnership")


def validate_round_assignment(
    assignment: RoundAssignment,
    available_players: Iterable[Player],
    courts: Iterable[Court],
    partnership_constraint: Optional[PartnershipConstraint] = None,
    stats: Optional[Iterable[PlayerStats]] = None,
) -> ValidationReport:
    """Run every check on ``assignment``.

    Parameters
    ----------
    assignment : RoundAssignment
        The round to check.
    available_players : iterable of Player
        Players that were available, paused players excluded.
    courts : iterable of Court
        The session's courts.
    partnership_constraint : PartnershipConstraint, optional
        Checked only when partnerships are enforced.
    stats : iterable of PlayerStats, optional
        Stats the round was generated from, enables the repeat-partner
        warning.

    Returns
    -------
    ValidationReport
        Results of every check.
    """
    players = {p.id: p for p in available_players}
    available_ids = list(players)
    courts = list(courts)
    checker = AssignmentChecker()

    results = [
        checker.check_conservation(assignment, available_ids),
        checker.check_distinct_players(assignment),
        checker.check_courts(assignment, courts),
        checker.check_rating_gates(assignment, players, courts),
        checker.check_partnerships(assignment, available_ids, partnership_constraint),
    ]
    if stats is not None:
        results.append(
            checker.check_repeat_partners(assignment, {s.player_id: s for s in stats})
        )

    report = ValidationReport(criteria_results=results)
    if not report.is_valid:
        logger.error("Round %d invalid: %s", assignment.round_number, report.summary)
    return report
