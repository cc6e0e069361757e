"""Round generation: sit-outs, court selection and best-of-N trials."""

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

from typing import Iterable, List, Optional, Type

from courtpairing.constants import NUM_TRIALS, PLAYERS_PER_GAME
from courtpairing.exceptions import InvalidSessionError, RoundIndexError
from courtpairing.models import Game, Player, PlayerStats, Results, RoundAssignment
from courtpairing.pairing.freshness import FreshnessScorer
from courtpairing.pairing.partnership import build_partnership_context
from courtpairing.pairing.strategy import DEFAULT_STRATEGY, PlayerAssignmentStrategy
from courtpairing.session import Session, get_current_round_number
from courtpairing.stats import PlayerStatsStore, StatsUpdater
from courtpairing.type_hints import Players
from courtpairing.utils import Alerter, LoggingAlerter, RandomSource, setup_logger

logger = setup_logger(__name__)


class RoundAssigner:
    """Generate one round for a live session, then fold its results back.

    The assigner works on a snapshot: stats are copied out of the session
    when it is built and the session itself is never written to. Build one
    assigner per round and throw it away afterwards.

    Parameters
    ----------
    session : Session
        Session with live data. Its active courts, partnerships, round
        history and stats are read.
    players : iterable of Player
        The session roster, paused players included.
    paused_players : iterable of Player, optional
        Players not available this round.
    strategy_class : type of PlayerAssignmentStrategy, optional
        Sit-out strategy, fair-weighted by default.
    random_source : RandomSource, optional
        Source of every random decision, pass a seeded one for
        reproducible rounds.
    alerter : Alerter, optional
        Receives non-fatal data-quality alerts.
    num_trials : int, optional
        Independent candidate rounds generated per call.

    Raises
    ------
    InvalidSessionError
        When the session has no live data.
    """

    def __init__(
        self,
        session: Session,
        players: Iterable[Player],
        paused_players: Iterable[Player] = (),
        strategy_class: Type[PlayerAssignmentStrategy] = DEFAULT_STRATEGY,
        random_source: Optional[RandomSource] = None,
        alerter: Optional[Alerter] = None,
        num_trials: int = NUM_TRIALS,
    ) -> None:
        if session.live_data is None:
            raise InvalidSessionError(
                f"Invalid session: missing required live data. session: {session.name}"
            )
        if num_trials < 1:
            raise ValueError(f"num_trials must be at least 1, got {num_trials}")
        self.session = session
        self.live_data = session.live_data
        self.active_courts = session.active_courts
        self.players: Players = list(players)
        paused_ids = {p.id for p in paused_players}
        self.available_players: Players = [
            p for p in self.players if p.id not in paused_ids
        ]
        self.random_source = random_source or RandomSource()
        self.alerter = alerter or LoggingAlerter()
        self.num_trials = num_trials
        self.round_number = get_current_round_number(session, live=False) + 1

        self.stats = PlayerStatsStore(
            self.live_data.player_stats, (p.id for p in self.players)
        )
        self.partnership_context = build_partnership_context(
            self.available_players,
            session.partnership_constraint,
            self.alerter,
            roster=self.players,
        )
        self.strategy = strategy_class(
            self.active_courts,
            self.stats,
            session.partnership_constraint,
            self.random_source,
        )
        self.trial_scores: List[int] = []

    @property
    def slots_needed(self) -> int:
        return len(self.active_courts) * PLAYERS_PER_GAME

    def generate_round_assignment(
        self, sitting_out: Optional[Iterable[Player]] = None
    ) -> RoundAssignment:
        """Generate the next round.

        The pipeline runs ``num_trials`` times and the candidate with the
        lowest freshness score wins; the first one wins ties. Scores of
        every trial are kept in :attr:`trial_scores`.

        Parameters
        ----------
        sitting_out : iterable of Player, optional
            Players forced to sit out, bypassing the sit-out strategy.

        Returns
        -------
        RoundAssignment
            Possibly without games when no court can be filled; every
            available player is then sitting out.
        """
        self.trial_scores = []
        if not self.available_players:
            logger.info("No available players for round %d", self.round_number)
            return RoundAssignment(round_number=self.round_number)

        forced = self._forced_sit_outs(sitting_out) if sitting_out is not None else None
        scorer = FreshnessScorer(self.stats, self.round_number)
        best: Optional[RoundAssignment] = None
        best_score = 0
        for trial in range(self.num_trials):
            candidate = self._run_trial(forced)
            score = scorer.score_round(candidate.game_assignments)
            self.trial_scores.append(score)
            logger.debug("Round %d trial %d scored %d", self.round_number, trial, score)
            if best is None or score < best_score:
                best, best_score = candidate, score

        logger.info(
            "Round %d: %d games, %d sitting out, freshness %d",
            self.round_number,
            len(best.game_assignments),
            len(best.sitting_out_ids),
            best_score,
        )
        return best

    def _forced_sit_outs(self, sitting_out: Iterable[Player]) -> Players:
        available_ids = {p.id for p in self.available_players}
        forced: Players = []
        for player in sitting_out:
            if player.id not in available_ids:
                logger.warning("Ignoring forced sit-out of unavailable %s", player.name)
            elif player not in forced:
                forced.append(player)
        return forced

    def _run_trial(self, forced: Optional[Players]) -> RoundAssignment:
        if forced is None:
            sitting_out = self.strategy.select_sitting_out_players(
                self.partnership_context, self.slots_needed
            )
        else:
            sitting_out = forced
        sitting_out_ids = [p.id for p in sitting_out]
        benched = set(sitting_out_ids)
        playing = [p for p in self.available_players if p.id not in benched]

        games, unplaced = self.strategy.assign_players_to_courts(
            playing, self.partnership_context
        )
        if unplaced:
            logger.debug(
                "No court for %s, sitting out", ", ".join(p.name for p in unplaced)
            )
        sitting_out_ids.extend(p.id for p in unplaced)
        return RoundAssignment(
            round_number=self.round_number,
            game_assignments=games,
            sitting_out_ids=sitting_out_ids,
        )

    def update_stats_for_round(
        self,
        games: List[Game],
        results: Results,
        round_index: Optional[int] = None,
    ) -> List[PlayerStats]:
        """Record a played round and return every player's updated stats.

        Sit-outs are taken from the stored round holding ``games``, or from
        ``round_index`` when given. Without either, the latest round is used.

        Raises
        ------
        RoundIndexError
            When the session has no rounds or ``round_index`` is out of range.
        """
        rounds = self.live_data.rounds
        if not rounds:
            raise RoundIndexError("cannot update stats, session has no rounds")
        if round_index is None:
            round_index = len(rounds) - 1
            if games:
                for index, stored in enumerate(rounds):
                    if stored.has_game(games[0].id):
                        round_index = index
                        break
        elif not 0 <= round_index < len(rounds):
            raise RoundIndexError(
                f"round index {round_index} out of range, "
                f"session has {len(rounds)} rounds"
            )

        updater = StatsUpdater(self.stats, self.session.partnership_constraint)
        return updater.record_round(games, results, rounds[round_index].sitting_out_ids)

    def get_player_stats(self) -> List[PlayerStats]:
        """Copies of the current stats of every known player."""
        return self.stats.snapshot()
