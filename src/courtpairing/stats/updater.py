"""Fold the outcome of a played round back into player stats."""

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

from typing import Iterable, List, Optional

from courtpairing.models import Game, PartnershipConstraint, PlayerStats, Results, Score
from courtpairing.stats.store import PlayerStatsStore
from courtpairing.type_hints import PlayerId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class StatsUpdater:
    """Apply played games and sit-outs to a :class:`PlayerStatsStore`.

    Parameters
    ----------
    store : PlayerStatsStore
        The stats to mutate.
    partnership_constraint : PartnershipConstraint, optional
        Used only to count games played with a fixed partner.
    """

    def __init__(
        self,
        store: PlayerStatsStore,
        partnership_constraint: Optional[PartnershipConstraint] = None,
    ) -> None:
        self.store = store
        self.partnership_constraint = partnership_constraint

    def record_game(self, game: Game, score: Optional[Score] = None) -> None:
        """Count one game for each of its four players.

        ``last_partner_id`` and ``last_opponent_ids`` are overwritten, every
        other counter accumulates. Scores are only added when ``score`` is
        given.
        """
        for player_id in game.player_ids:
            stats = self.store.get(player_id)
            stats.games_played += 1
            stats.consecutive_games += 1

            teammate_id = game.teammate_of(player_id)
            if teammate_id is not None:
                stats.partners[teammate_id] = stats.partner_count(teammate_id) + 1
                if self._is_fixed_partnership(player_id, teammate_id):
                    stats.fixed_partnership_games += 1
                stats.last_partner_id = teammate_id

            opponent_ids = game.opponents_of(player_id)
            for opponent_id in opponent_ids:
                stats.opponents[opponent_id] = stats.opponent_count(opponent_id) + 1
            stats.last_opponent_ids = opponent_ids

            stats.games_on_court[game.court_id] = stats.court_games(game.court_id) + 1

            if score is not None:
                points_for, points_against = score.for_side(game.is_serving(player_id))
                stats.total_score += points_for
                stats.total_score_against += points_against

    def record_sit_outs(self, sitting_out_ids: Iterable[PlayerId]) -> None:
        for player_id in sitting_out_ids:
            stats = self.store.get(player_id)
            stats.games_sat_out += 1
            stats.consecutive_games = 0

    def record_round(
        self,
        games: Iterable[Game],
        results: Results,
        sitting_out_ids: Iterable[PlayerId],
    ) -> List[PlayerStats]:
        """Record a whole round and return a snapshot of the updated stats.

        A game missing from ``results``, or mapped to ``None``, counts as
        played without a score.
        """
        games = list(games)
        sitting_out_ids = list(sitting_out_ids)
        for game in games:
            self.record_game(game, results.score_for(game.id))
        self.record_sit_outs(sitting_out_ids)
        logger.info(
            "Recorded %d games and %d sit-outs", len(games), len(sitting_out_ids)
        )
        return self.store.snapshot()

    def _is_fixed_partnership(self, player_a: PlayerId, player_b: PlayerId) -> bool:
        if self.partnership_constraint is None:
            return False
        return self.partnership_constraint.is_fixed_partnership(player_a, player_b)
