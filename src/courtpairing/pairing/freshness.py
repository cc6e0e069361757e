"""Freshness score of a candidate round, lower is fresher."""

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

from itertools import combinations
from typing import Iterable

from courtpairing.constants import REPEAT_OPPONENT_PENALTY, REPEAT_PARTNER_PENALTY
from courtpairing.models import GameAssignment
from courtpairing.stats import PlayerStatsStore
from courtpairing.type_hints import PlayerId


class FreshnessScorer:
    """Score rounds against the historical stats.

    Every unordered pair of players in a game adds how often they met
    before, as partners or opponents. A pair repeating last round's
    relationship adds a surcharge that grows with the round number, since
    unseen pairings get scarcer as a session goes on.

    Parameters
    ----------
    stats : PlayerStatsStore
        Historical stats, only read.
    round_number : int
        Number of the round being generated.
    """

    def __init__(self, stats: PlayerStatsStore, round_number: int) -> None:
        self.stats = stats
        self.round_number = round_number

    @property
    def repeat_partner_penalty(self) -> int:
        return REPEAT_PARTNER_PENALTY + self.round_number

    @property
    def repeat_opponent_penalty(self) -> int:
        return REPEAT_OPPONENT_PENALTY + self.round_number

    def score_pair(
        self, player_a: PlayerId, player_b: PlayerId, teammates: bool
    ) -> int:
        stats = self.stats.get(player_a)
        score = stats.interactions(player_b)
        if teammates and stats.was_last_partner(player_b):
            score += self.repeat_partner_penalty
        elif not teammates and stats.was_last_opponent(player_b):
            score += self.repeat_opponent_penalty
        return score

    def score_game(self, game: GameAssignment) -> int:
        total = 0
        for player_a, player_b in combinations(game.player_ids, 2):
            teammates = game.teammate_of(player_a) == player_b
            total += self.score_pair(player_a, player_b, teammates)
        return total

    def score_round(self, game_assignments: Iterable[GameAssignment]) -> int:
        return sum(self.score_game(game) for game in game_assignments)
