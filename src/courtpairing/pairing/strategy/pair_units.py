"""Deterministic sit-out selection in whole units of two."""

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

from courtpairing.models import PartnerPair, PartnershipContext
from courtpairing.pairing.strategy.base import PlayerAssignmentStrategy
from courtpairing.type_hints import Players
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class PairUnitsPlayerAssignmentStrategy(PlayerAssignmentStrategy):
    """Sit out whole partnerships first, individuals for the remainder.

    With enforced partnerships, ``quota // 2`` pairs sit out, chosen by
    fewest combined sit-outs then most combined games. The odd player, and
    any shortfall when there are too few pairs, comes from the unpaired
    players by the usual fairness ranking. Without enforcement everyone is
    ranked as an individual.
    """

    name = "pair-units"

    def _pair_key(self, pair: PartnerPair):
        first, second = (self.stats.get(p.id) for p in pair.players)
        return (
            first.games_sat_out + second.games_sat_out,
            -(first.games_played + second.games_played),
            self.random_source.random(),
        )

    def select_sitting_out_players(
        self, context: PartnershipContext, slots_needed: int
    ) -> Players:
        quota = self.sit_out_count(context, slots_needed)
        if quota == 0:
            return []

        if not (self.enforce_all_pairings and context.pairs):
            return self.rank_for_sit_out(context.all_players)[:quota]

        ranked_pairs = sorted(context.pairs, key=self._pair_key)
        units = min(quota // 2, len(ranked_pairs))
        selected: Players = []
        for pair in ranked_pairs[:units]:
            selected.extend(pair.players)

        remainder = quota - len(selected)
        selected.extend(self.rank_for_sit_out(context.unpaired_players)[:remainder])
        if len(selected) < quota:
            logger.warning(
                "Only %d of %d sit-outs possible without splitting a partnership",
                len(selected),
                quota,
            )
        return selected
