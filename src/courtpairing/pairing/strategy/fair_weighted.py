"""Fair-weighted sit-out selection, the default strategy."""

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

from typing import Dict, Set

from courtpairing.models import PartnershipContext, Player
from courtpairing.pairing.strategy.base import PlayerAssignmentStrategy
from courtpairing.type_hints import PlayerId, Players
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class FairWeightedPlayerAssignmentStrategy(PlayerAssignmentStrategy):
    """Rank everyone together by fairness and walk the ranking.

    Paired and unpaired players share one ranking. A paired player brings
    the partner along when both fit in the quota. With a single slot left
    an enforced pair is skipped, an unenforced one is split and only the
    higher ranked member sits out.
    """

    name = "fair-weighted"

    def select_sitting_out_players(
        self, context: PartnershipContext, slots_needed: int
    ) -> Players:
        quota = self.sit_out_count(context, slots_needed)
        if quota == 0:
            return []

        players = context.all_players
        by_id: Dict[PlayerId, Player] = {p.id: p for p in players}
        selected: Players = []
        processed: Set[PlayerId] = set()

        for player in self.rank_for_sit_out(players):
            if len(selected) >= quota:
                break
            if player.id in processed:
                continue

            partner = by_id.get(context.partner_of(player.id) or "")
            if partner is None:
                selected.append(player)
                processed.add(player.id)
                continue

            if len(selected) + 2 <= quota:
                selected.extend((player, partner))
                processed.update((player.id, partner.id))
            elif self.enforce_all_pairings:
                logger.debug(
                    "No room to sit out %s and %s together, skipping",
                    player.name,
                    partner.name,
                )
                processed.update((player.id, partner.id))
            else:
                selected.append(player)
                processed.add(player.id)

        selected = self.trim_excess(selected, quota, context)
        logger.info(
            "Sitting out: %s", ", ".join(p.name for p in selected) or "nobody"
        )
        return selected
