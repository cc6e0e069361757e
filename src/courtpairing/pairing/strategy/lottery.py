"""Weighted-lottery sit-out selection."""

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

from collections import defaultdict
from typing import Dict, List, Set

from courtpairing.constants import LOTTERY_PAIRED_WEIGHT, LOTTERY_UNPAIRED_WEIGHT
from courtpairing.models import PartnershipContext, Player
from courtpairing.pairing.strategy.base import PlayerAssignmentStrategy
from courtpairing.type_hints import PlayerId, Players
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class LotteryPlayerAssignmentStrategy(PlayerAssignmentStrategy):
    """Draw sit-outs by weighted lottery, one fairness group at a time.

    Players are grouped by ``games_sat_out - games_played`` and groups are
    drawn lowest first. Inside a group unpaired players are twice as likely
    to be drawn as paired ones, and a drawn paired player takes the
    partner along. With enforced partnerships the last open slot is only
    drawn from unpaired players, so the quota is overshot only when no
    unpaired player is left in any group. Any overshoot is undone in
    reverse draw order.
    """

    name = "lottery"

    def select_sitting_out_players(
        self, context: PartnershipContext, slots_needed: int
    ) -> Players:
        quota = self.sit_out_count(context, slots_needed)
        if quota == 0:
            return []

        players = context.all_players
        by_id: Dict[PlayerId, Player] = {p.id: p for p in players}
        groups: Dict[int, Players] = defaultdict(list)
        for player in players:
            stats = self.stats.get(player.id)
            groups[stats.games_sat_out - stats.games_played].append(player)

        selected: Players = []
        taken: Set[PlayerId] = set()
        for allow_overshoot in (False, True):
            for score in sorted(groups):
                if len(selected) >= quota:
                    break
                group = [p for p in groups[score] if p.id not in taken]
                self._run_lottery(
                    group, quota, context, by_id, selected, taken, allow_overshoot
                )

        if len(selected) > quota:
            selected = self._remove_excess(selected, quota, context)
        logger.info(
            "Lottery sit-outs: %s", ", ".join(p.name for p in selected) or "nobody"
        )
        return selected

    def _run_lottery(
        self,
        group: Players,
        quota: int,
        context: PartnershipContext,
        by_id: Dict[PlayerId, Player],
        selected: Players,
        taken: Set[PlayerId],
        allow_overshoot: bool,
    ) -> None:
        paired = [p for p in group if context.is_paired(p.id)]
        unpaired = [p for p in group if not context.is_paired(p.id)]

        while len(selected) < quota and (paired or unpaired):
            pool = [(p, LOTTERY_UNPAIRED_WEIGHT) for p in unpaired]
            last_slot = quota - len(selected) == 1
            if not (self.enforce_all_pairings and last_slot and not allow_overshoot):
                pool += [(p, LOTTERY_PAIRED_WEIGHT) for p in paired]
            if not pool:
                # a pair would overshoot, try the next group
                return
            draw = self.random_source.random() * sum(w for _, w in pool)
            winner = pool[-1][0]
            for player, weight in pool:
                draw -= weight
                if draw <= 0:
                    winner = player
                    break

            selected.append(winner)
            taken.add(winner.id)
            if winner in unpaired:
                unpaired.remove(winner)
                continue

            paired.remove(winner)
            partner = by_id.get(context.partner_of(winner.id) or "")
            if partner is None or partner.id in taken:
                continue
            if partner in paired:
                paired.remove(partner)
            elif not self.enforce_all_pairings:
                # partner belongs to another fairness group
                continue
            selected.append(partner)
            taken.add(partner.id)

    def _remove_excess(
        self, selected: Players, quota: int, context: PartnershipContext
    ) -> Players:
        excess = len(selected) - quota
        removed: List[PlayerId] = []
        for player in reversed(selected):
            if len(removed) >= excess:
                break
            if self.enforce_all_pairings and context.is_paired(player.id):
                continue
            removed.append(player.id)
        if len(removed) < excess:
            logger.info(
                "Sitting out %d extra players to keep partnerships intact",
                excess - len(removed),
            )
        return [p for p in selected if p.id not in removed]
