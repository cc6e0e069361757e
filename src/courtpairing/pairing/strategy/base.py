"""Interface shared by the sit-out strategies."""

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

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from courtpairing.models import (
    Court,
    GameAssignment,
    PartnershipConstraint,
    PartnershipContext,
    Player,
)
from courtpairing.pairing.court_selection import SequentialPlayerSelector, rank_courts
from courtpairing.stats import PlayerStatsStore
from courtpairing.type_hints import Players
from courtpairing.utils import RandomSource, setup_logger

logger = setup_logger(__name__)


class PlayerAssignmentStrategy(ABC):
    """Decide who sits out, then place the rest on courts.

    Subclasses only differ in :meth:`select_sitting_out_players`. Court
    placement is the same sequential selection for every strategy.

    Parameters
    ----------
    active_courts : iterable of Court
        Courts in play this round.
    stats : PlayerStatsStore
        Historical stats, only read.
    partnership_constraint : PartnershipConstraint, optional
        Whether partnerships are enforced.
    random_source : RandomSource, optional
        Source for every tie-break, a fresh unseeded one by default.
    """

    #: name used on the command line
    name = ""

    def __init__(
        self,
        active_courts: Iterable[Court],
        stats: PlayerStatsStore,
        partnership_constraint: Optional[PartnershipConstraint] = None,
        random_source: Optional[RandomSource] = None,
    ) -> None:
        self.active_courts = list(active_courts)
        self.stats = stats
        self.partnership_constraint = partnership_constraint
        self.random_source = random_source or RandomSource()

    @property
    def enforce_all_pairings(self) -> bool:
        return bool(
            self.partnership_constraint
            and self.partnership_constraint.enforce_all_pairings
        )

    @abstractmethod
    def select_sitting_out_players(
        self, context: PartnershipContext, slots_needed: int
    ) -> Players:
        """Choose the players who sit out this round.

        Parameters
        ----------
        context : PartnershipContext
            Available players and their intact partnerships.
        slots_needed : int
            Court places to fill, four per active court.

        Returns
        -------
        list of Player
            Normally ``player_count - slots_needed`` players, or none when
            everyone fits. Keeping a partnership intact may push the count
            off by one when partnerships are enforced.
        """

    def assign_players_to_courts(
        self, players: Players, context: PartnershipContext
    ) -> Tuple[List[GameAssignment], Players]:
        """Place ``players`` on the ranked courts.

        Returns the game assignments and the players no court could take.
        """
        selector = SequentialPlayerSelector(
            self.stats, context, self.enforce_all_pairings, self.random_source
        )
        return selector.assign(rank_courts(self.active_courts), players)

    @staticmethod
    def sit_out_count(context: PartnershipContext, slots_needed: int) -> int:
        return max(0, context.player_count - slots_needed)

    def rank_for_sit_out(self, players: Iterable[Player]) -> Players:
        """Most deserving of a rest first.

        Fewest sit-outs, then most games played, then most consecutive
        games, then random.
        """
        keyed = []
        for player in players:
            stats = self.stats.get(player.id)
            keyed.append(
                (
                    (
                        stats.games_sat_out,
                        -stats.games_played,
                        -stats.consecutive_games,
                        self.random_source.random(),
                    ),
                    player,
                )
            )
        keyed.sort(key=lambda item: item[0])
        return [player for _, player in keyed]

    def rank_for_return(self, players: Iterable[Player]) -> Players:
        """Least deserving of a rest first, the reverse of :meth:`rank_for_sit_out`."""
        keyed = []
        for player in players:
            stats = self.stats.get(player.id)
            keyed.append(
                (
                    (
                        -stats.games_sat_out,
                        stats.games_played,
                        stats.consecutive_games,
                        self.random_source.random(),
                    ),
                    player,
                )
            )
        keyed.sort(key=lambda item: item[0])
        return [player for _, player in keyed]

    def trim_excess(
        self, selected: Players, quota: int, context: PartnershipContext
    ) -> Players:
        """Bring ``selected`` back down to ``quota`` players.

        Unpaired players with the best fairness stats go back first. Paired
        players follow only when partnerships are not enforced; otherwise
        the overshoot stands.
        """
        excess = len(selected) - quota
        if excess <= 0:
            return selected

        removable = self.rank_for_return(
            p for p in selected if not context.is_paired(p.id)
        )
        if not self.enforce_all_pairings:
            removable += self.rank_for_return(
                p for p in selected if context.is_paired(p.id)
            )
        removed = {p.id for p in removable[:excess]}
        trimmed = [p for p in selected if p.id not in removed]
        if len(trimmed) > quota:
            logger.info(
                "Sitting out %d players instead of %d to keep partnerships intact",
                len(trimmed),
                quota,
            )
        return trimmed
