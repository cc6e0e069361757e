"""Pluggable sit-out strategies."""

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

from enum import Enum
from typing import Type

from courtpairing.pairing.strategy.base import PlayerAssignmentStrategy
from courtpairing.pairing.strategy.fair_weighted import (
    FairWeightedPlayerAssignmentStrategy,
)
from courtpairing.pairing.strategy.lottery import LotteryPlayerAssignmentStrategy
from courtpairing.pairing.strategy.pair_units import (
    PairUnitsPlayerAssignmentStrategy,
)


class StrategyKind(Enum):
    """Strategies selectable by name, e.g. from the command line."""

    FAIR_WEIGHTED = "fair-weighted"
    LOTTERY = "lottery"
    PAIR_UNITS = "pair-units"

    @property
    def strategy_class(self) -> Type[PlayerAssignmentStrategy]:
        return _STRATEGIES[self]


_STRATEGIES = {
    StrategyKind.FAIR_WEIGHTED: FairWeightedPlayerAssignmentStrategy,
    StrategyKind.LOTTERY: LotteryPlayerAssignmentStrategy,
    StrategyKind.PAIR_UNITS: PairUnitsPlayerAssignmentStrategy,
}

DEFAULT_STRATEGY = FairWeightedPlayerAssignmentStrategy

__all__ = [
    "DEFAULT_STRATEGY",
    "FairWeightedPlayerAssignmentStrategy",
    "LotteryPlayerAssignmentStrategy",
    "PairUnitsPlayerAssignmentStrategy",
    "PlayerAssignmentStrategy",
    "StrategyKind",
]
