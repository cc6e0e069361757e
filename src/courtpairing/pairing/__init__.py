"""Round generation engine."""

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

from courtpairing.pairing.court_selection import SequentialPlayerSelector, rank_courts
from courtpairing.pairing.freshness import FreshnessScorer
from courtpairing.pairing.partnership import build_partnership_context
from courtpairing.pairing.round_assigner import RoundAssigner
from courtpairing.pairing.strategy import (
    FairWeightedPlayerAssignmentStrategy,
    LotteryPlayerAssignmentStrategy,
    PairUnitsPlayerAssignmentStrategy,
    PlayerAssignmentStrategy,
    StrategyKind,
)

__all__ = [
    "FairWeightedPlayerAssignmentStrategy",
    "FreshnessScorer",
    "LotteryPlayerAssignmentStrategy",
    "PairUnitsPlayerAssignmentStrategy",
    "PlayerAssignmentStrategy",
    "RoundAssigner",
    "SequentialPlayerSelector",
    "StrategyKind",
    "build_partnership_context",
    "rank_courts",
]
