"""Fixed partnerships and the per-round partnership context."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from courtpairing.models.player import Player
from courtpairing.type_hints import PartnerMap, PlayerId, TeamIds


@dataclass(frozen=True)
class FixedPartnership:
    """Two players who always play on the same team when both are playing."""

    id: str
    player1_id: PlayerId
    player2_id: PlayerId
    is_active: bool = True

    def involves(self, player_id: PlayerId) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def matches(self, player_a: PlayerId, player_b: PlayerId) -> bool:
        """True if the partnership binds exactly these two players, in any order."""
        return {player_a, player_b} == {self.player1_id, self.player2_id}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "player1_id": self.player1_id,
            "player2_id": self.player2_id,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FixedPartnership":
        return cls(
            id=data["id"],
            player1_id=data["player1_id"],
            player2_id=data["player2_id"],
            is_active=data.get("is_active", True),
        )


@dataclass(frozen=True)
class PartnershipConstraint:
    """The fixed partnerships of a session.

    Attributes
    ----------
    partnerships : tuple of FixedPartnership
        Every configured partnership, active or not.
    enforce_all_pairings : bool
        Hard constraint when True: a partnership is never split, neither on
        court nor when sitting out. Soft preference when False.
    """

    partnerships: Tuple[FixedPartnership, ...] = ()
    enforce_all_pairings: bool = False

    def active_partnerships(self) -> List[FixedPartnership]:
        return [p for p in self.partnerships if p.is_active]

    def is_fixed_partnership(self, player_a: PlayerId, player_b: PlayerId) -> bool:
        """True if an active partnership binds these two players."""
        return any(p.matches(player_a, player_b) for p in self.active_partnerships())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "partnerships": [p.to_dict() for p in self.partnerships],
            "enforce_all_pairings": self.enforce_all_pairings,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PartnershipConstraint":
        return cls(
            partnerships=tuple(
                FixedPartnership.from_dict(p) for p in data.get("partnerships", [])
            ),
            enforce_all_pairings=data.get("enforce_all_pairings", False),
        )


@dataclass(frozen=True)
class PartnerPair:
    """An intact partnership for this round, both members are available."""

    players: Tuple[Player, Player]
    max_rating: float

    @property
    def player_ids(self) -> TeamIds:
        return (self.players[0].id, self.players[1].id)


@dataclass
class PartnershipContext:
    """Partnership lookups derived from the available roster of one round.

    Never persisted, it is rebuilt for every round generation.
    """

    partner_map: PartnerMap = field(default_factory=dict)
    pairs: List[PartnerPair] = field(default_factory=list)
    unpaired_players: List[Player] = field(default_factory=list)

    def partner_of(self, player_id: PlayerId) -> Optional[PlayerId]:
        return self.partner_map.get(player_id)

    def is_paired(self, player_id: PlayerId) -> bool:
        return player_id in self.partner_map

    @property
    def all_players(self) -> List[Player]:
        """Unpaired players followed by the members of every pair."""
        players = list(self.unpaired_players)
        for pair in self.pairs:
            players.extend(pair.players)
        return players

    @property
    def player_count(self) -> int:
        return len(self.unpaired_players) + 2 * len(self.pairs)
