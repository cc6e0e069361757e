"""Historical per-player counters."""

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

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from courtpairing.type_hints import CourtId, PlayerId


@dataclass
class PlayerStats:
    """Everything the engine remembers about one player in a session.

    Attributes
    ----------
    player_id : str
        Owner of these stats.
    games_played : int
        Rounds in which the player was on court.
    games_sat_out : int
        Rounds in which the player sat out.
    consecutive_games : int
        Rounds played since the last sit-out.
    partners : dict of str to int
        Games played as teammate of each other player.
    opponents : dict of str to int
        Games played against each other player.
    games_on_court : dict of str to int
        Games played on each court.
    fixed_partnership_games : int
        Games played with a fixed partner, informational only.
    total_score : float
        Points scored by the player's teams.
    total_score_against : float
        Points conceded by the player's teams.
    last_partner_id : str or None
        Teammate in the most recent game played.
    last_opponent_ids : list of str
        The two opponents of the most recent game played.
    """

    player_id: PlayerId
    games_played: int = 0
    games_sat_out: int = 0
    consecutive_games: int = 0
    partners: Dict[PlayerId, int] = field(default_factory=dict)
    opponents: Dict[PlayerId, int] = field(default_factory=dict)
    games_on_court: Dict[CourtId, int] = field(default_factory=dict)
    fixed_partnership_games: int = 0
    total_score: float = 0
    total_score_against: float = 0
    last_partner_id: Optional[PlayerId] = None
    last_opponent_ids: List[PlayerId] = field(default_factory=list)

    def partner_count(self, other_id: PlayerId) -> int:
        return self.partners.get(other_id, 0)

    def opponent_count(self, other_id: PlayerId) -> int:
        return self.opponents.get(other_id, 0)

    def interactions(self, other_id: PlayerId) -> int:
        """Games shared with ``other_id``, as partner or as opponent."""
        return self.partner_count(other_id) + self.opponent_count(other_id)

    def court_games(self, court_id: CourtId) -> int:
        return self.games_on_court.get(court_id, 0)

    def was_last_opponent(self, other_id: PlayerId) -> bool:
        return other_id in self.last_opponent_ids

    def was_last_partner(self, other_id: PlayerId) -> bool:
        return self.last_partner_id is not None and self.last_partner_id == other_id

    @property
    def appearances(self) -> int:
        """Rounds this player has been part of, played or sat out."""
        return self.games_played + self.games_sat_out

    def copy(self) -> "PlayerStats":
        """Deep copy, mutating it never touches the original."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize stats to a dictionary."""
        return {
            "player_id": self.player_id,
            "games_played": self.games_played,
            "games_sat_out": self.games_sat_out,
            "consecutive_games": self.consecutive_games,
            "partners": dict(self.partners),
            "opponents": dict(self.opponents),
            "games_on_court": dict(self.games_on_court),
            "fixed_partnership_games": self.fixed_partnership_games,
            "total_score": self.total_score,
            "total_score_against": self.total_score_against,
            "last_partner_id": self.last_partner_id,
            "last_opponent_ids": list(self.last_opponent_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerStats":
        """Deserialize stats, missing counters default to zero."""
        return cls(
            player_id=data["player_id"],
            games_played=data.get("games_played", 0),
            games_sat_out=data.get("games_sat_out", 0),
            consecutive_games=data.get("consecutive_games", 0),
            partners=dict(data.get("partners") or {}),
            opponents=dict(data.get("opponents") or {}),
            games_on_court=dict(data.get("games_on_court") or {}),
            fixed_partnership_games=data.get("fixed_partnership_games", 0),
            total_score=data.get("total_score", 0),
            total_score_against=data.get("total_score_against", 0),
            last_partner_id=data.get("last_partner_id"),
            last_opponent_ids=list(data.get("last_opponent_ids") or []),
        )
