"""Players and courts of a session."""

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


from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from courtpairing.constants import MAX_RATING, MIN_RATING, UNRATED
from courtpairing.type_hints import CourtId, PlayerId
from courtpairing.utils import generate_id, setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Player:
    """A player on the session roster.

    Attributes
    ----------
    id : str
        Stable identifier owned by the surrounding application.
    name : str
        Display name.
    rating : float or None
        Optional skill rating, used for court eligibility.
    """

    id: PlayerId
    name: str
    rating: Optional[float] = None

    def __post_init__(self) -> None:
        if self.rating is not None and not (MIN_RATING <= self.rating <= MAX_RATING):
            logger.warning(
                "Rating %s for %s is outside %s-%s",
                self.rating,
                self.name,
                MIN_RATING,
                MAX_RATING,
            )

    @property
    def rating_or_unrated(self) -> float:
        """The rating, or ``UNRATED`` (0) when the player has none."""
        return self.rating if self.rating is not None else UNRATED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player data."""
        return asdict(self)

    @classmethod
    def from_dict(cls, player_data: Dict[str, Any]) -> "Player":
        """Create a Player from serialized data.

        Parameters
        ----------
        player_data : Dict[str, Any]
            the player data, ``rating`` is optional

        Returns
        -------
        Player
            A Player created from the data
        """
        return cls(
            id=player_data["id"],
            name=player_data["name"],
            rating=player_data.get("rating"),
        )

    def __str__(self) -> str:
        if self.rating is None:
            return self.name
        return f"{self.name} ({self.rating})"


@dataclass(frozen=True)
class Court:
    """A play surface, optionally gated by a minimum rating."""

    id: CourtId
    name: str
    minimum_rating: Optional[float] = None
    is_active: bool = True

    @property
    def is_rated(self) -> bool:
        """True when the court has a (non zero) minimum rating."""
        return bool(self.minimum_rating)

    @property
    def rank_rating(self) -> float:
        """Minimum rating used to order courts, unrated courts count as 0."""
        return self.minimum_rating or UNRATED

    def accepts(self, player: Player) -> bool:
        """Return True if ``player`` may play on this court."""
        if not self.is_rated:
            return True
        return player.rating is not None and player.rating >= self.minimum_rating

    def to_dict(self) -> Dict[str, Any]:
        """Serialize court data."""
        return asdict(self)

    @classmethod
    def from_dict(cls, court_data: Dict[str, Any]) -> "Court":
        """Create a Court from serialized data."""
        return cls(
            id=court_data["id"],
            name=court_data["name"],
            minimum_rating=court_data.get("minimum_rating"),
            is_active=court_data.get("is_active", True),
        )


def create_player(name: str, rating: Optional[float] = None) -> Player:
    """Create a player with a freshly generated id."""
    return Player(id=generate_id("player_"), name=name, rating=rating)


def create_court(
    name: str, minimum_rating: Optional[float] = None, is_active: bool = True
) -> Court:
    """Create a court with a freshly generated id."""
    return Court(
        id=generate_id("court_"),
        name=name,
        minimum_rating=minimum_rating,
        is_active=is_active,
    )
