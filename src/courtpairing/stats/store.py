"""In-memory per-player stats keyed by player id."""

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

from typing import Dict, Iterable, Iterator, List

from courtpairing.models import PlayerStats
from courtpairing.type_hints import PlayerId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class PlayerStatsStore:
    """Mutable map of player id to :class:`PlayerStats`.

    The store owns copies of whatever it is seeded with; callers can keep
    using their own objects without seeing the engine's mutations. Players
    never seen before get zeroed stats on first access.

    Parameters
    ----------
    existing : iterable of PlayerStats, optional
        Persisted stats to start from.
    player_ids : iterable of str, optional
        Players to seed eagerly, zeroed unless present in ``existing``.
    """

    def __init__(
        self,
        existing: Iterable[PlayerStats] = (),
        player_ids: Iterable[PlayerId] = (),
    ) -> None:
        self._stats: Dict[PlayerId, PlayerStats] = {}
        for stats in existing:
            if stats.player_id in self._stats:
                logger.warning(
                    "Duplicate stats for player %s, keeping the first",
                    stats.player_id,
                )
                continue
            self._stats[stats.player_id] = stats.copy()
        self.seed(player_ids)

    def seed(self, player_ids: Iterable[PlayerId]) -> None:
        """Make sure every id has stats, leaving existing entries untouched."""
        for player_id in player_ids:
            self.get(player_id)

    def get(self, player_id: PlayerId) -> PlayerStats:
        stats = self._stats.get(player_id)
        if stats is None:
            logger.debug("Creating zero stats for %s", player_id)
            stats = PlayerStats(player_id=player_id)
            self._stats[player_id] = stats
        return stats

    def __getitem__(self, player_id: PlayerId) -> PlayerStats:
        return self.get(player_id)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._stats

    def __iter__(self) -> Iterator[PlayerStats]:
        return iter(self._stats.values())

    def __len__(self) -> int:
        return len(self._stats)

    def snapshot(self) -> List[PlayerStats]:
        """Independent copies of every entry, in seeding order."""
        return [stats.copy() for stats in self._stats.values()]

    def as_dict(self) -> Dict[PlayerId, PlayerStats]:
        """Copy of the store keyed by player id."""
        return {player_id: stats.copy() for player_id, stats in self._stats.items()}
