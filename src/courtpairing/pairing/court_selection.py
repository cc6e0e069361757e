"""Court ranking and the four-step per-court player selection."""

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

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from courtpairing.constants import (
    OPPONENT_INTERACTION_WEIGHT,
    PLAYERS_PER_GAME,
    RECENT_INTERACTION_PENALTY,
    RECENT_OPPONENT_PENALTY,
)
from courtpairing.models import (
    Court,
    GameAssignment,
    PartnershipContext,
    Player,
    PlayerStats,
    Team,
)
from courtpairing.stats import PlayerStatsStore
from courtpairing.type_hints import Players
from courtpairing.utils import RandomSource, setup_logger

logger = setup_logger(__name__)


def rank_courts(courts: Iterable[Court]) -> List[Court]:
    """Active courts, highest minimum rating first.

    Unrated courts rank as 0. The sort is stable, so courts with equal
    minimum rating keep their session order.
    """
    return sorted(
        (court for court in courts if court.is_active),
        key=lambda court: court.rank_rating,
        reverse=True,
    )


def _keep_min(
    candidates: Sequence[Player], key: Callable[[Player], float]
) -> List[Player]:
    """The candidates whose ``key`` equals the minimum."""
    if not candidates:
        return []
    scores = [(player, key(player)) for player in candidates]
    lowest = min(score for _, score in scores)
    return [player for player, score in scores if score == lowest]


def _prefer(
    candidates: Sequence[Player], predicate: Callable[[Player], bool]
) -> List[Player]:
    """Filter with ``predicate`` unless that would leave nothing."""
    preferred = [player for player in candidates if predicate(player)]
    return preferred if preferred else list(candidates)


class SequentialPlayerSelector:
    """Fill courts one at a time, choosing four players per court.

    For each court the eligible players are narrowed in four steps: serve
    player 1, serve player 2, receive player 3 and receive player 4. Every
    step is a filter cascade over the remaining eligible players ending in
    a uniform random pick.

    Parameters
    ----------
    stats : PlayerStatsStore
        Historical stats, only read.
    context : PartnershipContext
        Partnerships intact this round.
    enforce_all_pairings : bool
        When True a partnership is never split across teams or courts.
    random_source : RandomSource
        Source for every tie-break.
    """

    def __init__(
        self,
        stats: PlayerStatsStore,
        context: PartnershipContext,
        enforce_all_pairings: bool,
        random_source: RandomSource,
    ) -> None:
        self.stats = stats
        self.context = context
        self.enforce_all_pairings = enforce_all_pairings
        self.random_source = random_source

    def _stats(self, player: Player) -> PlayerStats:
        return self.stats.get(player.id)

    def assign(
        self, courts: Iterable[Court], players: Players
    ) -> Tuple[List[GameAssignment], Players]:
        """Fill the given courts from ``players``.

        Parameters
        ----------
        courts : iterable of Court
            Courts in the order they should be filled, see :func:`rank_courts`.
        players : list of Player
            Players who are not sitting out.

        Returns
        -------
        tuple of (list of GameAssignment, list of Player)
            One assignment per filled court, and the players that no court
            could take.
        """
        remaining = list(players)
        assignments: List[GameAssignment] = []
        for court in courts:
            eligible = self.eligible_players(court, remaining)
            if len(eligible) < PLAYERS_PER_GAME:
                logger.debug(
                    "Skipping court %s, only %d eligible players",
                    court.name,
                    len(eligible),
                )
                continue
            game = self.select_game(court, eligible)
            assignments.append(game)
            assigned = set(game.player_ids)
            remaining = [p for p in remaining if p.id not in assigned]
        return assignments, remaining

    def eligible_players(self, court: Court, players: Sequence[Player]) -> Players:
        """Players allowed on ``court``.

        When partnerships are enforced, a partnered player only counts as
        eligible if the partner is eligible too.
        """
        eligible = [p for p in players if court.accepts(p)]
        if not self.enforce_all_pairings:
            return eligible
        eligible_ids = {p.id for p in eligible}
        return [
            p
            for p in eligible
            if not self.context.is_paired(p.id)
            or self.context.partner_of(p.id) in eligible_ids
        ]

    def select_game(self, court: Court, eligible: Players) -> GameAssignment:
        """Pick the four players of one court, ``eligible`` has at least four."""
        player1 = self.choose_player1(court, eligible)
        eligible = [p for p in eligible if p.id != player1.id]
        player2 = self.choose_player2(court, player1, eligible)
        eligible = [p for p in eligible if p.id != player2.id]
        player3 = self.choose_player3(player1, player2, eligible)
        eligible = [p for p in eligible if p.id != player3.id]
        player4 = self.choose_player4(court, player1, player2, player3, eligible)
        logger.debug(
            "Court %s: %s & %s vs %s & %s",
            court.name,
            player1.name,
            player2.name,
            player3.name,
            player4.name,
        )
        return GameAssignment(
            court_id=court.id,
            serve_team=Team(player1.id, player2.id),
            receive_team=Team(player3.id, player4.id),
        )

    def _partner_in(
        self, player: Player, eligible: Sequence[Player]
    ) -> Optional[Player]:
        partner_id = self.context.partner_of(player.id)
        if partner_id is None:
            return None
        for candidate in eligible:
            if candidate.id == partner_id:
                return candidate
        return None

    def _is_resolvable(self, player: Player, eligible: Sequence[Player]) -> bool:
        """Whether ``player`` can still get a legal teammate from ``eligible``.

        A partnered player needs the partner, an unpaired player needs
        another unpaired player.
        """
        if self.context.is_paired(player.id):
            return self._partner_in(player, eligible) is not None
        return any(
            p.id != player.id and not self.context.is_paired(p.id) for p in eligible
        )

    def _fewest_court_games(
        self, court: Court, candidates: Sequence[Player]
    ) -> Players:
        return _keep_min(candidates, lambda p: self._stats(p).court_games(court.id))

    def choose_player1(self, court: Court, eligible: Players) -> Player:
        candidates = list(eligible)
        if court.is_rated:
            candidates = self._fewest_court_games(court, candidates)

        if self.enforce_all_pairings:

            def has_partner(player: Player) -> bool:
                return self._partner_in(player, eligible) is not None

            def resolvable(player: Player) -> bool:
                return self._is_resolvable(player, eligible)

            if not any(resolvable(p) for p in candidates):
                # court fairness would strand a partnership, widen the pool
                candidates = list(eligible)
            candidates = _prefer(_prefer(candidates, resolvable), has_partner)

        return self.random_source.choice(candidates)

    def _choose_teammate(
        self, court: Court, anchor: Player, eligible: Players
    ) -> Players:
        """Shared player 2 / player 4 cascade, returns the remaining candidates."""
        partner = self._partner_in(anchor, eligible)
        if partner is not None:
            return [partner]

        candidates = list(eligible)
        if self.enforce_all_pairings:
            candidates = _prefer(
                candidates, lambda p: self._partner_in(p, eligible) is None
            )

        candidates = _keep_min(
            candidates, lambda p: self._stats(p).partner_count(anchor.id)
        )

        last_partner_id = self._stats(anchor).last_partner_id
        if len(candidates) > 1:
            candidates = _prefer(candidates, lambda p: p.id != last_partner_id)

        if court.is_rated and len(candidates) > 1:
            candidates = self._fewest_court_games(court, candidates)
        return candidates

    def choose_player2(
        self, court: Court, player1: Player, eligible: Players
    ) -> Player:
        candidates = self._choose_teammate(court, player1, eligible)
        return self.random_source.choice(candidates)

    def choose_player3(
        self, player1: Player, player2: Player, eligible: Players
    ) -> Player:
        stats1 = self._stats(player1)
        stats2 = self._stats(player2)

        def opponent_score(player: Player) -> int:
            stats = self._stats(player)
            score = OPPONENT_INTERACTION_WEIGHT * (
                stats.interactions(player1.id) + stats.interactions(player2.id)
            )
            if stats1.was_last_opponent(player.id):
                score += RECENT_OPPONENT_PENALTY
            if stats2.was_last_opponent(player.id):
                score += RECENT_OPPONENT_PENALTY
            return score

        candidates = list(eligible)
        if self.enforce_all_pairings:
            candidates = _prefer(candidates, lambda p: self._is_resolvable(p, eligible))
        return self.random_source.choice(_keep_min(candidates, opponent_score))

    def choose_player4(
        self,
        court: Court,
        player1: Player,
        player2: Player,
        player3: Player,
        eligible: Players,
    ) -> Player:
        candidates = self._choose_teammate(court, player3, eligible)
        if len(candidates) > 1:
            seated = [self._stats(p) for p in (player1, player2, player3)]

            def minimax_score(player: Player) -> int:
                stats = self._stats(player)
                worst = max(stats.interactions(other.player_id) for other in seated)
                hits = 0
                for other in seated:
                    if other.was_last_partner(player.id):
                        hits += 1
                    if other.was_last_opponent(player.id):
                        hits += 1
                return worst + RECENT_INTERACTION_PENALTY * hits

            candidates = _keep_min(candidates, minimax_score)
        return self.random_source.choice(candidates)
