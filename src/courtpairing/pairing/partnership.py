"""Derive the partnership context of one round from the available roster."""

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

from typing import Dict, Iterable, Optional

from courtpairing.models import (
    FixedPartnership,
    PartnerPair,
    PartnershipConstraint,
    PartnershipContext,
    Player,
)
from courtpairing.type_hints import PlayerId
from courtpairing.utils import Alerter, LoggingAlerter, setup_logger

logger = setup_logger(__name__)


def build_partnership_context(
    available_players: Iterable[Player],
    constraint: Optional[PartnershipConstraint],
    alerter: Optional[Alerter] = None,
    roster: Optional[Iterable[Player]] = None,
) -> PartnershipContext:
    """Build the partner map, intact pairs and unpaired players.

    A partnership is kept only when it is active and both members are
    available. An inactive partnership, or one with a paused member, leaves
    both players unpaired without complaint. A partnership naming a player
    that is not on the roster at all is bad data: it goes to ``alerter``
    and is ignored.

    Parameters
    ----------
    available_players : iterable of Player
        Players who can play this round.
    constraint : PartnershipConstraint or None
        The session's partnerships.
    alerter : Alerter, optional
        Receives data-quality alerts, defaults to :class:`LoggingAlerter`.
    roster : iterable of Player, optional
        Every known player, paused ones included. Defaults to
        ``available_players``.

    Returns
    -------
    PartnershipContext
        Fresh context, pairs in partnership order, unpaired players in
        roster order.
    """
    available = list(available_players)
    alerter = alerter or LoggingAlerter()
    by_id: Dict[PlayerId, Player] = {p.id: p for p in available}
    known_ids = {p.id for p in roster} if roster is not None else set(by_id)
    known_ids.update(by_id)

    context = PartnershipContext()
    if constraint is None:
        context.unpaired_players = available
        return context

    for partnership in constraint.active_partnerships():
        if not _is_valid(partnership, known_ids, alerter):
            continue
        player1 = by_id.get(partnership.player1_id)
        player2 = by_id.get(partnership.player2_id)
        if player1 is None or player2 is None:
            logger.debug("Partnership %s not intact this round", partnership.id)
            continue
        if player1.id in context.partner_map or player2.id in context.partner_map:
            alerter.alert(
                "Error",
                f"Player in more than one partnership: "
                f"{partnership.player1_id} / {partnership.player2_id}",
            )
            continue
        context.partner_map[player1.id] = player2.id
        context.partner_map[player2.id] = player1.id
        context.pairs.append(
            PartnerPair(
                players=(player1, player2),
                max_rating=max(player1.rating_or_unrated, player2.rating_or_unrated),
            )
        )

    context.unpaired_players = [p for p in available if p.id not in context.partner_map]
    logger.debug(
        "Partnership context: %d pairs, %d unpaired",
        len(context.pairs),
        len(context.unpaired_players),
    )
    return context


def _is_valid(partnership: FixedPartnership, known_ids, alerter: Alerter) -> bool:
    info = f"{partnership.player1_id} / {partnership.player2_id}"
    if partnership.player1_id == partnership.player2_id:
        alerter.alert("Error", f"Partnership pairs a player with themself: {info}")
        return False
    if (
        partnership.player1_id not in known_ids
        or partnership.player2_id not in known_ids
    ):
        alerter.alert("Error", f"Partnership has invalid data: {info}")
        return False
    return True
