"""Head-to-head matchup reporting over a session's round history."""

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
from itertools import combinations, product
from typing import Dict, Iterable, Optional

from courtpairing.models import Game, PlayerStats
from courtpairing.session import Session
from courtpairing.type_hints import PlayerId


@dataclass
class PlayerMatchupStats:
    """How one player fared with and against one other player."""

    partnered_count: int = 0
    partnered_wins: int = 0
    partnered_losses: int = 0
    against_count: int = 0
    against_wins: int = 0
    against_losses: int = 0
    same_court_count: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


PlayerMatchups = Dict[PlayerId, PlayerMatchupStats]
SessionMatchupData = Dict[PlayerId, PlayerMatchups]


def generate_session_matchup_data(session: Session) -> SessionMatchupData:
    """Matchup stats for every ordered pair of session players.

    Players outside ``session.player_ids`` are ignored. Wins and losses are
    only counted when the session is scored and the game is completed with
    a decisive score.
    """
    data: SessionMatchupData = {
        player_id: {
            other_id: PlayerMatchupStats()
            for other_id in session.player_ids
            if other_id != player_id
        }
        for player_id in session.player_ids
    }
    if session.live_data is None:
        return data

    for round_ in session.live_data.rounds:
        for game in round_.games:
            _record_game(data, game, session.scoring)
    return data


def _pair(
    data: SessionMatchupData, player_a: PlayerId, player_b: PlayerId
) -> Optional[PlayerMatchupStats]:
    return data.get(player_a, {}).get(player_b)


def _record_game(data: SessionMatchupData, game: Game, scoring: bool) -> None:
    for player_a, player_b in combinations(game.player_ids, 2):
        for first, second in ((player_a, player_b), (player_b, player_a)):
            stats = _pair(data, first, second)
            if stats is not None:
                stats.same_court_count += 1

    serve_won = game.serve_won if scoring and game.is_completed else None

    for team, won in (
        (game.serve_team, serve_won),
        (game.receive_team, None if serve_won is None else not serve_won),
    ):
        for first, second in (team.player_ids, team.player_ids[::-1]):
            stats = _pair(data, first, second)
            if stats is None:
                continue
            stats.partnered_count += 1
            if won is True:
                stats.partnered_wins += 1
            elif won is False:
                stats.partnered_losses += 1

    for server, receiver in product(
        game.serve_team.player_ids, game.receive_team.player_ids
    ):
        for first, second, won in (
            (server, receiver, serve_won),
            (receiver, server, None if serve_won is None else not serve_won),
        ):
            stats = _pair(data, first, second)
            if stats is None:
                continue
            stats.against_count += 1
            if won is True:
                stats.against_wins += 1
            elif won is False:
                stats.against_losses += 1


def get_player_pair_summary(
    matchup_data: SessionMatchupData, player1_id: PlayerId, player2_id: PlayerId
) -> Optional[PlayerMatchupStats]:
    return _pair(matchup_data, player1_id, player2_id)


def get_player_matchups(
    matchup_data: SessionMatchupData, player_id: PlayerId
) -> Optional[PlayerMatchups]:
    return matchup_data.get(player_id)


def player_stats_to_string(
    stats: Iterable[PlayerStats], names: Optional[Dict[PlayerId, str]] = None
) -> str:
    """Human readable dump of player stats.

    Parameters
    ----------
    stats : iterable of PlayerStats
        Stats to print, in order.
    names : dict of str to str, optional
        Display names by player id, ids are printed when missing.
    """
    stats = list(stats)
    if not stats:
        return "No player statistics available."
    names = names or {}

    def label(player_id: PlayerId) -> str:
        return names.get(player_id, player_id)

    lines = ["=== Player Statistics ==="]
    for index, pstat in enumerate(stats, start=1):
        lines.append(f"Player {index}: {label(pstat.player_id)}")
        lines.append(f"  Games Played: {pstat.games_played}")
        lines.append(f"  Games Sat Out: {pstat.games_sat_out}")
        lines.append(f"  Total Score: {pstat.total_score}")
        lines.append(f"  Total Score Against: {pstat.total_score_against}")
        if pstat.partners:
            lines.append("  Partners:")
            for partner_id, count in pstat.partners.items():
                lines.append(f"    {label(partner_id)}: {count} games")
        else:
            lines.append("  Partners: None")
    return "\n".join(lines)
