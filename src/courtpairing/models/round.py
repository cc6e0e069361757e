"""Assignments produced by the engine and the rounds persisted from them."""

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

from courtpairing.models.stats import PlayerStats
from courtpairing.type_hints import CourtId, GameId, PlayerId, TeamIds


@dataclass(frozen=True)
class Team:
    """Two teammates on one side of the net."""

    player1_id: PlayerId
    player2_id: PlayerId

    @property
    def player_ids(self) -> TeamIds:
        return (self.player1_id, self.player2_id)

    def has(self, player_id: PlayerId) -> bool:
        return player_id in self.player_ids

    def teammate_of(self, player_id: PlayerId) -> Optional[PlayerId]:
        if player_id == self.player1_id:
            return self.player2_id
        if player_id == self.player2_id:
            return self.player1_id
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"player1_id": self.player1_id, "player2_id": self.player2_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        return cls(player1_id=data["player1_id"], player2_id=data["player2_id"])


class _TwoTeams:
    """Team lookups shared by assignments and persisted games."""

    serve_team: Team
    receive_team: Team

    @property
    def player_ids(self) -> List[PlayerId]:
        """Serve team then receive team."""
        return [*self.serve_team.player_ids, *self.receive_team.player_ids]

    def involves(self, player_id: PlayerId) -> bool:
        return self.serve_team.has(player_id) or self.receive_team.has(player_id)

    def is_serving(self, player_id: PlayerId) -> bool:
        return self.serve_team.has(player_id)

    def teammate_of(self, player_id: PlayerId) -> Optional[PlayerId]:
        return self.serve_team.teammate_of(player_id) or self.receive_team.teammate_of(
            player_id
        )

    def opponents_of(self, player_id: PlayerId) -> List[PlayerId]:
        """Both members of the other team, empty if the player is not in the game."""
        if self.serve_team.has(player_id):
            return list(self.receive_team.player_ids)
        if self.receive_team.has(player_id):
            return list(self.serve_team.player_ids)
        return []


@dataclass(frozen=True)
class GameAssignment(_TwoTeams):
    """One court of a generated round, before it becomes a persisted game."""

    court_id: CourtId
    serve_team: Team
    receive_team: Team

    def to_dict(self) -> Dict[str, Any]:
        return {
            "court_id": self.court_id,
            "serve_team": self.serve_team.to_dict(),
            "receive_team": self.receive_team.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameAssignment":
        return cls(
            court_id=data["court_id"],
            serve_team=Team.from_dict(data["serve_team"]),
            receive_team=Team.from_dict(data["receive_team"]),
        )


@dataclass
class RoundAssignment:
    """The engine's answer for one round.

    Attributes
    ----------
    round_number : int
        1-based number of the round being generated.
    game_assignments : list of GameAssignment
        One entry per court that could be filled, may be empty.
    sitting_out_ids : list of str
        Every available player not placed on a court.
    """

    round_number: int
    game_assignments: List[GameAssignment] = field(default_factory=list)
    sitting_out_ids: List[PlayerId] = field(default_factory=list)

    @property
    def playing_ids(self) -> List[PlayerId]:
        ids: List[PlayerId] = []
        for game in self.game_assignments:
            ids.extend(game.player_ids)
        return ids

    @property
    def is_empty(self) -> bool:
        """True when no court could be filled."""
        return not self.game_assignments

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "game_assignments": [g.to_dict() for g in self.game_assignments],
            "sitting_out_ids": list(self.sitting_out_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundAssignment":
        return cls(
            round_number=data["round_number"],
            game_assignments=[
                GameAssignment.from_dict(g) for g in data.get("game_assignments", [])
            ],
            sitting_out_ids=list(data.get("sitting_out_ids", [])),
        )


@dataclass(frozen=True)
class Score:
    serve_score: float
    receive_score: float

    def for_side(self, serving: bool) -> Tuple[float, float]:
        """Return ``(points_for, points_against)`` from one side's view."""
        if serving:
            return (self.serve_score, self.receive_score)
        return (self.receive_score, self.serve_score)

    def to_dict(self) -> Dict[str, Any]:
        return {"serve_score": self.serve_score, "receive_score": self.receive_score}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Score":
        return cls(serve_score=data["serve_score"], receive_score=data["receive_score"])


@dataclass
class Game(_TwoTeams):
    """A persisted game, materialized from a :class:`GameAssignment`."""

    id: GameId
    session_id: str
    game_number: int
    court_id: CourtId
    serve_team: Team
    receive_team: Team
    is_completed: bool = False
    score: Optional[Score] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None

    @property
    def serve_won(self) -> Optional[bool]:
        """Whether the serve team won, ``None`` without a decisive score."""
        if self.score is None or self.score.serve_score == self.score.receive_score:
            return None
        return self.score.serve_score > self.score.receive_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "session_id": self.session_id,
            "game_number": self.game_number,
            "court_id": self.court_id,
            "serve_team": self.serve_team.to_dict(),
            "receive_team": self.receive_team.to_dict(),
            "is_completed": self.is_completed,
            "score": self.score.to_dict() if self.score else None,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Game":
        score = data.get("score")
        return cls(
            id=data["id"],
            session_id=data["session_id"],
            game_number=data["game_number"],
            court_id=data["court_id"],
            serve_team=Team.from_dict(data["serve_team"]),
            receive_team=Team.from_dict(data["receive_team"]),
            is_completed=data.get("is_completed", False),
            score=Score.from_dict(score) if score else None,
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
        )


@dataclass
class Results:
    """Scores keyed by game id; ``None`` marks a game played without score."""

    scores: Dict[GameId, Optional[Score]] = field(default_factory=dict)

    def score_for(self, game_id: GameId) -> Optional[Score]:
        return self.scores.get(game_id)

    @classmethod
    def scoreless(cls, games: List[Game]) -> "Results":
        return cls(scores={game.id: None for game in games})


@dataclass
class Round:
    """Historical record of one round."""

    games: List[Game] = field(default_factory=list)
    sitting_out_ids: List[PlayerId] = field(default_factory=list)

    def has_game(self, game_id: GameId) -> bool:
        return any(game.id == game_id for game in self.games)

    @property
    def is_completed(self) -> bool:
        return bool(self.games) and all(game.is_completed for game in self.games)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "games": [g.to_dict() for g in self.games],
            "sitting_out_ids": list(self.sitting_out_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        return cls(
            games=[Game.from_dict(g) for g in data.get("games", [])],
            sitting_out_ids=list(data.get("sitting_out_ids", [])),
        )


@dataclass
class LiveData:
    """Round history and persisted stats of a live session."""

    rounds: List[Round] = field(default_factory=list)
    player_stats: List[PlayerStats] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rounds": [r.to_dict() for r in self.rounds],
            "player_stats": [s.to_dict() for s in self.player_stats],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LiveData":
        return cls(
            rounds=[Round.from_dict(r) for r in data.get("rounds", [])],
            player_stats=[
                PlayerStats.from_dict(s) for s in data.get("player_stats", [])
            ],
        )
