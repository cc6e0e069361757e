"""Session record and the live-session bookkeeping around the engine."""

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
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from courtpairing.exceptions import RoundIndexError, SessionNotLiveError
from courtpairing.models import (
    Court,
    Game,
    LiveData,
    PartnershipConstraint,
    PlayerStats,
    Results,
    Round,
    RoundAssignment,
)
from courtpairing.type_hints import PlayerId
from courtpairing.utils import generate_id, setup_logger

logger = setup_logger(__name__)


def _now() -> str:
    return datetime.now().isoformat()


class SessionState(Enum):
    NEW = "New"
    LIVE = "Live"
    COMPLETE = "Complete"
    ARCHIVED = "Archived"


@dataclass
class Session:
    """A scheduled play event.

    Attributes
    ----------
    id : str
        Session identifier.
    name : str
        Display name.
    player_ids : list of str
        The roster.
    courts : list of Court
        Every court of the session, active or not.
    state : SessionState
        Lifecycle state, only live sessions have rounds.
    scoring : bool
        Whether games are scored.
    show_ratings : bool
        Display preference, kept for round trips.
    partnership_constraint : PartnershipConstraint or None
        Fixed partnerships of the session.
    live_data : LiveData or None
        Round history and stats, present once the session is started.
    """

    id: str
    name: str
    player_ids: List[PlayerId] = field(default_factory=list)
    courts: List[Court] = field(default_factory=list)
    state: SessionState = SessionState.NEW
    scoring: bool = False
    show_ratings: bool = False
    partnership_constraint: Optional[PartnershipConstraint] = None
    live_data: Optional[LiveData] = None
    date_time: Optional[str] = None
    created_at: str = field(default_factory=_now)
    updated_at: str = field(default_factory=_now)

    @property
    def active_courts(self) -> List[Court]:
        return [court for court in self.courts if court.is_active]

    @property
    def is_live(self) -> bool:
        return self.state == SessionState.LIVE and self.live_data is not None

    def touch(self) -> None:
        self.updated_at = _now()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "player_ids": list(self.player_ids),
            "courts": [c.to_dict() for c in self.courts],
            "state": self.state.value,
            "scoring": self.scoring,
            "show_ratings": self.show_ratings,
            "partnership_constraint": (
                self.partnership_constraint.to_dict()
                if self.partnership_constraint
                else None
            ),
            "live_data": self.live_data.to_dict() if self.live_data else None,
            "date_time": self.date_time,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        constraint = data.get("partnership_constraint")
        live_data = data.get("live_data")
        return cls(
            id=data["id"],
            name=data["name"],
            player_ids=list(data.get("player_ids", [])),
            courts=[Court.from_dict(c) for c in data.get("courts", [])],
            state=SessionState(data.get("state", SessionState.NEW.value)),
            scoring=data.get("scoring", False),
            show_ratings=data.get("show_ratings", False),
            partnership_constraint=(
                PartnershipConstraint.from_dict(constraint) if constraint else None
            ),
            live_data=LiveData.from_dict(live_data) if live_data else None,
            date_time=data.get("date_time"),
            created_at=data.get("created_at") or _now(),
            updated_at=data.get("updated_at") or _now(),
        )


def create_session(
    name: str,
    player_ids: List[PlayerId],
    courts: List[Court],
    scoring: bool = False,
    partnership_constraint: Optional[PartnershipConstraint] = None,
) -> Session:
    return Session(
        id=generate_id("session_"),
        name=name,
        player_ids=list(player_ids),
        courts=list(courts),
        scoring=scoring,
        partnership_constraint=partnership_constraint,
    )


def validate_live(session: Optional[Session]) -> None:
    """Raise unless ``session`` is live and carries live data.

    Raises
    ------
    SessionNotLiveError
        When the session is missing, not live, or has no live data.
    """
    if session is None:
        raise SessionNotLiveError("session is None")
    if not session.is_live:
        raise SessionNotLiveError(
            f"session {session.name!r} is not live, state: {session.state.value}"
        )


def get_current_round_number(session: Session, live: bool = True) -> int:
    """Number of rounds generated so far, 0 before the first round.

    With ``live=False`` a session without live data counts as 0 instead of
    raising.
    """
    if live:
        validate_live(session)
    elif session.live_data is None:
        return 0
    return len(session.live_data.rounds)


def get_current_round(session: Session, live: bool = True) -> Round:
    """The latest round, or an empty round when there is none."""
    if live:
        validate_live(session)
    elif session.live_data is None:
        return Round()
    rounds = session.live_data.rounds
    return rounds[-1] if rounds else Round()


def get_round(session: Session, index: int) -> Round:
    """Round at 0-based ``index``.

    Raises
    ------
    RoundIndexError
        When ``index`` is outside the round history.
    """
    validate_live(session)
    rounds = session.live_data.rounds
    if not 0 <= index < len(rounds):
        raise RoundIndexError(
            f"round index {index} out of range, session has {len(rounds)} rounds"
        )
    return rounds[index]


def convert_assignment_to_round(session: Session, assignment: RoundAssignment) -> Round:
    """Materialize a :class:`RoundAssignment` into persisted games."""
    games = [
        Game(
            id=generate_id(f"game_{assignment.round_number}_{ga.court_id}_{index}_"),
            session_id=session.id,
            game_number=assignment.round_number,
            court_id=ga.court_id,
            serve_team=ga.serve_team,
            receive_team=ga.receive_team,
        )
        for index, ga in enumerate(assignment.game_assignments)
    ]
    return Round(games=games, sitting_out_ids=list(assignment.sitting_out_ids))


def start_live_session(session: Session) -> Session:
    """Make ``session`` live with an empty history, existing history is kept."""
    if session.live_data is None:
        session.live_data = LiveData()
    session.state = SessionState.LIVE
    session.touch()
    logger.info("Session %s is live", session.name)
    return session


def end_session(session: Session) -> Session:
    session.state = SessionState.COMPLETE
    session.touch()
    logger.info("Session %s complete", session.name)
    return session


def append_round(session: Session, assignment: RoundAssignment) -> Round:
    """Materialize ``assignment`` and append it to the round history."""
    validate_live(session)
    new_round = convert_assignment_to_round(session, assignment)
    session.live_data.rounds.append(new_round)
    session.touch()
    logger.info(
        "Round %d added: %d games, %d sitting out",
        assignment.round_number,
        len(new_round.games),
        len(new_round.sitting_out_ids),
    )
    return new_round


def replace_current_round(session: Session, assignment: RoundAssignment) -> Round:
    """Swap the latest round for a regenerated one.

    Raises
    ------
    RoundIndexError
        When the session has no round yet.
    """
    validate_live(session)
    rounds = session.live_data.rounds
    if not rounds:
        raise RoundIndexError("no current round to replace")
    new_round = convert_assignment_to_round(session, assignment)
    rounds[-1] = new_round
    session.touch()
    return new_round


def start_round(session: Session) -> Round:
    """Stamp every game of the current round with a start time."""
    validate_live(session)
    current = get_current_round(session)
    now = _now()
    for game in current.games:
        game.started_at = now
    session.touch()
    return current


def complete_round(
    session: Session, results: Optional[Results], updated_stats: List[PlayerStats]
) -> Round:
    """Close the current round and store the stats computed for it.

    Games get their score from ``results`` when present, otherwise they keep
    the score they already had.
    """
    validate_live(session)
    current = get_current_round(session)
    now = _now()
    for game in current.games:
        game.is_completed = True
        game.completed_at = now
        if results is not None and results.score_for(game.id) is not None:
            game.score = results.score_for(game.id)
    session.live_data.player_stats = list(updated_stats)
    session.touch()
    return current
