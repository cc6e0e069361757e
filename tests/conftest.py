"""Shared factories and fixtures for the Court Pairing tests."""

from typing import Iterable, List, Optional

import pytest

from courtpairing.models import (
    Court,
    FixedPartnership,
    LiveData,
    PartnershipConstraint,
    Player,
    PlayerStats,
)
from courtpairing.session import Session, SessionState
from courtpairing.stats import PlayerStatsStore
from courtpairing.utils import RandomSource, RecordingAlerter


def make_player(name: str, rating: Optional[float] = None) -> Player:
    """Player whose id is its lower-cased name, handy in assertions."""
    return Player(id=name.lower(), name=name, rating=rating)


def make_players(count: int, rating: Optional[float] = None) -> List[Player]:
    return [make_player(f"P{i}", rating) for i in range(1, count + 1)]


def make_court(
    name: str, minimum_rating: Optional[float] = None, is_active: bool = True
) -> Court:
    return Court(
        id=name.lower().replace(" ", "_"),
        name=name,
        minimum_rating=minimum_rating,
        is_active=is_active,
    )


def make_courts(count: int) -> List[Court]:
    return [make_court(f"Court {i}") for i in range(1, count + 1)]


def make_constraint(
    *pairs: Iterable[str], enforce: bool = True, active: bool = True
) -> PartnershipConstraint:
    partnerships = tuple(
        FixedPartnership(
            id=f"fp_{a}_{b}", player1_id=a, player2_id=b, is_active=active
        )
        for a, b in pairs
    )
    return PartnershipConstraint(
        partnerships=partnerships, enforce_all_pairings=enforce
    )


def make_session(
    players: List[Player],
    courts: List[Court],
    constraint: Optional[PartnershipConstraint] = None,
    stats: Optional[List[PlayerStats]] = None,
    scoring: bool = False,
) -> Session:
    return Session(
        id="session_1",
        name="Test session",
        player_ids=[p.id for p in players],
        courts=courts,
        state=SessionState.LIVE,
        scoring=scoring,
        partnership_constraint=constraint,
        live_data=LiveData(rounds=[], player_stats=list(stats or [])),
    )


def stats_for(player_id: str, **counters) -> PlayerStats:
    return PlayerStats(player_id=player_id, **counters)


@pytest.fixture
def random_source():
    return RandomSource(seed=1234)


@pytest.fixture
def alerter():
    return RecordingAlerter()


@pytest.fixture
def empty_store():
    return PlayerStatsStore()
