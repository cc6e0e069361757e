"""Non-fatal alert side channel for data-quality problems."""

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


from abc import ABC, abstractmethod
from typing import List, Tuple

from courtpairing.utils.logging import setup_logger

logger = setup_logger(__name__)


class Alerter(ABC):
    """Receives alerts that must reach the user but must not stop the engine.

    The surrounding application injects its own subclass (a dialog, a toast,
    a notification); the engine only calls :meth:`alert`.
    """

    @abstractmethod
    def alert(self, title: str, message: str) -> None:
        """Deliver one alert to the user."""


class LoggingAlerter(Alerter):
    """Default alerter, writes every alert to the log at ERROR level."""

    def alert(self, title: str, message: str) -> None:
        logger.error("%s: %s", title, message)


class RecordingAlerter(Alerter):
    """Keeps alerts in memory, used by the simulator and by tests."""

    def __init__(self) -> None:
        self.alerts: List[Tuple[str, str]] = []

    def alert(self, title: str, message: str) -> None:
        logger.warning("%s: %s", title, message)
        self.alerts.append((title, message))
