"""Exceptions raised by Court Pairing."""

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


class CourtPairingException(Exception):
    """Base class for every error raised by Court Pairing."""


class PairingException(CourtPairingException):
    """Raised when the pairing engine reaches an impossible internal state."""


class InvalidSessionError(CourtPairingException):
    """Raised when a session snapshot lacks the data the engine needs.

    This is a precondition violation, the caller has to fix the session
    before trying again.
    """


class SessionNotLiveError(CourtPairingException):
    """Raised when a live-only operation is attempted on a session that is not live."""


class RoundIndexError(CourtPairingException, IndexError):
    """Raised when a round index or number is out of bounds for a session."""


#  LocalWords:  CourtPairingException
