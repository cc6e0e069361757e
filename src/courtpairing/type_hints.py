"""Type hints used in Court Pairing."""

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

from typing import Dict, List, Tuple

# ids are opaque strings handed to us by the surrounding application
PlayerId = str
CourtId = str
GameId = str

# player id -> fixed partner id, stored in both directions
PartnerMap = Dict[PlayerId, PlayerId]

# List of players
Players = List["Player"]

# Two players in a serve or receive slot
TeamIds = Tuple[PlayerId, PlayerId]

#  LocalWords:  PartnerMap TeamIds
