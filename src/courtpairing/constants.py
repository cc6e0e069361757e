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

# --- Constants ---
APP_NAME = "Court Pairing"

# Game shape
PLAYERS_PER_GAME = 4
MIN_PLAYERS_PER_SESSION = 4
MAX_PLAYERS_PER_SESSION = 128
MIN_COURTS = 1
MAX_COURTS = 32

# Ratings (DUPR style)
MIN_RATING = 0.0
MAX_RATING = 7.0
UNRATED = 0.0

# Scoring
DEFAULT_GAME_SCORE = 11

# Round optimizer
NUM_TRIALS = 3

# Receive player 3: weight on each historical interaction with the serve team
OPPONENT_INTERACTION_WEIGHT = 2
# Receive player 3: candidate was a last-round opponent of player 1 or 2
RECENT_OPPONENT_PENALTY = 15
# Receive player 4: candidate was a last-round partner/opponent of player 1, 2 or 3
RECENT_INTERACTION_PENALTY = 10

# Freshness score, both are increased by the round number
REPEAT_PARTNER_PENALTY = 35
REPEAT_OPPONENT_PENALTY = 15

# Lottery sit-out selector weights
LOTTERY_UNPAIRED_WEIGHT = 2
LOTTERY_PAIRED_WEIGHT = 1
