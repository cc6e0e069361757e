"""Court Pairing entry point."""

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

import sys

from courtpairing.testing.simulator import main as run_simulation
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def main():
    """Entry point."""
    exit_code = run_simulation()
    logger.info("run_simulation() exited with code: %s", exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
