# This file is part of tinct.
#
# tinct is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the
# Free Software Foundation, either version 3 of the License, (or at your
# option) any later version.
#
# tinct is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE.  See the GNU General Public License
# for more details.
#
# You should have received a copy of the GNU General Public License
# along with tinct.  If not, see <https://www.gnu.org/licenses/>.

import tinct.object.palette

PALETTE = tinct.object.palette.PALETTE

HISTORY_LIMIT = 10
RECENCY_WEIGHT = 1024


def _penalty_table():
    table = {}
    for a, b, weight in tinct.object.palette.PENALTIES:
        i = tinct.object.palette.index(a)
        j = tinct.object.palette.index(b)
        table[(i, j)] = weight
        table[(j, i)] = weight
    return table


_PENALTY = _penalty_table()


def penalty(a, b):
    return _PENALTY.get((a, b), 0)


# history: palette indices chosen before, most recent first. The weight of a neighbor halves
# with each step back in history, so the most recent colors dominate.
def cost(candidate, history):
    return sum(penalty(candidate, used) * (RECENCY_WEIGHT >> i)
               for i, used in enumerate(history))


def pick(history):
    history = list(history)[:HISTORY_LIMIT]
    used = set(history)
    candidates = [i for i in range(len(PALETTE)) if i not in used]
    # min keeps the first of equal-cost candidates, i.e. the lowest index.
    return min(candidates, key=lambda candidate: cost(candidate, history))
