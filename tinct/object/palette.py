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

import tinct.object.color


class PaletteEntry(object):

    def __init__(self, name, bright, dim):
        self.name = name
        self.bright = tinct.object.color.TrueColor(*bright)
        self.dim = tinct.object.color.TrueColor(*dim)

    def __repr__(self):
        return f'PaletteEntry({self.name}, {self.bright.hex()}, {self.dim.hex()})'


# Ordered so that neighbors look alike: the hue wheel, starting at red and ending at rose,
# which wraps back around to red. slate is off the wheel.
PALETTE = (
    PaletteEntry('red',     (255, 95, 95),   (135, 0, 0)),
    PaletteEntry('orange',  (255, 175, 95),  (135, 75, 0)),
    PaletteEntry('amber',   (255, 215, 95),  (128, 105, 0)),
    PaletteEntry('lime',    (175, 255, 95),  (75, 120, 0)),
    PaletteEntry('green',   (95, 215, 95),   (0, 95, 0)),
    PaletteEntry('teal',    (95, 215, 175),  (0, 100, 80)),
    PaletteEntry('cyan',    (95, 215, 255),  (0, 95, 120)),
    PaletteEntry('azure',   (95, 175, 255),  (0, 65, 135)),
    PaletteEntry('blue',    (135, 135, 255), (30, 30, 140)),
    PaletteEntry('violet',  (175, 135, 255), (75, 30, 140)),
    PaletteEntry('purple',  (215, 135, 255), (100, 20, 125)),
    PaletteEntry('magenta', (255, 135, 215), (125, 0, 95)),
    PaletteEntry('rose',    (255, 135, 175), (135, 0, 60)),
    PaletteEntry('slate',   (188, 188, 188), (68, 68, 68)),
)

# Closeness of palette entries, as undirected weighted edges. This stands in for a perceptual
# color distance: neighbors on the wheel are heavily penalized, entries two apart lightly.
# Pairs not listed are far apart, penalty 0.
PENALTIES = (
    ('red', 'orange', 4),
    ('orange', 'amber', 4),
    ('amber', 'lime', 4),
    ('lime', 'green', 4),
    ('green', 'teal', 4),
    ('teal', 'cyan', 4),
    ('cyan', 'azure', 4),
    ('azure', 'blue', 4),
    ('blue', 'violet', 4),
    ('violet', 'purple', 4),
    ('purple', 'magenta', 4),
    ('magenta', 'rose', 4),
    ('rose', 'red', 4),
    ('red', 'amber', 1),
    ('orange', 'lime', 1),
    ('amber', 'green', 1),
    ('lime', 'teal', 1),
    ('green', 'cyan', 1),
    ('teal', 'azure', 1),
    ('cyan', 'blue', 1),
    ('azure', 'violet', 1),
    ('blue', 'purple', 1),
    ('violet', 'magenta', 1),
    ('purple', 'rose', 1),
    ('magenta', 'red', 1),
    ('rose', 'orange', 1),
)


def entry(name):
    for palette_entry in PALETTE:
        if palette_entry.name == name:
            return palette_entry
    raise KeyError(name)


def index(name):
    return PALETTE.index(entry(name))
