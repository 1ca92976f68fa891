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

FOREGROUND = 3
BACKGROUND = 4


class Color(object):

    def sgr(self, ground):
        assert False

    def __ne__(self, other):
        return not (self == other)


class NoColor(Color):

    def __repr__(self):
        return 'NoColor()'

    def __eq__(self, other):
        return type(other) is NoColor

    def __hash__(self):
        return hash(NoColor)

    # 39/49 restore the terminal's default foreground/background.
    def sgr(self, ground):
        return f'{ground}9'


class Named(Color):

    LETTERS = 'krgybmcw'

    def __init__(self, letter):
        assert letter in Named.LETTERS, letter
        self.letter = letter
        self.code = Named.LETTERS.index(letter)

    def __repr__(self):
        return f'Named({self.letter})'

    def __eq__(self, other):
        return type(other) is Named and self.letter == other.letter

    def __hash__(self):
        return hash(self.letter)

    def sgr(self, ground):
        return f'{ground}{self.code}'


class TrueColor(Color):

    def __init__(self, r, g, b):
        assert 0 <= min(r, g, b) and max(r, g, b) <= 255, (r, g, b)
        self.r = r
        self.g = g
        self.b = b

    def __repr__(self):
        return f'TrueColor({self.r}, {self.g}, {self.b})'

    def __eq__(self, other):
        return type(other) is TrueColor and self.rgb() == other.rgb()

    def __hash__(self):
        return hash(self.rgb())

    def rgb(self):
        return self.r, self.g, self.b

    def hex(self):
        return '#{:02x}{:02x}{:02x}'.format(self.r, self.g, self.b)

    def sgr(self, ground):
        return f'{ground}8;2;{self.r};{self.g};{self.b}'

    @staticmethod
    def from_hex(digits):
        assert len(digits) == 6, digits
        return TrueColor(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


NO_COLOR = NoColor()


# What the terminal is currently displaying. Bold and italic are sticky: once set, only a
# reset (SGR 0) clears them, so transition() never emits codes turning them off.
class RenderState(object):

    BOLD = '1'
    ITALIC = '3'
    RESET = '0'

    def __init__(self, fg=NO_COLOR, bg=NO_COLOR, bold=False, italic=False):
        self.fg = fg
        self.bg = bg
        self.bold = bold
        self.italic = italic

    def __repr__(self):
        style = ('BOLD|ITALIC' if self.bold and self.italic else
                 'BOLD' if self.bold else
                 'ITALIC' if self.italic else
                 'PLAIN')
        return f'RenderState({self.fg}, {self.bg}, {style})'

    def __eq__(self, other):
        return (isinstance(other, RenderState) and
                self.fg == other.fg and
                self.bg == other.bg and
                self.bold == other.bold and
                self.italic == other.italic)

    def __ne__(self, other):
        return not (self == other)

    def copy(self):
        return RenderState(self.fg, self.bg, self.bold, self.italic)

    def is_empty(self):
        return self == EMPTY

    # spec is a tinct.lexer.ColorSpec, or None.
    def apply(self, spec):
        if spec is None:
            return self.copy()
        return RenderState(self.fg if spec.fg is None else spec.fg,
                           self.bg if spec.bg is None else spec.bg,
                           self.bold or spec.bold,
                           self.italic or spec.italic)

    def transition(self, target):
        codes = []
        if target.bold and not self.bold:
            codes.append(RenderState.BOLD)
        if target.italic and not self.italic:
            codes.append(RenderState.ITALIC)
        if target.fg != self.fg:
            codes.append(target.fg.sgr(FOREGROUND))
        if target.bg != self.bg:
            codes.append(target.bg.sgr(BACKGROUND))
        return codes


EMPTY = RenderState()


def sgr(codes):
    return '\033[' + ';'.join(codes) + 'm'
