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

import io
import random
import sys

import tinct.lexer
import tinct.shellmode
import tinct.util
from tinct.object.color import NO_COLOR, RenderState, sgr

# A line of markup is parsed into segments, separated by * in the markup. The width of the whole line
# isn't known until the line ends, so segments are buffered. Then the gaps between them are filled so
# that the line spans the terminal, and the line is written.
#
# Escape sequences are emitted only for attributes that change (RenderState.transition), so setting
# the same color twice emits one escape.
#
# Transitions ({ } < >) may draw a separator glyph. If the background changes across the transition,
# the glyph is drawn in two colors, one background as the glyph's foreground and the other as its
# background. That makes one color appear to flow into the other.


class Separators(object):

    def __init__(self, glyphs=(), inverted=False):
        assert len(glyphs) in (0, 2, 4), glyphs
        self.glyphs = tuple(glyphs)
        self.inverted = inverted

    def __repr__(self):
        inverted = '!' if self.inverted else ''
        return f'Separators{inverted}({", ".join(self.glyphs)})'

    # } and > close, { and < open. Inversion swaps them.
    def closing(self, transition):
        return (tinct.lexer.Token.TRANSITIONS.index(transition) % 2 == 1) != self.inverted

    def glyph(self, transition):
        if len(self.glyphs) == 0:
            return None
        base = 2 if len(self.glyphs) == 4 and transition in '<>' else 0
        return self.glyphs[base + int(self.closing(transition))]


class Segment(object):

    def __init__(self, shell_mode, last_literal=None):
        self.shell_mode = shell_mode
        self.pieces = []
        self.width = 0
        self.last_literal = last_literal

    def __repr__(self):
        return f'Segment({self.width}: {self.contents()!r})'

    def escape(self, codes):
        self.pieces.append(self.shell_mode.wrap(sgr(codes)))

    def text(self, text, literal=False):
        self.pieces.append(self.shell_mode.escape_text(text))
        self.width += tinct.util.text_width(text)
        if literal and text:
            self.last_literal = text[-1]

    def contents(self):
        return ''.join(self.pieces)


class Line(object):

    def __init__(self, shell_mode):
        self.shell_mode = shell_mode
        self.segments = [Segment(shell_mode)]

    def current(self):
        return self.segments[-1]

    def new_segment(self):
        self.segments.append(Segment(self.shell_mode, self.current().last_literal))

    def width(self):
        return sum(segment.width for segment in self.segments)


class Renderer(object):

    DEFAULT_FILL = (' ',)

    def __init__(self, width, shell_mode=tinct.shellmode.RAW, output=None, rng=None, trace=None):
        self.width = width
        self.shell_mode = shell_mode
        self.output = sys.stdout if output is None else output
        self.rng = random.Random() if rng is None else rng
        self.trace = tinct.util.Trace() if trace is None else trace
        self.separators = None
        self.fill = None
        self.lines_written = 0
        # Line state
        self.line = None
        self.state = None
        self.stack = None

    def __repr__(self):
        return f'Renderer(width={self.width}, {self.shell_mode})'

    def render(self, markup):
        self.separators = Separators()
        self.fill = list(Renderer.DEFAULT_FILL)
        self.lines_written = 0
        self.start_line()
        for token in tinct.lexer.Lexer(markup).tokens():
            self.trace.write('token', token)
            if token.is_separators():
                self.separators = Separators(token.glyphs, token.inverted)
            elif token.is_fill():
                self.fill = token.glyphs
            elif token.is_segment_break():
                self.line.new_segment()
            elif token.is_whitespace():
                self.text(token.value())
            elif token.is_literal():
                self.text(token.value(), literal=True)
            elif token.is_line_break():
                self.flush_line()
                self.start_line()
            elif token.is_reset():
                self.reset()
            elif token.is_transition():
                self.transition(token)
            elif token.is_color_spec():
                self.change_state(self.state.apply(token))
            else:
                assert False, token
        self.flush_line()

    # Drawing

    def text(self, text, literal=False):
        self.line.current().text(text, literal)

    def change_state(self, target):
        # Bold and italic can only be turned off by a reset.
        target = RenderState(target.fg,
                             target.bg,
                             target.bold or self.state.bold,
                             target.italic or self.state.italic)
        codes = self.state.transition(target)
        if codes:
            self.line.current().escape(codes)
        self.state = target

    def reset(self):
        self.line.current().escape([RenderState.RESET])
        self.state = RenderState()

    def transition(self, token):
        spec = token.spec
        old = self.state
        if token.is_push():
            self.stack.append(old.copy())
            target = old.apply(spec)
        elif token.is_pop():
            restored = self.stack.pop() if self.stack else RenderState()
            target = restored.apply(spec)
        else:
            target = old.apply(spec)
        glyph = self.separators.glyph(token.symbol)
        if glyph is not None:
            if target.bg == old.bg:
                self.text(glyph)
            else:
                if self.separators.closing(token.symbol):
                    glyph_fg, glyph_bg = old.bg, target.bg
                else:
                    glyph_fg, glyph_bg = target.bg, old.bg
                self.change_state(RenderState(glyph_fg, glyph_bg, old.bold, old.italic))
                self.text(glyph)
                if not token.is_pop():
                    # The glyph's colors are not the region's. Colors start fresh, from the spec.
                    fg = NO_COLOR if spec is None or spec.fg is None else spec.fg
                    target = RenderState(fg, target.bg, target.bold, target.italic)
        if token.is_pop():
            self.reset()
        self.change_state(target)

    # Lines

    def start_line(self):
        self.line = Line(self.shell_mode)
        self.state = RenderState()
        self.stack = []

    def flush_line(self):
        if not self.state.is_empty():
            self.reset()
        text = self.justify()
        if self.lines_written > 0:
            self.output.write('\n')
        self.output.write(text)
        self.output.flush()
        self.lines_written += 1
        self.trace.write('line', self.lines_written, text)

    def justify(self):
        segments = self.line.segments
        if len(segments) == 1:
            return segments[0].contents()
        gaps = len(segments) - 1
        remainder = max(self.width - self.line.width(), 0)
        # Earlier gaps get the extra cells.
        base, extra = divmod(remainder, gaps)
        buffer = [segments[0].contents()]
        for gap, segment in enumerate(segments[1:]):
            buffer.append(self.fill_text(base + (1 if gap < extra else 0), segments[gap]))
            buffer.append(segment.contents())
        return ''.join(buffer)

    def fill_text(self, n, preceding):
        glyphs = [(preceding.last_literal or ' ') if glyph == tinct.lexer.REPEAT else glyph
                  for glyph in self.fill]
        if len(glyphs) == 1:
            fill = glyphs[0] * n
        else:
            fill = ''.join(self.rng.choice(glyphs) for _ in range(n))
        return self.shell_mode.escape_text(fill)


def render(markup, width, shell_mode=tinct.shellmode.RAW, rng=None, trace=None):
    output = io.StringIO()
    Renderer(width, shell_mode, output, rng, trace).render(markup)
    return output.getvalue()
