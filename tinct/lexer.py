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

import string

import tinct.object.color
from tinct.exception import MarkupError, UnrecognizedTokenError, UnknownColorError, MalformedColorError

HEX_DIGITS = string.hexdigits

# In a fill list, stands for the most recent literal character (F(#)).
REPEAT = -1


def is_hex(s):
    return s is not None and len(s) > 0 and all(c in HEX_DIGITS for c in s)


# ----------------------------------------------------------------------------------------------------------------------

# Tokens

class Source(object):

    def __init__(self, text, position=0):
        self.text = text
        self.start = position
        self.end = position

    def __repr__(self):
        return f'{self.__class__.__name__}([{self.start}:{self.end}]{self.text[self.start:self.end]})'

    def more(self):
        return self.end < len(self.text)

    def peek(self, n=1):
        start = self.end
        end = self.end + n
        return self.text[start:end] if end <= len(self.text) else None

    def next_char(self):
        c = None
        if self.end < len(self.text):
            c = self.text[self.end]
            self.end += 1
        return c

    def match(self, symbol):
        return self.text.startswith(symbol, self.end)

    def raw(self):
        return self.text[self.start:self.end]


class Token(Source):
    SEPARATORS = 'S('
    SEPARATORS_INVERTED = 'S!('
    FILL = 'F('
    GLYPH_LIST_END = ')'
    GLYPH_LIST_DELIMITER = ','
    SEGMENT_BREAK = '*'
    QUOTE = '"'
    ESCAPE_CHAR = '\\'
    LINE_BREAK = '|'
    RESET = '0'
    TRANSITIONS = '{}<>'
    PUSH = '{'
    POP = '}'
    WHITESPACE = ' \t'
    SKIPPED = '\r\n'
    BACKGROUND = ':'
    TRUE_COLOR = '#'
    BOLD = '!'
    ITALIC = '/'
    COLOR_SPEC_SYMBOLS = BACKGROUND + TRUE_COLOR + BOLD + ITALIC

    def value(self):
        return None

    def is_separators(self):
        return False

    def is_fill(self):
        return False

    def is_segment_break(self):
        return False

    def is_whitespace(self):
        return False

    def is_literal(self):
        return False

    def is_line_break(self):
        return False

    def is_reset(self):
        return False

    def is_transition(self):
        return False

    def is_color_spec(self):
        return False

    @staticmethod
    def starts_glyph_list(text, position):
        return (text.startswith(Token.SEPARATORS, position) or
                text.startswith(Token.SEPARATORS_INVERTED, position) or
                text.startswith(Token.FILL, position))

    @staticmethod
    def starts_color_spec(text, position):
        if position >= len(text) or Token.starts_glyph_list(text, position):
            return False
        c = text[position]
        return (c.isascii() and c.isalpha()) or c in Token.COLOR_SPEC_SYMBOLS


# NAME(item,item,...): S and F. An item of two or more hex digits is a code point,
# anything else is literal text.
class GlyphList(Token):

    def __init__(self, text, position):
        super().__init__(text, position)
        self.glyphs = None

    def value(self):
        return self.glyphs

    def scan_items(self):
        close = self.text.find(Token.GLYPH_LIST_END, self.end)
        if close < 0:
            raise UnrecognizedTokenError(self.text, self.start, f'Unterminated {self.raw()}')
        contents = self.text[self.end:close]
        self.end = close + 1
        items = contents.split(Token.GLYPH_LIST_DELIMITER) if contents else []
        for item in items:
            if len(item) == 0:
                raise MarkupError(self.text, self.start, f'Empty glyph in {self.raw()}')
        return items

    def code_point(self, item):
        if len(item) > 1 and is_hex(item):
            code = int(item, 16)
            if code > 0x10ffff:
                raise MarkupError(self.text, self.start, f'Not a code point: {item}')
            return chr(code)
        return None


class SeparatorsToken(GlyphList):

    def __init__(self, text, position):
        super().__init__(text, position)
        self.inverted = False
        self.scan()

    def is_separators(self):
        return True

    def scan(self):
        c = self.next_char()
        assert c == 'S'
        if self.peek() == Token.BOLD:
            self.next_char()
            self.inverted = True
        c = self.next_char()
        assert c == '('
        glyphs = []
        for item in self.scan_items():
            code_point = self.code_point(item)
            glyphs.append(item if code_point is None else code_point)
        if len(glyphs) not in (0, 2, 4):
            raise MarkupError(self.text, self.start,
                              f'Separators take 2 or 4 glyphs, not {len(glyphs)}: {self.raw()}')
        self.glyphs = tuple(glyphs)


class FillToken(GlyphList):

    def __init__(self, text, position):
        super().__init__(text, position)
        self.scan()

    def is_fill(self):
        return True

    def scan(self):
        c = self.next_char()
        assert c == 'F'
        c = self.next_char()
        assert c == '('
        glyphs = []
        for item in self.scan_items():
            if item == Token.TRUE_COLOR:
                glyphs.append(REPEAT)
            else:
                code_point = self.code_point(item)
                if code_point is None:
                    glyphs.extend(item)
                else:
                    glyphs.append(code_point)
        if len(glyphs) == 0:
            raise MarkupError(self.text, self.start, f'Fill requires at least one glyph: {self.raw()}')
        self.glyphs = glyphs


class Whitespace(Token):

    def __init__(self, text, position):
        super().__init__(text, position)
        while self.more() and self.peek() in Token.WHITESPACE:
            self.next_char()

    def value(self):
        return self.raw()

    def is_whitespace(self):
        return True


# "..." with \" \\ and \uXXXX escapes. Other escaped characters are kept, backslash included.
class Literal(Token):

    def __init__(self, text, position):
        super().__init__(text, position)
        self.string = None
        self.scan()

    def value(self):
        return self.string

    def is_literal(self):
        return True

    def scan(self):
        chars = []
        quote = self.next_char()
        assert quote == Token.QUOTE
        while True:
            c = self.next_char()
            if c is None:
                raise UnrecognizedTokenError(self.text, self.start, 'Unterminated string')
            elif c == Token.QUOTE:
                break
            elif c == Token.ESCAPE_CHAR:
                c = self.next_char()
                if c is None:
                    raise UnrecognizedTokenError(self.text, self.start, 'Unterminated string')
                elif c in (Token.QUOTE, Token.ESCAPE_CHAR):
                    chars.append(c)
                elif c == 'u':
                    digits = self.peek(4)
                    if not is_hex(digits):
                        raise MarkupError(self.text, self.end - 2, 'Malformed \\u escape')
                    self.end += 4
                    chars.append(chr(int(digits, 16)))
                else:
                    chars.append(Token.ESCAPE_CHAR)
                    chars.append(c)
            else:
                chars.append(c)
        self.string = ''.join(chars)


# One or more of: color letter (foreground), :letter or :#rrggbb (background),
# #rrggbb (foreground), ! (bold), / (italic).
class ColorSpec(Token):

    def __init__(self, text, position):
        super().__init__(text, position)
        self.fg = None
        self.bg = None
        self.bold = False
        self.italic = False
        self.scan()

    def __repr__(self):
        return f'ColorSpec(fg={self.fg}, bg={self.bg}, bold={self.bold}, italic={self.italic})'

    def value(self):
        return self

    def is_color_spec(self):
        return True

    def scan(self):
        while Token.starts_color_spec(self.text, self.end):
            c = self.peek()
            if c == Token.BOLD:
                self.next_char()
                self.bold = True
            elif c == Token.ITALIC:
                self.next_char()
                self.italic = True
            elif c == Token.BACKGROUND:
                self.next_char()
                self.bg = self.scan_color()
            else:
                self.fg = self.scan_color()

    def scan_color(self):
        position = self.end
        c = self.next_char()
        if c == Token.TRUE_COLOR:
            digits = []
            while len(digits) < 6 and self.more() and self.peek() in HEX_DIGITS:
                digits.append(self.next_char())
            digits = ''.join(digits)
            if len(digits) < 6:
                raise MalformedColorError(self.text, position, Token.TRUE_COLOR + digits)
            return tinct.object.color.TrueColor.from_hex(digits)
        elif c is not None and c in tinct.object.color.Named.LETTERS:
            return tinct.object.color.Named(c)
        else:
            raise UnknownColorError(self.text, position, 'end of input' if c is None else c)


# {, }, < or >, with the color spec that immediately follows, if any.
class Transition(Token):

    def __init__(self, text, position):
        super().__init__(text, position)
        self.symbol = self.next_char()
        assert self.symbol in Token.TRANSITIONS
        self.spec = None
        if Token.starts_color_spec(self.text, self.end):
            self.spec = ColorSpec(self.text, self.end)
            self.end = self.spec.end

    def value(self):
        return self.symbol

    def is_transition(self):
        return True

    def index(self):
        return Token.TRANSITIONS.index(self.symbol)

    def is_push(self):
        return self.symbol == Token.PUSH

    def is_pop(self):
        return self.symbol == Token.POP


class Symbol(Token):

    def __init__(self, text, position, symbol):
        super().__init__(text, position)
        self.symbol = symbol
        self.end += len(symbol)

    def value(self):
        return self.symbol


class SegmentBreak(Symbol):

    def __init__(self, text, position):
        super().__init__(text, position, Token.SEGMENT_BREAK)

    def is_segment_break(self):
        return True


class LineBreak(Symbol):

    def __init__(self, text, position):
        super().__init__(text, position, Token.LINE_BREAK)

    def is_line_break(self):
        return True


class Reset(Symbol):

    def __init__(self, text, position):
        super().__init__(text, position, Token.RESET)

    def is_reset(self):
        return True


# ----------------------------------------------------------------------------------------------------------------------

# Lexing

class Lexer(Source):

    def __init__(self, text):
        super().__init__(text)

    def tokens(self):
        token = self.next_token()
        while token is not None:
            yield token
            token = self.next_token()

    # The order of the tests is the token priority: the first match wins.
    def next_token(self):
        token = None
        self.skip_line_terminators()
        if self.more():
            c = self.peek()
            if self.match(Token.SEPARATORS) or self.match(Token.SEPARATORS_INVERTED):
                token = SeparatorsToken(self.text, self.end)
            elif self.match(Token.FILL):
                token = FillToken(self.text, self.end)
            elif c == Token.SEGMENT_BREAK:
                token = SegmentBreak(self.text, self.end)
            elif c in Token.WHITESPACE:
                token = Whitespace(self.text, self.end)
            elif c == Token.QUOTE:
                token = Literal(self.text, self.end)
            elif c == Token.LINE_BREAK:
                token = LineBreak(self.text, self.end)
            elif c == Token.RESET:
                token = Reset(self.text, self.end)
            elif c in Token.TRANSITIONS:
                token = Transition(self.text, self.end)
            elif Token.starts_color_spec(self.text, self.end):
                token = ColorSpec(self.text, self.end)
            else:
                raise UnrecognizedTokenError(self.text, self.end)
            self.end = token.end
        return token

    def skip_line_terminators(self):
        while self.more() and self.peek() in Token.SKIPPED:
            self.next_char()
