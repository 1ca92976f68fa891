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

"""Fatal conditions raised while rendering a prompt.

Everything here extends C{BaseException}, so a stray C{except Exception} can't
swallow a render failure. The top level (C{tinct.main}) reports the message and exits.
"""


# Exception for terminating a render. By extending BaseException, this exception
# cannot be caught by "except Exception".
class KillRenderException(BaseException):

    def __init__(self, cause):
        super().__init__(cause)
        self.cause = cause

    def __str__(self):
        return str(self.cause)


# Bad flag or environment value: unknown shell mode, non-integer width, ...
class ConfigurationException(KillRenderException):

    def __init__(self, message):
        super().__init__(message)


class MarkupError(KillRenderException):
    SNIPPET_SIZE = 10

    def __init__(self, text, position, message):
        super().__init__(message)
        self.text = text
        self.position = position
        self.message = message

    def __str__(self):
        if self.text is None or self.position is None:
            return self.message
        snippet_start = max(self.position - MarkupError.SNIPPET_SIZE, 0)
        snippet_end = min(self.position + MarkupError.SNIPPET_SIZE + 1, len(self.text))
        snippet = self.text[snippet_start:snippet_end]
        if snippet_start > 0:
            snippet = '...' + snippet
        if snippet_end < len(self.text):
            snippet = snippet + '...'
        return f'Markup error at position {self.position} of "{snippet}": {self.message}'


class UnrecognizedTokenError(MarkupError):

    def __init__(self, text, position, message=None):
        if message is None:
            found = text[position] if position < len(text) else 'end of input'
            message = f'Unrecognized token: {found}'
        super().__init__(text, position, message)


class UnknownColorError(MarkupError):

    def __init__(self, text, position, color):
        super().__init__(text, position, f'Unknown color: {color}')
        self.color = color


class MalformedColorError(MarkupError):

    def __init__(self, text, position, color):
        super().__init__(text, position, f'Malformed color, expected #rrggbb: {color}')
        self.color = color
