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

import datetime
import getpass
import pathlib
import socket

import tinct.repository

# Markup for the default prompt:
#
#     ( user@host ) directory ──────────────────── ( branch ) time
#     ❯
#
# ( ) are rounded bubble caps. The accent color, if any, comes from the repository's palette entry.

ROUNDED_CAPS = 'S(e0b6,e0b4)'
RULE = 'F(2500)'
PROMPT_MARK = '❯'
TIME_FORMAT = '%H:%M:%S'

# Used outside repositories
DEFAULT_BUBBLE = ':b'
DEFAULT_ACCENT = 'c'


class PromptInfo(object):

    def __init__(self, user, host, directory, time, branch=None, accent=None):
        self.user = user
        self.host = host
        self.directory = directory
        self.time = time
        self.branch = branch
        self.accent = accent

    def __repr__(self):
        return (f'PromptInfo({self.user}@{self.host}, {self.directory}, {self.time}, '
                f'branch={self.branch}, accent={self.accent})')

    @staticmethod
    def gather(directory, root=None, accent=None, now=None):
        if now is None:
            now = datetime.datetime.now()
        return PromptInfo(user=getpass.getuser(),
                          host=socket.gethostname().split('.')[0],
                          directory=prompt_dir(directory, pathlib.Path.home(), root),
                          time=now.strftime(TIME_FORMAT),
                          branch=None if root is None else tinct.repository.branch(root),
                          accent=accent)


def prompt_dir(directory, home=None, root=None):
    dir = pathlib.Path(directory)
    if root is not None:
        root = pathlib.Path(root)
        try:
            relative = dir.relative_to(root).as_posix()
            return root.name if relative == '.' else f'{root.name}/{relative}'
        except ValueError:
            # dir is not under root
            pass
    if home is not None:
        try:
            relative = dir.relative_to(home).as_posix()
            return '~' if relative == '.' else f'~/{relative}'
        except ValueError:
            pass
    return dir.as_posix()


# Markup literal for text
def quote(text):
    chars = ['"']
    for c in text:
        if c in '"\\':
            chars.append('\\')
            chars.append(c)
        elif not c.isprintable():
            chars.append('\\u{:04x}'.format(ord(c) if ord(c) <= 0xffff else 0xfffd))
        else:
            chars.append(c)
    chars.append('"')
    return ''.join(chars)


def bubble(text, background):
    return '{w' + background + ' ' + quote(text) + ' }'


def compose(info):
    if info.accent is None:
        background = DEFAULT_BUBBLE
        accent = DEFAULT_ACCENT
    else:
        background = ':' + info.accent.dim.hex()
        accent = info.accent.bright.hex()
    buffer = [ROUNDED_CAPS, RULE, '0']
    buffer.append(bubble(f'{info.user}@{info.host}', background))
    buffer.append(f' {accent}!{quote(info.directory)}0 ')
    buffer.append('*')
    buffer.append(' ')
    if info.branch:
        buffer.append(bubble(info.branch, background))
        buffer.append(' ')
    buffer.append(quote(info.time))
    buffer.append('|')
    buffer.append(f'{accent}!{quote(PROMPT_MARK)}0 ')
    return ''.join(buffer)
