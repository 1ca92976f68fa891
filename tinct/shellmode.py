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

import os

import psutil

import tinct.exception


# How escape sequences are bracketed so that a shell's line editor knows they occupy no columns,
# and how literal text is protected from the shell's own prompt expansion.
class ShellMode(object):

    def __init__(self, name, prefix, suffix):
        self.name = name
        self.prefix = prefix
        self.suffix = suffix

    def __repr__(self):
        return f'{self.__class__.__name__}({self.name})'

    def wrap(self, escape):
        return f'{self.prefix}{escape}{self.suffix}'

    def escape_text(self, text):
        return text


class RawMode(ShellMode):

    def __init__(self):
        super().__init__('raw', '', '')


class ZshMode(ShellMode):

    def __init__(self):
        super().__init__('zsh', '%{', '%}')

    def escape_text(self, text):
        return text.replace('%', '%%')


class BashMode(ShellMode):

    def __init__(self):
        super().__init__('bash', '\\[', '\\]')

    def escape_text(self, text):
        return text.replace('\\', '\\\\')


RAW = RawMode()
ZSH = ZshMode()
BASH = BashMode()

MODES = {
    'raw': RAW,
    'none': RAW,
    'zsh': ZSH,
    'bash': BASH
}

AUTO = 'auto'


def shell_mode(name):
    if name is None:
        return RAW
    if name == AUTO:
        return detect()
    try:
        return MODES[name]
    except KeyError:
        raise tinct.exception.ConfigurationException(
            f'Unknown shell mode: {name}. Use one of: {", ".join(sorted(MODES))}, {AUTO}')


# tinct is normally run from the shell whose prompt it renders, so the parent process identifies the shell.
def detect(pid=None):
    try:
        name = psutil.Process(os.getppid() if pid is None else pid).name()
    except psutil.Error:
        return RAW
    # Login shells are named -bash, -zsh
    name = name.lstrip('-')
    return (ZSH if name.startswith('zsh') else
            BASH if name.startswith('bash') else
            RAW)
