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

import subprocess
import sys

import wcwidth

import tinct.exception


def text_width(s):
    width = wcwidth.wcswidth(s)
    if width < 0:
        # Control characters present. Count the printable ones only.
        width = sum(max(wcwidth.wcwidth(c), 0) for c in s)
    return width


# Returns None if the size can't be determined, e.g. stdin is not a terminal.
def console_width():
    process = subprocess.run('stty size', shell=True, capture_output=True)
    try:
        return int(process.stdout.split()[1])
    except (IndexError, ValueError):
        return None


def parse_int(description, x):
    if x is None or type(x) is int:
        return x
    try:
        return int(x)
    except ValueError:
        raise tinct.exception.ConfigurationException(f'{description} must be an integer: {x}')


# Utility to print to stderr, flushing stdout first, to minimize weird ordering due to buffering.
def print_to_stderr(message):
    sys.stdout.flush()
    print(message, file=sys.stderr, flush=True)


class Trace(object):

    def __init__(self):
        self.tracefile = None
        self.description = None

    def enable(self, target):
        if target is sys.stderr:
            self.tracefile = sys.stderr
            self.description = 'stderr'
        else:
            try:
                self.tracefile = open(target, 'a')
                self.description = target
            except OSError as e:
                raise tinct.exception.ConfigurationException(
                    f'Unable to start tracing to {target}: {e}')

    def disable(self):
        if self.tracefile and self.tracefile is not sys.stderr:
            self.tracefile.close()
        self.tracefile = None
        self.description = None

    def write(self, phase, subject, detail=None):
        if self.tracefile:
            if detail is None:
                print(f'{phase}: {subject}', file=self.tracefile, flush=True)
            else:
                print(f'{phase}: {subject} -> {detail!r}', file=self.tracefile, flush=True)
