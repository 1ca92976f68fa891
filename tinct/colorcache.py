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

import hashlib
import os
import pathlib

import tinct.allocator
import tinct.exception

# One file per repository root, named by a hash of the root's path. The file contains the root's palette
# index as a decimal integer on a single line. A file's modification time records when its root was last
# used, which orders the history and drives eviction.


class ColorCache(object):

    CAPACITY = 10

    def __init__(self, directory, capacity=CAPACITY, trace=None):
        self.directory = pathlib.Path(directory)
        self.capacity = capacity
        self.trace = trace

    def __repr__(self):
        return f'{self.__class__.__name__}({self.directory})'

    def color_index(self, root):
        path = self.path(root)
        index = ColorCache.read(path)
        if index is None:
            index = tinct.allocator.pick(self.history())
            self.update(lambda: path.write_text(f'{index}\n'))
            self.note('assign', root, index)
            self.evict()
        else:
            self.update(lambda: os.utime(path))
            self.note('cached', root, index)
        return index

    # Palette indices, most recently used first.
    def history(self):
        history = []
        for path in self.paths():
            index = ColorCache.read(path)
            if index is not None:
                history.append(index)
        return history[:self.capacity]

    def evict(self):
        for path in self.paths()[self.capacity:]:
            self.note('evict', path.name)
            self.update(lambda: path.unlink(missing_ok=True))

    def path(self, root):
        key = pathlib.Path(root).expanduser().resolve().as_posix()
        return self.directory / hashlib.sha1(key.encode('utf-8')).hexdigest()

    # Most recently used first
    def paths(self):
        try:
            paths = [path for path in self.directory.iterdir() if path.is_file()]
        except OSError as e:
            raise tinct.exception.ConfigurationException(f'Unable to read color cache {self.directory}: {e}')
        return sorted(paths, key=lambda path: (-path.stat().st_mtime_ns, path.name))

    def update(self, action):
        try:
            action()
        except OSError as e:
            raise tinct.exception.ConfigurationException(f'Unable to update color cache {self.directory}: {e}')

    def note(self, phase, subject, detail=None):
        if self.trace:
            self.trace.write(phase, subject, detail)

    # Returns None if the file is missing, unreadable, or doesn't hold a valid palette index.
    @staticmethod
    def read(path):
        try:
            index = int(path.read_text().strip())
        except (OSError, ValueError):
            return None
        return index if 0 <= index < len(tinct.allocator.PALETTE) else None
