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
import pathlib

import tinct.exception


# Location structure -> interface
#
#     .cache/tinct/
#         colors/                                 colors()
#             <sha1 of repository root>           one palette index per root


class Locations(object):
    TINCT_DIR_NAME = 'tinct'
    COLORS_DIR_NAME = 'colors'

    def __init__(self):
        self.home = Locations.normalize_dir(
            'home directory',
            os.environ.get('HOME', None),
            pathlib.Path.home())
        self.cache_base = Locations.normalize_dir(
            'application cache directory (e.g. XDG_CACHE_HOME)',
            os.environ.get('XDG_CACHE_HOME', None),
            self.home / '.cache')

    def colors(self):
        return Locations.ensure_dir_exists(self.cache_base /
                                           Locations.TINCT_DIR_NAME /
                                           Locations.COLORS_DIR_NAME)

    @staticmethod
    def ensure_dir_exists(dir):
        if dir.exists():
            if not dir.is_dir():
                raise tinct.exception.ConfigurationException(f'Not a directory: {dir}')
        else:
            try:
                dir.mkdir(exist_ok=False, parents=True)
            except OSError as e:
                raise tinct.exception.ConfigurationException(f'Unable to create {dir}: {e}')
        return dir

    @staticmethod
    def normalize_dir(description, provided, *defaults):
        dir = provided
        d = 0
        while not dir and d < len(defaults):
            dir = defaults[d]
            d += 1
        if not dir:
            raise tinct.exception.ConfigurationException(
                f'Unable to start because value of {description} cannot be determined.')
        try:
            if not isinstance(dir, pathlib.Path):
                dir = pathlib.Path(dir)
            dir = dir.expanduser()
        except RuntimeError as e:
            raise tinct.exception.ConfigurationException(
                f'Unable to start because value of {description} cannot be determined: {e}')
        return dir
