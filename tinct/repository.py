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

import pathlib

MARKERS = ('.git', '.hg', '.svn', '.bzr', '_darcs', '.jj')

GIT_DIR = '.git'
HEAD = 'HEAD'
SYMBOLIC_REF = 'ref:'
BRANCH_PREFIX = 'refs/heads/'
GITDIR_POINTER = 'gitdir:'
SHORT_SHA = 7


# Returns the nearest directory, starting at start and moving up, containing one of the markers.
# None if there is no such directory.
def find_root(start, markers=MARKERS):
    dir = pathlib.Path(start).expanduser().resolve()
    for candidate in (dir, *dir.parents):
        for marker in markers:
            if (candidate / marker).exists():
                return candidate
    return None


def git_dir(root):
    git = pathlib.Path(root) / GIT_DIR
    if git.is_dir():
        return git
    if git.is_file():
        # Worktrees and submodules: .git is a file pointing to the real git directory.
        contents = git.read_text().strip()
        if contents.startswith(GITDIR_POINTER):
            pointer = pathlib.Path(contents[len(GITDIR_POINTER):].strip())
            return pointer if pointer.is_absolute() else (git.parent / pointer)
    return None


def branch(root):
    dir = git_dir(root)
    if dir is None:
        return None
    try:
        head = (dir / HEAD).read_text().strip()
    except OSError:
        return None
    if head.startswith(SYMBOLIC_REF):
        ref = head[len(SYMBOLIC_REF):].strip()
        return ref[len(BRANCH_PREFIX):] if ref.startswith(BRANCH_PREFIX) else ref
    return head[:SHORT_SHA] if head else None
