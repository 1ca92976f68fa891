import os
import sys

import tinct.colorcache
import tinct.exception
import tinct.locations

import test_base

timeit = test_base.timeit
TestDir = test_base.TestDir
environment = test_base.environment

TEST = test_base.TestBase()

# mtimes in the past, so that anything touched during the test is newer.
BASE_TIME_NS = 1_500_000_000 * 1_000_000_000


def assign(cache, root, age):
    index = cache.color_index(root)
    mtime = BASE_TIME_NS + age * 1_000_000_000
    os.utime(cache.path(root), ns=(mtime, mtime))
    return index


@timeit
def test_assign():
    with TestDir() as dir:
        cache = tinct.colorcache.ColorCache(dir)
        TEST.check_eq('first', 0, assign(cache, dir / 'a', 1))
        TEST.check_eq('file contents', '0\n', cache.path(dir / 'a').read_text())
        TEST.check_eq('second', 3, assign(cache, dir / 'b', 2))
        TEST.check_eq('third', 6, assign(cache, dir / 'c', 3))
        TEST.check_eq('history', [6, 3, 0], cache.history())
        # Already assigned: same index, and now most recently used
        TEST.check_eq('cached', 0, cache.color_index(dir / 'a'))
        TEST.check_eq('touched', [0, 6, 3], cache.history())
        TEST.check_eq('one file per root', 3, len(cache.paths()))


@timeit
def test_evict():
    with TestDir() as dir:
        cache = tinct.colorcache.ColorCache(dir, capacity=3)
        assign(cache, dir / 'a', 1)
        assign(cache, dir / 'b', 2)
        assign(cache, dir / 'c', 3)
        TEST.check_eq('fourth', 9, cache.color_index(dir / 'd'))
        TEST.check_eq('evicted count', 3, len(cache.paths()))
        TEST.check_eq('oldest evicted', False, cache.path(dir / 'a').exists())
        TEST.check_eq('newest kept', True, cache.path(dir / 'd').exists())
        TEST.check_eq('history after eviction', [9, 6, 3], cache.history())
        # An evicted root gets a new color
        TEST.check_eq('reassigned', 0, cache.color_index(dir / 'a'))


@timeit
def test_invalid_entries():
    with TestDir() as dir:
        cache = tinct.colorcache.ColorCache(dir)
        read = tinct.colorcache.ColorCache.read
        TEST.check_eq('missing', None, read(dir / 'missing'))
        for contents in ('junk', '', '99', '-1', '14'):
            path = dir / 'entry'
            path.write_text(contents)
            TEST.check_eq(f'invalid: {contents!r}', None, read(path))
        path.write_text(' 13 \n')
        TEST.check_eq('whitespace', 13, read(path))
        # A corrupt file for the root itself is replaced, and isn't part of the history.
        cache.path(dir / 'a').write_text('junk')
        path.write_text('junk')
        TEST.check_eq('replaced', 0, cache.color_index(dir / 'a'))
        TEST.check_eq('replaced contents', '0\n', cache.path(dir / 'a').read_text())


@timeit
def test_path():
    with TestDir() as dir:
        (dir / 'repo').mkdir()
        cache = tinct.colorcache.ColorCache(dir / 'colors')
        TEST.check_eq('normalized', cache.path(dir / 'repo'), cache.path(dir / 'repo' / '..' / 'repo'))
        TEST.check_eq('string', cache.path(dir / 'repo'), cache.path(str(dir / 'repo')))
        TEST.check_eq('distinct', False, cache.path(dir / 'repo') == cache.path(dir / 'other'))
        name = cache.path(dir / 'repo').name
        TEST.check_eq('sha1 name', 40, len(name))
        TEST.check_eq('in directory', dir / 'colors', cache.path(dir / 'repo').parent)


@timeit
def test_locations():
    with TestDir() as dir:
        with environment(HOME=str(dir / 'home'), XDG_CACHE_HOME=None):
            colors = tinct.locations.Locations().colors()
            TEST.check_eq('default cache', dir / 'home' / '.cache' / 'tinct' / 'colors', colors)
            TEST.check_eq('created', True, colors.is_dir())
        with environment(HOME=str(dir / 'home'), XDG_CACHE_HOME=str(dir / 'xdg')):
            TEST.check_eq('xdg cache', dir / 'xdg' / 'tinct' / 'colors', tinct.locations.Locations().colors())
        # XDG_CACHE_HOME is a file, so the cache directory can't be created under it.
        (dir / 'file').write_text('')
        with environment(XDG_CACHE_HOME=str(dir / 'file')):
            e = TEST.run(test=lambda: tinct.locations.Locations().colors(),
                         expected_exception=tinct.exception.ConfigurationException)
            TEST.check_substring('cannot create', 'Unable to create', str(e))
        (dir / 'xdg' / 'tinct' / 'colors').rmdir()
        (dir / 'xdg' / 'tinct' / 'colors').write_text('')
        with environment(XDG_CACHE_HOME=str(dir / 'xdg')):
            e = TEST.run(test=lambda: tinct.locations.Locations().colors(),
                         expected_exception=tinct.exception.ConfigurationException)
            TEST.check_substring('not a directory', 'Not a directory', str(e))


@timeit
def test_cache_errors():
    with TestDir() as dir:
        cache = tinct.colorcache.ColorCache(dir / 'missing')
        e = TEST.run(test=lambda: cache.color_index(dir / 'a'),
                     expected_exception=tinct.exception.ConfigurationException)
        TEST.check_substring('missing directory', 'Unable to read color cache', str(e))
        # The root's cache entry can't be written
        cache = tinct.colorcache.ColorCache(dir)
        cache.path(dir / 'a').mkdir()
        e = TEST.run(test=lambda: cache.color_index(dir / 'a'),
                     expected_exception=tinct.exception.ConfigurationException)
        TEST.check_substring('unwritable entry', 'Unable to update color cache', str(e))


def main_stable():
    test_assign()
    test_evict()
    test_invalid_entries()
    test_path()
    test_locations()
    test_cache_errors()


def main():
    main_stable()
    TEST.report_failures('test_colorcache')
    sys.exit(TEST.failures)


if __name__ == '__main__':
    main()
