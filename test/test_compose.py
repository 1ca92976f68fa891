import datetime
import getpass
import random
import sys

import tinct.compose
import tinct.object.palette
import tinct.renderer
import tinct.util
from tinct.compose import PromptInfo

import test_base

timeit = test_base.timeit
TestDir = test_base.TestDir
strip_escapes = test_base.strip_escapes

TEST = test_base.TestBase()


@timeit
def test_prompt_dir():
    prompt_dir = tinct.compose.prompt_dir
    TEST.check_eq('home', '~', prompt_dir('/home/u', home='/home/u'))
    TEST.check_eq('under home', '~/src/x', prompt_dir('/home/u/src/x', home='/home/u'))
    TEST.check_eq('elsewhere', '/etc/x', prompt_dir('/etc/x', home='/home/u'))
    TEST.check_eq('no home', '/home/u/x', prompt_dir('/home/u/x'))
    TEST.check_eq('repo root', 'tinct', prompt_dir('/home/u/src/tinct', home='/home/u', root='/home/u/src/tinct'))
    TEST.check_eq('in repo', 'tinct/a/b',
                  prompt_dir('/home/u/src/tinct/a/b', home='/home/u', root='/home/u/src/tinct'))
    TEST.check_eq('outside repo', '~/x', prompt_dir('/home/u/x', home='/home/u', root='/home/u/src/tinct'))


@timeit
def test_quote():
    quote = tinct.compose.quote
    TEST.check_eq('plain', '"abc"', quote('abc'))
    TEST.check_eq('escapes', '"a\\"b\\\\c"', quote('a"b\\c'))
    TEST.check_eq('unprintable', '"\\u0009"', quote('\t'))
    TEST.check_eq('unicode', '"❯"', quote('❯'))
    # Quoted text renders as itself
    for text in ('abc', 'a"b\\c', '{*|0}', '50%'):
        TEST.check_eq(f'render {text}', text, tinct.renderer.render(quote(text), 80))


@timeit
def test_compose():
    info = PromptInfo('u', 'h', '~/x', '12:00:00')
    TEST.check_eq('plain',
                  'S(e0b6,e0b4)F(2500)0{w:b "u@h" } c!"~/x"0 * "12:00:00"|c!"❯"0 ',
                  tinct.compose.compose(info))
    red = tinct.object.palette.entry('red')
    info = PromptInfo('u', 'h', 'tinct', '12:00:00', branch='main', accent=red)
    TEST.check_eq('repository',
                  'S(e0b6,e0b4)F(2500)0{w:#870000 "u@h" } #ff5f5f!"tinct"0 * '
                  '{w:#870000 "main" } "12:00:00"|#ff5f5f!"❯"0 ',
                  tinct.compose.compose(info))


@timeit
def test_render_prompt():
    # Every palette entry's colors must be usable in markup.
    for accent in (None,) + tinct.object.palette.PALETTE:
        info = PromptInfo('user', 'host', '~/src', '12:34:56', branch='main', accent=accent)
        output = tinct.renderer.render(tinct.compose.compose(info), 60, rng=random.Random(0))
        lines = output.split('\n')
        TEST.check_eq(f'lines {accent}', 2, len(lines))
        first = strip_escapes(lines[0])
        TEST.check_eq(f'width {accent}', 60, tinct.util.text_width(first))
        TEST.check_eq(f'user {accent}', True, 'user@host' in first)
        TEST.check_eq(f'time {accent}', True, first.endswith('12:34:56'))
        TEST.check_eq(f'rule {accent}', True, '─' * 10 in first)
        TEST.check_eq(f'mark {accent}', '❯ ', strip_escapes(lines[1]))


@timeit
def test_gather():
    now = datetime.datetime(2026, 1, 2, 3, 4, 5)
    with TestDir() as dir:
        info = PromptInfo.gather(dir, now=now)
        TEST.check_eq('time', '03:04:05', info.time)
        TEST.check_eq('user', getpass.getuser(), info.user)
        TEST.check_eq('no branch', None, info.branch)
        TEST.check_eq('no accent', None, info.accent)
        TEST.check_eq('host', False, '.' in info.host)
        repo = dir / 'repo'
        (repo / '.git').mkdir(parents=True)
        (repo / '.git' / 'HEAD').write_text('ref: refs/heads/main\n')
        (repo / 'src').mkdir()
        accent = tinct.object.palette.PALETTE[3]
        info = PromptInfo.gather(repo / 'src', root=repo, accent=accent, now=now)
        TEST.check_eq('branch', 'main', info.branch)
        TEST.check_eq('directory', 'repo/src', info.directory)
        TEST.check_eq('accent', accent, info.accent)


def main_stable():
    test_prompt_dir()
    test_quote()
    test_compose()
    test_render_prompt()
    test_gather()


def main():
    main_stable()
    TEST.report_failures('test_compose')
    sys.exit(TEST.failures)


if __name__ == '__main__':
    main()
