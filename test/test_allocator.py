import sys

import tinct.allocator
import tinct.object.palette

import test_base

timeit = test_base.timeit

TEST = test_base.TestBase()

pick = tinct.allocator.pick


@timeit
def test_palette():
    palette = tinct.object.palette.PALETTE
    TEST.check_eq('palette size', 14, len(palette))
    TEST.check_eq('names unique', len(palette), len({entry.name for entry in palette}))
    TEST.check_eq('rose', 12, tinct.object.palette.index('rose'))
    TEST.check_eq('slate', '#bcbcbc', tinct.object.palette.entry('slate').bright.hex())
    TEST.check_eq('red dim', '#870000', tinct.object.palette.entry('red').dim.hex())
    try:
        tinct.object.palette.entry('puce')
        TEST.fail('puce', 'Expected KeyError')
    except KeyError:
        pass
    for a, b, _ in tinct.object.palette.PENALTIES:
        tinct.object.palette.index(a)
        tinct.object.palette.index(b)


@timeit
def test_penalty():
    penalty = tinct.allocator.penalty
    TEST.check_eq('neighbors', 4, penalty(0, 1))
    TEST.check_eq('symmetric', penalty(0, 12), penalty(12, 0))
    TEST.check_eq('wraps around', 4, penalty(12, 0))
    TEST.check_eq('two apart', 1, penalty(0, 2))
    TEST.check_eq('far apart', 0, penalty(0, 6))
    TEST.check_eq('slate', 0, sum(penalty(13, i) for i in range(14)))


@timeit
def test_cost():
    cost = tinct.allocator.cost
    TEST.check_eq('empty history', 0, cost(5, []))
    TEST.check_eq('one neighbor', 4096, cost(1, [0]))
    TEST.check_eq('decay', 4 * 1024 + 512, cost(2, [3, 0]))
    TEST.check_eq('old history weighs little', 4 * 2 + 1 * 4, cost(10, list(range(10))))


@timeit
def test_pick():
    TEST.check_eq('empty history', 0, pick([]))
    TEST.check_eq('deterministic', pick([]), pick([]))
    TEST.check_eq('avoid red neighbors', 3, pick([0]))
    TEST.check_eq('two', 6, pick([3, 0]))
    TEST.check_eq('three', 9, pick([6, 3, 0]))
    TEST.check_eq('full history', 13, pick(list(range(10))))
    # Only the most recent HISTORY_LIMIT entries count
    TEST.check_eq('truncated', 13, pick(list(range(14))))
    TEST.check_eq('tuple', pick([3, 0]), pick((3, 0)))


@timeit
def test_pick_excludes_history():
    history = []
    for _ in range(tinct.allocator.HISTORY_LIMIT):
        index = pick(history)
        TEST.check_eq(f'{index} not in {history}', False, index in history)
        history.insert(0, index)
    TEST.check_eq('all distinct', len(history), len(set(history)))
    for start in range(14):
        history = [(start + i) % 14 for i in range(10)]
        TEST.check_eq(f'exclusion {history}', False, pick(history) in history)


def main_stable():
    test_palette()
    test_penalty()
    test_cost()
    test_pick()
    test_pick_excludes_history()


def main():
    main_stable()
    TEST.report_failures('test_allocator')
    sys.exit(TEST.failures)


if __name__ == '__main__':
    main()
