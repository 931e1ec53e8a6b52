"""
CYK recognition over a grammar in normal form, plus extraction of the
production-index trace for an accepted word.
"""

from typing import Iterable, List
import logging

from cnftrace.chart import Cell, Chart
from cnftrace.core import Symbol
from cnftrace.grammar import Grammar

logger = logging.getLogger(__name__)


def build_chart(grammar: Grammar, word: Iterable[Symbol]) -> Chart:
    """
    Fills the parse table for `word`.

    Single positions keep the first matching `A -> t` in production order.
    Longer ranges are scanned by ascending split, then ascending production
    index, and a later match replaces an earlier one, so each cell ends up
    holding the rightmost split and, for that split, the highest production
    index. The split is stored with the production so the backtrace never
    has to search for it again.
    """
    word = list(word)
    n = len(word)
    chart = Chart(len(grammar.nonterminals), n)

    for p, symbol in enumerate(word):
        for index, lhs in grammar.rules_producing(symbol):
            if not chart.has(lhs, p, p):
                chart.set(lhs, p, p, Cell(index))

    pairs = grammar.pair_rules

    for length in range(2, n + 1):
        for i in range(n - length + 1):
            j = i + length - 1
            for k in range(i, j):
                for index, lhs, left, right in pairs:
                    if chart.has(left, i, k) and chart.has(right, k + 1, j):
                        chart.set(lhs, i, j, Cell(index, k))

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Chart for %d symbols: %d cells filled", n, chart.filled())
    return chart


def backtrace(grammar: Grammar, chart: Chart) -> List[int]:
    """
    Walks the derivation of the start symbol over the whole chart in
    pre-order (node, left subtree, right subtree). Returns [] when the
    start symbol does not cover the word.
    """
    if chart.length == 0:
        return []

    root = grammar.index_of(grammar.start)
    if not chart.has(root, 0, chart.length - 1):
        return []

    result = []
    stack = [(root, 0, chart.length - 1)]

    while stack:
        nonterminal, start, end = stack.pop()
        cell = chart.get(nonterminal, start, end)
        result.append(cell.production)

        if cell.split is None:
            continue

        rule = grammar.productions[cell.production]
        # Right first, so the left subtree is popped next
        stack.append((grammar.index_of(rule.right), cell.split + 1, end))
        stack.append((grammar.index_of(rule.left), start, cell.split))

    return result


def accepts(grammar: Grammar, word: Iterable[Symbol]) -> bool:
    word = list(word)
    if not word:
        return grammar.empty_rule is not None

    chart = build_chart(grammar, word)
    return chart.has(grammar.index_of(grammar.start), 0, len(word) - 1)


def trace(grammar: Grammar, word: Iterable[Symbol]) -> List[int]:
    """
    Returns the production indices of a leftmost derivation of `word`,
    or an empty list when the grammar does not derive it.

    The empty word is derived only through `start -> ε`, and its trace is
    that single production.
    """
    word = list(word)

    if not word:
        if grammar.empty_rule is None:
            logger.debug("Empty word rejected: start symbol is not nullable")
            return []
        return [grammar.empty_rule]

    result = backtrace(grammar, build_chart(grammar, word))

    if result:
        logger.debug("Accepted %d symbols with %d productions", len(word), len(result))
    else:
        logger.debug("Rejected %d symbols", len(word))

    return result
