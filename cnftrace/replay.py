"""
Turning traces back into words.
"""

from typing import Any, Iterable, List, Optional, Tuple
import logging

from cnftrace.backends.base import RuleVisitor
from cnftrace.core import EmptyRule, PairRule, Production, Symbol, TerminalRule
from cnftrace.errors import InvalidTrace
from cnftrace.grammar import Grammar

logger = logging.getLogger(__name__)


class _Expander(RuleVisitor[None]):
    """Appends terminals to the word and queues the nonterminals left to expand."""

    def __init__(self):
        self.word: List[Symbol] = []
        self.pending: List[Symbol] = []

    def visit_empty(self, rule: EmptyRule):
        pass

    def visit_terminal(self, rule: TerminalRule):
        self.word.append(rule.terminal)

    def visit_pair(self, rule: PairRule):
        # Stack order: the left child is expanded first
        self.pending.append(rule.right)
        self.pending.append(rule.left)


def _lookup(
    grammar: Grammar, trace: List[Any], position: int, expected: Optional[Symbol]
) -> Production:
    if position >= len(trace):
        raise InvalidTrace(f"Trace ended while {expected!r} still needed a production")

    index = trace[position]
    valid = isinstance(index, int) and not isinstance(index, bool)
    if not valid or not 0 <= index < len(grammar.productions):
        raise InvalidTrace(f"Position {position}: {index!r} is not a production index")

    rule = grammar.productions[index]
    if expected is not None and rule.lhs != expected:
        raise InvalidTrace(
            f"Position {position}: production {index} '{rule}' cannot expand {expected!r}"
        )
    return rule


def reconstruct_word(grammar: Grammar, trace: Iterable[int]) -> List[Symbol]:
    """
    Replays a trace and returns the terminals it derives.

    Indices are consumed front to back. Each nonterminal on a right-hand
    side takes the next index; an index read while nothing is pending
    starts a new derivation whose word is appended to the output.

    Raises:
        InvalidTrace: If an index is out of range, expands the wrong
            nonterminal, or the trace stops in the middle of a derivation.
    """
    trace = list(trace)
    expander = _Expander()
    position = 0

    while position < len(trace):
        _lookup(grammar, trace, position, None).accept(expander)
        position += 1

        while expander.pending:
            expected = expander.pending.pop()
            _lookup(grammar, trace, position, expected).accept(expander)
            position += 1

    logger.debug("Replayed %d productions into %d symbols", len(trace), len(expander.word))
    return expander.word


def _leftmost_nonterminal(grammar: Grammar, form: List[Symbol]) -> Optional[int]:
    for i, symbol in enumerate(form):
        if symbol in grammar.nonterminals:
            return i
    return None


def derivation(grammar: Grammar, trace: Iterable[int]) -> List[Tuple[Symbol, ...]]:
    """
    The sentential forms of the leftmost derivation a trace encodes, from
    the root's left-hand side down to the derived word.
    """
    trace = list(trace)
    if not trace:
        return []

    form = [_lookup(grammar, trace, 0, None).lhs]
    forms = [tuple(form)]

    for position in range(len(trace)):
        slot = _leftmost_nonterminal(grammar, form)
        if slot is None:
            raise InvalidTrace(
                f"Position {position}: derivation already complete, "
                f"{len(trace) - position} indices left over"
            )

        rule = _lookup(grammar, trace, position, form[slot])
        form[slot : slot + 1] = rule.rhs
        forms.append(tuple(form))

    slot = _leftmost_nonterminal(grammar, form)
    if slot is not None:
        _lookup(grammar, trace, len(trace), form[slot])

    return forms
