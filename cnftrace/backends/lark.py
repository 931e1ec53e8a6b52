import re
from cnftrace.core import EmptyRule, TerminalRule, PairRule
from cnftrace.backends.base import Compiler

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cnftrace.grammar import Grammar


# Characters that can't appear raw inside a Lark string literal
_ESCAPES = str.maketrans(
    {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
)


class LarkCompiler(Compiler[str]):
    """
    Compiles a grammar into a Lark grammar string.
    Does not require 'lark' to be installed.
    """

    def __init__(self, start_rule: str = "start"):
        self.start_rule = start_rule

    def compile(self, grammar: "Grammar") -> str:
        self.grammar = grammar

        # Lark refuses rules it can't find a definition for
        defined = {rule.lhs for rule in grammar.productions}
        referenced = {grammar.start}
        for rule in grammar.productions:
            if isinstance(rule, PairRule):
                referenced.update(rule.rhs)

        missing = referenced - defined
        if missing:
            names = ", ".join(sorted(repr(s) for s in missing))
            raise ValueError(f"Nonterminals without productions: {names}")

        lines = []

        # 1. Entrypoint delegating to the start symbol
        lines.append(f"{self.start_rule}: {self._rule_name(grammar.start)}")

        # 2. One rule per nonterminal, alternatives in production order
        for nonterminal in sorted(defined):
            alternatives = [rule.accept(self) for rule in grammar.rules_for(nonterminal)]
            lines.append(f"{self._rule_name(nonterminal)}: {' | '.join(alternatives)}")

        return "\n".join(lines)

    def _rule_name(self, nonterminal) -> str:
        # Lark rule names are lowercase identifiers; the index keeps them unique
        clean = re.sub(r"[^a-z0-9]", "_", str(nonterminal).lower())
        clean = re.sub(r"__+", "_", clean).strip("_")
        index = self.grammar.index_of(nonterminal)
        return f"nt{index}_{clean}" if clean else f"nt{index}"

    def visit_empty(self, rule: EmptyRule) -> str:
        # An empty alternative is how Lark spells ε
        return ""

    def visit_terminal(self, rule: TerminalRule) -> str:
        value = str(rule.terminal)
        if not value:
            raise ValueError("Empty terminals not allowed")

        clean_val = value.translate(_ESCAPES)
        return f'"{clean_val}"'

    def visit_pair(self, rule: PairRule) -> str:
        return f"{self._rule_name(rule.left)} {self._rule_name(rule.right)}"
