from cnftrace.core import EmptyRule, TerminalRule, PairRule
from cnftrace.backends.base import Compiler

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cnftrace.grammar import Grammar


class BNFCompiler(Compiler[str]):
    """
    Renders a grammar in the plain text form read by `Grammar.from_text`.

    Productions are written one per line in their original order, so
    reading the output back keeps every production index.
    """

    def __init__(self, arrow: str = "->", epsilon: str = "ε", header: bool = True):
        self.arrow = arrow
        self.epsilon = epsilon
        self.header = header

    def compile(self, grammar: "Grammar") -> str:
        lines = []

        if self.header:
            lines.append("N = " + " ".join(sorted(str(s) for s in grammar.nonterminals)))
            lines.append("T = " + " ".join(sorted(str(s) for s in grammar.terminals)))
            lines.append(f"S = {grammar.start}")
            lines.append("")

        for rule in grammar.productions:
            lines.append(f"{rule.lhs} {self.arrow} {rule.accept(self)}")

        return "\n".join(lines)

    def visit_empty(self, rule: EmptyRule) -> str:
        return self.epsilon

    def visit_terminal(self, rule: TerminalRule) -> str:
        return str(rule.terminal)

    def visit_pair(self, rule: PairRule) -> str:
        return f"{rule.left} {rule.right}"
