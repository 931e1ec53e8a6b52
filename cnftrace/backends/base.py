from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core import EmptyRule, TerminalRule, PairRule
    from ..grammar import Grammar


class RuleVisitor[T](ABC):
    """
    Abstract Base Class for everything that walks productions
    (compilers, the trace replayer).
    """

    @abstractmethod
    def visit_empty(self, rule: "EmptyRule") -> T:
        pass

    @abstractmethod
    def visit_terminal(self, rule: "TerminalRule") -> T:
        pass

    @abstractmethod
    def visit_pair(self, rule: "PairRule") -> T:
        pass


class Compiler[T](RuleVisitor[T]):
    """
    A visitor that renders a whole grammar into some target format.
    """

    @abstractmethod
    def compile(self, grammar: "Grammar") -> T:
        pass
