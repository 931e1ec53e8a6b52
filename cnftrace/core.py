from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Hashable, Tuple, TYPE_CHECKING


if TYPE_CHECKING:
    from .backends.base import RuleVisitor


# Terminals and nonterminals are plain hashable values (usually strings).
Symbol = Hashable


@dataclass(frozen=True)
class Production(ABC):
    """
    A single rewrite rule of a grammar in normal form.
    The right-hand side is empty, one terminal, or two nonterminals.
    """

    lhs: Any

    @property
    @abstractmethod
    def rhs(self) -> Tuple[Any, ...]:
        pass

    @abstractmethod
    def accept[T](self, visitor: "RuleVisitor[T]") -> T:
        pass

    def __str__(self):
        body = " ".join(str(s) for s in self.rhs) or "ε"
        return f"{self.lhs} -> {body}"


@dataclass(frozen=True)
class EmptyRule(Production):
    """lhs -> ε (only allowed for the start symbol)."""

    @property
    def rhs(self) -> Tuple[Any, ...]:
        return ()

    def accept(self, visitor: "RuleVisitor"):
        return visitor.visit_empty(self)


@dataclass(frozen=True)
class TerminalRule(Production):
    """lhs -> terminal"""

    terminal: Any

    @property
    def rhs(self) -> Tuple[Any, ...]:
        return (self.terminal,)

    def accept(self, visitor: "RuleVisitor"):
        return visitor.visit_terminal(self)


@dataclass(frozen=True)
class PairRule(Production):
    """lhs -> left right, both nonterminals."""

    left: Any
    right: Any

    @property
    def rhs(self) -> Tuple[Any, ...]:
        return (self.left, self.right)

    def accept(self, visitor: "RuleVisitor"):
        return visitor.visit_pair(self)
