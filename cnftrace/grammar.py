from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import logging

from cnftrace.core import Production, EmptyRule, TerminalRule, PairRule, Symbol
from cnftrace.errors import InvalidGrammar
from .backends.base import Compiler

logger = logging.getLogger(__name__)

CompilerFactory = Callable[..., Compiler]

# A production given as a Production node or as a plain (lhs, rhs) pair.
RuleSpec = Union[Production, Tuple[Symbol, Sequence[Symbol]]]

EPSILON_SPELLINGS = {"ε", "eps", "epsilon", "λ", "lambda"}


class Grammar:
    """
    A context-free grammar in normal form.

    Every production is `A -> t`, `A -> B C`, or `S -> ε` for the start
    symbol `S`. Productions keep the order they were given in, and their
    position in that order is the index used by traces.

    The grammar is validated on construction and never changes afterwards,
    so one value can be shared by any number of `trace` calls.
    """

    _backends: Dict[str, CompilerFactory] = {}

    def __init__(
        self,
        nonterminals: Iterable[Symbol],
        terminals: Iterable[Symbol],
        productions: Iterable[RuleSpec],
        start: Symbol,
    ):
        self.nonterminals = frozenset(nonterminals)
        self.terminals = frozenset(terminals)
        self.start = start

        overlap = self.nonterminals & self.terminals
        if overlap:
            names = ", ".join(sorted(repr(s) for s in overlap))
            raise InvalidGrammar(
                f"Symbols declared both as terminal and nonterminal: {names}"
            )

        if start not in self.nonterminals:
            raise InvalidGrammar(f"Start symbol {start!r} is not a nonterminal")

        self.productions: Tuple[Production, ...] = tuple(
            self._make_rule(spec) for spec in productions
        )

        # Dense nonterminal indices, used to lay out the chart
        try:
            ordered = sorted(self.nonterminals)
        except TypeError:
            raise InvalidGrammar(
                "Nonterminals must be mutually orderable, got "
                + ", ".join(sorted(repr(s) for s in self.nonterminals))
            ) from None
        self._index: Dict[Symbol, int] = {nt: i for i, nt in enumerate(ordered)}

        self._empty: Optional[int] = None
        self._by_terminal: Dict[Symbol, List[Tuple[int, int]]] = {}
        pairs = []

        for index, rule in enumerate(self.productions):
            if isinstance(rule, EmptyRule):
                if self._empty is None:
                    self._empty = index
            elif isinstance(rule, TerminalRule):
                self._by_terminal.setdefault(rule.terminal, []).append(
                    (index, self._index[rule.lhs])
                )
            else:
                pairs.append(
                    (
                        index,
                        self._index[rule.lhs],
                        self._index[rule.left],
                        self._index[rule.right],
                    )
                )

        self._pairs: Tuple[Tuple[int, int, int, int], ...] = tuple(pairs)

        # The chart never treats a nonterminal inside a pair as empty
        if self._empty is not None:
            start_index = self._index[start]
            for index, _, left, right in self._pairs:
                if start_index in (left, right):
                    raise InvalidGrammar(
                        f"Nullable start symbol {start!r} appears on the right-hand "
                        f"side of '{self.productions[index]}'"
                    )

        logger.debug(
            "Loaded grammar: %d nonterminals, %d terminals, %d productions",
            len(self.nonterminals),
            len(self.terminals),
            len(self.productions),
        )

    def _make_rule(self, spec: RuleSpec) -> Production:
        if isinstance(spec, Production):
            lhs, rhs = spec.lhs, spec.rhs
        else:
            try:
                lhs, rhs = spec
            except (TypeError, ValueError):
                raise InvalidGrammar(
                    f"Production must be an (lhs, rhs) pair, got {spec!r}"
                ) from None
            rhs = tuple(rhs)

        shown = f"{lhs} -> {' '.join(map(str, rhs)) or 'ε'}"

        if lhs not in self.nonterminals:
            raise InvalidGrammar(f"Left-hand side of '{shown}' is not a nonterminal")

        if not rhs:
            if lhs != self.start:
                raise InvalidGrammar(
                    f"Only the start symbol may derive the empty word: '{shown}'"
                )
            return EmptyRule(lhs)

        if len(rhs) == 1:
            if rhs[0] not in self.terminals:
                raise InvalidGrammar(
                    f"Single-symbol production must produce a terminal: '{shown}'"
                )
            return TerminalRule(lhs, rhs[0])

        if len(rhs) == 2:
            stray = [s for s in rhs if s not in self.nonterminals]
            if stray:
                raise InvalidGrammar(
                    f"Binary production must use two nonterminals: '{shown}'"
                )
            return PairRule(lhs, rhs[0], rhs[1])

        raise InvalidGrammar(f"Right-hand side too long for normal form: '{shown}'")

    # --- Lookups used by the recognizer and the backends ---

    def index_of(self, nonterminal: Symbol) -> int:
        return self._index[nonterminal]

    @property
    def empty_rule(self) -> Optional[int]:
        """Index of the first `start -> ε` production, if any."""
        return self._empty

    def rules_producing(self, terminal: Symbol) -> Sequence[Tuple[int, int]]:
        """(production index, lhs index) of every `A -> terminal`, in order."""
        return self._by_terminal.get(terminal, ())

    @property
    def pair_rules(self) -> Tuple[Tuple[int, int, int, int], ...]:
        """(production index, lhs, left, right) of every `A -> B C`, as indices."""
        return self._pairs

    def rules_for(self, lhs: Symbol) -> List[Production]:
        return [rule for rule in self.productions if rule.lhs == lhs]

    # --- Backends ---

    @classmethod
    def register(cls, name: str, factory: CompilerFactory):
        cls._backends[name] = factory

    def compile(self, backend: Union[str, Compiler] = "bnf", **kwargs) -> str:
        if isinstance(backend, str):
            if backend not in self._backends:
                known = ", ".join(self._backends.keys())
                raise ValueError(f"Unknown backend: '{backend}'. Available: {known}")
            backend = self._backends[backend](**kwargs)

        return backend.compile(self)

    def __str__(self):
        return self.compile("bnf")

    def __repr__(self):
        return (
            f"<Grammar start={self.start!r} "
            f"nonterminals={len(self.nonterminals)} "
            f"productions={len(self.productions)}>"
        )

    # --- Text loader ---

    @classmethod
    def from_text(cls, text: str, start: Optional[Symbol] = None) -> "Grammar":
        """
        Reads a grammar written one rule per line:

            # optional declarations
            N = S A B
            T = a b
            S = S

            S -> A B | ε
            A -> a
            B -> b

        Symbols are separated by whitespace. Undeclared symbols on a
        left-hand side are nonterminals, all others terminals. Without an
        explicit start the `S =` declaration is used, then the first rule.

        Raises:
            InvalidGrammar: If a line can't be read or the result is not in
                normal form.
        """
        declared_nonterminals: set = set()
        declared_terminals: set = set()
        declared_start = None
        rules: List[Tuple[str, Tuple[str, ...]]] = []

        for lineno, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.strip()

            if not line or line.startswith("#"):
                continue

            if "->" not in line:
                key, sep, value = line.partition("=")
                key = key.strip().upper()
                if not sep or key not in ("N", "T", "S"):
                    raise InvalidGrammar(f"Line {lineno}: cannot read {line!r}")

                symbols = value.split()
                if key == "N":
                    declared_nonterminals.update(symbols)
                elif key == "T":
                    declared_terminals.update(symbols)
                elif symbols:
                    declared_start = symbols[0]
                continue

            lhs, _, alternatives = line.partition("->")
            lhs_symbols = lhs.split()
            if len(lhs_symbols) != 1:
                raise InvalidGrammar(
                    f"Line {lineno}: expected one symbol before '->', got {lhs.strip()!r}"
                )

            for alt in alternatives.split("|"):
                symbols = alt.split()
                if len(symbols) == 1 and symbols[0] in EPSILON_SPELLINGS:
                    symbols = []
                rules.append((lhs_symbols[0], tuple(symbols)))

        if not rules:
            raise InvalidGrammar("Grammar text contains no productions")

        nonterminals = declared_nonterminals | {lhs for lhs, _ in rules}
        terminals = declared_terminals | {
            s for _, rhs in rules for s in rhs if s not in nonterminals
        }

        if start is None:
            start = declared_start if declared_start is not None else rules[0][0]

        return cls(nonterminals, terminals, rules, start)
