import pytest
from cnftrace import Grammar, InvalidGrammar, EmptyRule, TerminalRule, PairRule


def test_productions_become_rule_nodes(g1):
    assert g1.productions == (
        EmptyRule("A"),
        TerminalRule("A", "x"),
        TerminalRule("B", "x"),
        PairRule("A", "B", "B"),
        PairRule("B", "B", "B"),
    )
    assert g1.empty_rule == 0


def test_production_nodes_are_accepted_as_input():
    g = Grammar({"S"}, {"a"}, [TerminalRule("S", "a"), ("S", ["S", "S"])], "S")
    assert g.productions[1] == PairRule("S", "S", "S")


def test_dense_indices(g0):
    assert [g0.index_of(nt) for nt in "ABCS"] == [0, 1, 2, 3]


def test_lookups(g0):
    assert list(g0.rules_producing("a")) == [(3, 0), (7, 2)]
    assert list(g0.rules_producing("c")) == []
    assert g0.pair_rules[0] == (0, 3, 0, 1)
    assert [str(r) for r in g0.rules_for("B")] == ["B -> C C", "B -> b"]
    assert g0.empty_rule is None


def test_overlapping_symbol_sets():
    with pytest.raises(InvalidGrammar, match="both"):
        Grammar({"S", "a"}, {"a"}, [("S", ("a",))], "S")


def test_start_must_be_nonterminal():
    with pytest.raises(InvalidGrammar, match="Start symbol"):
        Grammar({"S"}, {"a"}, [("S", ("a",))], "X")


def test_undeclared_left_hand_side():
    with pytest.raises(InvalidGrammar, match="Left-hand side"):
        Grammar({"S"}, {"a"}, [("X", ("a",))], "S")


def test_unit_production_rejected():
    with pytest.raises(InvalidGrammar, match="terminal"):
        Grammar({"S", "A"}, {"a"}, [("S", ("A",)), ("A", ("a",))], "S")


def test_undeclared_terminal_rejected():
    with pytest.raises(InvalidGrammar):
        Grammar({"S"}, {"a"}, [("S", ("b",))], "S")


def test_binary_production_needs_nonterminals():
    with pytest.raises(InvalidGrammar, match="two nonterminals"):
        Grammar({"S", "A"}, {"a"}, [("S", ("A", "a")), ("A", ("a",))], "S")


def test_long_right_hand_side_rejected():
    with pytest.raises(InvalidGrammar, match="too long"):
        Grammar({"S"}, {"a"}, [("S", ("S", "S", "S"))], "S")


def test_empty_only_for_start():
    with pytest.raises(InvalidGrammar, match="start symbol"):
        Grammar({"S", "A"}, {"a"}, [("S", ("A", "A")), ("A", ())], "S")


def test_nullable_start_inside_pair_rejected():
    # S -> A S | ε derives "a", which the chart could never see
    with pytest.raises(InvalidGrammar, match="Nullable start symbol 'S'"):
        Grammar(
            {"S", "A"},
            {"a"},
            [("S", ("A", "S")), ("S", ()), ("A", ("a",))],
            "S",
        )


def test_start_inside_pair_allowed_when_not_nullable(g3):
    assert g3.empty_rule is None
    assert PairRule("S", "S", "S") in g3.productions


def test_unorderable_nonterminals():
    with pytest.raises(InvalidGrammar, match="orderable"):
        Grammar({"S", 1}, {"a"}, [("S", ("a",))], "S")


def test_malformed_production():
    with pytest.raises(InvalidGrammar, match="pair"):
        Grammar({"S"}, {"a"}, ["S"], "S")


def test_from_text():
    g = Grammar.from_text(
        """
        # balanced pairs
        S -> A B | ε
        A -> a
        B -> b
        """
    )
    assert g.start == "S"
    assert g.nonterminals == {"S", "A", "B"}
    assert g.terminals == {"a", "b"}
    assert g.productions == (
        PairRule("S", "A", "B"),
        EmptyRule("S"),
        TerminalRule("A", "a"),
        TerminalRule("B", "b"),
    )


def test_from_text_declarations():
    g = Grammar.from_text(
        """
        N = S X
        T = x y
        S = X

        X -> S S | x |
        S -> y
        """
    )
    assert g.start == "X"
    assert g.terminals == {"x", "y"}
    assert g.productions[2] == EmptyRule("X")


def test_from_text_explicit_start():
    g = Grammar.from_text("S -> a\nT -> S S", start="T")
    assert g.start == "T"


def test_from_text_errors():
    with pytest.raises(InvalidGrammar, match="Line 2"):
        Grammar.from_text("S -> a\nthis is not a rule")

    with pytest.raises(InvalidGrammar, match="one symbol"):
        Grammar.from_text("S A -> a")

    with pytest.raises(InvalidGrammar, match="no productions"):
        Grammar.from_text("# nothing here\n")


def test_unknown_backend(g0):
    with pytest.raises(ValueError, match="Unknown backend"):
        g0.compile("gbnf")


def test_repr(g0):
    assert repr(g0) == "<Grammar start='S' nonterminals=4 productions=8>"
