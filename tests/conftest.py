import pytest
from cnftrace import Grammar


@pytest.fixture
def g0():
    return Grammar(
        {"A", "B", "C", "S"},
        {"a", "b"},
        [
            ("S", ("A", "B")),
            ("S", ("B", "C")),
            ("A", ("B", "A")),
            ("A", ("a",)),
            ("B", ("C", "C")),
            ("B", ("b",)),
            ("C", ("A", "B")),
            ("C", ("a",)),
        ],
        "S",
    )


@pytest.fixture
def g1():
    """Nullable start symbol."""
    return Grammar(
        {"A", "B"},
        {"x", "y"},
        [
            ("A", ()),
            ("A", ("x",)),
            ("B", ("x",)),
            ("A", ("B", "B")),
            ("B", ("B", "B")),
        ],
        "A",
    )


@pytest.fixture
def g2():
    return Grammar(
        {"A", "B"},
        {"x", "y"},
        [
            ("A", ("x",)),
            ("B", ("x",)),
            ("A", ("B", "B")),
            ("B", ("B", "B")),
        ],
        "B",
    )


@pytest.fixture
def g3():
    return Grammar(
        {"A", "B", "C", "D", "E", "S"},
        {"a", "b"},
        [
            ("S", ("A", "B")),
            ("S", ("S", "S")),
            ("S", ("a",)),
            ("A", ("B", "S")),
            ("A", ("C", "D")),
            ("A", ("b",)),
            ("B", ("D", "D")),
            ("B", ("b",)),
            ("C", ("D", "E")),
            ("C", ("b",)),
            ("C", ("a",)),
            ("D", ("a",)),
            ("E", ("S", "S")),
        ],
        "S",
    )
