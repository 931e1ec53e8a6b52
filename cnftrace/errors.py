class InvalidGrammar(ValueError):
    """The grammar is not in the expected normal form, or its text can't be read."""


class InvalidTrace(ValueError):
    """A trace does not describe a derivation under the given grammar."""
