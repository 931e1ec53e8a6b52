import logging

from .grammar import Grammar
from .core import Production, EmptyRule, TerminalRule, PairRule
from .errors import InvalidGrammar, InvalidTrace
from .chart import Chart, Cell
from .recognizer import accepts, backtrace, build_chart, trace
from .replay import derivation, reconstruct_word

from .backends.bnf import BNFCompiler
from .backends.lark import LarkCompiler


__version__ = "0.1.0"


Grammar.register("bnf", BNFCompiler)
Grammar.register("lark", LarkCompiler)

logging.getLogger(__name__).addHandler(logging.NullHandler())
