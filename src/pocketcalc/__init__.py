'''
Pocket calculator.

The engine behind a calculator widget: digits, the four arithmetic
operators evaluated strictly left to right, percent, sign toggle, a memory
register, and a transcript of every completed operation. Comes with a
terminal keypad for driving it by hand.

Why not just use Python's REPL?

- A widget needs the calculator's *key* semantics, not an expression
  evaluator: 3 + 4 × 2 = is 14 here.
- Half-typed operands ("5.", "-") are first class, the REPL has no notion
  of them.
- Division by zero shows Infinity instead of a traceback.
'''

from .cli import CLI
from .engine import Engine, EngineState, HistoryEntry, Operator, EQUALS
from .keypad import Keypad
from .lexer import Lexer
from .util import CalculatorError, stringify, parse_number


__all__ = ('Engine', 'EngineState', 'HistoryEntry', 'Operator', 'EQUALS',
           'Keypad', 'Lexer', 'CLI',
           'CalculatorError', 'stringify', 'parse_number')
