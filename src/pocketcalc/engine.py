'''
Calculation engine behind a pocket calculator's keys.

Turns key presses (digits, operators, memory and clear commands) into a
display string, an accumulator, and a transcript of completed operations.
Evaluation is strictly left to right, as on any cheap calculator: every
operator press resolves the one before it, so 3 + 4 × 2 = gives 14.

No command ever raises. Bad input is absorbed, and division by zero shows
Infinity, -Infinity or NaN.
'''

from collections import namedtuple
from enum import Enum
import logging
import math
import operator

from .util import SENTINELS, stringify, parse_number


log = logging.getLogger(__name__)

# Terminates a chain, when passed to Engine.perform_operation.
EQUALS = '='

DIGITS = '0123456789'


class Operator(Enum):
    '''
    Binary operator keys.
    '''
    ADD = '+'
    SUB = '-'
    MUL = '\N{MULTIPLICATION SIGN}'
    DIV = '\N{DIVISION SIGN}'

    @classmethod
    def from_symbol(cls, symbol):
        '''
        Look up operator by its key symbol, or a typeable alias of it.

        :raises ValueError: No such operator.
        '''
        if isinstance(symbol, cls):
            return symbol
        return cls(_ALIASES.get(symbol, symbol))

    def apply(self, left, right):
        return _APPLY[self](left, right)

    def __str__(self):
        return self.value


def _divide(left, right):
    '''
    IEEE-754 division: zero divisors give signed infinity, or NaN for 0/0.
    '''
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


_ALIASES = {
    '*': Operator.MUL.value,
    'x': Operator.MUL.value,
    'X': Operator.MUL.value,
    '/': Operator.DIV.value,
}

_APPLY = {
    Operator.ADD: operator.__add__,
    Operator.SUB: operator.__sub__,
    Operator.MUL: operator.__mul__,
    Operator.DIV: _divide,
}
assert set(_APPLY) == set(Operator)


class HistoryEntry(namedtuple('HistoryEntry',
                              ['left', 'operator', 'right', 'result'])):
    '''
    One resolved binary operation.
    '''
    __slots__ = ()

    def __str__(self):
        return '{} {} {} = {}'.format(stringify(self.left),
                                      str(self.operator),
                                      stringify(self.right),
                                      stringify(self.result))


EngineState = namedtuple('EngineState',
                         ['display',
                          'accumulator',
                          'pending_operator',
                          'awaiting_fresh_operand',
                          'memory',
                          'history'])


class Engine:
    '''
    Calculator state machine.

    Every command mutates the engine in place and returns a fresh
    EngineState snapshot for the caller to render from. Calls must be
    serialized; nothing here is thread-safe.
    '''

    def __init__(self):
        '''
        Create engine showing 0, with nothing in memory or history.
        '''
        self._display = '0'
        self._accumulator = None
        self._pending_operator = None
        self._awaiting_fresh_operand = False
        self._memory = 0.0
        self._history = []

    @property
    def display(self):
        return self._display

    @property
    def accumulator(self):
        return self._accumulator

    @property
    def pending_operator(self):
        return self._pending_operator

    @property
    def awaiting_fresh_operand(self):
        return self._awaiting_fresh_operand

    @property
    def memory(self):
        return self._memory

    @property
    def history(self):
        return tuple(self._history)

    def snapshot(self):
        return EngineState(display=self._display,
                           accumulator=self._accumulator,
                           pending_operator=self._pending_operator,
                           awaiting_fresh_operand=self._awaiting_fresh_operand,
                           memory=self._memory,
                           history=self.history)

    def transcript(self):
        '''
        Return history, one operation per line, oldest first.
        '''
        return '\n'.join(map(str, self._history))

    def _value(self):
        return parse_number(self._display)

    def _composable(self):
        '''
        Return True if digits typed now may extend the display.

        Sentinels and exponent forms (1e-7) are replaced instead.
        '''
        return self._display not in SENTINELS and 'e' not in self._display

    # Entry

    def input_digit(self, digit):
        '''
        Start or extend the operand with a digit, 0 through 9.

        Anything else is ignored.
        '''
        digit = str(digit)
        if len(digit) != 1 or digit not in DIGITS:
            log.warning('Ignoring non-digit %r', digit)
            return self.snapshot()
        if self._awaiting_fresh_operand:
            self._display = digit
            self._awaiting_fresh_operand = False
        elif self._display == '0' or not self._composable():
            self._display = digit
        else:
            self._display += digit
        log.debug('digit %s: %s', digit, self._display)
        return self.snapshot()

    def input_decimal_point(self):
        '''
        Add a decimal point to the operand, unless it already has one.
        '''
        if self._awaiting_fresh_operand or not self._composable():
            self._display = '0.'
            self._awaiting_fresh_operand = False
        elif '.' not in self._display:
            self._display += '.'
        log.debug('point: %s', self._display)
        return self.snapshot()

    def toggle_sign(self):
        self._display = stringify(-self._value())
        log.debug('sign: %s', self._display)
        return self.snapshot()

    def input_percent(self):
        self._display = stringify(self._value() / 100)
        log.debug('percent: %s', self._display)
        return self.snapshot()

    # Arithmetic

    def perform_operation(self, next_operator):
        '''
        Finish the operand, resolving any pending operator against it.

        :param next_operator: Operator (or its symbol) to apply to the next
                              operand, or EQUALS to end the chain.
        '''
        if next_operator != EQUALS:
            try:
                next_operator = Operator.from_symbol(next_operator)
            except (ValueError, TypeError):
                log.warning('Ignoring unknown operator %r', next_operator)
                return self.snapshot()
        value = self._value()
        if self._accumulator is None:
            self._accumulator = value
        elif self._pending_operator is not None:
            result = self._pending_operator.apply(self._accumulator, value)
            entry = HistoryEntry(self._accumulator,
                                 self._pending_operator,
                                 value,
                                 result)
            self._history.append(entry)
            log.debug('resolved %s', entry)
            self._accumulator = result
            self._display = stringify(result)
        self._awaiting_fresh_operand = True
        if next_operator == EQUALS:
            # Next operator press seeds a new chain from the display.
            self._pending_operator = None
            self._accumulator = None
        else:
            self._pending_operator = next_operator
        log.debug('operator %s: accumulator %r, display %s',
                  next_operator, self._accumulator, self._display)
        return self.snapshot()

    def equals(self):
        '''
        Resolve the pending operator, if an operand has been entered for it.

        Unlike perform_operation(EQUALS), pressing = right after an operator,
        or with nothing pending, does nothing.
        '''
        if self._pending_operator is None or self._awaiting_fresh_operand:
            log.debug('equals: nothing to resolve')
            return self.snapshot()
        return self.perform_operation(EQUALS)

    # Clearing

    def clear_all(self):
        '''
        Abandon the current computation. Memory and history survive.
        '''
        self._display = '0'
        self._accumulator = None
        self._pending_operator = None
        self._awaiting_fresh_operand = False
        log.debug('clear all')
        return self.snapshot()

    def clear_entry(self):
        '''
        Clear only the operand being entered, keeping the chain.
        '''
        self._display = '0'
        self._awaiting_fresh_operand = False
        log.debug('clear entry')
        return self.snapshot()

    # Memory register

    def memory_add(self):
        self._memory += self._value()
        self._awaiting_fresh_operand = True
        log.debug('memory: %r', self._memory)
        return self.snapshot()

    def memory_subtract(self):
        self._memory -= self._value()
        self._awaiting_fresh_operand = True
        log.debug('memory: %r', self._memory)
        return self.snapshot()

    def memory_recall(self):
        self._display = stringify(self._memory)
        self._awaiting_fresh_operand = True
        log.debug('recall: %s', self._display)
        return self.snapshot()

    def memory_clear(self):
        self._memory = 0.0
        log.debug('memory cleared')
        return self.snapshot()
