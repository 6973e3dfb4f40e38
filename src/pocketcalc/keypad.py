import logging

from .engine import Engine, Operator
from .util import wrap_user_errors


log = logging.getLogger(__name__)


class Keypad:
    '''
    Calculator keys, bound to an engine.

    Each key runs exactly one engine command. The keypad never does
    arithmetic itself.
    '''

    # Key (upper case) to engine command name and arguments.
    KEYS = {
        **{digit: ('input_digit', int(digit)) for digit in '0123456789'},
        '.': ('input_decimal_point',),

        '+': ('perform_operation', Operator.ADD),
        '-': ('perform_operation', Operator.SUB),
        '\N{MULTIPLICATION SIGN}': ('perform_operation', Operator.MUL),
        # Typeable aliases
        '*': ('perform_operation', Operator.MUL),
        'X': ('perform_operation', Operator.MUL),
        '\N{DIVISION SIGN}': ('perform_operation', Operator.DIV),
        '/': ('perform_operation', Operator.DIV),
        '=': ('equals',),

        'C': ('clear_all',),
        'AC': ('clear_all',),
        'CE': ('clear_entry',),

        '\N{PLUS-MINUS SIGN}': ('toggle_sign',),
        # Like dc's unary minus
        '_': ('toggle_sign',),
        'N': ('toggle_sign',),
        '%': ('input_percent',),

        'MC': ('memory_clear',),
        'MR': ('memory_recall',),
        'M+': ('memory_add',),
        'M-': ('memory_subtract',),
    }

    def __init__(self, engine=None):
        '''
        Create keypad.

        :param engine: Engine to drive; a new one if not given.
        '''
        self.engine = Engine() if engine is None else engine

    @classmethod
    def describe(cls, key):
        '''
        Return the engine call a key makes, e.g. perform_operation(+).
        '''
        name, *args = cls.KEYS[key.upper()]
        return '{}({})'.format(name, ', '.join(map(str, args)))

    @wrap_user_errors('No such key {1!r}')
    def press(self, key):
        '''
        Press one key and return the engine's new state.
        '''
        name, *args = type(self).KEYS[key.upper()]
        log.debug('key %r', key)
        return getattr(self.engine, name)(*args)

    def feed(self, groups):
        '''
        Press key lexeme.

        :param groups: Matched groups of a key lexeme, as from
                       Lexer.matchedgroups.
        '''
        return self.press(groups['key'])
