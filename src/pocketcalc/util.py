from decimal import Decimal
from functools import wraps
import math

import regex


# Non-finite values, as shown on the display.
INFINITY = 'Infinity'
NEGATIVE_INFINITY = '-Infinity'
NAN = 'NaN'
SENTINELS = frozenset({INFINITY, NEGATIVE_INFINITY, NAN})

# Longest leading decimal literal, or a sentinel. Trailing garbage is ignored.
_NUMBER = regex.compile(r'''
                        [+-]?
                        (?:
                            Infinity
                            |
                            NaN
                            |
                            (?:
                                # 12, 12., 12.5
                                \d+ \.? \d*
                                |
                                # .5
                                \. \d+
                            )
                            (?:
                                [eE] [+-]? \d+
                            )?
                        )
                        ''', flags=regex.VERBOSE | regex.VERSION1)
# Python pads exponents (1e-07); the display doesn't.
_EXPONENT = regex.compile(r'e(?<sign>[+-])0*(?<digits>\d+)$')
# Values from here up, or below the lower bound, are shown in exponent form.
_EXPONENT_THRESHOLD = 1e21
_POSITIONAL_FLOOR = 1e-6


class CalculatorError(Exception):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts stray exceptions to CalculatorErrors.

    Passes through CalculatorErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalculatorError:
                raise
            except Exception as e:
                raise CalculatorError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator


def stringify(value):
    '''
    Render number in the display's locale-free format.

    Integral values lose their fractional part, negative zero is just zero,
    and non-finite values become Infinity, -Infinity, or NaN. Magnitudes
    from 1e-6 up to 1e21 are written out in full, others as 1e-7 or 1e+21.
    '''
    value = float(value)
    if math.isnan(value):
        return NAN
    elif math.isinf(value):
        return INFINITY if value > 0 else NEGATIVE_INFINITY
    elif value == 0:
        return '0'
    elif value.is_integer() and abs(value) < _EXPONENT_THRESHOLD:
        return str(int(value))
    elif _POSITIONAL_FLOOR <= abs(value) < _EXPONENT_THRESHOLD:
        # Shortest round-trip digits, without repr's exponent below 1e-4.
        return format(Decimal(repr(value)), 'f')
    return _EXPONENT.sub(r'e\g<sign>\g<digits>', repr(value))


def parse_number(text):
    '''
    Parse the leading number of text, or 0.0 if there is none.

    Accepts everything stringify produces, plus intermediate input such as
    "5." or a lone "-".
    '''
    match = _NUMBER.match(text)
    if match is None:
        return 0.0
    return float(match.group(0))
