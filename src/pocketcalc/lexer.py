from functools import reduce
import operator

import regex

from .util import CalculatorError
from .keypad import Keypad


class Lexer:
    '''
    Lexer splitting typed input into calculator keys.

    Only splits; keys are pressed one at a time, there is no expression
    grammar. For consistency, needs to be instantiated, despite holding no
    internal state.
    '''

    # Keys are matched case-insensitively, so the keypad must be upper case.
    assert not [key
                for key
                in Keypad.KEYS
                if key != key.upper()]
    # POSIX leftmost-longest matching picks CE over C and M+ over M, so the
    # order of alternatives doesn't matter.
    KEY = r'(?:' + r'|'.join(map(regex.escape, Keypad.KEYS)) + r')'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<key>' + KEY + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.IGNORECASE,
                    regex.VERSION1},
                   0)

    def lex(self, line):
        '''
        Take a line and yield all lexemes.

        Yields the good prefix, then raises on the first unknown key.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise CalculatorError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to a keypad.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the non-empty groups of a lexeme match.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}
