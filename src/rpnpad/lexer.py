from functools import reduce
import operator

import regex

from .util import RPNError
from .machine import Machine
from .radix import BASES


def _alternatives(names):
    return r'(?:' + r'|'.join(map(regex.escape, names)) + r')'


class Lexer:
    '''
    Lexer for keystroke lines.

    Each word stands for one or more keypresses. Whitespace is just a
    separator, not a keypress: 1 2 is twelve, 1 enter 2 is one then two.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    # Digit keys, possibly more than one in a row.
    DIGITS = r'''
              # _ presses the sign key first, like dc's negative numbers.
              _?
              [0-9A-Fa-f.]+
              '''

    OPERATOR = _alternatives(Machine.OPERATORS)
    COMMAND = _alternatives(Machine.COMMANDS)
    CONSTANT = _alternatives(Machine.CONSTANTS)
    BASE = _alternatives(map(str, BASES))
    SPACE = r'\s+'
    # Words must end at whitespace or end of line; 12+ isn't a word.
    END = r'(?=\s|$)'

    # All possible lexemes. Names are tried before digits, so that exp is an
    # operator, though e alone is a hex digit.
    LEXEME = r'(?:(?<operator>' + OPERATOR + r')' + END + r')|' \
             r'(?:(?<command>' + COMMAND + r')' + END + r')|' \
             r'(?:\#(?<constant>' + CONSTANT + r')' + END + r')|' \
             r'(?:@(?<base>' + BASE + r')' + END + r')|' \
             r'(?:(?<digits>' + DIGITS + r')' + END + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Raises RPNError on the first word that isn't a lexeme, after
        yielding those before it.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            line = line[len(match.group(0)):]
        if line:
            raise RPNError("Couldn't lex {0}".format(line.split()[0]))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to machine.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the groups a lexeme matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}
