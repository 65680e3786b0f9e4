from collections import deque
from enum import Enum
from functools import wraps
from inspect import signature as getsignature, Parameter
import logging
import math

from . import arith
from .radix import BASES, format_value, is_digit, parse_buffer, parse_float
from .util import RPNError, wrap_user_errors


log = logging.getLogger(__name__)


class Mode(Enum):
    '''
    Whether the user is part way through typing a number.
    '''
    IDLE = 'idle'
    ENTERING = 'entering'


def _traced(f):
    '''
    Log every event submitted to the machine, and the state it leaves.
    '''
    @wraps(f)
    def wrapper(self, *args):
        display = f(self, *args)
        if log.isEnabledFor(logging.DEBUG):
            log.debug('%s%r -> %r stack=%r buffer=%r mode=%s',
                      f.__name__, args, display, list(self.stack),
                      self.buffer, self.mode.value)
        return display
    return wrapper


class Machine:
    '''
    Keypad RPN calculator engine.

    Takes one keystroke or command at a time, and returns what the display
    should show afterwards. Numbers are typed into a buffer, and only land
    on the stack once committed: by enter, or implicitly by anything that
    needs an operand.

    Never raises on calculator errors. Not enough operands, or a digit the
    base doesn't have, are ignored; bad arithmetic leaves NaN or infinity on
    the stack. Only names outside the machine's vocabulary raise RPNError.
    '''

    DEFAULT_BASE = 10
    CLEARED_BUFFER = '0'

    # Arity is taken from each function's signature.
    OPERATORS = {
        '+': arith.add,
        '-': arith.subtract,
        '*': arith.multiply,
        '/': arith.divide,
        'pow': arith.power,

        'sqrt': arith.sqrt,
        'sqr': arith.square,
        'log': arith.log,
        'exp': arith.exp,
        'inv': arith.inverse,
    }

    CONSTANTS = {
        'pi': math.pi,
        'e': math.e,
        '42': 42.0,
    }

    def __init__(self, base=None):
        '''
        Create machine with empty stack and zeroed memory.

        :param base: Initial radix, one of BASES.
        '''
        if base is None:
            base = type(self).DEFAULT_BASE
        if base not in BASES:
            raise RPNError('No such base {}'.format(base))
        self.stack = deque()
        self.buffer = ''
        self.memory = 0.0
        self.base = base
        self.mode = Mode.IDLE
        self.display = format_value(0.0, base)

    @property
    def inputting(self):
        return self.mode is Mode.ENTERING

    def feed(self, groups):
        '''
        Run a lexeme on the machine, returning the display afterwards.

        :param groups: Matched groups of a keystroke lexeme.
        '''
        for submit, argument in self.parse(groups):
            submit(argument)
        return self.display

    def parse(self, groups):
        '''
        Translate lexeme groups into (submit method, argument) events.
        '''
        if 'digits' in groups:
            # _ is the sign, like in UNIX dc.
            return [(self.submit_digit, char)
                    for char
                    in groups['digits'].replace('_', '-')]
        elif 'operator' in groups:
            return [(self.submit_operator, groups['operator'])]
        elif 'command' in groups:
            return [(self.submit_command, groups['command'])]
        elif 'constant' in groups:
            return [(self.submit_constant, groups['constant'])]
        elif 'base' in groups:
            return [(self.set_base, int(groups['base']))]
        return []

    @_traced
    def submit_digit(self, char):
        '''
        Type one character of a number: a digit, '.' or a leading '-'.
        '''
        char = char.upper()
        if char == '.':
            if self.base != 10:
                return self.display
        elif char == '-':
            if self.inputting and self.buffer:
                return self.display
        elif not is_digit(char, self.base):
            return self.display

        if not self.inputting:
            self.buffer = ''
            self.mode = Mode.ENTERING

        if char == '.' and '.' in self.buffer:
            return self.display

        self.buffer += char
        return self._echo()

    @_traced
    @wrap_user_errors('No such command {1}')
    def submit_command(self, name):
        '''
        Run a named stack or register command.
        '''
        return type(self).COMMANDS[name](self)

    @_traced
    @wrap_user_errors('No such operator {1}')
    def submit_operator(self, name):
        '''
        Commit any typed number, then apply operator to the stack.

        Operands are popped topmost first, and passed deepest first, so that
        5 3 / is 5/3. Does nothing with too few operands.
        '''
        f = type(self).OPERATORS[name]
        self._commit()
        arity = self._arity(f)
        if len(self.stack) < arity:
            return self.display
        args = reversed(self._popstack(arity))
        self._pshstack(f(*args))
        return self._show()

    @_traced
    @wrap_user_errors('No such constant {1}')
    def submit_constant(self, name):
        '''
        Commit any typed number, then push the named constant.
        '''
        value = type(self).CONSTANTS[name]
        self._commit()
        self._pshstack(value)
        return self._show()

    @_traced
    def set_base(self, base):
        '''
        Switch radix, committing any typed number under the old one first.
        '''
        if base not in BASES:
            raise RPNError('No such base {}'.format(base))
        self._commit()
        if base != self.base:
            log.info('Switching from base %d to base %d', self.base, base)
        self.base = base
        return self._show()

    def _arity(self, f):
        '''
        Return number of non-default positional arguments.
        '''
        parameters = getsignature(f).parameters.values()
        positionals = [parameter
                       for parameter
                       in parameters
                       if parameter.kind in (Parameter.POSITIONAL_ONLY,
                                             Parameter.POSITIONAL_OR_KEYWORD) and
                          parameter.default == Parameter.empty]
        return len(positionals)

    def _echo(self):
        '''
        Show the buffer as typed.
        '''
        self.display = self.buffer.upper()
        return self.display

    def _show(self):
        '''
        Show the top of the stack, or zero, formatted in the current base.
        '''
        top = self.stack[-1] if self.stack else 0.0
        self.display = format_value(top, self.base)
        return self.display

    def _clear_entry(self):
        self.buffer = type(self).CLEARED_BUFFER
        self.mode = Mode.IDLE
        self.display = type(self).CLEARED_BUFFER
        return self.display

    def _commit(self):
        '''
        Push the typed number, if any, parsed in the current base.

        Returns True if anything was pushed.
        '''
        if not self.inputting or not self.buffer:
            return False
        self._pshstack(parse_buffer(self.buffer, self.base))
        self.buffer = ''
        self.mode = Mode.IDLE
        return True

    def _current_x(self):
        '''
        Logical X: the typed number if any, else the top of the stack.

        The typed number is always read as decimal here, even in other
        bases; only enter honours the base.
        '''
        if self.inputting:
            return parse_float(self.buffer)
        elif self.stack:
            return self.stack[-1]
        return 0.0

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(float(value) for value in new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise RPNError('Less than {} element(s) on stack'.format(n))
        return [self.stack.pop() for _ in range(n)]

    def enter(self):
        '''
        Commit the typed number, or duplicate the top of the stack.
        '''
        if self.inputting:
            if not self._commit():
                return self.display
        elif self.stack:
            self._pshstack(self.stack[-1])
        else:
            return self.display
        return self._show()

    def backspace(self):
        '''
        Delete the last typed character, or drop the top of the stack.
        '''
        if self.inputting:
            self.buffer = self.buffer[:-1]
            if not self.buffer:
                self.buffer = type(self).CLEARED_BUFFER
                self.mode = Mode.IDLE
            return self._echo()
        if self.stack:
            self.stack.pop()
        return self._show()

    def clrentry(self):
        '''
        Zero the entry. The stack is left alone.
        '''
        return self._clear_entry()

    def clrstack(self):
        '''
        Clear everything from the stack, and the entry.
        '''
        self.stack.clear()
        return self._clear_entry()

    def revstack(self):
        '''
        Swap two elements at top of stack.
        '''
        self._commit()
        if len(self.stack) < 2:
            return self.display
        self._pshstack(*self._popstack(n=2))
        return self._show()

    def rotstack(self):
        '''
        Move the top of the stack to the bottom.
        '''
        if len(self.stack) < 2:
            return self.display
        self.stack.rotate(1)
        return self._show()

    def store(self):
        '''
        Copy X into memory, ending any entry without pushing it.
        '''
        self.memory = self._current_x()
        self.mode = Mode.IDLE
        return self.display

    def load(self):
        '''
        Push memory onto the stack. Any entry in progress is left alone.
        '''
        self._pshstack(self.memory)
        return self._show()

    def chsign(self):
        '''
        Toggle the sign of the typed number, or negate the top of the stack.
        '''
        if self.inputting:
            if self.buffer.startswith('-'):
                self.buffer = self.buffer[1:]
            else:
                self.buffer = '-' + self.buffer
            return self._echo()
        if not self.stack:
            return self.display
        self.stack[-1] = -self.stack[-1]
        return self._show()

    # Command names to machine methods.
    COMMANDS = {
        'enter': enter,
        'backspace': backspace,
        'clx': clrentry,
        'clear-stack': clrstack,
        'swap': revstack,
        'roll': rotstack,
        'sto': store,
        'rcl': load,
        'chs': chsign,
    }


__all__ = 'Machine', 'Mode'
