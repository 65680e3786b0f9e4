'''
Keypad RPN calculator.

A stack calculator that behaves like the handheld kind: digits are keyed
into an entry, and enter pushes it. Numbers can be keyed and shown in
binary, octal, decimal or hexadecimal. One memory register, and the usual
stack operations.

The engine (Machine) knows nothing about terminals or keyboards. It takes
one event at a time, and returns the text to display. The CLI is one front
end for it; anything else that can map keypresses to Machine calls will do.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine, Mode
from .util import RPNError


__all__ = 'Machine', 'Mode', 'Lexer', 'CLI', 'RPNError'
