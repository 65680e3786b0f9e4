'''
Base-aware digit checks, buffer parsing and display formatting.

Parsing is prefix-based: the longest leading run that reads as a number in
the given base is used and the rest ignored. Nothing parseable gives NaN.
'''

from decimal import Decimal
import math

import regex


BASES = (2, 8, 10, 16)
DIGITS = '0123456789ABCDEF'

# Output format specs for the integral bases. Base 10 is handled separately,
# since it is the only base keeping fractions.
FORMAT_SPECS = {
    2: 'b',
    8: 'o',
    16: 'X',
}

FLAGS = regex.VERBOSE | regex.VERSION1

FLOAT = regex.compile(r'''
                      [+-]?
                      (?:
                          Infinity
                          |
                          (?:
                              # 1, 1., 1.5 or .5
                              (?:
                                  [0-9]+ \.? [0-9]*
                                  |
                                  \. [0-9]+
                              )
                              # Exponent, only if complete; 1E alone is 1
                              (?:
                                  [eE] [+-]? [0-9]+
                              )?
                          )
                      )
                      ''', flags=FLAGS)

INTEGER = {
    base: regex.compile(r'[+-]? [{}]+'.format(DIGITS[:base]),
                        flags=FLAGS | regex.IGNORECASE)
    for base in BASES
}


def is_digit(char, base):
    '''
    Return True if char is a single digit valid in base.
    '''
    return len(char) == 1 and char.upper() in DIGITS[:base]


def parse_float(text):
    '''
    Parse the longest decimal prefix of text, exponent included.
    '''
    match = FLOAT.match(text.strip())
    if match is None:
        return math.nan
    return float(match.group(0))


def parse_int(text, base):
    '''
    Parse the longest integer prefix of text in base.

    Integers too large for a float saturate to infinity.
    '''
    match = INTEGER[base].match(text.strip())
    if match is None:
        return math.nan
    number = int(match.group(0), base)
    try:
        return float(number)
    except OverflowError:
        return math.inf if number > 0 else -math.inf


def parse_buffer(text, base):
    '''
    Parse an input buffer the way it is committed in base.
    '''
    if base == 10:
        return parse_float(text)
    return parse_int(text, base)


def format_value(value, base):
    '''
    Format a stack value for display in base.

    NaN shows as Error. Bases other than 10 truncate towards zero first.
    '''
    if math.isnan(value):
        return 'Error'
    if math.isinf(value):
        return '-INFINITY' if value < 0 else 'INFINITY'
    if base == 10:
        return format_decimal(value).upper()
    return format(math.trunc(value), FORMAT_SPECS[base])


def format_decimal(value):
    '''
    Shortest round-trip decimal text for a finite float.

    Laid out like ECMAScript's Number#toString: no trailing .0 on integral
    values, plain notation for 1e-6 <= |value| < 1e21, exponent otherwise.
    '''
    if value == 0:
        return '0'
    sign = '-' if value < 0 else ''
    _, digits, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = ''.join(map(str, digits))
    # value == 0.<digits> * 10 ** point
    point = len(digits) + exponent
    if len(digits) <= point <= 21:
        text = digits + '0' * (point - len(digits))
    elif 0 < point <= 21:
        text = digits[:point] + '.' + digits[point:]
    elif -6 < point <= 0:
        text = '0.' + '0' * -point + digits
    else:
        mantissa = digits[0]
        if len(digits) > 1:
            mantissa += '.' + digits[1:]
        text = '{}e{:+d}'.format(mantissa, point - 1)
    return sign + text
