'''
Float arithmetic with IEEE 754 results.

Python raises on division by zero, math domain errors and overflow; a
calculator shows infinity or Error instead and carries on. Operand order
follows RPN: left is Y, the deeper of the two, right is X.
'''

from math import copysign, inf, isfinite, isnan, nan
import math

from .util import ieee


def _odd(number):
    return float(number).is_integer() and number % 2 == 1


def _quotient_limit(left, right):
    if left == 0 or isnan(left):
        return nan
    return copysign(inf, left) * copysign(1.0, right)


def _power_limit(base, exponent):
    # Negative base, fractional exponent.
    if base < 0 and not float(exponent).is_integer():
        return nan
    # Overflow, or zero to a negative power.
    if copysign(1.0, base) < 0 and _odd(exponent):
        return -inf
    return inf


def _log_limit(number):
    return -inf if number == 0 else nan


def add(left, right):
    return left + right


def subtract(left, right):
    return left - right


def multiply(left, right):
    return left * right


@ieee(_quotient_limit)
def divide(left, right):
    return left / right


@ieee(_power_limit)
def power(left, right):
    '''
    left ** right, as a float.
    '''
    # math.pow treats 1 as absorbing even for NaN and infinite exponents.
    if abs(left) == 1 and not isfinite(right):
        return nan
    return math.pow(left, right)


@ieee(lambda number: nan)
def sqrt(number):
    return math.sqrt(number)


def square(number):
    return number * number


@ieee(_log_limit)
def log(number):
    '''
    Natural logarithm.
    '''
    return math.log(number)


@ieee(lambda number: inf)
def exp(number):
    return math.exp(number)


def inverse(number):
    return divide(1.0, number)
