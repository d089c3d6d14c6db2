"""
Parsers for sequences of characters, built from the combinators in
_seqparse.parser and _seqparse.combinators.
"""

import numpy as np

from _seqparse.combinators import repeat
from _seqparse.parser import (
    Match,
    Parser,
    lift2,
    optional,
    or_others,
    pconst,
    pfail,
    pvalue,
)


def pchar_such_that(predicate):
    """
    Parser of a single character for which predicate is true.
    """
    return pvalue(lambda char: char if predicate(char) else None)


def pchar(char):
    return pchar_such_that(lambda other: other == char)


def pchar_in(chars):
    chars = frozenset(chars)
    return pchar_such_that(lambda char: char in chars)


def pstring(literal):
    """
    Parser matching literal one character at a time, giving literal.

    >>> pstring("asdf").parse("asdfjkl;").rest.to_string()
    'jkl;'

    """
    char_parsers = [pchar(char) for char in literal]

    def run(seq):
        rest = seq
        for char_parser in char_parsers:
            match = char_parser(rest)
            if match is None:
                return None
            rest = match.rest
        return Match(literal, rest)

    return Parser(run)


def one_of(candidates):
    """
    Alternation of pstring(str(candidate)) for each candidate, the first
    candidate is tried first. The matched string is given.
    """
    parsers = [pstring(str(candidate)) for candidate in candidates]
    if not parsers:
        return pfail()
    return or_others(parsers[0], parsers[1:])


pdigit = one_of(range(10)).map(int)
pnonzero_digit = one_of(range(1, 10)).map(int)


def _accumulate(first, rest):
    magnitude = first
    for digit in rest:
        magnitude = magnitude * 10 + digit
    return magnitude


_magnitude = (
    pstring("0")
    .map(int)
    .or_else(lift2(_accumulate)(pnonzero_digit, repeat(pdigit)))
)


def integer_parser(dtype):
    """
    Parser of integers with an optional leading minus, without leading
    zeros, giving values of the numpy integer type dtype. Matches
    nothing if the value does not fit in dtype.

    Note that only a single 0 is read after a leading 0, so "01" is
    parsed as 0 followed by "1".
    """
    info = np.iinfo(dtype)

    def signed(pair):
        sign, magnitude = pair
        value = magnitude if sign is None else -magnitude
        if value < info.min or value > info.max:
            return pfail()
        return pconst(dtype(value))

    return optional(pstring("-")).and_then(_magnitude).bind(signed)


pint = integer_parser(np.int32)
pint64 = integer_parser(np.int64)
