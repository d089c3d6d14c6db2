"""
A parser is a function from a Seq of tokens to either None (no match) or
a Match of the parsed value and the remaining Seq. Parsers never consume
from their input in place: backtracking is done simply by handing the same
Seq to another parser.

Parsers are built once from the primitives pvalue, pconst and pfail using
the combinators in this module and in _seqparse.combinators, and can then be
invoked any number of times.

>>> ab = and_then(pconst(1), pconst(2))
>>> ab.parse("abc").value
(1, 2)

"""

from typing import Any, NamedTuple

from _seqparse.errors import ParserDefinitionError
from _seqparse.seq import Seq


class Match(NamedTuple):
    """
    Result of a successful parse: the parsed value and the part of
    the sequence which was not consumed.
    """

    value: Any
    rest: Seq


class Parser:
    """
    Wraps a function taking a Seq and returning a Match or None.

    Calling a parser runs it on a Seq, Parser.parse additionally accepts
    anything Seq.of accepts.
    """

    __slots__ = ("_run",)

    def __init__(self, run):
        self._run = run

    def __call__(self, seq):
        return self._run(seq)

    def parse(self, source):
        """
        :param source: Seq or any source accepted by Seq.of.
        :returns: Match(value, rest) or None if the parser did not match.
        """
        return self._run(Seq.of(source))

    def map(self, f):
        return pmap(self, f)

    def bind(self, f):
        return bind(self, f)

    def and_then(self, other):
        return and_then(self, other)

    def or_else(self, other):
        return or_else(self, other)

    def or_others(self, others):
        return or_others(self, others)

    def apply(self, p_func):
        return apply(self, p_func)

    def optional(self):
        return optional(self)

    def omit_first(self):
        return omit_first(self)

    def omit_second(self):
        return omit_second(self)

    def between(self, around):
        return between(self, around)

    __add__ = and_then
    __or__ = or_else


def parse(parser, seq):
    """
    Run parser on seq.

    :returns: Match(value, rest) or None.
    """
    return parser.parse(seq)


def pvalue(predicate):
    """
    Parser of a single token.

    :param predicate: Function from a token to None if the token is
        rejected, or otherwise the value to be parsed.
    """

    def run(seq):
        current = seq.uncons()
        if current is None:
            return None
        head, tail = current
        value = predicate(head)
        if value is None:
            return None
        return Match(value, tail)

    return Parser(run)


_FAIL = Parser(lambda seq: None)


def pfail():
    return _FAIL


def pconst(value):
    """
    Parser that always matches value, without consuming input.
    """
    return Parser(lambda seq: Match(value, seq))


def end_of_input():
    """
    Parser that matches None only when there is no input left.
    """
    return Parser(lambda seq: Match(None, seq) if seq.is_empty() else None)


def pmap(parser, f):
    def run(seq):
        match = parser(seq)
        if match is None:
            return None
        return Match(f(match.value), match.rest)

    return Parser(run)


def bind(parser, f):
    """
    Runs parser and then the parser f(value) on the remaining input.
    """

    def run(seq):
        match = parser(seq)
        if match is None:
            return None
        return f(match.value)(match.rest)

    return Parser(run)


def and_then(first, second):
    """
    Parser matching first and then second, giving the tuple of both
    values.
    """

    def run(seq):
        first_match = first(seq)
        if first_match is None:
            return None
        second_match = second(first_match.rest)
        if second_match is None:
            return None
        return Match((first_match.value, second_match.value), second_match.rest)

    return Parser(run)


def or_else(first, second):
    """
    Parser giving the result of first if it matches, otherwise tries
    second on the same input.
    """

    def run(seq):
        match = first(seq)
        if match is None:
            return second(seq)
        return match

    return Parser(run)


def or_others(parser, others):
    """
    Alternation of parser and all of others, tried from left to right
    on the same input. Gives the result of the first that matches.
    """
    alternatives = [parser, *others]

    def run(seq):
        for alternative in alternatives:
            match = alternative(seq)
            if match is not None:
                return match
        return None

    return Parser(run)


def apply(p_value, p_func):
    """
    Runs p_value and then p_func, and gives the function parsed by
    p_func applied to the value parsed by p_value.
    """
    return pmap(and_then(p_value, p_func), lambda pair: pair[1](pair[0]))


def lift2(f):
    """
    Lifts a function of two arguments to a function of two parsers.

    >>> add = lift2(lambda a, b: a + b)
    >>> add(pconst(1), pconst(2)).parse("").value
    3

    """

    def lifted(first, second):
        return apply(first, pmap(second, lambda b: lambda a: f(a, b)))

    return lifted


def sequence(parsers):
    """
    Parser matching each of parsers in turn, giving the list of values.
    Fails if any of them fails.
    """
    parsers = list(parsers)

    def run(seq):
        values = []
        rest = seq
        for parser in parsers:
            match = parser(rest)
            if match is None:
                return None
            values.append(match.value)
            rest = match.rest
        return Match(values, rest)

    return Parser(run)


def optional(parser):
    """
    Parser that never fails: gives the value of parser if it matches,
    otherwise None without consuming anything.
    """

    def run(seq):
        match = parser(seq)
        if match is None:
            return Match(None, seq)
        return match

    return Parser(run)


def omit_first(pair_parser):
    return pmap(pair_parser, lambda pair: pair[1])


def omit_second(pair_parser):
    return pmap(pair_parser, lambda pair: pair[0])


def between(parser, around):
    """
    Parser for parser surrounded by around on both sides, e.g. a quoted
    string. Only the value of parser is given.
    """
    return omit_second(omit_first(and_then(and_then(around, parser), around)))


class ParserRef:
    """
    A cell holding a parser that may be installed after the cell is
    referenced, in order to define recursive grammars:

    >>> expr = ParserRef()
    >>> bar = pvalue(lambda c: c if c == "|" else None)
    >>> digit = pvalue(lambda c: int(c) if c.isdigit() else None)
    >>> expr.set(between(ref(expr), bar).or_else(digit))
    >>> ref(expr).parse("||7||").value
    7

    The parser can only be installed once.
    """

    __slots__ = ("_parser",)

    def __init__(self, parser=None):
        self._parser = parser

    @property
    def is_set(self):
        return self._parser is not None

    def set(self, parser):
        if self._parser is not None:
            raise ParserDefinitionError("ParserRef already holds a parser")
        self._parser = parser

    def get(self):
        if self._parser is None:
            raise ParserDefinitionError("ParserRef was used before a parser was set")
        return self._parser


def ref(cell):
    """
    Parser which runs whatever parser is held by cell at the time
    it is invoked.
    """
    return Parser(lambda seq: cell.get()(seq))
