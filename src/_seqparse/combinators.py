"""
Repetition combinators.

All repetitions attempt one item, and then repeatedly a separator followed
by an item, until an attempt fails or the bound is reached. Only the item
values are collected. The remaining input is always the input after the
last matched item, so a separator that matched but was not followed by an
item is not consumed.

The variants differ in what happens when the bound is not reached:
repeat_n fails, while repeat_0_to_n and repeat give the items collected so
far. A negative bound gives a parser that never matches.
"""

from _seqparse.parser import Match, Parser, pfail


def _repetition(parser, minimum, maximum, separator):
    """
    :param minimum: Fewest number of items for the repetition to match.
    :param maximum: Largest number of items to match, or None for no
        upper bound.
    :param separator: Parser between items or None.
    """

    def run(seq):
        values = []
        rest = seq
        if maximum == 0:
            return Match(values, rest)
        match = parser(rest)
        while match is not None:
            values.append(match.value)
            if maximum is None and match.rest is rest:
                # An item matching the empty input would repeat forever.
                break
            rest = match.rest
            if maximum is not None and len(values) >= maximum:
                break
            if separator is None:
                match = parser(rest)
            else:
                separator_match = separator(rest)
                if separator_match is None:
                    break
                match = parser(separator_match.rest)
        if len(values) < minimum:
            return None
        return Match(values, rest)

    return Parser(run)


def repeat_n_with_sep(parser, n, separator):
    """
    Parser for exactly n items separated by separator. Fails if fewer
    than n items can be matched.
    """
    if n < 0:
        return pfail()
    return _repetition(parser, n, n, separator)


def repeat_n(parser, n):
    """
    Parser for exactly n consecutive items.

    >>> from _seqparse.parser import pvalue
    >>> digit = pvalue(lambda c: int(c) if c.isdigit() else None)
    >>> repeat_n(digit, 2).parse("123").value
    [1, 2]

    """
    return repeat_n_with_sep(parser, n, None)


def repeat_0_to_n_with_sep(parser, n, separator):
    if n < 0:
        return pfail()
    return _repetition(parser, 0, n, separator)


def repeat_0_to_n(parser, n):
    """
    Parser for at most n consecutive items. Never fails for n >= 0,
    matching an empty list if no item matches.
    """
    return repeat_0_to_n_with_sep(parser, n, None)


def repeat_with_sep(parser, separator):
    return _repetition(parser, 0, None, separator)


def repeat(parser):
    """
    Parser for any number of consecutive items, as many as possible.
    Never fails.
    """
    return _repetition(parser, 0, None, None)


def repeat_1_with_sep(parser, separator):
    return _repetition(parser, 1, None, separator)


def repeat_1(parser):
    """
    Parser for one or more consecutive items.
    """
    return _repetition(parser, 1, None, None)
