from unittest.mock import MagicMock

import hypothesis.strategies as st
import pytest
from hypothesis import given

import _seqparse.parser as sp
from _seqparse.errors import ParserDefinitionError
from _seqparse.parser import Match, Parser, ParserRef
from _seqparse.seq import Seq
from _seqparse.text import pchar, pdigit, pstring


def rest_of(match):
    return match.rest.to_string()


@given(st.text(max_size=10), st.integers())
def test_pconst_consumes_nothing(text, value):
    seq = Seq.from_text(text)
    assert sp.pconst(value)(seq) == Match(value, seq)


@given(st.text(max_size=10))
def test_pfail_never_matches(text):
    assert sp.pfail().parse(text) is None


def test_pvalue():
    parser = sp.pvalue(lambda c: ord(c) if c.isupper() else None)
    match = parser.parse("Ab")
    assert match.value == ord("A")
    assert rest_of(match) == "b"
    assert parser.parse("aB") is None
    assert parser.parse("") is None


def test_pvalue_matches_falsy_values():
    match = sp.pvalue(lambda token: token).parse([0, 1])
    assert match.value == 0
    assert list(match.rest) == [1]


def test_map():
    match = pdigit.map(lambda d: d * 10).parse("73")
    assert match.value == 70
    assert rest_of(match) == "3"
    assert pdigit.map(lambda d: d * 10).parse("x") is None


def test_bind():
    # a digit followed by that many a's
    counted = pdigit.bind(lambda n: pstring("a" * n))
    assert counted.parse("3aaab").value == "aaa"
    assert rest_of(counted.parse("3aaab")) == "b"
    assert counted.parse("3aab") is None


def test_and_then():
    match = pchar("a").and_then(pchar("b")).parse("abc")
    assert match.value == ("a", "b")
    assert rest_of(match) == "c"


def test_and_then_does_not_run_second_if_first_fails():
    second = MagicMock()
    assert sp.and_then(pchar("a"), Parser(second)).parse("b") is None
    second.assert_not_called()


def test_and_then_fails_if_second_fails():
    assert (pchar("a") + pchar("b")).parse("ac") is None


@given(st.text(max_size=10))
def test_or_else_prefers_first(text):
    first = sp.pconst("first")
    second = sp.pconst("second")
    assert (first | second).parse(text).value == "first"


def test_or_else_backtracks_to_original_input():
    ab = pstring("ab")
    ac = pstring("ac")
    match = ab.or_else(ac).parse("acd")
    assert match.value == "ac"
    assert rest_of(match) == "d"


def test_or_else_is_first_match_not_longest():
    match = pstring("a").or_else(pstring("ab")).parse("ab")
    assert match.value == "a"
    assert rest_of(match) == "b"


def test_or_others_tries_left_to_right():
    parser = sp.or_others(pstring("x"), [pstring("ab"), pstring("a")])
    assert parser.parse("abc").value == "ab"
    assert parser.parse("ac").value == "a"
    assert parser.parse("c") is None
    assert pchar("a").or_others([]).parse("a").value == "a"


def test_apply():
    match = pdigit.apply(pchar("!").map(lambda _: lambda d: d + 1)).parse("4!")
    assert match.value == 5
    assert pdigit.apply(sp.pconst(str)).parse("4").value == "4"


def test_lift2():
    add = sp.lift2(lambda a, b: a * 10 + b)
    assert add(pdigit, pdigit).parse("12").value == 12
    assert add(pdigit, pdigit).parse("1x") is None


def test_sequence():
    match = sp.sequence([pchar("a"), pdigit, pchar("b")]).parse("a1bc")
    assert match.value == ["a", 1, "b"]
    assert rest_of(match) == "c"
    assert sp.sequence([pchar("a"), pchar("b")]).parse("aa") is None


def test_empty_sequence():
    seq = Seq.from_text("abc")
    assert sp.sequence([])(seq) == Match([], seq)


def test_optional():
    seq = Seq.from_text("b")
    assert pchar("a").optional()(seq) == Match(None, seq)
    match = pchar("a").optional().parse("ab")
    assert match.value == "a"
    assert rest_of(match) == "b"


def test_omit():
    pair = pchar("a").and_then(pchar("b"))
    assert pair.omit_first().parse("ab").value == "b"
    assert pair.omit_second().parse("ab").value == "a"
    assert sp.omit_first(pair).parse("ax") is None


def test_between():
    quoted = sp.between(pstring("hi"), pchar('"'))
    match = quoted.parse('"hi"!')
    assert match.value == "hi"
    assert rest_of(match) == "!"
    assert quoted.parse('"hi') is None


def test_end_of_input():
    assert sp.end_of_input().parse("").value is None
    assert sp.end_of_input().parse("a") is None
    full = pchar("a").and_then(sp.end_of_input()).omit_second()
    assert full.parse("a").value == "a"
    assert full.parse("ab") is None


def test_parse_function():
    assert sp.parse(pchar("a"), Seq.from_text("a")).value == "a"


@given(st.text(alphabet="ab01", max_size=10))
def test_parsers_are_deterministic(text):
    parser = sp.sequence([pchar("a").or_else(pdigit).optional(), pchar("b")])
    seq = Seq.from_text(text)
    first = parser(seq)
    second = parser(seq)
    assert first == second


def test_ref_recursive_grammar():
    nested = ParserRef()
    nested.set(sp.between(sp.ref(nested), pchar("|")).or_else(pdigit))

    assert nested.get().parse("||7||").value == 7
    assert sp.ref(nested).parse("3").value == 3
    assert sp.ref(nested).parse("|7") is None


def test_ref_is_resolved_when_invoked():
    cell = ParserRef()
    parser = sp.ref(cell)
    assert not cell.is_set
    cell.set(pchar("a"))
    assert cell.is_set
    assert parser.parse("a").value == "a"


def test_unset_ref_raises_when_invoked():
    parser = sp.ref(ParserRef())
    with pytest.raises(ParserDefinitionError):
        parser.parse("a")


def test_ref_can_only_be_set_once():
    cell = ParserRef(pchar("a"))
    with pytest.raises(ParserDefinitionError):
        cell.set(pchar("b"))


def test_or_others_with_many_alternatives():
    alternatives = [pstring(str(i)) for i in reversed(range(3000))]
    parser = sp.or_others(pchar("x"), alternatives)
    match = parser.parse("2999!")
    assert match.value == "2999"
    assert rest_of(match) == "!"
    assert parser.parse("!") is None


def test_sequence_of_many_parsers():
    parser = sp.sequence([pchar("a")] * 3000)
    match = parser.parse("a" * 3001)
    assert match.value == ["a"] * 3000
    assert rest_of(match) == "a"
    assert parser.parse("a" * 2999) is None
