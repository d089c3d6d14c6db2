import seqparse.version
from _seqparse.combinators import (
    repeat,
    repeat_0_to_n,
    repeat_0_to_n_with_sep,
    repeat_1,
    repeat_1_with_sep,
    repeat_n,
    repeat_n_with_sep,
    repeat_with_sep,
)
from _seqparse.errors import ParserDefinitionError, SeqSourceError
from _seqparse.parser import (
    Match,
    Parser,
    ParserRef,
    and_then,
    apply,
    between,
    bind,
    end_of_input,
    lift2,
    omit_first,
    omit_second,
    optional,
    or_else,
    or_others,
    parse,
    pconst,
    pfail,
    pmap,
    pvalue,
    ref,
    sequence,
)
from _seqparse.seq import Seq
from _seqparse.text import (
    integer_parser,
    one_of,
    pchar,
    pchar_in,
    pchar_such_that,
    pdigit,
    pint,
    pint64,
    pstring,
)

__author__ = """SeqParse developers"""

__version__ = seqparse.version.version

__all__ = [
    "Match",
    "Parser",
    "ParserDefinitionError",
    "ParserRef",
    "Seq",
    "SeqSourceError",
    "and_then",
    "apply",
    "between",
    "bind",
    "end_of_input",
    "integer_parser",
    "lift2",
    "omit_first",
    "omit_second",
    "one_of",
    "optional",
    "or_else",
    "or_others",
    "parse",
    "pchar",
    "pchar_in",
    "pchar_such_that",
    "pconst",
    "pdigit",
    "pfail",
    "pint",
    "pint64",
    "pmap",
    "pstring",
    "pvalue",
    "ref",
    "repeat",
    "repeat_0_to_n",
    "repeat_0_to_n_with_sep",
    "repeat_1",
    "repeat_1_with_sep",
    "repeat_n",
    "repeat_n_with_sep",
    "repeat_with_sep",
    "sequence",
]
