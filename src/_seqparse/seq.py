"""
A Seq is a lazy, persistent stream of tokens. Its only primitive is
uncons(), which either returns None (the stream is empty) or a pair of the
first token and the rest of the stream.

Each Seq node computes its uncons result at most once and keeps it, so the
tail handed out by uncons() can be unconsed again from any number of places
(e.g. alternative branches of a parser) and always replays the same tokens.
This also makes it safe to build a Seq over a one-shot iterator or stream.

>>> s = Seq.from_text("ab")
>>> head, tail = s.uncons()
>>> head
'a'
>>> tail.to_string()
'b'

"""

import codecs
import io
import threading
import warnings
from functools import partial
from itertools import islice

import numpy as np

from _seqparse.errors import SeqSourceError

# Marks a node whose uncons result has not been computed yet
# (None is a valid, computed result: the empty stream).
_UNFORCED = object()


class Seq:
    """
    A lazily evaluated, possibly infinite, sequence of tokens.

    A Seq is constructed from a step function, which takes no arguments and
    returns either None or a tuple (head, tail) where tail is again a Seq.
    The step function is not called until the first uncons().
    """

    __slots__ = "_step", "_cell", "_lock"

    def __init__(self, step=None):
        """
        :param step: Function computing the uncons result of this
            sequence. If None, the sequence is empty.
        """
        self._step = step
        self._cell = _UNFORCED if step is not None else None
        self._lock = threading.Lock() if step is not None else None

    def uncons(self):
        """
        :returns: None if the sequence is empty, otherwise the tuple
            (head, tail). Calling uncons several times on the same
            Seq returns the same tuple, also when called from
            several threads at once.
        """
        if self._cell is _UNFORCED:
            with self._lock:
                if self._cell is _UNFORCED:
                    self._cell = self._step()
                    self._step = None
        return self._cell

    def is_empty(self):
        return self.uncons() is None

    def map(self, f):
        """
        :returns: The sequence of f applied to each element. f is
            applied to an element only when that element is unconsed.
        """
        return Seq(partial(_map_step, self, f))

    def __iter__(self):
        current = self.uncons()
        while current is not None:
            head, tail = current
            yield head
            current = tail.uncons()

    def take(self, n):
        """
        :returns: list of at most n first tokens. Does not force
            more than n tokens of the sequence.
        """
        return list(islice(self, max(n, 0)))

    def length(self):
        """
        Number of tokens in the sequence, forces the whole sequence
        and does not terminate for infinite ones.
        """
        return sum(1 for _ in self)

    def to_string(self):
        return "".join(str(token) for token in self)

    def __repr__(self):
        if self._cell is _UNFORCED:
            return "Seq(<unforced>)"
        if self._cell is None:
            return "Seq()"
        return f"Seq({self._cell[0]!r}, ...)"

    @classmethod
    def empty(cls):
        return EMPTY

    @classmethod
    def from_list(cls, items, start=0):
        """
        Sequence over an indexable collection such as a list, tuple or
        string. The collection is not copied and must not be mutated
        while the sequence is in use.
        """
        return cls(partial(_index_step, items, start))

    @classmethod
    def from_array(cls, array):
        """
        Sequence over the elements of a numpy array. Arrays with more than
        one dimension are traversed in flattened (C) order.
        """
        array = np.asarray(array)
        if array.ndim > 1:
            warnings.warn(
                f"flattening array of shape {array.shape} into a sequence",
                stacklevel=2,
            )
        return cls.from_list(array.reshape(-1))

    @classmethod
    def from_text(cls, text):
        """
        Sequence of the code points of a str, one token per character.
        """
        return cls.from_list(text)

    @classmethod
    def from_iterable(cls, iterable):
        """
        Sequence over any iterable, including infinite iterators. The
        iterator is advanced only as tokens are unconsed.
        """
        return cls(partial(_iterator_step, iter(iterable)))

    @classmethod
    def from_bytes(cls, data, encoding="utf-8"):
        """
        Sequence of characters decoded from encoded bytes. Each uncons
        decodes exactly one character, reading as many bytes as the
        encoding requires for it.

        :raises UnicodeDecodeError: from the uncons call that reaches
            malformed input.
        """
        data = bytes(data)
        chunks = (data[i : i + 1] for i in range(len(data)))
        return cls.from_byte_chunks(chunks, encoding)

    @classmethod
    def from_byte_chunks(cls, chunks, encoding="utf-8"):
        """
        Sequence of characters decoded from an iterable of byte strings.
        """
        decoder = codecs.getincrementaldecoder(encoding)()
        return cls(partial(_decode_step, decoder, iter(chunks), "", 0))

    @classmethod
    def from_stream(cls, stream, encoding=None):
        """
        Sequence of characters read from a file-like object. Text streams
        are read one character at a time, binary streams are read one byte
        at a time and decoded with the given encoding.
        """
        if isinstance(stream, io.TextIOBase):
            return cls.from_iterable(_read_chunks(stream))
        if encoding is None:
            raise SeqSourceError(
                f"An encoding is required to read characters from {stream!r}"
            )
        return cls.from_byte_chunks(_read_chunks(stream), encoding)

    @classmethod
    def of(cls, source):
        """
        Make a sequence out of any supported source: a Seq (returned as
        is), str, bytes, numpy array, list, tuple, file-like object or
        other iterable.
        """
        if isinstance(source, Seq):
            return source
        if isinstance(source, str):
            return cls.from_text(source)
        if isinstance(source, (bytes, bytearray, memoryview)):
            return cls.from_bytes(source)
        if isinstance(source, np.ndarray):
            return cls.from_array(source)
        if isinstance(source, (list, tuple, range)):
            return cls.from_list(source)
        if isinstance(source, io.IOBase):
            raise SeqSourceError(
                "Use Seq.from_stream for file-like objects, "
                "as binary streams need an encoding"
            )
        try:
            return cls.from_iterable(source)
        except TypeError as err:
            raise SeqSourceError(
                f"Cannot make a sequence out of {type(source).__name__}"
            ) from err


EMPTY = Seq()


def _map_step(seq, f):
    current = seq.uncons()
    if current is None:
        return None
    head, tail = current
    return f(head), tail.map(f)


def _index_step(items, index):
    if index >= len(items):
        return None
    return items[index], Seq(partial(_index_step, items, index + 1))


def _iterator_step(iterator):
    try:
        head = next(iterator)
    except StopIteration:
        return None
    return head, Seq(partial(_iterator_step, iterator))


def _decode_step(decoder, chunks, pending, index):
    """
    Emit the next decoded character. pending holds characters that the
    decoder already produced, of which those from index on have not been
    emitted yet.
    """
    while index >= len(pending):
        chunk = next(chunks, None)
        if chunk is None:
            pending = decoder.decode(b"", final=True)
            index = 0
            if not pending:
                return None
            break
        pending = decoder.decode(chunk)
        index = 0
    return pending[index], Seq(
        partial(_decode_step, decoder, chunks, pending, index + 1)
    )


def _read_chunks(stream):
    while True:
        chunk = stream.read(1)
        if not chunk:
            return
        yield chunk
