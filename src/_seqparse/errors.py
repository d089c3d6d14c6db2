class ParserDefinitionError(Exception):
    """
    Raised when a grammar is wired up incorrectly, that is when a
    ParserRef is assigned twice or a reference to a ParserRef is invoked
    before any parser was installed in it.

    Failing to match input is never an error, parsers return None instead.
    """

    pass


class SeqSourceError(Exception):
    """
    Raised when a Seq cannot be constructed from the given source.
    """

    pass
