#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Exceptions raised while rebracketing FORM output.

All of them are fatal for the command-line tool: they are caught once in
`formtools.multibracket.cli` and logged as errors.
"""


class MultibracketError(RuntimeError):
    """Base class. `lineno` is the physical input line, when known."""
    def __init__(self, message, lineno=None):
        self.lineno = lineno
        if lineno is not None:
            message = 'line %d: %s' % (lineno, message)
        super().__init__(message)


class UnexpectedEndOfInput(MultibracketError):
    pass


class MalformedTerm(MultibracketError):
    pass


class InvalidIndentConfiguration(MultibracketError):
    pass


class NegativeIndentLevel(MultibracketError):
    pass


class RangeExpansionError(MultibracketError):
    """Improper use of the `...` operator in a level specification."""
    pass
