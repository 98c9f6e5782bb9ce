#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""A text output stream that automatically wraps and indents its output."""


import re
from formtools.errors import InvalidIndentConfiguration, NegativeIndentLevel


TOKENS = re.compile(r'\n|[^\S\n]+|\S+')


class IndentWriter(object):
    """Write to `stream`, breaking lines that would exceed `max_width`.

    Whenever a new line is started, either because of the width or because a
    linebreak was written, it is indented by `basic_indent` plus
    `indent_level` times `indent_step` spaces. Words (runs of non-space
    characters, possibly written in several calls) are never broken.

    Instead of normal linebreaks, `paragraph()` breaks the line with the
    paragraph indent, `basic_indent + par_offset`, which can be deeper or
    shallower than the normal one.

    Whitespace at the end of lines is dropped, and the indentation is only
    written when some text follows. Use it as a context manager: the
    pending text is flushed and the last line terminated on exit.

    This class cannot guard against independent use of the underlying stream,
    and does not handle tabs and non-printable characters.
    """
    def __init__(self, stream, indent_level=0, indent_step=4, basic_indent=0,
                 par_offset=4, max_width=80):
        self.stream = stream
        self._indent_step = 0
        self._basic_indent = 0
        self._par_offset = 0
        self._max_width = 1
        self.max_width = max_width
        self.indent_step = indent_step
        self.basic_indent = basic_indent
        self.par_offset = par_offset
        self.set_indent(indent_level)

        self.column = 0
        self._line_start = 0     # column after the indentation.
        self._pending_indent = None
        self._line_open = False  # A '\n' is due before the next line.
        self._word = ''
        self._spaces = ''

    # Size parameters
    @property
    def indent_step(self):
        return self._indent_step

    @indent_step.setter
    def indent_step(self, step):
        if step < 0:
            raise InvalidIndentConfiguration('negative indent step %d' % step)
        self._indent_step = step

    @property
    def basic_indent(self):
        return self._basic_indent

    @basic_indent.setter
    def basic_indent(self, indent):
        self._check_indents(indent, self._par_offset, self._max_width)
        self._basic_indent = indent

    @property
    def par_offset(self):
        return self._par_offset

    @par_offset.setter
    def par_offset(self, offset):
        self._check_indents(self._basic_indent, offset, self._max_width)
        self._par_offset = offset

    @property
    def par_indent(self):
        return self._basic_indent + self._par_offset

    @property
    def max_width(self):
        return self._max_width

    @max_width.setter
    def max_width(self, width):
        self._check_indents(self._basic_indent, self._par_offset, width)
        self._max_width = width

    @staticmethod
    def _check_indents(basic, offset, width):
        if basic < 0:
            raise InvalidIndentConfiguration('negative basic indent %d' % basic)
        if basic + offset < 0:
            raise InvalidIndentConfiguration(
                    'paragraph indent would be negative (%d%+d)' % (basic, offset))
        if width <= max(basic, basic + offset):
            raise InvalidIndentConfiguration(
                    'maximum width %d leaves no room after the indent' % width)

    @property
    def line_indent(self):
        return self._basic_indent + self.indent_level * self._indent_step

    # Indent level
    def incr_indent(self, incr=1):
        self.indent_level += incr
        return self

    def decr_indent(self, decr=1):
        if self.indent_level < decr:
            raise NegativeIndentLevel('cannot decrease indent level %d by %d'
                                      % (self.indent_level, decr))
        self.indent_level -= decr
        return self

    def set_indent(self, level):
        if level < 0:
            raise NegativeIndentLevel('negative indent level %d' % level)
        self.indent_level = level
        return self

    # Output
    def write(self, text):
        for match in TOKENS.finditer(text):
            token = match.group()
            if token == '\n':
                self._commit_word()
                self._break(self.line_indent)
            elif token[0].isspace():
                self._commit_word()
                self._spaces += token
            else:
                self._word += token
        return self

    def paragraph(self):
        self._commit_word()
        self._break(self.par_indent + self.indent_level * self._indent_step)
        return self

    def verbatim(self, line):
        """Write `line` on its own physical line, without wrapping or indent."""
        self._commit_word()
        self._spaces = ''
        if self._line_open:
            self.stream.write('\n')
        self._pending_indent = None
        self.stream.write(line)
        self.column = len(line)
        self._line_start = 0
        self._line_open = True
        return self

    def flush(self):
        self._commit_word()
        self.stream.flush()
        return self

    def close(self):
        self._commit_word()
        self._spaces = ''
        if self._line_open:
            self.stream.write('\n')
            self._line_open = False
        self._pending_indent = None
        self.column = self._line_start = 0
        self.stream.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _break(self, indent):
        if indent >= self._max_width:
            raise InvalidIndentConfiguration('indent %d reaches the maximum width %d'
                                             % (indent, self._max_width))
        if self._line_open:
            self.stream.write('\n')
        self._line_open = True
        self._spaces = ''
        self.column = self._line_start = 0
        self._pending_indent = indent

    def _emit_indent(self):
        indent = self._pending_indent
        self._pending_indent = None
        self.stream.write(' ' * indent)
        self.column = self._line_start = indent

    def _commit_word(self):
        if not self._word:
            return
        word, spaces = self._word, self._spaces
        self._word = self._spaces = ''

        if self._pending_indent is not None:
            self._emit_indent()
            spaces = ''
        elif (self.column + len(spaces) + len(word) > self._max_width
              and self.column > self._line_start):
            self._break(self.line_indent)
            self._emit_indent()
            spaces = ''

        self.stream.write(spaces + word)
        self.column += len(spaces) + len(word)
        self._line_open = True
