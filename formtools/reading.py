#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Read FORM output across physical line breaks.

FORM wraps its output lines (at 80 characters by default). The functions
below reassemble the bracket contents into logical lines.
"""


from formtools.errors import UnexpectedEndOfInput
from formtools.splitting import is_plusminus


class LineCursor(object):
    """Reading position in a stream of lines.

    `line` is the current physical line without its line terminator, `pos` an
    index into it. Calling `hold()` makes the next `try_advance()` keep the
    current line instead of reading a new one.
    """
    def __init__(self, lines, line='', pos=0):
        self._lines = iter(lines)
        self.line = line
        self.pos = pos
        self.lineno = 0
        self._held = False

    @classmethod
    def from_text(cls, text):
        return cls(text.splitlines())

    def try_advance(self):
        """Move to the next physical line. Return False at the end of input."""
        if self._held:
            self._held = False
            return True
        try:
            line = next(self._lines)
        except StopIteration:
            return False
        self.line = line.rstrip('\r\n')
        self.pos = 0
        self.lineno += 1
        return True

    def advance(self):
        if not self.try_advance():
            raise UnexpectedEndOfInput('unexpected end of input', self.lineno)

    def hold(self):
        self._held = True

    def skip_space(self):
        line = self.line
        while self.pos < len(line) and line[self.pos].isspace():
            self.pos += 1
        return self.pos

    @property
    def at_end(self):
        return self.pos >= len(self.line)

    @property
    def char(self):
        return self.line[self.pos] if self.pos < len(self.line) else ''

    @property
    def rest(self):
        return self.line[self.pos:]

    def __repr__(self):
        return '<%s line %d, pos %d: %r>' % (self.__class__.__name__,
                                             self.lineno, self.pos, self.line)


def read_logical_line(cursor, terminator=')'):
    """Read from the cursor position up to `terminator`, joining wrapped lines.

    The terminator is only recognized outside parentheses and outside formal
    names (`[...]`, inside which parentheses are not counted). A space is kept
    between the joined lines when one of them ends (resp. starts) with a sign.

    Return the text without the terminator, and leave the cursor on it.
    If nothing follows the cursor on the current line, move to the next line
    and return an empty string: the content is a list of lines
    (see `read_block_lines`).
    """
    start = cursor.skip_space()
    if cursor.at_end:
        cursor.advance()
        return ''

    parts = []
    line = cursor.line
    depth = 0
    formal = 0
    pos = start
    while True:
        while pos >= len(line):
            part = line[start:].rstrip()
            parts.append(part)
            if part and is_plusminus(part[-1]):
                parts.append(' ')

            cursor.advance()
            line = cursor.line
            start = pos = cursor.skip_space()
            if is_plusminus(cursor.char) and parts and not parts[-1].endswith(' '):
                parts.append(' ')

        char = line[pos]
        if char == '[':
            formal += 1
        elif char == ']':
            formal = max(0, formal - 1)
        elif not formal:
            if not depth and char == terminator:
                parts.append(line[start:pos])
                cursor.pos = pos
                return ''.join(parts).rstrip()
            elif char == '(':
                depth += 1
            elif char == ')':
                depth = max(0, depth - 1)
        pos += 1


def read_block_lines(cursor, closing=')'):
    """Collect each following line as one content element, until a line
    starting with `closing`. The cursor is left on that closing character."""
    lines = []
    while True:
        cursor.skip_space()
        if not cursor.at_end:
            if cursor.char == closing:
                return lines
            lines.append(cursor.rest.rstrip())
        cursor.advance()
