#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Tree of nested brackets, built from FORM terms of the form

    + [_MB_]*x*y^2*f(z) * ( <content> )

Each factor of the term header is classified into a bracket level
(see `formtools.levels`): the factors of level 0 give the key of the outermost
bracket, those of level 1 the key of the sub-bracket, etc. The content goes
into the innermost bracket.
"""


import logging
from formtools.errors import MalformedTerm
from formtools.ordered import InsertionOrderMap
from formtools.reading import read_logical_line, read_block_lines
from formtools.splitting import split, symbol_head, is_plusminus

logger = logging.getLogger(__name__)


def content_start(text):
    """Index of the parenthesis opening the content: the first '(' starting
    a factor, outside formal names. -1 if there is none."""
    formal = depth = 0
    prev = '*'
    for i, char in enumerate(text):
        if char == '[':
            formal += 1
        elif char == ']':
            formal = max(0, formal - 1)
        elif formal:
            pass
        elif char == '(':
            if not depth and prev in '* ':
                return i
            depth += 1
        elif char == ')':
            depth = max(0, depth - 1)
        prev = char
    return -1


def read_header(cursor):
    """Return the factors preceding ' * (' and move the cursor after the '('.

    The header may be wrapped over several physical lines.
    """
    prefix = ''
    while True:
        text = prefix + cursor.rest
        start = content_start(text)
        header = text if start < 0 else text[:start]
        symbols, end = split(header, '*', '()[]', ' ')
        if start >= 0 or header[end:].strip(' *'):
            break
        if not cursor.try_advance():
            raise MalformedTerm('input ended inside the term header %r' % text,
                                cursor.lineno)
        cursor.skip_space()
        prefix = text

    if start < 0 or header[end:].strip(' *'):
        raise MalformedTerm("expected '<factors> * (' in term header %r" % text,
                            cursor.lineno)
    cursor.pos += start + 1 - len(prefix)
    return symbols


class Bracket(object):
    """A node of the bracket tree.

    `content` holds the contents of the terms whose classification stops at
    this node; `children` maps each sub-bracket key to its node, in the order
    of first appearance.
    """
    def __init__(self, key=''):
        self.key = key
        self.content = []
        self.children = InsertionOrderMap()

    def parse(self, cursor, table, max_level):
        """Add the term starting at the cursor (just after the multibracket tag).

        `table` maps symbol heads to levels, and is extended with unseen heads,
        classified at `max_level`. Return the table.

        The cursor is left on the closing parenthesis of the term.
        """
        symbols = read_header(cursor)

        level_symbols = [[] for _ in range(max_level + 1)]
        for symbol in symbols:
            level = table.resolve(symbol_head(symbol), max_level)
            level_symbols[level].append(symbol)

        node = self
        path = []
        for syms in level_symbols:
            if not syms:
                continue
            key = '*'.join(syms)
            child = node.children.get(key)
            if child is None:
                child = node.children[key] = Bracket(key)
            node = child
            path.append(key)

        inline = read_logical_line(cursor, ')')
        if inline:
            node.content.append(inline)
        else:
            node.content.extend(read_block_lines(cursor, ')'))
        logger.debug('line %d: term -> %s', cursor.lineno, ' / '.join(path) or '<top>')
        return table

    def is_single_line(self):
        """Whether `print` fits on one line (not counting width wrapping)."""
        if not self.children:
            return len(self.content) <= 1
        if not self.content and len(self.children) == 1:
            child, = self.children.values()
            return child.is_single_line()
        return False

    def print(self, out, root=False):
        """Write the bracket and its sub-brackets to the IndentWriter `out`.

        Return True if the printout was single-line.
        """
        out.write(self.key)

        if not self.children:
            if len(self.content) > 1:
                if not root:
                    out.write(' * ( ')
                out.incr_indent().paragraph()
                for line in self.content:
                    out.incr_indent().write(line)
                    out.decr_indent().paragraph()
                if not root:
                    out.write(')')
                out.decr_indent()
                return False

            line = self.content[0] if self.content else ''
            if root:
                out.paragraph()
                if not is_plusminus(line[:1]):
                    out.write('+ ')
            else:
                out.write(' * ( ')
            out.incr_indent(2).write(line)
            if not root:
                out.write(' )')
            out.decr_indent(2)
            return True

        if not root and not self.content and len(self.children) == 1:
            child, = self.children.values()
            out.write('*')
            return child.print(out)

        if not root:
            out.write(' * ( ').incr_indent()

        if self.content:
            out.paragraph()
            if len(self.content) == 1 and not is_plusminus(self.content[0][:1]):
                out.write('+ ')
            for line in self.content:
                out.incr_indent().write(line)
                out.decr_indent().paragraph()

        children = list(self.children.values())
        for child, next_child in zip(children, children[1:] + [None]):
            out.paragraph().write('+ ')
            single_line = child.print(out)
            # Sub-brackets are separated by an empty line, unless both are single-line.
            if next_child is not None and not (single_line and next_child.is_single_line()):
                out.paragraph()

        if not root:
            out.paragraph().write(')')
            out.decr_indent()
        return False

    def leaves(self, path=()):
        """Iterate over (key path, content) of the nodes having content."""
        if self.content:
            yield path, list(self.content)
        for key, child in self.children.items():
            yield from child.leaves(path + (key,))

    def clear(self):
        self.content.clear()
        self.children.clear()

    def __repr__(self):
        return '<%s %r: %d lines, %d sub-brackets>' % (self.__class__.__name__, self.key,
                                                      len(self.content), len(self.children))
