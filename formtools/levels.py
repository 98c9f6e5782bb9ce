#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Classification of symbols into bracket levels.

The levels are given as lists of symbol names, e.g. on the command line:

    multibracket 'x,y' 'p1,...,p4' '[m(1)],z'

gives level 0 to x and y, level 1 to p1, p2, p3, p4 and level 2 to the formal
name [m(1)] and z. Other symbols go to the catch-all level (3 here).

FORM's `...` operator is expanded by a `RangeExpander`: either the built-in
`NumericRangeExpander`, or `FormRangeExpander` which runs FORM itself, so that
the expansion is consistent with FORM.
"""


import os.path as op
import re
import subprocess
import tempfile
import logging
from formtools.errors import RangeExpansionError, UnexpectedEndOfInput
from formtools.ordered import InsertionOrderMap
from formtools.reading import LineCursor, read_logical_line
from formtools.splitting import split

logger = logging.getLogger(__name__)


ELLIPSIS = '...'
MULTIBRACKET_TAG = '[_MB_]'


class ClassificationTable(InsertionOrderMap):
    """Map symbol heads to bracket levels. Grows with each unseen head.

    With `prefix_match`, an unseen head starting with a known name gets the
    lowest level among such names.
    """
    def __init__(self, items=(), prefix_match=False):
        super().__init__(items)
        self.prefix_match = prefix_match

    def resolve(self, head, max_level):
        """Level of `head`, classifying it at `max_level` when unknown."""
        level = self.get(head)
        if level is None:
            level = max_level
            if self.prefix_match:
                level = min((lvl for name, lvl in self.items()
                             if name and head.startswith(name)),
                            default=max_level)
            self[head] = level
            logger.debug('Unlisted symbol %r -> level %d', head, level)
        return min(level, max_level)

    def copy(self):
        return self.__class__(self.items(), self.prefix_match)

    def by_level(self):
        levels = InsertionOrderMap(default_factory=list)
        for name, level in self.items():
            levels[level].append(name)
        return levels


class RangeExpander(object):
    """Expand the `first,...,last` operator into the list of names."""
    def expand(self, first, last):
        raise NotImplementedError


RANGE_NAME = re.compile(r'^(.*?)(\d+)(\D*)$')


class NumericRangeExpander(RangeExpander):
    """Expand names differing by one integer, e.g. `p1,...,p4` or `x3y,...,x1y`.

    Angle brackets are removed, as FORM does: `<p1>,...,<p3>` gives p1,p2,p3.
    """
    def expand(self, first, last):
        first, last = self.unwrap(first), self.unwrap(last)
        fmatch, lmatch = RANGE_NAME.match(first), RANGE_NAME.match(last)
        if not (fmatch and lmatch) or fmatch.group(1, 3) != lmatch.group(1, 3):
            raise RangeExpansionError('cannot expand range %s,...,%s' % (first, last))
        prefix, _, suffix = fmatch.groups()
        start, stop = int(fmatch.group(2)), int(lmatch.group(2))
        step = 1 if stop >= start else -1
        return ['%s%d%s' % (prefix, i, suffix) for i in range(start, stop + step, step)]

    @staticmethod
    def unwrap(name):
        if name.startswith('<') and name.endswith('>'):
            return name[1:-1]
        return name


FORM_PROGRAM = """* Temporary file for use by multibracket
#-
%s,%s,...,%s;
#+
#+
.end
"""


def parse_form_output(lines, tag=MULTIBRACKET_TAG):
    """Find the expansion echoed by FORM after `tag`, up to the next '#'."""
    cursor = LineCursor(lines)
    while cursor.try_advance():
        pos = cursor.line.find(tag)
        if pos >= 0:
            cursor.pos = pos + len(tag) + 1  # Skip the comma.
            try:
                expansion = read_logical_line(cursor, '#')
            except UnexpectedEndOfInput as err:
                raise RangeExpansionError('truncated FORM output: %s' % err) from err
            names, _ = split(expansion.rstrip('; '), ', ', '[]')
            return names
    raise RangeExpansionError('no expansion found in FORM output')


class FormRangeExpander(RangeExpander):
    """Run FORM on a tiny temporary program containing only the range."""
    def __init__(self, executable='form', tag=MULTIBRACKET_TAG, timeout=60):
        self.executable = executable
        self.tag = tag
        self.timeout = timeout

    def run_form(self, program):
        """Run FORM on the program text, return its standard output."""
        with tempfile.TemporaryDirectory(prefix='multibracket') as tmpdir:
            progfile = op.join(tmpdir, 'multibracket_tmp.frm')
            with open(progfile, 'w') as out:
                out.write(program)
            try:
                p = subprocess.Popen([self.executable, '-y', op.basename(progfile)],
                                     cwd=tmpdir,
                                     stdout=subprocess.PIPE,
                                     stderr=subprocess.PIPE,
                                     universal_newlines=True)
            except OSError as err:
                raise RangeExpansionError('cannot run %r: %s' % (self.executable, err)) from err
            try:
                stdout, stderr = p.communicate(timeout=self.timeout)
            except subprocess.TimeoutExpired:
                p.kill()
                p.communicate()
                raise RangeExpansionError('%r timed out after %ss'
                                          % (self.executable, self.timeout))
        # Success is decided by finding the tag in the log.
        logger.debug('%r exited with code %d: %s', self.executable, p.returncode,
                     stderr.strip())
        return stdout

    def expand(self, first, last):
        output = self.run_form(FORM_PROGRAM % (self.tag, first, last))
        return parse_form_output(output.splitlines(), self.tag)


def expand_ranges(names, expander):
    """Replace each `first, ..., last` sequence by the expanded names."""
    expanded = []
    i = 0
    while i < len(names):
        name = names[i]
        if name != ELLIPSIS:
            expanded.append(name)
            i += 1
            continue
        if not expanded:
            raise RangeExpansionError('empty beginning of %s range' % ELLIPSIS)
        if i + 1 >= len(names):
            raise RangeExpansionError('empty end of %s range after %r'
                                      % (ELLIPSIS, expanded[-1]))
        first, last = expanded.pop(), names[i + 1]
        symbols = expand_ranges(expander.expand(first, last), expander)
        logger.debug('Expanded %s,...,%s -> %s', first, last, ','.join(symbols))
        expanded.extend(symbols)
        i += 2
    return expanded


def parse_bracket_symbols(level, symbol_group, table, expander=None):
    """Add the symbols listed in `symbol_group` at `level` in `table`.

    Symbols already classified keep their previous level.
    """
    if expander is None:
        expander = NumericRangeExpander()
    names, _ = split(symbol_group, ', ', '[]')
    for name in expand_ranges(names, expander):
        table.insert(name, level)
    return table


def build_table(levels, expander=None, prefix_match=False):
    """Classification table from a list of symbol groups, one per level."""
    table = ClassificationTable(prefix_match=prefix_match)
    for level, symbol_group in enumerate(levels):
        parse_bracket_symbols(level, symbol_group, table, expander)
    return table
