#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Reformat FORM output with multiple levels of brackets.

The input should be a pipe from a FORM program, or a FORM log file. It is
echoed to the output until a term tagged with the multibracket tag is found,
e.g. as printed by FORM after `Bracket [_MB_];` with every term multiplied by
the symbol [_MB_]:

       + [_MB_]*x*y^2*z * ( 1 + 2*w )

The tagged expression is then reformatted like FORM's bracket feature, but
using multiple indentation levels for greater readability.

Each positional argument is a comma-separated list of symbols of the FORM
program, and corresponds to one level of brackets. Ranges like `p1,...,p4`
are allowed.
"""


import re
import sys
import logging
from argparse_custom import ArgumentParser, RawDescriptionDefaultsHelpFormatter, \
                            set_verbosity
from IOtools import Stream
from UItools import colorlog
from formtools.bracket import Bracket
from formtools.errors import MultibracketError, UnexpectedEndOfInput
from formtools.indent_stream import IndentWriter
from formtools.levels import build_table, MULTIBRACKET_TAG, NumericRangeExpander, \
                             FormRangeExpander
from formtools.reading import LineCursor

logger = logging.getLogger(__name__)


INDENT_STEP = 3
BASIC_INDENT = 8
PAR_OFFSET = -2
MAX_WIDTH = 79

ASSIGNMENT = re.compile(r'^\s*(.*?)\s*=\s*$')


def term_regex(tag=MULTIBRACKET_TAG):
    return re.compile(r'^\s*\+\s*' + re.escape(tag))


def end_of_term(cursor):
    """Whether the statement ends after the term (cursor on its closing
    parenthesis). A following line that does not end it is held, to be read
    again."""
    cursor.pos += 1
    cursor.skip_space()
    if cursor.at_end:
        if not cursor.try_advance():
            return False
        cursor.skip_space()
        if cursor.char == ';':
            return True
        cursor.hold()
        return False
    return cursor.char == ';'


def render(root, out):
    root.print(out, root=True)
    out.write(';').flush()


def rebracket(cursor, out, table, max_level, tag=MULTIBRACKET_TAG):
    """Echo the lines from the cursor to the IndentWriter `out`, replacing each
    tagged expression by its bracket tree. Return the number of expressions."""
    is_term = term_regex(tag).match
    root = Bracket()
    expression = None
    in_block = False
    nterms = nblocks = 0

    while cursor.try_advance():
        line = cursor.line
        match = is_term(line)
        if match:
            if not in_block:
                in_block = True
                nterms = 0
                if expression is None:
                    logger.warning('line %d: tagged term outside of an assignment',
                                   cursor.lineno)
                logger.info('line %d: rebracketing %s', cursor.lineno,
                            expression or '<anonymous>')
            cursor.pos = match.end()
            table = root.parse(cursor, table, max_level)
            nterms += 1
            ended = end_of_term(cursor)
        elif in_block:
            text, semicolon, _ = line.strip().partition(';')
            text = text.strip()
            if text:
                logger.warning('line %d: untagged term %r put at the top level',
                               cursor.lineno, text)
                root.content.append(text)
            ended = bool(semicolon)
        else:
            out.verbatim(line)
            assignment = ASSIGNMENT.match(line)
            if assignment:
                expression = assignment.group(1)
            elif ';' in line:
                expression = None
            continue

        if ended:
            render(root, out)
            logger.info('%s: %d terms in %d top-level brackets', expression or '<anonymous>',
                        nterms, len(root.children))
            root.clear()
            in_block = False
            expression = None
            nblocks += 1

    if in_block:
        raise UnexpectedEndOfInput('input ended inside expression %s'
                                   % (expression or '<anonymous>'), cursor.lineno)
    if expression is not None:
        logger.warning('input ended after the assignment of %s', expression)
    return nblocks


def run(instream, outstream, levels, tag=MULTIBRACKET_TAG, prefix_match=False,
        expander=None, indent_step=INDENT_STEP, basic_indent=BASIC_INDENT,
        par_offset=PAR_OFFSET, max_width=MAX_WIDTH):
    """Rebracket the FORM output read from `instream` into `outstream`.

    `levels` lists the symbol groups, one string per bracket level.
    """
    table = build_table(levels, expander, prefix_match)
    for level, names in table.by_level().items():
        logger.debug('Level %d: %s', level, ', '.join(names))

    with IndentWriter(outstream, 0, indent_step, basic_indent, par_offset,
                      max_width) as out:
        return rebracket(LineCursor(instream), out, table, len(levels), tag)


def main(levels, input='-', output='-', tag=MULTIBRACKET_TAG, prefix_match=False,
         form=None, width=MAX_WIDTH, step=INDENT_STEP, basic_indent=BASIC_INDENT,
         par_offset=PAR_OFFSET):
    expander = NumericRangeExpander() if form is None else FormRangeExpander(form, tag)
    with Stream(input) as instream, Stream(output, 'w') as outstream:
        return run(instream, outstream, levels, tag, prefix_match, expander,
                   step, basic_indent, par_offset, width)


def cli(argv=None):
    parser = ArgumentParser(description=__doc__,
                            formatter_class=RawDescriptionDefaultsHelpFormatter)
    parser.add_argument('levels', nargs='+', metavar='LEVEL',
                        help='Symbols of one bracket level, separated by commas')
    parser.add_argument('-i', '--input', default='-', help='FORM output file')
    parser.add_argument('-o', '--output', default='-')
    parser.add_argument('--tag', default=MULTIBRACKET_TAG, help='Multibracket tag')
    parser.add_argument('-p', '--prefix-match', action='store_true',
                        help='Put unlisted symbols at the level of a listed '
                             'symbol that they start with')
    parser.add_argument('--form', metavar='EXE',
                        help='Expand the ... ranges by running this FORM executable')
    parser.add_argument('-w', '--width', type=int, default=MAX_WIDTH,
                        help='Maximum line width')
    parser.add_argument('--step', type=int, default=INDENT_STEP,
                        help='Indentation of each bracket level')
    parser.add_argument('--basic-indent', type=int, default=BASIC_INDENT,
                        help='Indentation of the continuation lines')
    parser.add_argument('--par-offset', type=int, default=PAR_OFFSET,
                        help='Indentation of the terms, relative to --basic-indent')

    args = parser.parse_args(argv)
    colorlog.ColoredFormatter.install(logging.getLogger('formtools'))
    set_verbosity(logging.getLogger('formtools'), args.verbose)
    delattr(args, 'verbose')

    try:
        main(**vars(args))
    except (MultibracketError, OSError) as err:
        logger.error(err)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(cli())
