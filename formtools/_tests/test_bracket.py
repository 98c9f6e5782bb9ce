#!/usr/bin/env python3
# -*- coding: utf-8 -*-


from io import StringIO
import pytest
from formtools.errors import MalformedTerm
from formtools.indent_stream import IndentWriter
from formtools.levels import build_table
from formtools.multibracket import term_regex
from formtools.reading import LineCursor
from formtools.bracket import *


def parse_terms(text, levels):
    table = build_table(levels)
    root = Bracket()
    is_term = term_regex().match
    cursor = LineCursor.from_text(text)
    while cursor.try_advance():
        match = is_term(cursor.line)
        if match:
            cursor.pos = match.end()
            table = root.parse(cursor, table, len(levels))
    return root, table


def render(root, max_width=79):
    stream = StringIO()
    with IndentWriter(stream, 0, 3, 8, -2, max_width) as out:
        root.print(out, root=True)
    return stream.getvalue()


@pytest.mark.parametrize('text,start', [
    ('*x*y * ( 1 )', 7),
    ('*a*b*(1)', 5),
    ('*f(x)*[g(1)] * (', 15),
    ('*f(x*(y+1))*(1)', 12),
    ('*x*y', -1)])
def test_content_start(text, start):
    assert content_start(text) == start


class Test_read_header:
    def test_header(self):
        cursor = LineCursor.from_text('*x^2*f(y,z) * ( 1 )')
        cursor.advance()
        assert read_header(cursor) == ['x^2', 'f(y,z)']
        assert cursor.rest == ' 1 )'

    def test_products_in_arguments(self):
        cursor = LineCursor.from_text('*f(a*b)*x*(1)')
        cursor.advance()
        assert read_header(cursor) == ['f(a*b)', 'x']

    @pytest.mark.parametrize('text,symbols', [
        ('*a*b\n       *c * ( 1 )', ['a', 'b', 'c']),
        ('*a*b *\n       ( 1 )', ['a', 'b']),
        ('*a*b \n       * ( 1 )', ['a', 'b'])])
    def test_wrapped_header(self, text, symbols):
        cursor = LineCursor.from_text(text)
        cursor.advance()
        assert read_header(cursor) == symbols
        assert cursor.lineno == 2 and cursor.rest == ' 1 )'

    @pytest.mark.parametrize('text', ['*a + b', '*a*b', '*a b * ( 1 )'])
    def test_malformed(self, text):
        cursor = LineCursor.from_text(text)
        cursor.advance()
        with pytest.raises(MalformedTerm):
            read_header(cursor)


class Test_parse:
    def test_unclassified_go_to_catch_all(self):
        root, table = parse_terms('       + [_MB_]*x*y*z * ( + y*z )', ['x'])
        assert list(root.children) == ['x']
        x = root.children['x']
        assert list(x.children) == ['y*z']
        assert x.children['y*z'].content == ['+ y*z']
        assert table['y'] == table['z'] == 1

    def test_insertion_order_of_siblings(self):
        root, _ = parse_terms('+ [_MB_]*a*b*(1)\n+ [_MB_]*a*(2)', ['a,b'])
        assert list(root.children) == ['a*b', 'a']
        assert root.children['a*b'].content == ['1']
        assert root.children['a'].content == ['2']

    def test_empty_levels_are_skipped(self):
        root, _ = parse_terms('       + [_MB_]*c*a * ( 1 )', ['a', 'b', 'c'])
        assert list(root.leaves()) == [(('a', 'c'), ['1'])]

    def test_same_path_accumulates(self):
        root, _ = parse_terms('       + [_MB_]*x * ( 1 )\n       + [_MB_]*x * ( - 2 )',
                              ['x'])
        assert root.children['x'].content == ['1', '- 2']

    def test_function_arguments_do_not_count(self):
        root, table = parse_terms('       + [_MB_]*f(x)*x * ( 1 )', ['y', 'x'])
        assert list(root.leaves()) == [(('x', 'f(x)'), ['1'])]
        assert table['f'] == 2

    def test_multiline_content(self):
        text = '\n'.join(['       + [_MB_]*a * (',
                          '          + 1',
                          '          + 2*y',
                          '          )'])
        root, _ = parse_terms(text, ['a'])
        assert root.children['a'].content == ['+ 1', '+ 2*y']

    def test_wrapped_content(self):
        text = '\n'.join(['       + [_MB_]*a * ( 1 + 2*y +',
                          '          3*y^2 )'])
        root, _ = parse_terms(text, ['a'])
        assert root.children['a'].content == ['1 + 2*y + 3*y^2']

    def test_table_is_extended_not_replaced(self):
        table = build_table(['a'])
        root = Bracket()
        cursor = LineCursor.from_text('*a*b * ( 1 )')
        cursor.advance()
        assert root.parse(cursor, table, 1) is table
        assert list(table) == ['a', 'b']


class Test_is_single_line:
    @pytest.mark.parametrize('text,levels,expected', [
        ('+ [_MB_]*a * ( 1 )', ['a'], True),
        ('+ [_MB_]*a*b * ( 1 )', ['a', 'b'], True),
        ('+ [_MB_]*a*b * ( 1 )\n+ [_MB_]*a*c * ( 1 )', ['a', 'b,c'], False),
        ('+ [_MB_]*a * ( 1 )\n+ [_MB_]*a*b * ( 1 )', ['a', 'b'], False),
        ('+ [_MB_]*a * ( 1 )\n+ [_MB_]*a * ( 2 )', ['a'], False)])
    def test_first_child(self, text, levels, expected):
        root, _ = parse_terms(text, levels)
        child = root.children['a']
        assert child.is_single_line() is expected

    def test_matches_print(self):
        root, _ = parse_terms('+ [_MB_]*a*b * ( 1 )\n+ [_MB_]*c * ( 1 )\n'
                              '+ [_MB_]*c * ( 2 )', ['a,c', 'b'])
        for child in root.children.values():
            out = IndentWriter(StringIO(), 0, 3, 8, -2, 79)
            assert child.print(out) is child.is_single_line()


class Test_print:
    def test_single_line_siblings(self):
        root, _ = parse_terms('+ [_MB_]*a*b*(1)\n+ [_MB_]*a*(2)', ['a,b'])
        assert render(root) == ('      + a*b * ( 1 )\n'
                                '      + a * ( 2 )\n')

    def test_single_child_chain_is_collapsed(self):
        root, _ = parse_terms('       + [_MB_]*x*y*z * ( + y*z )', ['x'])
        assert render(root) == '      + x*y*z * ( + y*z )\n'

    def test_blank_line_after_multiline_sibling(self):
        text = '\n'.join(['       + [_MB_]*a*b * ( 1 )',
                          '       + [_MB_]*a*c * ( 2 )',
                          '       + [_MB_]*d * ( 3 )'])
        root, _ = parse_terms(text, ['a', 'b,c'])
        assert render(root) == ('      + a * (\n'
                                '         + b * ( 1 )\n'
                                '         + c * ( 2 )\n'
                                '         )\n'
                                '\n'
                                '      + d * ( 3 )\n')

    def test_multiline_leaf(self):
        text = '\n'.join(['       + [_MB_]*a * (',
                          '          + 1',
                          '          + 2',
                          '          )'])
        root, _ = parse_terms(text, ['a'])
        assert render(root) == ('      + a * (\n'
                                '         + 1\n'
                                '         + 2\n'
                                '         )\n')

    def test_top_level_content(self):
        root, _ = parse_terms('       + [_MB_] * ( 5 )', ['a'])
        assert root.content == ['5']
        assert render(root) == '      + 5\n'

    def test_top_level_signed_content(self):
        root, _ = parse_terms('       + [_MB_] * ( - 5 )', ['a'])
        assert render(root) == '      - 5\n'

    def test_long_content_wrapped(self):
        content = ' + '.join('x%d' % i for i in range(40))
        root, _ = parse_terms('       + [_MB_]*a * ( %s )' % content, ['a'])
        text = render(root)
        assert all(len(line) <= 79 for line in text.splitlines())
        assert len(text.splitlines()) > 1
        assert text.split() == ['+', 'a', '*', '('] + content.split() + [')']


def test_leaves_and_clear():
    text = '\n'.join(['+ [_MB_]*a*b * ( 1 )',
                      '+ [_MB_]*a * ( 2 )',
                      '+ [_MB_]*c * ( 3 )'])
    root, _ = parse_terms(text, ['a,c', 'b'])
    assert list(root.leaves()) == [(('a',), ['2']), (('a', 'b'), ['1']),
                                   (('c',), ['3'])]
    root.clear()
    assert not root.children and not root.content


@pytest.mark.parametrize('max_width', [79, 30])
def test_rendered_output_parses_back(max_width):
    content = ' + '.join('x%d' % i for i in range(12))
    text = '\n'.join(['       + [_MB_]*a*b * ( 1 )',
                      '       + [_MB_]*a * ( %s )' % content,
                      '       + [_MB_]*c * ( - 3 )',
                      '       + [_MB_]*a*b * ( - y )'])
    root, _ = parse_terms(text, ['a,b,c'])

    # Turn each top-level bullet back into a tagged term.
    lines = [line.replace('      + ', '      + [_MB_]*', 1)
             if line.startswith('      + ') else line
             for line in render(root, max_width).splitlines()]
    reparsed, _ = parse_terms('\n'.join(lines), ['a,b,c'])
    assert list(reparsed.leaves()) == list(root.leaves())
    assert list(root.leaves()) == [(('a*b',), ['1', '- y']), (('a',), [content]),
                                   (('c',), ['- 3'])]
