#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Parenthesis-aware splitting of FORM terms.

    >>> split('x*f(a*b)*[c*d]', '*')
    (['x', 'f(a*b)', '[c*d]'], 14)
    >>> split('x*y * ( 1 )', '*', '[]', ' ')
    (['x', 'y'], 3)
"""


PAIRS = '()[]{}'


def split(s, delimiters, pairs=PAIRS, terminators='', start=0):
    """Split `s` at any character of `delimiters`, except between (possibly
    nested) pairs of parentheses.

    `pairs` holds the parentheses: character 2n opens, character 2n+1 closes.
    Pair types are counted independently and may interleave (e.g. "[(])"),
    being inside any of them suppresses the delimiters and terminators.

    The scan stops at the end of the string, at any character of `terminators`
    found outside parentheses, or at a closing parenthesis that has no
    matching opening one.

    Return the list of non-empty substrings and the index of the character
    that stopped the scan (len(s) if the end was reached).
    """
    if len(pairs) % 2:
        raise ValueError('pairs must consist of matching opening/closing characters: %r'
                         % pairs)
    depth = [0] * (len(pairs) // 2)
    nested = 0  # Number of pair types with non-zero depth.

    tokens = []
    prev = start
    pos = start
    while pos < len(s):
        char = s[pos]
        idx = pairs.find(char)
        if idx >= 0:
            kind = idx // 2
            if idx % 2:
                if depth[kind] == 0:
                    break  # Unmatched closing parenthesis.
                depth[kind] -= 1
                if depth[kind] == 0:
                    nested -= 1
            else:
                if depth[kind] == 0:
                    nested += 1
                depth[kind] += 1
        elif not nested:
            if char in terminators:
                break
            if char in delimiters:
                if pos > prev:
                    tokens.append(s[prev:pos])
                prev = pos + 1
        pos += 1

    if pos > prev:
        tokens.append(s[prev:pos])
    return tokens, pos


def symbol_head(symbol):
    """Name of a symbol without its function arguments or exponent.

    Formal names in square brackets are kept whole:

        >>> symbol_head('x^2'), symbol_head('f(x,y)'), symbol_head('[a(1)]^3')
        ('x', 'f', '[a(1)]')
    """
    tokens, _ = split(symbol, '^(', '[]')
    return tokens[0] if tokens else symbol


def is_plusminus(char):
    return char in ('+', '-')
