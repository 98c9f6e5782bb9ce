#!/usr/bin/env python3


import sys


class Stream(object):
    """Context Manager class (for use with `with` statement).

    Do the exact same as `open()`, but if filename is "-" or None:
        - use stdout for writing (flushed, not closed, on exit), or
        - use stdin for reading.
    """
    write_modes = ('w', 'x', 'a')

    def __init__(self, filename=None, *args, **kwargs):
        self.filename = filename
        self.std = filename is None or filename == '-'
        if self.std:
            mode = args[0] if args else kwargs.get('mode', 'r')
            if any(letter in mode for letter in self.write_modes):
                self.stream = sys.stdout
            else:
                self.stream = sys.stdin
        else:
            self.stream = open(filename, *args, **kwargs)

    def __enter__(self):
        return self.stream

    def __exit__(self, type, value, traceback):
        if self.std:
            if self.stream is sys.stdout:
                self.stream.flush()
        else:
            self.stream.close()
