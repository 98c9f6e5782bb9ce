# -*- coding: utf-8 -*-


"""
Add ANSI color to the levelname, for nicer printing of log records.

Colors are only used when the stream is a terminal, so that redirected
error messages stay plain text.

Taken from: https://stackoverflow.com/a/384125
"""


import sys
import string
from copy import copy
from collections import namedtuple
import logging


colortuple = namedtuple('colorcode',
                        'BLACK RED GREEN YELLOW BLUE MAGENTA CYAN WHITE')

COLORS_I = colortuple(*range(8))

#These are the sequences needed to get colored ouput
RESET_SEQ = "\033[0m"
COLOR_SEQ = "\033[0;%dm"
BRIGHT_SEQ = "\033[1;%dm"
BOLD_SEQ = "\033[1m"

#The background is set with 40 plus the number of the color, and the foreground with 30
COLOR = {colname.lower(): COLOR_SEQ % (30+i)
         for colname,i in COLORS_I._asdict().items()}
COLOR.update({colname: BRIGHT_SEQ % (30+i)
              for colname,i in COLORS_I._asdict().items()})

LVL_I = {
    'WARNING':  COLORS_I.YELLOW,
    'INFO':     COLORS_I.GREEN,
    'DEBUG':    COLORS_I.WHITE,
    'CRITICAL': COLORS_I.YELLOW,
    'ERROR':    COLORS_I.RED}

BASIC_FORMAT = '$LVL%(levelname)s$RESET:$BOLD%(name)s$RESET:%(message)s'


class ColoredFormatter(logging.Formatter):
    """Colorize logs using terminal color codes.

    The format is a `string.Template` where $LVL (color of the level), $BOLD,
    $RESET and the color names ($red, $RED for bright red...) are substituted.
    With `color=False`, they are all removed.
    """

    LVLCOLOR = {lvl: COLOR_SEQ % (30+i) for lvl,i in LVL_I.items()}
    LVLCOLOR.update(ERROR=COLOR['RED'], CRITICAL=BRIGHT_SEQ % 41)

    def __init__(self, fmt=BASIC_FORMAT, datefmt=None, style='%', color=True):
        self.color = color
        codes = dict(COLOR, RESET=RESET_SEQ, BOLD=BOLD_SEQ) if color else \
                dict.fromkeys(list(COLOR) + ['RESET', 'BOLD'], '')
        fmt = string.Template(fmt).substitute(
                    LVL=(('%(lvlcol)s' if style=='%' else '{lvlcol}') if color else ''),
                    **codes)
        super(ColoredFormatter, self).__init__(fmt, datefmt, style)

    def format(self, record):
        if self.color:
            record = copy(record)
            record.lvlcol = self.LVLCOLOR.get(record.levelname, '')
        return super(ColoredFormatter, self).format(record)

    @classmethod
    def install(cls, *loggers, stream=None, format=BASIC_FORMAT, color=None,
                **formatter_kwargs):
        """Attach a stream handler with this formatter (default: to stderr).

        A handler previously installed on the same logger is replaced.
        """
        if stream is None:
            stream = sys.stderr
        if color is None:
            color = hasattr(stream, 'isatty') and stream.isatty()
        sh = logging.StreamHandler(stream)
        sh.setFormatter(cls(format, color=color, **formatter_kwargs))
        if not loggers:
            loggers = (logging.getLogger(),)
        for logger in loggers:
            for handler in list(logger.handlers):
                if isinstance(handler.formatter, ColoredFormatter):
                    logger.removeHandler(handler)
            logger.addHandler(sh)
        return sh
