

"""A custom help formatter that only prints metavar and choices once,
and an ArgumentParser with a shared verbosity option."""

import logging
from argparse import *


class HelpFormatter(HelpFormatter):
    """Replace argparse default metavar formatting: only write it once."""
    def _format_action_invocation(self, action):
        if not action.option_strings:
            default = self._get_default_metavar_for_positional(action)
            metavar, = self._metavar_formatter(action, default)(1)
            return metavar

        parts = list(action.option_strings)
        # if the Optional takes a value, format is:
        #    -s, --long ARGS
        if action.nargs != 0:
            default = self._get_default_metavar_for_optional(action)
            parts[-1] += ' %s' % self._format_args(action, default)
        return ', '.join(parts)


class RawDescriptionHelpFormatter(HelpFormatter, RawDescriptionHelpFormatter):
    pass

class ArgumentDefaultsHelpFormatter(HelpFormatter, ArgumentDefaultsHelpFormatter):
    pass

class RawDescriptionDefaultsHelpFormatter(RawDescriptionHelpFormatter,
                                          ArgumentDefaultsHelpFormatter):
    pass


class ArgumentParser(ArgumentParser):
    """Parser using the formatter above, with a `-v/--verbose` counter."""
    def __init__(self, *args, formatter_class=HelpFormatter, verbosity=True, **kwargs):
        super().__init__(*args, formatter_class=formatter_class, **kwargs)
        if verbosity:
            self.add_argument('-v', '--verbose', action='count', default=0,
                              help='Increase verbosity: -v for info, -vv for debug')


def set_verbosity(logger, verbose):
    if verbose > 1:
        logger.setLevel(logging.DEBUG)
    elif verbose > 0:
        logger.setLevel(logging.INFO)
