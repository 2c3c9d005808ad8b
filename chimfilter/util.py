from datetime import datetime
import logging
import os

from .constants import ChimNamespace, cast_boolean

ENV_VAR_PREFIX = 'CHIMFILTER_'


class Log:
    """
    wrapper aroung the builtin logging to make it more readable
    """
    def __init__(self, indent_str='  ', indent_level=0, level=logging.INFO):
        self.indent_str = indent_str
        self.indent_level = indent_level
        self.level = level

    def __call__(self, *pos, time_stamp=False, level=None, indent_level=0, **kwargs):
        if level is None and self.level is None:
            return
        elif self.level is not None:
            level = self.level

        stamp = datetime.now().strftime('[%Y-%m-%d %H:%M:%S]') if time_stamp else ' ' * 21
        indent_prefix = self.indent_str * (self.indent_level + indent_level)
        message = '{} {}{}'.format(stamp, indent_prefix, ' '.join([str(p) for p in pos]))
        logging.log(level, message, **kwargs)

    def indent(self):
        return Log(self.indent_str, self.indent_level + 1, self.level)

    def __enter__(self):
        return self

    def __exit__(self, *pos):
        pass


LOG = Log()
DEVNULL = Log(level=None)


def cast(value, cast_func):
    """
    cast a value to a given type

    Example:
        >>> cast('1', int)
        1
        >>> cast('no', bool)
        False
    """
    if cast_func == bool:
        value = cast_boolean(value)
    else:
        value = cast_func(value)
    return value


def get_env_variable(arg, default, cast_type=None):
    """
    Args:
        arg (str): the argument/variable name
    Returns:
        the setting from the environment variable if given, otherwise the default value
    """
    if cast_type is None:
        cast_type = type(default)
    name = ENV_VAR_PREFIX + str(arg).upper()
    result = os.environ.get(name, None)
    if result is not None:
        return cast(result, cast_type)
    return default


class WeakChimNamespace(ChimNamespace):
    """
    namespace where every member may be overridden by its environment variable
    """

    def is_env_overwritable(self, attr):
        return True


def log_options(options, log=DEVNULL):
    """
    output a set of options to the log

    Args:
        options (dict): option values by name
    """
    log('options', time_stamp=True)
    with log.indent() as log:
        for opt, val in sorted(options.items()):
            if isinstance(val, (list, tuple, set, frozenset)) and len(val) > 1:
                log(opt, '= [{}]'.format(', '.join([repr(v) for v in sorted(val)])))
            else:
                log(opt, '=', repr(val))
