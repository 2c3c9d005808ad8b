import re

from .constants import ChimNamespace
from .error import ConfigurationError
from .filters import filter_names
from .util import WeakChimNamespace, cast

DEFAULTS = WeakChimNamespace()
"""
- ``max_mate_gap``: maximum expected distance between the mates of a fragment. Declared by the hairpin filter
  but not used to decide if a candidate is a hairpin
- ``min_anchor_length``: split reads where fewer bases of the supplementary alignment are aligned are discarded
  by the short_anchor filter
- ``interesting_contigs``: adjudicated candidates with an alignment on any other contig are discarded by the
  uninteresting_contigs filter
"""
DEFAULTS.add('max_mate_gap', 200, cast_type=int)
DEFAULTS.add('min_anchor_length', 23, cast_type=int)
DEFAULTS.add('interesting_contigs', [str(i) for i in range(1, 23)] + ['X', 'Y'], cast_type=str, listable=True)


def parse_disabled_filters(text):
    """
    parses a comma and/or space separated list of the filters to disable

    Raises:
        ConfigurationError: one of the names is not a filter

    Example:
        >>> parse_disabled_filters('hairpin, short_anchor')
        {'hairpin': False, 'short_anchor': False}
    """
    known = filter_names()
    disabled = {}
    for name in re.split(ChimNamespace.DELIM, text.strip()) if text.strip() else []:
        if name not in known:
            raise ConfigurationError('invalid filter name: {}. Valid values: {}'.format(name, ', '.join(known)))
        disabled[name] = False
    return disabled


class FilterConfig:
    """
    which filters are enabled and the options they read. Validated once at construction and never modified
    afterwards so that it can be shared between threads
    """

    def __init__(self, filters=None, **options):
        """
        Args:
            filters (dict of str and bool): enabled state by filter name. Filters not given are enabled
            options: values for the options in :data:`DEFAULTS`. Options not given take the default value

        Raises:
            ConfigurationError: a filter or option name is unknown
        """
        known = filter_names()
        self.filters = {name: True for name in known}
        for name, enabled in (filters or {}).items():
            if name not in self.filters:
                raise ConfigurationError('invalid filter name: {}. Valid values: {}'.format(name, ', '.join(known)))
            self.filters[name] = cast(enabled, bool)

        self.options = DEFAULTS.to_dict()
        for option, value in options.items():
            if option not in DEFAULTS:
                raise ConfigurationError('invalid option name: {}. Valid values: {}'.format(option, ', '.join(DEFAULTS.keys())))
            cast_type = DEFAULTS.type(option)
            if DEFAULTS.is_listable(option):
                if isinstance(value, str):
                    value = DEFAULTS.parse_listable_string(value, cast_type)
                else:
                    value = [cast_type(v) for v in value]
            else:
                value = cast(value, cast_type)
            self.options[option] = value

    @classmethod
    def from_dict(cls, mapping):
        """
        Args:
            mapping (dict): options by name plus the enabled state of the filters under the key 'filters'

        Example:
            >>> FilterConfig.from_dict({'filters': {'hairpin': False}, 'min_anchor_length': 30})
        """
        mapping = dict(mapping)
        filters = mapping.pop('filters', None)
        return cls(filters, **mapping)

    def is_enabled(self, name):
        """
        Raises:
            ConfigurationError: the name is not a registered filter
        """
        try:
            return self.filters[name]
        except KeyError:
            raise ConfigurationError('invalid filter name: {}'.format(name))

    def __getitem__(self, option):
        return self.options[option]

    def to_dict(self):
        result = dict(self.options)
        result['filters'] = dict(self.filters)
        return result

    def __repr__(self):
        return '{}(filters={}, {})'.format(
            self.__class__.__name__, self.filters, ', '.join(['{}={}'.format(k, repr(v)) for k, v in sorted(self.options.items())]))
