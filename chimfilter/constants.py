"""
module responsible for small utility functions and constants used throughout the chimfilter package
"""
import os
import re


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class ChimNamespace:
    """
    Namespace to hold module constants and controlled vocabularies

    Example:
        >>> nspace = ChimNamespace(thing=1, otherthing=2)
        >>> nspace.thing
        1
        >>> nspace.otherthing
        2
    """
    DELIM = r'[;,\s]+'
    """:class:`str`: delimiter to use is parsing listable variables from the environment"""

    def __init__(self, **kwargs):
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_listable', set())
        object.__setattr__(self, '_env_overwritable', set())
        object.__setattr__(self, '_env_prefix', 'CHIMFILTER')

        for attr, val in kwargs.items():
            self[attr] = val
            self._set_type(attr, type(val))

    def get_env_name(self, attr):
        """
        Get the name of the corresponding environment variable

        Example:
            >>> nspace = ChimNamespace(a=1)
            >>> nspace.get_env_name('a')
            'CHIMFILTER_A'
        """
        return '{}_{}'.format(self._env_prefix, attr).upper()

    def get_env_var(self, attr):
        """
        retrieve the environment variable definition of a given attribute
        """
        env = os.environ[self.get_env_name(attr)].strip()
        attr_type = self._types.get(attr, str)

        if attr in self._listable:
            return self.parse_listable_string(env, attr_type)
        return attr_type(env)

    @classmethod
    def parse_listable_string(cls, string, cast_type=str):
        """
        Given some string, parse it into a list

        Example:
            >>> ChimNamespace.parse_listable_string('1,2 3', int)
            [1, 2, 3]
        """
        string = string.strip()
        return [cast_type(val) for val in re.split(cls.DELIM, string)] if string else []

    def is_env_overwritable(self, attr):
        return attr in self._env_overwritable

    def is_listable(self, attr):
        return attr in self._listable

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            variables = object.__getattribute__(self, '_members')
            if attr not in variables:
                raise err
            if self.is_env_overwritable(attr):
                try:
                    return self.get_env_var(attr)
                except KeyError:
                    pass
            return variables[attr]

    def to_dict(self):
        return {k: self[k] for k in self.keys()}

    def __getitem__(self, key):
        return getattr(self, key)

    def __setitem__(self, key, val):
        self.__setattr__(key, val)

    def __setattr__(self, attr, val):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        object.__getattribute__(self, '_members')[attr] = val

    def __contains__(self, attr):
        return attr in self._members

    def keys(self):
        return [k for k in self._members]

    def values(self):
        return [self[k] for k in self._members]

    def enforce(self, value):
        """
        checks that the current namespace has a given value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> STRAND.enforce('+')
            '+'
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def reverse(self, value):
        """
        for a given value, return the associated key

        Example:
            >>> CIGAR.reverse(0)
            'M'
        """
        result = [key for key in self.keys() if self[key] == value]
        if len(result) > 1:
            raise KeyError('could not reverse, the mapping is not unique', value, result)
        elif not result:
            raise KeyError('input value is not assigned to a key', value)
        return result[0]

    def _set_type(self, attr, cast_type):
        if cast_type == bool:
            self._types[attr] = cast_boolean
        else:
            self._types[attr] = cast_type

    def type(self, attr):
        return self._types[attr]

    def add(self, attr, value, cast_type=None, env_overwritable=False, listable=False):
        """
        Add an attribute to the namespace

        Args:
            attr (str): name of the attribute being added
            value: the value of the attribute
            cast_type (function): the function to use in casting the value
            env_overwritable (bool): True if this attribute will be overwritten by its environment variable equivalent
            listable (bool): this attribute can be a list

        Example:
            >>> nspace = ChimNamespace()
            >>> nspace.add('thing', 1)
            >>> nspace.thing
            1
        """
        if cast_type is None:
            cast_type = type(value)
        self._set_type(attr, cast_type)
        if listable:
            self._listable.add(attr)
        if env_overwritable:
            self._env_overwritable.add(attr)
        self[attr] = value


STRAND = ChimNamespace(POS='+', NEG='-', NS='?')
"""
holds controlled vocabulary for allowed strand values

- ``POS``: the forward/positive strand
- ``NEG``: the reversed/negative strand
- ``NS``: strand is not specified
"""

CIGAR = ChimNamespace(M=0, I=1, D=2, N=3, S=4, H=5, P=6, X=8, EQ=7)  # noqa
"""
Enum-like. For readable cigar values

- ``M``: alignment match (can be a sequence match or mismatch)
- ``I``: insertion to the reference
- ``D``: deletion from the reference
- ``N``: skipped region from the reference
- ``S``: soft clipping (clipped sequences present in SEQ)
- ``H``: hard clipping (clipped sequences NOT present in SEQ)
- ``P``: padding (silent deletion from padded reference)
- ``EQ``: sequence match
- ``X``: sequence mismatch
"""

READ_ROLE = ChimNamespace(
    MATE1='mate1',
    MATE2='mate2',
    SPLIT_READ='split_read',
    SUPPLEMENTARY='supplementary'
)
"""
the role an alignment plays within a chimeric candidate

- ``MATE1``/``MATE2``: the two mates of a discordant pair. For split reads, ``MATE1`` is the unsplit mate
- ``SPLIT_READ``: the primary alignment of a read which is clipped at the junction
- ``SUPPLEMENTARY``: the supplementary alignment of the clipped part of the split read
"""

FILTER = ChimNamespace(
    NONE='unfiltered',
    UNINTERESTING_CONTIGS='uninteresting_contigs',
    HAIRPIN='hairpin',
    SHORT_ANCHOR='short_anchor',
    MALFORMED='malformed_alignment'
)
"""
candidate verdicts. ``NONE`` is the initial state, every other value is terminal

- ``MALFORMED``: reserved for candidates excluded because an alignment could not be interpreted
"""
