import re

from ..constants import STRAND


class ReferenceName(str):
    """
    Class for reference sequence names. Ensures that hg19/hg38 chromosome names match.

    Example:
        >>> ReferenceName('chr1') == ReferenceName('1')
        True
    """
    def __eq__(self, other):
        options = {str(self)}
        if self.startswith('chr'):
            options.add(str(self[3:]))
        else:
            options.add('chr' + str(self))
        return other in options

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(re.sub('^chr', '', str(self)))

    def __lt__(self, other):
        self_std_repr = self if not self.startswith('chr') else self[3:]
        other_std_repr = other if not other.startswith('chr') else other[3:]
        return str.__lt__(self_std_repr, other_std_repr)


class BioInterval:

    def __init__(self, reference_object, start, end=None, name=None, strand=STRAND.NS):
        """
        Args:
            reference_object: the object (chromosome or parent feature) this interval is on
            start (int): start of the interval (inclusive)
            end (int): end of the interval (inclusive). Defaults to start
            name (str): the identifier of the feature
            strand (STRAND): the strand the feature is defined on

        Raises:
            AttributeError: the start is after the end

        Example:
            >>> BioInterval('1', 12572784, 12578898, 'ENSG00000116731')
            BioInterval(1:12572784-12578898?, name=ENSG00000116731)
        """
        self.reference_object = reference_object
        self.name = name
        self.start = int(start)
        self.end = self.start if end is None else int(end)
        if self.start > self.end:
            raise AttributeError('interval start > end is not allowed', self.start, self.end)
        self.strand = STRAND.enforce(strand)

    def gene_id(self):
        """*str*: identifier of the gene this feature belongs to"""
        return self.name

    def __repr__(self):
        return '{}({}:{}-{}{}, name={})'.format(
            self.__class__.__name__, self.reference_object, self.start, self.end, self.strand, self.name)
