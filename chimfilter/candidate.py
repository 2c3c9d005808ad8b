"""
candidates group the alignments which together support a single putative fusion. A candidate is either a pair
of discordant mates or a split read (its primary and supplementary alignments plus, optionally, its unsplit
mate). The verdict of a candidate starts as :attr:`FILTER.NONE <chimfilter.constants.FILTER>` and may be set once
"""
from .constants import FILTER, READ_ROLE


def combine_annotations(genes1, genes2, union=True):
    """
    combines the gene sets of two alignments

    Args:
        genes1 (set of str): gene ids of the first alignment
        genes2 (set of str): gene ids of the second alignment
        union (bool): union if True, intersection (common genes) otherwise

    Example:
        >>> combine_annotations({'A', 'B'}, {'B', 'C'}, union=False)
        {'B'}
    """
    genes1 = set() if genes1 is None else set(genes1)
    genes2 = set() if genes2 is None else set(genes2)
    if union:
        return genes1 | genes2
    return genes1 & genes2


class Candidate:
    """
    base class of the candidate shapes. Not meant to be instantiated directly
    """
    ROLES = ()

    def __init__(self, name=None, verdict=FILTER.NONE):
        self.name = name
        self.verdict = verdict

    @property
    def records(self):
        """:class:`dict` of :class:`~chimfilter.bam.read.AlignmentRecord` by :class:`str`: the alignments by role"""
        result = {}
        for role in self.ROLES:
            record = getattr(self, role)
            if record is not None:
                result[role] = record
        return result

    def __len__(self):
        return len(self.records)

    def sides(self):
        """
        Returns:
            tuple: the two alignments on either side of the putative junction
        """
        raise NotImplementedError('abstract method must be overidden')

    @property
    def is_filtered(self):
        return self.verdict != FILTER.NONE

    def set_verdict(self, verdict):
        """
        records the filter which rejected this candidate

        Raises:
            AssertionError: a verdict has already been recorded
        """
        if self.is_filtered:
            raise AssertionError('candidate verdict is write-once', self.name, self.verdict, verdict)
        if verdict == FILTER.NONE:
            raise AssertionError('verdict must name the rejecting filter', self.name)
        self.verdict = verdict

    def describe(self):
        return ', '.join(['{}={}'.format(role, record.alignment_id()) for role, record in self.records.items()])

    def __repr__(self):
        return '{}({}, verdict={})'.format(self.__class__.__name__, self.name, self.verdict)


class DiscordantMates(Candidate):
    ROLES = (READ_ROLE.MATE1, READ_ROLE.MATE2)

    def __init__(self, mate1, mate2, name=None, verdict=FILTER.NONE):
        Candidate.__init__(self, name=name, verdict=verdict)
        self.mate1 = mate1
        self.mate2 = mate2

    def sides(self):
        return self.mate1, self.mate2


class SplitRead(Candidate):
    ROLES = (READ_ROLE.SPLIT_READ, READ_ROLE.SUPPLEMENTARY, READ_ROLE.MATE1)

    def __init__(self, split_read, supplementary, mate1=None, name=None, verdict=FILTER.NONE):
        Candidate.__init__(self, name=name, verdict=verdict)
        self.split_read = split_read
        self.supplementary = supplementary
        self.mate1 = mate1

    def sides(self):
        return self.split_read, self.supplementary


def build_candidate(name=None, **records):
    """
    creates the candidate matching the roles given

    Args:
        name (str): the candidate name, usually the read name
        records (AlignmentRecord): alignments keyed by role (see :attr:`READ_ROLE <chimfilter.constants.READ_ROLE>`)

    Raises:
        ValueError: the roles do not describe discordant mates or a split read

    Example:
        >>> build_candidate('read1', mate1=first, mate2=second)
        DiscordantMates(read1, verdict=unfiltered)
    """
    roles = {role for role, record in records.items() if record is not None}
    if roles == {READ_ROLE.MATE1, READ_ROLE.MATE2}:
        return DiscordantMates(records[READ_ROLE.MATE1], records[READ_ROLE.MATE2], name=name)
    elif {READ_ROLE.SPLIT_READ, READ_ROLE.SUPPLEMENTARY} <= roles <= set(SplitRead.ROLES):
        return SplitRead(
            records[READ_ROLE.SPLIT_READ],
            records[READ_ROLE.SUPPLEMENTARY],
            mate1=records.get(READ_ROLE.MATE1),
            name=name
        )
    raise ValueError('alignment roles do not describe a candidate', name, sorted(roles))


def _genes(record, annotation_index):
    if annotation_index is not None:
        return record.annotate(annotation_index)
    return record.genes or frozenset()


def shares_gene_or_contig(candidate, annotation_index=None):
    """
    checks if the two sides of a candidate have a gene in common or, failing that, are on the same contig.
    Candidates where neither holds are not adjudicated by the filters

    Args:
        candidate (Candidate): the candidate to check
        annotation_index (AnnotationIndex): used to annotate records which have not been annotated yet

    Raises:
        MalformedRecordError: a record needed annotating and its cigar could not be interpreted
    """
    first, second = candidate.sides()
    if combine_annotations(_genes(first, annotation_index), _genes(second, annotation_index), union=False):
        return True
    return first.contig == second.contig
