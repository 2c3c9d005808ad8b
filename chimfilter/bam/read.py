import pysam

from .cigar import alignment_matches, convert_cigar_to_string, convert_string_to_cigar
from ..annotate.base import ReferenceName
from ..breakpoint import aligned_span
from ..constants import STRAND
from ..error import MalformedRecordError
from ..util import DEVNULL


class AlignmentRecord:
    """
    a single aligned segment of a read taking part in a chimeric alignment

    Attributes:
        contig (ReferenceName): the reference the segment is aligned to
        start (int): the 0-based reference position of the first aligned base
        strand (STRAND): the strand the segment is aligned to
        cigar (tuple): the cigar tuples of the alignment
        declared_end (int): the end position (exclusive) reported by the aligner, if any
        genes (frozenset): ids of the genes overlapping the alignment. None until :meth:`annotate` is called
            unless given at construction
    """

    def __init__(self, contig, start, cigar, strand=STRAND.POS, name=None, declared_end=None, is_supplementary=False, genes=None):
        if isinstance(cigar, str):
            cigar = convert_string_to_cigar(cigar)
        if strand not in {STRAND.POS, STRAND.NEG}:
            raise MalformedRecordError('alignment strand must be + or -', strand)
        self.contig = ReferenceName(contig)
        self.start = int(start)
        self.cigar = tuple([(int(state), int(freq)) for state, freq in cigar])
        self.strand = strand
        self.name = name
        self.declared_end = None if declared_end is None else int(declared_end)
        self.is_supplementary = is_supplementary
        self.genes = None if genes is None else frozenset(genes)
        self._annotation = (None, self.genes)

    @classmethod
    def from_pysam(cls, read):
        """
        Args:
            read (pysam.AlignedSegment): a mapped read

        Raises:
            MalformedRecordError: the read is unmapped or has no cigar
        """
        if read.is_unmapped or not read.cigartuples:
            raise MalformedRecordError('cannot build an alignment record from an unmapped read', read.query_name)
        return cls(
            read.reference_name,
            read.reference_start,
            read.cigartuples,
            strand=STRAND.NEG if read.is_reverse else STRAND.POS,
            name=read.query_name,
            declared_end=read.reference_end,
            is_supplementary=read.is_supplementary,
        )

    @property
    def end(self):
        """*int*: the reference position following the last aligned base"""
        return aligned_span(self)[1]

    def aligned_bases(self):
        return alignment_matches(self.cigar)

    def annotate(self, annotation_index):
        """
        looks up the genes overlapping the full reference span of the alignment. The result is kept per index:
        asking again with the same index returns the stored gene set, a different index triggers a new lookup
        and replaces it. Gene sets given at construction are only used when no index is supplied

        Returns:
            :class:`frozenset` of :class:`str`: the overlapping gene ids
        """
        annotated_by, genes = self._annotation
        if annotated_by is not annotation_index:
            start, end = aligned_span(self)
            genes = annotation_index.overlapping_gene_ids(self.contig, start, end - 1)
            self._annotation = (annotation_index, genes)
            self.genes = genes
        return genes

    def alignment_id(self):
        try:
            cigar = convert_cigar_to_string(self.cigar)
        except KeyError:  # unknown cigar state
            cigar = repr(list(self.cigar))
        return '{}:{}{}[{}]{}'.format(self.contig, self.start, self.strand, self.name, cigar)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, self.alignment_id())


def read_alignment_records(filepath, log=DEVNULL):
    """
    reads every mapped alignment of a SAM/BAM file into alignment records keyed by read name. Grouping the
    records into candidates is left to the caller

    Returns:
        :class:`dict` of :class:`list` of :class:`AlignmentRecord` by :class:`str`: the records of each read in file order
    """
    records = {}
    with pysam.AlignmentFile(filepath, 'r', check_sq=False) as fh:
        for read in fh.fetch(until_eof=True):
            if read.is_unmapped:
                continue
            records.setdefault(read.query_name, []).append(AlignmentRecord.from_pysam(read))
    log('read alignments of', len(records), 'reads from', filepath)
    return records
