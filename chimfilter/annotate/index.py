"""
positional index over the reference annotations

Each contig is split into elementary segments at every feature boundary (the start and one past the
end of every feature). A segment is covered by the same set of features along its whole length, so a
query only needs to binary search the boundaries and collect the members of the segments it touches.
The index is never modified after construction and may be queried from multiple threads.
"""
import numpy as np

from .base import ReferenceName
from .genomic import Gene
from ..constants import STRAND
from ..util import DEVNULL


class ContigIndex:
    """
    the features of a single contig grouped by elementary segment
    """

    def __init__(self, features):
        # sort is stable so duplicate features keep their input order
        self.features = sorted(features, key=lambda f: (f.start, f.end))
        opening = {}
        closing = {}
        for i, feature in enumerate(self.features):
            opening.setdefault(feature.start, []).append(i)
            closing.setdefault(feature.end + 1, []).append(i)
        self.boundaries = np.array(sorted(set(opening) | set(closing)), dtype=np.int64)
        self.members = []  # members[k] covers [boundaries[k], boundaries[k + 1] - 1]

        active = set()
        for pos in self.boundaries[:-1].tolist():
            active.difference_update(closing.get(pos, []))
            active.update(opening.get(pos, []))
            self.members.append(tuple(sorted(active)))

    def __len__(self):
        return len(self.features)

    def segment_range(self, start, end):
        """
        Returns:
            tuple of int and int: the first and last segment (inclusive) touched by the closed interval [start, end].
                The last segment is less than the first when nothing is touched
        """
        first = int(np.searchsorted(self.boundaries, start, side='right')) - 1
        last = int(np.searchsorted(self.boundaries, end, side='right')) - 1
        return max(first, 0), min(last, len(self.members) - 1)

    def query(self, start, end):
        first, last = self.segment_range(start, end)
        hits = set()
        for members in self.members[first:last + 1]:
            hits.update(members)
        return [self.features[i] for i in sorted(hits)]


class AnnotationIndex:
    """
    answers which annotated features overlap a given reference interval

    Note:
        all coordinates are 0-based and inclusive. Duplicate features are retained and reported once each
    """

    def __init__(self, features=None, log=DEVNULL):
        """
        Args:
            features (:class:`list` of :class:`~chimfilter.annotate.base.BioInterval`): the features to index, in any order
        """
        by_contig = {}
        for feature in [] if features is None else features:
            by_contig.setdefault(ReferenceName(feature.reference_object), []).append(feature)
        self.contig_indices = {contig: ContigIndex(contig_features) for contig, contig_features in by_contig.items()}
        log('indexed', len(self), 'features on', len(self.contig_indices), 'contigs')

    @classmethod
    def from_features(cls, feature_tuples, log=DEVNULL):
        """
        build the index from plain feature tuples

        Args:
            feature_tuples (iterable): tuples of (contig, start, end, strand, id)

        Example:
            >>> index = AnnotationIndex.from_features([('1', 100, 200, '+', 'GENE1')])
            >>> index.overlapping_genes('chr1', 150)
            [Gene(1:100-200+, name=GENE1)]
        """
        genes = []
        for contig, start, end, strand, gene_id in feature_tuples:
            genes.append(Gene(contig, start, end, name=gene_id, strand=strand if strand in STRAND.values() else STRAND.NS))
        return cls(genes, log=log)

    def __len__(self):
        return sum([len(contig_index) for contig_index in self.contig_indices.values()])

    def is_empty(self):
        return len(self) == 0

    def contigs(self):
        return sorted(self.contig_indices.keys())

    def overlapping_genes(self, contig, start, end=None):
        """
        Args:
            contig (str): the reference name. 'chr' prefixes are ignored
            start (int): the start of the query interval (inclusive)
            end (int): the end of the query interval (inclusive). Defaults to start for point queries

        Returns:
            :class:`list` of :class:`~chimfilter.annotate.base.BioInterval`: every feature intersecting the
                query, ordered by position. Empty for contigs without any features
        """
        end = start if end is None else end
        if start > end:
            start, end = end, start
        contig_index = self.contig_indices.get(ReferenceName(contig))
        if contig_index is None:
            return []
        return contig_index.query(start, end)

    def overlapping_gene_ids(self, contig, start, end=None):
        """
        Returns:
            :class:`frozenset` of :class:`str`: the ids of the genes the overlapping features belong to
        """
        return frozenset([feature.gene_id() for feature in self.overlapping_genes(contig, start, end)])
