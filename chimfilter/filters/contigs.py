from .base import Filter, register_filter
from ..annotate.base import ReferenceName
from ..constants import FILTER


@register_filter(priority=10)
class UninterestingContigsFilter(Filter):
    """
    rejects candidates with an alignment on a contig which is not of interest (unplaced scaffolds, decoys,
    the mitochondrial genome, etc.). Only candidates which pass the gene/contig gate reach the filters, so
    a candidate with its sides on two different contigs and no gene in common is never rejected here even
    when one of the contigs is not of interest
    """

    name = FILTER.UNINTERESTING_CONTIGS
    options = ('interesting_contigs',)

    def evaluate(self, candidate, annotation_index, config):
        interesting = {ReferenceName(contig) for contig in config['interesting_contigs']}
        for record in candidate.records.values():
            if record.contig not in interesting:
                return self.name
        return None
