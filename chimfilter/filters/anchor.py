from .base import Filter, register_filter
from ..candidate import SplitRead
from ..constants import FILTER


@register_filter(priority=30)
class ShortAnchorFilter(Filter):
    """
    rejects split reads where too few bases of the clipped segment align. Short supplementary alignments are
    frequently placed at the wrong locus by the aligner
    """
    name = FILTER.SHORT_ANCHOR
    options = ('min_anchor_length',)

    def evaluate(self, candidate, annotation_index, config):
        if isinstance(candidate, SplitRead) and candidate.supplementary.aligned_bases() < config['min_anchor_length']:
            return self.name
        return None
