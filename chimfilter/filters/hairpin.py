"""
A hairpin forms when one strand of a fragment folds back and anneals to itself. Sequencing across the fold
produces a read whose parts align to the same locus in opposite orientations which looks like an inversion
or a fusion although the fragment was read twice. Such alignments overlap each other: the junction of one
side falls within the aligned bases of the other
"""
from .base import Filter, register_filter
from ..breakpoint import breakpoint_position, breakpoint_within_segment
from ..candidate import DiscordantMates, SplitRead
from ..constants import FILTER


@register_filter(priority=20)
class HairpinFilter(Filter):
    name = FILTER.HAIRPIN
    # max_mate_gap is accepted but not consulted when comparing the alignments
    options = ('max_mate_gap',)

    def evaluate(self, candidate, annotation_index, config):
        if isinstance(candidate, DiscordantMates):
            breakpoint1 = breakpoint_position(candidate.mate1)
            breakpoint2 = breakpoint_position(candidate.mate2)
            if breakpoint_within_segment(breakpoint1, candidate.mate2) or \
                    breakpoint_within_segment(breakpoint2, candidate.mate1):
                return self.name
        elif isinstance(candidate, SplitRead):
            breakpoint_split_read = breakpoint_position(candidate.split_read)
            breakpoint_supplementary = breakpoint_position(candidate.supplementary)
            if breakpoint_within_segment(breakpoint_split_read, candidate.supplementary) or \
                    breakpoint_within_segment(breakpoint_supplementary, candidate.split_read):
                return self.name
            if candidate.mate1 is not None and breakpoint_within_segment(breakpoint_supplementary, candidate.mate1):
                return self.name
        return None
