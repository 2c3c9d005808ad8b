import os

from chimfilter.bam.read import AlignmentRecord
from chimfilter.candidate import DiscordantMates, SplitRead
from chimfilter.constants import STRAND

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


def get_data(*paths):
    return os.path.join(DATA_DIR, *paths)


def forward(start, cigar, contig='1', **kwargs):
    return AlignmentRecord(contig, start, cigar, strand=STRAND.POS, **kwargs)


def reverse(start, cigar, contig='1', **kwargs):
    return AlignmentRecord(contig, start, cigar, strand=STRAND.NEG, **kwargs)


def hairpin_mates(name='hairpin_mates'):
    # mate1 [100, 150) breaks at 150 which mate2 [140, 200) covers
    return DiscordantMates(forward(100, '50M'), reverse(140, '60M'), name=name)


def distant_mates(name='distant_mates', contig2='1'):
    return DiscordantMates(forward(100, '50M'), reverse(200, '50M', contig=contig2), name=name)


def hairpin_short_anchor_split(name='hairpin_short_anchor_split'):
    # the supplementary breaks at 1030 and covers the split read breakpoint 1040 but only aligns 10 bases
    return SplitRead(forward(1000, '40M10S'), reverse(1030, '40S10M'), name=name)


def distant_split(name='distant_split', mate1=None):
    return SplitRead(forward(1000, '30M20S'), reverse(5000, '20S30M'), mate1=mate1, name=name)
