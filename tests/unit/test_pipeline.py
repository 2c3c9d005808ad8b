import random

import pytest

from chimfilter.annotate.index import AnnotationIndex
from chimfilter.bam.read import AlignmentRecord
from chimfilter.candidate import DiscordantMates
from chimfilter.config import FilterConfig
from chimfilter.constants import FILTER
from chimfilter.error import ConfigurationError
from chimfilter.filters import REGISTRY, Filter, register_filter
from chimfilter.filters.hairpin import HairpinFilter
from chimfilter.pipeline import FilterPipeline

from ..util import distant_mates, distant_split, forward, hairpin_mates, hairpin_short_anchor_split, reverse


class SpyFilter(Filter):
    name = 'spy'

    def __init__(self):
        self.seen = []

    def evaluate(self, candidate, annotation_index, config):
        self.seen.append(candidate.name)
        return None


@pytest.fixture
def spy():
    original = dict(REGISTRY)
    register_filter(priority=5)(SpyFilter)
    yield SpyFilter
    REGISTRY.clear()
    REGISTRY.update(original)


def mixed_candidates():
    return [
        hairpin_mates('hairpin'),
        distant_mates('distant'),
        hairpin_short_anchor_split('short'),
        distant_split('split'),
        distant_split('split_with_mate', mate1=reverse(4950, '100M')),
        DiscordantMates(forward(100, '50M', contig='MT'), reverse(200, '50M', contig='MT'), name='mito'),
    ]


class TestEvaluate:
    def test_hairpin_mates(self):
        candidate = hairpin_mates()
        remaining = FilterPipeline().run([candidate])
        assert candidate.verdict == FILTER.HAIRPIN
        assert remaining == 0

    def test_distant_mates_survive(self):
        candidate = distant_mates()
        remaining = FilterPipeline().run([candidate])
        assert candidate.verdict == FILTER.NONE
        assert remaining == 1

    def test_first_match_wins(self):
        candidate = hairpin_short_anchor_split()
        FilterPipeline().run([candidate])
        assert candidate.verdict == FILTER.HAIRPIN

    def test_disabled_filter_skipped(self):
        candidate = hairpin_short_anchor_split()
        FilterPipeline(FilterConfig({FILTER.HAIRPIN: False})).run([candidate])
        assert candidate.verdict == FILTER.SHORT_ANCHOR

    def test_all_disabled(self):
        candidates = mixed_candidates()
        config = FilterConfig({name: False for name in [FILTER.UNINTERESTING_CONTIGS, FILTER.HAIRPIN, FILTER.SHORT_ANCHOR]})
        pipeline = FilterPipeline(config)
        assert pipeline.filters == []
        assert pipeline.run(candidates) == len(candidates)
        assert all([c.verdict == FILTER.NONE for c in candidates])

    def test_contigs_checked_before_hairpin(self):
        candidate = DiscordantMates(forward(100, '50M', contig='MT'), reverse(140, '60M', contig='MT'))
        FilterPipeline().run([candidate])
        assert candidate.verdict == FILTER.UNINTERESTING_CONTIGS

    def test_evaluate_does_not_record(self):
        candidate = hairpin_mates()
        assert FilterPipeline().evaluate(candidate) == FILTER.HAIRPIN
        assert candidate.verdict == FILTER.NONE

    def test_explicit_filters(self):
        candidate = hairpin_short_anchor_split()
        pipeline = FilterPipeline(filters=[HairpinFilter()])
        assert [f.name for f in pipeline.filters] == [FILTER.HAIRPIN]
        pipeline.run([candidate])
        assert candidate.verdict == FILTER.HAIRPIN

    def test_duplicate_filter_names(self):
        with pytest.raises(ConfigurationError):
            FilterPipeline(filters=[HairpinFilter(), HairpinFilter()])


class TestGate:
    def test_different_contigs_not_adjudicated(self, spy):
        # overlapping coordinates on different contigs would otherwise look like a hairpin
        candidate = DiscordantMates(forward(100, '50M', contig='1'), reverse(140, '60M', contig='2'), name='interchromosomal')
        pipeline = FilterPipeline()
        assert pipeline.run([candidate]) == 1
        assert candidate.verdict == FILTER.NONE
        assert pipeline.filters[0].seen == []

    def test_same_contig_adjudicated(self, spy):
        candidate = distant_mates('same_contig')
        pipeline = FilterPipeline()
        pipeline.run([candidate])
        assert pipeline.filters[0].seen == ['same_contig']

    def test_common_gene_adjudicated(self, spy):
        index = AnnotationIndex.from_features([('1', 0, 1000, '+', 'GENE1'), ('2', 0, 1000, '+', 'GENE1')])
        candidate = DiscordantMates(forward(100, '50M', contig='1'), reverse(500, '50M', contig='2'), name='shared')
        pipeline = FilterPipeline(annotation_index=index)
        assert pipeline.run([candidate]) == 1
        assert pipeline.filters[0].seen == ['shared']
        assert candidate.verdict == FILTER.NONE

    def test_uninteresting_contig_on_one_side_not_adjudicated(self):
        candidate = DiscordantMates(forward(100, '50M', contig='1'), reverse(5000, '50M', contig='GL000220.1'))
        assert FilterPipeline().run([candidate]) == 1
        assert candidate.verdict == FILTER.NONE

    def test_uninteresting_contig_on_both_sides(self):
        candidate = DiscordantMates(forward(100, '50M', contig='GL000220.1'), reverse(5000, '50M', contig='GL000220.1'))
        assert FilterPipeline().run([candidate]) == 0
        assert candidate.verdict == FILTER.UNINTERESTING_CONTIGS

    def test_uninteresting_contig_with_common_gene(self):
        index = AnnotationIndex.from_features([('1', 0, 1000, '+', 'GENE1'), ('MT', 0, 1000, '+', 'GENE1')])
        candidate = DiscordantMates(forward(100, '50M', contig='1'), reverse(500, '50M', contig='MT'))
        assert FilterPipeline(annotation_index=index).run([candidate]) == 0
        assert candidate.verdict == FILTER.UNINTERESTING_CONTIGS

    def test_annotation_replaced_by_new_index(self):
        candidate = distant_mates()
        FilterPipeline(annotation_index=AnnotationIndex()).run([candidate])
        assert candidate.mate1.genes == frozenset()
        index = AnnotationIndex.from_features([('1', 0, 1000, '+', 'GENE1')])
        FilterPipeline(annotation_index=index).run([candidate])
        assert candidate.mate1.genes == {'GENE1'}


class TestMalformed:
    def test_declared_end_mismatch(self):
        candidate = DiscordantMates(forward(100, '50M', declared_end=160), reverse(140, '60M'), name='bad')
        pipeline = FilterPipeline()
        assert pipeline.run([candidate, distant_mates()]) == 1
        assert candidate.verdict == FILTER.MALFORMED
        assert pipeline.stats[FILTER.MALFORMED] == 1

    def test_unknown_cigar_state(self):
        candidate = DiscordantMates(AlignmentRecord('1', 100, [(9, 10)]), reverse(140, '60M'), name='bad')
        assert FilterPipeline().run([candidate]) == 0
        assert candidate.verdict == FILTER.MALFORMED

    def test_malformed_annotation(self):
        index = AnnotationIndex.from_features([('1', 0, 1000, '+', 'GENE1')])
        candidate = DiscordantMates(AlignmentRecord('1', 100, [(4, 10)]), reverse(140, '60M', contig='2'), name='bad')
        assert FilterPipeline(annotation_index=index).run([candidate]) == 0
        assert candidate.verdict == FILTER.MALFORMED

    def test_others_unaffected(self):
        candidates = [DiscordantMates(AlignmentRecord('1', 100, [(9, 10)]), reverse(140, '60M'), name='bad'), hairpin_mates()]
        FilterPipeline().run(candidates)
        assert [c.verdict for c in candidates] == [FILTER.MALFORMED, FILTER.HAIRPIN]


class TestRun:
    def test_stats(self):
        candidates = mixed_candidates()
        pipeline = FilterPipeline()
        assert pipeline.run(candidates) == 2
        assert pipeline.stats == {FILTER.HAIRPIN: 3, FILTER.UNINTERESTING_CONTIGS: 1}
        assert [c.verdict for c in candidates] == [
            FILTER.HAIRPIN, FILTER.NONE, FILTER.HAIRPIN, FILTER.NONE, FILTER.HAIRPIN, FILTER.UNINTERESTING_CONTIGS]

    def test_idempotent(self):
        candidates = mixed_candidates()
        pipeline = FilterPipeline()
        first = pipeline.run(candidates)
        verdicts = [c.verdict for c in candidates]
        second = pipeline.run([c for c in candidates if c.is_filtered])
        assert second == 0
        assert [c.verdict for c in candidates] == verdicts
        assert first == 2

    def test_rerun_only_counts_pending(self):
        candidates = mixed_candidates()
        pipeline = FilterPipeline()
        pipeline.run(candidates)
        assert pipeline.run(candidates) == 2
        assert pipeline.stats == {}

    def test_prior_verdict_kept(self, spy):
        candidate = hairpin_mates('already')
        candidate.set_verdict(FILTER.SHORT_ANCHOR)
        pipeline = FilterPipeline()
        assert pipeline.run([candidate]) == 0
        assert candidate.verdict == FILTER.SHORT_ANCHOR
        assert pipeline.filters[0].seen == []

    def test_order_independent(self):
        expected = {c.name: c for c in mixed_candidates()}
        remaining = FilterPipeline().run(expected.values())
        shuffled = mixed_candidates()
        random.Random(3).shuffle(shuffled)
        assert FilterPipeline().run(shuffled) == remaining
        for candidate in shuffled:
            assert candidate.verdict == expected[candidate.name].verdict

    @pytest.mark.parametrize('threads', [2, 4])
    def test_threads(self, threads):
        serial = mixed_candidates()
        serial_remaining = FilterPipeline().run(serial, threads=1)
        threaded = mixed_candidates()
        assert FilterPipeline().run(threaded, threads=threads) == serial_remaining
        assert [c.verdict for c in threaded] == [c.verdict for c in serial]

    def test_threads_from_env(self, monkeypatch):
        monkeypatch.setenv('CHIMFILTER_THREADS', '3')
        candidates = mixed_candidates()
        assert FilterPipeline().run(candidates) == 2

    def test_shared_records_annotated_once(self):
        index = AnnotationIndex.from_features([('1', 0, 100000, '+', 'GENE1')])
        mate = forward(100, '50M')
        candidates = [DiscordantMates(mate, reverse(200, '50M'), name='a'), DiscordantMates(mate, reverse(300, '50M'), name='b')]
        FilterPipeline(annotation_index=index).run(candidates)
        assert mate.genes == {'GENE1'}
