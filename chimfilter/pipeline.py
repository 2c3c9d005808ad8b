"""
applies the enabled filters to every candidate which has not been adjudicated yet. Each candidate receives at
most one verdict: filters are tried in priority order and the first one that rejects the candidate is recorded

Candidates are independent of each other. The annotation index and the configuration are only read, so
candidates may be evaluated concurrently and the verdicts applied afterwards
"""
from collections import Counter
from concurrent.futures import ThreadPoolExecutor

from .candidate import shares_gene_or_contig
from .config import FilterConfig
from .constants import FILTER
from .error import ConfigurationError, MalformedRecordError
from .filters import registered_filters
from .util import DEVNULL, get_env_variable, log_options


class FilterPipeline:

    def __init__(self, config=None, annotation_index=None, filters=None, log=DEVNULL):
        """
        Args:
            config (FilterConfig): the filter configuration. Defaults to all filters enabled with default options
            annotation_index (AnnotationIndex): the gene annotations used to annotate the alignments
            filters (:class:`list` of :class:`~chimfilter.filters.base.Filter`): the filters to apply in the order
                given. Defaults to the registered filters in priority order
            log (Log): logger for progress and diagnostics

        Raises:
            ConfigurationError: a filter has no enabled state in the configuration
        """
        self.config = FilterConfig() if config is None else config
        self.annotation_index = annotation_index
        self.log = log
        available = registered_filters() if filters is None else list(filters)
        names = [filt.name for filt in available]
        if len(set(names)) != len(names):
            raise ConfigurationError('filter names must be unique', names)
        self.filters = [filt for filt in available if self.config.is_enabled(filt.name)]
        self.stats = Counter()

        log('enabled filters (in order):', ', '.join([filt.name for filt in self.filters]) or 'none', time_stamp=True)
        log_options(self.config.options, log=log)
        if annotation_index is None or annotation_index.is_empty():
            log('warning: no gene annotations given. Only candidates on a single contig will be filtered')

    def evaluate(self, candidate):
        """
        determines the verdict for a candidate without recording it

        Returns:
            str: the name of the first filter that rejects the candidate or None if the candidate survives

        Raises:
            MalformedRecordError: an alignment of the candidate could not be interpreted
        """
        if not shares_gene_or_contig(candidate, self.annotation_index):
            return None  # only intragenic and same-contig events are adjudicated
        for filt in self.filters:
            verdict = filt.evaluate(candidate, self.annotation_index, self.config)
            if verdict:
                return verdict
        return None

    def _evaluate_or_error(self, candidate):
        try:
            return self.evaluate(candidate), None
        except MalformedRecordError as err:
            return None, err

    def run(self, candidates, threads=None):
        """
        adjudicates every candidate without a verdict and records the verdicts. Candidates which already have a
        verdict are skipped, so repeated runs over the same candidates do not change anything

        Args:
            candidates (iterable of Candidate): the candidates to filter
            threads (int): number of threads used to evaluate candidates. Defaults to the CHIMFILTER_THREADS
                environment variable or 1

        Returns:
            int: the number of candidates which were adjudicated and survived
        """
        threads = get_env_variable('threads', 1) if threads is None else threads
        pending = [candidate for candidate in candidates if not candidate.is_filtered]

        if threads > 1:
            with ThreadPoolExecutor(max_workers=threads) as executor:
                outcomes = list(executor.map(self._evaluate_or_error, pending))
        else:
            outcomes = [self._evaluate_or_error(candidate) for candidate in pending]

        self.stats = Counter()
        remaining = 0
        for candidate, (verdict, error) in zip(pending, outcomes):
            if error is not None:
                self.log('excluding candidate', candidate.name, 'with malformed alignment(s):', candidate.describe())
                self.log(repr(error), indent_level=1)
                candidate.set_verdict(FILTER.MALFORMED)
            elif verdict is not None:
                candidate.set_verdict(verdict)
            else:
                remaining += 1
                continue
            self.stats[candidate.verdict] += 1

        self.log('filtered', len(pending), 'candidates', time_stamp=True)
        with self.log.indent() as log:
            for verdict, count in sorted(self.stats.items()):
                log(verdict, 'discarded', count)
            log('remaining', remaining)
        return remaining
