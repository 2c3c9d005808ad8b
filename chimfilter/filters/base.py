"""
the common interface of all filters and the registry which fixes the order they are applied in
"""

REGISTRY = {}
"""registered filter classes and their priorities by filter name"""


class Filter:
    """
    a filter adjudicates a single candidate. Filters must not modify the candidate, the annotation index, or the
    configuration they are given

    Attributes:
        name (str): the verdict tag recorded when the filter rejects a candidate
        options (tuple of str): the configuration options the filter reads
    """
    name = None
    options = ()

    def evaluate(self, candidate, annotation_index, config):
        """
        Args:
            candidate (~chimfilter.candidate.Candidate): the candidate to adjudicate
            annotation_index (~chimfilter.annotate.index.AnnotationIndex): the gene annotations (may be None)
            config (~chimfilter.config.FilterConfig): the filter configuration

        Returns:
            str: the name of the filter if the candidate is rejected, otherwise None
        """
        raise NotImplementedError('abstract method must be overidden')

    def __repr__(self):
        return '{}(name={})'.format(self.__class__.__name__, self.name)


def register_filter(priority):
    """
    class decorator adding a filter to the registry. Filters with lower priority values are applied first

    Raises:
        ValueError: another filter is already registered under the same name or priority
    """
    def _register(cls):
        if not cls.name:
            raise ValueError('filters must define a name', cls)
        for name, (other_priority, other_cls) in REGISTRY.items():
            if other_cls is cls:
                continue
            if name == cls.name:
                raise ValueError('a filter is already registered with this name', name, other_cls)
            if other_priority == priority:
                raise ValueError('a filter is already registered with this priority', priority, other_cls)
        REGISTRY[cls.name] = (priority, cls)
        return cls
    return _register


def filter_names():
    """
    Returns:
        :class:`list` of :class:`str`: the names of the registered filters in the order they are applied
    """
    return [name for name, (priority, cls) in sorted(REGISTRY.items(), key=lambda x: x[1][0])]


def registered_filters():
    """
    Returns:
        :class:`list` of :class:`Filter`: a new instance of every registered filter in the order they are applied
    """
    return [REGISTRY[name][1]() for name in filter_names()]
