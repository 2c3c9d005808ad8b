

class MalformedRecordError(ValueError):
    """
    raised when the edit operations of an alignment record cannot be interpreted as a
    reference interval, for example a cigar without any reference-consuming operation or
    one which disagrees with the end position declared by the aligner
    """
    pass


class ConfigurationError(ValueError):
    """
    raised when the filter configuration names a filter or option which does not exist
    """
    pass
