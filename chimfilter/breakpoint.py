"""
reference coordinates derived from the cigar of an alignment record

All positions are 0-based. The span of an alignment is half-open: it starts at the first aligned
reference position and ends one past the last reference position consumed by the cigar
"""
from .bam.cigar import ALIGNED_STATES, SKIPPED_STATES, reference_length, validate
from .constants import STRAND
from .error import MalformedRecordError


def aligned_span(record):
    """
    walks the cigar of the record accumulating the reference positions consumed by it

    Args:
        record (AlignmentRecord): the alignment

    Returns:
        tuple of int and int: the reference start and the reference end (exclusive)

    Raises:
        MalformedRecordError: the cigar cannot be interpreted or does not agree with the end declared for the record

    Example:
        >>> aligned_span(AlignmentRecord('1', 100, '5S50M'))
        (100, 150)
    """
    validate(record.cigar)
    end = record.start + reference_length(record.cigar)
    if record.declared_end is not None and record.declared_end != end:
        raise MalformedRecordError(
            'alignment end computed from the cigar does not match the declared end',
            record.alignment_id(), end, record.declared_end)
    return record.start, end


def breakpoint_position(record):
    """
    the reference position on the edge of the alignment nearest the fusion junction. For alignments on the
    forward strand this is the position following the last aligned base, for the reverse strand it is the
    first aligned base

    Raises:
        MalformedRecordError: the strand is not specified or the cigar is malformed
    """
    start, end = aligned_span(record)
    if record.strand == STRAND.POS:
        return end
    elif record.strand == STRAND.NEG:
        return start
    raise MalformedRecordError('strand must be specified to position the breakpoint', record.alignment_id())


def breakpoint_within_segment(position, record):
    """
    checks if a position is covered by the aligned (not deleted or skipped) portions of an alignment. Both ends
    of each aligned block are inclusive

    Args:
        position (int): the reference position to test
        record (AlignmentRecord): the alignment to test against

    Returns:
        bool: True if any aligned block of the record covers the position

    Example:
        >>> record = AlignmentRecord('1', 100, '50M')
        >>> breakpoint_within_segment(150, record), breakpoint_within_segment(151, record)
        (True, False)
    """
    reference_position = record.start
    for state, freq in validate(record.cigar):
        if state in SKIPPED_STATES:
            reference_position += freq
        elif state in ALIGNED_STATES:
            if reference_position <= position <= reference_position + freq:
                return True
            reference_position += freq
    return False
