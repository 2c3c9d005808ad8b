"""
holds methods related to processing cigar tuples. Cigar tuples are generally
an iterable list of tuples where the first element in each tuple is the
CIGAR value (i.e. 1 for an insertion), and the second value is the frequency
"""
import re

from ..constants import CIGAR
from ..error import MalformedRecordError

ALIGNED_STATES = {CIGAR.M, CIGAR.X, CIGAR.EQ}
"""states which consume both the reference and the read"""
SKIPPED_STATES = {CIGAR.D, CIGAR.N}
"""states which consume the reference only"""
REFERENCE_ALIGNED_STATES = ALIGNED_STATES | SKIPPED_STATES


def validate(cigar):
    """
    checks that the cigar tuples describe an alignment to the reference

    Returns:
        the input cigar tuples

    Raises:
        MalformedRecordError: unknown states, non-positive lengths, or no reference-consuming state
    """
    for state, freq in cigar:
        if state not in CIGAR.values():
            raise MalformedRecordError('unknown cigar state', state, cigar)
        if freq <= 0:
            raise MalformedRecordError('cigar operations must have a positive length', (state, freq), cigar)
    if not any([state in REFERENCE_ALIGNED_STATES for state, freq in cigar]):
        raise MalformedRecordError('cigar does not consume any reference positions', cigar)
    return cigar


def reference_length(cigar):
    """
    counts the reference positions covered by the alignment (matches, mismatches, deletions and skipped regions)

    Example:
        >>> reference_length([(CIGAR.S, 5), (CIGAR.M, 10), (CIGAR.N, 100), (CIGAR.M, 10)])
        120
    """
    return sum([f for v, f in cigar if v in REFERENCE_ALIGNED_STATES] + [0])


def alignment_matches(cigar):
    """
    counts the number of aligned bases irrespective of match/mismatch
    this is equivalent to counting all CIGAR.M
    """
    result = 0
    for v, f in cigar:
        if v in ALIGNED_STATES:
            result += f
    return result


def convert_string_to_cigar(string):
    """
    Given a cigar string, converts it to the appropriate cigar tuple

    Raises:
        MalformedRecordError: the string contains an unknown operation

    Example:
        >>> convert_string_to_cigar('8M2I1D9X')
        [(CIGAR.M, 8), (CIGAR.I, 2), (CIGAR.D, 1), (CIGAR.X, 9)]
    """
    if not re.match(r'^(\d+[MIDNSHPX=])+$', string):
        raise MalformedRecordError('invalid cigar string', string)
    return [
        (CIGAR.EQ if op == '=' else CIGAR[op], int(freq))
        for freq, op in re.findall(r'(\d+)(\D)', string)
    ]


def convert_cigar_to_string(cigar):
    """
    Example:
        >>> convert_cigar_to_string([(CIGAR.S, 5), (CIGAR.EQ, 20)])
        '5S20='
    """
    return ''.join(['{}{}'.format(f, CIGAR.reverse(s) if s != CIGAR.EQ else '=') for s, f in cigar])
