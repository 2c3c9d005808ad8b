"""
holds the alignment record model and the cigar helpers it is built on
"""
