"""
holds the reference annotation records and the index used to query them by position
"""
