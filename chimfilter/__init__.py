"""
holds submodules related to filtering chimeric alignments supporting candidate gene fusions
"""
__version__ = '0.1.0'
