"""
module which holds all functions relating to loading reference annotation files
"""
import re

import pandas as pd

from .genomic import Exon, Gene
from .index import AnnotationIndex
from ..constants import STRAND
from ..util import DEVNULL

GTF_COLUMNS = ['seqname', 'source', 'feature', 'start', 'end', 'score', 'strand', 'frame', 'attributes']
ATTRIBUTE_PATTERN = re.compile(r'\s*(\S+)\s+"?([^";]*)"?\s*;?')


def parse_gtf_attributes(text):
    """
    Args:
        text (str): the last column of a GTF row

    Example:
        >>> parse_gtf_attributes('gene_id "ENSG01"; gene_name "KRAS";')
        {'gene_id': 'ENSG01', 'gene_name': 'KRAS'}
    """
    attributes = {}
    for key, value in ATTRIBUTE_PATTERN.findall(text):
        attributes.setdefault(key, value)
    return attributes


def read_gtf(filepath, feature_types=('gene',)):
    """
    reads the rows of a GTF file (compression is inferred from the file extension) which describe the given
    feature types

    Yields:
        dict: the row values by column name. start/end are converted to 0-based inclusive coordinates

    Raises:
        ValueError: a row does not have all of the GTF columns
    """
    try:
        df = pd.read_csv(
            filepath,
            sep='\t',
            dtype={
                'seqname': str,
                'source': str,
                'feature': str,
                'start': int,
                'end': int,
                'score': str,
                'strand': str,
                'frame': str,
                'attributes': str,
            },
            index_col=False,
            header=None,
            comment='#',
            names=GTF_COLUMNS,
            compression='infer',
        )
    except pd.errors.EmptyDataError:  # only comments
        return
    incomplete = df[df.attributes.isnull()]
    if incomplete.shape[0]:
        raise ValueError(
            'expected {} columns in GTF rows'.format(len(GTF_COLUMNS)), filepath, incomplete.index.tolist())

    df = df[df.feature.isin(feature_types)].copy()
    df['start'] = df.start - 1
    df['end'] = df.end - 1
    df.loc[~df.strand.isin([STRAND.POS, STRAND.NEG]), 'strand'] = STRAND.NS
    df['attributes'] = df.attributes.apply(parse_gtf_attributes)
    for row in df.to_dict('records'):
        yield row


def load_gtf(*filepaths, feature_types=('gene',), log=DEVNULL):
    """
    loads gene and exon records from GTF files

    Args:
        filepaths (str): paths to the GTF (optionally gzipped) files
        feature_types (tuple of str): the values of the feature column to keep. Rows of type 'exon' become
            :class:`~chimfilter.annotate.genomic.Exon` records, everything else becomes a
            :class:`~chimfilter.annotate.genomic.Gene`

    Returns:
        :class:`list` of :class:`~chimfilter.annotate.base.BioInterval`: the records in file order
    """
    records = []
    for filepath in filepaths:
        count = 0
        for row in read_gtf(filepath, feature_types):
            attributes = row['attributes']
            gene_id = attributes.get('gene_id')
            if row['feature'] == 'exon':
                record = Exon(
                    row['seqname'], row['start'], row['end'],
                    gene=gene_id, strand=row['strand'], name=attributes.get('exon_id'))
            else:
                record = Gene(row['seqname'], row['start'], row['end'], name=gene_id, strand=row['strand'])
            records.append(record)
            count += 1
        log('loaded', count, 'features from', filepath)
    return records


def load_annotation_index(*filepaths, feature_types=('gene',), log=DEVNULL):
    """
    convenience function to load GTF files straight into an :class:`~chimfilter.annotate.index.AnnotationIndex`
    """
    return AnnotationIndex(load_gtf(*filepaths, feature_types=feature_types, log=log), log=log)
