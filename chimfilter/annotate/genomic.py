from .base import BioInterval, ReferenceName
from ..constants import STRAND


class Gene(BioInterval):

    def __init__(self, chr, start, end, name=None, strand=STRAND.NS):
        """
        Args:
            chr (str): the chromosome
            start (int): the first position of the gene (0-based, inclusive)
            end (int): the last position of the gene (0-based, inclusive)
            name (str): the gene id i.e. ENSG0001
            strand (STRAND): the genomic strand '+' or '-'

        Example:
            >>> Gene('X', 1, 1000, 'ENG0001', '+')
        """
        BioInterval.__init__(self, ReferenceName(chr), start, end, name=name, strand=strand)


class Exon(BioInterval):
    """
    an exon positioned on the genome. The gene it belongs to is referenced by id so that exons may be
    indexed independently of their genes
    """

    def __init__(self, chr, start, end, gene=None, strand=STRAND.NS, name=None):
        BioInterval.__init__(self, ReferenceName(chr), start, end, name=name, strand=strand)
        self.gene = gene

    def gene_id(self):
        return self.gene if self.gene is not None else self.name
