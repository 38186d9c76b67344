"""Data models for genome assemblies, genes and sequences."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .error_handler import ErrorContext, ErrorType


NCBI_GENE_URL = "https://www.ncbi.nlm.nih.gov/gene/{gene_id}"


@dataclass(frozen=True)
class Assembly:
    """A genome assembly (build) as listed by the UCSC Genome Browser."""

    id: str
    name: str
    source_name: str
    active: bool


@dataclass(frozen=True)
class Chromosome:
    """A primary chromosome of an assembly."""

    name: str
    size: int


@dataclass(frozen=True)
class Gene:
    """A gene as returned by the gene search service."""

    symbol: str
    name: str
    chrom: str
    description: str
    gene_id: str = ""

    @property
    def gene_url(self) -> Optional[str]:
        """Link to the NCBI Gene page, when the identifier is known."""
        if not self.gene_id:
            return None
        return NCBI_GENE_URL.format(gene_id=self.gene_id)


@dataclass(frozen=True)
class GeneSearchResult:
    """Result of a gene search, with the query and assembly it was run against."""

    query: str
    genome: str
    results: Tuple[Gene, ...] = ()

    def __len__(self) -> int:
        return len(self.results)


@dataclass(frozen=True)
class GenomicInfo:
    """One genomic placement of a gene, in upstream coordinates."""

    chrom_start: int
    chrom_stop: int
    strand: Optional[str] = None
    chr_loc: Optional[str] = None
    exon_count: Optional[int] = None


@dataclass(frozen=True)
class Organism:
    scientific_name: str = ""
    common_name: str = ""
    tax_id: Optional[int] = None


@dataclass(frozen=True)
class GeneDetail:
    """Summary information for a single gene."""

    genomic_info: Tuple[GenomicInfo, ...]
    summary: Optional[str] = None
    organism: Optional[Organism] = None

    @property
    def primary_info(self) -> Optional[GenomicInfo]:
        """The first genomic placement; the only one used for bounds."""
        return self.genomic_info[0] if self.genomic_info else None

    @property
    def is_reverse_strand(self) -> bool:
        info = self.primary_info
        return info is not None and info.strand == "-"


@dataclass(frozen=True)
class GeneBounds:
    """Genomic interval of a gene with min <= max, independent of strand."""

    min: int
    max: int

    @property
    def length(self) -> int:
        """Inclusive length in base pairs."""
        return self.max - self.min + 1


@dataclass(frozen=True)
class Range:
    """A start/end coordinate pair."""

    start: int
    end: int


@dataclass(frozen=True)
class GeneDetailResult:
    """Gene detail triple: either all three values are set or none of them.

    When the triple is empty, ``error`` describes why.
    """

    detail: Optional[GeneDetail] = None
    bounds: Optional[GeneBounds] = None
    initial_range: Optional[Range] = None
    error: Optional[ErrorContext] = None

    @property
    def found(self) -> bool:
        return self.detail is not None

    def __iter__(self):
        # Allows ``detail, bounds, initial_range = result``
        return iter((self.detail, self.bounds, self.initial_range))


@dataclass(frozen=True)
class SequenceResult:
    """Nucleotide sequence for a coordinate range.

    ``actual_range`` is what the sequence service reports it served, which may
    be clamped to the chromosome bounds. Interpret ``sequence`` against it,
    never against the requested range.
    """

    sequence: str
    actual_range: Range
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None

    @property
    def ok(self) -> bool:
        return self.error is None


AssemblyCatalog = Dict[str, List[Assembly]]
