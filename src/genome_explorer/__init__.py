"""Genome Explorer.

Async lookups for genome assemblies, chromosomes, genes and genomic sequence
over the UCSC Genome Browser, NLM Clinical Tables and NCBI E-utilities APIs.
"""

__version__ = "1.0.0"

from .browser import GenomeBrowser, GeneView
from .error_handler import (
    GenomeExplorerError, MalformedResponse, MissingIdentifier, UpstreamUnavailable
)
from .models import (
    Assembly, Chromosome, Gene, GeneBounds, GeneDetail, GeneDetailResult,
    GeneSearchResult, Range, SequenceResult
)
from .request_tracker import RequestToken, RequestTracker

__all__ = [
    "GenomeBrowser", "GeneView",
    "GenomeExplorerError", "MalformedResponse", "MissingIdentifier", "UpstreamUnavailable",
    "Assembly", "Chromosome", "Gene", "GeneBounds", "GeneDetail", "GeneDetailResult",
    "GeneSearchResult", "Range", "SequenceResult",
    "RequestToken", "RequestTracker",
]
