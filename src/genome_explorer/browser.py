"""High-level entry point combining all lookups behind one HTTP client."""

import asyncio
from dataclasses import dataclass
from typing import List, Optional

import httpx

from .api_client import ApiClient
from .assembly_catalog import AssemblyCatalogResolver
from .chromosome_lister import ChromosomeLister
from .config import Config
from .coordinates import normalize_chrom
from .gene_details import GeneDetailResolver
from .gene_search import GeneSearchResolver
from .logging_config import LogTimer, get_logger
from .models import (
    Assembly, AssemblyCatalog, Chromosome, Gene, GeneDetailResult,
    GeneSearchResult, SequenceResult
)
from .request_tracker import RequestTracker
from .sequence_fetcher import SequenceFetcher

logger = get_logger('browser')


@dataclass(frozen=True)
class GeneView:
    """Everything shown for a selected gene: details plus the initial sequence window."""
    gene: Gene
    genome: str
    details: GeneDetailResult
    sequence: Optional[SequenceResult] = None


class GenomeBrowser:
    """Async facade over the assembly, chromosome, gene and sequence lookups.

    Each lookup method is an independent network round-trip and may be awaited
    concurrently. The ``select_*`` methods additionally go through a
    RequestTracker: when a newer selection is made in the same context before
    an older one completes, the older one resolves to None.

    Usage::

        async with GenomeBrowser() as browser:
            chromosomes = await browser.get_genome_chromosomes("hg38")
    """

    def __init__(self, config: Optional[Config] = None,
                 client: Optional[ApiClient] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 tracker: Optional[RequestTracker] = None):
        """
        Initialize the browser.

        Args:
            config: Configuration; defaults to Config.default()
            client: Existing ApiClient to share
            transport: Custom httpx transport for a newly created client
            tracker: RequestTracker to share between browsers
        """
        self.config = config or Config.default()
        self.client = client or ApiClient(self.config.api, transport=transport)
        self.tracker = tracker or RequestTracker()

        self.assemblies = AssemblyCatalogResolver(self.client)
        self.chromosomes = ChromosomeLister(self.client)
        self.searcher = GeneSearchResolver(
            self.client, max_results=self.config.browse.max_search_results)
        self.details = GeneDetailResolver(
            self.client, window=self.config.browse.max_initial_window)
        self.sequences = SequenceFetcher(self.client)

    async def __aenter__(self) -> 'GenomeBrowser':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def get_available_genomes(self) -> AssemblyCatalog:
        return await self.assemblies.get_available_genomes()

    async def get_organism_assemblies(self, organism: Optional[str] = None) -> List[Assembly]:
        """Assemblies of ``organism`` (the configured default organism when omitted)."""
        return await self.assemblies.assemblies_for(organism or self.config.browse.default_organism)

    async def get_genome_chromosomes(self, genome_id: Optional[str] = None) -> List[Chromosome]:
        return await self.chromosomes.get_genome_chromosomes(
            genome_id or self.config.browse.default_genome)

    async def search_genes(self, query: str, genome_id: Optional[str] = None) -> GeneSearchResult:
        return await self.searcher.search_genes(
            query, genome_id or self.config.browse.default_genome)

    async def browse_chromosome(self, chrom: str,
                                genome_id: Optional[str] = None) -> GeneSearchResult:
        return await self.searcher.browse_chromosome(
            chrom, genome_id or self.config.browse.default_genome)

    async def fetch_gene_details(self, gene_id: str) -> GeneDetailResult:
        return await self.details.fetch_gene_details(gene_id)

    async def fetch_gene_sequence(self, chrom: str, genome_id: str,
                                  start: int, end: int) -> SequenceResult:
        return await self.sequences.fetch_gene_sequence(chrom, genome_id, start, end)

    async def fetch_sequences(self, chrom: str, genome_id: str,
                              ranges) -> List[SequenceResult]:
        """Fetch several (start, end) ranges of one chromosome concurrently."""
        return list(await asyncio.gather(*(
            self.fetch_gene_sequence(chrom, genome_id, start, end) for start, end in ranges
        )))

    async def load_gene(self, gene: Gene, genome_id: Optional[str] = None) -> GeneView:
        """
        Load a gene the way a viewer opens it: details first, then the
        sequence of the initial window when the details provide one.

        Raises:
            MissingIdentifier: If the gene carries no identifier
        """
        genome_id = genome_id or self.config.browse.default_genome
        logger.debug(f"Loading gene {gene.symbol} ({gene.gene_id}) in {genome_id}")
        with LogTimer(f"load_gene {gene.gene_id}", logger):
            details = await self.fetch_gene_details(gene.gene_id)
            if not details.found:
                return GeneView(gene=gene, genome=genome_id, details=details)

            window = details.initial_range
            chrom = gene.chrom or normalize_chrom(details.detail.primary_info.chr_loc)
            sequence = await self.fetch_gene_sequence(chrom, genome_id, window.start, window.end)
        return GeneView(gene=gene, genome=genome_id, details=details, sequence=sequence)

    async def select_genome(self, genome_id: str) -> Optional[List[Chromosome]]:
        """Chromosomes of the newly selected assembly; None when superseded."""
        applied, chromosomes = await self.tracker.run_latest(
            'chromosomes', self.get_genome_chromosomes(genome_id))
        return chromosomes if applied else None

    async def select_gene(self, gene: Gene,
                          genome_id: Optional[str] = None) -> Optional[GeneView]:
        """``load_gene`` for the newly selected gene; None when superseded."""
        applied, view = await self.tracker.run_latest('gene', self.load_gene(gene, genome_id))
        return view if applied else None
