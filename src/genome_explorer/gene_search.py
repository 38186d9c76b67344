"""Gene search against the NLM Clinical Tables NCBI genes service.

The service answers with a positional array::

    [count, codes, extra_fields, display_rows]

where ``extra_fields`` maps each requested ``ef`` field to a list aligned
with ``display_rows`` and every display row is a list of the requested ``df``
fields in request order. Positional decoding is confined to
``decode_display_row`` and ``DISPLAY_FIELDS``.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from .api_client import ApiClient
from .coordinates import normalize_chrom
from .error_handler import MalformedResponse
from .logging_config import get_logger
from .models import Gene, GeneSearchResult

logger = get_logger('gene_search')

MAX_RESULTS = 10

# Requested display (df) and extra (ef) fields
DISPLAY_FIELD_PARAM = "chromosome,Symbol,description,map_location,type_of_gene"
EXTRA_FIELD_PARAM = "chromosome,Symbol,description,map_location,type_of_gene,GenomicInfo,GeneID"

# Positions inside the top-level response array
COUNT_INDEX = 0
EXTRA_FIELDS_INDEX = 2
DISPLAY_ROWS_INDEX = 3

# Positions inside one display row. The service returns rows as
# [chromosome, map location, symbol, name/description, ...]; both the
# gene name and its description are read from the same column.
DISPLAY_FIELDS = {
    'chrom': 0,
    'map_location': 1,
    'symbol': 2,
    'name': 3,
    'description': 3,
}

GENE_ID_FIELD = "GeneID"


def decode_display_row(row: Sequence[Any], gene_id: str = "") -> Gene:
    """
    Map one positional display row onto a Gene.

    Args:
        row: Display row from the search response
        gene_id: Identifier taken from the parallel GeneID array

    Returns:
        Gene with a ``chr``-prefixed chromosome

    Raises:
        IndexError, TypeError: If the row is shorter or not a sequence
    """
    return Gene(
        symbol=row[DISPLAY_FIELDS['symbol']],
        name=row[DISPLAY_FIELDS['name']],
        chrom=normalize_chrom(row[DISPLAY_FIELDS['chrom']]),
        description=row[DISPLAY_FIELDS['description']],
        gene_id=gene_id or "",
    )


def decode_search_payload(data: Any, limit: int = MAX_RESULTS) -> List[Gene]:
    """
    Decode a search response into at most ``limit`` genes.

    Rows that fail to decode are skipped. Gene identifiers are matched to
    rows by position; a shorter identifier array leaves the remaining genes
    without an identifier.

    Raises:
        MalformedResponse: If the top-level array cannot be read
    """
    try:
        count = int(data[COUNT_INDEX])
    except (TypeError, ValueError, IndexError, KeyError) as e:
        raise MalformedResponse("Unexpected gene search response",
                                details={'reason': str(e)}) from e

    if count <= 0:
        return []

    try:
        extra_fields = data[EXTRA_FIELDS_INDEX] or {}
        rows = data[DISPLAY_ROWS_INDEX] or []
    except (TypeError, IndexError, KeyError) as e:
        raise MalformedResponse("Unexpected gene search response",
                                details={'reason': str(e)}) from e

    gene_ids = []
    if isinstance(extra_fields, dict):
        gene_ids = extra_fields.get(GENE_ID_FIELD) or []
    if gene_ids and len(gene_ids) != len(rows):
        logger.warning(f"GeneID list ({len(gene_ids)}) and display rows ({len(rows)}) "
                       f"differ in length; identifiers are matched by position")

    genes: List[Gene] = []
    for i in range(min(limit, count)):
        if i >= len(rows):
            break
        try:
            gene_id = gene_ids[i] if i < len(gene_ids) else ""
            genes.append(decode_display_row(rows[i], gene_id))
        except Exception as e:
            logger.debug(f"Skipping search row {i}: {type(e).__name__}: {e}")
            continue

    return genes


def filter_by_chromosome(genes: Iterable[Gene], chrom: str) -> List[Gene]:
    """Keep only genes located on ``chrom``."""
    chrom = normalize_chrom(chrom)
    return [gene for gene in genes if gene.chrom == chrom]


class GeneSearchResolver:
    """Searches genes by symbol or name."""

    def __init__(self, client: ApiClient, search_url: Optional[str] = None,
                 max_results: int = MAX_RESULTS):
        self.client = client
        self.search_url = search_url or client.config.gene_search_url
        self.max_results = max_results

    def _build_params(self, query: str) -> Dict[str, str]:
        return {
            'terms': query,
            'df': DISPLAY_FIELD_PARAM,
            'ef': EXTRA_FIELD_PARAM,
        }

    async def search_genes(self, query: str, genome: str) -> GeneSearchResult:
        """
        Search genes matching ``query``.

        Args:
            query: Gene symbol or free-text name
            genome: Assembly id, carried through to the result for context

        Returns:
            GeneSearchResult with at most ``max_results`` genes

        Raises:
            UpstreamUnavailable: If the search request fails
            MalformedResponse: If the response is not the expected array
        """
        data = await self.client.get_json(
            self.search_url,
            params=self._build_params(query),
            api_name="NCBI gene search",
            error_message="NCBI API Error",
        )

        genes = decode_search_payload(data, self.max_results)
        logger.info(f"Search '{query}' ({genome}): {len(genes)} genes")
        return GeneSearchResult(query=query, genome=genome, results=tuple(genes))

    async def browse_chromosome(self, chrom: str, genome: str) -> GeneSearchResult:
        """Genes on one chromosome: a search by chromosome name, filtered by location."""
        chrom = normalize_chrom(chrom)
        found = await self.search_genes(chrom, genome)
        return GeneSearchResult(
            query=found.query,
            genome=genome,
            results=tuple(filter_by_chromosome(found.results, chrom)),
        )
