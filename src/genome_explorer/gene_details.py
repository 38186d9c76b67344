"""Gene summary lookup via NCBI E-utilities (esummary, db=gene)."""

from typing import Any, Dict, Optional

from .api_client import ApiClient
from .coordinates import DEFAULT_WINDOW, gene_bounds, initial_range
from .error_handler import (
    ErrorContext, ErrorType, GenomeExplorerError, MalformedResponse, MissingIdentifier,
    log_error_context
)
from .logging_config import get_logger
from .models import GeneDetail, GeneDetailResult, GenomicInfo, Organism

logger = get_logger('gene_details')

OPERATION = "fetch_gene_details"
API_NAME = "NCBI esummary"


def parse_genomic_info(entry: Dict[str, Any]) -> GenomicInfo:
    """Parse one ``genomicinfo`` entry.

    NCBI encodes minus-strand genes with ``chrstart`` > ``chrstop``; when the
    entry carries no explicit strand it is derived from that ordering.
    """
    start = int(entry['chrstart'])
    stop = int(entry['chrstop'])
    strand = entry.get('strand') or ("-" if start > stop else "+")
    exon_count = entry.get('exoncount')
    return GenomicInfo(
        chrom_start=start,
        chrom_stop=stop,
        strand=strand,
        chr_loc=entry.get('chrloc'),
        exon_count=int(exon_count) if exon_count not in (None, "") else None,
    )


def parse_organism(raw: Any) -> Optional[Organism]:
    if not isinstance(raw, dict):
        return None
    tax_id = raw.get('taxid')
    return Organism(
        scientific_name=raw.get('scientificname') or "",
        common_name=raw.get('commonname') or "",
        tax_id=int(tax_id) if tax_id not in (None, "") else None,
    )


class GeneDetailResolver:
    """Resolves a gene id to its summary, bounds and default viewing window.

    Upstream failures never raise; they produce an empty GeneDetailResult
    whose ``error`` explains what went wrong.
    """

    def __init__(self, client: ApiClient, base_url: Optional[str] = None,
                 window: int = DEFAULT_WINDOW):
        self.client = client
        self.base_url = (base_url or client.config.eutils_base_url).rstrip('/')
        self.window = window

    def _report(self, context: ErrorContext) -> GeneDetailResult:
        log_error_context(context)
        return GeneDetailResult(error=context)

    def _failure(self, gene_id: str, error_type: ErrorType, message: str,
                 **details) -> GeneDetailResult:
        return self._report(ErrorContext(
            error_type=error_type,
            message=message,
            operation=OPERATION,
            item_id=gene_id,
            api_name=API_NAME,
            details=details,
        ))

    def build_result(self, gene_id: str, record: Dict[str, Any]) -> GeneDetailResult:
        """Build the detail triple from one ``result[<id>]`` record."""
        raw_info = record.get('genomicinfo')
        if not raw_info:
            return self._failure(gene_id, ErrorType.NOT_FOUND,
                                 "No genomic information for gene")

        genomic_info = tuple(parse_genomic_info(entry) for entry in raw_info)
        primary = genomic_info[0]
        detail = GeneDetail(
            genomic_info=genomic_info,
            summary=record.get('summary') or None,
            organism=parse_organism(record.get('organism')),
        )
        bounds = gene_bounds(primary.chrom_start, primary.chrom_stop)
        return GeneDetailResult(
            detail=detail,
            bounds=bounds,
            initial_range=initial_range(bounds, self.window),
        )

    async def fetch_gene_details(self, gene_id: str) -> GeneDetailResult:
        """
        Fetch summary and coordinates for ``gene_id``.

        Args:
            gene_id: NCBI Gene identifier

        Returns:
            GeneDetailResult; all-empty with ``error`` set on any failure

        Raises:
            MissingIdentifier: If ``gene_id`` is empty, before any request is made
        """
        if not gene_id:
            raise MissingIdentifier("Gene ID not found")
        gene_id = str(gene_id)

        params = {'db': 'gene', 'id': gene_id, 'retmode': 'json'}
        params.update(self.client.ncbi_params())

        try:
            data = await self.client.get_json(
                f"{self.base_url}/esummary.fcgi",
                params=params,
                api_name=API_NAME,
                error_message="Failed to fetch gene details from NCBI",
            )
            if not isinstance(data, dict):
                raise MalformedResponse("Unexpected gene summary response")

            record = (data.get('result') or {}).get(gene_id)
            if not record:
                return self._failure(gene_id, ErrorType.NOT_FOUND,
                                     "Gene not found in summary response")

            result = self.build_result(gene_id, record)
        except GenomeExplorerError as e:
            return self._report(ErrorContext.from_exception(
                e, OPERATION, item_id=gene_id, api_name=API_NAME))
        except Exception as e:
            logger.exception(f"Unexpected error fetching gene {gene_id}")
            return self._failure(gene_id, ErrorType.MALFORMED_RESPONSE,
                                 f"{type(e).__name__}: {e}")

        if result.found:
            logger.info(f"Gene {gene_id}: bounds {result.bounds.min}-{result.bounds.max}, "
                        f"window {result.initial_range.start}-{result.initial_range.end}")
        return result
