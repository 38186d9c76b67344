"""Genomic DNA retrieval from the UCSC getData/sequence endpoint."""

from typing import Any, Optional

from .api_client import ApiClient
from .coordinates import normalize_chrom, to_upstream
from .error_handler import ErrorType, GenomeExplorerError
from .logging_config import get_logger
from .models import Range, SequenceResult

logger = get_logger('sequence_fetcher')


def _reported_range(data: Any, fallback: Range) -> Range:
    """The range the service says it served, or ``fallback`` if it did not say."""
    if not isinstance(data, dict) or data.get('start') is None or data.get('end') is None:
        return fallback
    try:
        return Range(start=int(data['start']), end=int(data['end']))
    except (TypeError, ValueError):
        return fallback


class SequenceFetcher:
    """Fetches nucleotide sequence for a 1-based inclusive coordinate range.

    Never raises: failures come back as a SequenceResult with an empty
    sequence and ``error`` set.
    """

    def __init__(self, client: ApiClient, base_url: Optional[str] = None):
        self.client = client
        self.base_url = (base_url or client.config.ucsc_base_url).rstrip('/')

    def _failure(self, requested: Range, message: str, error_type: ErrorType,
                 data: Any = None) -> SequenceResult:
        logger.warning(f"Sequence fetch failed ({error_type.value}): {message}")
        return SequenceResult(
            sequence="",
            actual_range=_reported_range(data, requested),
            error=message,
            error_type=error_type,
        )

    async def fetch_gene_sequence(self, chrom: str, genome_id: str,
                                  start: int, end: int) -> SequenceResult:
        """
        Fetch the sequence of ``chrom:start-end`` in ``genome_id``.

        Args:
            chrom: Chromosome name, with or without the ``chr`` prefix
            genome_id: Assembly id (e.g. hg38)
            start: 1-based inclusive start
            end: 1-based inclusive end

        Returns:
            SequenceResult; ``actual_range`` is the start/end pair reported by
            the service, unchanged
        """
        requested = Range(start=start, end=end)
        chrom = normalize_chrom(chrom)
        upstream_start, upstream_end = to_upstream(start, end)
        params = {
            'genome': genome_id,
            'chrom': chrom,
            'start': upstream_start,
            'end': upstream_end,
        }

        try:
            data = await self.client.get_json(
                f"{self.base_url}/getData/sequence",
                params=params,
                api_name="UCSC sequence",
                error_message="Failed to fetch gene sequence",
            )
        except GenomeExplorerError as e:
            message = e.details.get('upstream_error') or e.message
            return self._failure(requested, message, e.error_type)
        except Exception as e:
            logger.exception(f"Unexpected error fetching {chrom}:{start}-{end}")
            return self._failure(requested, f"{type(e).__name__}: {e}", ErrorType.UNKNOWN)

        if not isinstance(data, dict):
            return self._failure(requested, "Unexpected sequence response",
                                 ErrorType.MALFORMED_RESPONSE)
        if data.get('error'):
            return self._failure(requested, str(data['error']), ErrorType.UPSTREAM_ERROR, data)

        dna = data.get('dna')
        if dna is not None and not isinstance(dna, str):
            return self._failure(requested, "Unexpected sequence response",
                                 ErrorType.MALFORMED_RESPONSE, data)
        sequence = (dna or "").upper()
        actual_range = _reported_range(data, requested)

        logger.info(f"Fetched {len(sequence)} bp of {genome_id} {chrom}:"
                    f"{actual_range.start}-{actual_range.end}")
        return SequenceResult(sequence=sequence, actual_range=actual_range)
