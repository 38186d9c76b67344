"""Chromosome listing, filtering and natural ordering."""

import functools
import locale
import re
from typing import Dict, Iterable, List, Optional

from .api_client import ApiClient
from .coordinates import strip_chrom_prefix
from .error_handler import MalformedResponse, MissingIdentifier
from .logging_config import get_logger
from .models import Chromosome

logger = get_logger('chromosome_lister')

# Substrings marking unplaced, unlocalized or alternate contigs
EXCLUDED_MARKERS = ("_", "Un", "random")

# Sex and mitochondrial chromosomes, in display order, ahead of any other named contig
NAMED_CHROMOSOME_ORDER = {"X": 0, "Y": 1, "W": 2, "Z": 3, "M": 4, "MT": 5}

NUMERIC_RE = re.compile(r"[0-9]+")


def is_primary_chromosome(name: str) -> bool:
    return not any(marker in name for marker in EXCLUDED_MARKERS)


def compare_chromosomes(a: Chromosome, b: Chromosome) -> int:
    """Total order: numeric chromosomes by value, then named ones.

    Named chromosomes follow ``NAMED_CHROMOSOME_ORDER`` and otherwise compare
    by locale collation, with a plain string comparison as tie breaker.
    """
    a_rest = strip_chrom_prefix(a.name)
    b_rest = strip_chrom_prefix(b.name)
    a_numeric = NUMERIC_RE.fullmatch(a_rest) is not None
    b_numeric = NUMERIC_RE.fullmatch(b_rest) is not None

    if a_numeric and b_numeric:
        diff = int(a_rest) - int(b_rest)
        if diff:
            return diff
        return _cmp(a.name, b.name)
    if a_numeric:
        return -1
    if b_numeric:
        return 1

    a_rank = NAMED_CHROMOSOME_ORDER.get(a_rest, len(NAMED_CHROMOSOME_ORDER))
    b_rank = NAMED_CHROMOSOME_ORDER.get(b_rest, len(NAMED_CHROMOSOME_ORDER))
    if a_rank != b_rank:
        return a_rank - b_rank

    collated = locale.strcoll(a_rest, b_rest)
    if collated:
        return collated
    return _cmp(a.name, b.name)


def _cmp(a: str, b: str) -> int:
    return (a > b) - (a < b)


def sort_chromosomes(chromosomes: Iterable[Chromosome]) -> List[Chromosome]:
    return sorted(chromosomes, key=functools.cmp_to_key(compare_chromosomes))


def parse_chromosomes(raw: Dict[str, int]) -> List[Chromosome]:
    """Filter out non-primary contigs and sort the remainder."""
    chromosomes = [
        Chromosome(name=name, size=int(size))
        for name, size in raw.items()
        if is_primary_chromosome(name)
    ]
    return sort_chromosomes(chromosomes)


class ChromosomeLister:
    """Lists the primary chromosomes of an assembly."""

    def __init__(self, client: ApiClient, base_url: Optional[str] = None):
        self.client = client
        self.base_url = (base_url or client.config.ucsc_base_url).rstrip('/')

    async def get_genome_chromosomes(self, genome_id: str) -> List[Chromosome]:
        """
        Fetch, filter and sort the chromosomes of ``genome_id``.

        Raises:
            MissingIdentifier: If ``genome_id`` is empty
            UpstreamUnavailable: If the listing request fails
            MalformedResponse: If ``chromosomes`` is missing from the response
        """
        if not genome_id:
            raise MissingIdentifier("Genome ID is required")

        data = await self.client.get_json(
            f"{self.base_url}/list/chromosomes",
            params={'genome': genome_id},
            api_name="UCSC",
            error_message="Failed to fetch Chromosomes from UCSC API",
        )

        if not isinstance(data, dict) or data.get('chromosomes') is None:
            raise MalformedResponse("Missing Chromosomes Data", details={'genome': genome_id})

        try:
            chromosomes = parse_chromosomes(data['chromosomes'])
        except (TypeError, ValueError, AttributeError) as e:
            raise MalformedResponse("Missing Chromosomes Data",
                                    details={'genome': genome_id, 'reason': str(e)}) from e

        logger.info(f"{genome_id}: {len(chromosomes)} primary chromosomes "
                    f"({len(data['chromosomes']) - len(chromosomes)} contigs filtered)")
        return chromosomes
