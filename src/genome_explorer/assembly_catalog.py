"""Genome assembly listing from the UCSC Genome Browser API."""

from typing import Any, Dict, List, Optional

from .api_client import ApiClient
from .error_handler import MalformedResponse
from .logging_config import get_logger
from .models import Assembly, AssemblyCatalog

logger = get_logger('assembly_catalog')

DEFAULT_ORGANISM = "Other"


def group_by_organism(genomes: Dict[str, Dict[str, Any]]) -> AssemblyCatalog:
    """Group raw ``ucscGenomes`` entries by organism, keeping upstream order.

    Args:
        genomes: Mapping of assembly id to its upstream record

    Returns:
        Organism name to list of assemblies, both in insertion order
    """
    catalog: AssemblyCatalog = {}
    for genome_id, info in genomes.items():
        organism = info.get('organism') or DEFAULT_ORGANISM
        catalog.setdefault(organism, []).append(Assembly(
            id=genome_id,
            name=info.get('description') or genome_id,
            source_name=info.get('sourceName') or genome_id,
            active=bool(info.get('active')),
        ))
    return catalog


class AssemblyCatalogResolver:
    """Lists the genome assemblies available in the UCSC Genome Browser."""

    def __init__(self, client: ApiClient, base_url: Optional[str] = None):
        self.client = client
        self.base_url = (base_url or client.config.ucsc_base_url).rstrip('/')

    async def get_available_genomes(self) -> AssemblyCatalog:
        """
        Fetch all assemblies grouped by organism.

        Raises:
            UpstreamUnavailable: If the listing request fails
            MalformedResponse: If ``ucscGenomes`` is missing from the response
        """
        data = await self.client.get_json(
            f"{self.base_url}/list/ucscGenomes",
            api_name="UCSC",
            error_message="Failed to fetch Data from UCSC API",
        )

        if not isinstance(data, dict) or data.get('ucscGenomes') is None:
            raise MalformedResponse("Failed to fetch Genomes from UCSC API")

        try:
            catalog = group_by_organism(data['ucscGenomes'])
        except (TypeError, ValueError, AttributeError) as e:
            raise MalformedResponse("Failed to fetch Genomes from UCSC API",
                                    details={'reason': str(e)}) from e

        logger.info(f"Loaded {sum(len(v) for v in catalog.values())} assemblies "
                    f"for {len(catalog)} organisms")
        return catalog

    async def assemblies_for(self, organism: str) -> List[Assembly]:
        """Assemblies of a single organism; empty when the organism is unknown."""
        catalog = await self.get_available_genomes()
        return catalog.get(organism, [])
