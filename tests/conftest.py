"""Shared fixtures: canned upstream payloads and an in-memory HTTP transport."""

import httpx
import pytest

from genome_explorer.api_client import ApiClient
from genome_explorer.config import APIConfig


class RecordingTransport(httpx.MockTransport):
    """MockTransport routing on URL path and remembering every request."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={'error': f"no route for {request.url.path}"})
        if callable(route):
            return route(request)
        return route

    @property
    def last_params(self):
        return dict(self.requests[-1].url.params)


@pytest.fixture
def make_transport():
    """Build a RecordingTransport from a {path: response or handler} mapping."""
    return RecordingTransport


@pytest.fixture
def make_client():
    """Build an ApiClient backed by the given routes."""
    def _make(routes):
        transport = RecordingTransport(routes)
        return ApiClient(APIConfig(), transport=transport), transport
    return _make


@pytest.fixture
def ucsc_genomes_payload():
    return {
        'ucscGenomes': {
            'hg38': {
                'organism': 'Human',
                'description': 'Dec. 2013 (GRCh38/hg38)',
                'sourceName': 'GRCh38 Genome Reference Consortium Human Reference 38',
                'active': 1,
            },
            'mm39': {
                'organism': 'Mouse',
                'description': 'Jun. 2020 (GRCm39/mm39)',
                'sourceName': 'GRCm39',
                'active': 1,
            },
            'hg19': {
                'organism': 'Human',
                'description': 'Feb. 2009 (GRCh37/hg19)',
                'sourceName': 'GRCh37 Genome Reference Consortium Human Reference 37',
                'active': 0,
            },
            'xenoX1': {},
        }
    }


@pytest.fixture
def chromosomes_payload():
    return {
        'genome': 'hg38',
        'chromosomeCount': 9,
        'chromosomes': {
            'chrX': 156040895,
            'chr10': 133797422,
            'chr1_KI270706v1_random': 175055,
            'chrM': 16569,
            'chr2': 242193529,
            'chrUn_GL000195v1': 182896,
            'chr1': 248956422,
            'chrY': 57227415,
            'chr22_KI270731v1_random': 150754,
        },
    }


@pytest.fixture
def make_search_payload():
    """Clinical Tables style positional response: [count, codes, extra fields, rows]."""
    def _make(rows, gene_ids=None, count=None):
        extra = {'GeneID': gene_ids} if gene_ids is not None else {}
        return [len(rows) if count is None else count, [row[2] for row in rows], extra, rows]
    return _make


@pytest.fixture
def brca_rows():
    return [
        ['17', '17q21.31', 'BRCA1', 'BRCA1 DNA repair associated', 'protein-coding'],
        ['13', '13q13.1', 'BRCA2', 'BRCA2 DNA repair associated', 'protein-coding'],
        ['chrX', 'Xq28', 'BRCC3', 'BRCA1/BRCA2-containing complex subunit 3', 'protein-coding'],
    ]


@pytest.fixture
def esummary_payload():
    return {
        'header': {'type': 'esummary', 'version': '0.3'},
        'result': {
            'uids': ['672'],
            '672': {
                'uid': '672',
                'name': 'BRCA1',
                'summary': 'This gene encodes a nuclear phosphoprotein.',
                'organism': {
                    'scientificname': 'Homo sapiens',
                    'commonname': 'human',
                    'taxid': 9606,
                },
                'genomicinfo': [
                    {
                        'chrloc': '17',
                        'chraccver': 'NC_000017.11',
                        'chrstart': 43125482,
                        'chrstop': 43044294,
                        'exoncount': 24,
                    },
                    {
                        'chrloc': '17',
                        'chraccver': 'NT_187614.1',
                        'chrstart': 1,
                        'chrstop': 2,
                        'exoncount': 1,
                    },
                ],
            },
        },
    }
