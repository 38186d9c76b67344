"""Tests for chromosome listing, filtering and ordering."""

import random

import httpx
import pytest

from genome_explorer.chromosome_lister import (
    ChromosomeLister, compare_chromosomes, is_primary_chromosome, parse_chromosomes,
    sort_chromosomes
)
from genome_explorer.error_handler import (
    MalformedResponse, MissingIdentifier, UpstreamUnavailable
)
from genome_explorer.models import Chromosome


def names(chromosomes):
    return [c.name for c in chromosomes]


def chroms(*chrom_names):
    return [Chromosome(name=name, size=1) for name in chrom_names]


class TestChromosomeOrdering:
    """Test cases for natural chromosome ordering."""

    def test_numeric_before_named(self):
        ordered = sort_chromosomes(chroms("chrM", "chrX", "chr10", "chr2"))
        assert names(ordered) == ["chr2", "chr10", "chrX", "chrM"]

    def test_numeric_compared_by_value(self):
        ordered = sort_chromosomes(chroms("chr10", "chr9", "chr1", "chr22", "chr3"))
        assert names(ordered) == ["chr1", "chr3", "chr9", "chr10", "chr22"]

    def test_human_like_assembly(self):
        expected = [f"chr{i}" for i in range(1, 23)] + ["chrX", "chrY", "chrM"]
        shuffled = list(expected)
        random.Random(7).shuffle(shuffled)

        assert names(sort_chromosomes(chroms(*shuffled))) == expected

    def test_other_named_chromosomes_sort_lexicographically_after_known(self):
        ordered = sort_chromosomes(chroms("chrB", "chrM", "chrA", "chr1", "chrX"))
        assert names(ordered) == ["chr1", "chrX", "chrM", "chrA", "chrB"]

    def test_order_is_antisymmetric(self):
        items = chroms("chr1", "chr2", "chr10", "chrX", "chrY", "chrM", "chrA")
        for a in items:
            assert compare_chromosomes(a, a) == 0
            for b in items:
                if a is not b:
                    forward = compare_chromosomes(a, b)
                    backward = compare_chromosomes(b, a)
                    assert forward != 0
                    assert (forward > 0) == (backward < 0)

    def test_order_independent_of_input_order(self):
        items = chroms("chr1", "chr2", "chr10", "chrX", "chrY", "chrM")
        expected = names(sort_chromosomes(items))
        for seed in range(5):
            shuffled = list(items)
            random.Random(seed).shuffle(shuffled)
            assert names(sort_chromosomes(shuffled)) == expected


class TestChromosomeFilter:
    """Test cases for excluding non-primary contigs."""

    @pytest.mark.parametrize("name", [
        "chr1_KI270706v1_random",
        "chrUn_GL000195v1",
        "chr22_KI270731v1_random",
        "chr4_GL000008v2_random",
        "chrrandom",
        "chrUn",
    ])
    def test_excluded(self, name):
        assert not is_primary_chromosome(name)

    @pytest.mark.parametrize("name", ["chr1", "chrX", "chrM", "chr2L"])
    def test_included(self, name):
        assert is_primary_chromosome(name)

    def test_parse_filters_and_sorts(self, chromosomes_payload):
        parsed = parse_chromosomes(chromosomes_payload['chromosomes'])

        assert names(parsed) == ["chr1", "chr2", "chr10", "chrX", "chrY", "chrM"]
        assert parsed[0] == Chromosome(name="chr1", size=248956422)


class TestChromosomeLister:
    """Test cases for fetching chromosomes of an assembly."""

    @pytest.mark.asyncio
    async def test_get_genome_chromosomes(self, make_client, chromosomes_payload):
        client, transport = make_client({
            '/list/chromosomes': httpx.Response(200, json=chromosomes_payload)
        })
        async with client:
            result = await ChromosomeLister(client).get_genome_chromosomes('hg38')

        assert names(result) == ["chr1", "chr2", "chr10", "chrX", "chrY", "chrM"]
        assert transport.last_params == {'genome': 'hg38'}

    @pytest.mark.asyncio
    async def test_http_failure_raises(self, make_client):
        client, _ = make_client({'/list/chromosomes': httpx.Response(500)})
        async with client:
            with pytest.raises(UpstreamUnavailable,
                               match="Failed to fetch Chromosomes from UCSC API"):
                await ChromosomeLister(client).get_genome_chromosomes('hg38')

    @pytest.mark.asyncio
    async def test_missing_chromosomes_raises(self, make_client):
        client, _ = make_client({
            '/list/chromosomes': httpx.Response(200, json={'genome': 'hg38'})
        })
        async with client:
            with pytest.raises(MalformedResponse, match="Missing Chromosomes Data"):
                await ChromosomeLister(client).get_genome_chromosomes('hg38')

    @pytest.mark.asyncio
    async def test_empty_genome_id_rejected(self, make_client):
        client, transport = make_client({})
        async with client:
            with pytest.raises(MissingIdentifier):
                await ChromosomeLister(client).get_genome_chromosomes('')

        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_empty_listing_is_empty_list(self, make_client):
        client, _ = make_client({
            '/list/chromosomes': httpx.Response(200, json={'genome': 'hg38', 'chromosomes': {}})
        })
        async with client:
            result = await ChromosomeLister(client).get_genome_chromosomes('hg38')

        assert result == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [{'chr1': 'n/a'}, {'chr1': None}, ['chr1', 'chr2']])
    async def test_garbled_sizes_raise(self, make_client, raw):
        client, _ = make_client({
            '/list/chromosomes': httpx.Response(200, json={'chromosomes': raw})
        })
        async with client:
            with pytest.raises(MalformedResponse, match="Missing Chromosomes Data"):
                await ChromosomeLister(client).get_genome_chromosomes('hg38')
