"""Tests for error types and structured error reporting."""

import logging

import pytest

from genome_explorer.error_handler import (
    ErrorContext, ErrorType, GenomeExplorerError, MalformedResponse, MissingIdentifier,
    UpstreamUnavailable, log_error_context
)


class TestErrorClasses:
    """Test cases for the exception hierarchy."""

    @pytest.mark.parametrize("error_class, error_type", [
        (UpstreamUnavailable, ErrorType.UPSTREAM_UNAVAILABLE),
        (MalformedResponse, ErrorType.MALFORMED_RESPONSE),
        (MissingIdentifier, ErrorType.MISSING_IDENTIFIER),
    ])
    def test_error_types(self, error_class, error_type):
        error = error_class("went wrong", details={'url': 'https://example.org'})

        assert isinstance(error, GenomeExplorerError)
        assert error.error_type == error_type
        assert error.message == "went wrong"
        assert str(error) == "went wrong"
        assert error.details == {'url': 'https://example.org'}

    def test_details_default_to_empty(self):
        assert GenomeExplorerError("x").details == {}
        assert GenomeExplorerError("x").error_type == ErrorType.UNKNOWN


class TestErrorContext:
    """Test cases for ErrorContext."""

    def test_from_typed_exception(self):
        error = UpstreamUnavailable("NCBI API Error", details={'status_code': 502})
        context = ErrorContext.from_exception(error, 'search_genes', item_id='BRCA1',
                                              api_name='Clinical Tables')

        assert context.error_type == ErrorType.UPSTREAM_UNAVAILABLE
        assert context.message == "NCBI API Error"
        assert context.details == {'status_code': 502}
        assert context.item_id == 'BRCA1'

    def test_from_plain_exception(self):
        context = ErrorContext.from_exception(KeyError('dna'), 'fetch_gene_sequence')

        assert context.error_type == ErrorType.UNKNOWN
        assert context.message.startswith("KeyError")

    def test_to_dict(self):
        context = ErrorContext(ErrorType.NOT_FOUND, 'Gene not found', 'fetch_gene_details',
                               item_id='1', timestamp=1.5)

        assert context.to_dict() == {
            'error_type': 'not_found',
            'message': 'Gene not found',
            'operation': 'fetch_gene_details',
            'item_id': '1',
            'api_name': None,
            'details': {},
            'timestamp': 1.5,
        }

    def test_log_error_context(self, caplog):
        context = ErrorContext(ErrorType.UPSTREAM_ERROR, 'chrom not found', 'fetch_gene_sequence',
                               item_id='chr99', api_name='UCSC')
        with caplog.at_level(logging.WARNING, logger='genome_explorer.error'):
            log_error_context(context)

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == (
            "[upstream_error] fetch_gene_sequence - item=chr99 - api=UCSC - chrom not found")
        assert record.error_context['item_id'] == 'chr99'
