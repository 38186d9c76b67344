"""Command-line interface for genome-explorer."""

import asyncio
import sys
from pathlib import Path

import click

from .browser import GenomeBrowser
from .config import Config, get_default_config_path, create_example_config
from .coordinates import normalize_chrom
from .error_handler import GenomeExplorerError
from .logging_config import setup_logging
from .models import Gene
from .output_formatter import (
    ASSEMBLY_COLUMNS, CHROMOSOME_COLUMNS, FORMATS, GENE_COLUMNS, OutputFormatter,
    assembly_rows, chromosome_rows, gene_detail_dict, gene_rows, sequence_to_fasta,
    write_output
)


def echo(ctx: click.Context, message: str = "", err: bool = False) -> None:
    """Echo that respects --quiet for everything but errors."""
    if ctx.obj.get('quiet') and not err:
        return
    click.echo(message, err=err)


def run(ctx: click.Context, coro_factory):
    """Run ``coro_factory(browser)`` inside a browser session, reporting upstream errors."""
    config: Config = ctx.obj['config']

    async def _main():
        async with GenomeBrowser(config) as browser:
            return await coro_factory(browser)

    try:
        return asyncio.run(_main())
    except GenomeExplorerError as e:
        click.echo(f"ERROR: {e.message}", err=True)
        sys.exit(1)


def emit(ctx: click.Context, text: str, output: str = None) -> None:
    path = write_output(text, output)
    if path:
        echo(ctx, f"Results written to: {path}", err=True)
    else:
        click.echo(text)


@click.group()
@click.option('--config', 'config_path', type=click.Path(exists=True), help='Configuration file path')
@click.option('--api-key', envvar='NCBI_API_KEY', help='NCBI API key for E-utilities')
@click.option('--email', envvar='EMAIL', help='Contact email sent to NCBI')
@click.option('--timeout', type=float, help='HTTP timeout in seconds')
@click.option('--format', 'output_format', type=click.Choice(FORMATS), help='Output format')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, config_path, api_key, email, timeout, output_format, verbose, quiet):
    """Browse genome assemblies, search genes and fetch genomic sequence.

    Examples:
        genome-explorer chromosomes hg38
        genome-explorer search BRCA1
        genome-explorer sequence chr17 43044295 43045000
    """
    if quiet and verbose:
        click.echo("Error: Cannot use both --quiet and --verbose", err=True)
        sys.exit(1)

    setup_logging(log_level='DEBUG' if verbose else 'WARNING', quiet=quiet)

    cfg = Config.from_file(Path(config_path) if config_path else get_default_config_path())
    cfg.merge_env_vars()
    cfg.merge_cli_args(api_key=api_key, email=email, timeout=timeout,
                       output_format=output_format)

    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg
    ctx.obj['quiet'] = quiet
    ctx.obj['formatter'] = OutputFormatter(cfg.output.format)


@cli.command()
@click.option('--organism', help='Only list assemblies of this organism (e.g. Human)')
@click.option('--output', '-o', type=click.Path(), help='Write results to file')
@click.pass_context
def genomes(ctx, organism, output):
    """List available genome assemblies grouped by organism."""
    catalog = run(ctx, lambda browser: browser.get_available_genomes())
    if organism:
        catalog = {organism: catalog.get(organism, [])}
    formatter: OutputFormatter = ctx.obj['formatter']
    emit(ctx, formatter.format_rows(assembly_rows(catalog), ASSEMBLY_COLUMNS), output)


@cli.command()
@click.argument('genome', required=False)
@click.option('--output', '-o', type=click.Path(), help='Write results to file')
@click.pass_context
def chromosomes(ctx, genome, output):
    """List the primary chromosomes of GENOME in natural order."""
    found = run(ctx, lambda browser: browser.get_genome_chromosomes(genome))
    formatter: OutputFormatter = ctx.obj['formatter']
    emit(ctx, formatter.format_rows(chromosome_rows(found), CHROMOSOME_COLUMNS), output)


@cli.command()
@click.argument('query')
@click.option('--genome', '-g', help='Assembly id (defaults to configured genome)')
@click.option('--output', '-o', type=click.Path(), help='Write results to file')
@click.pass_context
def search(ctx, query, genome, output):
    """Search genes by symbol or name (top 10 matches)."""
    if not query.strip():
        click.echo("ERROR: Search query is empty", err=True)
        sys.exit(1)
    result = run(ctx, lambda browser: browser.search_genes(query.strip(), genome))
    if not result.results:
        echo(ctx, f"No genes found for '{result.query}'", err=True)
    formatter: OutputFormatter = ctx.obj['formatter']
    emit(ctx, formatter.format_rows(gene_rows(result.results), GENE_COLUMNS), output)


@cli.command()
@click.argument('chrom')
@click.option('--genome', '-g', help='Assembly id (defaults to configured genome)')
@click.option('--output', '-o', type=click.Path(), help='Write results to file')
@click.pass_context
def browse(ctx, chrom, genome, output):
    """List genes located on chromosome CHROM."""
    result = run(ctx, lambda browser: browser.browse_chromosome(chrom, genome))
    formatter: OutputFormatter = ctx.obj['formatter']
    emit(ctx, formatter.format_rows(gene_rows(result.results), GENE_COLUMNS), output)


@cli.command()
@click.argument('gene_id')
@click.option('--genome', '-g', help='Assembly id used for --show-sequence')
@click.option('--show-sequence', is_flag=True, help='Also fetch the initial sequence window')
@click.pass_context
def gene(ctx, gene_id, genome, show_sequence):
    """Show coordinates and summary for NCBI gene GENE_ID."""
    cfg: Config = ctx.obj['config']
    formatter: OutputFormatter = ctx.obj['formatter']

    if show_sequence:
        view = run(ctx, lambda browser: browser.select_gene(
            Gene(symbol="", name="", chrom="", description="", gene_id=gene_id), genome))
        details = view.details
    else:
        view = None
        details = run(ctx, lambda browser: browser.fetch_gene_details(gene_id))

    click.echo(formatter.format_record(gene_detail_dict(gene_id, details)))

    if not details.found:
        sys.exit(1)

    if view is not None and view.sequence is not None:
        if view.sequence.error:
            click.echo(f"ERROR: {view.sequence.error}", err=True)
            sys.exit(1)
        chrom = normalize_chrom(details.detail.primary_info.chr_loc) or ""
        click.echo(sequence_to_fasta(
            view.sequence, chrom, view.genome,
            line_width=cfg.output.fasta_line_width,
            reverse_complement=details.detail.is_reverse_strand,
        ), nl=False)


@cli.command()
@click.argument('chrom')
@click.argument('start', type=click.IntRange(min=1))
@click.argument('end', type=click.IntRange(min=1))
@click.option('--genome', '-g', help='Assembly id (defaults to configured genome)')
@click.option('--reverse-complement', '-r', is_flag=True, help='Output the minus strand')
@click.option('--output', '-o', type=click.Path(), help='Write FASTA to file')
@click.pass_context
def sequence(ctx, chrom, start, end, genome, reverse_complement, output):
    """Fetch DNA for CHROM:START-END (1-based, inclusive) as FASTA."""
    if start > end:
        click.echo("ERROR: START must not be greater than END", err=True)
        sys.exit(1)

    cfg: Config = ctx.obj['config']
    genome = genome or cfg.browse.default_genome
    result = run(ctx, lambda browser: browser.fetch_gene_sequence(chrom, genome, start, end))

    if result.error:
        click.echo(f"ERROR: {result.error}", err=True)
        sys.exit(1)

    fasta = sequence_to_fasta(result, normalize_chrom(chrom), genome,
                              line_width=cfg.output.fasta_line_width,
                              reverse_complement=reverse_complement)
    emit(ctx, fasta.rstrip("\n"), output)


@cli.command('init-config')
@click.argument('path', type=click.Path(), required=False)
@click.pass_context
def init_config(ctx, path):
    """Generate an example configuration file."""
    config_path = create_example_config(Path(path) if path else None)
    echo(ctx, f"Generated example configuration file: {config_path}")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
