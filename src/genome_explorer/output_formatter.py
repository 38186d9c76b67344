"""Output formatting for assemblies, genes and sequences."""

import csv
import io
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from Bio.Seq import Seq
from Bio.SeqIO import FastaIO
from Bio.SeqRecord import SeqRecord

from .coordinates import from_upstream
from .models import Assembly, Chromosome, Gene, GeneDetailResult, SequenceResult


FORMATS = ('table', 'tsv', 'csv', 'json')

ASSEMBLY_COLUMNS = ["Organism", "ID", "Name", "Source Name", "Active"]
CHROMOSOME_COLUMNS = ["Name", "Size"]
GENE_COLUMNS = ["Symbol", "Name", "Chromosome", "Gene ID", "Gene URL"]


def assembly_rows(catalog: Dict[str, List[Assembly]]) -> List[Dict[str, Any]]:
    return [
        {
            'Organism': organism,
            'ID': assembly.id,
            'Name': assembly.name,
            'Source Name': assembly.source_name,
            'Active': 'yes' if assembly.active else 'no',
        }
        for organism, assemblies in catalog.items()
        for assembly in assemblies
    ]


def chromosome_rows(chromosomes: Iterable[Chromosome]) -> List[Dict[str, Any]]:
    return [{'Name': c.name, 'Size': c.size} for c in chromosomes]


def gene_rows(genes: Iterable[Gene]) -> List[Dict[str, Any]]:
    return [
        {
            'Symbol': gene.symbol,
            'Name': gene.name,
            'Chromosome': gene.chrom,
            'Gene ID': gene.gene_id,
            'Gene URL': gene.gene_url or '',
        }
        for gene in genes
    ]


def gene_detail_dict(gene_id: str, result: GeneDetailResult) -> Dict[str, Any]:
    """Flatten a gene detail result for display or JSON output."""
    if not result.found:
        return {
            'Gene ID': gene_id,
            'Error': result.error.message if result.error else 'Gene details unavailable',
        }

    detail = result.detail
    primary = detail.primary_info
    output = {
        'Gene ID': gene_id,
        'Chromosome': primary.chr_loc or '',
        'Position': f"{result.bounds.min:,} - {result.bounds.max:,}",
        'Strand': primary.strand or '',
        'Length': f"{result.bounds.length:,} bp",
        'Initial Range': f"{result.initial_range.start}-{result.initial_range.end}",
    }
    if detail.organism:
        organism = detail.organism.scientific_name
        if detail.organism.common_name:
            organism += f" ({detail.organism.common_name})"
        output['Organism'] = organism
    if detail.summary:
        output['Summary'] = detail.summary
    return output


def sequence_to_fasta(result: SequenceResult, chrom: str, genome: str,
                      line_width: int = 60, reverse_complement: bool = False) -> str:
    """
    Render a sequence result as a FASTA record.

    The header carries the range reported by the sequence service, converted
    to 1-based inclusive coordinates.

    Args:
        result: Sequence result to render
        chrom: Chromosome name
        genome: Assembly id
        line_width: Residues per line
        reverse_complement: Emit the minus-strand sequence

    Returns:
        FASTA text
    """
    seq = Seq(result.sequence)
    strand = "+"
    if reverse_complement:
        seq = seq.reverse_complement()
        strand = "-"

    start, end = from_upstream(result.actual_range.start, result.actual_range.end)
    record = SeqRecord(
        seq,
        id=f"{chrom}:{start}-{end}",
        description=f"genome={genome} strand={strand} length={len(seq)}",
    )
    handle = io.StringIO()
    FastaIO.FastaWriter(handle, wrap=line_width).write_file([record])
    return handle.getvalue()


class OutputFormatter:
    """Formats tabular results as an aligned table, TSV, CSV or JSON."""

    def __init__(self, format: str = 'table'):
        if format not in FORMATS:
            raise ValueError(f"Unsupported format: {format}")
        self.format = format

    def format_rows(self, rows: List[Dict[str, Any]], columns: Sequence[str]) -> str:
        """
        Render rows in the configured format.

        Args:
            rows: Result dictionaries
            columns: Column order

        Returns:
            Rendered text
        """
        if self.format == 'json':
            return json.dumps(rows, indent=2)
        if self.format in ('tsv', 'csv'):
            return self._format_delimited(rows, columns, '\t' if self.format == 'tsv' else ',')
        return self._format_table(rows, columns)

    def format_record(self, record: Dict[str, Any]) -> str:
        """Render a single key/value record."""
        if self.format == 'json':
            return json.dumps(record, indent=2)
        if self.format in ('tsv', 'csv'):
            return self._format_delimited([record], list(record), '\t' if self.format == 'tsv' else ',')
        width = max((len(key) for key in record), default=0)
        return "\n".join(f"{key + ':':<{width + 1}} {value}" for key, value in record.items())

    def _format_delimited(self, rows: List[Dict[str, Any]], columns: Sequence[str],
                          delimiter: str) -> str:
        handle = io.StringIO()
        writer = csv.DictWriter(handle, fieldnames=list(columns), delimiter=delimiter,
                                extrasaction='ignore', lineterminator='\n')
        writer.writeheader()
        writer.writerows(rows)
        return handle.getvalue().rstrip('\n')

    def _format_table(self, rows: List[Dict[str, Any]], columns: Sequence[str]) -> str:
        widths = {
            column: max([len(column)] + [len(str(row.get(column, ''))) for row in rows])
            for column in columns
        }
        lines = ["  ".join(f"{column:<{widths[column]}}" for column in columns).rstrip()]
        lines.append("  ".join("-" * widths[column] for column in columns))
        for row in rows:
            lines.append("  ".join(
                f"{str(row.get(column, '')):<{widths[column]}}" for column in columns
            ).rstrip())
        return "\n".join(lines)


def write_output(text: str, output_path: Optional[Union[str, Path]]) -> Optional[Path]:
    """Write ``text`` to ``output_path``; returns the path, or None when not given."""
    if not output_path:
        return None
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text if text.endswith("\n") else text + "\n", encoding='utf-8')
    return path
