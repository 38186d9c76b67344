"""Coordinate conventions and normalization.

Domain coordinates are 1-based and inclusive on both ends. The UCSC sequence
service uses 0-based, half-open intervals. All conversions between the two go
through ``to_upstream`` / ``from_upstream``.
"""

from typing import Optional, Tuple

from .models import GeneBounds, Range


CHROM_PREFIX = "chr"
DEFAULT_WINDOW = 10000


def to_upstream(start: int, end: int) -> Tuple[int, int]:
    """Convert a 1-based inclusive range to 0-based half-open."""
    return start - 1, end


def from_upstream(start: int, end: int) -> Tuple[int, int]:
    """Convert a 0-based half-open range to 1-based inclusive."""
    return start + 1, end


def normalize_chrom(chrom: Optional[str]) -> Optional[str]:
    """Prefix a chromosome name with ``chr`` unless it already has it.

    Empty or missing names are returned unchanged.
    """
    if not chrom:
        return chrom
    if chrom.startswith(CHROM_PREFIX):
        return chrom
    return f"{CHROM_PREFIX}{chrom}"


def strip_chrom_prefix(chrom: str) -> str:
    return chrom.replace(CHROM_PREFIX, "", 1)


def gene_bounds(chrom_start: int, chrom_stop: int) -> GeneBounds:
    """Order a start/stop pair into bounds; strand direction is discarded."""
    return GeneBounds(min=min(chrom_start, chrom_stop), max=max(chrom_start, chrom_stop))


def initial_range(bounds: GeneBounds, window: int = DEFAULT_WINDOW) -> Range:
    """Default viewing window: the whole gene, or its first ``window`` bp."""
    span = bounds.max - bounds.min
    if span > window:
        return Range(start=bounds.min, end=bounds.min + window)
    return Range(start=bounds.min, end=bounds.max)
