"""Generation tokens for discarding superseded in-flight requests."""

from dataclasses import dataclass
from typing import Any, Awaitable, Dict, Hashable, Tuple

from .logging_config import get_logger

logger = get_logger('request_tracker')


@dataclass(frozen=True)
class RequestToken:
    """Identifies one issued request within a context."""
    context: Hashable
    generation: int


class RequestTracker:
    """Tracks the latest request issued per caller context.

    A context is whatever a response is applied to, e.g. ("sequence", gene_id)
    or "chromosomes". Each ``issue`` supersedes every earlier token of the same
    context; a response should only be applied when its token is still current.

    Usage::

        tracker = RequestTracker()
        applied, chromosomes = await tracker.run_latest(
            "chromosomes", browser.get_genome_chromosomes(genome_id))
        if applied:
            render(chromosomes)
    """

    def __init__(self):
        self._generations: Dict[Hashable, int] = {}

    def issue(self, context: Hashable) -> RequestToken:
        """Start a new request for ``context``, superseding earlier ones."""
        generation = self._generations.get(context, 0) + 1
        self._generations[context] = generation
        return RequestToken(context=context, generation=generation)

    def is_current(self, token: RequestToken) -> bool:
        return self._generations.get(token.context) == token.generation

    def invalidate(self, context: Hashable) -> None:
        """Supersede any in-flight request for ``context`` without issuing a new one."""
        self._generations[context] = self._generations.get(context, 0) + 1

    async def run_latest(self, context: Hashable,
                         awaitable: Awaitable[Any]) -> Tuple[bool, Any]:
        """
        Await ``awaitable`` under a fresh token for ``context``.

        Returns:
            (True, value) if no newer request was issued meanwhile,
            (False, None) if the result is stale and must be discarded
        """
        token = self.issue(context)
        value = await awaitable
        if not self.is_current(token):
            logger.debug(f"Discarding stale response for {context!r} "
                         f"(generation {token.generation})")
            return False, None
        return True, value
