"""
Chunked batch processing for very large waypoint sets.
Works through fixed-size slices and yields to the event loop between them so a
single-threaded host (UI loop, async server) stays responsive.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Sequence

from .exceptions import Cancelled, InvalidParameter

logger = logging.getLogger(__name__)

CHUNK_SIZE = 200


@dataclass
class ChunkResult:
    """Outputs in input order. When cancelled, holds only the chunks finished before the flag was seen."""

    items: List[Any] = field(default_factory=list)
    total: int = 0
    cancelled: bool = False

    @property
    def processed(self) -> int:
        return len(self.items)

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 1.0
        return self.processed / self.total

    def raise_if_cancelled(self) -> List[Any]:
        """Return items, or raise Cancelled carrying the partial output."""
        if self.cancelled:
            raise Cancelled(
                f"cancelled after {self.processed} of {self.total} items", partial=self.items
            )
        return self.items


def iter_chunks(items: Sequence[Any], chunk_size: int = CHUNK_SIZE) -> Iterator[Sequence[Any]]:
    if chunk_size < 1:
        raise InvalidParameter(f"chunk_size must be >= 1, got {chunk_size}")
    for start in range(0, len(items), chunk_size):
        yield items[start:start + chunk_size]


def _is_cancelled(cancel: Any) -> bool:
    if cancel is None:
        return False
    if hasattr(cancel, "is_set"):
        return bool(cancel.is_set())
    return bool(cancel())


async def process_in_chunks(
    items: Sequence[Any],
    per_item: Callable[[Any], Any],
    chunk_size: int = CHUNK_SIZE,
    on_progress: Optional[Callable[[float], None]] = None,
    cancel: Any = None,
) -> ChunkResult:
    """
    Apply per_item to every item, chunk_size items at a time.

    Args:
        items: Input sequence; output order always matches it.
        per_item: Function applied once to each item.
        chunk_size: Items processed between yields.
        on_progress: Called with the processed fraction (0..1] after each chunk.
        cancel: threading.Event / asyncio.Event (anything with is_set()) or a
            zero-argument callable. Checked before each chunk.

    Returns:
        ChunkResult; cancelled=True with partial items if the flag was seen.
    """
    items = list(items)
    result = ChunkResult(total=len(items))
    for chunk in iter_chunks(items, chunk_size):
        if _is_cancelled(cancel):
            result.cancelled = True
            logger.debug("Chunked processing cancelled at %d/%d", result.processed, result.total)
            return result
        result.items.extend(per_item(item) for item in chunk)
        if on_progress is not None:
            on_progress(result.progress)
        await asyncio.sleep(0)
    logger.debug("Chunked processing finished: %d items", result.total)
    return result
