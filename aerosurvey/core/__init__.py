from .chunked import CHUNK_SIZE, ChunkResult, iter_chunks, process_in_chunks
from .constraints import Constraint
from .exceptions import Cancelled, InvalidParameter, MissingPrecondition, OutOfRange, SurveyError

__all__ = [
    "CHUNK_SIZE",
    "ChunkResult",
    "iter_chunks",
    "process_in_chunks",
    "Constraint",
    "SurveyError",
    "OutOfRange",
    "InvalidParameter",
    "MissingPrecondition",
    "Cancelled",
]
