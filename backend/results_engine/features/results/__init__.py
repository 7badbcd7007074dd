"""Results feature module: result record models, schemas and loading."""

from .models import (
    TimingCheckpoint,
    ResultRecord,
    EventInfo,
    ScrapedResultSet,
)
from .schemas import (
    TimingCheckpointSchema,
    ResultRecordSchema,
    EventInfoSchema,
    ScrapedResultSetSchema,
    dump_record,
)
from .loader import read_document, parse_result_set, load_result_set

__all__ = [
    "TimingCheckpoint",
    "ResultRecord",
    "EventInfo",
    "ScrapedResultSet",
    "TimingCheckpointSchema",
    "ResultRecordSchema",
    "EventInfoSchema",
    "ScrapedResultSetSchema",
    "dump_record",
    "read_document",
    "parse_result_set",
    "load_result_set",
]
