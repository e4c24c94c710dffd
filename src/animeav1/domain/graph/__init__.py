from .locator import (
    LocatedRecord,
    NodeFilter,
    RecordPredicate,
    all_of,
    field_equals,
    field_is_array,
    has_fields,
    locate_record,
    locate_root,
    uses_flag,
)
from .payload import Node, parse_payload
from .pool import MISSING, Cell, Pool, Record, is_pointer, is_present

__all__ = [
    "MISSING",
    "Cell",
    "LocatedRecord",
    "Node",
    "NodeFilter",
    "Pool",
    "Record",
    "RecordPredicate",
    "all_of",
    "field_equals",
    "field_is_array",
    "has_fields",
    "is_pointer",
    "is_present",
    "locate_record",
    "locate_root",
    "parse_payload",
    "uses_flag",
]
