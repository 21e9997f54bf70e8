"""Output formatters for photometa."""

from .default import format_default, format_metadata_value, format_remote
from .json import format_json, format_json_list, snapshot_to_dict, to_dict
from .quiet import format_quiet

__all__ = [
    "format_default",
    "format_metadata_value",
    "format_json",
    "format_json_list",
    "format_quiet",
    "format_remote",
    "snapshot_to_dict",
    "to_dict",
]
