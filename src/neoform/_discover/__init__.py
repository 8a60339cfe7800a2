"""Static discovery of resource declarations in Python source trees."""

from ._imports import ImportTable
from ._literals import LiteralEvaluator, ModelLiteral, Opaque, Reference, references_in
from ._names import VariableIndex, module_matches
from ._scanner import (
    DEFAULT_EXCLUDE_DIRS,
    Declaration,
    ScanError,
    ScanResult,
    collect_source_files,
    link_declarations,
    parse_declarations,
    scan_dir,
    scan_file,
)

__all__ = [
    "DEFAULT_EXCLUDE_DIRS",
    "Declaration",
    "ImportTable",
    "LiteralEvaluator",
    "ModelLiteral",
    "Opaque",
    "Reference",
    "ScanError",
    "ScanResult",
    "VariableIndex",
    "collect_source_files",
    "link_declarations",
    "module_matches",
    "parse_declarations",
    "references_in",
    "scan_dir",
    "scan_file",
]
