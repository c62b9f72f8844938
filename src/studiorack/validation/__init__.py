"""Plugin validation: per-path validator and batch aggregation."""

from .batch import (
    BatchReport,
    PluginValidator,
    expand_braces,
    list_paths_matching_glob,
    summary_path_for,
    summary_root_dir,
    validate_batch,
)
from .models import PluginRack, ValidateOptions, ValidationResult
from .validator import ValidatorTool, parse_report

__all__ = [
    "BatchReport",
    "PluginValidator",
    "expand_braces",
    "list_paths_matching_glob",
    "summary_path_for",
    "summary_root_dir",
    "validate_batch",
    "PluginRack",
    "ValidateOptions",
    "ValidationResult",
    "ValidatorTool",
    "parse_report",
]
