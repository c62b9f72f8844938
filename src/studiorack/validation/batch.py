"""Validate one or many plugin paths and collect the recognised plugins.

A batch runs strictly in order: one validator call at a time, in the order
the paths were expanded. A validator exception is not caught here, so it
ends the batch; a result without a version is simply left out of the rack.
"""

import glob
import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol

from studiorack.output.writer import write_json_artifact
from studiorack.utils.aio import resolve
from studiorack.validation.models import PluginRack, ValidateOptions, ValidationResult

logger = logging.getLogger(__name__)

WILDCARD = "*"
SEPARATORS = ("/", "\\")
SUMMARY_FILENAME = "plugins.json"

_BRACES = re.compile(r"\{([^{}]*)\}")


class PluginValidator(Protocol):
    """Validator collaborator; either method may be sync or async."""

    def ensure_ready(self) -> Any: ...

    def validate(
        self, path: str, options: ValidateOptions
    ) -> ValidationResult | Awaitable[ValidationResult]: ...


PathLister = Callable[[str], list[str]]
ArtifactWriter = Callable[[str, Any], Any]


@dataclass
class BatchReport:
    """Outcome of a validation batch."""

    rack: PluginRack
    scanned: int  # Paths handed to the validator
    summary_path: str | None = None


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives into separate patterns.

    >>> expand_braces("**/*.{vst,vst3}")
    ['**/*.vst', '**/*.vst3']
    """
    match = _BRACES.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end():]
    expanded = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def list_paths_matching_glob(pattern: str) -> list[str]:
    """List paths matching a glob, with ``**`` and ``{a,b}`` support.

    Returns:
        Sorted, de-duplicated matches
    """
    matches: set[str] = set()
    for expanded in expand_braces(pattern):
        matches.update(glob.glob(expanded, recursive=True))
    return sorted(matches)


def summary_root_dir(path_or_glob: str) -> str:
    """Directory the batch summary is written to, derived from the input text.

    For a glob, everything from the first ``*`` on is dropped; a plain path is
    used as is. The rest is cut back to its last separator, which is kept, so
    backslash paths keep their backslashes. The filesystem is not consulted.

    >>> summary_root_dir("/proj/plugins/**/*.{vst,vst3}")
    '/proj/plugins/'
    >>> summary_root_dir("/proj/Plugins [x64]/adelay.vst3")
    '/proj/Plugins [x64]/'
    """
    remainder = path_or_glob
    if WILDCARD in path_or_glob:
        remainder = path_or_glob[: path_or_glob.index(WILDCARD)]

    cut = max(remainder.rfind(sep) for sep in SEPARATORS)
    if cut == -1:
        # No directory component ("*.vst3", "adelay.vst3")
        return "./"
    return remainder[: cut + 1]


def summary_path_for(path_or_glob: str) -> str:
    return f"{summary_root_dir(path_or_glob)}{SUMMARY_FILENAME}"


async def validate_batch(
    path_or_glob: str,
    options: ValidateOptions,
    validator: PluginValidator,
    lister: PathLister = list_paths_matching_glob,
    writer: ArtifactWriter = write_json_artifact,
) -> BatchReport:
    """Validate a path or glob and optionally write ``plugins.json``.

    Args:
        path_or_glob: A plugin path, or a pattern containing ``*``
        options: Flags applied identically to every path
        validator: Validator collaborator
        lister: Expands a glob into an ordered list of paths
        writer: Writes the summary JSON

    Returns:
        Report with the accepted results and the summary path, if written
    """
    await resolve(validator.ensure_ready())

    if WILDCARD in path_or_glob:
        paths = list(lister(path_or_glob))
        logger.info("Pattern %s matched %d paths", path_or_glob, len(paths))
    else:
        paths = [path_or_glob]

    rack = PluginRack()
    for path in paths:
        result = await resolve(validator.validate(path, options))
        if result.version:
            rack.plugins.append(result)
        else:
            logger.debug("Skipping %s: not recognised as a plugin", path)

    report = BatchReport(rack=rack, scanned=len(paths))

    if options.summary:
        summary_path = summary_path_for(path_or_glob)
        await resolve(writer(summary_path, rack.to_json_dict()))
        report.summary_path = summary_path

    return report

