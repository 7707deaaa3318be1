"""Line-pattern matchers for free-form macOS tool output.

vm_stat and system_profiler print human-oriented text whose layout can
drift between macOS releases. Each matcher looks for a single label and
reads the integer that follows it, so one changed line degrades one value.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from gpusnap.utils.errors import ParseError

VM_PAGE_SIZE_BYTES = 4096
BYTES_PER_MB = 1024 * 1024

LABEL_PAGES_ACTIVE = "Pages active"
LABEL_PAGES_WIRED = "Pages wired down"
LABEL_PAGES_INACTIVE = "Pages inactive"
LABEL_PAGES_FREE = "Pages free"
LABEL_GPU_CORES = "Total Number of Cores"


def match_labeled_int(text: str, label: str) -> Optional[int]:
    """Return the integer following ``<label>:`` in text, or None if absent.

    Example:
        >>> match_labeled_int("Pages free:    1024.", "Pages free")
        1024
    """
    match = re.search(rf"{re.escape(label)}:\s+(\d+)", text)
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class VmStatPages:
    """Page counters read from vm_stat. Missing labels count as 0 pages."""

    active: int = 0
    wired: int = 0
    inactive: int = 0
    free: int = 0

    @property
    def used(self) -> int:
        return self.active + self.wired + self.inactive


def parse_vm_stat(text: str) -> VmStatPages:
    """Parse vm_stat output into page counters."""
    return VmStatPages(
        active=match_labeled_int(text, LABEL_PAGES_ACTIVE) or 0,
        wired=match_labeled_int(text, LABEL_PAGES_WIRED) or 0,
        inactive=match_labeled_int(text, LABEL_PAGES_INACTIVE) or 0,
        free=match_labeled_int(text, LABEL_PAGES_FREE) or 0,
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def pages_to_mb(pages: int, page_size: int = VM_PAGE_SIZE_BYTES) -> int:
    """Convert a page count to whole megabytes (rounded)."""
    return round_half_up(pages * page_size / BYTES_PER_MB)


def parse_core_count(text: str) -> int:
    """Read the GPU core count from `system_profiler SPDisplaysDataType` output.

    Raises:
        ParseError: No "Total Number of Cores" line, or it has no integer
    """
    for line in text.splitlines():
        if LABEL_GPU_CORES not in line:
            continue
        _, _, value = line.partition(":")
        match = re.match(r"\s*(\d+)", value)
        if match:
            return int(match.group(1))
        raise ParseError(f"Unparseable core count line: {line.strip()!r}")
    raise ParseError(f"No '{LABEL_GPU_CORES}' line in system_profiler output")
