# topmark:header:start
#
#   project      : ProfMark
#   file         : __init__.py
#   file_relpath : src/profmark/engine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Block-extraction and instrumentation engine.

Public names:
    - `LineBuffer`, `LineNode`, `leading_whitespace`: linked line storage.
    - `BlockLocator`: brace-depth tracking.
    - `MethodBlock`: method identity, iterator detection, marker insertion.
    - `MethodScanner`, `ScanState`, `ScanResult`, `scan_buffer`: the scan protocol.
    - `ProfilerMarkers`: marker statement templates.
    - `match_signature`, `is_candidate_line`: the signature heuristic.
"""

from __future__ import annotations

from profmark.engine.buffer import LineBuffer, LineNode, leading_whitespace
from profmark.engine.locator import BlockLocator
from profmark.engine.markers import ProfilerMarkers, sample_label
from profmark.engine.method import MethodBlock
from profmark.engine.scanner import MethodScanner, ScanResult, ScanState, scan_buffer
from profmark.engine.signature import (
    SignatureMatch,
    find_exclusion,
    is_candidate_line,
    match_signature,
)

__all__ = [
    "BlockLocator",
    "LineBuffer",
    "LineNode",
    "MethodBlock",
    "MethodScanner",
    "ProfilerMarkers",
    "ScanResult",
    "ScanState",
    "SignatureMatch",
    "find_exclusion",
    "is_candidate_line",
    "leading_whitespace",
    "match_signature",
    "sample_label",
    "scan_buffer",
]
