# topmark:header:start
#
#   project      : ProfMark
#   file         : file_io.py
#   file_relpath : src/profmark/file_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Read and write source files while preserving their layout.

`read_source` loads a file as text without translating newlines, records the
newline convention (LF, CRLF or CR), whether the file ends with a newline and
whether it starts with a UTF-8 BOM, and returns the lines without their
terminators. `write_source` truncates the file and writes the given lines
back with the same conventions, so a file whose line endings are consistent
round-trips byte for byte.

Mixed line endings are normalized to the dominant style on write.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from profmark.config.logging import get_logger
from profmark.constants import DEFAULT_ENCODING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from profmark.config.logging import ProfmarkLogger

logger: ProfmarkLogger = get_logger(__name__)

BOM: Final[str] = "\ufeff"

_LINE_RE: Final[re.Pattern[str]] = re.compile(r"([^\r\n]*)(\r\n|\n|\r|$)")


@dataclass
class SourceImage:
    """In-memory image of a source file.

    Attributes:
        path (Path): File the image was read from.
        lines (list[str]): Line texts without terminators.
        newline (str): Dominant newline sequence (``"\\n"`` when the file has none).
        ends_with_newline (bool): Whether the last line is terminated.
        leading_bom (bool): Whether the file started with a UTF-8 BOM.
        mixed_newlines (bool): Whether more than one newline style was seen.
        encoding (str): Encoding used to decode the file.
    """

    path: Path
    lines: list[str]
    newline: str = "\n"
    ends_with_newline: bool = True
    leading_bom: bool = False
    mixed_newlines: bool = False
    encoding: str = DEFAULT_ENCODING


def split_lines(text: str) -> tuple[list[str], dict[str, int], bool]:
    """Split ``text`` on LF, CRLF and CR only.

    Unlike `str.splitlines`, form feeds and other Unicode separators stay
    inside their line.

    Returns:
        tuple[list[str], dict[str, int], bool]: The lines, a histogram of newline
        sequences and whether the text ends with a newline.
    """
    lines: list[str] = []
    hist: dict[str, int] = {"\n": 0, "\r\n": 0, "\r": 0}
    if not text:
        return lines, hist, False
    ends_with_newline: bool = False
    pos: int = 0
    while pos < len(text):
        m: re.Match[str] | None = _LINE_RE.match(text, pos)
        assert m is not None
        body, nl = m.group(1), m.group(2)
        lines.append(body)
        if nl:
            hist[nl] += 1
        ends_with_newline = bool(nl)
        pos = m.end()
    return lines, hist, ends_with_newline


def read_source(path: Path, encoding: str = DEFAULT_ENCODING) -> SourceImage:
    """Load ``path`` into a `SourceImage`.

    Args:
        path (Path): File to read.
        encoding (str): Text encoding.

    Returns:
        SourceImage: The decoded lines and layout facts.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid text in ``encoding``.
    """
    with path.open("r", encoding=encoding, newline="") as f:
        text: str = f.read()

    leading_bom: bool = text.startswith(BOM)
    if leading_bom:
        text = text[len(BOM) :]

    lines, hist, ends_with_newline = split_lines(text)
    seen: dict[str, int] = {k: v for k, v in hist.items() if v > 0}
    newline: str = max(seen.items(), key=lambda kv: kv[1])[0] if seen else "\n"
    mixed: bool = len(seen) >= 2
    if mixed:
        logger.debug(
            "Mixed line endings in %s (LF=%d, CRLF=%d, CR=%d); writing %r",
            path,
            hist["\n"],
            hist["\r\n"],
            hist["\r"],
            newline,
        )
    logger.debug(
        "Read %s: %d line(s), newline=%r, ends_with_newline=%s, bom=%s",
        path,
        len(lines),
        newline,
        ends_with_newline,
        leading_bom,
    )
    return SourceImage(
        path=path,
        lines=lines,
        newline=newline,
        ends_with_newline=ends_with_newline,
        leading_bom=leading_bom,
        mixed_newlines=mixed,
        encoding=encoding,
    )


def render_source(image: SourceImage, lines: Sequence[str]) -> str:
    """Join ``lines`` using the layout recorded in ``image``."""
    text: str = image.newline.join(lines)
    if lines and image.ends_with_newline:
        text += image.newline
    if image.leading_bom:
        text = BOM + text
    return text


def write_source(image: SourceImage, lines: Sequence[str]) -> int:
    """Truncate ``image.path`` and write ``lines`` back.

    There is no backup: a failure mid-write can leave the file truncated.

    Args:
        image (SourceImage): Layout facts captured by `read_source`.
        lines (Sequence[str]): Final line texts without terminators.

    Returns:
        int: Number of bytes written.

    Raises:
        OSError: If the file cannot be written.
    """
    text: str = render_source(image, lines)
    data: bytes = text.encode(image.encoding)
    with image.path.open("wb") as f:
        f.write(data)
    logger.debug("Wrote %d bytes to %s", len(data), image.path)
    return len(data)
