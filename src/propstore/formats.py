"""Backing file formats: the flat ``key=value`` properties text and flat JSON.

A format turns file text into an ordered raw map and back. File access itself
stays in the store so both formats share the same load and save error handling.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Protocol

import orjson

from . import config

logger = logging.getLogger(__name__)

_COMMENT_CHARS = "#!"
_WHITESPACE = " \t\f"
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_REVERSE_ESCAPES = {"\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f"}
_SPECIAL_CHARS = "=:#!"


class FileFormat(Protocol):
    """Conversion between file text and a flat string map."""

    name: str

    def parse(self, text: str) -> Dict[str, str]:
        ...

    def render(self, entries: Mapping[str, str], comment: Optional[str] = None) -> str:
        ...


class PropertiesFormat:
    """The standard properties text format."""

    name = "properties"

    def __init__(self, *, timestamp: Optional[bool] = None) -> None:
        self.timestamp = timestamp

    def parse(self, text: str) -> Dict[str, str]:
        """
        Parse properties text into an ordered map.

        Raises:
            ValueError: If a ``\\uXXXX`` escape is malformed
        """
        entries: Dict[str, str] = {}
        for line in _logical_lines(text):
            key, value = _split_entry(line)
            entries[_unescape(key)] = _unescape(value)
        return entries

    def render(self, entries: Mapping[str, str], comment: Optional[str] = None) -> str:
        lines: List[str] = []
        if comment:
            lines.extend(_comment_lines(comment))
        write_timestamp = self.timestamp if self.timestamp is not None else config.write_timestamp()
        if write_timestamp:
            lines.append("#" + datetime.now().astimezone().strftime("%a %b %d %H:%M:%S %Z %Y"))
        for key, value in entries.items():
            lines.append(f"{_escape(key, is_key=True)}={_escape(value, is_key=False)}")
        return "\n".join(lines) + "\n"


class JsonFormat:
    """Flat JSON object of scalar values."""

    name = "json"

    def parse(self, text: str) -> Dict[str, str]:
        """
        Parse a flat JSON object into an ordered map of strings.

        Raises:
            ValueError: If the document is not a flat object of scalars
        """
        try:
            payload = orjson.loads(text)
        except orjson.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise ValueError("JSON properties must contain an object at the top level")
        return {str(key): _scalar_to_raw(key, value) for key, value in payload.items()}

    def render(self, entries: Mapping[str, str], comment: Optional[str] = None) -> str:
        if comment:
            logger.debug("Dropping comment; JSON properties files cannot carry one")
        return orjson.dumps(dict(entries), option=orjson.OPT_INDENT_2).decode("utf-8") + "\n"


def resolve_format(path: Path) -> FileFormat:
    """Pick the backing format from the file suffix."""
    if path.suffix.lower() == ".json":
        return JsonFormat()
    return PropertiesFormat()


def _scalar_to_raw(key: object, value: object) -> str:
    if isinstance(value, (dict, list)):
        raise ValueError(f"JSON properties must map names to scalar values (problematic key: {key})")
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _logical_lines(text: str) -> Iterator[str]:
    natural = _LINE_BREAK.split(text)
    index = 0
    while index < len(natural):
        line = natural[index].lstrip(_WHITESPACE)
        index += 1
        if not line or line[0] in _COMMENT_CHARS:
            continue
        while _ends_with_continuation(line) and index < len(natural):
            line = line[:-1] + natural[index].lstrip(_WHITESPACE)
            index += 1
        if _ends_with_continuation(line):
            line = line[:-1]
        yield line


def _ends_with_continuation(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into raw (still escaped) key and value."""
    key_end = len(line)
    position = 0
    while position < len(line):
        char = line[position]
        if char == "\\":
            position += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            key_end = position
            break
        position += 1

    key = line[:key_end]
    position = key_end
    while position < len(line) and line[position] in _WHITESPACE:
        position += 1
    if position < len(line) and line[position] in _SEPARATORS:
        position += 1
        while position < len(line) and line[position] in _WHITESPACE:
            position += 1
    return key, line[position:]


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text
    chars: List[str] = []
    position = 0
    while position < len(text):
        char = text[position]
        position += 1
        if char != "\\" or position >= len(text):
            chars.append(char)
            continue
        marker = text[position]
        position += 1
        if marker == "u":
            digits = text[position : position + 4]
            if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                raise ValueError(f"Malformed \\uxxxx encoding: \\u{digits}")
            chars.append(chr(int(digits, 16)))
            position += 4
        else:
            chars.append(_ESCAPES.get(marker, marker))
    # join UTF-16 surrogate pairs produced by \uXXXX escapes
    return "".join(chars).encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def _escape(text: str, *, is_key: bool) -> str:
    chars: List[str] = []
    for index, char in enumerate(text):
        if char == " ":
            chars.append("\\ " if is_key or index == 0 else " ")
        elif char == "\\":
            chars.append("\\\\")
        elif char in _REVERSE_ESCAPES:
            chars.append(_REVERSE_ESCAPES[char])
        elif char in _SPECIAL_CHARS:
            chars.append("\\" + char)
        elif ord(char) < 0x20 or ord(char) > 0x7E:
            chars.extend(_unicode_escape(char))
        else:
            chars.append(char)
    return "".join(chars)


def _unicode_escape(char: str) -> Iterator[str]:
    encoded = char.encode("utf-16-be", "surrogatepass")
    for offset in range(0, len(encoded), 2):
        yield "\\u%04X" % int.from_bytes(encoded[offset : offset + 2], "big")


def _comment_lines(comment: str) -> List[str]:
    lines = []
    for line in _LINE_BREAK.split(comment.rstrip("\r\n")):
        if line and line[0] in _COMMENT_CHARS:
            lines.append(line)
        else:
            lines.append("#" + line)
    return lines


__all__ = ["FileFormat", "JsonFormat", "PropertiesFormat", "resolve_format"]
