"""
User-defined metadata codec.

Metadata travels as one ``x-ms-meta-<name>: <value>`` header per entry.
Names must be valid C# identifiers; this codec applies the stricter
lower-case form so a name round-trips unchanged through case-insensitive
HTTP headers.
"""

import re
from typing import Dict, Mapping, Optional

METADATA_HEADER_PREFIX = "x-ms-meta-"

# Total size of all names and values accepted by the service
MAX_METADATA_SIZE = 8 * 1024

_KEY_PATTERN = re.compile(r"[a-z_][a-z0-9_]+")
_VALUE_PATTERN = re.compile(r"[\x20-\x7e]*")

CSHARP_KEYWORDS = frozenset(
    {
        "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
        "char", "checked", "class", "const", "continue", "decimal", "default",
        "delegate", "do", "double", "else", "enum", "event", "explicit",
        "extern", "false", "finally", "fixed", "float", "for", "foreach",
        "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
        "lock", "long", "namespace", "new", "null", "object", "operator",
        "out", "override", "params", "private", "protected", "public",
        "readonly", "ref", "return", "sbyte", "sealed", "short", "sizeof",
        "stackalloc", "static", "string", "struct", "switch", "this", "throw",
        "true", "try", "typeof", "uint", "ulong", "unchecked", "unsafe",
        "ushort", "using", "void", "volatile", "while",
    }
)


class MetadataError(ValueError):
    """Raised when a metadata mapping cannot be sent to the service."""


def validate(metadata: Optional[Mapping[str, str]]) -> None:
    """
    Check that every entry can be sent as a metadata header.

    Raises MetadataError describing the first offending entry.
    """
    if not metadata:
        return

    total = 0
    for key, value in metadata.items():
        if not isinstance(key, str):
            raise MetadataError(f"{key!r} is not a valid key (expected a string)")
        if key.lower() in CSHARP_KEYWORDS:
            raise MetadataError(f"{key!r} is not a valid key (C# keyword)")
        if not _KEY_PATTERN.fullmatch(key):
            raise MetadataError(
                f"MetaData must start with letters or an underscores. Got {key!r}."
            )
        if not isinstance(value, str):
            raise MetadataError(f"value for {key!r} must be a string, got {type(value).__name__}")
        if not _VALUE_PATTERN.fullmatch(value):
            raise MetadataError(f"value for {key!r} contains non-printable or non-ASCII characters")
        total += len(key) + len(value)

    if total > MAX_METADATA_SIZE:
        raise MetadataError(
            f"total size of metadata is {total} bytes, which exceeds the {MAX_METADATA_SIZE} byte limit"
        )


def set_into_headers(headers: Mapping[str, str], metadata: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Return a copy of ``headers`` with one prefixed header per metadata entry."""
    merged = dict(headers)
    for key, value in (metadata or {}).items():
        merged[f"{METADATA_HEADER_PREFIX}{key}"] = value
    return merged


def parse_from_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Collect ``x-ms-meta-*`` headers back into a metadata mapping."""
    metadata = {}
    for name, value in headers.items():
        lowered = name.lower()
        if lowered.startswith(METADATA_HEADER_PREFIX):
            metadata[lowered[len(METADATA_HEADER_PREFIX):]] = value
    return metadata
