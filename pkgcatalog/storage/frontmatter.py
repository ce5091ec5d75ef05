"""
Read and write package records as Markdown files with YAML frontmatter.

File layout::

    ---
    title: freecal
    import_path: go.ngs.io/freecal
    ...
    ---

    <body>

The body section (blank line plus text) is omitted entirely when the body is
empty.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

import yaml
from pydantic import ValidationError

from pkgcatalog.domain.errors import (
    MalformedFrontmatter,
    NoFrontmatter,
    PackageReadError,
    WriteFailed,
)
from pkgcatalog.domain.models import PackageRecord

logger = logging.getLogger(__name__)

DELIMITER = "---"
_OPENING = DELIMITER + "\n"
_CLOSING = "\n" + DELIMITER
_NULL_TAG = "tag:yaml.org,2002:null"


class _FrontmatterLoader(yaml.SafeLoader):
    """
    SafeLoader that keeps plain scalars as their source text.

    Every frontmatter field is a string or a timestamp, so YAML 1.1 typing
    would only lose information (``1.10`` read as ``1.1``, ``yes`` as
    ``True``). Timestamps are parsed by ``PackageRecord``. Only null is
    still resolved, so empty keys read as missing.
    """


_FrontmatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag == _NULL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class _FrontmatterDumper(yaml.SafeDumper):
    """SafeDumper that writes timestamps as unquoted RFC 3339 (``...Z`` for UTC)."""


def _represent_datetime(dumper: yaml.SafeDumper, value: datetime):
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat()
    if value.utcoffset() == timezone.utc.utcoffset(None):
        text = text[: -len("+00:00")] + "Z"
    return dumper.represent_scalar("tag:yaml.org,2002:timestamp", text)


_FrontmatterDumper.add_representer(datetime, _represent_datetime)


def split_frontmatter(content: str) -> tuple[str, str]:
    """
    Split file content into the raw frontmatter text and the body.

    The body loses at most two leading newlines: the one ending the closing
    delimiter line and the blank separator line.
    """
    if not content.startswith(_OPENING):
        raise NoFrontmatter()

    end = content.find(_CLOSING, len(_OPENING))
    if end == -1:
        raise MalformedFrontmatter()

    frontmatter = content[len(_OPENING):end]

    body = ""
    body_start = end + len(_CLOSING)
    if body_start < len(content):
        body = content[body_start:]
        for _ in range(2):
            if body.startswith("\n"):
                body = body[1:]

    return frontmatter, body


def decode(content: str) -> PackageRecord:
    frontmatter, body = split_frontmatter(content)

    try:
        data = yaml.load(frontmatter, Loader=_FrontmatterLoader)
    except (yaml.YAMLError, ValueError) as e:
        # ValueError: an explicit !!timestamp naming an impossible date.
        raise MalformedFrontmatter(f"failed to parse frontmatter: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedFrontmatter("failed to parse frontmatter: expected a mapping")

    try:
        record = PackageRecord.model_validate(data)
    except ValidationError as e:
        raise MalformedFrontmatter(f"failed to parse frontmatter: {e}") from e

    record.body = body
    return record


def encode(record: PackageRecord) -> str:
    frontmatter = yaml.dump(
        record.frontmatter(),
        Dumper=_FrontmatterDumper,
        indent=2,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )

    if record.body:
        return f"{_OPENING}{frontmatter}{DELIMITER}\n\n{record.body}"
    return f"{_OPENING}{frontmatter}{DELIMITER}\n"


def read_package(file_path: Path) -> PackageRecord:
    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except OSError as e:
        raise PackageReadError(f"failed to read file: {e}") from e
    except UnicodeDecodeError as e:
        raise PackageReadError(f"file is not valid UTF-8: {e}") from e
    return decode(content)


def write_package(file_path: Path, record: PackageRecord) -> None:
    file_path = Path(file_path)
    try:
        content = encode(record)
    except yaml.YAMLError as e:
        raise WriteFailed(f"failed to encode package: {e}") from e

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise WriteFailed(f"failed to write file: {e}") from e

    logger.debug(f"Wrote package {record.title} to {file_path}")
