"""Saved document format: YAML front matter, a blank line, then the markdown body."""
from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"

# characters a YAML reader rejects or folds into whitespace; json.dumps leaves them raw
_YAML_UNSAFE = re.compile(r"[\x7f-\x9f\u2028\u2029\ud800-\udfff\ufffe\uffff]")


@dataclass(frozen=True)
class DocumentMetadata:
    title: str
    url: str
    date: str
    category: str
    name: str


def _quote(value: str) -> str:
    return _YAML_UNSAFE.sub(lambda m: f"\\u{ord(m.group()):04x}", json.dumps(value, ensure_ascii=False))


def render_front_matter(metadata: DocumentMetadata) -> str:
    # JSON strings are valid YAML double-quoted scalars, so values always load back as str
    lines = [FRONT_MATTER_DELIMITER]
    for key, value in asdict(metadata).items():
        lines.append(f"{key}: {_quote(value)}")
    lines.append(FRONT_MATTER_DELIMITER)
    return "\n".join(lines) + "\n"


def render_document(metadata: DocumentMetadata, body: str) -> str:
    return f"{render_front_matter(metadata)}\n{body}"


def parse_front_matter(text: str) -> Optional[DocumentMetadata]:
    """Read the metadata block back from a saved document.

    Returns None when the text has no front matter or it is not valid.
    """
    if not text or not text.startswith(FRONT_MATTER_DELIMITER + "\n"):
        return None
    end = text.find("\n" + FRONT_MATTER_DELIMITER + "\n", len(FRONT_MATTER_DELIMITER))
    if end == -1:
        return None
    raw = text[len(FRONT_MATTER_DELIMITER) + 1:end + 1]
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError:
        logger.debug("Invalid front matter block")
        return None
    if not isinstance(data, dict):
        return None
    try:
        return DocumentMetadata(**{k: str(data[k]) for k in ("title", "url", "date", "category", "name")})
    except KeyError:
        return None
