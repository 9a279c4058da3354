import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import NamedTuple, Optional, Union

from doccrawl.domain.categorization import CATEGORIES
from doccrawl.domain.document import DocumentMetadata, parse_front_matter

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.md"

PathLike = Union[str, Path]


class DocumentationStats(NamedTuple):
    file_count: int
    total_size: int
    last_modified: Optional[datetime]


class DocumentStorage:
    """
    Filesystem layout for saved documentation.

    Files live at ``{base_path}/{category}/{name}/{filename}``; the site's
    ``index.md`` marks documentation that has already been downloaded.
    """

    def __init__(self, base_path: PathLike):
        self.base_path = Path(base_path)

    def documentation_path(self, category: str, name: str) -> Path:
        return self.base_path / category / name

    def document_path(self, category: str, name: str, filename: str) -> Path:
        return self.documentation_path(category, name) / filename

    def index_path(self, category: str, name: str) -> Path:
        return self.document_path(category, name, INDEX_FILENAME)

    def write_file(self, path: PathLike, content: str) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s (%d chars)", target, len(content))

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def read_file(self, path: PathLike) -> Optional[str]:
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError:
            return None

    def read_metadata(self, path: PathLike) -> Optional[DocumentMetadata]:
        text = self.read_file(path)
        return parse_front_matter(text) if text is not None else None

    def list_documentation(self, category: Optional[str] = None) -> dict[str, list[str]]:
        """Names of downloaded sites per category; missing folders list as empty."""
        if category is not None and category not in CATEGORIES:
            raise ValueError(f"Unknown category: {category!r}")
        result: dict[str, list[str]] = {c: [] for c in CATEGORIES}
        for cat in ([category] if category else CATEGORIES):
            folder = self.base_path / cat
            if not folder.is_dir():
                continue
            result[cat] = sorted(entry.name for entry in folder.iterdir() if entry.is_dir())
        return result

    def markdown_files(self, category: str, name: str) -> list[Path]:
        root = self.documentation_path(category, name)
        if not root.is_dir():
            return []
        return sorted(p for p in root.rglob("*.md") if p.is_file())

    def documentation_stats(self, category: str, name: str) -> DocumentationStats:
        file_count = 0
        total_size = 0
        last_modified: Optional[datetime] = None
        for path in self.markdown_files(category, name):
            try:
                st = path.stat()
            except OSError:
                logger.warning("Could not stat %s", path)
                continue
            file_count += 1
            total_size += st.st_size
            mtime = datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)
            if last_modified is None or mtime > last_modified:
                last_modified = mtime
        return DocumentationStats(file_count, total_size, last_modified)
