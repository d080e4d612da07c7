"""
Flat page catalog stored as a single JSON document.

Independent of the database. Every write rewrites the whole file with no
locking, so concurrent writers race and the last one wins. Read and write
failures are logged and degrade to an empty catalog / False.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from devconsole.schemas.catalog import CatalogPage

logger = logging.getLogger(__name__)


def read_pages(path: Path) -> list[CatalogPage]:
    """Load every catalog record; an unreadable or malformed file yields []."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.info("Page catalog %s does not exist yet; treating as empty.", path)
        return []
    except (OSError, ValueError) as e:
        logger.error("Failed to read page catalog %s: %s", path, e)
        return []
    if not raw:
        return []
    try:
        return [CatalogPage.model_validate(item) for item in raw]
    except (TypeError, ValidationError) as e:
        logger.error("Page catalog %s has invalid records: %s", path, e)
        return []


def save_pages(path: Path, pages: list[CatalogPage]) -> bool:
    """Rewrite the catalog file with `pages`. Returns False if the write failed."""
    payload = [p.model_dump(by_alias=True, exclude_none=True) for p in pages]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write page catalog %s: %s", path, e)
        return False
    return True


def add_page(path: Path, page: CatalogPage) -> bool:
    pages = read_pages(path)
    pages.append(page)
    return save_pages(path, pages)


def delete_page(path: Path, page_id: str) -> bool:
    pages = read_pages(path)
    return save_pages(path, [p for p in pages if p.id != page_id])


def get_page(path: Path, page_id: str) -> CatalogPage | None:
    return next((p for p in read_pages(path) if p.id == page_id), None)


def update_page(path: Path, updated: CatalogPage) -> bool:
    """Replace the record with the same id; other records are left as they are."""
    pages = [updated if p.id == updated.id else p for p in read_pages(path)]
    return save_pages(path, pages)
