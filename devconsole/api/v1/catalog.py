"""File-backed page catalog endpoints (staff only)."""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from devconsole.api.v1.auth import require_staff
from devconsole.core.config import get_settings
from devconsole.schemas.auth import CurrentUser
from devconsole.schemas.catalog import CatalogListResponse, CatalogPage
from devconsole.services import page_catalog

router = APIRouter()


def get_catalog_path() -> Path:
    return Path(get_settings().PAGE_CATALOG_PATH)


def _require_saved(saved: bool) -> None:
    if not saved:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Page catalog could not be written.",
        )


@router.get("", response_model=CatalogListResponse)
def list_catalog(
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    path: Annotated[Path, Depends(get_catalog_path)],
) -> CatalogListResponse:
    return CatalogListResponse(pages=page_catalog.read_pages(path))


@router.get("/{page_id}", response_model=CatalogPage)
def get_catalog_page(
    page_id: str,
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    path: Annotated[Path, Depends(get_catalog_path)],
) -> CatalogPage:
    page = page_catalog.get_page(path, page_id)
    if page is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Catalog page not found")
    return page


@router.post("", response_model=CatalogPage, status_code=status.HTTP_201_CREATED)
def add_catalog_page(
    body: CatalogPage,
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    path: Annotated[Path, Depends(get_catalog_path)],
) -> CatalogPage:
    _require_saved(page_catalog.add_page(path, body))
    return body


@router.put("/{page_id}", response_model=CatalogPage)
def update_catalog_page(
    page_id: str,
    body: CatalogPage,
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    path: Annotated[Path, Depends(get_catalog_path)],
) -> CatalogPage:
    if body.id != page_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Body id does not match path id",
        )
    if page_catalog.get_page(path, page_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Catalog page not found")
    _require_saved(page_catalog.update_page(path, body))
    return body


@router.delete("/{page_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_catalog_page(
    page_id: str,
    _staff: Annotated[CurrentUser, Depends(require_staff)],
    path: Annotated[Path, Depends(get_catalog_path)],
) -> None:
    _require_saved(page_catalog.delete_page(path, page_id))
