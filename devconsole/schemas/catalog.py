"""Schema for the flat, file-backed page catalog (camelCase keys on disk)."""

from pydantic import BaseModel, ConfigDict, Field


class CatalogPage(BaseModel):
    """One catalog record as stored in the JSON document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1)
    name: str
    description: str = ""
    power_bi_url: str | None = Field(default=None, alias="powerBIUrl")
    spreadsheet_url: str | None = Field(default=None, alias="spreadsheetUrl")
    category: str | None = None


class CatalogListResponse(BaseModel):
    pages: list[CatalogPage]
