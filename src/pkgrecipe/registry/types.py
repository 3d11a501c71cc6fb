"""Registry wire types."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class PackageVersion(BaseModel):
    """One published version of a package, as listed in its metadata.

    The registry sends the full recipe of the version alongside ``version``;
    those fields are kept as extra data. ``readme`` is dropped on load.
    """

    model_config = ConfigDict(extra="allow")

    version: str

    def recipe(self) -> dict[str, Any]:
        """Return the version entry as plain data."""
        return self.model_dump()


class PackageMetadata(BaseModel):
    """Metadata document of a package (``packages/<id>.json``)."""

    name: str = ""
    versions: list[PackageVersion] = []

    @field_validator("versions", mode="before")
    @classmethod
    def _strip_readme(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [
                {k: v for k, v in entry.items() if k != "readme"} if isinstance(entry, dict) else entry
                for entry in value
            ]
        return value


class SearchResult(BaseModel):
    """A package search hit."""

    name: str = ""
    description: str = ""
    version: str = ""
