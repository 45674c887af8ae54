"""Pydantic schemas for runtime validation of parse command inputs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

VISIBILITY_LEVELS = ("public", "protected", "private")


def _split_list(value: object) -> list[str]:
    """Flatten repeated and comma-separated option values."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError("expected a string or a list of strings.")
    items: list[str] = []
    for entry in value:
        items.extend(part.strip() for part in str(entry).split(","))
    return [item for item in items if item]


class ParseCommandConfig(BaseModel):
    """Validated input for the project parse command."""

    model_config = ConfigDict(extra="forbid")

    target: str = "output"
    filename: list[str] = Field(default_factory=list)
    directory: list[str] = Field(default_factory=list)
    extensions: list[str] = Field(default_factory=lambda: ["php", "php3", "phtml"])
    ignore: list[str] = Field(default_factory=list)
    ignore_tags: list[str] = Field(default_factory=list)
    hidden: bool = False
    ignore_symlinks: bool = False
    markers: list[str] = Field(default_factory=lambda: ["TODO", "FIXME"])
    title: str = ""
    force: bool = False
    validate_files: bool = False
    visibility: list[str] = Field(default_factory=list)
    defaultpackagename: str = "Default"
    sourcecode: bool = False
    progressbar: bool = False
    verbose: bool = False

    @field_validator(
        "filename",
        "directory",
        "extensions",
        "ignore",
        "ignore_tags",
        "markers",
        "visibility",
        mode="before",
    )
    @classmethod
    def _split_comma_lists(cls, value: object) -> list[str]:
        return _split_list(value)

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized = [item.lstrip(".").lower() for item in value]
        if any(not item for item in normalized):
            raise ValueError("extensions cannot contain empty entries.")
        return normalized

    @field_validator("visibility")
    @classmethod
    def _validate_visibility(cls, value: list[str]) -> list[str]:
        normalized = [item.lower() for item in value]
        unknown = sorted(set(normalized) - set(VISIBILITY_LEVELS))
        if unknown:
            raise ValueError(
                f"unknown visibility {', '.join(unknown)}; "
                f"use {', '.join(VISIBILITY_LEVELS)}."
            )
        return normalized

    @field_validator("defaultpackagename", "title")
    @classmethod
    def _strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("defaultpackagename")
    @classmethod
    def _require_package_name(cls, value: str) -> str:
        if not value:
            raise ValueError("default package name cannot be empty.")
        return value
