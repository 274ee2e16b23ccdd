"""Pydantic models for sfpackage API requests and responses."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ..manifest import DEFAULT_NESTED_PROPERTIES


class ManifestRequest(BaseModel):
    """Request model for the manifest endpoint."""

    diff: str = Field(
        ...,
        description="Raw output of git diff --name-status --no-renames",
        examples=["M\tforce-app/main/default/classes/Foo.cls\n"],
    )
    source_root: str = Field(
        "force-app",
        description="Root source directory of the SFDX project",
    )
    api_version: Optional[int] = Field(
        None,
        description="Salesforce API version of the generated manifests",
        ge=1,
        le=999,
    )
    destructive_only: bool = Field(
        False,
        description="Only include destructive (deleted) changes",
    )
    nested_properties: List[str] = Field(
        default_factory=lambda: sorted(DEFAULT_NESTED_PROPERTIES),
        description="Object sub-folders listed as their own metadata type",
    )

    @field_validator("source_root")
    @classmethod
    def source_root_must_not_be_empty(cls, v):
        """Strip slashes and reject an empty root."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("source_root cannot be empty")
        return v


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(..., examples=["healthy"])
    version: str = Field(..., examples=["1.0.0"])


class VersionResponse(BaseModel):
    """Response model for version endpoint."""

    version: str = Field(..., examples=["1.0.0"])
    api_version: str = Field(..., examples=["v1"])
    default_package_version: str = Field(..., examples=["37.0"])
    supported_features: list = Field(
        default_factory=lambda: [
            "package_xml",
            "destructive_changes_xml",
            "nested_metadata",
            "destructive_only",
        ]
    )
