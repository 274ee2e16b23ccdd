"""Configuration management for sfpackage."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

from .manifest import DEFAULT_NESTED_PROPERTIES
from .serialize import format_version
from .settings import get_default_api_version, get_default_source_root


@dataclass(frozen=True)
class PackageConfig:
    """Configuration for one manifest build."""

    # Required parameters
    compare: str
    branch: str

    # Output location, required unless dry_run
    target: Optional[str] = None

    # Source tree
    source_root: str = field(default_factory=get_default_source_root)
    repo_path: str = "."
    nested_properties: FrozenSet[str] = DEFAULT_NESTED_PROPERTIES

    # package.xml <version>; None means the configured default
    api_version: Optional[int] = None

    # Run modes
    dry_run: bool = False
    destructive_only: bool = False

    # Output options
    json_output_path: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.compare or not self.branch:
            raise ValueError("branch and target branch are both required")
        if not self.source_root or not self.source_root.strip("/"):
            raise ValueError("source_root cannot be empty")
        if self.api_version is not None and self.api_version <= 0:
            raise ValueError("api_version must be positive")
        if not self.dry_run and not self.target:
            raise ValueError("target required when not dry-run")
        # Normalise "force-app/" to "force-app" so prefix checks line up
        object.__setattr__(self, "source_root", self.source_root.rstrip("/"))
        object.__setattr__(self, "nested_properties", frozenset(self.nested_properties))

    @property
    def resolved_api_version(self) -> str:
        """API version written into the manifests."""
        if self.api_version is None:
            return get_default_api_version()
        return format_version(self.api_version)

    @property
    def git_env(self) -> Dict[str, str]:
        """Get Git environment variables for deterministic output."""
        env = os.environ.copy()

        null_device = "NUL" if os.name == "nt" else "/dev/null"

        env.update(
            {
                "LC_ALL": "C",
                "GIT_CONFIG_GLOBAL": null_device,
                "GIT_CONFIG_SYSTEM": null_device,
                "GIT_TERMINAL_PROMPT": "0",
                "GIT_ASKPASS": "echo",
                "SSH_ASKPASS": "echo",
                "GCM_INTERACTIVE": "never",
            }
        )
        return env

    def to_provenance_dict(self) -> Dict[str, Any]:
        """Convert config to provenance dictionary for output."""
        return {
            "compare": self.compare,
            "branch": self.branch,
            "target": self.target,
            "source_root": self.source_root,
            "api_version": self.resolved_api_version,
            "destructive_only": self.destructive_only,
            "dry_run": self.dry_run,
            "nested_properties": sorted(self.nested_properties),
            "rename_detection": {"enabled": False},
        }
