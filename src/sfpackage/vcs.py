"""Version control system operations for sfpackage."""

import enum
import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .config import PackageConfig
from .errors import GitDiffFailedError, GitUnavailableError

logger = logging.getLogger(__name__)

MIN_GIT_VERSION = (2, 0)


class ChangeStatus(enum.Enum):
    """Status column of ``git diff --name-status``."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    OTHER = "?"

    @classmethod
    def from_code(cls, code: str) -> "ChangeStatus":
        for status in (cls.ADDED, cls.MODIFIED, cls.DELETED):
            if status.value == code:
                return status
        return cls.OTHER


@dataclass(frozen=True)
class ChangeRecord:
    """One changed path between two revisions."""

    status: ChangeStatus
    path: str
    raw_status: str = ""

    @classmethod
    def from_line(cls, line: str) -> "ChangeRecord":
        """Parse ``<status><TAB or spaces><path>``."""
        code = line[:1]
        return cls(status=ChangeStatus.from_code(code), path=line[1:].strip(), raw_status=code)


def parse_diff_output(output: str) -> List[ChangeRecord]:
    """Parse ``--name-status`` output into records, skipping blank lines."""
    records = []
    for line in output.splitlines():
        if not line.strip():
            continue
        records.append(ChangeRecord.from_line(line))
    return records


class GitRepository:
    """Git repository operations."""

    def __init__(self, config: PackageConfig):
        """Initialize with configuration."""
        self.config = config
        self.workdir = Path(config.repo_path)
        self._git_version: Optional[str] = None

    def _run_git(
        self,
        args: List[str],
        timeout: int = 300,
    ) -> subprocess.CompletedProcess:
        """Run git command with proper environment and error handling."""
        cmd = [
            "git",
            "-c",
            "core.quotepath=off",
            "-c",
            "color.ui=false",
        ] + args
        try:
            return subprocess.run(
                cmd,
                cwd=self.workdir,
                env=self.config.git_env,
                timeout=timeout,
                check=False,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise GitUnavailableError("unavailable") from e
        except subprocess.TimeoutExpired as e:
            raise GitDiffFailedError(
                self.config.compare, self.config.branch, f"git timed out after {timeout}s"
            ) from e

    def validate_git_version(self) -> str:
        """Validate Git version meets minimum requirements."""
        if self._git_version:
            return self._git_version

        required = ".".join(str(part) for part in MIN_GIT_VERSION)
        try:
            result = subprocess.run(
                ["git", "--version"],
                capture_output=True,
                text=True,
                check=True,
                timeout=10,
            )
        except (OSError, subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
            raise GitUnavailableError("unavailable", required) from e

        # Extract version number from "git version 2.34.1"
        match = re.search(r"git version (\d+)\.(\d+)", result.stdout)
        if not match:
            raise GitUnavailableError("unknown", required)

        version = (int(match.group(1)), int(match.group(2)))
        if version < MIN_GIT_VERSION:
            raise GitUnavailableError(f"{version[0]}.{version[1]}", required)

        self._git_version = f"{version[0]}.{version[1]}"
        logger.debug("Git version validated", extra={"git_version": self._git_version})
        return self._git_version

    def diff_name_status(self) -> str:
        """Return raw ``git diff --name-status`` output for compare..branch."""
        self.validate_git_version()
        if not self.workdir.is_dir():
            raise GitDiffFailedError(
                self.config.compare,
                self.config.branch,
                f"repository path {self.workdir} does not exist",
            )
        result = self._run_git(
            [
                "diff",
                "--name-status",
                "--no-renames",
                self.config.compare,
                self.config.branch,
            ]
        )
        stderr = result.stderr.strip()
        if result.returncode != 0 or stderr:
            raise GitDiffFailedError(
                self.config.compare,
                self.config.branch,
                stderr or f"git diff exited with status {result.returncode}",
            )
        return result.stdout

    def get_change_records(self) -> List[ChangeRecord]:
        """Get changed paths between compare and branch."""
        records = parse_diff_output(self.diff_name_status())
        logger.info(
            "Collected changed paths",
            extra={
                "compare": self.config.compare,
                "branch": self.config.branch,
                "changes": len(records),
            },
        )
        return records
