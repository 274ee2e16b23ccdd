"""Diff classification into deployment manifests for sfpackage."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .errors import UnrecognizedOperationWarning
from .manifest import DEFAULT_NESTED_PROPERTIES, Manifest, MemberKey, decompose_path
from .vcs import ChangeRecord, ChangeStatus

logger = logging.getLogger(__name__)

PACKAGE_FILE_NAME = "package.xml"


@dataclass
class ClassificationResult:
    """Outcome of one classification pass."""

    added: Manifest = field(default_factory=Manifest)
    deleted: Manifest = field(default_factory=Manifest)
    deletes_occurred: bool = False
    staged_paths: List[str] = field(default_factory=list)
    warnings: List[UnrecognizedOperationWarning] = field(default_factory=list)
    conflicts: List[MemberKey] = field(default_factory=list)


class DiffClassifier:
    """Turns changed paths into add/modify and delete manifests."""

    def __init__(self, nested_properties: Optional[Iterable[str]] = None):
        """Initialize with the object sub-folders treated as their own type."""
        if nested_properties is None:
            nested_properties = DEFAULT_NESTED_PROPERTIES
        self.nested_properties = frozenset(nested_properties)

    def classify(
        self,
        records: Iterable[ChangeRecord],
        source_root: str,
        destructive_only: bool = False,
    ) -> ClassificationResult:
        """Classify records in order.

        Records outside ``source_root`` and the root ``package.xml`` are
        skipped. Unknown statuses are collected as warnings.

        Raises:
            FatalInputError: a path has fewer than three meaningful segments.
                Nothing is returned in that case.
        """
        source_root = source_root.rstrip("/")
        prefix = f"{source_root}/"
        package_file = prefix + PACKAGE_FILE_NAME
        result = ClassificationResult()

        for record in records:
            path = record.path
            if not path.startswith(prefix) or path == package_file:
                continue

            key = decompose_path(path, self.nested_properties).member_key()
            logger.debug(
                "Decomposed path",
                extra={"path": path, "type": key.type_name, "member": key.member_id},
            )

            if record.status in (ChangeStatus.ADDED, ChangeStatus.MODIFIED):
                if destructive_only:
                    continue
                logger.info("File was added or modified: %s", path)
                result.staged_paths.append(path)
                result.added.add(key)
            elif record.status is ChangeStatus.DELETED:
                logger.info("File was deleted: %s", path)
                result.deletes_occurred = True
                result.deleted.add(key)
            else:
                warning = UnrecognizedOperationWarning(path, record.raw_status)
                logger.warning(warning.message, extra={"status": record.raw_status})
                result.warnings.append(warning)

        result.conflicts = [key for key in result.added.keys() if key in result.deleted]
        for key in result.conflicts:
            logger.warning(
                "Member is both changed and deleted: %s %s",
                key.type_name,
                key.member_id,
            )

        logger.debug(
            "Classification finished",
            extra={
                "added_types": len(result.added),
                "deleted_types": len(result.deleted),
                "staged": len(result.staged_paths),
                "warnings": len(result.warnings),
            },
        )
        return result


def classify(
    records: Iterable[ChangeRecord],
    source_root: str,
    destructive_only: bool = False,
    nested_properties: Optional[Iterable[str]] = None,
) -> ClassificationResult:
    """Classify records with a one-off DiffClassifier."""
    return DiffClassifier(nested_properties).classify(records, source_root, destructive_only)
