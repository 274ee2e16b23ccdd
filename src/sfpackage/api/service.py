"""Service layer for the sfpackage API."""

import logging
from typing import Any, Dict, Iterable, Optional

from ..classify import DiffClassifier
from ..errors import SfPackageError
from ..serialize import ManifestSerializer
from ..vcs import parse_diff_output

logger = logging.getLogger(__name__)


class ManifestService:
    """Builds both manifests from raw diff text."""

    def process_manifest_request(
        self,
        diff: str,
        source_root: str = "force-app",
        api_version: Optional[int] = None,
        destructive_only: bool = False,
        nested_properties: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """Classify the diff and return a success or error envelope."""
        serializer = ManifestSerializer()
        records = parse_diff_output(diff)
        logger.info(
            "Processing manifest request",
            extra={"records": len(records), "source_root": source_root},
        )

        try:
            classifier = DiffClassifier(nested_properties)
            result = classifier.classify(records, source_root, destructive_only)
        except SfPackageError as exc:
            logger.warning("Manifest request rejected", extra={"code": exc.code})
            return serializer.create_error_envelope(exc.code, exc.message, exc.details)

        package = serializer.serialize(result.added, api_version)
        destructive = serializer.serialize(result.deleted, api_version)

        payload = {
            "package": serializer.to_dict(package),
            "destructive": serializer.to_dict(destructive),
            "package_xml": serializer.to_xml(package),
            "destructive_xml": serializer.to_xml(destructive),
            "deletes_occurred": result.deletes_occurred,
            "staged_paths": list(result.staged_paths),
            "warnings": [warning.to_dict() for warning in result.warnings],
            "conflicts": [
                {"type": key.type_name, "member": key.member_id}
                for key in result.conflicts
            ],
        }
        logger.info(
            "Manifest request completed",
            extra={
                "package_types": len(package.entries),
                "destructive_types": len(destructive.entries),
                "warnings": len(result.warnings),
            },
        )
        return serializer.create_success_envelope(payload)
