"""Manifest serialization for sfpackage."""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .manifest import Manifest
from .metatypes import metadata_type_for
from .settings import get_default_api_version

logger = logging.getLogger(__name__)

PACKAGE_NAMESPACE = "http://soap.sforce.com/2006/04/metadata"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
XML_INDENT = "    "


@dataclass(frozen=True)
class ManifestEntry:
    """One ``<types>`` block."""

    type_name: str
    metadata_type: str
    members: Tuple[str, ...]


@dataclass(frozen=True)
class ManifestDocument:
    """Serialized form of a Manifest."""

    entries: Tuple[ManifestEntry, ...]
    version: str

    @property
    def is_empty(self) -> bool:
        return not self.entries


def format_version(version: Union[int, str]) -> str:
    """Embed an API version as given (``48`` -> ``48``, ``"48.0"`` -> ``"48.0"``)."""
    return str(version)


class ManifestSerializer:
    """Turns manifests into package.xml documents with stable ordering.

    Types and members keep the order the classifier first saw them in.
    Nothing is sorted, so the same diff always yields the same bytes.
    """

    def __init__(self, default_version: Optional[Union[int, str]] = None):
        """Initialize with the version used when a caller passes none."""
        if default_version is None:
            default_version = get_default_api_version()
        self.default_version = format_version(default_version)

    def serialize(
        self, manifest: Manifest, version: Optional[Union[int, str]] = None
    ) -> ManifestDocument:
        """Build an immutable document from a manifest."""
        entries = tuple(
            ManifestEntry(
                type_name=type_name,
                metadata_type=metadata_type_for(type_name),
                members=tuple(members),
            )
            for type_name, members in manifest.items()
        )
        resolved = self.default_version if version is None else format_version(version)
        logger.debug(
            "Serialized manifest", extra={"types": len(entries), "version": resolved}
        )
        return ManifestDocument(entries=entries, version=resolved)

    def to_xml(self, document: ManifestDocument) -> str:
        """Render a document as package.xml text."""
        package = ET.Element("Package", xmlns=PACKAGE_NAMESPACE)
        for entry in document.entries:
            types = ET.SubElement(package, "types")
            for member in entry.members:
                ET.SubElement(types, "members").text = member
            ET.SubElement(types, "name").text = entry.metadata_type
        ET.SubElement(package, "version").text = document.version

        ET.indent(package, space=XML_INDENT)
        body = ET.tostring(package, encoding="unicode")
        return f"{XML_DECLARATION}\n{body}\n"

    def render(self, manifest: Manifest, version: Optional[Union[int, str]] = None) -> str:
        """Serialize and render in one step."""
        return self.to_xml(self.serialize(manifest, version))

    def to_dict(self, document: ManifestDocument) -> Dict[str, Any]:
        """Convert a document to a JSON-ready dictionary."""
        return {
            "types": [
                {
                    "folder": entry.type_name,
                    "name": entry.metadata_type,
                    "members": list(entry.members),
                }
                for entry in document.entries
            ],
            "version": document.version,
        }

    def create_success_envelope(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create success envelope around payload."""
        logger.debug("Creating success envelope")
        return {"ok": True, "data": payload}

    def create_error_envelope(
        self, error_code: str, error_message: str, details: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Create error envelope."""
        logger.debug("Creating error envelope", extra={"code": error_code})
        error_data = {
            "code": error_code,
            "message": error_message,
        }
        if details:
            error_data["details"] = details

        return {"ok": False, "error": error_data}
