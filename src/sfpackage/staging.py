"""Staging of changed files and package directories for sfpackage."""

import logging
import shutil
from pathlib import Path
from typing import Iterable, List, Union

from .errors import BuildDirectoryError, StagingError

logger = logging.getLogger(__name__)

META_FILE_SUFFIX = "-meta.xml"
UNPACKAGED_DIR = "unpackaged"
DESTRUCTIVE_DIR = "destructive"
PACKAGE_XML = "package.xml"
DESTRUCTIVE_XML = "destructiveChanges.xml"

PathLike = Union[str, Path]


def companion_path(path: str) -> str:
    """Return the paired file of a source file.

    ``Foo.cls`` pairs with ``Foo.cls-meta.xml`` and vice versa.
    """
    if path.endswith(META_FILE_SUFFIX):
        return path[: -len(META_FILE_SUFFIX)]
    return path + META_FILE_SUFFIX


def _copy(source: Path, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, destination)


def copy_files(source_dir: PathLike, build_dir: PathLike, paths: Iterable[str]) -> List[Path]:
    """Copy changed files into ``build_dir`` keeping their relative paths.

    The paired ``-meta.xml`` file (or the file a ``-meta.xml`` describes)
    is copied along when it exists, since a deploy needs both halves.

    Returns:
        Destination paths in the order they were written, without duplicates.

    Raises:
        StagingError: a changed file is missing or cannot be copied.
    """
    source_root = Path(source_dir)
    build_root = Path(build_dir)
    copied: List[Path] = []
    seen = set()

    for path in paths:
        if not path:
            continue
        for relative in (path, companion_path(path)):
            if relative in seen:
                continue
            source = source_root / relative
            if relative != path and not source.is_file():
                continue
            destination = build_root / relative
            try:
                _copy(source, destination)
            except OSError as e:
                raise StagingError(relative, str(e)) from e
            seen.add(relative)
            copied.append(destination)

    logger.info(
        "Staged files",
        extra={"build_dir": str(build_root), "files": len(copied)},
    )
    return copied


def build_package_dir(
    target: PathLike,
    branch: str,
    xml_text: str,
    destructive: bool = False,
    empty_package_xml: str = "",
) -> Path:
    """Create ``<target>/<branch>/unpackaged`` or ``.../destructive`` with its manifest.

    A destructive directory also gets ``empty_package_xml`` written as its
    ``package.xml``.

    Raises:
        BuildDirectoryError: the directory or a manifest cannot be written.
    """
    build_dir = Path(target) / branch / (DESTRUCTIVE_DIR if destructive else UNPACKAGED_DIR)
    manifest_name = DESTRUCTIVE_XML if destructive else PACKAGE_XML

    try:
        build_dir.mkdir(parents=True, exist_ok=True)
        (build_dir / manifest_name).write_text(xml_text, encoding="utf-8")
        if destructive:
            (build_dir / PACKAGE_XML).write_text(empty_package_xml, encoding="utf-8")
    except OSError as e:
        raise BuildDirectoryError(str(build_dir), str(e)) from e

    logger.info(
        "Wrote %s", manifest_name, extra={"build_dir": str(build_dir)}
    )
    return build_dir
