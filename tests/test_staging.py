"""Tests for staging and package directory creation."""

from pathlib import Path

import pytest

from sfpackage.errors import BuildDirectoryError, StagingError
from sfpackage.staging import build_package_dir, companion_path, copy_files


def write(root: Path, relative: str, content: str = "x") -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


class TestCopyFiles:
    """Test copy_files."""

    def test_copies_with_companion(self, temp_dir):
        source = temp_dir / "src"
        build = temp_dir / "build"
        write(source, "force-app/main/default/classes/Foo.cls", "class")
        write(source, "force-app/main/default/classes/Foo.cls-meta.xml", "meta")

        copied = copy_files(source, build, ["force-app/main/default/classes/Foo.cls"])

        assert copied == [
            build / "force-app/main/default/classes/Foo.cls",
            build / "force-app/main/default/classes/Foo.cls-meta.xml",
        ]
        assert (build / "force-app/main/default/classes/Foo.cls").read_text() == "class"
        assert (build / "force-app/main/default/classes/Foo.cls-meta.xml").read_text() == "meta"

    def test_meta_file_brings_source(self, temp_dir):
        source = temp_dir / "src"
        build = temp_dir / "build"
        write(source, "force-app/main/default/pages/Home.page")
        write(source, "force-app/main/default/pages/Home.page-meta.xml")

        copied = copy_files(source, build, ["force-app/main/default/pages/Home.page-meta.xml"])

        assert len(copied) == 2
        assert (build / "force-app/main/default/pages/Home.page").exists()

    def test_no_companion(self, temp_dir):
        source = temp_dir / "src"
        build = temp_dir / "build"
        write(source, "force-app/main/default/objects/Account/fields/F__c.field-meta.xml")

        copied = copy_files(
            source,
            build,
            ["force-app/main/default/objects/Account/fields/F__c.field-meta.xml"],
        )

        assert len(copied) == 1

    def test_pair_listed_twice_is_copied_once(self, temp_dir):
        source = temp_dir / "src"
        build = temp_dir / "build"
        write(source, "force-app/classes/Foo.cls")
        write(source, "force-app/classes/Foo.cls-meta.xml")

        copied = copy_files(
            source, build, ["force-app/classes/Foo.cls", "force-app/classes/Foo.cls-meta.xml"]
        )

        assert len(copied) == 2

    def test_missing_file(self, temp_dir):
        with pytest.raises(StagingError) as exc_info:
            copy_files(temp_dir, temp_dir / "build", ["force-app/classes/Gone.cls"])

        assert exc_info.value.code == "STAGING_FAILED"
        assert exc_info.value.details["path"] == "force-app/classes/Gone.cls"

    def test_companion_path(self):
        assert companion_path("a/Foo.cls") == "a/Foo.cls-meta.xml"
        assert companion_path("a/Foo.cls-meta.xml") == "a/Foo.cls"


class TestBuildPackageDir:
    """Test build_package_dir."""

    def test_unpackaged(self, temp_dir):
        build_dir = build_package_dir(temp_dir, "feature", "<Package/>")

        assert build_dir == temp_dir / "feature" / "unpackaged"
        assert (build_dir / "package.xml").read_text() == "<Package/>"
        assert not (build_dir / "destructiveChanges.xml").exists()

    def test_destructive(self, temp_dir):
        build_dir = build_package_dir(
            temp_dir, "feature", "<Destructive/>", destructive=True, empty_package_xml="<Empty/>"
        )

        assert build_dir == temp_dir / "feature" / "destructive"
        assert (build_dir / "destructiveChanges.xml").read_text() == "<Destructive/>"
        assert (build_dir / "package.xml").read_text() == "<Empty/>"

    def test_unwritable_target(self, temp_dir):
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(BuildDirectoryError) as exc_info:
            build_package_dir(blocker, "feature", "<Package/>")

        assert exc_info.value.code == "BUILD_DIR_FAILED"
