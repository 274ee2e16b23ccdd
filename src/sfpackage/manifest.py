"""Manifest model and path decomposition for sfpackage."""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Tuple, Union

from .errors import FatalInputError

# Layout-only folders of the SFDX convention (force-app/main/default/...)
NOISE_SEGMENTS = frozenset({"main", "default"})

# Object sub-folders whose files are members of their own metadata type,
# e.g. objects/Account/fields/MyField__c.field-meta.xml
DEFAULT_NESTED_PROPERTIES: FrozenSet[str] = frozenset(
    {
        "fields",
        "validationRules",
        "recordTypes",
        "listViews",
        "compactLayouts",
        "webLinks",
        "fieldSets",
        "businessProcesses",
    }
)

META_SUFFIX = "-meta"


@dataclass(frozen=True)
class MemberKey:
    """A member of a metadata type, as listed in a manifest."""

    type_name: str
    member_id: str


def strip_extension(file_name: str) -> str:
    """Drop everything from the first dot on (``Foo.cls-meta.xml`` -> ``Foo``)."""
    return file_name.split(".", 1)[0]


@dataclass(frozen=True)
class DefaultShape:
    """``root/type/file``: one file per member."""

    type_name: str
    file_name: str

    def member_key(self) -> MemberKey:
        member = strip_extension(self.file_name)
        if member.endswith(META_SUFFIX):
            member = member[: -len(META_SUFFIX)]
        return MemberKey(self.type_name, member)


@dataclass(frozen=True)
class FolderShape:
    """``root/type/folder/file``: members grouped in a folder (emails, reports)."""

    type_name: str
    folder: str
    file_name: str

    def member_key(self) -> MemberKey:
        return MemberKey(self.type_name, f"{self.folder}/{strip_extension(self.file_name)}")


@dataclass(frozen=True)
class NestedPropertyShape:
    """``root/type/parent/property/file``: sub-metadata of a parent (object fields)."""

    parent: str
    property_name: str
    file_name: str

    def member_key(self) -> MemberKey:
        return MemberKey(
            self.property_name, f"{self.parent}.{strip_extension(self.file_name)}"
        )


PathShape = Union[DefaultShape, FolderShape, NestedPropertyShape]


def path_components(path: str) -> List[str]:
    """Split a path on ``/`` and drop the noise segments."""
    return [segment for segment in path.split("/") if segment not in NOISE_SEGMENTS]


def decompose_path(
    path: str, nested_properties: Iterable[str] = DEFAULT_NESTED_PROPERTIES
) -> PathShape:
    """Classify a source path into one of the known shapes.

    Raises:
        FatalInputError: fewer than three segments survive noise removal.
    """
    parts = path_components(path)
    if len(parts) < 3:
        raise FatalInputError(path, parts)

    if len(parts) == 4:
        return FolderShape(type_name=parts[1], folder=parts[2], file_name=parts[3])
    if len(parts) == 5 and parts[3] in nested_properties:
        return NestedPropertyShape(
            parent=parts[2], property_name=parts[3], file_name=parts[4]
        )
    return DefaultShape(type_name=parts[1], file_name=parts[2])


class Manifest:
    """Ordered mapping of metadata type name to an ordered set of members.

    Types keep the order they were first touched in, members the order they
    were first added in. Adding a member twice is a no-op.
    """

    def __init__(self) -> None:
        self._types: Dict[str, Dict[str, None]] = {}

    def add(self, key: MemberKey) -> bool:
        """Insert a member, returning False if it was already present."""
        members = self._types.setdefault(key.type_name, {})
        if key.member_id in members:
            return False
        members[key.member_id] = None
        return True

    def members(self, type_name: str) -> List[str]:
        return list(self._types.get(type_name, ()))

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        for type_name, members in self._types.items():
            yield type_name, list(members)

    def keys(self) -> Iterator[MemberKey]:
        for type_name, members in self._types.items():
            for member_id in members:
                yield MemberKey(type_name, member_id)

    def to_dict(self) -> Dict[str, List[str]]:
        return {type_name: members for type_name, members in self.items()}

    def __contains__(self, key: object) -> bool:
        if isinstance(key, MemberKey):
            return key.member_id in self._types.get(key.type_name, ())
        return key in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"Manifest({self.to_dict()!r})"
