"""GObject enumeration bindings generator for Rust.

Reads GObject-Introspection (.gir) metadata and a Gir.toml project file and
produces `enums.rs` (one Rust enum per selected enumeration, with ToGlib,
FromGlib and optional Display / ErrorDomain / StaticType implementations)
plus the `mod.rs` re-export lines for it.

Usage:
    enumgen --config Gir.toml
    enumgen --config Gir.toml --list-enums --filter error
"""

import os
import argparse
import re
import shutil
import tempfile
import tomllib
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

TOOL_NAME = "enumgen"
TOOL_VERSION = "0.1.0"
DEFAULT_CONFIG_PATH = Path("Gir.toml")
DEFAULT_GIRS_DIR = "gir-files"
DEFAULT_TARGET_PATH = "."
AUTO_SUBDIR = Path("src") / "auto"


# ===--- S1 CLI config contracts ---=== #


class LibraryVersion(NamedTuple):
    major: int
    minor: int
    patch: int = 0

    def __str__(self) -> str:
        if self.patch:
            return f"{self.major}.{self.minor}.{self.patch}"
        return f"{self.major}.{self.minor}"

    def to_feature(self) -> str:
        if self.patch:
            return f"v{self.major}_{self.minor}_{self.patch}"
        return f"v{self.major}_{self.minor}"

    def to_cfg(self) -> str:
        return f'feature = "{self.to_feature()}"'


@dataclass(frozen=True)
class GenerateConfig:
    config_path: Path
    girs_dir: Path | None
    output_dir: Path | None
    make_backup: bool


@dataclass(frozen=True)
class DiscoveryConfig:
    config_path: Path
    girs_dir: Path | None
    filter_text: str | None


VALID_ERROR_CODES = {
    "INVALID_VERSION",
    "INVALID_CONFIG",
    "INVALID_STATUS",
    "INVALID_GIR",
    "GIR_NOT_FOUND",
    "PATH_NOT_FOUND",
    "FILTER_WITHOUT_LIST",
    "CONFLICT_GENERATE_DISCOVERY",
    "DUPLICATE_VARIANT_NAME",
}
_VERSION_RE = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?$")


class ConfigError(Exception):
    def __init__(self, code: str, message: str, suggestion: str | None = None):
        if code not in VALID_ERROR_CODES:
            raise ValueError(f"Unknown config error code: {code}")
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion


def parse_version(raw: str) -> LibraryVersion:
    match = _VERSION_RE.match(raw.strip()) if isinstance(raw, str) else None
    if match is None:
        raise ConfigError(
            "INVALID_VERSION",
            f"Invalid library version: {raw!r}",
            "Use MAJOR.MINOR or MAJOR.MINOR.PATCH, for example 2.44 or 3.22.30.",
        )
    major, minor, patch = match.groups()
    return LibraryVersion(int(major), int(minor), int(patch or 0))


def validate_path_exists(
    path: Path | None, flag: str, suggestion: str | None = None
) -> Path:
    if path is None:
        raise ConfigError(
            "PATH_NOT_FOUND",
            f"{flag} is required: no path provided.",
            suggestion or f"Pass the path explicitly: {flag} /path/to/resource",
        )
    if path.exists():
        return path
    raise ConfigError(
        "PATH_NOT_FOUND",
        f"Path for {flag} does not exist: {path}",
        suggestion or "Provide an existing path for this flag.",
    )


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate Rust enum bindings from GObject-Introspection data"
    )

    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--girs-dir", type=Path, default=None)
    parser.add_argument("--output-dir", type=Path, default=None)
    parser.add_argument("--make-backup", action="store_true", default=False)

    parser.add_argument("--list-enums", action="store_true", default=False)
    parser.add_argument("--filter", type=str, default=None)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_argument_parser()
    return parser.parse_args(argv)


def validate_config(args: argparse.Namespace) -> GenerateConfig | DiscoveryConfig:
    if args.filter is not None and not args.list_enums:
        raise ConfigError(
            "FILTER_WITHOUT_LIST",
            "--filter requires --list-enums.",
            "Add --list-enums or remove --filter.",
        )

    if args.list_enums and (args.make_backup or args.output_dir is not None):
        raise ConfigError(
            "CONFLICT_GENERATE_DISCOVERY",
            "Generate flags cannot be combined with --list-enums.",
            "Drop --output-dir/--make-backup, or drop --list-enums.",
        )

    config_path = validate_path_exists(
        args.config,
        "--config",
        "Create a Gir.toml with an [options] table, "
        "or pass a custom path: --config /your/path/to/Gir.toml",
    )
    girs_dir = (
        validate_path_exists(args.girs_dir, "--girs-dir")
        if args.girs_dir is not None
        else None
    )

    if args.list_enums:
        return DiscoveryConfig(
            config_path=config_path,
            girs_dir=girs_dir,
            filter_text=args.filter,
        )

    return GenerateConfig(
        config_path=config_path,
        girs_dir=girs_dir,
        output_dir=args.output_dir,
        make_backup=bool(args.make_backup),
    )


def build_config(argv: list[str] | None = None) -> GenerateConfig | DiscoveryConfig:
    return validate_config(parse_args(argv))


# ===--- S2 Project configuration ---=== #

STATUS_GENERATE = "generate"
STATUS_MANUAL = "manual"
STATUS_IGNORE = "ignore"
VALID_STATUSES: tuple[str, ...] = (STATUS_GENERATE, STATUS_MANUAL, STATUS_IGNORE)


@dataclass(frozen=True)
class ProjectOptions:
    """The [options] table of a project file.

    Attributes:
        library: Main namespace being bound, e.g. "Gio".
        version: Namespace version, e.g. "2.0". Selects `{library}-{version}.gir`.
        min_cfg_version: Lowest library version the bindings always support.
            Items newer than this are gated behind a cargo feature.
        deprecate_by_min_version: Emit a plain `#[deprecated]` for items
            deprecated at or before min_cfg_version instead of a feature-gated one.
        generate_safety_asserts: Prefix native calls with
            `skip_assert_initialized!();`.
        make_backup: Keep the previous output as `<name>.bak`.
        girs_dir: Directory holding the .gir files.
        target_path: Crate root; output goes to `<target_path>/src/auto`.
    """

    library: str
    version: str
    min_cfg_version: LibraryVersion = LibraryVersion(0, 0)
    deprecate_by_min_version: bool = False
    generate_safety_asserts: bool = False
    make_backup: bool = False
    girs_dir: Path = Path(DEFAULT_GIRS_DIR)
    target_path: Path = Path(DEFAULT_TARGET_PATH)

    @property
    def library_label(self) -> str:
        return f"{self.library}-{self.version}"


@dataclass(frozen=True)
class MemberRule:
    """One `[[object.member]]` rule. Matches by exact name or by full-match pattern."""

    name: str | None = None
    pattern: re.Pattern | None = None
    alias: bool = False
    ignore: bool = False
    version: LibraryVersion | None = None
    deprecated_version: LibraryVersion | None = None

    def matches(self, member_name: str) -> bool:
        if self.name is not None:
            return self.name == member_name
        if self.pattern is not None:
            return self.pattern.fullmatch(member_name) is not None
        return False


@dataclass(frozen=True)
class MemberOverride:
    is_alias: bool = False
    is_ignored: bool = False
    version: LibraryVersion | None = None
    deprecated_version: LibraryVersion | None = None


@dataclass(frozen=True)
class ObjectConfig:
    name: str
    status: str = STATUS_IGNORE
    generate_display_trait: bool = False
    must_use: bool = False
    derives: tuple[str, ...] | None = None
    members: tuple[MemberRule, ...] = ()

    @property
    def need_generate(self) -> bool:
        return self.status == STATUS_GENERATE


@dataclass(frozen=True)
class ProjectConfig:
    options: ProjectOptions
    objects: tuple[ObjectConfig, ...]

    def find_object(self, name: str) -> ObjectConfig | None:
        for obj in self.objects:
            if obj.name == name:
                return obj
        return None


def _invalid(message: str, suggestion: str | None = None) -> ConfigError:
    return ConfigError("INVALID_CONFIG", message, suggestion)


def _bool_value(table: dict, key: str, default: bool = False) -> bool:
    value = table.get(key, default)
    if not isinstance(value, bool):
        raise _invalid(f"'{key}' must be a boolean, got {value!r}")
    return value


def _str_value(table: dict, key: str, default: str | None = None) -> str | None:
    value = table.get(key, default)
    if value is not None and not isinstance(value, str):
        raise _invalid(f"'{key}' must be a string, got {value!r}")
    return value


def _str_list(table: dict, key: str) -> list[str]:
    value = table.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise _invalid(f"'{key}' must be a list of strings")
    return value


def _optional_version(raw: str | None) -> LibraryVersion | None:
    if raw is None:
        return None
    return parse_version(raw)


def parse_options(table: dict, base_dir: Path) -> ProjectOptions:
    library = _str_value(table, "library")
    version = _str_value(table, "version")
    if not library or not version:
        raise _invalid(
            "[options] must define 'library' and 'version'.",
            'Add for example: library = "Gio" and version = "2.0".',
        )
    min_cfg = _str_value(table, "min_cfg_version")
    return ProjectOptions(
        library=library,
        version=version,
        min_cfg_version=(
            parse_version(min_cfg) if min_cfg is not None else LibraryVersion(0, 0)
        ),
        deprecate_by_min_version=_bool_value(table, "deprecate_by_min_version"),
        generate_safety_asserts=_bool_value(table, "generate_safety_asserts"),
        make_backup=_bool_value(table, "make_backup"),
        girs_dir=base_dir / _str_value(table, "girs_dir", DEFAULT_GIRS_DIR),
        target_path=base_dir / _str_value(table, "target_path", DEFAULT_TARGET_PATH),
    )


def parse_member_rule(table: dict, object_name: str) -> MemberRule:
    name = _str_value(table, "name")
    raw_pattern = _str_value(table, "pattern")
    if name is None and raw_pattern is None:
        raise _invalid(
            f"Member rule in '{object_name}' needs 'name' or 'pattern'.",
        )
    if name is not None and raw_pattern is not None:
        raise _invalid(
            f"Member rule in '{object_name}' sets both 'name' and 'pattern'.",
            "Keep one of them; use one rule per name or pattern.",
        )
    pattern = None
    if name is None:
        try:
            pattern = re.compile(raw_pattern)
        except re.error as err:
            raise _invalid(
                f"Invalid member pattern {raw_pattern!r} in '{object_name}': {err}"
            ) from err
    return MemberRule(
        name=name,
        pattern=pattern,
        alias=_bool_value(table, "alias"),
        ignore=_bool_value(table, "ignore"),
        version=_optional_version(_str_value(table, "version")),
        deprecated_version=_optional_version(_str_value(table, "deprecated_version")),
    )


def parse_object_config(table: dict) -> ObjectConfig:
    name = _str_value(table, "name")
    if not name:
        raise _invalid("Every [[object]] needs a 'name'.")
    status = _str_value(table, "status", STATUS_IGNORE)
    if status not in VALID_STATUSES:
        raise ConfigError(
            "INVALID_STATUS",
            f"Unknown status {status!r} for object '{name}'.",
            "Use one of: generate, manual, ignore.",
        )
    derives = None
    if "derives" in table:
        derives = tuple(_str_list(table, "derives"))
    member_tables = table.get("member", [])
    if not isinstance(member_tables, list):
        raise _invalid(f"'member' of '{name}' must be an array of tables")
    return ObjectConfig(
        name=name,
        status=status,
        generate_display_trait=_bool_value(table, "generate_display_trait"),
        must_use=_bool_value(table, "must_use"),
        derives=derives,
        members=tuple(parse_member_rule(m, name) for m in member_tables),
    )


def parse_project_config(data: dict, base_dir: Path) -> ProjectConfig:
    options_table = data.get("options", {})
    if not isinstance(options_table, dict):
        raise _invalid("[options] must be a table")
    options = parse_options(options_table, base_dir)

    # Insertion order is configuration order; a later [[object]] keeps the
    # slot of an earlier shorthand entry with the same name.
    objects: dict[str, ObjectConfig] = {}
    for status in VALID_STATUSES:
        for name in _str_list(options_table, status):
            objects[name] = ObjectConfig(name=name, status=status)

    object_tables = data.get("object", [])
    if not isinstance(object_tables, list):
        raise _invalid("'object' must be an array of tables ([[object]])")
    for table in object_tables:
        obj = parse_object_config(table)
        objects[obj.name] = obj

    return ProjectConfig(options=options, objects=tuple(objects.values()))


def load_project_config(path: Path) -> ProjectConfig:
    path = Path(path)
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as err:
        raise _invalid(
            f"Malformed TOML in {path}: {err}",
            "Check the file with a TOML validator.",
        ) from err
    return parse_project_config(data, path.parent)


def resolve_member_override(
    rules: tuple[MemberRule, ...], member_name: str
) -> MemberOverride | None:
    """Fold every rule matching member_name into one MemberOverride.

    alias/ignore are true when any matching rule sets them. version and
    deprecated_version come from the first matching rule, in configuration
    order, that supplies them. Returns None when no rule matches.
    """
    matched = [rule for rule in rules if rule.matches(member_name)]
    if not matched:
        return None
    return MemberOverride(
        is_alias=any(rule.alias for rule in matched),
        is_ignored=any(rule.ignore for rule in matched),
        version=next(
            (rule.version for rule in matched if rule.version is not None), None
        ),
        deprecated_version=next(
            (
                rule.deprecated_version
                for rule in matched
                if rule.deprecated_version is not None
            ),
            None,
        ),
    )


def build_member_overrides(
    config: ObjectConfig, members: tuple["NativeMember", ...]
) -> dict[str, MemberOverride]:
    overrides: dict[str, MemberOverride] = {}
    for member in members:
        override = resolve_member_override(config.members, member.name)
        if override is not None:
            overrides[member.name] = override
    return overrides


# ===--- S3 GIR loading ---=== #

CORE_NS = "http://www.gtk.org/introspection/core/1.0"
C_NS = "http://www.gtk.org/introspection/c/1.0"
GLIB_NS = "http://www.gtk.org/introspection/glib/1.0"

TYPE_KINDS = {
    "alias",
    "bitfield",
    "callback",
    "class",
    "enumeration",
    "interface",
    "record",
    "union",
}


def _core(tag: str) -> str:
    return f"{{{CORE_NS}}}{tag}"


def _c(attr: str) -> str:
    return f"{{{C_NS}}}{attr}"


def _glib(attr: str) -> str:
    return f"{{{GLIB_NS}}}{attr}"


def _local_name(tag: str) -> str:
    return tag.rpartition("}")[2]


def _parse_c_int(s: str) -> int:
    s = s.strip()
    if s.startswith("-"):
        return -_parse_c_int(s[1:])
    if s.startswith("0x") or s.startswith("0X"):
        return int(s, 16)
    return int(s)


@dataclass(frozen=True)
class NativeMember:
    name: str
    c_identifier: str
    value: str
    index: int

    @property
    def int_value(self) -> int:
        return _parse_c_int(self.value)


@dataclass(frozen=True)
class EnumerationMetadata:
    name: str
    c_type: str
    members: tuple[NativeMember, ...]
    version: LibraryVersion | None = None
    deprecated_version: LibraryVersion | None = None
    error_quark_source: str | None = None
    glib_get_type: str | None = None


@dataclass(frozen=True)
class TypeEntry:
    namespace: str
    name: str
    kind: str
    enumeration: EnumerationMetadata | None = None

    @property
    def full_name(self) -> str:
        return f"{self.namespace}.{self.name}"


@dataclass(frozen=True)
class GirRepository:
    namespace: str
    version: str
    includes: tuple[tuple[str, str], ...]
    types: tuple[TypeEntry, ...]


@dataclass(frozen=True)
class Library:
    main_namespace: str
    main_version: str
    types: dict[str, TypeEntry]

    def find(self, full_name: str) -> TypeEntry | None:
        return self.types.get(full_name)

    def main_enumerations(self) -> list[EnumerationMetadata]:
        return [
            entry.enumeration
            for entry in self.types.values()
            if entry.namespace == self.main_namespace
            and entry.kind == "enumeration"
            and entry.enumeration is not None
        ]


def get_error_quark_name(element: ET.Element) -> str | None:
    for func in element.findall(_core("function")):
        if func.get("name") == "quark" and func.get(_c("identifier")):
            return func.get(_c("identifier"))
    return element.get(_glib("error-domain"))


def parse_native_member(
    member: ET.Element, index: int, enum_name: str
) -> NativeMember:
    name = member.get("name", "")
    c_identifier = member.get(_c("identifier"))
    value = member.get("value")
    if not c_identifier or value is None:
        raise ConfigError(
            "INVALID_GIR",
            f"Member {name!r} of enumeration {enum_name} lacks "
            f"{'a value' if value is None else 'a c:identifier'}.",
            "Regenerate the .gir file with g-ir-scanner.",
        )
    return NativeMember(name=name, c_identifier=c_identifier, value=value, index=index)


def parse_enumeration(element: ET.Element) -> EnumerationMetadata:
    enum_name = element.get("name", "")
    members = tuple(
        parse_native_member(member, index, enum_name)
        for index, member in enumerate(element.findall(_core("member")))
    )
    return EnumerationMetadata(
        name=enum_name,
        c_type=element.get(_c("type"), ""),
        members=members,
        version=_optional_version(element.get("version")),
        deprecated_version=_optional_version(element.get("deprecated-version")),
        error_quark_source=get_error_quark_name(element),
        glib_get_type=element.get(_glib("get-type")),
    )


def parse_gir(root: ET.Element) -> GirRepository:
    namespace = root.find(_core("namespace"))
    if namespace is None or not namespace.get("name"):
        raise ConfigError(
            "INVALID_GIR",
            "GIR repository has no named <namespace> element.",
            "Regenerate the .gir file with g-ir-scanner.",
        )
    ns_name = namespace.get("name")

    includes = tuple(
        (inc.get("name", ""), inc.get("version", ""))
        for inc in root.findall(_core("include"))
    )

    types: list[TypeEntry] = []
    for child in namespace:
        kind = _local_name(child.tag)
        name = child.get("name")
        if kind not in TYPE_KINDS or not name:
            continue
        enumeration = parse_enumeration(child) if kind == "enumeration" else None
        types.append(TypeEntry(ns_name, name, kind, enumeration))

    return GirRepository(
        namespace=ns_name,
        version=namespace.get("version", ""),
        includes=includes,
        types=tuple(types),
    )


def gir_path(girs_dir: Path, namespace: str, version: str) -> Path:
    return Path(girs_dir) / f"{namespace}-{version}.gir"


def load_library(girs_dir: Path, namespace: str, version: str) -> Library:
    """Load the main repository and, transitively, every included one.

    Each repository is parsed once. Types keep the namespace of the
    repository that declares them; only the first declaration of a full
    name is kept.

    Raises:
        ConfigError: GIR_NOT_FOUND when a repository file is missing,
            INVALID_GIR when a file has no namespace.
        ET.ParseError: Malformed XML.
    """
    types: dict[str, TypeEntry] = {}
    pending: list[tuple[str, str]] = [(namespace, version)]
    loaded: set[tuple[str, str]] = set()

    while pending:
        current = pending.pop(0)
        if current in loaded:
            continue
        loaded.add(current)
        path = gir_path(girs_dir, *current)
        if not path.exists():
            raise ConfigError(
                "GIR_NOT_FOUND",
                f"GIR file not found: {path}",
                "Check girs_dir in [options] or pass --girs-dir.",
            )
        repo = parse_gir(ET.parse(path).getroot())
        for entry in repo.types:
            types.setdefault(entry.full_name, entry)
        pending.extend(repo.includes)

    return Library(main_namespace=namespace, main_version=version, types=types)


# ===--- S4 Selector ---=== #


@dataclass(frozen=True)
class EmissionFlags:
    has_display: bool = False
    has_error_domain: bool = False
    has_dynamic_type: bool = False

    def union(self, other: "EmissionFlags") -> "EmissionFlags":
        return EmissionFlags(
            has_display=self.has_display or other.has_display,
            has_error_domain=self.has_error_domain or other.has_error_domain,
            has_dynamic_type=self.has_dynamic_type or other.has_dynamic_type,
        )


@dataclass(frozen=True)
class SelectedEnum:
    """One enumeration chosen for emission, with everything the emitter needs.

    Attributes:
        enumeration: Metadata loaded from the main GIR repository.
        config: The object's project configuration entry.
        overrides: Member name -> folded MemberOverride, for members that
            matched at least one rule.
        flags: Per-enum emission flags, computed once.
    """

    enumeration: EnumerationMetadata
    config: ObjectConfig
    overrides: dict[str, MemberOverride]
    flags: EmissionFlags


@dataclass(frozen=True)
class EnumSelection:
    """Ordered enumerations to emit plus the union of their flags."""

    enums: tuple[SelectedEnum, ...]
    flags: EmissionFlags


def emission_flags_for(
    enumeration: EnumerationMetadata, config: ObjectConfig
) -> EmissionFlags:
    return EmissionFlags(
        has_display=config.generate_display_trait,
        has_error_domain=enumeration.error_quark_source is not None,
        has_dynamic_type=enumeration.glib_get_type is not None,
    )


def select_enumerations(
    library: Library, project: ProjectConfig
) -> EnumSelection | None:
    """Pick the configured enumerations of the main namespace marked for generation.

    Iteration follows project.objects (configuration order), so emitted code
    order is stable and matches the project file.

    Args:
        library: Loaded GIR library.
        project: Parsed project configuration.

    Returns:
        EnumSelection with at least one enum, or None when nothing qualifies.
        None means: write no file and add no mod.rs lines.
    """
    selected: list[SelectedEnum] = []
    flags = EmissionFlags()
    for obj in project.objects:
        if not obj.need_generate:
            continue
        entry = library.find(obj.name)
        if (
            entry is None
            or entry.kind != "enumeration"
            or entry.enumeration is None
            or entry.namespace != library.main_namespace
        ):
            continue
        enum_flags = emission_flags_for(entry.enumeration, obj)
        selected.append(
            SelectedEnum(
                enumeration=entry.enumeration,
                config=obj,
                overrides=build_member_overrides(obj, entry.enumeration.members),
                flags=enum_flags,
            )
        )
        flags = flags.union(enum_flags)

    if not selected:
        return None
    return EnumSelection(enums=tuple(selected), flags=flags)


def compute_imports(flags: EmissionFlags) -> tuple[str, ...]:
    imports = {"sys", "glib::translate::*"}
    if flags.has_error_domain:
        imports.update({"glib::Quark", "glib::error::ErrorDomain"})
    if flags.has_dynamic_type:
        imports.update(
            {
                "glib::Type",
                "glib::StaticType",
                "glib::value::Value",
                "glib::value::SetValue",
                "glib::value::FromValue",
                "glib::value::FromValueOptional",
                "gobject_sys",
            }
        )
    if flags.has_display:
        imports.add("std::fmt")
    return tuple(sorted(imports))


# ===--- S5 Member resolution ---=== #


@dataclass(frozen=True)
class CanonicalVariant:
    name: str
    c_identifier: str
    value: str
    version: LibraryVersion | None = None
    deprecated_version: LibraryVersion | None = None


@dataclass(frozen=True)
class NameConflict:
    """Two or more canonical variants that map to the same Rust identifier."""

    name: str
    c_identifiers: tuple[str, ...]


def enum_member_name(name: str) -> str:
    camel = "".join(
        word[:1].upper() + word[1:] for word in re.split(r"[_\-]", name) if word
    )
    if name[:1].isalpha():
        return camel
    return f"_{camel}"


def resolve_members(
    members: tuple[NativeMember, ...],
    overrides: dict[str, MemberOverride],
) -> list[CanonicalVariant]:
    """Reduce raw members to the canonical, deduplicated variant list.

    Members are visited in declaration order. A member whose override marks
    it alias or ignored is skipped and its value is not recorded. A member
    whose native value was already recorded is dropped silently. Every
    other member records its value and becomes a CanonicalVariant carrying
    the literal value text unchanged.

    Args:
        members: Native members in declaration order.
        overrides: Member name -> folded override (exact name lookup).

    Returns:
        Canonical variants. Native values are unique across the list and
        order follows the first occurrence of each value.
    """
    seen: set[int] = set()
    variants: list[CanonicalVariant] = []
    for member in members:
        override = overrides.get(member.name)
        if override is not None and (override.is_alias or override.is_ignored):
            continue
        value = member.int_value
        if value in seen:
            continue
        seen.add(value)
        variants.append(
            CanonicalVariant(
                name=enum_member_name(member.name),
                c_identifier=member.c_identifier,
                value=member.value,
                version=override.version if override else None,
                deprecated_version=override.deprecated_version if override else None,
            )
        )
    return variants


def find_variant_name_conflicts(
    variants: list[CanonicalVariant],
) -> list[NameConflict]:
    by_name: dict[str, list[str]] = {}
    for variant in variants:
        by_name.setdefault(variant.name, []).append(variant.c_identifier)
    return [
        NameConflict(name=name, c_identifiers=tuple(idents))
        for name, idents in by_name.items()
        if len(idents) > 1
    ]


# ===--- S6 Guard primitives ---=== #

INDENT = "    "


def version_condition_string(
    version: LibraryVersion | None, options: ProjectOptions, indent: int = 0
) -> str | None:
    if version is None or version <= options.min_cfg_version:
        return None
    return f'{INDENT * indent}#[cfg(any({version.to_cfg()}, feature = "dox"))]'


def version_condition(
    version: LibraryVersion | None, options: ProjectOptions, indent: int = 0
) -> list[str]:
    line = version_condition_string(version, options, indent)
    return [line] if line is not None else []


def cfg_deprecated(
    deprecated_version: LibraryVersion | None,
    options: ProjectOptions,
    indent: int = 0,
) -> list[str]:
    if deprecated_version is None:
        return []
    if (
        options.deprecate_by_min_version
        and deprecated_version <= options.min_cfg_version
    ):
        return [f"{INDENT * indent}#[deprecated]"]
    return [f"{INDENT * indent}#[cfg_attr({deprecated_version.to_cfg()}, deprecated)]"]


def _type_guard(enumeration: EnumerationMetadata, options: ProjectOptions) -> list[str]:
    return cfg_deprecated(enumeration.deprecated_version, options) + version_condition(
        enumeration.version, options
    )


def _member_guard(
    variant: CanonicalVariant, options: ProjectOptions, indent: int
) -> list[str]:
    return cfg_deprecated(
        variant.deprecated_version, options, indent
    ) + version_condition(variant.version, options, indent)


# ===--- S6 Protocol emitter ---=== #

DEFAULT_DERIVES = "#[derive(Debug, Eq, PartialEq, Ord, PartialOrd, Hash)]"
SENTINEL_NAME = "__Unknown"
FAILED_VARIANT_NAME = "Failed"
_ARM = INDENT * 3


@dataclass(frozen=True)
class EnumStats:
    name: str
    member_count: int
    variant_count: int
    flags: EmissionFlags


@dataclass(frozen=True)
class EnumsModule:
    """Everything the writer needs for one enums.rs and its mod.rs lines.

    Attributes:
        imports: Sorted `use` paths required by the union of emission flags.
        content_lines: Rust source lines of all enums, without header or
            imports. Enums are separated by one blank line.
        mod_lines: Lines for the parent mod.rs: `mod enums;` then one
            `pub use` per enum, each preceded by the enum's version guard.
        stats: Per-enum member/variant counts, in emission order.
    """

    imports: tuple[str, ...]
    content_lines: tuple[str, ...]
    mod_lines: tuple[str, ...]
    stats: tuple[EnumStats, ...]


def _safety_assert(options: ProjectOptions) -> list[str]:
    if options.generate_safety_asserts:
        return [f"{INDENT * 2}skip_assert_initialized!();"]
    return []


def emit_type_definition(
    enumeration: EnumerationMetadata,
    variants: list[CanonicalVariant],
    config: ObjectConfig,
    options: ProjectOptions,
) -> list[str]:
    """Emit the `pub enum` with one arm per variant plus the `__Unknown` sentinel.

    Each arm carries its own member guard, independent of the type guard.
    The sentinel is always present so conversions stay total when the native
    library grows new values.
    """
    lines = _type_guard(enumeration, options)
    if config.must_use:
        lines.append("#[must_use]")
    if config.derives is None:
        lines.append(DEFAULT_DERIVES)
    elif config.derives:
        lines.append(f"#[derive({', '.join(config.derives)})]")
    lines.append("#[derive(Clone, Copy)]")
    lines.append(f"pub enum {enumeration.name} {{")
    for variant in variants:
        lines.extend(_member_guard(variant, options, 1))
        lines.append(f"{INDENT}{variant.name},")
    lines.append(f"{INDENT}#[doc(hidden)]")
    lines.append(f"{INDENT}{SENTINEL_NAME}(i32),")
    lines.append("}")
    return lines


def emit_display(
    enumeration: EnumerationMetadata,
    variants: list[CanonicalVariant],
    options: ProjectOptions,
) -> list[str]:
    name = enumeration.name
    lines = _type_guard(enumeration, options)
    lines.extend(
        [
            f"impl fmt::Display for {name} {{",
            f"{INDENT}fn fmt(&self, f: &mut fmt::Formatter) -> fmt::Result {{",
            f'{INDENT * 2}write!(f, "{name}::{{}}", match *self {{',
        ]
    )
    for variant in variants:
        lines.extend(_member_guard(variant, options, 3))
        lines.append(f'{_ARM}{name}::{variant.name} => "{variant.name}",')
    lines.extend(
        [
            f'{_ARM}_ => "Unknown",',
            f"{INDENT * 2}}})",
            f"{INDENT}}}",
            "}",
        ]
    )
    return lines


def emit_to_native(
    enumeration: EnumerationMetadata,
    variants: list[CanonicalVariant],
    options: ProjectOptions,
) -> list[str]:
    name = enumeration.name
    ffi_name = f"sys::{enumeration.c_type}"
    lines = _type_guard(enumeration, options)
    lines.extend(
        [
            "#[doc(hidden)]",
            f"impl ToGlib for {name} {{",
            f"{INDENT}type GlibType = {ffi_name};",
            "",
            f"{INDENT}fn to_glib(&self) -> {ffi_name} {{",
            f"{INDENT * 2}match *self {{",
        ]
    )
    for variant in variants:
        lines.extend(_member_guard(variant, options, 3))
        lines.append(f"{_ARM}{name}::{variant.name} => sys::{variant.c_identifier},")
    lines.extend(
        [
            f"{_ARM}{name}::{SENTINEL_NAME}(value) => value,",
            f"{INDENT * 2}}}",
            f"{INDENT}}}",
            "}",
        ]
    )
    return lines


def emit_from_native(
    enumeration: EnumerationMetadata,
    variants: list[CanonicalVariant],
    options: ProjectOptions,
) -> list[str]:
    name = enumeration.name
    ffi_name = f"sys::{enumeration.c_type}"
    lines = _type_guard(enumeration, options)
    lines.extend(
        [
            "#[doc(hidden)]",
            f"impl FromGlib<{ffi_name}> for {name} {{",
            f"{INDENT}fn from_glib(value: {ffi_name}) -> Self {{",
        ]
    )
    lines.extend(_safety_assert(options))
    lines.append(f"{INDENT * 2}match value {{")
    for variant in variants:
        lines.extend(_member_guard(variant, options, 3))
        lines.append(f"{_ARM}{variant.value} => {name}::{variant.name},")
    lines.extend(
        [
            f"{_ARM}value => {name}::{SENTINEL_NAME}(value),",
            f"{INDENT * 2}}}",
            f"{INDENT}}}",
            "}",
        ]
    )
    return lines


def emit_error_domain(
    enumeration: EnumerationMetadata,
    variants: list[CanonicalVariant],
    options: ProjectOptions,
) -> list[str]:
    """Emit `impl ErrorDomain`.

    `from(code)` never yields None: unmatched codes map to the variant named
    exactly "Failed" when one exists, otherwise to `__Unknown(code)`.
    """
    name = enumeration.name
    get_quark = (enumeration.error_quark_source or "").replace("-", "_")
    has_failed_member = any(v.name == FAILED_VARIANT_NAME for v in variants)

    lines = _type_guard(enumeration, options)
    lines.append(f"impl ErrorDomain for {name} {{")
    lines.append(f"{INDENT}fn domain() -> Quark {{")
    lines.extend(_safety_assert(options))
    lines.extend(
        [
            f"{INDENT * 2}unsafe {{ from_glib(sys::{get_quark}()) }}",
            f"{INDENT}}}",
            "",
            f"{INDENT}fn code(self) -> i32 {{",
            f"{INDENT * 2}self.to_glib()",
            f"{INDENT}}}",
            "",
            f"{INDENT}fn from(code: i32) -> Option<Self> {{",
        ]
    )
    lines.extend(_safety_assert(options))
    lines.append(f"{INDENT * 2}match code {{")
    for variant in variants:
        lines.extend(_member_guard(variant, options, 3))
        lines.append(f"{_ARM}{variant.value} => Some({name}::{variant.name}),")
    if has_failed_member:
        lines.append(f"{_ARM}_ => Some({name}::{FAILED_VARIANT_NAME}),")
    else:
        lines.append(f"{_ARM}value => Some({name}::{SENTINEL_NAME}(value)),")
    lines.extend([f"{INDENT * 2}}}", f"{INDENT}}}", "}"])
    return lines


def emit_dynamic_type(
    enumeration: EnumerationMetadata, options: ProjectOptions
) -> list[str]:
    """Emit StaticType, FromValueOptional, FromValue and SetValue as one group."""
    name = enumeration.name
    guard = _type_guard(enumeration, options)
    impls = [
        [
            f"impl StaticType for {name} {{",
            f"{INDENT}fn static_type() -> Type {{",
            f"{INDENT * 2}unsafe {{ from_glib(sys::{enumeration.glib_get_type}()) }}",
            f"{INDENT}}}",
            "}",
        ],
        [
            f"impl<'a> FromValueOptional<'a> for {name} {{",
            f"{INDENT}unsafe fn from_value_optional(value: &Value) -> Option<Self> {{",
            f"{INDENT * 2}Some(FromValue::from_value(value))",
            f"{INDENT}}}",
            "}",
        ],
        [
            f"impl<'a> FromValue<'a> for {name} {{",
            f"{INDENT}unsafe fn from_value(value: &Value) -> Self {{",
            f"{INDENT * 2}from_glib(gobject_sys::g_value_get_enum(value.to_glib_none().0))",
            f"{INDENT}}}",
            "}",
        ],
        [
            f"impl SetValue for {name} {{",
            f"{INDENT}unsafe fn set_value(value: &mut Value, this: &Self) {{",
            f"{INDENT * 2}gobject_sys::g_value_set_enum(value.to_glib_none_mut().0, this.to_glib())",
            f"{INDENT}}}",
            "}",
        ],
    ]
    lines: list[str] = []
    for impl in impls:
        if lines:
            lines.append("")
        lines.extend(guard)
        lines.extend(impl)
    return lines


def emit_enum_blocks(
    enumeration: EnumerationMetadata,
    variants: list[CanonicalVariant],
    config: ObjectConfig,
    flags: EmissionFlags,
    options: ProjectOptions,
) -> list[list[str]]:
    """Return the protocol blocks for one enum in their fixed order.

    Order: type definition, Display, ToGlib, FromGlib, ErrorDomain,
    dynamic type group. Flag-false blocks are absent from the list.
    """
    blocks = [emit_type_definition(enumeration, variants, config, options)]
    if flags.has_display:
        blocks.append(emit_display(enumeration, variants, options))
    blocks.append(emit_to_native(enumeration, variants, options))
    blocks.append(emit_from_native(enumeration, variants, options))
    if flags.has_error_domain:
        blocks.append(emit_error_domain(enumeration, variants, options))
    if flags.has_dynamic_type:
        blocks.append(emit_dynamic_type(enumeration, options))
    return blocks


def generate_enum(
    enumeration: EnumerationMetadata,
    variants: list[CanonicalVariant],
    config: ObjectConfig,
    flags: EmissionFlags,
    options: ProjectOptions,
) -> list[str]:
    lines: list[str] = []
    for block in emit_enum_blocks(enumeration, variants, config, flags, options):
        if lines:
            lines.append("")
        lines.extend(block)
    return lines


def generate_enums_module(
    selection: EnumSelection, options: ProjectOptions
) -> EnumsModule:
    """Resolve and emit every selected enumeration in selection order.

    Args:
        selection: Non-empty selection from select_enumerations.
        options: Project options (guards, safety asserts).

    Returns:
        EnumsModule with imports derived from the aggregate flags.

    Raises:
        ConfigError: DUPLICATE_VARIANT_NAME when two canonical variants of
            one enum map to the same Rust identifier.
    """
    content: list[str] = []
    mod_lines: list[str] = ["mod enums;"]
    stats: list[EnumStats] = []

    for selected in selection.enums:
        enumeration = selected.enumeration
        variants = resolve_members(enumeration.members, selected.overrides)
        conflicts = find_variant_name_conflicts(variants)
        if conflicts:
            described = "; ".join(
                f"{c.name} <- {', '.join(c.c_identifiers)}" for c in conflicts
            )
            raise ConfigError(
                "DUPLICATE_VARIANT_NAME",
                f"Enumeration {enumeration.name} has members with the same "
                f"Rust name: {described}",
                f"Mark all but one as alias or ignore in [[object]] "
                f"'{selected.config.name}'.",
            )

        if content:
            content.append("")
        content.extend(
            generate_enum(
                enumeration, variants, selected.config, selected.flags, options
            )
        )

        mod_lines.extend(version_condition(enumeration.version, options))
        mod_lines.append(f"pub use self::enums::{enumeration.name};")
        stats.append(
            EnumStats(
                name=enumeration.name,
                member_count=len(enumeration.members),
                variant_count=len(variants),
                flags=selected.flags,
            )
        )

    return EnumsModule(
        imports=compute_imports(selection.flags),
        content_lines=tuple(content),
        mod_lines=tuple(mod_lines),
        stats=tuple(stats),
    )


# ===--- S7 Writer ---=== #

ENUMS_FILENAME = "enums.rs"
MOD_FILENAME = "mod.rs"
BACKUP_SUFFIX = ".bak"


@dataclass(frozen=True)
class WriteConfig:
    """Shared metadata embedded in every file header.

    Attributes:
        source_label: GIR source description, e.g. "Gio-2.0.gir".
        tool_version: Generator version string.
    """

    source_label: str
    tool_version: str = TOOL_VERSION


@dataclass(frozen=True)
class FileWriteResult:
    """Result of writing a single generated file.

    Attributes:
        filename: Filename written, e.g. "enums.rs".
        path: Absolute path of the written file.
        line_count: Number of newline characters in the written content.
        byte_count: Number of bytes written (UTF-8 encoded).
    """

    filename: str
    path: Path
    line_count: int
    byte_count: int


@dataclass(frozen=True)
class PackageWriteResult:
    """Result of writing enums.rs and mod.rs, in write order."""

    output_dir: Path
    files: tuple[FileWriteResult, ...]

    @property
    def total_lines(self) -> int:
        return sum(f.line_count for f in self.files)


def format_file_header(config: WriteConfig) -> list[str]:
    """Return the comment lines opening every generated file.

    Output format:
        // This file was generated by enumgen 0.1.0
        // from Gio-2.0.gir
        // DO NOT EDIT

    Raises:
        ValueError: If config.source_label is empty.
    """
    if not config.source_label:
        raise ValueError("source_label must not be empty")
    return [
        f"// This file was generated by {TOOL_NAME} {config.tool_version}",
        f"// from {config.source_label}",
        "// DO NOT EDIT",
    ]


def format_use_block(imports: tuple[str, ...]) -> list[str]:
    return [f"use {path};" for path in imports]


def assemble_enums_source(config: WriteConfig, module: EnumsModule) -> str:
    """Assemble enums.rs: header, blank, use block, blank, content, trailing newline."""
    parts: list[str] = list(format_file_header(config))
    if module.imports:
        parts.append("")
        parts.extend(format_use_block(module.imports))
    if module.content_lines:
        parts.append("")
        parts.extend(module.content_lines)
    return "\n".join(parts) + "\n"


def assemble_mod_source(config: WriteConfig, module: EnumsModule) -> str:
    parts: list[str] = list(format_file_header(config))
    parts.append("")
    parts.extend(module.mod_lines)
    return "\n".join(parts) + "\n"


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def save_to_file(
    path: Path, content: str, make_backup: bool = False
) -> FileWriteResult:
    """Write content to path through a temporary file in the same directory.

    The target is replaced only after the temporary file is completely
    written. With make_backup, an existing target is copied to `<name>.bak`
    first.

    Args:
        path: Destination file. Parent directories are created if absent.
        content: Full file text.
        make_backup: Keep the previous target as `<name>.bak`.

    Returns:
        FileWriteResult with resolved path, line_count and byte_count.

    Raises:
        OSError: Propagated unchanged. The temporary file is removed and an
            existing target is left as it was.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
        if make_backup and path.exists():
            shutil.copy2(path, backup_path_for(path))
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    resolved = path.resolve()
    return FileWriteResult(
        filename=path.name,
        path=resolved,
        line_count=content.count("\n"),
        byte_count=len(resolved.read_bytes()),
    )


def write_package(
    output_dir: Path,
    config: WriteConfig,
    module: EnumsModule,
    make_backup: bool = False,
) -> PackageWriteResult:
    """Write enums.rs then mod.rs into output_dir.

    Any OSError propagates immediately; mod.rs is not written when
    enums.rs fails.
    """
    output_dir = Path(output_dir)
    files = (
        save_to_file(
            output_dir / ENUMS_FILENAME,
            assemble_enums_source(config, module),
            make_backup,
        ),
        save_to_file(
            output_dir / MOD_FILENAME,
            assemble_mod_source(config, module),
            make_backup,
        ),
    )
    return PackageWriteResult(output_dir=output_dir, files=files)


# ===--- Discovery (--list-enums) ---=== #


@dataclass(frozen=True)
class EnumSummary:
    """One row of the --list-enums table.

    Attributes:
        name: Enumeration name, e.g. "IOErrorEnum".
        member_count: Raw member count from the GIR.
        variant_count: Canonical variant count after configured overrides.
        status: Configured status, or "-" when the project does not mention it.
        flags: "E" error domain, "T" get-type, "D" display; "" when none.
    """

    name: str
    member_count: int
    variant_count: int
    status: str
    flags: str


def _flag_letters(flags: EmissionFlags) -> str:
    letters = ""
    if flags.has_error_domain:
        letters += "E"
    if flags.has_dynamic_type:
        letters += "T"
    if flags.has_display:
        letters += "D"
    return letters


def gather_enum_summaries(
    library: Library, project: ProjectConfig
) -> list[EnumSummary]:
    summaries: list[EnumSummary] = []
    for enumeration in library.main_enumerations():
        full_name = f"{library.main_namespace}.{enumeration.name}"
        obj = project.find_object(full_name)
        config = obj if obj is not None else ObjectConfig(name=full_name)
        overrides = build_member_overrides(config, enumeration.members)
        summaries.append(
            EnumSummary(
                name=enumeration.name,
                member_count=len(enumeration.members),
                variant_count=len(resolve_members(enumeration.members, overrides)),
                status=obj.status if obj is not None else "-",
                flags=_flag_letters(emission_flags_for(enumeration, config)),
            )
        )
    summaries.sort(key=lambda s: s.name)
    return summaries


def filter_enums_by_text(
    summaries: list[EnumSummary], filter_text: str
) -> list[EnumSummary]:
    if not filter_text:
        return list(summaries)
    needle = filter_text.lower()
    return [s for s in summaries if needle in s.name.lower()]


def format_enums_table(summaries: list[EnumSummary], library_label: str) -> str:
    """Return the complete --list-enums output as a single string.

    Output format:

        {N} enumerations in {library_label}:

          IOErrorEnum         48 members  47 variants  generate  ET
          ...

    Returns:
        Formatted multi-line string including trailing newline.
    """
    lines = [f"{len(summaries)} enumerations in {library_label}:", ""]
    if not summaries:
        lines.append("")
        return "\n".join(lines)

    name_width = max(len(s.name) for s in summaries)
    status_width = max(len(s.status) for s in summaries)
    for s in summaries:
        members_col = f"{s.member_count} members"
        variants_col = f"{s.variant_count} variants"
        row = (
            f"  {s.name.ljust(name_width)}  {members_col:<12} {variants_col:<13}"
            f" {s.status.ljust(status_width)}  {s.flags}"
        )
        lines.append(row.rstrip())
    lines.append("")
    return "\n".join(lines)


def run_discovery(config: DiscoveryConfig) -> None:
    project = load_project_config(config.config_path)
    options = project.options
    girs_dir = config.girs_dir or options.girs_dir
    library = load_library(girs_dir, options.library, options.version)

    summaries = gather_enum_summaries(library, project)
    if config.filter_text is not None:
        summaries = filter_enums_by_text(summaries, config.filter_text)
    print(format_enums_table(summaries, options.library_label), end="")


# ===--- Summary report ---=== #


@dataclass(frozen=True)
class GenerationSummary:
    """Immutable data for the post-generation console report.

    Attributes:
        library_label: e.g. "Gio-2.0".
        output_dir: Output directory as string.
        enum_count: Enumerations emitted.
        display_count: Enumerations with a Display impl.
        error_domain_count: Enumerations with an ErrorDomain impl.
        dynamic_type_count: Enumerations with the StaticType/Value group.
        variant_count: Canonical variants across all enums.
        dropped_count: Members dropped as alias, ignored or duplicate value.
        files: Ordered write results.
    """

    library_label: str
    output_dir: str
    enum_count: int
    display_count: int
    error_domain_count: int
    dynamic_type_count: int
    variant_count: int
    dropped_count: int
    files: tuple[FileWriteResult, ...]


def build_generation_summary(
    options: ProjectOptions,
    module: EnumsModule,
    write_result: PackageWriteResult,
) -> GenerationSummary:
    stats = module.stats
    variant_count = sum(s.variant_count for s in stats)
    return GenerationSummary(
        library_label=options.library_label,
        output_dir=str(write_result.output_dir),
        enum_count=len(stats),
        display_count=sum(1 for s in stats if s.flags.has_display),
        error_domain_count=sum(1 for s in stats if s.flags.has_error_domain),
        dynamic_type_count=sum(1 for s in stats if s.flags.has_dynamic_type),
        variant_count=variant_count,
        dropped_count=sum(s.member_count for s in stats) - variant_count,
        files=write_result.files,
    )


def format_generation_summary(summary: GenerationSummary) -> str:
    lines: list[str] = [
        f"{summary.library_label} enums generated:",
        "",
        f"  Output:     {summary.output_dir}",
        "",
        f"  Enums:       {summary.enum_count:>6}",
        f"    Display:     {summary.display_count:>4}",
        f"    ErrorDomain: {summary.error_domain_count:>4}",
        f"    StaticType:  {summary.dynamic_type_count:>4}",
        f"  Variants:    {summary.variant_count:>6}"
        f"  ({summary.dropped_count} members dropped)",
        "",
        "  Files written:",
    ]
    for file_result in summary.files:
        lines.append(f"    {file_result.filename:<12} {file_result.line_count:>6,} lines")

    total_lines = sum(f.line_count for f in summary.files)
    lines.append("")
    lines.append(f"  Total: {total_lines:,} lines across {len(summary.files)} files")
    lines.append("")
    return "\n".join(lines)


def print_generation_summary(summary: GenerationSummary) -> None:
    print(format_generation_summary(summary), end="")


# ===--- Pipeline ---=== #


def resolve_output_dir(config: GenerateConfig, options: ProjectOptions) -> Path:
    if config.output_dir is not None:
        return config.output_dir
    return options.target_path / AUTO_SUBDIR


def run_generate(config: GenerateConfig) -> PackageWriteResult | None:
    """Execute the generation pipeline for a GenerateConfig.

    Stages: load project -> load GIR library -> select -> resolve and emit
    -> write -> summary.

    Returns:
        PackageWriteResult, or None when no enumeration qualifies (nothing
        is written).

    Raises:
        ConfigError: Invalid project file, missing GIR, name conflicts.
        OSError: Unreadable input or filesystem write failure.
        ET.ParseError: Malformed GIR.
    """
    print(f"Config: {config.config_path}")
    project = load_project_config(config.config_path)
    options = project.options
    girs_dir = config.girs_dir or options.girs_dir

    print(f"Parsing: {gir_path(girs_dir, options.library, options.version)}")
    library = load_library(girs_dir, options.library, options.version)
    print(f"  Library: {len(library.types)} types, {len(project.objects)} objects")

    selection = select_enumerations(library, project)
    if selection is None:
        print("  Selected: 0 enumerations, nothing to write")
        return None
    print(f"  Selected: {len(selection.enums)} enumerations")

    module = generate_enums_module(selection, options)

    write_config = WriteConfig(source_label=f"{options.library_label}.gir")
    output_dir = resolve_output_dir(config, options)
    result = write_package(
        output_dir,
        write_config,
        module,
        make_backup=config.make_backup or options.make_backup,
    )
    print(
        f"  Written: {len(result.files)} files, "
        f"{result.total_lines} lines to {result.output_dir}"
    )

    print_generation_summary(build_generation_summary(options, module, result))
    return result


def _report_config_error(err: ConfigError) -> None:
    print(f"Config error [{err.code}]: {err.message}")
    if err.suggestion:
        print(f"Hint: {err.suggestion}")


def main(argv: list[str] | None = None):
    try:
        config = build_config(argv)
    except ConfigError as err:
        _report_config_error(err)
        raise SystemExit(1) from err

    try:
        if isinstance(config, DiscoveryConfig):
            run_discovery(config)
        else:
            run_generate(config)
    except ConfigError as err:
        _report_config_error(err)
        raise SystemExit(1) from err
    except (OSError, ET.ParseError) as err:
        print(f"Error: {err}")
        raise SystemExit(1) from err
    except (RuntimeError, ValueError) as err:
        print(f"Internal error: {err}")
        raise SystemExit(1) from err


if __name__ == "__main__":
    main()
