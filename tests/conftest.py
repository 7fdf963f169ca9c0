import argparse
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

GENERATOR_DIR = Path(__file__).resolve().parent.parent
if str(GENERATOR_DIR) not in sys.path:
    sys.path.insert(0, str(GENERATOR_DIR))

import enumgen

GIR_TEMPLATE = """<?xml version="1.0"?>
<repository version="1.2"
            xmlns="http://www.gtk.org/introspection/core/1.0"
            xmlns:c="http://www.gtk.org/introspection/c/1.0"
            xmlns:glib="http://www.gtk.org/introspection/glib/1.0">
{includes}
  <namespace name="{namespace}" version="{version}">
{body}
  </namespace>
</repository>
"""

STATUS_ENUM_XML = """
    <enumeration name="Status" c:type="TestStatus"
                 glib:get-type="test_status_get_type"
                 glib:error-domain="test-status-quark">
      <member name="ok" value="0" c:identifier="TEST_STATUS_OK"/>
      <member name="failed" value="1" c:identifier="TEST_STATUS_FAILED"/>
      <member name="fail_alias" value="1" c:identifier="TEST_STATUS_FAIL_ALIAS"/>
    </enumeration>
"""

MODE_ENUM_XML = """
    <enumeration name="Mode" c:type="TestMode" version="1.4">
      <member name="read" value="0" c:identifier="TEST_MODE_READ"/>
      <member name="write" value="1" c:identifier="TEST_MODE_WRITE"/>
    </enumeration>
"""

FLAGS_XML = """
    <bitfield name="Flags" c:type="TestFlags">
      <member name="none" value="0" c:identifier="TEST_FLAGS_NONE"/>
    </bitfield>
"""


@pytest.fixture
def make_gir(tmp_path: Path) -> Callable[..., Path]:
    def _make_gir(
        namespace: str = "Test",
        version: str = "1.0",
        body: str = STATUS_ENUM_XML,
        includes: tuple[tuple[str, str], ...] = (),
        girs_dir: Path | None = None,
    ) -> Path:
        target_dir = tmp_path / "gir-files" if girs_dir is None else girs_dir
        target_dir.mkdir(parents=True, exist_ok=True)
        include_xml = "\n".join(
            f'  <include name="{name}" version="{ver}"/>' for name, ver in includes
        )
        path = target_dir / f"{namespace}-{version}.gir"
        path.write_text(
            GIR_TEMPLATE.format(
                includes=include_xml, namespace=namespace, version=version, body=body
            ),
            encoding="utf-8",
        )
        return path

    return _make_gir


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[str], Path]:
    def _make_project(toml_text: str) -> Path:
        path = tmp_path / "Gir.toml"
        path.write_text(toml_text, encoding="utf-8")
        return path

    return _make_project


@pytest.fixture
def make_options() -> Callable[..., enumgen.ProjectOptions]:
    def _make_options(**overrides: object) -> enumgen.ProjectOptions:
        base: dict[str, object] = {"library": "Test", "version": "1.0"}
        base.update(overrides)
        return enumgen.ProjectOptions(**base)

    return _make_options


@pytest.fixture
def make_enum() -> Callable[..., enumgen.EnumerationMetadata]:
    def _make_enum(
        members: list[tuple[str, int | str]],
        *,
        name: str = "Status",
        c_type: str = "GStatus",
        version: enumgen.LibraryVersion | None = None,
        deprecated_version: enumgen.LibraryVersion | None = None,
        error_quark_source: str | None = None,
        glib_get_type: str | None = None,
    ) -> enumgen.EnumerationMetadata:
        native_members = tuple(
            enumgen.NativeMember(
                name=member_name,
                c_identifier=f"G_{name.upper()}_{member_name.upper()}",
                value=str(value),
                index=index,
            )
            for index, (member_name, value) in enumerate(members)
        )
        return enumgen.EnumerationMetadata(
            name=name,
            c_type=c_type,
            members=native_members,
            version=version,
            deprecated_version=deprecated_version,
            error_quark_source=error_quark_source,
            glib_get_type=glib_get_type,
        )

    return _make_enum


@pytest.fixture
def make_args(tmp_path: Path) -> Callable[..., argparse.Namespace]:
    config_path = tmp_path / "Gir.toml"
    config_path.write_text('[options]\nlibrary = "Test"\nversion = "1.0"\n')

    def _make_args(**overrides: object) -> argparse.Namespace:
        base_args: dict[str, object] = {
            "config": config_path,
            "girs_dir": None,
            "output_dir": None,
            "make_backup": False,
            "list_enums": False,
            "filter": None,
        }
        base_args.update(overrides)
        return argparse.Namespace(**base_args)

    return _make_args
