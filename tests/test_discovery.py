from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

import enumgen
from conftest import FLAGS_XML, MODE_ENUM_XML, STATUS_ENUM_XML

PROJECT_TOML = """
[options]
library = "Test"
version = "1.0"

[[object]]
name = "Test.Status"
status = "generate"
generate_display_trait = true

    [[object.member]]
    name = "fail_alias"
    alias = true
"""


@pytest.fixture
def library(make_gir: Callable[..., Path], tmp_path: Path) -> enumgen.Library:
    make_gir(body=STATUS_ENUM_XML + MODE_ENUM_XML + FLAGS_XML)
    return enumgen.load_library(tmp_path / "gir-files", "Test", "1.0")


@pytest.fixture
def project(make_project: Callable[[str], Path]) -> enumgen.ProjectConfig:
    return enumgen.load_project_config(make_project(PROJECT_TOML))


def test_gather_enum_summaries_sorted_with_status_and_flags(
    library: enumgen.Library, project: enumgen.ProjectConfig
) -> None:
    summaries = enumgen.gather_enum_summaries(library, project)

    assert summaries == [
        enumgen.EnumSummary(
            name="Mode", member_count=2, variant_count=2, status="-", flags=""
        ),
        enumgen.EnumSummary(
            name="Status", member_count=3, variant_count=2, status="generate", flags="ETD"
        ),
    ]


def test_filter_enums_by_text_is_case_insensitive(
    library: enumgen.Library, project: enumgen.ProjectConfig
) -> None:
    summaries = enumgen.gather_enum_summaries(library, project)

    assert [s.name for s in enumgen.filter_enums_by_text(summaries, "STAT")] == [
        "Status"
    ]
    assert enumgen.filter_enums_by_text(summaries, "") == summaries


def test_format_enums_table(
    library: enumgen.Library, project: enumgen.ProjectConfig
) -> None:
    summaries = enumgen.gather_enum_summaries(library, project)

    text = enumgen.format_enums_table(summaries, "Test-1.0")

    assert text.splitlines() == [
        "2 enumerations in Test-1.0:",
        "",
        "  Mode    2 members    2 variants    -",
        "  Status  3 members    2 variants    generate  ETD",
    ]
    assert text.endswith("\n")


def test_format_enums_table_empty() -> None:
    text = enumgen.format_enums_table([], "Test-1.0")

    assert text.startswith("0 enumerations in Test-1.0:")


def test_run_discovery_prints_filtered_table(
    make_gir: Callable[..., Path],
    make_project: Callable[[str], Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    make_gir(body=STATUS_ENUM_XML + MODE_ENUM_XML)
    config = enumgen.DiscoveryConfig(
        config_path=make_project(PROJECT_TOML), girs_dir=None, filter_text="mode"
    )

    enumgen.run_discovery(config)

    out = capsys.readouterr().out
    assert out.startswith("1 enumerations in Test-1.0:")
    assert "Mode" in out
    assert "Status" not in out
