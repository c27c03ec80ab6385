from __future__ import annotations

from pathlib import Path

import pytest

from rockloaders.compilation import StyleBuilder, loader_rules
from rockloaders.compilation.style_builder import split_keyframes
from rockloaders.exceptions import ArtifactWriteError, CompileError, FragmentReadError
from rockloaders.registry import LoaderRegistry
from tests.conftest import FakeCompiler, write


def _rocket_registry(project: Path) -> LoaderRegistry:
    registry = LoaderRegistry(project)
    registry.attach("rocket", "site/assets/loaders")
    return registry


def test_rocket_rules(project: Path, compiler: FakeCompiler) -> None:
    builder = StyleBuilder(compiler, project / "site" / "assets" / "rockloaders.min.css")
    artifact = builder.build(_rocket_registry(project))

    assert "body[rockloader='rocket'] div[rockloader='rocket'] { opacity: 1; pointer-events: all; }" in artifact.css
    assert "div[rockloader='rocket'] { opacity: 0; }" in artifact.css
    assert artifact.path.read_text(encoding="utf-8") == artifact.css
    assert artifact.styled == ["rocket"]


def test_source_starts_with_prefix(project: Path, compiler: FakeCompiler) -> None:
    prefix = write(project / "prefix.less", "/* shared */")
    builder = StyleBuilder(compiler, project / "out.css", prefix_path=prefix)
    source, _ = builder.assemble(_rocket_registry(project))
    assert source.startswith("/* shared */\n")


def test_missing_style_fragment_is_skipped(project: Path, compiler: FakeCompiler) -> None:
    registry = _rocket_registry(project)
    registry.attach("ghost", "site/assets/loaders")

    artifact = StyleBuilder(compiler, project / "out.css").build(registry)

    assert "ghost" not in artifact.css
    assert artifact.styled == ["rocket"]


def test_rebuild_is_byte_identical(project: Path, compiler: FakeCompiler) -> None:
    builder = StyleBuilder(compiler, project / "out.css")
    registry = _rocket_registry(project)
    registry.add_all("loaders")

    first = builder.build(registry).path.read_bytes()
    second = builder.build(registry).path.read_bytes()
    assert first == second


def test_insertion_order_does_not_matter(project: Path, compiler: FakeCompiler) -> None:
    one = LoaderRegistry(project)
    one.attach("spin", "loaders")
    one.attach("rocket", "site/assets/loaders")
    two = LoaderRegistry(project)
    two.add({"rocket": "site/assets/loaders", "spin": "loaders"})

    builder = StyleBuilder(compiler, project / "out.css")
    assert builder.assemble(one) == builder.assemble(two)
    source, styled = builder.assemble(one)
    assert styled == ["rocket", "spin"]
    assert source.index("'rocket'") < source.index("'spin'")


def test_compile_error_keeps_previous_artifact(project: Path) -> None:
    artifact = write(project / "out.css", "previous")
    builder = StyleBuilder(FakeCompiler(fail_times=1), artifact)

    with pytest.raises(CompileError):
        builder.build(_rocket_registry(project))
    assert artifact.read_text(encoding="utf-8") == "previous"


def test_write_failure(project: Path, compiler: FakeCompiler) -> None:
    write(project / "blocker", "a file, not a directory")
    builder = StyleBuilder(compiler, project / "blocker" / "out.css")

    with pytest.raises(ArtifactWriteError):
        builder.build(_rocket_registry(project))


def test_no_temp_files_left(project: Path, compiler: FakeCompiler) -> None:
    out_dir = project / "dist"
    StyleBuilder(compiler, out_dir / "out.css").build(_rocket_registry(project))
    assert [p.name for p in out_dir.iterdir()] == ["out.css"]


def test_compress_option_passed_through(project: Path, compiler: FakeCompiler) -> None:
    artifact = StyleBuilder(compiler, project / "out.css", compress=False).build(_rocket_registry(project))
    assert "\n" in artifact.css


def test_keyframes_are_kept_out_of_the_container_rule() -> None:
    fragment = (
        "@size: 4px;\n"
        ".bar { width: @size; }\n"
        "@keyframes grow {\n  0% { width: 0; }\n  100% { width: 4px; }\n}\n"
        "@-webkit-keyframes grow { to { width: 4px; } }\n"
    )

    rules, keyframes = split_keyframes(fragment)

    assert "@keyframes" not in rules
    assert ".bar { width: @size; }" in rules
    assert keyframes == [
        "@keyframes grow {\n  0% { width: 0; }\n  100% { width: 4px; }\n}",
        "@-webkit-keyframes grow { to { width: 4px; } }",
    ]

    source = loader_rules("bar", fragment)
    assert source.index("div[rockloader='bar'] {\n@size") < source.index("@keyframes grow")
    assert source.rstrip().endswith("@-webkit-keyframes grow { to { width: 4px; } }")


def test_keyframes_in_comments_and_nested_blocks_stay_put() -> None:
    fragment = (
        "/* @keyframes fake { } */\n"
        ".a { content: '@keyframes x {'; }\n"
        "@media (min-width: 10px) { @keyframes inner { to { top: 0; } } }\n"
    )

    rules, keyframes = split_keyframes(fragment)

    assert keyframes == []
    assert rules == fragment


def test_keyframes_only_fragment_has_no_empty_container() -> None:
    source = loader_rules("k", "@keyframes k { to { opacity: 1; } }")
    assert "div[rockloader='k'] {\n" not in source
    assert "@keyframes k { to { opacity: 1; } }" in source


def test_undecodable_fragment(project: Path, compiler: FakeCompiler) -> None:
    (project / "site" / "assets" / "loaders" / "rocket.less").write_bytes(b"color: \xff;")
    builder = StyleBuilder(compiler, project / "out.css")

    with pytest.raises(FragmentReadError):
        builder.build(_rocket_registry(project))
    assert compiler.calls == []
