from __future__ import annotations

import ast

import pytest

from ._utils import matches_prefix, package_root, parse_imports, read_tree, rel, source_files


_LOWER_LAYERS = ["core", "git", "github", "output", "platform", "release", "services", "workspace"]


@pytest.mark.parametrize("layer", _LOWER_LAYERS)
def test_lower_layers_do_not_import_cli(layer: str) -> None:
    offenders = [
        f"{rel(path)}:{item.line}: imports {item.module}"
        for path in source_files(package_root() / layer)
        for item in parse_imports(path)
        if matches_prefix(item.module, "reltag.cli") or matches_prefix(item.module, "typer")
    ]
    assert not offenders, "\n".join(offenders)


def test_rich_is_only_imported_by_console() -> None:
    offenders = [
        f"{rel(path)}:{item.line}: imports {item.module}"
        for path in source_files()
        for item in parse_imports(path)
        if matches_prefix(item.module, "rich") and rel(path) != "output/console.py"
    ]
    assert not offenders, "\n".join(offenders)


def test_subprocess_is_only_used_by_platform_process() -> None:
    offenders = [
        f"{rel(path)}:{item.line}: imports {item.module}"
        for path in source_files()
        for item in parse_imports(path)
        if item.module == "subprocess" and rel(path) != "platform/process.py"
    ]
    assert not offenders, "\n".join(offenders)


def _reads_environ(tree: ast.AST) -> list[int]:
    return [
        node.lineno
        for node in ast.walk(tree)
        if isinstance(node, ast.Attribute)
        and node.attr in {"environ", "getenv"}
        and isinstance(node.value, ast.Name)
        and node.value.id == "os"
    ]


def test_environment_is_read_only_at_the_edges() -> None:
    # Everything else receives configuration as explicit values.
    allowed = {"cli/context.py", "platform/process.py"}
    offenders = [
        f"{rel(path)}:{line}: reads the process environment"
        for path in source_files()
        if rel(path) not in allowed
        for line in _reads_environ(read_tree(path))
    ]
    assert not offenders, "\n".join(offenders)
