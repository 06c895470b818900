"""Shared fixtures: a recording process runner and contract source trees."""

import io
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest
from rich.console import Console

from runners import ProcessRunner, ProcessResult, format_command


@dataclass
class Invocation:
    """One recorded call to the runner."""
    command: str
    args: List[str]
    env: Dict[str, str] = field(default_factory=dict)
    cwd: Optional[Path] = None
    capture: bool = False

    @property
    def cmdline(self) -> str:
        return format_command(self.command, self.args)


class RecordingRunner(ProcessRunner):
    """Fake runner that records invocations and returns scripted results.

    Rules registered with `on()` match when every token appears in the
    argument list. The most recently registered matching rule wins; calls
    matching no rule succeed with empty output.
    """

    def __init__(self):
        self.calls: List[Invocation] = []
        self._rules: List[Tuple[Tuple[str, ...], ProcessResult]] = []

    def on(self, *tokens: str, exit_status: int = 0, stdout: str = "", stderr: str = "") -> "RecordingRunner":
        self._rules.append((tokens, ProcessResult(exit_status, stdout, stderr)))
        return self

    def run(self, command, args, env=None, cwd=None, capture=False) -> ProcessResult:
        args = [str(a) for a in args]
        self.calls.append(Invocation(command, args, dict(env or {}), cwd, capture))
        for tokens, result in reversed(self._rules):
            if all(t in args for t in tokens):
                return result
        return ProcessResult(0)

    def calls_with(self, *tokens: str) -> List[Invocation]:
        return [c for c in self.calls if all(t in c.args for t in tokens)]

    @property
    def subcommands(self) -> List[str]:
        """`metadata`, `build`, `optimize`, ... in call order."""
        names = []
        for c in self.calls:
            if c.args and c.args[0] == "contract":
                names.append(c.args[1])
            elif c.args:
                names.append(c.args[0])
        return names


def metadata_json(contract_dir: Path, *package_names: str, crate_types: Sequence[str] = ("cdylib",)) -> str:
    """Render `cargo metadata` output for packages living in contract_dir."""
    packages = [
        {
            "name": name,
            "version": "0.0.0",
            "manifest_path": str(Path(contract_dir) / "Cargo.toml"),
            "targets": [
                {
                    "name": name.replace("-", "_"),
                    "kind": list(crate_types),
                    "crate_types": list(crate_types),
                    "src_path": str(Path(contract_dir) / "src" / "lib.rs"),
                }
            ],
        }
        for name in package_names
    ]
    return json.dumps({"packages": packages, "workspace_members": [], "version": 1})


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def make_source(tmp_path):
    """Create a source tree with one manifest per contract and script its metadata.

    Returns a function (runner, {contract: [package names]}) -> source dir.
    """
    def _make(runner: RecordingRunner, contracts: Dict[str, List[str]]) -> Path:
        source = tmp_path / "soroban-examples"
        for contract, packages in contracts.items():
            contract_dir = source / contract
            contract_dir.mkdir(parents=True, exist_ok=True)
            manifest = contract_dir / "Cargo.toml"
            manifest.write_text(f'[package]\nname = "{contract}"\n')
            runner.on("metadata", str(manifest), stdout=metadata_json(contract_dir, *packages))
        return source

    return _make


@pytest.fixture
def render_metadata():
    return metadata_json
