"""The three pipeline stages.

Each stage builds an argument list for the soroban CLI, runs it through the
injected ProcessRunner and converts a non-zero exit into the stage's error.
Nothing is caught or retried here.
"""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from config import settings
from errors import BuildFailedError, OptimizeFailedError, ReproduceFailedError
from runners import ProcessRunner
from .naming import artifact_file_name, optimized_path
from .toolchain import ToolchainSelector, get_toolchain_selector


class BuildPipeline:
    """Runs build, optimize and reproduce for single packages and artifacts."""

    def __init__(
        self,
        runner: ProcessRunner,
        toolchain: Optional[ToolchainSelector] = None,
        soroban_bin: Optional[str] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the pipeline.

        Args:
            runner: Launches the external tools
            toolchain: Version strategy for builds (random from settings if omitted)
            soroban_bin: Soroban CLI executable
            console: Where stage announcements go
        """
        self.runner = runner
        self.toolchain = toolchain or get_toolchain_selector()
        self.soroban_bin = soroban_bin or settings.soroban_bin
        self.console = console or Console()

    def _announce(self, stage: str, target: str) -> None:
        self.console.print(f"[bold cyan]{stage:>9}[/bold cyan] {escape(target)}")

    def build(
        self,
        package_name: str,
        manifest_path: Path,
        out_dir: Path,
        contract: Optional[str] = None,
    ) -> Path:
        """Build one package.

        Returns:
            Path the artifact is expected at. Existence is not checked.

        Raises:
            BuildFailedError: If the build tool exits non-zero
        """
        version = self.toolchain.select()
        self._announce("build", f"{package_name} (toolchain {version})")

        result = self.runner.run(
            self.soroban_bin,
            [
                "contract",
                "build",
                "--manifest-path",
                str(manifest_path),
                "--package",
                package_name,
                "--out-dir",
                str(out_dir),
            ],
            env={settings.toolchain_env_var: version},
        )
        if not result.ok:
            raise BuildFailedError(package_name, result.exit_status, contract)

        return Path(out_dir) / artifact_file_name(package_name)

    def optimize(self, wasm_path: Path, contract: Optional[str] = None) -> Path:
        """Optimize an artifact into `<stem>.optimized.wasm` next to it.

        Raises:
            OptimizeFailedError: If the optimizer exits non-zero
        """
        out_path = optimized_path(wasm_path)
        self._announce("optimize", str(wasm_path))

        result = self.runner.run(
            self.soroban_bin,
            ["contract", "optimize", "--wasm", str(wasm_path), "--wasm-out", str(out_path)],
        )
        if not result.ok:
            raise OptimizeFailedError(str(wasm_path), result.exit_status, contract)

        return out_path

    def reproduce(self, wasm_path: Path, source_dir: Path, contract: Optional[str] = None) -> None:
        """Rebuild from source and compare against an existing artifact.

        Raises:
            ReproduceFailedError: If the artifact does not reproduce
        """
        self._announce("reproduce", str(wasm_path))

        result = self.runner.run(
            self.soroban_bin,
            [
                "contract",
                "reproduce",
                "--wasm",
                str(wasm_path),
                "--source-dir",
                str(source_dir),
            ],
        )
        if not result.ok:
            raise ReproduceFailedError(str(wasm_path), result.exit_status, contract)
