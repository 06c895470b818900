"""Repro Manager - central orchestrator for Contract Repro runs.

The Repro Manager:
1. Makes a reference source tree available (given project or fresh clone)
2. In build mode, builds and optimizes every catalogued contract package
3. In repro mode, orders the existing artifacts by their dependencies and
   reproduces each one against the source
4. Records every stage outcome in a RunSummary saved to the work dir
"""

from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from catalog import contract_list_from_names, load_contract_list, load_dependency_table
from config import settings
from discovery import PackageDiscoverer, find_wasm_files
from errors import InvalidDirectoryError, ReproError
from models import (
    ContractList,
    DependencyTable,
    Mode,
    RunSummary,
    Stage,
    StageOutcome,
    StageStatus,
)
from ordering import artifact_identity, sort_artifacts
from pipeline import BuildPipeline, ToolchainSelector
from runners import ProcessRunner, SubprocessRunner
from orchestrator.source import clone_repo


class ReproManager:
    """Drives the catalog through the pipeline, or artifacts through reproduction.

    Contracts and artifacts are processed one at a time. With fail_fast the
    first error aborts the run; otherwise it is recorded and the next
    contract or artifact is processed.
    """

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        runner: Optional[ProcessRunner] = None,
        toolchain: Optional[ToolchainSelector] = None,
        dependency_table: Optional[DependencyTable] = None,
        fail_fast: Optional[bool] = None,
        console: Optional[Console] = None,
    ):
        """Initialize the Repro Manager.

        Args:
            base_dir: Directory the work dir is created in (default: cwd)
            runner: Process runner for every external tool
            toolchain: Toolchain selection strategy for builds
            dependency_table: Known dependency pairs (default: embedded table)
            fail_fast: Abort on first failure (default from settings)
            console: Console for progress output
        """
        self.console = console or Console()
        self.runner = runner or SubprocessRunner(
            timeout_seconds=settings.process_timeout_seconds,
            console=self.console,
        )
        self.work_dir = settings.get_work_path(base_dir)
        self.wasm_output_dir = settings.get_wasm_output_path(base_dir)
        self.examples_dir = settings.get_examples_path(base_dir)
        self.fail_fast = settings.fail_fast if fail_fast is None else fail_fast
        self._dependency_table = dependency_table

        self.discoverer = PackageDiscoverer(self.runner)
        self.pipeline = BuildPipeline(self.runner, toolchain=toolchain, console=self.console)

    @property
    def dependency_table(self) -> DependencyTable:
        if self._dependency_table is None:
            self._dependency_table = load_dependency_table()
        return self._dependency_table

    def prepare_dirs(self) -> None:
        """Create the work dir and artifact output dir."""
        self.work_dir.mkdir(parents=True, exist_ok=True)
        self.wasm_output_dir.mkdir(parents=True, exist_ok=True)

    def resolve_source(self, project: Optional[Path] = None) -> Path:
        """Return the source tree to build from, cloning it when no project is given."""
        if project is not None:
            project = Path(project)
            if not project.is_dir():
                raise InvalidDirectoryError(project)
            return project

        self.console.print(
            f"[dim]Cloning[/dim] {escape(settings.examples_repo_url)} "
            f"[dim]into[/dim] {escape(str(self.examples_dir))}"
        )
        return clone_repo(settings.examples_repo_url, self.examples_dir, self.runner)

    def run_build(
        self,
        project: Optional[Path] = None,
        contracts: Optional[Sequence[str]] = None,
    ) -> RunSummary:
        """Build and optimize every contract package in catalog order.

        Args:
            project: Local source tree; cloned when omitted
            contracts: Contract names overriding the embedded catalog

        Returns:
            RunSummary with one outcome per stage

        Raises:
            ReproError: The first failure, when fail_fast is set. Catalog
                errors are recorded under the catalog stage and always raised.
        """
        summary = RunSummary(mode=Mode.BUILD)
        self.prepare_dirs()
        try:
            source_dir = self._run_stage(
                summary, None, str(project or settings.examples_repo_url), Stage.SOURCE,
                lambda: self.resolve_source(project),
            )
            names = self._run_stage(
                summary, None, "contract list", Stage.CATALOG,
                lambda: self.resolve_contracts(contracts),
            )

            for contract in names:
                self.console.print(f"\n[bold]------- contract: {escape(contract)} -------[/bold]")
                try:
                    self._build_contract(contract, source_dir, summary)
                except ReproError as e:
                    if self.fail_fast:
                        raise
                    self.console.print(f"[red]✗ {escape(str(e))}[/red]")
        finally:
            self._finish(summary)
        return summary

    def resolve_contracts(self, contracts: Optional[Sequence[str]] = None) -> ContractList:
        """Return the requested contracts, or the embedded catalog when none are given."""
        if contracts is None:
            return load_contract_list()
        return contract_list_from_names(contracts)

    def _build_contract(self, contract: str, source_dir: Path, summary: RunSummary) -> None:
        contract_dir = source_dir / contract
        packages = self._run_stage(
            summary, contract, contract, Stage.METADATA,
            lambda: self.discoverer.discover(contract, contract_dir),
        )
        if not packages:
            self.console.print(f"[yellow]No contract packages in {escape(contract)}[/yellow]")
            return

        for package in packages:
            self.console.print(f"[dim]package:[/dim] {escape(package.name)}")
            wasm = self._run_stage(
                summary, contract, package.name, Stage.BUILD,
                lambda: self.pipeline.build(
                    package.name, package.manifest_path, self.wasm_output_dir, contract
                ),
            )
            self._run_stage(
                summary, contract, str(wasm), Stage.OPTIMIZE,
                lambda: self.pipeline.optimize(wasm, contract),
            )

    def resolve_order(self, wasm_dir: Path) -> List[Path]:
        """Locate artifacts under wasm_dir and sort them by their dependencies."""
        found = find_wasm_files(wasm_dir)
        return sort_artifacts(found, self.dependency_table)

    def run_repro(self, wasm_dir: Path, project: Optional[Path] = None) -> RunSummary:
        """Reproduce every artifact under wasm_dir in dependency order.

        Args:
            wasm_dir: Directory holding previously built artifacts
            project: Local source tree; cloned when omitted

        Returns:
            RunSummary with one reproduce outcome per artifact

        Raises:
            ReproError: The first failure, when fail_fast is set. Ordering
                errors are recorded under the order stage and always raised.
        """
        summary = RunSummary(mode=Mode.REPRO)
        self.prepare_dirs()
        try:
            source_dir = self._run_stage(
                summary, None, str(project or settings.examples_repo_url), Stage.SOURCE,
                lambda: self.resolve_source(project),
            )
            order = self._run_stage(
                summary, None, str(wasm_dir), Stage.ORDER,
                lambda: self.resolve_order(wasm_dir),
            )
            self.console.print(f"\n[bold]Reproducing {len(order)} artifact(s)[/bold]")

            for wasm in order:
                contract = artifact_identity(wasm)
                try:
                    self._run_stage(
                        summary, contract, str(wasm), Stage.REPRODUCE,
                        lambda: self.pipeline.reproduce(wasm, source_dir, contract),
                    )
                except ReproError as e:
                    if self.fail_fast:
                        raise
                    self.console.print(f"[red]✗ {escape(str(e))}[/red]")
        finally:
            self._finish(summary)
        return summary

    def _run_stage(
        self,
        summary: RunSummary,
        contract: Optional[str],
        target: str,
        stage: Stage,
        fn: Callable[[], Any],
    ) -> Any:
        """Run one stage and record its outcome. Errors are re-raised."""
        try:
            result = fn()
        except ReproError as e:
            summary.record(StageOutcome(
                contract=contract,
                target=target,
                stage=stage,
                status=StageStatus.FAILED,
                exit_status=getattr(e, "exit_status", None),
                error=str(e),
            ))
            raise

        summary.record(StageOutcome(
            contract=contract,
            target=target,
            stage=stage,
            status=StageStatus.OK,
            exit_status=0,
            artifact=result if isinstance(result, Path) else None,
        ))
        return result

    def _finish(self, summary: RunSummary) -> None:
        summary.finish()
        summary.save(self.work_dir)
