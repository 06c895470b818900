"""Run bookkeeping: stage outcomes and the per-run summary."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum
from pathlib import Path


class Mode(str, Enum):
    """Operating mode of a run."""
    BUILD = "build"
    REPRO = "repro"


class Stage(str, Enum):
    """Pipeline stage an outcome belongs to."""
    SOURCE = "source"
    CATALOG = "catalog"
    METADATA = "metadata"
    BUILD = "build"
    OPTIMIZE = "optimize"
    ORDER = "order"
    REPRODUCE = "reproduce"


class StageStatus(str, Enum):
    """Result of a single stage."""
    OK = "ok"
    FAILED = "failed"


class StageOutcome(BaseModel):
    """Outcome of one stage for one contract, package or artifact."""
    contract: Optional[str] = Field(default=None, description="Catalog entry, if any")
    target: str = Field(..., description="Package name or artifact path")
    stage: Stage
    status: StageStatus
    exit_status: Optional[int] = Field(default=None, description="Observed tool exit status")
    error: Optional[str] = Field(default=None, description="Error message on failure")
    artifact: Optional[Path] = Field(default=None, description="Artifact produced by the stage")

    @property
    def ok(self) -> bool:
        return self.status == StageStatus.OK


class RunSummary(BaseModel):
    """All stage outcomes of one build or repro run."""
    mode: Mode
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    outcomes: List[StageOutcome] = Field(default_factory=list)

    def record(self, outcome: StageOutcome) -> StageOutcome:
        self.outcomes.append(outcome)
        return outcome

    @property
    def failures(self) -> List[StageOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def succeeded(self) -> bool:
        """True if no stage failed."""
        return not self.failures

    def finish(self) -> "RunSummary":
        self.completed_at = datetime.now()
        return self

    def save(self, output_dir: Path) -> Path:
        """Save the summary as run_summary.json.

        Args:
            output_dir: Directory to write into (created if missing)

        Returns:
            Path to the written file
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        summary_path = output_dir / "run_summary.json"
        summary_path.write_text(self.model_dump_json(indent=2))
        return summary_path
