"""Configuration settings for the Contract Repro tool."""

# Load .env into os.environ so toolchain overrides (e.g. RUSTUP_HOME) reach child processes
from dotenv import load_dotenv

load_dotenv()

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List, Optional
from pathlib import Path


class Settings(BaseSettings):
    """Global settings for Contract Repro.

    Settings can be overridden via environment variables with CONTRACT_REPRO_ prefix.
    Example: CONTRACT_REPRO_PROCESS_TIMEOUT_SECONDS=900
    """

    # Reference source
    examples_repo_url: str = Field(
        default="https://github.com/stellar/soroban-examples.git",
        description="Git URL of the reference contract examples repository"
    )
    examples_repo_name: str = Field(
        default="soroban-examples",
        description="Directory name of the cloned examples inside the work dir"
    )
    clone_depth: int = Field(
        default=1,
        ge=1,
        description="History depth passed to git clone"
    )

    # Paths
    work_dir_name: str = Field(
        default="repro-test",
        description="Working directory created under the base directory"
    )
    wasm_output_dir_name: str = Field(
        default="wasm-output",
        description="Directory (inside the work dir) receiving built artifacts"
    )

    # External tools
    soroban_bin: str = Field(
        default="soroban",
        description="CLI used to build, optimize and reproduce contracts"
    )
    cargo_bin: str = Field(
        default="cargo",
        description="Cargo binary used for package metadata resolution"
    )
    git_bin: str = Field(
        default="git",
        description="Git binary used for cloning the reference source"
    )
    process_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Kill an external tool after this many seconds (None waits forever)"
    )

    # Toolchain
    toolchain_env_var: str = Field(
        default="RUSTUP_TOOLCHAIN",
        description="Environment variable carrying the toolchain override"
    )
    toolchain_versions: List[str] = Field(
        default=["1.74.0", "1.75.0", "1.76.0", "1.77.0", "1.78.0", "1.79.0"],
        description="Candidate toolchain versions a build may be pinned to"
    )

    # Artifact naming
    wasm_extension: str = Field(
        default="wasm",
        description="Extension of compiled contract artifacts (without the dot)"
    )
    optimized_marker: str = Field(
        default="optimized",
        description="Marker inserted before the extension of optimized artifacts"
    )

    # Failure policy
    fail_fast: bool = Field(
        default=True,
        description="Abort the whole run on the first failed contract or artifact"
    )

    model_config = {
        "env_prefix": "CONTRACT_REPRO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def get_work_path(self, base_dir: Optional[Path] = None) -> Path:
        """Get the working directory as Path object."""
        return Path(base_dir or Path.cwd()) / self.work_dir_name

    def get_wasm_output_path(self, base_dir: Optional[Path] = None) -> Path:
        """Get the artifact output directory as Path object."""
        return self.get_work_path(base_dir) / self.wasm_output_dir_name

    def get_examples_path(self, base_dir: Optional[Path] = None) -> Path:
        """Get the clone destination of the reference source."""
        return self.get_work_path(base_dir) / self.examples_repo_name


# Create singleton instance
settings = Settings()
