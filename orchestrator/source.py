"""Reference source checkout."""

from pathlib import Path
from typing import Optional

from config import settings
from errors import CloneFailedError
from runners import ProcessRunner


def clone_repo(
    git_url: str,
    dest: Path,
    runner: ProcessRunner,
    depth: Optional[int] = None,
    git_bin: Optional[str] = None,
) -> Path:
    """Clone a repository unless the destination is already populated.

    Args:
        git_url: Repository URL
        dest: Clone destination
        runner: Launches git
        depth: History depth (default from settings)
        git_bin: Git executable (default from settings)

    Returns:
        The destination path

    Raises:
        CloneFailedError: If git exits non-zero
    """
    dest = Path(dest)
    if dest.is_dir() and any(dest.iterdir()):
        return dest

    dest.parent.mkdir(parents=True, exist_ok=True)
    result = runner.run(
        git_bin or settings.git_bin,
        ["clone", "--depth", str(depth or settings.clone_depth), git_url, str(dest)],
    )
    if not result.ok:
        raise CloneFailedError(git_url, result.exit_status)
    return dest
