"""Asset Staging: copy the bundled asset tree into writable storage.

Invariants:
    - A missing or non-directory source raises StagingError (nothing to stage)
    - Per-file failures never abort the walk: each is recorded in StagingResult.failures
    - StagingResult.ok is True only when every file was copied
    - Existing destination files are overwritten; extra destination files are left alone

Design Decisions:
    - Explicit result over swallowed exceptions: the launcher decides between
      loopback HTTP and file:// loading from StagingResult.ok
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from game_host.core.errors import StagingError

logger = logging.getLogger(__name__)

_COPY_BUFFER = 64 * 1024


@dataclass
class StagingFailure:
    """One file that could not be copied."""
    source: Path
    reason: str


@dataclass
class StagingResult:
    """Outcome of one staging run."""
    source: Path
    destination: Path
    copied: list[Path] = field(default_factory=list)
    failures: list[StagingFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def stage_assets(source: Path | str, destination: Path | str) -> StagingResult:
    """Recursively copy `source` into `destination`, best effort per file."""
    source = Path(source)
    destination = Path(destination)
    if not source.is_dir():
        raise StagingError(str(source), "source is not a directory")

    result = StagingResult(source=source, destination=destination)
    _copy_dir(source, destination, result)

    if result.ok:
        logger.info(
            f"Staged {len(result.copied)} files from {source} to {destination}",
            extra={"asset_root": str(destination)},
        )
    else:
        logger.warning(
            f"Staged {len(result.copied)} files, {len(result.failures)} failed",
            extra={"asset_root": str(destination)},
        )
    return result


def _copy_dir(source: Path, destination: Path, result: StagingResult) -> None:
    try:
        destination.mkdir(parents=True, exist_ok=True)
        entries = sorted(source.iterdir())
    except OSError as e:
        _record(result, source, e)
        return

    for entry in entries:
        target = destination / entry.name
        if entry.is_dir():
            _copy_dir(entry, target, result)
        else:
            _copy_file(entry, target, result)


def _copy_file(source: Path, destination: Path, result: StagingResult) -> None:
    try:
        with open(source, "rb") as src, open(destination, "wb") as dst:
            shutil.copyfileobj(src, dst, _COPY_BUFFER)
    except OSError as e:
        _record(result, source, e)
        return
    result.copied.append(destination)


def _record(result: StagingResult, source: Path, error: OSError) -> None:
    logger.error(
        f"Staging {source} failed: {error}",
        extra={"path": str(source), "error_kind": type(error).__name__},
    )
    result.failures.append(StagingFailure(source, str(error)))
