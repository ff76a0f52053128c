"""Writes compiled Vue components to disk."""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence

from splade_core.compiler.models import GeneratedArtifact

if TYPE_CHECKING:
    from splade_core.config import SpladeConfig

log = logging.getLogger(__name__)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


class ArtifactSink:
    """Stores one ``{tag}.vue`` file per component, replacing it wholesale."""

    def __init__(
        self,
        directory: Path,
        formatter: Optional[Sequence[str]] = None,
        cwd: Optional[Path] = None,
    ) -> None:
        self.directory = Path(directory)
        self.formatter = list(formatter) if formatter else None
        self.cwd = cwd
        self.file_mode = 0o666 & ~_current_umask()

    @classmethod
    def from_config(cls, config: SpladeConfig) -> ArtifactSink:
        return cls(
            directory=config.scripts_directory,
            formatter=config.formatter_command
            if config.prettify_compiled_scripts
            else None,
            cwd=config.base_path,
        )

    def path_for(self, tag: str) -> Path:
        return self.directory / f"{tag}.vue"

    def write(self, artifact: GeneratedArtifact) -> Path:
        """Write the artifact atomically, then run the formatter if configured."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(artifact.tag)

        # Concurrent compiles of the same tag each replace the whole file
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{artifact.tag}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(artifact.content)
            # mkstemp creates the file owner-only
            os.chmod(tmp_name, self.file_mode)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        log.debug("Wrote compiled component %s", path)

        if self.formatter:
            self.format(path)

        return path

    def format(self, path: Path) -> bool:
        """Run the external formatter on ``path``. Failures are only logged."""
        if not self.formatter:
            return False

        command = self._resolve_command(self.formatter) + [str(path)]
        try:
            result = subprocess.run(
                command,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            log.warning("Could not run formatter %r on %s: %s", command[0], path, e)
            return False

        if result.returncode != 0:
            log.warning(
                "Formatter exited with status %s for %s: %s",
                result.returncode,
                path,
                (result.stderr or result.stdout).strip(),
            )
            return False

        return True

    def clear(self) -> int:
        """Delete all compiled components. Returns the number removed."""
        if not self.directory.exists():
            return 0

        removed = 0
        for path in sorted(self.directory.glob("*.vue")):
            path.unlink()
            removed += 1
        return removed

    def _resolve_command(self, command: List[str]) -> List[str]:
        executable = Path(command[0])
        if self.cwd and not executable.is_absolute() and len(executable.parts) > 1:
            candidate = self.cwd / executable
            if candidate.exists():
                return [str(candidate), *command[1:]]
        return list(command)
