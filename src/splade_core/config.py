"""Configuration for compiling Vue components out of server views."""

import os
import shlex
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, List, Mapping, Optional

DEFAULT_FORMATTER = "node_modules/.bin/eslint --fix"

TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in TRUTHY


@dataclass(frozen=True)
class SpladeConfig:
    """Where compiled components go and how they are post-processed.

    ``compiled_scripts`` defaults to ``.splade/compiled`` inside ``base_path``.
    """

    compiled_scripts: Optional[Path] = None
    prettify_compiled_scripts: bool = False
    formatter: str = DEFAULT_FORMATTER
    base_path: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any
    ) -> "SpladeConfig":
        """Build a config from SPLADE_* environment variables plus overrides."""
        env = os.environ if environ is None else environ
        values: dict = {}

        if env.get("SPLADE_COMPILED_SCRIPTS"):
            values["compiled_scripts"] = Path(env["SPLADE_COMPILED_SCRIPTS"])
        if "SPLADE_PRETTIFY_COMPILED_SCRIPTS" in env:
            values["prettify_compiled_scripts"] = _env_flag(
                env["SPLADE_PRETTIFY_COMPILED_SCRIPTS"]
            )
        if env.get("SPLADE_FORMATTER"):
            values["formatter"] = env["SPLADE_FORMATTER"]
        if env.get("SPLADE_BASE_PATH"):
            values["base_path"] = Path(env["SPLADE_BASE_PATH"])

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "SpladeConfig":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @property
    def scripts_directory(self) -> Path:
        if self.compiled_scripts is None:
            from splade_core.compiler.paths import get_compiled_scripts_path

            return get_compiled_scripts_path(self.base_path)

        if self.compiled_scripts.is_absolute():
            return self.compiled_scripts
        return self.base_path / self.compiled_scripts

    @property
    def formatter_command(self) -> List[str]:
        return shlex.split(self.formatter)
