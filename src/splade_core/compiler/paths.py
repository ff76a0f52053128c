"""Helpers for splade-core filesystem paths."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


def ensure_splade_folder(base_path: Optional[Path] = None) -> Path:
    """Ensure .splade exists and has a local .gitignore."""
    dot_splade = (base_path or Path(".")) / ".splade"
    dot_splade.mkdir(parents=True, exist_ok=True)

    gitignore_path = dot_splade / ".gitignore"
    if not gitignore_path.exists():
        gitignore_path.write_text("*")

    return dot_splade


def get_splade_path(*parts: str, base_path: Optional[Path] = None) -> Path:
    """Return a path inside .splade/."""
    return ensure_splade_folder(base_path).joinpath(*parts)


def get_compiled_scripts_path(base_path: Optional[Path] = None) -> Path:
    """Return the default directory for compiled Vue components."""
    return get_splade_path("compiled", base_path=base_path)
