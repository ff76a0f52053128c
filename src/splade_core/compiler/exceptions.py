from typing import Optional


class SpladeCompilerError(Exception):
    """Base error raised while compiling a view into a Vue component."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        self.message = message
        self.file_path = file_path
        super().__init__(self._format())

    def _format(self) -> str:
        if self.file_path:
            return f"{self.file_path}: {self.message}"
        return self.message

    def __str__(self) -> str:
        return self._format()


class ScriptExtractionError(SpladeCompilerError):
    """The <script setup> block was detected but could not be located."""


class BridgeContractError(SpladeCompilerError, KeyError):
    """The spladeBridge descriptor is missing required fields or is invalid."""
