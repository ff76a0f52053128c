from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("splade-core")
except PackageNotFoundError:
    __version__ = "unknown"

from splade_core.compiler.exceptions import (
    BridgeContractError,
    ScriptExtractionError,
    SpladeCompilerError,
)
from splade_core.compiler.extractor import ExtractVueScript, compile_view
from splade_core.compiler.models import BridgeDescriptor
from splade_core.compiler.sink import ArtifactSink
from splade_core.config import SpladeConfig
from splade_core.core.bridge import vue_prop, vue_ref
from splade_core.core.serializer import describe_component
from splade_core.runtime.templates import TemplateRegistry

__all__ = [
    "ArtifactSink",
    "BridgeContractError",
    "BridgeDescriptor",
    "ExtractVueScript",
    "ScriptExtractionError",
    "SpladeCompilerError",
    "SpladeConfig",
    "TemplateRegistry",
    "compile_view",
    "describe_component",
    "vue_prop",
    "vue_ref",
]
