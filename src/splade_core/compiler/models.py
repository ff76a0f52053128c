"""Data structures shared by the Vue script compiler."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from splade_core.compiler.exceptions import BridgeContractError

JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
SAFE_TAG = re.compile(r"^[\w.-]+$")


@dataclass(frozen=True)
class BridgeDescriptor:
    """Server component metadata carried into the generated Vue component."""

    tag: str
    functions: Tuple[str, ...] = ()
    data: Dict[str, Any] = field(default_factory=dict)
    props: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.tag or not SAFE_TAG.match(self.tag) or self.tag in (".", ".."):
            raise BridgeContractError(f"Invalid component tag {self.tag!r}")

        seen = set()
        for name in self.functions:
            if not JS_IDENTIFIER.match(name):
                raise BridgeContractError(f"Invalid function name {name!r}")
            if name in seen:
                raise BridgeContractError(f"Duplicate function name {name!r}")
            seen.add(name)

        for name in self.data:
            if not JS_IDENTIFIER.match(name):
                raise BridgeContractError(f"Invalid data property name {name!r}")

    @classmethod
    def from_view_data(
        cls, data: Mapping[str, Any], file_path: Optional[str] = None
    ) -> "BridgeDescriptor":
        """Read the 'spladeBridge' entry that the view renderer passes along."""
        try:
            bridge = data["spladeBridge"]
            tag = bridge["tag"]
            functions = bridge["functions"]
            properties = bridge["data"]
        except (KeyError, TypeError) as e:
            raise BridgeContractError(
                f"Missing spladeBridge field: {e}", file_path=file_path
            ) from e

        try:
            return cls(
                tag=tag,
                functions=tuple(functions),
                data=dict(properties),
                props=dict(bridge.get("props") or {}),
            )
        except BridgeContractError as e:
            raise BridgeContractError(e.message, file_path=file_path) from e

    def to_view_data(self) -> Dict[str, Any]:
        return {
            "spladeBridge": {
                "tag": self.tag,
                "functions": list(self.functions),
                "data": dict(self.data),
                "props": dict(self.props),
            }
        }


@dataclass(frozen=True)
class SplitView:
    """A view separated into its <script setup> fragment and remaining markup."""

    script: str
    markup: str


@dataclass(frozen=True)
class PropEntry:
    """One entry of a defineProps() argument.

    ``name`` is None for spreads and computed keys, which are kept verbatim.
    """

    name: Optional[str]
    source: str


@dataclass(frozen=True)
class DefinePropsCall:
    """An existing defineProps() call found in the script.

    ``span`` is the text that gets replaced. Within it, ``call_at`` holds the
    offsets of the defineProps(...) call and ``expression_at`` the offset of
    the expression assigned to ``binding`` (e.g. a withDefaults() wrapper).
    """

    span: str
    start: int
    end: int
    binding: Optional[str]
    entries: Tuple[PropEntry, ...]
    call_at: Tuple[int, int]
    expression_at: int = 0
    inline: bool = False

    @property
    def names(self) -> List[str]:
        return [entry.name for entry in self.entries if entry.name is not None]


@dataclass(frozen=True)
class PropertyDeclaration:
    """Result of merging the default props into the script's defineProps().

    When ``exists``, ``original_span`` is replaced by ``merged_source``.
    A non-empty ``new_statement`` is emitted as its own section ahead of the
    script.
    """

    exists: bool
    original_span: str = ""
    merged_source: str = ""
    new_statement: str = ""


@dataclass(frozen=True)
class FeatureFlags:
    needs_bridge_state: bool
    is_refreshable: bool
    uses_element_refs: bool
    uses_two_way_binding: bool
    has_custom_attribute_binding: bool


@dataclass(frozen=True)
class GeneratedArtifact:
    tag: str
    content: str

    @property
    def filename(self) -> str:
        return f"{self.tag}.vue"
