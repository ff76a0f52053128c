"""Turns the <script setup> block of a server view into a Vue component."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional, Tuple

from splade_core.compiler.codegen.sections import (
    render_bridge_state,
    render_computed_properties,
    render_element_refs,
    render_function_bridges,
    render_imports,
    render_refresh_helper,
    render_render_function,
)
from splade_core.compiler.features import detect_features
from splade_core.compiler.models import (
    BridgeDescriptor,
    FeatureFlags,
    GeneratedArtifact,
    SplitView,
)
from splade_core.compiler.preprocessor import (
    replace_element_refs,
    replace_loading_states,
)
from splade_core.compiler.props import (
    apply_declaration,
    default_props,
    merge_define_props,
)
from splade_core.compiler.script_parser import ScriptParser
from splade_core.compiler.splitter import SCRIPT_CLOSE, SCRIPT_OPEN, split_view

if TYPE_CHECKING:
    from splade_core.compiler.sink import ArtifactSink
    from splade_core.config import SpladeConfig

log = logging.getLogger(__name__)

TEMPLATE_STUB = "<template><spladeRender /></template>"


class ExtractVueScript:
    """Extracts the Vue script from a server view and compiles it into a component."""

    def __init__(
        self, original_view: str, data: Mapping[str, Any], blade_path: str = ""
    ) -> None:
        self.original_view = original_view
        self.data = data
        self.blade_path = blade_path

    @classmethod
    def from_view(
        cls, original_view: str, data: Mapping[str, Any], blade_path: str = ""
    ) -> ExtractVueScript:
        return cls(original_view, data, blade_path)

    def handle(self, sink: ArtifactSink) -> str:
        """Write the compiled component and return the view without its script."""
        compiled = self.compile()
        if compiled is None:
            return self.original_view

        artifact, markup = compiled
        sink.write(artifact)
        return markup

    def compile(self) -> Optional[Tuple[GeneratedArtifact, str]]:
        """
        Build the component without writing it.

        Returns None when the view has no leading <script setup> block, else
        the artifact and the rewritten markup.
        """
        split = split_view(self.original_view, file_path=self.blade_path or None)
        if split is None:
            log.debug("No <script setup> in %s, leaving view untouched", self.blade_path)
            return None

        bridge = BridgeDescriptor.from_view_data(
            self.data, file_path=self.blade_path or None
        )
        flags = detect_features(self.original_view, bridge)
        log.debug("Compiling %s as %s with %s", self.blade_path, bridge.tag, flags)

        markup = replace_loading_states(split.markup, bridge.functions)
        markup = replace_element_refs(markup)

        content = self._assemble(split, bridge, flags)
        return GeneratedArtifact(tag=bridge.tag, content=content), markup

    def _assemble(
        self, split: SplitView, bridge: BridgeDescriptor, flags: FeatureFlags
    ) -> str:
        parser = ScriptParser(split.script)
        existing = parser.get_define_props()
        declaration = merge_define_props(
            default_props(flags.uses_two_way_binding), existing
        )

        script = apply_declaration(split.script, declaration, existing)
        script = replace_loading_states(script, bridge.functions)
        variables = parser.get_variables()

        sections = [
            SCRIPT_OPEN,
            render_imports(flags, bridge, parser.get_vue_functions()),
            declaration.new_statement,
            render_bridge_state(flags),
            render_function_bridges(bridge),
            render_computed_properties(bridge),
            render_refresh_helper(flags),
            render_element_refs(flags),
            script,
            render_render_function(flags, bridge, variables),
            SCRIPT_CLOSE,
            TEMPLATE_STUB,
        ]

        return "\n".join(section for section in sections if section)


def compile_view(
    original_view: str,
    data: Mapping[str, Any],
    blade_path: str = "",
    config: Optional[SpladeConfig] = None,
) -> str:
    """Compile a view using the sink described by ``config`` (env by default)."""
    from splade_core.compiler.sink import ArtifactSink
    from splade_core.config import SpladeConfig

    config = config or SpladeConfig.from_env()
    sink = ArtifactSink.from_config(config)
    return ExtractVueScript.from_view(original_view, data, blade_path).handle(sink)
