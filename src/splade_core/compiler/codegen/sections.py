"""Renderers for the sections of a generated Vue component.

Every renderer returns an empty string when its section is not needed, so
the assembler can drop it.
"""

from typing import List, Sequence

from splade_core.compiler.codegen.renderer import render_template
from splade_core.compiler.models import BridgeDescriptor, FeatureFlags
from splade_core.compiler.preprocessor import REF_SETTER, REFRESH_FUNCTION


def render_imports(
    flags: FeatureFlags, bridge: BridgeDescriptor, vue_functions: Sequence[str]
) -> str:
    vue_imports = {"h", *vue_functions}
    if flags.needs_bridge_state:
        vue_imports.add("ref")
    if flags.is_refreshable:
        vue_imports.add("inject")
    if bridge.data:
        vue_imports.add("computed")

    core_imports = ["GenericSpladeComponent"]
    if flags.needs_bridge_state:
        core_imports.insert(0, "BladeComponent")

    return render_template(
        "imports.js", core_imports=core_imports, vue_imports=sorted(vue_imports)
    )


def render_bridge_state(flags: FeatureFlags) -> str:
    if not flags.needs_bridge_state:
        return ""

    return render_template("bridge_state.js")


def render_function_bridges(bridge: BridgeDescriptor) -> str:
    """One async wrapper per server function, calling it through the bridge."""
    return "\n".join(
        render_template("function_bridge.js", name=name) for name in bridge.functions
    )


def render_computed_properties(bridge: BridgeDescriptor) -> str:
    """Two-way computed properties over the bridge's data fields."""
    return "\n".join(
        render_template("computed_property.js", name=name) for name in bridge.data
    )


def render_refresh_helper(flags: FeatureFlags) -> str:
    if not flags.is_refreshable:
        return ""

    return render_template("refresh_component.js")


def render_element_refs(flags: FeatureFlags) -> str:
    if not flags.uses_element_refs:
        return ""

    return render_template("element_refs.js")


def exposed_names(
    flags: FeatureFlags, bridge: BridgeDescriptor, variables: Sequence[str]
) -> List[str]:
    """Names made available to the server-rendered template."""
    names = [*bridge.data, *variables, *bridge.functions]
    if flags.is_refreshable:
        names.append(REFRESH_FUNCTION)
    if flags.uses_element_refs:
        names.append(REF_SETTER)
    return names


def render_render_function(
    flags: FeatureFlags, bridge: BridgeDescriptor, variables: Sequence[str]
) -> str:
    return render_template(
        "render_function.js",
        inherit_attrs_disabled=flags.has_custom_attribute_binding,
        tag=bridge.tag,
        exposed=exposed_names(flags, bridge, variables),
    )
