from splade_core.compiler.models import BridgeDescriptor, FeatureFlags
from splade_core.compiler.preprocessor import REFRESH_FUNCTION, uses_element_refs

CUSTOM_ATTRIBUTE_BINDING = 'v-bind="$attrs"'
TWO_WAY_BINDING_PROP = "modelValue"


def detect_features(view: str, bridge: BridgeDescriptor) -> FeatureFlags:
    """Derive which generated sections the view needs from its original source."""
    is_refreshable = REFRESH_FUNCTION in view

    return FeatureFlags(
        needs_bridge_state=bool(bridge.functions or bridge.data or is_refreshable),
        is_refreshable=is_refreshable,
        uses_element_refs=uses_element_refs(view),
        uses_two_way_binding=TWO_WAY_BINDING_PROP in view,
        has_custom_attribute_binding=CUSTOM_ATTRIBUTE_BINDING in view,
    )
