"""Collects the server-rendered templates of Splade components.

Each component renders to a ``<generic-splade-component>`` tag while its
markup is pushed into a ``spladeTemplates`` script, from which the compiled
Vue component picks it up by template id.
"""

import hashlib
from typing import Any, Dict, List, Mapping, Optional

from splade_core.runtime.escape import escape_html, js_from


def template_id_for(source_path: str, line: int = 0) -> str:
    """Stable template id for a component usage at a given source location."""
    return hashlib.md5(f"{source_path}.{line}".encode("utf-8")).hexdigest()


class TemplateRegistry:
    """Template store for a single render pass.

    Create one per request (or per test) instead of sharing state between
    renders. ``start_tracking`` makes the registry remember each component's
    rendered output so it can be looked up by id afterwards.
    """

    def __init__(self, tracking: bool = False) -> None:
        self.tracking = tracking
        self._outputs: Dict[str, str] = {}
        self._script_lines: List[str] = []

    def start_tracking(self) -> None:
        self.tracking = True
        self.clear()

    def clear(self) -> None:
        self._outputs.clear()
        self._script_lines.clear()

    def get(self, template_id: str) -> Optional[str]:
        return self._outputs.get(template_id)

    def render_component(
        self,
        bridge: Mapping[str, Any],
        output: str,
        template_id: str,
        attributes: str = "",
    ) -> str:
        """Register the rendered markup and return the tag that mounts it."""
        if self.tracking:
            self._outputs[template_id] = output

        self._script_lines.append(
            f"spladeTemplates[{js_from(template_id)}] = {js_from(output)};"
        )

        bridge_json = escape_html(js_from({**bridge, "template_hash": template_id}))
        attrs = f"{attributes} " if attributes else ""
        tag = (
            f'<generic-splade-component {attrs}:bridge="{bridge_json}">'
            "</generic-splade-component>"
        )

        if self.tracking:
            return f'<!--splade-template-id="{escape_html(template_id)}"-->{tag}'
        return tag

    def render_script(self) -> str:
        """The script block defining every template registered so far."""
        if not self._script_lines:
            return ""

        return "\n".join(["const spladeTemplates = {};", *self._script_lines])
