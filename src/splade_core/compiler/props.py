"""Merges the bridge's default props into the script's defineProps() call."""

from typing import Dict, Iterable, Optional

from splade_core.compiler.models import DefinePropsCall, PropEntry, PropertyDeclaration

PROPS_BINDING = "props"


def default_props(uses_two_way_binding: bool) -> Dict[str, str]:
    """Props every generated component declares, mapped to their Vue definition."""
    defaults = {
        "spladeBridge": "Object",
        "spladeTemplateId": "String",
    }

    if uses_two_way_binding:
        defaults["modelValue"] = "{}"

    return defaults


def render_props_call(entries: Iterable[PropEntry]) -> str:
    body = ", ".join(entry.source for entry in entries)
    return f"defineProps({{{body}}})"


def render_define_props(entries: Iterable[PropEntry]) -> str:
    return f"const {PROPS_BINDING} = {render_props_call(entries)};"


def merge_define_props(
    defaults: Dict[str, str], existing: Optional[DefinePropsCall]
) -> PropertyDeclaration:
    """
    Build the defineProps() statement for the generated component.

    Without an existing call, the statement declares exactly the defaults.
    Otherwise the user's entries win: defaults are only added for names the
    script does not declare, ahead of the user's own entries.
    """
    if existing is None:
        entries = [
            PropEntry(name=name, source=f"{name}: {value}")
            for name, value in defaults.items()
        ]
        return PropertyDeclaration(exists=False, new_statement=render_define_props(entries))

    declared = set(existing.names)
    entries = [
        PropEntry(name=name, source=f"{name}: {value}")
        for name, value in defaults.items()
        if name not in declared
    ]
    entries.extend(existing.entries)

    if existing.inline:
        # The call sits inside an expression, so it becomes a reference to
        # the props declared ahead of the script.
        return PropertyDeclaration(
            exists=True,
            original_span=existing.span,
            merged_source=PROPS_BINDING,
            new_statement=render_define_props(entries),
        )

    # Keep a withDefaults() wrapper around the merged call
    call_start, call_end = existing.call_at
    head = existing.span[existing.expression_at : call_start]
    tail = existing.span[call_end:].rstrip()
    if tail.endswith(";"):
        tail = tail[:-1].rstrip()

    merged = f"const {PROPS_BINDING} = {head}{render_props_call(entries)}{tail};"
    if existing.binding and existing.binding != PROPS_BINDING:
        merged += f"\nconst {existing.binding} = {PROPS_BINDING};"

    return PropertyDeclaration(
        exists=True, original_span=existing.span, merged_source=merged
    )


def apply_declaration(
    script: str, declaration: PropertyDeclaration, existing: Optional[DefinePropsCall]
) -> str:
    """Replace the first defineProps() statement in place; later ones are kept."""
    if not declaration.exists or existing is None:
        return script

    return script[: existing.start] + declaration.merged_source + script[existing.end :]
