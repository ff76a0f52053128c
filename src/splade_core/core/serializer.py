"""Builds the spladeBridge descriptor from a server component."""

import dataclasses
import datetime
import enum
import typing
from types import UnionType
from typing import Any, Dict, List, Optional, Union

from splade_core.compiler.models import BridgeDescriptor
from splade_core.core.bridge import VueProp, VueRef, is_vue_function

VUE_TYPES: Dict[Any, str] = {
    bool: "Boolean",
    int: "Number",
    float: "Number",
    str: "String",
    list: "Array",
    tuple: "Array",
    dict: "Object",
    type(None): "Null",
}


def map_type_to_vue(annotation: Any) -> Union[str, List[Any]]:
    """Map a Python annotation to a Vue prop type (a list for unions)."""
    if annotation is None:
        return "Any"

    origin = typing.get_origin(annotation)
    if origin is Union or origin is UnionType:
        return [map_type_to_vue(arg) for arg in typing.get_args(annotation)]
    if origin is not None:
        annotation = origin

    return VUE_TYPES.get(annotation, "Any")


def to_bridge_value(value: Any) -> Any:
    """Convert a Python value into something JSON can carry to the client."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_bridge_value(dataclasses.asdict(value))
    if hasattr(value, "to_dict") and callable(value.to_dict):
        return to_bridge_value(value.to_dict())
    if hasattr(value, "__json__") and callable(value.__json__):
        return to_bridge_value(value.__json__())
    if isinstance(value, enum.Enum):
        return to_bridge_value(value.value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_bridge_value(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        try:
            value = sorted(value)
        except TypeError:
            value = list(value)
    if isinstance(value, (list, tuple)):
        return [to_bridge_value(item) for item in value]
    return value


def _annotations(cls: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Unresolvable forward references; fall back to the raw annotations
        hints: Dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(getattr(klass, "__annotations__", {}))
        return hints


def _members(cls: type) -> Dict[str, Any]:
    """Public class attributes in definition order, base classes first."""
    members: Dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name.startswith("_"):
                continue
            members.pop(name, None)
            members[name] = value
    return members


def get_tag(component: Any) -> str:
    cls = type(component)
    return getattr(cls, "__splade_tag__", None) or cls.__name__


def describe_component(component: Any, tag: Optional[str] = None) -> BridgeDescriptor:
    """Collect the members registered with @vue_ref / vue_ref() / vue_prop()."""
    cls = type(component)
    annotations = _annotations(cls)

    functions: List[str] = []
    data: Dict[str, Any] = {}
    props: Dict[str, Any] = {}

    for name, member in _members(cls).items():
        if isinstance(member, VueProp):
            vue_type = member.type or map_type_to_vue(annotations.get(name))
            props[name] = {
                "default": to_bridge_value(member.default),
                "type": vue_type,
                "value": to_bridge_value(getattr(component, name)),
            }
        elif isinstance(member, VueRef):
            data[name] = to_bridge_value(getattr(component, name))
        elif is_vue_function(member):
            functions.append(name)

    return BridgeDescriptor(
        tag=tag or get_tag(component),
        functions=tuple(functions),
        data=data,
        props=props,
    )
