import copy
import inspect
from typing import Any, Callable, Optional, TypeVar, Union, overload

F = TypeVar("F", bound=Callable[..., Any])

_MISSING: Any = object()


class VueRef:
    """Class attribute holding data that is two-way bound to the Vue component.

    Usage:
        class Counter(Component):
            count: int = vue_ref(0)

    In the view: <button @click="count++">{{ count }}</button>
    """

    def __init__(self, default: Any = None) -> None:
        self.default = default
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        if self.name not in instance.__dict__:
            # Each instance gets its own copy of a mutable default
            instance.__dict__[self.name] = copy.deepcopy(self.default)
        return instance.__dict__[self.name]

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.name] = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.default!r})"


class VueProp(VueRef):
    """Class attribute passed to the Vue component as a prop.

    The Vue type is derived from the attribute's annotation unless ``type``
    is given explicitly.
    """

    def __init__(self, default: Any = None, type: Any = None) -> None:
        super().__init__(default)
        self.type = type


@overload
def vue_ref(target: F) -> F: ...


@overload
def vue_ref(target: Any = ...) -> VueRef: ...


def vue_ref(target: Any = _MISSING) -> Union[Callable[..., Any], VueRef]:
    """Expose a method or a data field to the Vue component.

    On a method it marks the method as callable from the client:

        @vue_ref
        def save(self):
            ...

    In the view: <button @click="save">Save</button>

    Called with a value it declares a bound data field with that default.
    """
    if inspect.isfunction(target):
        setattr(target, "_splade_vue_ref", True)
        return target

    return VueRef(None if target is _MISSING else target)


def vue_prop(default: Any = None, type: Any = None) -> VueProp:
    """Declare a prop of the Vue component with its default value."""
    return VueProp(default, type=type)


def is_vue_function(value: Any) -> bool:
    return callable(value) and getattr(value, "_splade_vue_ref", False) is True
