import re
from typing import Iterable

REFRESH_FUNCTION = "refreshComponent"
REF_SETTER = "setSpladeRef"

# ref="name" as a standalone attribute, not :ref="..." or data-ref="..."
ELEMENT_REF_PATTERN = re.compile(r"(?<![\w:.@-])ref=\"(\w+)\"")

LOADING_PATTERN = re.compile(r"(?<![\w$])([A-Za-z_$][\w$]*)\.loading\b(?!\.value)")


def replace_loading_states(code: str, functions: Iterable[str]) -> str:
    """
    Rewrite loading-state access of bridged functions into a ref access.

    The async wrappers expose ``loading`` as a Vue ref, so it must be unwrapped
    explicitly wherever the template or script reads it.

    Example:
        save.loading  ->  save.loading.value

    Only ``refreshComponent`` and the given function names are rewritten;
    other ``.loading`` accesses are left untouched.
    """
    methods = {REFRESH_FUNCTION, *functions}

    def replacer(match: "re.Match[str]") -> str:
        if match.group(1) not in methods:
            return match.group(0)

        return f"{match.group(1)}.loading.value"

    return LOADING_PATTERN.sub(replacer, code)


def replace_element_refs(markup: str) -> str:
    """
    Rewrite static element refs into a callback that stores the element.

    Example:
        ref="textarea"  ->  :ref="(value) => setSpladeRef('textarea', value)"

    Matches inside attribute values or text are rewritten as well; the
    markup is not tokenized.
    """
    return ELEMENT_REF_PATTERN.sub(
        lambda match: f":ref=\"(value) => {REF_SETTER}('{match.group(1)}', value)\"",
        markup,
    )


def uses_element_refs(view: str) -> bool:
    return ELEMENT_REF_PATTERN.search(view) is not None
