"""Lexical scanner for <script setup> fragments."""

import re
from typing import List, Optional, Tuple

from splade_core.compiler.models import JS_IDENTIFIER, DefinePropsCall, PropEntry

# Vue APIs that are imported automatically when the script mentions them.
VUE_FUNCTIONS = (
    "computed",
    "customRef",
    "defineAsyncComponent",
    "effectScope",
    "getCurrentInstance",
    "getCurrentScope",
    "inject",
    "isProxy",
    "isReactive",
    "isReadonly",
    "isRef",
    "markRaw",
    "nextTick",
    "onActivated",
    "onBeforeMount",
    "onBeforeUnmount",
    "onBeforeUpdate",
    "onDeactivated",
    "onErrorCaptured",
    "onMounted",
    "onScopeDispose",
    "onUnmounted",
    "onUpdated",
    "provide",
    "reactive",
    "readonly",
    "ref",
    "shallowReactive",
    "shallowReadonly",
    "shallowRef",
    "toRaw",
    "toRef",
    "toRefs",
    "toValue",
    "triggerRef",
    "unref",
    "useAttrs",
    "useSlots",
    "watch",
    "watchEffect",
    "watchPostEffect",
    "watchSyncEffect",
)

OPENERS = "([{"
CLOSERS = ")]}"

# A trailing character that means the statement continues on the next line
CONTINUES_AFTER = set("=,([{+-*/%&|^!?:<>.~")
# A leading character that means the next line continues the statement
CONTINUES_BEFORE = set(".,+-*/%&|^?:=<>")

DECLARATION_PATTERN = re.compile(
    r"(?<![\w$.])(?:(?:const|let|var)\s+|(?:async\s+)?function\b\s*\*?\s*([A-Za-z_$][\w$]*))"
)
DEFINE_PROPS_PATTERN = re.compile(r"(?<![\w$.])defineProps\s*\(")
BINDING_PATTERN = re.compile(
    r"(?<![\w$.])(?:const|let|var)\s+([A-Za-z_$][\w$]*)\s*=\s*\Z"
)
WITH_DEFAULTS_PATTERN = re.compile(r"(?<![\w$.])withDefaults\s*(\()\s*\Z")
STATEMENT_TAIL = re.compile(r"[ \t\r]*(?:;|\n|\}|\Z)")
NEXT_CHAR = re.compile(r"\s*(\S)")


def _string_end(script: str, start: int) -> int:
    """Index just past the quoted string starting at ``start``."""
    quote = script[start]
    i = start + 1
    n = len(script)
    while i < n:
        ch = script[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n":
            # unterminated; stop at the line end
            return i
        i += 1
    return n


def _template_end(script: str, start: int) -> int:
    """Index just past the template literal whose body starts at ``start``."""
    i = start
    n = len(script)
    while i < n:
        ch = script[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "`":
            return i + 1
        if script.startswith("${", i):
            i = _expression_end(script, i + 2)
            continue
        i += 1
    return n


def _expression_end(script: str, start: int) -> int:
    """Index just past the ``}`` closing a ``${`` substitution."""
    depth = 1
    i = start
    n = len(script)
    while i < n:
        ch = script[i]
        if ch == "`":
            i = _template_end(script, i + 1)
            continue
        if ch in "'\"":
            i = _string_end(script, i)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return n


def mask_script(script: str) -> str:
    """
    Blank out the contents of strings, template literals and comments.

    The result has the same length as the input and keeps newlines and
    quote characters, so offsets found in the masked text index the original
    script directly. Regex literals are not recognized.
    """
    chars = list(script)
    n = len(script)

    def blank(start: int, end: int) -> None:
        for k in range(start, end):
            if chars[k] != "\n":
                chars[k] = " "

    i = 0
    while i < n:
        ch = script[i]
        if ch in "'\"`":
            end = _string_end(script, i) if ch != "`" else _template_end(script, i + 1)
            closed = end - 1 > i and script[end - 1] == ch
            blank(i + 1, end - 1 if closed else end)
            i = end
            continue

        if script.startswith("//", i):
            end = script.find("\n", i)
            if end == -1:
                end = n
        elif script.startswith("/*", i):
            end = script.find("*/", i + 2)
            end = n if end == -1 else end + 2
        else:
            i += 1
            continue

        blank(i, end)
        i = end

    return "".join(chars)


def _depths(masked: str) -> List[int]:
    """Bracket nesting depth before each character."""
    depths = []
    depth = 0
    for ch in masked:
        depths.append(depth)
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            depth = max(depth - 1, 0)
    return depths


def _matching_close(masked: str, open_at: int) -> int:
    """Index of the bracket closing the one at ``open_at``, or -1."""
    depth = 0
    for i in range(open_at, len(masked)):
        ch = masked[i]
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            depth -= 1
            if depth == 0:
                return i
    return -1


def _split_top_level(masked: str, start: int, end: int) -> List[Tuple[int, int]]:
    """Split ``masked[start:end]`` on commas that are not nested in brackets."""
    parts = []
    depth = 0
    part_start = start
    for i in range(start, end):
        ch = masked[i]
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append((part_start, i))
            part_start = i + 1
    parts.append((part_start, end))
    return parts


def _find_top_level(masked: str, start: int, end: int, char: str) -> int:
    depth = 0
    for i in range(start, end):
        ch = masked[i]
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            depth -= 1
        elif ch == char and depth == 0:
            return i
    return -1


def _strip_span(text: str, start: int, end: int) -> Tuple[int, int]:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return start, end


def _statement_end(masked: str, pos: int) -> int:
    """Find where the statement starting at ``pos`` ends (ASI-aware, roughly)."""
    depth = 0
    n = len(masked)
    for i in range(pos, n):
        ch = masked[i]
        if ch in OPENERS:
            depth += 1
        elif ch in CLOSERS:
            if depth == 0:
                return i
            depth -= 1
        elif depth == 0 and ch == ";":
            return i
        elif depth == 0 and ch == "\n":
            before = masked[pos:i].rstrip()
            following = NEXT_CHAR.match(masked, i)
            if (
                before
                and before[-1] not in CONTINUES_AFTER
                and not (following and following.group(1) in CONTINUES_BEFORE)
            ):
                return i
    return n


def _at_statement_start(masked: str, index: int) -> bool:
    prefix = masked[:index].rstrip()
    if not prefix or prefix[-1] in ";{}":
        return True

    # Preceded by a line break that ends the previous statement
    return "\n" in masked[len(prefix) : index] and prefix[-1] not in CONTINUES_AFTER


def binding_names(pattern: str) -> List[str]:
    """Names bound by a (masked) declaration target, including destructuring."""
    pattern = pattern.strip()
    if not pattern:
        return []

    default_at = _find_top_level(pattern, 0, len(pattern), "=")
    if default_at != -1:
        pattern = pattern[:default_at].strip()

    if pattern.startswith("..."):
        return binding_names(pattern[3:])

    if JS_IDENTIFIER.match(pattern):
        return [pattern]

    names: List[str] = []
    if pattern.startswith("{") and pattern.endswith("}"):
        for start, end in _split_top_level(pattern, 1, len(pattern) - 1):
            part = pattern[start:end].strip()
            if not part:
                continue
            colon = _find_top_level(part, 0, len(part), ":")
            if colon != -1 and not part.startswith("..."):
                names.extend(binding_names(part[colon + 1 :]))
            else:
                names.extend(binding_names(part))
    elif pattern.startswith("[") and pattern.endswith("]"):
        for start, end in _split_top_level(pattern, 1, len(pattern) - 1):
            names.extend(binding_names(pattern[start:end]))

    return names


def _unquote(text: str) -> Optional[str]:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return None


class ScriptParser:
    """Scans a <script setup> fragment for the few constructs the compiler needs."""

    def __init__(self, script: str) -> None:
        self.script = script
        self.masked = mask_script(script)
        self._depths = _depths(self.masked)

    def get_vue_functions(self) -> List[str]:
        """Vue API names mentioned anywhere in the script."""
        return [name for name in VUE_FUNCTIONS if name in self.script]

    def get_variables(self) -> List[str]:
        """Top-level const/let/var and function declarations, in order."""
        names: List[str] = []

        for match in DECLARATION_PATTERN.finditer(self.masked):
            if self._depths[match.start()] != 0:
                continue
            if not _at_statement_start(self.masked, match.start()):
                continue

            if match.group(1):
                found = [match.group(1)]
            else:
                found = self._declarator_names(match.end())

            for name in found:
                if name not in names:
                    names.append(name)

        return names

    def _declarator_names(self, pos: int) -> List[str]:
        end = _statement_end(self.masked, pos)
        names: List[str] = []
        for start, stop in _split_top_level(self.masked, pos, end):
            equals = _find_top_level(self.masked, start, stop, "=")
            target = self.masked[start : equals if equals != -1 else stop]
            names.extend(binding_names(target))
        return names

    def get_define_props(self) -> Optional[DefinePropsCall]:
        """The first defineProps() call, or None if the script has none.

        A call that makes up a whole statement, optionally wrapped in
        withDefaults() and bound to a single identifier, spans that
        statement. Any other call, e.g. a destructured one, spans just
        ``defineProps(...)`` and is marked ``inline``.
        """
        match = DEFINE_PROPS_PATTERN.search(self.masked)
        if not match:
            return None

        open_at = match.end() - 1
        close_at = _matching_close(self.masked, open_at)
        if close_at == -1:
            return None
        entries = tuple(self._parse_props_argument(open_at + 1, close_at))

        call_start, call_end = match.start(), close_at + 1
        expression_start, expression_end = call_start, call_end

        wrapper = WITH_DEFAULTS_PATTERN.search(self.masked, 0, call_start)
        if wrapper:
            wrapper_close = _matching_close(self.masked, wrapper.start(1))
            if wrapper_close != -1:
                expression_start, expression_end = wrapper.start(), wrapper_close + 1

        declared = BINDING_PATTERN.search(self.masked, 0, expression_start)
        if not STATEMENT_TAIL.match(self.masked, expression_end) or (
            not declared and not _at_statement_start(self.masked, expression_start)
        ):
            return DefinePropsCall(
                span=self.script[call_start:call_end],
                start=call_start,
                end=call_end,
                binding=None,
                entries=entries,
                call_at=(0, call_end - call_start),
                inline=True,
            )

        start = declared.start() if declared else expression_start
        end = expression_end
        following = re.compile(r"[ \t]*;").match(self.masked, end)
        if following:
            end = following.end()

        return DefinePropsCall(
            span=self.script[start:end],
            start=start,
            end=end,
            binding=declared.group(1) if declared else None,
            entries=entries,
            call_at=(call_start - start, call_end - start),
            expression_at=expression_start - start,
        )

    def _parse_props_argument(self, start: int, end: int) -> List[PropEntry]:
        start, end = _strip_span(self.masked, start, end)
        if start == end:
            return []

        first = self.masked[start]
        if first in "{[" and _matching_close(self.masked, start) == end - 1:
            if first == "{":
                return self._parse_object_entries(start + 1, end - 1)
            return self._parse_array_entries(start + 1, end - 1)

        # Any other expression is merged in as a spread
        return [PropEntry(name=None, source=f"...{self.script[start:end]}")]

    def _parse_object_entries(self, start: int, end: int) -> List[PropEntry]:
        entries = []
        for part_start, part_end in _split_top_level(self.masked, start, end):
            part_start, part_end = _strip_span(self.masked, part_start, part_end)
            if part_start == part_end:
                continue

            source = self.script[part_start:part_end]
            if source.startswith("..."):
                entries.append(PropEntry(name=None, source=source))
                continue

            colon = _find_top_level(self.masked, part_start, part_end, ":")
            key = self.script[part_start : colon if colon != -1 else part_end].strip()
            name = _unquote(key)
            if name is None and JS_IDENTIFIER.match(key):
                name = key

            entries.append(PropEntry(name=name, source=source))
        return entries

    def _parse_array_entries(self, start: int, end: int) -> List[PropEntry]:
        entries = []
        for part_start, part_end in _split_top_level(self.masked, start, end):
            name = _unquote(self.script[part_start:part_end].strip())
            if not name:
                continue

            key = name if JS_IDENTIFIER.match(name) else f"'{name}'"
            entries.append(PropEntry(name=name, source=f"{key}: null"))
        return entries
