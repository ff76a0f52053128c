from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, Sequence

import pytest

from splade_core.compiler.exceptions import BridgeContractError
from splade_core.compiler.extractor import ExtractVueScript, compile_view
from splade_core.compiler.sink import ArtifactSink
from splade_core.config import SpladeConfig


def bridge(
    tag: str = "Foo",
    functions: Sequence[str] = (),
    data: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    return {
        "spladeBridge": {
            "tag": tag,
            "functions": list(functions),
            "data": data or {},
        }
    }


def compile_source(view: str, data: Dict[str, Any]) -> tuple[str, str]:
    compiled = ExtractVueScript.from_view(view, data, "test.blade.php").compile()
    assert compiled is not None
    artifact, markup = compiled
    return artifact.content, markup


def test_view_without_script_is_untouched(tmp_path: Path) -> None:
    sink = ArtifactSink(tmp_path / "compiled")
    view = "<div>{{ x }}</div>"

    result = ExtractVueScript.from_view(view, bridge(), "test.blade.php").handle(sink)

    assert result == view
    assert not (tmp_path / "compiled").exists()


def test_view_without_script_does_not_need_bridge(tmp_path: Path) -> None:
    sink = ArtifactSink(tmp_path)
    assert ExtractVueScript("  <p>Hi</p>", {}).handle(sink) == "  <p>Hi</p>"


def test_simple_script_is_compiled(tmp_path: Path) -> None:
    sink = ArtifactSink(tmp_path)
    view = "<script setup>let x = 1</script><div>{{x}}</div>"

    result = ExtractVueScript.from_view(view, bridge(), "test.blade.php").handle(sink)

    assert result == "<div>{{x}}</div>"
    assert (tmp_path / "Foo.vue").read_text(encoding="utf-8") == dedent("""\
        <script setup>
        import { GenericSpladeComponent } from '@protonemedia/laravel-splade-core';
        import { h } from 'vue';
        const props = defineProps({spladeBridge: Object, spladeTemplateId: String});
        let x = 1
        const spladeRender = h({
            name: "FooRender",
            components: {GenericSpladeComponent},
            template: spladeTemplates[props.spladeTemplateId],
            data: () => { return { x } }
        });
        </script>
        <template><spladeRender /></template>""")


def test_no_bridge_state_without_functions_or_data() -> None:
    code, _ = compile_source("<script setup>let x = 1</script><div>{{x}}</div>", bridge())

    assert "_spladeBridgeState" not in code
    assert "BladeComponent," not in code


def test_element_refs() -> None:
    view = '<script setup></script><textarea ref="textarea"></textarea>'
    code, markup = compile_source(view, bridge())

    assert markup == (
        "<textarea :ref=\"(value) => setSpladeRef('textarea', value)\"></textarea>"
    )
    assert "const $refs = {};" in code
    assert "const setSpladeRef = (key, value) => $refs[key] = value;" in code
    assert "data: () => { return { setSpladeRef } }" in code


def test_function_loading_state() -> None:
    view = dedent("""
        <script setup>
        const busy = () => save.loading
        </script>
        <button @click="save">{{ save.loading ? 'Saving' : 'Save' }}</button>
    """)
    code, markup = compile_source(view, bridge(functions=["save"]))

    assert "const busy = () => save.loading.value" in code
    assert "save.loading.value ? 'Saving'" in markup
    assert code.count("asyncComponentMethod(") == 1
    assert (
        "const save = BladeComponent.asyncComponentMethod('save', _spladeBridgeState);"
        in code
    )
    assert (
        "import { BladeComponent, GenericSpladeComponent } from '@protonemedia/laravel-splade-core';"
        in code
    )
    assert "import { h, ref } from 'vue';" in code
    assert "const _spladeBridgeState = ref(props.spladeBridge);" in code


def test_model_value_adds_prop() -> None:
    view = '<script setup></script><input :value="modelValue">'
    code, _ = compile_source(view, bridge())

    assert (
        "const props = defineProps({spladeBridge: Object, spladeTemplateId: String, modelValue: {}});"
        in code
    )


def test_existing_define_props_is_merged_in_place() -> None:
    view = dedent("""
        <script setup>
        const props = defineProps({ title: String })
        const upper = computed(() => props.title.toUpperCase())
        </script>
        <h1>{{ upper }}</h1>
    """)
    code, markup = compile_source(view, bridge())

    assert markup == "<h1>{{ upper }}</h1>"
    assert code.count("defineProps(") == 1
    assert (
        "const props = defineProps({spladeBridge: Object, spladeTemplateId: String, title: String});\n"
        "const upper = computed"
    ) in code
    assert "import { computed, h } from 'vue';" in code
    assert "data: () => { return { props, upper } }" in code


def test_function_bridges_preserve_order() -> None:
    view = "<script setup></script><div></div>"
    code, _ = compile_source(view, bridge(functions=["zeta", "alpha", "mid"]))

    assert code.count("asyncComponentMethod(") == 3
    assert code.index("const zeta =") < code.index("const alpha =") < code.index("const mid =")


def test_computed_bridges_preserve_data_order() -> None:
    view = "<script setup></script><div></div>"
    code, _ = compile_source(view, bridge(data={"b": 1, "a": 2}))

    assert code.count("computed({") == 2
    assert code.index("const b = computed") < code.index("const a = computed")
    assert "import { computed, h, ref } from 'vue';" in code
    assert "data: () => { return { b, a } }" in code


def test_section_order_and_exposed_data() -> None:
    view = dedent("""
        <script setup>
        const local = 1
        </script>
        <div v-bind="$attrs">
            <input ref="field" v-model="count">
            <button @click="refreshComponent">{{ refreshComponent.loading }}</button>
        </div>
    """)
    code, markup = compile_source(view, bridge(functions=["save"], data={"count": 0}))

    order = [
        "<script setup>",
        "import { BladeComponent, GenericSpladeComponent }",
        "import { computed, h, inject, ref } from 'vue';",
        "const props = defineProps(",
        "const _spladeBridgeState =",
        "const save = BladeComponent",
        "const count = computed",
        "const _spladeTemplateBus =",
        "const $refs = {};",
        "const local = 1",
        "const spladeRender = h({",
        "</script>",
        "<template><spladeRender /></template>",
    ]
    positions = [code.index(part) for part in order]
    assert positions == sorted(positions)

    assert "    inheritAttrs: false," in code
    assert "data: () => { return { count, local, save, refreshComponent, setSpladeRef } }" in code
    assert "{{ refreshComponent.loading.value }}" in markup
    assert code.endswith("</script>\n<template><spladeRender /></template>")


def test_compilation_is_deterministic() -> None:
    view = dedent("""
        <script setup>
        const props = defineProps(['title'])
        const count = ref(0)
        </script>
        <div ref="root">{{ title }} {{ count }}</div>
    """)
    data = bridge(functions=["save", "load"], data={"items": [], "name": "x"})

    assert compile_source(view, data) == compile_source(view, data)


def test_missing_bridge_is_a_contract_violation() -> None:
    with pytest.raises(BridgeContractError, match="test.blade.php"):
        compile_source("<script setup></script><div></div>", {})

    with pytest.raises(KeyError):
        compile_source(
            "<script setup></script><div></div>",
            {"spladeBridge": {"tag": "Foo", "data": {}}},
        )


def test_invalid_bridge_names_are_rejected() -> None:
    with pytest.raises(BridgeContractError, match="Invalid component tag"):
        compile_source("<script setup></script>", bridge(tag="../evil"))

    with pytest.raises(BridgeContractError, match="Duplicate function name"):
        compile_source("<script setup></script>", bridge(functions=["a", "a"]))


def test_recompiling_overwrites_artifact(tmp_path: Path) -> None:
    sink = ArtifactSink(tmp_path)

    ExtractVueScript("<script setup>let a = 1</script>", bridge()).handle(sink)
    ExtractVueScript("<script setup>let b = 2</script>", bridge()).handle(sink)

    content = (tmp_path / "Foo.vue").read_text(encoding="utf-8")
    assert "let b = 2" in content
    assert "let a = 1" not in content


def test_compile_view_uses_config(tmp_path: Path) -> None:
    config = SpladeConfig(compiled_scripts=Path("out"), base_path=tmp_path)

    markup = compile_view(
        "<script setup>let a = 1</script><p>{{ a }}</p>", bridge(tag="Bar"), config=config
    )

    assert markup == "<p>{{ a }}</p>"
    assert (tmp_path / "out" / "Bar.vue").exists()


def test_destructured_define_props_stays_valid() -> None:
    view = dedent("""
        <script setup>
        const { title } = defineProps({ title: String })
        </script>
        <h1>{{ title }}</h1>
    """)
    code, _ = compile_source(view, bridge())

    assert code.count("defineProps(") == 1
    assert "= const" not in code
    declaration = (
        "const props = defineProps({spladeBridge: Object, spladeTemplateId: String, title: String});"
    )
    assert code.index(declaration) < code.index("const { title } = props\n")
    assert "data: () => { return { title } }" in code
