from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

# Templates for the generated Vue component sections
_env = Environment(
    loader=PackageLoader("splade_core", "templates"),
    autoescape=select_autoescape(["html", "xml"]),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_template(template_name: str, **context: Any) -> str:
    """Render a Jinja2 template from src/splade_core/templates/.

    Args:
        template_name: Name of the template, e.g. ``render_function.js``
        context: Variables to pass to the template

    Returns:
        The rendered source, without a trailing newline
    """
    template = _env.get_template(template_name)
    return template.render(**context)
