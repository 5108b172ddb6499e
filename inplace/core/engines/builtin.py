# inplace/core/engines/builtin.py
"""
Engines shipped with the plugin. Each one is a plain render function wrapped
in an Engine with its trigger extensions and canonical output extension.
"""
from typing import Any, Dict, Mapping

import jinja2
import pybars  # type: ignore
import structlog

from .helpers import BUILTIN_HELPERS
from .registry import Engine, EngineRegistry

log = structlog.get_logger(__name__)

JINJA_ENVIRONMENT_OPTIONS = (
    "autoescape",
    "trim_blocks",
    "lstrip_blocks",
    "keep_trailing_newline",
    "block_start_string",
    "block_end_string",
    "variable_start_string",
    "variable_end_string",
    "comment_start_string",
    "comment_end_string",
)

def render_handlebars(content: str, options: Mapping[str, Any], context: Mapping[str, Any]) -> str:
    compiler = pybars.Compiler()
    helpers = {**BUILTIN_HELPERS, **dict(options.get("helpers") or {})}
    partials = {
        name: compiler.compile(source)
        for name, source in dict(options.get("partials") or {}).items()
    }
    template = compiler.compile(content)
    log.debug("handlebars_template_compiled", helpers=sorted(helpers), partials=sorted(partials))
    return str(template(dict(context), helpers=helpers, partials=partials))

def render_jinja2(content: str, options: Mapping[str, Any], context: Mapping[str, Any]) -> str:
    env_kwargs: Dict[str, Any] = {"autoescape": False, "keep_trailing_newline": True}
    env_kwargs.update({k: options[k] for k in JINJA_ENVIRONMENT_OPTIONS if k in options})
    if options.get("strict"):
        env_kwargs["undefined"] = jinja2.StrictUndefined
    env = jinja2.Environment(**env_kwargs)
    env.filters.update(dict(options.get("filters") or {}))
    return env.from_string(content).render(dict(context))

def render_format(content: str, options: Mapping[str, Any], context: Mapping[str, Any]) -> str:
    # plain str.format_map substitution for "{title}" style placeholders.
    return content.format_map(dict(context))

HANDLEBARS = Engine("handlebars", render_handlebars, input_extensions=("hbs", "handlebars"), output_extension="html")
JINJA2 = Engine("jinja2", render_jinja2, input_extensions=("j2", "jinja", "jinja2"), output_extension="html")
FORMAT = Engine("format", render_format, input_extensions=("tmpl",), output_extension="txt")

BUILTIN_ENGINES = [HANDLEBARS, JINJA2, FORMAT]

def default_registry() -> EngineRegistry:
    return EngineRegistry(list(BUILTIN_ENGINES))
