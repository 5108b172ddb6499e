import asyncio
import json

import pytest

from inplace.core.engines import Engine

def _build_render(content, options, context):
    return f"<h1>{context.get('title', '')}</h1>\n{content.strip()}\n"

def _options_render(content, options, context):
    return json.dumps(dict(options), sort_keys=True)

def _error_render(content, options, context):
    raise ValueError("something went wrong in the engine")

async def _async_render(content, options, context):
    await asyncio.sleep(0)
    return content.upper()

@pytest.fixture
def build_engine() -> Engine:
    """Wraps contents in a heading built from the file's title."""
    return Engine("build", _build_render, output_extension="html")

@pytest.fixture
def options_engine() -> Engine:
    """Renders the engine options it receives as JSON."""
    return Engine("options", _options_render, output_extension="json")

@pytest.fixture
def error_engine() -> Engine:
    return Engine("error", _error_render, output_extension="html")

@pytest.fixture
def async_engine() -> Engine:
    return Engine("shout", _async_render, input_extensions=("shout",), output_extension="txt")
