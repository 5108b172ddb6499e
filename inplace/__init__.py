"""
inplace: render build files in place through pluggable template engines.

    from inplace import in_place, FileEntry

    files = {"index.hbs": FileEntry.from_text("<h1>{{title}}</h1>", title="Home")}
    in_place()(files, {"site": "example"})
    files["index.html"].text  # "<h1>Home</h1>"
"""
from inplace.config.settings import PluginConfig
from inplace.core.dispatcher import RenderResult, output_filename, render_file
from inplace.core.engines import ByName, Engine, EngineRegistry, Inline, default_registry
from inplace.core.files import FileEntry
from inplace.core.filtering import check_file, should_process
from inplace.core.pipeline import InPlace, in_place
from inplace.exceptions import (
    ConfigError,
    EngineNotFoundError,
    InPlaceError,
    InvalidPatternError,
    NoFilesError,
    RenderError,
)

__all__ = [
    "PluginConfig",
    "RenderResult",
    "output_filename",
    "render_file",
    "ByName",
    "Engine",
    "EngineRegistry",
    "Inline",
    "default_registry",
    "FileEntry",
    "check_file",
    "should_process",
    "InPlace",
    "in_place",
    "ConfigError",
    "EngineNotFoundError",
    "InPlaceError",
    "InvalidPatternError",
    "NoFilesError",
    "RenderError",
]
