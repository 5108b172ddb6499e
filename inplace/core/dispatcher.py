# inplace/core/dispatcher.py
"""
Renders a single file entry: resolves its engine, merges the metadata
layers into the render context, awaits the engine and computes the new
file name.
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import structlog

from inplace.core.engines.registry import Engine, EngineRef, EngineRegistry, engine_ref_from_option
from inplace.core.files import FileEntry, FileMap
from inplace.exceptions import ConfigError, EngineNotFoundError, RenderError
from inplace.util import split_extension

log = structlog.get_logger(__name__)

@dataclass
class RenderResult:
    source: str
    target: str
    contents: bytes
    engine: str

    @property
    def renamed(self) -> bool:
        return self.source != self.target

def resolve_engine(
    filename: str,
    entry: FileEntry,
    registry: EngineRegistry,
    default_engine: Optional[EngineRef],
) -> Engine:
    """File metadata engine > plugin engine > engine registered for the file's extension."""
    try:
        file_engine = engine_ref_from_option(entry.engine)
    except ConfigError as e:
        raise EngineNotFoundError(
            f"invalid engine in metadata of '{filename}': {e}", filename=filename, engine=repr(entry.engine)
        ) from e

    for source, ref in (("file_metadata", file_engine), ("plugin_option", default_engine)):
        if ref is None:
            continue
        engine = ref.resolve(registry)
        if engine is None:
            raise EngineNotFoundError(
                f"no engine named '{ref}' is registered (needed to render '{filename}')",
                filename=filename, engine=str(ref),
            )
        log.debug("engine_resolved", filename=filename, engine=engine.name, source=source)
        return engine

    extension = split_extension(filename)[1]
    engine = registry.for_extension(extension)
    if engine is None:
        raise EngineNotFoundError(
            f"no engine found to render '{filename}' (extension '.{extension}')",
            filename=filename, engine=extension,
        )
    log.debug("engine_resolved", filename=filename, engine=engine.name, source="extension")
    return engine

def output_filename(filename: str, engine: Engine) -> str:
    # "page.html.hbs" -> "page.html", "page.hbs" -> "page.html", forced "page.md" -> "page.html".
    stem, extension = split_extension(filename)
    if extension in engine.input_extensions and split_extension(stem)[1]:
        return stem
    return f"{stem}.{engine.output_extension}"

def build_render_context(
    filename: str,
    entry: FileEntry,
    global_metadata: Mapping[str, Any],
    options: Mapping[str, Any],
    text: str,
) -> Dict[str, Any]:
    # later layers win: global metadata < file metadata < engine options.
    context: Dict[str, Any] = {}
    context.update(global_metadata)
    context.update(entry.local_context())
    context.update(options)
    context["contents"] = text
    context["filename"] = filename
    return context

async def render_file(
    filename: str,
    entry: FileEntry,
    registry: EngineRegistry,
    default_engine: Optional[EngineRef],
    global_metadata: Optional[Mapping[str, Any]] = None,
    engine_options: Optional[Mapping[str, Any]] = None,
    offload: bool = False,
) -> RenderResult:
    """
    Renders one file. Does not touch the file mapping; see apply_result.

    `offload` moves synchronous engines off the event loop thread.
    """
    engine = resolve_engine(filename, entry, registry, default_engine)
    options = {**dict(engine_options or {}), **entry.engine_options}

    try:
        text = entry.text
    except UnicodeDecodeError as e:
        raise RenderError(
            f"failed to render '{filename}' with engine '{engine.name}': contents are not valid utf-8 ({e})",
            filename=filename, engine=engine.name,
        ) from e

    context = build_render_context(filename, entry, global_metadata or {}, options, text)
    log.info("rendering_file", filename=filename, engine=engine.name)
    try:
        rendered = await engine.render_async(text, options, context, offload=offload)
    except Exception as e:
        log.error("engine_render_failed", filename=filename, engine=engine.name, error=str(e))
        raise RenderError(
            f"failed to render '{filename}' with engine '{engine.name}': {e}",
            filename=filename, engine=engine.name,
        ) from e

    if not isinstance(rendered, str):
        raise RenderError(
            f"engine '{engine.name}' returned {type(rendered).__name__} instead of text for '{filename}'",
            filename=filename, engine=engine.name,
        )

    target = output_filename(filename, engine)
    log.debug("file_rendered", filename=filename, target=target, engine=engine.name)
    return RenderResult(source=filename, target=target, contents=rendered.encode("utf-8"), engine=engine.name)

def apply_result(files: FileMap, result: RenderResult, entry: Optional[FileEntry] = None) -> FileEntry:
    # writes the rendered contents and moves the entry to its new key.
    entry = entry if entry is not None else files[result.source]
    entry.contents = result.contents
    if result.renamed:
        if files.get(result.source) is entry:
            del files[result.source]
        if result.target in files:
            log.warning("rendered_file_replaces_existing_entry", source=result.source, target=result.target)
        files[result.target] = entry
    return entry
