# inplace/core/pipeline.py
import asyncio
from typing import Any, Callable, Dict, List, Mapping, Optional

import structlog

from inplace.config.settings import PluginConfig
from inplace.core.dispatcher import RenderResult, apply_result, render_file
from inplace.core.engines import EngineRegistry, default_registry
from inplace.core.files import FileEntry, FileMap
from inplace.core.filtering import compile_pattern, should_process
from inplace.exceptions import ConfigError, InPlaceError, NoFilesError, RenderError

DoneCallback = Callable[[Optional[InPlaceError]], Any]

def _resolve_global_metadata(metadata: Any) -> Dict[str, Any]:
    # hosts pass either a plain mapping or a build object exposing metadata().
    if metadata is None:
        return {}
    if isinstance(metadata, Mapping):
        return dict(metadata)
    metadata_getter = getattr(metadata, "metadata", None)
    if callable(metadata_getter):
        return dict(metadata_getter() or {})
    raise ConfigError(f"global metadata must be a mapping, got {type(metadata).__name__}")

def _event_loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True

def _check_collision(result: RenderResult, entries: Mapping[str, FileEntry], claimed: Mapping[str, str]):
    # two renders must not end up under the same key, or one result would be lost.
    other = claimed.get(result.target)
    if other is None and result.target != result.source and result.target in entries:
        other = result.target
    if other is not None:
        raise RenderError(
            f"rendering '{result.source}' would produce '{result.target}', "
            f"which collides with '{other}' (also selected for rendering)",
            filename=result.source, engine=result.engine,
        )

class InPlace:
    # renders matching files of a build in place.
    def __init__(self, config: Optional[PluginConfig] = None, registry: Optional[EngineRegistry] = None, **options: Any):
        if config is not None and options:
            raise ConfigError("pass either a PluginConfig or plugin options, not both")
        self.config: PluginConfig = config or PluginConfig.from_options(**options)
        self.registry: EngineRegistry = registry if registry is not None else default_registry()
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")

    def select(self, files: FileMap) -> List[str]:
        # returns the keys that qualify for rendering, in enumeration order.
        matcher = compile_pattern(self.config.effective_pattern(self.registry))
        return [filename for filename in list(files) if should_process(filename, matcher)]

    async def run(self, files: FileMap, metadata: Any = None) -> List[RenderResult]:
        """
        Renders every selected file and mutates `files` in place.

        The first fatal error is latched: no further renders start, renders
        already in flight finish but their results are dropped, and the error
        is raised once everything has settled.
        """
        global_metadata = _resolve_global_metadata(metadata)
        self.log.info("inplace_build_started", file_count=len(files), concurrency=self.config.concurrency)

        selected = self.select(files)
        if not selected:
            pattern = self.config.effective_pattern(self.registry)
            raise NoFilesError(f"no files to process: nothing matched the pattern {pattern!r}")

        entries: Dict[str, FileEntry] = {filename: files[filename] for filename in selected}
        semaphore = asyncio.Semaphore(self.config.concurrency)
        latched: List[InPlaceError] = []
        results: List[RenderResult] = []
        claimed: Dict[str, str] = {}
        offload = self.config.concurrency > 1

        async def render_one(filename: str):
            async with semaphore:
                if latched:
                    self.log.debug("render_skipped_after_error", filename=filename)
                    return
                try:
                    result = await render_file(
                        filename,
                        entries[filename],
                        self.registry,
                        self.config.engine,
                        global_metadata,
                        self.config.engine_options,
                        offload=offload,
                    )
                    _check_collision(result, entries, claimed)
                except InPlaceError as e:
                    if latched:
                        self.log.debug("additional_render_error_discarded", filename=filename, error=str(e))
                    else:
                        latched.append(e)
                    return
                if latched:
                    self.log.debug("render_result_discarded", filename=filename)
                    return
                apply_result(files, result, entries[filename])
                claimed[result.target] = result.source
                results.append(result)

        await asyncio.gather(*(render_one(filename) for filename in selected))

        if latched:
            self.log.error("inplace_build_failed", error=str(latched[0]), rendered=len(results))
            raise latched[0]

        self.log.info("inplace_build_finished", rendered=len(results))
        return results

    def process(self, files: FileMap, metadata: Any = None) -> List[RenderResult]:
        # synchronous entry point; async hosts must await run() instead.
        if _event_loop_running():
            raise ConfigError(
                "inplace was called synchronously from inside a running event loop; await InPlace.run() instead"
            )
        return asyncio.run(self.run(files, metadata))

    def __call__(self, files: FileMap, metadata: Any = None, done: Optional[DoneCallback] = None) -> Optional[List[RenderResult]]:
        """
        Host pipeline entry point. Reports through `done` when given, raises otherwise.

        Runs its own event loop, so hosts that are already inside one await
        `run()` directly; calling this from a running loop reports a ConfigError.
        """
        try:
            results = self.process(files, metadata)
        except InPlaceError as e:
            if done is None:
                raise
            done(e)
            return None
        if done is not None:
            done(None)
        return results

def in_place(config: Optional[PluginConfig] = None, registry: Optional[EngineRegistry] = None, **options: Any) -> InPlace:
    return InPlace(config, registry, **options)
