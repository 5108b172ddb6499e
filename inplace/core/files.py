# inplace/core/files.py
"""
In-memory file entries, as handed over by the host build pipeline.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, MutableMapping, Optional

from inplace.util import decode_contents

# reserved metadata keys read by the dispatcher.
ENGINE_KEY = "engine"
ENGINE_OPTIONS_KEY = "engine_options"

@dataclass
class FileEntry:
    # contents plus front-matter style metadata for one file.
    contents: bytes = b""
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_text(cls, text: str, **metadata: Any) -> "FileEntry":
        return cls(contents=text.encode("utf-8"), metadata=dict(metadata))

    @property
    def text(self) -> str:
        return decode_contents(self.contents)

    @property
    def engine(self) -> Optional[Any]:
        return self.metadata.get(ENGINE_KEY)

    @property
    def engine_options(self) -> Dict[str, Any]:
        return dict(self.metadata.get(ENGINE_OPTIONS_KEY) or {})

    def local_context(self) -> Dict[str, Any]:
        # file metadata as seen by templates, without the plugin's reserved keys.
        return {
            k: v for k, v in self.metadata.items()
            if k not in (ENGINE_KEY, ENGINE_OPTIONS_KEY, "contents")
        }

FileMap = MutableMapping[str, FileEntry]
