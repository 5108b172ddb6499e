import posixpath

utf8_bom = b"\xef\xbb\xbf"

def strip_utf8_bom(data: bytes) -> bytes:
    # removes the utf-8 byte order mark from byte data if present.
    if data.startswith(utf8_bom):
        return data[len(utf8_bom):]
    return data

def decode_contents(data: bytes) -> str:
    # template sources are always read as utf-8.
    return strip_utf8_bom(data).decode("utf-8")

def split_extension(filename: str) -> tuple[str, str]:
    # splits the last extension off the final path segment: "a/b.html.hbs" -> ("a/b.html", "hbs").
    head, tail = posixpath.split(filename)
    if "." not in tail:
        return filename, ""
    stem, _, ext = tail.rpartition(".")
    return posixpath.join(head, stem) if head else stem, ext

def extension_of(filename: str) -> str:
    return split_extension(filename)[1]
