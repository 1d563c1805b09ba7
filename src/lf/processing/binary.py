"""
Binary file detection by extension, and the placeholder text emitted in place
of a binary file's content.
"""

from __future__ import annotations

from pathlib import Path

from lf.errors import MetadataError

DEFAULT_CATEGORY = "Binary"

# Extension (lowercase, no dot) -> category shown in the placeholder.
BINARY_CATEGORIES: dict[str, str] = {
    # Executables and libraries
    **dict.fromkeys(
        ["exe", "dll", "so", "dylib", "a", "lib", "bin", "o", "obj", "rlib", "jar"], "Binary"
    ),
    # Images
    **dict.fromkeys(["png", "jpg", "jpeg", "gif", "bmp", "tiff", "tga", "ico", "webp"], "Image"),
    # Video
    **dict.fromkeys(["mp4", "avi", "mkv", "mov", "wmv", "flv", "webm"], "Video"),
    # Audio
    **dict.fromkeys(["mp3", "wav", "flac", "ogg", "m4a", "aac"], "Audio"),
    # Archives
    **dict.fromkeys(["zip", "rar", "7z", "tar", "gz", "bz2", "xz"], "Archive"),
    # Documents
    **dict.fromkeys(["pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx"], "Document"),
    # Debug info, databases, bytecode and caches
    **dict.fromkeys(
        ["pdb", "sqlite", "db", "class", "pyc", "d", "idx", "cache", "lock", "tmp", "temp"],
        DEFAULT_CATEGORY,
    ),
}

_KB = 1024
_MB = _KB * 1024
_GB = _MB * 1024


def _extension(path: Path) -> str:
    return path.suffix[1:].lower()


def binary_category(path: Path) -> str | None:
    """Category for a binary file, or `None` if the file should be read as text."""
    ext = _extension(path)
    if not ext:
        return None
    return BINARY_CATEGORIES.get(ext)


def is_binary_file(path: Path) -> bool:
    return binary_category(path) is not None


def human_size(size: int) -> str:
    """`N bytes` below 1 KB, otherwise one decimal place in KB, MB or GB."""
    if size < _KB:
        return f"{size} bytes"
    if size < _MB:
        return f"{size / _KB:.1f} KB"
    if size < _GB:
        return f"{size / _MB:.1f} MB"
    return f"{size / _GB:.1f} GB"


def binary_placeholder(path: Path) -> str:
    """Synthetic content for a binary file, like `[Image file: 2.0 KB]`."""
    try:
        size = path.stat().st_size
    except OSError as e:
        raise MetadataError(path, e) from e
    category = binary_category(path) or DEFAULT_CATEGORY
    return f"[{category} file: {human_size(size)}]"
