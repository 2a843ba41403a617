"""Async wrappers around blocking filesystem calls."""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath

from docbook2md.exceptions import ConversionError


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)


async def write_text_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write text to a file asynchronously using a thread pool.

    Args:
        path: Path to the file to write.
        content: Text content to write.
        encoding: Text encoding to use.
    """
    await asyncio.to_thread(path.write_text, content, encoding=encoding)


async def mkdir_async(
    path: Path, parents: bool = False, exist_ok: bool = False
) -> None:
    """Create a directory asynchronously using a thread pool.

    Args:
        path: Path to the directory to create.
        parents: If True, create parent directories as needed.
        exist_ok: If True, don't raise an error if directory exists.
    """
    await asyncio.to_thread(path.mkdir, parents=parents, exist_ok=exist_ok)


async def write_files_async(base_dir: Path, files: dict[str, str]) -> list[Path]:
    """Write ``{relative path: text}`` under ``base_dir``.

    Raises:
        ConversionError: If a path escapes ``base_dir``.
    """
    written: list[Path] = []
    for relative, content in files.items():
        relative_path = PurePosixPath(relative)
        if relative_path.is_absolute() or ".." in relative_path.parts:
            raise ConversionError(f"Refusing to write outside {base_dir}: {relative}")
        path = base_dir.joinpath(*relative_path.parts)
        await mkdir_async(path.parent, parents=True, exist_ok=True)
        await write_text_async(path, content)
        written.append(path)
    return written
