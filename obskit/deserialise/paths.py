"""
Configuration file path validation.

Before any bytes of a configuration file are read, the path must:

- exist and be a regular file,
- contain no symbolic link, neither the file itself nor any ancestor,
- resolve under an allowed base directory: ``$XDG_CONFIG_HOME`` (or
  ``$HOME/.config`` when unset), the current working directory, or a
  caller-supplied extra base,
- carry a ``.json``, ``.yaml`` or ``.yml`` extension.

The symlink walk runs before, and independently of, the base directory check:
a link inside an allowed directory may still point outside it.
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from obskit.core.enums import ConfigFormat
from obskit.core.exceptions import (
    ConfigIOError,
    InvalidFilePathError,
    PathOutsideAllowedDirectoryError,
    SymlinkNotAllowedError,
    UnsupportedFileTypeError,
)
from obskit.deserialise.definitions import ValidatedPath
from obskit.logger import get_obskit_logger

PathLike = Union[str, os.PathLike]

# Checked in order; the first variable that is set contributes one base
CONFIG_HOME_CANDIDATES = (
    ("XDG_CONFIG_HOME", None),
    ("HOME", ".config"),
)

MISSING_EXTENSION = "missing file extension"


def _current_dir() -> Optional[Path]:
    try:
        return Path(os.getcwd())
    except OSError:
        return None


def allowed_base_directories(extra_base: Optional[PathLike] = None) -> List[Path]:
    """
    Return the directories a configuration file may live under.

    Computed from the environment on every call, never cached.

    Raises:
        InvalidFilePathError: If no base directory can be determined at all
    """
    bases: List[Path] = []

    for variable, suffix in CONFIG_HOME_CANDIDATES:
        value = os.environ.get(variable)
        if value:
            base = Path(value)
            bases.append(base / suffix if suffix else base)
            break

    cwd = _current_dir()
    if cwd is not None:
        bases.append(cwd)

    if extra_base is not None:
        bases.append(Path(extra_base))

    if not bases:
        raise InvalidFilePathError(
            "<none>",
            "no allowed base directory (set XDG_CONFIG_HOME or run from a valid working directory)"
        )
    return bases


def ensure_no_symlinks(path: Path):
    """
    Raise SymlinkNotAllowedError if ``path`` or any of its ancestors is a link.

    Uses lstat so links are reported rather than followed.
    """
    for ancestor in (path, *path.parents):
        if ancestor.is_symlink():
            raise SymlinkNotAllowedError(str(ancestor))


def _extension(path: Path) -> Optional[str]:
    suffix = path.suffix
    return suffix[1:] if suffix else None


class PathValidator:
    """
    Resolves and authorizes configuration file paths.

    Checks run in a fixed order and the first failure is raised: regular file,
    symlinks, allowed base directories, then extension.
    """

    def __init__(self):
        self.logger = get_obskit_logger().bind(component="PathValidator")

    def validate(self, path: PathLike, extra_base: Optional[PathLike] = None) -> ValidatedPath:
        """
        Validate ``path`` and return it canonicalized and tagged with its format.

        Args:
            path: Absolute path, or a path relative to the working directory
            extra_base: Optional additional allowed directory (e.g. a project root)

        Returns:
            ValidatedPath holding the canonical path and detected format
        """
        original = Path(path)
        absolute = self._absolute(original)

        if not absolute.is_file():
            self.logger.warning("Config path rejected", reason="not a regular file", path=str(absolute))
            raise InvalidFilePathError(str(absolute), "does not exist or is not a regular file")

        try:
            ensure_no_symlinks(absolute)
        except SymlinkNotAllowedError as e:
            self.logger.warning("Config path rejected", reason="symlink", path=str(absolute), link=e.path)
            raise
        except OSError as e:
            raise ConfigIOError(str(absolute), str(e)) from e

        bases = allowed_base_directories(extra_base)
        try:
            canonical = absolute.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise ConfigIOError(str(absolute), str(e)) from e

        matched = self._matching_base(canonical, bases)
        if matched is None:
            self.logger.warning("Config path rejected", reason="outside allowed directories",
                                path=str(canonical), bases=[str(b) for b in bases])
            raise PathOutsideAllowedDirectoryError(str(canonical))

        extension = _extension(original)
        if extension is None:
            self.logger.warning("Config path rejected", reason="unsupported file type", path=str(canonical))
            raise UnsupportedFileTypeError(MISSING_EXTENSION)
        config_format = ConfigFormat.from_extension(extension)
        if config_format is None:
            self.logger.warning("Config path rejected", reason="unsupported file type",
                                path=str(canonical), extension=extension)
            raise UnsupportedFileTypeError(extension)

        self.logger.info("Config path authorized", path=str(canonical),
                         format=config_format.value, base=str(matched))
        return ValidatedPath(canonical, config_format)

    def _absolute(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        try:
            return Path(os.getcwd()) / path
        except OSError as e:
            raise ConfigIOError(str(path), f"cannot resolve relative path: {e}") from e

    def _matching_base(self, canonical: Path, bases: List[Path]) -> Optional[Path]:
        for base in bases:
            try:
                canonical_base = base.resolve(strict=True)
            except (OSError, RuntimeError):
                self.logger.debug("Skipping allowed base that cannot be canonicalized", base=str(base))
                continue
            if canonical.is_relative_to(canonical_base):
                return canonical_base
        return None


def validate_file_path(path: PathLike, extra_base: Optional[PathLike] = None) -> ValidatedPath:
    """Validate ``path`` with a fresh PathValidator."""
    return PathValidator().validate(path, extra_base)
