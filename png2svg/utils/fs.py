"""Atomic filesystem operations for safe SVG writes and YAML loading.

Provides:
    - Atomic writes: tmp file → fsync → rename (no truncated SVG on failure)
    - YAML load with clear error messages
    - Directory creation with exist_ok semantics
    - Recursive input discovery for batch conversion
    - Output path derivation (mirror input tree under an output root)

All paths use pathlib.Path for cross-platform compatibility.

Usage:
    from png2svg.utils import fs
    fs.atomic_write_text(output_path, svg_text)
    for png in fs.find_files("sprites/", ".png"):
        ...

Note: Module named `fs.py` to avoid shadowing stdlib `io`.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory if it doesn't exist, return Path object.

    Parameters
    ----------
    p : Union[str, Path]
        Directory path

    Returns
    -------
    Path
        Path object (guaranteed to exist)

    Notes
    -----
    Creates parent directories as needed.
    """
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def atomic_write_bytes(
    path: Union[str, Path],
    data: bytes,
    tmp_suffix: str = ".tmp"
) -> None:
    """Write bytes to file atomically (tmp → fsync → rename).

    Parameters
    ----------
    path : Union[str, Path]
        Target file path
    data : bytes
        Data to write
    tmp_suffix : str
        Temporary file suffix, default ".tmp"

    Raises
    ------
    RuntimeError
        If the file cannot be written; the original error is chained.

    Notes
    -----
    Either the complete file appears at `path` or the previous state is kept.
    Uses same directory for tmp file to ensure atomic rename on same filesystem.
    """
    path = Path(path)

    # Create temporary file in same directory
    tmp_path = path.with_suffix(path.suffix + tmp_suffix)

    try:
        ensure_dir(path.parent)

        with open(tmp_path, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())  # Ensure data reaches disk

        # Atomic rename (overwrites existing file on POSIX)
        tmp_path.replace(path)
    except Exception as e:
        # Clean up tmp file on error
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def atomic_write_text(
    path: Union[str, Path],
    text: str,
    encoding: str = "utf-8"
) -> None:
    """Write text to file atomically.

    Parameters
    ----------
    path : Union[str, Path]
        Target file path
    text : str
        Text content
    encoding : str
        Text encoding, default "utf-8"

    Notes
    -----
    Convenience wrapper around atomic_write_bytes.
    """
    atomic_write_bytes(path, text.encode(encoding))


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content (empty dict for an empty file)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails

    Notes
    -----
    Uses safe_load to prevent arbitrary code execution.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e


def find_files(root: Union[str, Path], suffix: str = ".png") -> List[Path]:
    """List files under root with the given suffix, recursively.

    Parameters
    ----------
    root : Union[str, Path]
        Directory to search
    suffix : str
        File suffix to match (case-insensitive), default ".png"

    Returns
    -------
    List[Path]
        Matching files sorted by path, so batch runs are reproducible

    Notes
    -----
    Directories whose name ends with the suffix are skipped.
    Returns an empty list when root doesn't exist.
    """
    root = Path(root)
    if not root.exists():
        return []

    suffix = suffix.lower()
    files = [
        item for item in root.rglob("*")
        if item.is_file() and item.suffix.lower() == suffix
    ]
    return sorted(files)


def derive_output_path(
    input_path: Union[str, Path],
    input_root: Union[str, Path],
    output_root: Union[str, Path],
    suffix: str = ".svg"
) -> Path:
    """Map an input file to its output file under output_root.

    Parameters
    ----------
    input_path : Union[str, Path]
        File found under input_root
    input_root : Union[str, Path]
        Root directory of the batch
    output_root : Union[str, Path]
        Root directory for outputs
    suffix : str
        Output suffix, default ".svg"

    Returns
    -------
    Path
        output_root / <input path relative to input_root> with new suffix

    Examples
    --------
    >>> derive_output_path("in/a/b.png", "in", "out")
    PosixPath('out/a/b.svg')
    """
    relative = Path(input_path).relative_to(Path(input_root))
    return Path(output_root) / relative.with_suffix(suffix)
