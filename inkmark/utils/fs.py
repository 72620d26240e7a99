"""Atomic filesystem operations for drawings, images and YAML.

Provides:
    - Atomic writes: tmp file → fsync → rename (readers never see partial files)
    - YAML load/save (PyYAML safe_load / safe_dump)
    - Image load/save through Pillow

Used by:
    - Config loader: bundled and user YAML
    - Drawing export: drawing.v1 YAML files
    - CLI threshold command: decode input image, write converted output

All paths use pathlib.Path.
"""

import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from PIL import Image


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory (and parents) if missing; return it as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def atomic_write_bytes(path: Union[str, Path], data: bytes) -> None:
    """Write bytes to ``path`` atomically.

    Parameters
    ----------
    path : Union[str, Path]
        Target file path; parent directory is created if needed
    data : bytes
        File contents

    Raises
    ------
    RuntimeError
        If the write or rename fails; the temporary file is removed.

    Notes
    -----
    The temporary file lives in the target directory so the final
    ``os.replace`` stays on one filesystem.
    """
    path = Path(path)
    ensure_dir(path.parent)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def atomic_yaml_dump(obj: Any, path: Union[str, Path]) -> None:
    """Serialize ``obj`` with yaml.safe_dump and write it atomically.

    Key order is preserved (sort_keys=False).
    """
    text = yaml.safe_dump(
        obj,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    atomic_write_bytes(path, text.encode('utf-8'))


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML file with safe_load.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    yaml.YAMLError
        If parsing fails (message names the file)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e


def load_image(path: Union[str, Path]) -> Image.Image:
    """Open an image with Pillow and force the pixel data to load.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    with Image.open(path) as img:
        img.load()
        return img.copy()


def atomic_save_image(
    img: Image.Image,
    path: Union[str, Path],
    pil_kwargs: Optional[Dict[str, Any]] = None
) -> None:
    """Save a Pillow image atomically.

    Parameters
    ----------
    img : PIL.Image.Image
        Image to save
    path : Union[str, Path]
        Target path; the extension picks the format
    pil_kwargs : dict, optional
        Extra arguments for Image.save (e.g. optimize=True)

    Notes
    -----
    The temporary file keeps the target suffix so Pillow's format
    detection still works.
    """
    path = Path(path)
    ensure_dir(path.parent)

    tmp_path = path.with_name(path.stem + ".tmp" + path.suffix)
    try:
        img.save(tmp_path, **(pil_kwargs or {}))
        tmp_path.replace(path)
    except (OSError, ValueError) as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to save image {path} atomically: {e}") from e
