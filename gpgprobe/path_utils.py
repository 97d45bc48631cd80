import os
import pathlib

from .errors import ValidationError


def validate_homedir(path_like: str | os.PathLike[str]) -> pathlib.Path:
    if not str(path_like).strip():
        raise ValidationError("--gnupg-homedir requires a non-empty path")
    p = pathlib.Path(path_like).expanduser().resolve(strict=False)
    if not p.exists():
        raise ValidationError(f"gnupg homedir does not exist: {p}")
    if not p.is_dir():
        raise ValidationError(f"gnupg homedir is not a directory: {p}")
    return p
