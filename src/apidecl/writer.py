"""Write generated declarations next to their apis source."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

OVERWRITE_MESSAGE = "Target file exists. Continue?"


def declaration_path(source: str | Path) -> Path:
    """Return the ``.d.ts`` path for an apis source.

    A directory maps to ``<dir>/index.d.ts``, a file to ``<dir>/<stem>.d.ts``.

    Example::

        >>> declaration_path("src/apis/user.json")
        PosixPath('src/apis/user.d.ts')
    """
    source = Path(source)
    if source.is_dir():
        return source / "index.d.ts"
    return source.parent / f"{source.stem}.d.ts"


def write_declarations(
    code: str,
    target: str | Path,
    *,
    confirm: Callable[[str], bool] | None = None,
    overwrite: bool = False,
) -> bool:
    """Write ``code`` to ``target``.

    If ``target`` already exists and ``overwrite`` is false, ``confirm`` is
    asked with :data:`OVERWRITE_MESSAGE`; without a ``confirm`` callable the
    existing file is kept.

    Returns:
        True if the file was written, False if writing was declined.
    """
    target = Path(target)
    if target.exists() and not overwrite:
        if confirm is None or not confirm(OVERWRITE_MESSAGE):
            return False
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(code, encoding="utf-8")
    return True
