"""Load an apis object from disk or over HTTP.

Sources may be a JSON file, a Python module exposing a module-level
``apis`` attribute, or a directory holding one of ``__init__.py``,
``index.py`` or ``index.json``.  Python sources run with browser-like
globals (``wx``, ``window``, ``location``, ``navigator``) available to the
module and any submodules it imports, so request modules written for the
browser can import.
"""

from __future__ import annotations

import builtins
import importlib.util
import json
import sys
from contextlib import contextmanager
from pathlib import Path
from types import SimpleNamespace
from collections.abc import Iterator
from typing import Any

import httpx

from apidecl.errors import ApiLoadError

_INDEX_FILES = ("__init__.py", "index.py", "index.json")
_BROWSER_GLOBALS = ("wx", "window", "location", "navigator")


def mock_global_vars(namespace: dict[str, Any]) -> dict[str, Any]:
    """Seed ``namespace`` with empty browser globals, keeping existing names."""
    location = SimpleNamespace(
        hash="",
        host="",
        href="",
        port="",
        origin="",
        search="",
        hostname="",
        protocol="",
        pathname="",
    )
    navigator = SimpleNamespace(
        appName="",
        platform="",
        userAgent="",
        appCodeName="",
    )

    namespace.setdefault("wx", SimpleNamespace())
    namespace.setdefault("window", SimpleNamespace(location=location, navigator=navigator))
    namespace.setdefault("location", location)
    namespace.setdefault("navigator", navigator)
    return namespace


@contextmanager
def browser_globals() -> Iterator[None]:
    """Expose the browser globals as builtins, so every imported module sees them.

    Names already present in :mod:`builtins` are left alone; the ones added
    are removed again on exit.
    """
    namespace = vars(builtins)
    added = [name for name in _BROWSER_GLOBALS if name not in namespace]
    mock_global_vars(namespace)
    try:
        yield
    finally:
        for name in added:
            namespace.pop(name, None)


def resolve_source(path: str | Path) -> Path:
    """Return the file to load for ``path``, looking inside directories for an index file."""
    path = Path(path)
    if not path.exists():
        raise ApiLoadError(f"No such file or directory: {path}")
    if not path.is_dir():
        return path
    for name in _INDEX_FILES:
        candidate = path / name
        if candidate.is_file():
            return candidate
    raise ApiLoadError(f"No index file ({', '.join(_INDEX_FILES)}) in directory: {path}")


def load_module(path: str | Path) -> Any:
    """Execute a Python source file with browser globals seeded and return the module."""
    path = Path(path).resolve()
    is_package = path.name == "__init__.py"
    module_name = f"_apidecl_source_{(path.parent.name if is_package else path.stem)}"
    spec = importlib.util.spec_from_file_location(
        module_name,
        path,
        submodule_search_locations=[str(path.parent)] if is_package else None,
    )
    if spec is None or spec.loader is None:
        raise ApiLoadError(f"Cannot import Python source: {path}")

    module = importlib.util.module_from_spec(spec)
    mock_global_vars(module.__dict__)
    # Registered so relative imports inside an apis package resolve.
    sys.modules[module_name] = module
    try:
        with browser_globals():
            spec.loader.exec_module(module)
    except Exception as e:
        raise ApiLoadError(f"Error executing {path}: {e}") from e
    finally:
        for name in [n for n in sys.modules if n == module_name or n.startswith(module_name + ".")]:
            del sys.modules[name]
    return module


def load_apis(path: str | Path) -> Any:
    """Load the raw apis object from a JSON file, Python module or directory.

    The result is not validated; pass it to
    :func:`apidecl.codegen.generate_declarations`.

    Raises:
        ApiLoadError: If the source is missing, unsupported or fails to load.
    """
    source = resolve_source(path)
    suffix = source.suffix.lower()

    if suffix == ".json":
        try:
            return json.loads(source.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ApiLoadError(f"Invalid JSON in {source}: {e}") from e

    if suffix == ".py":
        module = load_module(source)
        if not hasattr(module, "apis"):
            raise ApiLoadError(f"Module {source} does not define 'apis'.")
        return module.apis

    raise ApiLoadError(f"Unsupported apis source type '{suffix or source.name}': {source}")


async def fetch_apis(url: str, *, client: httpx.AsyncClient | None = None) -> Any:
    """Fetch a JSON apis object from a URL.

    Raises:
        ApiLoadError: If the request fails or the body is not JSON.
    """
    should_close = client is None
    client = client or httpx.AsyncClient(follow_redirects=True)
    try:
        try:
            resp = await client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise ApiLoadError(f"Error fetching {url}: {e}") from e
        try:
            return resp.json()
        except json.JSONDecodeError as e:
            raise ApiLoadError(f"Invalid JSON from {url}: {e}") from e
    finally:
        if should_close:
            await client.aclose()
