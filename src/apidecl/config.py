"""Settings for the declare workflow."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, Field

from apidecl.writer import declaration_path

SRC_ENV = "APIDECL_SRC"
DIST_ENV = "APIDECL_DIST"
DEFAULT_APIS_PATH = Path("src/apis")


class DeclareConfig(BaseModel):
    """Where to read the apis object from and where to write declarations."""

    apis_path: Path = Field(default=DEFAULT_APIS_PATH, description="apis source: file or directory.")
    output_path: Path | None = Field(default=None, description="Target .d.ts file; derived from apis_path if unset.")
    apis_url: str | None = Field(default=None, description="http(s) URL serving the apis object as JSON; wins over apis_path.")
    assume_yes: bool = Field(default=False, description="Overwrite an existing target without prompting.")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        apis_path: str | Path | None = None,
        apis_url: str | None = None,
        output_path: str | Path | None = None,
        assume_yes: bool = False,
    ) -> DeclareConfig:
        """Build a config; explicit arguments win over ``APIDECL_SRC`` / ``APIDECL_DIST``."""
        environ = os.environ if environ is None else environ
        apis_path = apis_path or environ.get(SRC_ENV) or DEFAULT_APIS_PATH
        output_path = output_path or environ.get(DIST_ENV) or None
        return cls(apis_path=apis_path, apis_url=apis_url, output_path=output_path, assume_yes=assume_yes)

    @property
    def source(self) -> str:
        """The apis source as shown to users: the URL if set, else the path."""
        return self.apis_url or str(self.apis_path)

    def default_output_path(self) -> Path:
        """``.d.ts`` path used when ``output_path`` is unset.

        A URL maps to ``<last path segment stem>.d.ts`` in the working directory.
        """
        if self.output_path is not None:
            return self.output_path
        if self.apis_url:
            name = Path(urlparse(self.apis_url).path).name or "index"
            return declaration_path(Path(name))
        return declaration_path(self.apis_path)
