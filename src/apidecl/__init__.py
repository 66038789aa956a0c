"""apidecl — Generate TypeScript declarations for request-function API maps."""

from apidecl.codegen import PREAMBLE, attrs_code, code_by_level, functions_code, generate_declarations
from apidecl.config import DeclareConfig
from apidecl.declare import declare
from apidecl.errors import ApiDeclError, ApiLoadError, MalformedApiError
from apidecl.loader import browser_globals, fetch_apis, load_apis, load_module, mock_global_vars
from apidecl.types import ApiGroup, ApiMap, FunctionSpec, ParamSpec, parse_api_map
from apidecl.writer import declaration_path, write_declarations

__all__ = [
    # Types
    "ApiGroup",
    "ApiMap",
    "FunctionSpec",
    "ParamSpec",
    "parse_api_map",
    # Errors
    "ApiDeclError",
    "ApiLoadError",
    "MalformedApiError",
    # Generation
    "PREAMBLE",
    "attrs_code",
    "code_by_level",
    "functions_code",
    "generate_declarations",
    # Loading and writing
    "DeclareConfig",
    "browser_globals",
    "declaration_path",
    "declare",
    "fetch_apis",
    "load_apis",
    "load_module",
    "mock_global_vars",
    "write_declarations",
]
