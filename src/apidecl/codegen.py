"""Generate TypeScript declarations (``.d.ts``) from an apis object.

Every request function of every API group becomes one property of an
``export const <group>: { ... }`` block.  Functions that declare parameters
get a call signature typed with exactly those parameters; the rest fall
back to the shared ``ReqFnWithAnyParams`` shape from the preamble.

Example output for ``{"user": {"getInfo": {"params": ["id"]}}}``::

    export const user: {
    	'getInfo': ReqFn & {
    		<T = Result>(
    			params: { id?: any },
    			options?: RuntimeOptions
    		): Promise<T>
    	}
    }
"""

from __future__ import annotations

import re
from typing import Any

from apidecl.types import ApiGroup, ApiMap, Params, parse_api_map, parse_params

# Templates are written at 4 spaces per level; code_by_level() strips the
# level's indentation and turns what is left into tabs.
_PREAMBLE_TEMPLATE = """
        // default response result
        interface Result { code: number, data: any, msg?: string }
        interface ReqFn {
            key: string
            mock: any
            params: object | string[]
        }
        interface RuntimeOptions {
            // for jsonp
            callbackName?: string
            [key: string]: any
        }
        interface ReqFnWithAnyParams extends ReqFn {
            <T = Result>(params?: any, options?: RuntimeOptions): Promise<T>
        }"""

_GROUP_TEMPLATE = """
            export const {name}: {{
                {functions}
            }}"""

_FUNCTION_TEMPLATE = """'{name}': ReqFn & {{
                    <T = Result>(
                        params: {{ {attrs} }},
                        options?: RuntimeOptions
                    ): Promise<T>
                }}"""

_LOOSE_FUNCTION_TEMPLATE = "'{name}': ReqFnWithAnyParams"


def code_by_level(raw_code: str, level: int) -> str:
    """Normalize a template's indentation to tabs.

    Splits on a newline followed by ``4 * level`` whitespace characters,
    drops empty pieces and replaces every remaining 4-space run with a tab.
    Dynamic fragments substituted into the template must not themselves
    start lines with that much whitespace.
    """
    sep = re.compile(r"\n\s{%d}" % (4 * level))
    return "\n".join(piece for piece in sep.split(raw_code) if piece).replace("    ", "\t")


PREAMBLE = code_by_level(_PREAMBLE_TEMPLATE, 2)


def generate_declarations(apis: ApiMap | Any) -> str:
    """Generate the full declaration-file body for an apis object.

    ``apis`` may be an already validated :data:`ApiMap` or any runtime
    object of the same shape (plain dicts and lists, or objects exposing
    ``params`` as an attribute).

    Raises:
        MalformedApiError: If ``apis`` does not have the expected shape.
    """
    api_map = parse_api_map(apis)
    groups_code = "\n\n".join(
        code_by_level(_GROUP_TEMPLATE.format(name=name, functions=functions_code(group)), 3)
        for name, group in api_map.items()
    )
    return PREAMBLE + "\n\n" + groups_code


def functions_code(group: ApiGroup) -> str:
    """Generate the body of one group's declaration block.

    Shorter signatures come first, measured in UTF-16 code units; equal
    lengths keep their original order.
    """
    fragments = []
    for name, spec in group.items():
        attrs = attrs_code(spec.params)
        if not attrs:
            fragments.append(_LOOSE_FUNCTION_TEMPLATE.format(name=name))
        else:
            fragments.append(code_by_level(_FUNCTION_TEMPLATE.format(name=name, attrs=attrs), 3))
    return "\n\t".join(sorted(fragments, key=_utf16_length))


def _utf16_length(text: str) -> int:
    # Length in UTF-16 code units, so astral characters count twice.
    return len(text.encode("utf-16-le")) // 2


def attrs_code(params: Params | Any) -> str:
    """Generate the ``name?: any, other: any`` attribute list for one function."""
    params = parse_params(params)
    if not params:
        return ""
    if isinstance(params, list):
        # list-form params carry no requiredness, so all are optional
        return ", ".join(f"{name}?: any" for name in params)
    return ", ".join(f"{name}{'' if spec.required else '?'}: any" for name, spec in params.items())
