"""Tests for declaration generation."""

import textwrap
from types import SimpleNamespace

import pytest

from apidecl.codegen import PREAMBLE, attrs_code, code_by_level, functions_code, generate_declarations
from apidecl.errors import MalformedApiError
from apidecl.types import FunctionSpec, parse_api_map

EXPECTED_PREAMBLE = (
    "// default response result\n"
    "interface Result { code: number, data: any, msg?: string }\n"
    "interface ReqFn {\n"
    "\tkey: string\n"
    "\tmock: any\n"
    "\tparams: object | string[]\n"
    "}\n"
    "interface RuntimeOptions {\n"
    "\t// for jsonp\n"
    "\tcallbackName?: string\n"
    "\t[key: string]: any\n"
    "}\n"
    "interface ReqFnWithAnyParams extends ReqFn {\n"
    "\t<T = Result>(params?: any, options?: RuntimeOptions): Promise<T>\n"
    "}"
)

USER_APIS = {
    "user": {
        "getInfo": {"params": ["id"]},
        "login": {"params": {"phone": {"required": True}, "code": {}}},
    },
}


def test_preamble_text():
    assert PREAMBLE == EXPECTED_PREAMBLE


def test_attrs_code_list_params_are_optional():
    assert attrs_code(["a", "b"]) == "a?: any, b?: any"


def test_attrs_code_mapping_params():
    assert attrs_code({"a": {"required": True}, "b": {}}) == "a: any, b?: any"
    assert attrs_code({"a": {"isRequired": 1}, "b": {"required": False}}) == "a: any, b?: any"


def test_attrs_code_empty():
    assert attrs_code([]) == ""
    assert attrs_code({}) == ""
    assert attrs_code(None) == ""


def test_attrs_code_from_attributes():
    params = {"token": SimpleNamespace(isRequired=True), "page": SimpleNamespace()}
    assert attrs_code(params) == "token: any, page?: any"


def test_code_by_level():
    raw = "\n        interface A {\n            b: string\n        }"
    assert code_by_level(raw, 2) == "interface A {\n\tb: string\n}"


def test_generate_user_scenario():
    code = generate_declarations(USER_APIS)
    expected_user = textwrap.dedent("""\
        export const user: {
        \t'getInfo': ReqFn & {
        \t\t<T = Result>(
        \t\t\tparams: { id?: any },
        \t\t\toptions?: RuntimeOptions
        \t\t): Promise<T>
        \t}
        \t'login': ReqFn & {
        \t\t<T = Result>(
        \t\t\tparams: { phone: any, code?: any },
        \t\t\toptions?: RuntimeOptions
        \t\t): Promise<T>
        \t}
        }""")
    assert code == EXPECTED_PREAMBLE + "\n\n" + expected_user


def test_function_without_params_uses_loose_signature():
    group = parse_api_map({"g": {"ping": {}, "list": {"params": []}, "none": {"params": None}}})["g"]
    lines = functions_code(group).split("\n\t")
    assert lines == ["'ping': ReqFnWithAnyParams", "'list': ReqFnWithAnyParams", "'none': ReqFnWithAnyParams"]


def test_functions_sorted_by_length_stable():
    apis = {
        "shop": {
            "search": {"params": {"keyword": {"required": True}, "page": {}}},
            "bb": {},
            "aa": {},
            "detail": {"params": ["id"]},
        },
    }
    group = parse_api_map(apis)["shop"]
    head, *rest = functions_code(group).split("\n\t'")
    fragments = [head] + ["'" + f for f in rest]
    names = [f.split("'")[1] for f in fragments]
    assert names == ["bb", "aa", "detail", "search"]
    lengths = [len(f) for f in fragments]
    assert lengths == sorted(lengths)


def test_groups_keep_input_order_and_blank_line():
    apis = {"zeta": {"a": {}}, "alpha": {"b": {}}}
    code = generate_declarations(apis)
    body = code[len(EXPECTED_PREAMBLE) + 2 :]
    assert body == (
        "export const zeta: {\n\t'a': ReqFnWithAnyParams\n}\n\n"
        "export const alpha: {\n\t'b': ReqFnWithAnyParams\n}"
    )


def test_empty_inputs():
    assert generate_declarations({}) == EXPECTED_PREAMBLE + "\n\n"
    assert generate_declarations({"empty": {}}) == EXPECTED_PREAMBLE + "\n\nexport const empty: {\n\t\n}"


def test_preamble_appears_once():
    apis = {f"group{i}": {f"fn{j}": {"params": ["x"]} for j in range(3)} for i in range(4)}
    code = generate_declarations(apis)
    assert code.startswith(EXPECTED_PREAMBLE)
    assert code.count("interface ReqFnWithAnyParams") == 1
    assert code.count("export const ") == 4


def test_generation_is_deterministic():
    assert generate_declarations(USER_APIS) == generate_declarations(USER_APIS)


def test_request_metadata_is_ignored():
    apis = {"user": {"getInfo": {"params": ["id"], "key": "user/getInfo", "mock": {"code": 0}}}}
    assert generate_declarations(apis) == generate_declarations({"user": {"getInfo": {"params": ["id"]}}})


def test_function_specs_from_attributes():
    apis = {"user": {"getInfo": SimpleNamespace(params=["id"], key="user/getInfo")}}
    assert generate_declarations(apis) == generate_declarations({"user": {"getInfo": {"params": ["id"]}}})


def test_tuple_params():
    assert FunctionSpec.model_validate({"params": ("a", "b")}).params == ["a", "b"]


@pytest.mark.parametrize(
    "apis",
    [
        ["user"],
        {"user": ["getInfo"]},
        {"user": {"getInfo": "id"}},
        {"user": {"getInfo": {"params": "id"}}},
        {"user": {"getInfo": {"params": {"id": None}}}},
    ],
)
def test_malformed_input_raises(apis):
    with pytest.raises(MalformedApiError):
        generate_declarations(apis)


def test_request_function_objects():
    def get_info(params=None, options=None):
        return None

    get_info.key = "user/getInfo"
    get_info.mock = None
    get_info.params = ["id"]

    def logout(params=None, options=None):
        return None

    apis = {"user": {"getInfo": get_info, "logout": logout}}
    spec = parse_api_map(apis)["user"]["getInfo"]
    assert spec.params == ["id"]
    assert spec.key == "user/getInfo"
    assert generate_declarations(apis) == generate_declarations({"user": {"getInfo": {"params": ["id"]}, "logout": {}}})


def test_sort_counts_utf16_code_units():
    # "\U0001F600" is two UTF-16 code units, so the first name is longer than "abc".
    group = parse_api_map({"g": {"\U0001F600\U0001F600": {}, "abc": {}}})["g"]
    assert functions_code(group).split("\n\t") == [
        "'abc': ReqFnWithAnyParams",
        "'\U0001F600\U0001F600': ReqFnWithAnyParams",
    ]
