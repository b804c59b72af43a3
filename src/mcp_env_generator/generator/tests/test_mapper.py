import pytest

from ..mapper import NO_AUTH_COMMENT, extract_security_schemes, map_security_schemes
from ..models import CommentLine, SchemeDefinition, SchemeReference, VariableDeclaration
from ..naming import get_env_var_name, sanitize_scheme_name


def _declarations(entries):
    return [e for e in entries if isinstance(e, VariableDeclaration)]


def test_sanitize_scheme_name():
    assert sanitize_scheme_name("x-api-key") == "X_API_KEY"
    assert sanitize_scheme_name("petstore.auth v2") == "PETSTORE_AUTH_V2"


def test_default_resolver_prefixes_suffix():
    assert get_env_var_name("x-api-key", "API_KEY") == "API_KEY_X_API_KEY"


@pytest.mark.parametrize("schemes", [None, {}])
def test_no_schemes_yields_no_auth_comment(schemes):
    assert map_security_schemes(schemes) == [NO_AUTH_COMMENT]


def test_api_key_scheme():
    entries = map_security_schemes({"x-api-key": {"type": "apiKey", "in": "header", "name": "X-API-Key"}})

    assert entries == [VariableDeclaration(name="API_KEY_X_API_KEY", placeholder="your_api_key_here")]


def test_bearer_scheme_is_case_insensitive():
    entries = map_security_schemes({"jwt": {"type": "http", "scheme": "Bearer"}})

    assert entries == [VariableDeclaration(name="BEARER_TOKEN_JWT", placeholder="your_bearer_token_here")]


def test_basic_scheme_emits_username_then_password():
    entries = map_security_schemes({"basicAuth": {"type": "http", "scheme": "basic"}})

    assert [(e.name, e.placeholder) for e in entries] == [
        ("BASIC_USERNAME_BASICAUTH", "your_username_here"),
        ("BASIC_PASSWORD_BASICAUTH", "your_password_here"),
    ]


@pytest.mark.parametrize("raw", [
    {"type": "http", "scheme": "digest"},
    {"type": "http"},
    {"type": "openIdConnect", "openIdConnectUrl": "https://example.com"},
    {"type": "mutualTLS"},
    {},
    "not-a-scheme",
    None,
])
def test_unsupported_shapes_are_skipped(raw):
    assert map_security_schemes({"weird": raw}) == []


def test_oauth2_lists_flows_before_declaration():
    entries = map_security_schemes({
        "petstore_auth": {
            "type": "oauth2",
            "flows": {
                "authorizationCode": {"authorizationUrl": "https://a", "tokenUrl": "https://t", "scopes": {}},
                "clientCredentials": {"tokenUrl": "https://t", "scopes": {}},
            },
        }
    })

    assert entries == [
        VariableDeclaration(
            name="OAUTH_TOKEN_PETSTORE_AUTH",
            placeholder="your_oauth_token_here",
            comment_lines=["OAuth2 authentication (authorizationCode, clientCredentials flow)"],
        )
    ]


@pytest.mark.parametrize("flows", [None, {}, "implicit"])
def test_oauth2_without_flows_is_unknown(flows):
    raw = {"type": "oauth2"}
    if flows is not None:
        raw["flows"] = flows

    entries = map_security_schemes({"oauth": raw})

    assert entries[0].comment_lines == ["OAuth2 authentication (unknown flow)"]


def test_oauth2_name_ignores_custom_resolver():
    entries = map_security_schemes(
        {"my-oauth": {"type": "oauth2", "flows": {"implicit": {}}}, "key": {"type": "apiKey"}},
        resolve_name=lambda name, suffix: f"CUSTOM_{suffix}",
    )

    assert [e.name for e in entries] == ["OAUTH_TOKEN_MY_OAUTH", "CUSTOM_API_KEY"]


def test_reference_yields_comment_only():
    entries = map_security_schemes({"shared": {"$ref": "#/components/securitySchemes/other"}})

    assert entries == [CommentLine(text="shared - Referenced security scheme (reference not resolved)")]


def test_typed_definitions_are_accepted():
    entries = map_security_schemes({
        "ref": SchemeReference(ref="#/x"),
        "key": SchemeDefinition(kind="apiKey"),
    })

    assert isinstance(entries[0], CommentLine)
    assert entries[1].name == "API_KEY_KEY"


def test_insertion_order_is_preserved():
    schemes = {
        "zeta": {"type": "apiKey"},
        "alpha": {"type": "http", "scheme": "bearer"},
        "middle": {"$ref": "#/components/securitySchemes/x"},
        "beta": {"type": "oauth2"},
    }

    entries = map_security_schemes(schemes)

    assert len(_declarations(entries)) == 3
    assert [getattr(e, "name", None) for e in entries] == [
        "API_KEY_ZETA", "BEARER_TOKEN_ALPHA", None, "OAUTH_TOKEN_BETA",
    ]


@pytest.mark.parametrize("spec, expected", [
    ({}, None),
    ({"components": None}, None),
    ({"components": {"schemas": {}}}, None),
    ({"components": {"securitySchemes": []}}, None),
    ({"components": {"securitySchemes": {"k": {"type": "apiKey"}}}}, {"k": {"type": "apiKey"}}),
])
def test_extract_security_schemes(spec, expected):
    assert extract_security_schemes(spec) == expected
