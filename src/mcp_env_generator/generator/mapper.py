"""
Maps OpenAPI security schemes to the environment variables an operator has
to fill in before the generated server can call the downstream API.

Unsupported or malformed scheme shapes are skipped, never rejected.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .models import (
    CommentLine,
    EnvEntry,
    SchemeDefinition,
    SchemeReference,
    SecuritySchemeEntry,
    VariableDeclaration,
)
from .naming import EnvVarNameResolver, get_env_var_name, sanitize_scheme_name

logger = logging.getLogger(__name__)

NO_AUTH_COMMENT = CommentLine(text="No API authentication required")

SchemeInput = Union[SchemeReference, SchemeDefinition, Dict[str, Any]]

# (resolver suffix, placeholder) per supported http auth scheme, in emit order
_HTTP_VARIABLES = {
    "bearer": [("BEARER_TOKEN", "your_bearer_token_here")],
    "basic": [
        ("BASIC_USERNAME", "your_username_here"),
        ("BASIC_PASSWORD", "your_password_here"),
    ],
}


def extract_security_schemes(openapi_spec: Any) -> Optional[Mapping[str, Any]]:
    """Returns components.securitySchemes of a raw OpenAPI document, if any."""
    if not isinstance(openapi_spec, Mapping):
        return None
    components = openapi_spec.get('components')
    if not isinstance(components, Mapping):
        return None
    schemes = components.get('securitySchemes')
    return schemes if isinstance(schemes, Mapping) else None


def parse_security_scheme(name: str, raw: SchemeInput) -> Optional[SecuritySchemeEntry]:
    """
    Classifies a raw scheme object as a reference or a definition.
    Returns None for shapes that are neither.
    """
    if isinstance(raw, (SchemeReference, SchemeDefinition)):
        return SecuritySchemeEntry(name=name, definition=raw)
    if not isinstance(raw, Mapping):
        return None

    if '$ref' in raw:
        return SecuritySchemeEntry(name=name, definition=SchemeReference(ref=str(raw['$ref'])))

    kind = raw.get('type')
    subtype = raw.get('scheme')
    flows = raw.get('flows')
    definition = SchemeDefinition(
        kind=kind if isinstance(kind, str) else None,
        subtype=subtype if isinstance(subtype, str) else None,
        flows=dict(flows) if isinstance(flows, Mapping) else None,
    )
    return SecuritySchemeEntry(name=name, definition=definition)


# --- Per-kind handlers ---

def _api_key_entries(name: str, definition: SchemeDefinition, resolve_name: EnvVarNameResolver) -> List[EnvEntry]:
    return [VariableDeclaration(name=resolve_name(name, "API_KEY"), placeholder="your_api_key_here")]


def _http_entries(name: str, definition: SchemeDefinition, resolve_name: EnvVarNameResolver) -> List[EnvEntry]:
    subtype = (definition.subtype or "").lower()
    variables = _HTTP_VARIABLES.get(subtype)
    if variables is None:
        return _skip(name, definition, resolve_name)
    return [
        VariableDeclaration(name=resolve_name(name, suffix), placeholder=placeholder)
        for suffix, placeholder in variables
    ]


def _oauth2_entries(name: str, definition: SchemeDefinition, resolve_name: EnvVarNameResolver) -> List[EnvEntry]:
    flow_names = ", ".join(str(flow) for flow in definition.flows) if definition.flows else "unknown"
    # Not routed through resolve_name.
    var_name = f"OAUTH_TOKEN_{sanitize_scheme_name(name)}"
    return [
        VariableDeclaration(
            name=var_name,
            placeholder="your_oauth_token_here",
            comment_lines=[f"OAuth2 authentication ({flow_names} flow)"],
        )
    ]


def _skip(name: str, definition: SchemeDefinition, resolve_name: EnvVarNameResolver) -> List[EnvEntry]:
    logger.debug("Skipping unsupported security scheme '%s' (type=%r, scheme=%r).",
                 name, definition.kind, definition.subtype)
    return []


_KIND_HANDLERS: Dict[str, Callable[[str, SchemeDefinition, EnvVarNameResolver], List[EnvEntry]]] = {
    "apiKey": _api_key_entries,
    "http": _http_entries,
    "oauth2": _oauth2_entries,
}


def map_security_schemes(
    schemes: Optional[Mapping[str, SchemeInput]],
    resolve_name: EnvVarNameResolver = get_env_var_name,
) -> List[EnvEntry]:
    """
    Produces the ordered env entries for a scheme-name -> scheme mapping.

    Entries follow the mapping's insertion order. An absent or empty mapping
    yields a single "no authentication" comment; a non-empty mapping whose
    schemes are all unsupported yields no entries.
    """
    if not schemes:
        return [NO_AUTH_COMMENT]

    entries: List[EnvEntry] = []
    for name, raw in schemes.items():
        name = str(name)
        entry = parse_security_scheme(name, raw)
        if entry is None:
            logger.debug("Skipping malformed security scheme '%s'.", name)
            continue

        definition = entry.definition
        if isinstance(definition, SchemeReference):
            entries.append(CommentLine(text=f"{name} - Referenced security scheme (reference not resolved)"))
            continue

        handler = _KIND_HANDLERS.get(definition.kind, _skip)
        entries.extend(handler(name, definition, resolve_name))

    return entries
