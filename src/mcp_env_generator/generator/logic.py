import os
from jinja2 import Environment, FileSystemLoader
from typing import List, Mapping, Optional, Sequence, Tuple

from .mapper import NO_AUTH_COMMENT, SchemeInput, extract_security_schemes, map_security_schemes
from .models import (
    CommentLine,
    EnvEntry,
    EnvExampleRequest,
    GenerationOptions,
    LoaderDescriptor,
    LoaderField,
)
from .naming import EnvVarNameResolver, get_env_var_name

TEMPLATE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), 'templates'))
env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

LOADER_DESCRIPTOR = LoaderDescriptor(
    variables=[
        LoaderField(name="port", env_var="PORT", default="3000"),
        LoaderField(name="log_level", env_var="LOG_LEVEL", default="info"),
    ],
)


def _render_entry(entry: EnvEntry) -> List[str]:
    if isinstance(entry, CommentLine):
        return [f"# {entry.text}"]
    lines = [f"# {comment}" for comment in entry.comment_lines]
    lines.append(f"{entry.name}={entry.placeholder}")
    return lines


def assemble_env_example(entries: Sequence[EnvEntry], options: Optional[GenerationOptions] = None) -> str:
    """
    Wraps the mapped auth entries with the server header, the optional
    analytics/tracing blocks and the closing footer.

    Only the lone "no authentication" comment drops the auth section; an
    empty entry list still gets the section header.
    """
    options = options or GenerationOptions()

    requires_auth = list(entries) != [NO_AUTH_COMMENT]
    auth_lines: List[str] = []
    if requires_auth:
        for entry in entries:
            auth_lines.extend(_render_entry(entry))

    template = env.get_template('env.example.j2')
    return template.render(requires_auth=requires_auth, auth_lines=auth_lines, options=options)


def generate_env_example(
    security_schemes: Optional[Mapping[str, SchemeInput]] = None,
    options: Optional[GenerationOptions] = None,
    resolve_name: EnvVarNameResolver = get_env_var_name,
) -> str:
    """Generates the content of the .env.example file for an MCP server."""
    entries = map_security_schemes(security_schemes, resolve_name)
    return assemble_env_example(entries, options)


def generate_env_loader() -> str:
    """
    Generates the Python module the MCP server imports at startup to load its
    .env file and expose `config.port` / `config.log_level`.
    """
    template = env.get_template('env_loader.py.j2')
    return template.render(descriptor=LOADER_DESCRIPTOR)


def generate_env_files(request: EnvExampleRequest) -> Tuple[bytes, bytes]:
    """
    Generates both the .env.example template and the env loader module.

    Returns:
        Tuple[bytes, bytes]: (env_example_content, env_loader_content)
    """
    security_schemes = extract_security_schemes(request.openapi_spec)
    env_example = generate_env_example(security_schemes, request.options())
    return env_example.encode('utf-8'), generate_env_loader().encode('utf-8')
