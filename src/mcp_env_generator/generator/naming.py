import re
from typing import Callable

EnvVarNameResolver = Callable[[str, str], str]

_INVALID_CHARS_RE = re.compile(r"[^a-zA-Z0-9]")


def sanitize_scheme_name(scheme_name: str) -> str:
    """Replaces every character outside [A-Za-z0-9] with '_' and uppercases the result."""
    return _INVALID_CHARS_RE.sub("_", scheme_name).upper()


def get_env_var_name(scheme_name: str, suffix: str) -> str:
    """
    Default env var name resolver: prefixes the sanitized scheme name with
    the purpose suffix, e.g. ("x-api-key", "API_KEY") -> "API_KEY_X_API_KEY".
    """
    return f"{suffix}_{sanitize_scheme_name(scheme_name)}"
