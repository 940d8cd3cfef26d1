"""Macro expansion for ${...} and $NAME references.

Resolves references in condition settings against the build variables
(environment, build parameters) before the value reaches an evaluator.
"""

import re
from typing import Any, Mapping

_MACRO_RE = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def resolve_path(doc: Any, path: str) -> Any:
    """Resolve a dotted path in a nested dict/list structure.

    Supports dict key lookups and numeric list indices:
        params.targets.0  →  variables["params"]["targets"][0]
    """
    if not path:
        return doc
    current = doc
    for part in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(part)
        elif isinstance(current, list):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                return None
        else:
            return None
    return current


def expand(template: str, variables: Mapping[str, Any]) -> str:
    """Expand macro references in ``template`` in a single pass.

    - ``${path.to.value}``: resolved via resolve_path; unresolved → ""
    - ``$NAME``: top-level variable; left untouched when undefined

    Substituted values are not expanded again. Non-string values are
    converted with str().
    """
    if not template or "$" not in template:
        return template

    def _replace(match):
        braced, bare = match.group(1), match.group(2)
        if braced is not None:
            value = resolve_path(variables, braced.strip())
            return str(value) if value is not None else ""
        value = variables.get(bare)
        return str(value) if value is not None else match.group(0)

    return _MACRO_RE.sub(_replace, template)
