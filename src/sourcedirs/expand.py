# Variable expansion for pattern text.
# The resolver only needs a callable str -> str; this is the one the CLI
# builds from the process environment plus explicit overrides.
#
# Unknown names are left as written, so text without variables is unchanged.
# Dotted names such as ${env.NAME} are accepted inside braces only.

from __future__ import annotations

import os
import re
from string import Template
from typing import Dict, Iterable, Mapping, Optional

from sourcedirs.errors import InvalidVariable

_NAME_RE = re.compile(r"^[_A-Za-z][_A-Za-z0-9.]*$")


class _PathTemplate(Template):
    braceidpattern = r"[_a-z][_a-z0-9.]*"


class VariableExpander:
    # Expands ${NAME} and $NAME references from a fixed mapping.
    def __init__(self, variables: Mapping[str, str]):
        self.variables: Dict[str, str] = dict(variables)

    def __call__(self, text: str) -> str:
        return _PathTemplate(text).safe_substitute(self.variables)

    @classmethod
    def from_environment(
        cls,
        overrides: Optional[Mapping[str, str]] = None,
        inherit_env: bool = True,
    ) -> "VariableExpander":
        # Overrides win over inherited environment values.
        variables: Dict[str, str] = dict(os.environ) if inherit_env else {}
        variables.update(overrides or {})
        return cls(variables)


def parse_assignments(items: Iterable[str]) -> Dict[str, str]:
    # Parse NAME=VALUE strings. The value may be empty or contain "=".
    result: Dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not _NAME_RE.match(name):
            raise InvalidVariable(f"Expected NAME=VALUE, got: {item!r}")
        result[name] = value
    return result
