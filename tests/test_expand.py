# Unit tests for sourcedirs.expand.
# These tests validate ${NAME} expansion and NAME=VALUE parsing.

from __future__ import annotations

import pytest

from sourcedirs.errors import InvalidVariable, SourceDirsError
from sourcedirs.expand import VariableExpander, parse_assignments


def test_expander_replaces_braced_and_bare_references() -> None:
    expand = VariableExpander({"WORKSPACE": "/ws", "MOD": "core"})

    assert expand("${WORKSPACE}/src") == "/ws/src"
    assert expand("$MOD/gen*") == "core/gen*"


def test_expander_leaves_unknown_names_untouched() -> None:
    expand = VariableExpander({})

    assert expand("${MISSING}/src") == "${MISSING}/src"


def test_expander_is_identity_without_variable_syntax() -> None:
    expand = VariableExpander({"A": "b"})
    text = "C:\\ws\\src/*/gen?"

    assert expand(text) == text
    assert expand(expand(text)) == text


def test_from_environment_overrides_win(monkeypatch) -> None:
    monkeypatch.setenv("SD_TEST_ROOT", "/from-env")
    monkeypatch.setenv("SD_TEST_OTHER", "kept")

    expand = VariableExpander.from_environment(overrides={"SD_TEST_ROOT": "/override"})

    assert expand("${SD_TEST_ROOT}:${SD_TEST_OTHER}") == "/override:kept"


def test_from_environment_can_ignore_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("SD_TEST_ROOT", "/from-env")

    expand = VariableExpander.from_environment(inherit_env=False)

    assert expand("${SD_TEST_ROOT}") == "${SD_TEST_ROOT}"


def test_parse_assignments_accepts_empty_values_and_equals_signs() -> None:
    got = parse_assignments(["A=1", "EMPTY=", "OPTS=-Dx=y"])

    assert got == {"A": "1", "EMPTY": "", "OPTS": "-Dx=y"}


@pytest.mark.parametrize("item", ["novalue", "=value", "1BAD=x", "has space=x"])
def test_parse_assignments_rejects_malformed_items(item: str) -> None:
    with pytest.raises(InvalidVariable) as exc_info:
        parse_assignments([item])

    assert isinstance(exc_info.value, ValueError)
    assert isinstance(exc_info.value, SourceDirsError)


def test_expander_accepts_dotted_names_in_braces() -> None:
    expand = VariableExpander({"env.ROOT": "/ws", "env": "bare"})

    assert expand("${env.ROOT}/src") == "/ws/src"
    assert expand("$env.ROOT") == "bare.ROOT"


def test_parse_assignments_accepts_dotted_names() -> None:
    assert parse_assignments(["env.ROOT=/ws"]) == {"env.ROOT": "/ws"}
