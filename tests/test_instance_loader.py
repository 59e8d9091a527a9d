"""Unit tests for orienteering/io/instance_loader.py."""

from __future__ import annotations

import pytest

from orienteering.errors import InstanceReadError, InvalidTokenError, MissingTokenError
from orienteering.io.instance_loader import load_instance, parse_row


@pytest.fixture()
def instance_file(tmp_path):
    """Create a temporary four-vertex instance file."""
    p = tmp_path / "instance.txt"
    p.write_text("0 0 0\n3 4 10\n6 0 15.5\n6 8 0\n")
    return p


def test_load_instance(instance_file) -> None:
    instance = load_instance(instance_file)
    graph = instance.graph
    assert len(graph) == 4
    assert graph.prizes == (0.0, 10.0, 15.5, 0.0)
    assert instance.positions[1] == (3.0, 4.0)
    assert graph.cost(0, 1) == pytest.approx(5.0)
    assert graph.cost(0, 3) == pytest.approx(10.0)
    assert graph.cost(1, 2) == graph.cost(2, 1)


def test_skips_blank_lines_and_surrounding_whitespace(tmp_path) -> None:
    p = tmp_path / "instance.txt"
    p.write_text("\n  1 1 5  \n\n\t2 2 6\n\n")
    instance = load_instance(p)
    assert len(instance.graph) == 2


def test_extra_tokens_ignored(tmp_path) -> None:
    p = tmp_path / "instance.txt"
    p.write_text("1 2 3 extra\n4 5 6\n")
    assert load_instance(p).graph.prizes == (3.0, 6.0)


def test_missing_token_names_field_and_line(tmp_path) -> None:
    p = tmp_path / "instance.txt"
    p.write_text("0 0 1\n\n5 5\n")
    with pytest.raises(MissingTokenError) as info:
        load_instance(p)
    assert info.value.field == "score"
    assert info.value.line == 3


def test_invalid_token_names_token_type_and_field(tmp_path) -> None:
    p = tmp_path / "instance.txt"
    p.write_text("0 abc 1\n")
    with pytest.raises(InvalidTokenError) as info:
        load_instance(p)
    err = info.value
    assert err.token == "abc"
    assert err.field == "y coordinate"
    assert err.expected_type == "floating point number"
    assert "abc" in str(err) and "y coordinate" in str(err)


def test_errors_share_base_class() -> None:
    with pytest.raises(InstanceReadError):
        parse_row(["1"], 1)


def test_missing_file_raises() -> None:
    with pytest.raises(FileNotFoundError):
        load_instance("/nonexistent/path/to/file")
