"""Tests for canonical folder paths."""

import pytest

from folder_contents.services.exceptions import InvalidPath
from folder_contents.utils.paths import join_path, normalize_path, path_prefixes, validate_path


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("/a/b", "/a/b"),
        ("/a/b/", "/a/b"),
        ("  /a/b  ", "/a/b"),
        ("/a//b///c", "/a/b/c"),
        ("/", "/"),
        ("//", "/"),
        ("/Shared/Mixed Case", "/Shared/Mixed Case"),
    ],
)
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == expected


def test_validate_canonical_path():
    assert validate_path("/a/b") == "/a/b"
    assert validate_path("/") == "/"


def test_validate_trims_whitespace():
    assert validate_path(" /a/b ") == "/a/b"


def test_validate_rejects_trailing_separator():
    with pytest.raises(InvalidPath) as exc_info:
        validate_path("/a/b/")
    assert exc_info.value.field == "path"


def test_validate_rejects_repeated_separator():
    with pytest.raises(InvalidPath):
        validate_path("/a//b")


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_validate_rejects_empty(raw):
    with pytest.raises(InvalidPath):
        validate_path(raw)


def test_validate_rejects_relative_path():
    with pytest.raises(InvalidPath):
        validate_path("a/b")


def test_path_prefixes():
    assert path_prefixes("/") == ["/"]
    assert path_prefixes("/a") == ["/", "/a"]
    assert path_prefixes("/a/b/c") == ["/", "/a", "/a/b", "/a/b/c"]


def test_join_path():
    assert join_path("/", "Shared") == "/Shared"
    assert join_path("/Shared", "Projects") == "/Shared/Projects"
