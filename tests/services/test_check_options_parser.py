import pytest

from linkscout.exceptions import InvalidCheckOptionsError
from linkscout.services.check_options_parser import CheckOptionsParser


def test_parse_full_mapping():
    opts = CheckOptionsParser().parse({
        "path": "https://example.com",
        "concurrency": 8,
        "port": 5050,
        "recurse": True,
        "links_to_skip": ["^https://twitter"],
    })
    assert opts.path == "https://example.com"
    assert opts.concurrency == 8
    assert opts.port == 5050
    assert opts.recurse is True
    assert opts.links_to_skip == ["^https://twitter"]


def test_defaults_use_injected_concurrency():
    opts = CheckOptionsParser(default_concurrency=7).parse({"path": "docs"})
    assert opts.concurrency == 7
    assert opts.recurse is False
    assert opts.port is None


def test_skip_alias_and_single_string():
    opts = CheckOptionsParser().parse({"path": "docs", "skip": "^http://ignored"})
    assert opts.links_to_skip == ["^http://ignored"]


def test_overrides_win_when_not_none():
    parser = CheckOptionsParser()
    opts = parser.parse({"path": "docs", "concurrency": 3, "recurse": True}, path="site", concurrency=None, recurse=None)
    assert opts.path == "site"
    assert opts.concurrency == 3
    assert opts.recurse is True


def test_overrides_without_file():
    opts = CheckOptionsParser().parse(None, path="site", port=0)
    assert opts.path == "site"
    assert opts.port == 0


@pytest.mark.parametrize("raw,expected", [("yes", True), ("false", False), (1, True), (0, False)])
def test_recurse_coercion(raw, expected):
    assert CheckOptionsParser().parse({"path": "docs", "recurse": raw}).recurse is expected


def test_missing_path_rejected():
    with pytest.raises(InvalidCheckOptionsError):
        CheckOptionsParser().parse({"recurse": True})


def test_non_integer_concurrency_rejected():
    with pytest.raises(InvalidCheckOptionsError):
        CheckOptionsParser().parse({"path": "docs", "concurrency": "lots"})


def test_skip_mapping_rejected():
    with pytest.raises(InvalidCheckOptionsError):
        CheckOptionsParser().parse({"path": "docs", "links_to_skip": {"a": 1}})
