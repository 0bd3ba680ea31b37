from __future__ import annotations

import os

import pytest

from doctasks.tasks.searchpath import SearchPaths, collect_prereq_dirs, make_env, merge_dirs


def test_collects_matching_directories_in_order() -> None:
    dirs = collect_prereq_dirs(["figs/a.eps", "doc/b.tex", "plots/c.eps"], [".eps"])
    assert dirs == [os.path.abspath("figs"), os.path.abspath("plots")]


def test_shared_directories_are_listed_once() -> None:
    prereqs = ["figs/a.eps", "figs/b.eps", "other/c.eps", "figs/d.eps"]
    assert collect_prereq_dirs(prereqs, [".eps"]) == [
        os.path.abspath("figs"),
        os.path.abspath("other"),
    ]


def test_collect_is_idempotent() -> None:
    prereqs = ["a/x.bib", "b/y.tex", "a/z.bib"]
    assert collect_prereq_dirs(prereqs, [".bib"]) == collect_prereq_dirs(prereqs, [".bib"])


def test_merge_keeps_first_seen_order() -> None:
    assert merge_dirs(["/a", "/b"], ["/b", "/c", "/a"]) == ["/a", "/b", "/c"]


def test_make_env_without_dirs_is_empty() -> None:
    assert make_env("TEXINPUTS", []) == {}


def test_make_env_appends_existing_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEXINPUTS", "/usr/share/tex")
    assert make_env("TEXINPUTS", ["/a", "/b"]) == {"TEXINPUTS": "/a:/b:/usr/share/tex"}


def test_make_env_keeps_default_path_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BIBINPUTS", raising=False)
    assert make_env("BIBINPUTS", ["/refs"]) == {"BIBINPUTS": "/refs:"}


def test_search_paths_cache_each_slot(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TEXINPUTS", raising=False)
    search = SearchPaths(include_dirs=["/styles"])
    first = search.export("latex", "TEXINPUTS", ["figs/a.eps"], [".eps"])
    again = search.export("latex", "TEXINPUTS", ["other/b.eps"], [".eps"])

    assert first is again
    assert first == {"TEXINPUTS": f"{os.path.abspath('figs')}:/styles:"}


def test_search_paths_without_include_dirs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BIBINPUTS", raising=False)
    search = SearchPaths(include_dirs=["/styles"])
    env = search.export("bibtex", "BIBINPUTS", ["refs/a.bib"], [".bib"], with_include_dirs=False)
    assert env == {"BIBINPUTS": f"{os.path.abspath('refs')}:"}
