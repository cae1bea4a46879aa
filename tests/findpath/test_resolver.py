"""Tests for PathResolver candidate expansion and selection."""

import os

import pytest

from findpath.runtime.resolver import PathResolver, find_path
from findpath.schemas.search_spec import SearchSpec

pytestmark = pytest.mark.skipif(os.name == "nt", reason="relies on POSIX exec bits")


def make_spec(**data):
    data.setdefault("kind", "executable")
    return SearchSpec.model_validate(data)


@pytest.fixture
def resolver_for(tmp_path, runner, settings):
    def _make(env=None):
        return PathResolver(root=tmp_path, runner=runner, env=env or {}, settings=settings)

    return _make


class TestCandidatePaths:
    """Expansion order and templating."""

    def test_search_paths_outer_names_inner(self, tmp_path, resolver_for):
        spec = make_spec(names=["cc", "gcc"], search_paths=["/opt/a", "/opt/b"])

        paths = resolver_for().candidate_paths(spec)

        assert paths == ["/opt/a/cc", "/opt/a/gcc", "/opt/b/cc", "/opt/b/gcc"]

    def test_relative_search_paths_use_root(self, tmp_path, resolver_for):
        spec = make_spec(names=["cc"], search_paths=["tools/bin"])

        assert resolver_for().candidate_paths(spec) == [str(tmp_path / "tools" / "bin" / "cc")]

    def test_path_search_for_executables(self, resolver_for):
        spec = make_spec(names=["cc"], search_paths=["/opt/a"])
        env = {"PATH": os.pathsep.join(["/usr/local/bin", "/usr/bin"])}

        paths = resolver_for(env).candidate_paths(spec)

        assert paths == ["/opt/a/cc", "/usr/local/bin/cc", "/usr/bin/cc"]

    def test_no_path_search_for_files(self, resolver_for):
        spec = make_spec(kind="file", names=["clang.h"], search_paths=["/opt/a"])

        paths = resolver_for({"PATH": "/usr/bin"}).candidate_paths(spec)

        assert paths == ["/opt/a/clang.h"]

    def test_glob_patterns_expand_sorted(self, tmp_path, resolver_for, make_executable):
        bin_dir = tmp_path / "bin"
        for name in ["clang++-9", "clang++-14", "clang++-10"]:
            make_executable(bin_dir / name)
        spec = make_spec(names=["clang++", "clang++-*"], search_paths=[str(bin_dir)])

        paths = resolver_for().candidate_paths(spec)

        assert paths == [
            str(bin_dir / "clang++"),
            str(bin_dir / "clang++-10"),
            str(bin_dir / "clang++-14"),
            str(bin_dir / "clang++-9"),
        ]

    def test_absolute_names_come_first(self, resolver_for):
        spec = make_spec(names=["cc", "/opt/special/cc"], search_paths=["/opt/a"])

        paths = resolver_for().candidate_paths(spec)

        assert paths == ["/opt/special/cc", "/opt/a/cc"]

    def test_env_templating(self, resolver_for):
        spec = make_spec(
            names=["${CLANG:-clang++}"],
            search_paths=["${LLVM_ROOT}/bin", "/usr/bin"],
        )

        paths = resolver_for({"CLANG": "clang++-15"}).candidate_paths(spec)

        # LLVM_ROOT is unset, so that search path is skipped entirely
        assert paths == ["/usr/bin/clang++-15"]

    def test_unset_names_are_skipped(self, resolver_for):
        spec = make_spec(names=["${CLANG}", "clang++"], search_paths=["/usr/bin"])

        assert resolver_for().candidate_paths(spec) == ["/usr/bin/clang++"]

    def test_duplicates_keep_first_position(self, resolver_for):
        spec = make_spec(names=["cc"], search_paths=["/usr/bin", "/usr/bin/", "/opt"])

        paths = resolver_for({"PATH": "/opt:/usr/bin"}).candidate_paths(spec)

        assert paths == ["/usr/bin/cc", "/opt/cc"]


class TestFind:
    """Selection of the best path."""

    def test_first_existing_without_version(self, tmp_path, resolver_for, make_executable):
        make_executable(tmp_path / "b" / "cc")
        make_executable(tmp_path / "c" / "cc")
        spec = make_spec(names=["cc"], search_paths=["a", "b", "c"])

        assert resolver_for().find(spec) == str(tmp_path / "b" / "cc")

    def test_not_found_is_none(self, resolver_for):
        spec = make_spec(names=["cc"], search_paths=["nowhere"])

        assert resolver_for().find(spec) is None
        assert resolver_for().find_all(spec) == []

    def test_non_executable_files_skipped(self, tmp_path, resolver_for, make_executable):
        (tmp_path / "a").mkdir()
        (tmp_path / "a" / "cc").write_text("not executable")
        make_executable(tmp_path / "b" / "cc")
        spec = make_spec(names=["cc"], search_paths=["a", "b"])

        assert resolver_for().find(spec) == str(tmp_path / "b" / "cc")

    def test_directory_kind(self, tmp_path, resolver_for):
        (tmp_path / "llvm-12" / "include").mkdir(parents=True)
        spec = make_spec(kind="directory", names=["llvm-*/include"], search_paths=["."])

        assert resolver_for().find(spec) == str(tmp_path / "llvm-12" / "include")

    def test_found_on_path(self, tmp_path, resolver_for, make_executable):
        tool = make_executable(tmp_path / "sysbin" / "clang++")
        spec = make_spec(names=["clang++"])

        found = resolver_for({"PATH": str(tmp_path / "sysbin")}).find(spec)

        assert found == str(tool)

    def test_highest_version_wins(self, tmp_path, resolver_for, runner, make_executable):
        bin_dir = tmp_path / "bin"
        old = make_executable(bin_dir / "clang++-9")
        new = make_executable(bin_dir / "clang++-14")
        runner.add(old, stdout="clang version 9.0.1")
        runner.add(new, stdout="clang version 14.0.6")
        spec = make_spec(
            names=["clang++-*"],
            search_paths=[str(bin_dir)],
            version={"command": "% --version", "regex": "clang version ([0-9.]+)"},
        )

        assert resolver_for().find(spec) == str(new)

    def test_version_probe_uses_settings_timeout(self, tmp_path, resolver_for, runner, make_executable):
        tool = make_executable(tmp_path / "bin" / "cc")
        runner.add(tool, stdout="version 1.0")
        spec = make_spec(
            names=["cc"],
            search_paths=["bin"],
            version={"command": "% --version", "regex": "version ([0-9.]+)"},
        )

        resolver_for().find(spec)

        assert runner.calls == [(f"{tool} --version", 2.0)]

    def test_min_version_filters(self, tmp_path, resolver_for, runner, make_executable):
        tool = make_executable(tmp_path / "bin" / "clang++")
        runner.add(tool, stdout="clang version 3.9.1")
        spec = make_spec(
            names=["clang++"],
            search_paths=["bin"],
            version={"min": "4.0.0", "command": "% --version", "regex": "clang version ([0-9.]+)"},
        )

        assert resolver_for().find(spec) is None

    def test_version_from_file_name(self, tmp_path, resolver_for, runner, make_executable):
        for name in ["llvm-config-11", "llvm-config-13", "llvm-config-7"]:
            make_executable(tmp_path / "bin" / name)
        spec = make_spec(
            names=["llvm-config-*"],
            search_paths=["bin"],
            version={"max": "12", "regex": "llvm-config-([0-9.]+)$"},
        )

        assert resolver_for().find(spec) == str(tmp_path / "bin" / "llvm-config-11")
        assert runner.calls == []

    def test_env_override_with_prefer_fallback(self, tmp_path, resolver_for, runner, make_executable):
        """An operator-supplied path without a detectable version still wins."""
        custom = make_executable(tmp_path / "custom" / "my-clang")
        system = make_executable(tmp_path / "bin" / "clang++")
        runner.add(custom, stdout="weird banner")
        runner.add(system, stdout="clang version 17.0.0")
        spec = make_spec(
            names=["${CLANG:-clang++}", "clang++"],
            search_paths=["bin"],
            version={
                "command": "% --version",
                "regex": "clang version ([0-9.]+)",
                "fallback": "prefer",
            },
        )

        found = resolver_for({"CLANG": str(custom)}).find(spec)

        assert found == str(custom)

    def test_equal_versions_pick_last_checked_when_preferring_highest(
        self, tmp_path, resolver_for, runner, make_executable
    ):
        first = make_executable(tmp_path / "a" / "cc")
        second = make_executable(tmp_path / "b" / "cc")
        runner.add(first, stdout="version 2.0.0").add(second, stdout="version 2.0")
        spec = make_spec(
            names=["cc"],
            search_paths=["a", "b"],
            version={"command": "% --version", "regex": "version ([0-9.]+)"},
        )

        assert resolver_for().find(spec) == str(second)
        assert [c.path for c in resolver_for().find_all(spec)] == [str(first), str(second)]

    def test_find_all_best_first(self, tmp_path, resolver_for, runner, make_executable):
        a = make_executable(tmp_path / "bin" / "cc-a")
        b = make_executable(tmp_path / "bin" / "cc-b")
        runner.add(a, stdout="version 2.0").add(b, stdout="version 3.1")
        spec = make_spec(
            names=["cc-*"],
            search_paths=["bin"],
            version={"command": "% --version", "regex": "version ([0-9.]+)", "prefer": "lowest"},
        )

        ranked = resolver_for().find_all(spec)

        assert [c.path for c in ranked] == [str(a), str(b)]
        assert str(ranked[0].rank_key) == "2.0.0"


class TestChecks:
    """Extra checks gate candidates before version probing."""

    def test_path_check_gates_candidates(self, tmp_path, resolver_for, make_executable):
        bare = make_executable(tmp_path / "bare" / "bin" / "clang++")
        full = make_executable(tmp_path / "full" / "bin" / "clang++")
        (tmp_path / "full" / "include" / "clang").mkdir(parents=True)
        spec = make_spec(
            names=["clang++"],
            search_paths=[str(bare.parent), str(full.parent)],
            checks=[{"path": "../include/clang", "kind": "directory"}],
        )

        assert resolver_for().find(spec) == str(full)

    def test_failed_check_skips_version_probe(self, tmp_path, resolver_for, runner, make_executable):
        tool = make_executable(tmp_path / "bin" / "cc")
        runner.add(tool, stdout="version 5.0")
        spec = make_spec(
            names=["cc"],
            search_paths=["bin"],
            checks=[{"path": "missing.h"}],
            version={"command": "% --version", "regex": "version ([0-9.]+)"},
        )

        assert resolver_for().find(spec) is None
        assert runner.calls == []

    def test_shell_check(self, tmp_path, resolver_for, runner, make_executable):
        broken = make_executable(tmp_path / "a" / "cc")
        working = make_executable(tmp_path / "b" / "cc")
        runner.add(broken, return_code=1).add(working)
        spec = make_spec(names=["cc"], search_paths=["a", "b"], checks=[{"shell": "% -v"}])

        assert resolver_for().find(spec) == str(working)


class TestFindFromFile:
    """YAML specs on disk."""

    def test_find_from_file(self, tmp_path, resolver_for, make_executable):
        tool = make_executable(tmp_path / "tools" / "ninja")
        spec_file = tmp_path / "ninja.yml"
        spec_file.write_text("kind: Executable\ntry: [ninja]\nsearch_paths: [tools]\n")

        assert resolver_for().find_from_file(spec_file) == str(tool)


class TestFindPathHelper:
    """Module-level convenience function."""

    def test_find_path(self, tmp_path, make_executable):
        tool = make_executable(tmp_path / "bin" / "ninja")
        spec = make_spec(names=["ninja"], search_paths=["bin"])

        assert find_path(spec, root=tmp_path, env={}) == str(tool)
