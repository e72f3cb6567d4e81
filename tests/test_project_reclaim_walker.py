"""Tests for project_reclaim/walker.py module."""

from __future__ import annotations

from project_reclaim.walker import WalkSettings, is_hidden, walk_candidates
from tests.assertions import assert_equal
from tests.project_test_utils import make_git_repo, write_file


def _walk(roots, settings=None):
    return [candidate.path for candidate in walk_candidates(roots, settings)]


def test_is_hidden():
    """Dot-prefixed names are hidden."""
    assert is_hidden(".cache")
    assert not is_hidden("cache")


class TestWalkCandidates:
    """Tests for walk_candidates."""

    def test_breadth_first_order(self, tmp_path):
        """Shallower directories come first; siblings are visited by name."""
        root = tmp_path.resolve()
        (root / "b").mkdir()
        (root / "a" / "c").mkdir(parents=True)
        assert_equal(_walk([root]), [root, root / "a", root / "b", root / "a" / "c"])

    def test_hidden_directories_are_pruned(self, tmp_path):
        """Hidden directories and everything below them are skipped."""
        root = tmp_path.resolve()
        (root / ".cache" / "project").mkdir(parents=True)
        (root / "visible").mkdir()
        assert_equal(_walk([root]), [root, root / "visible"])

    def test_files_are_not_candidates(self, tmp_path):
        """Only directories are yielded."""
        root = tmp_path.resolve()
        write_file(root / "README.md", "readme")
        assert_equal(_walk([root]), [root])

    def test_ignored_directories_inside_repository(self, tmp_path):
        """Directories excluded by .gitignore are not descended into."""
        root = make_git_repo(tmp_path.resolve())
        write_file(root / ".gitignore", "target/\n")
        (root / "target" / "debug").mkdir(parents=True)
        (root / "src").mkdir()
        assert_equal(_walk([root]), [root, root / "src"])

    def test_ignored_directories_outside_repository(self, tmp_path):
        """Ignore files are honored without a repository, too."""
        root = tmp_path.resolve()
        write_file(root / ".ignore", "dist/\n")
        (root / "dist").mkdir()
        assert_equal(_walk([root]), [root])

    def test_global_ignore_file(self, tmp_path):
        """The configured global ignore file prunes directories."""
        root = tmp_path.resolve() / "work"
        root.mkdir()
        global_file = write_file(tmp_path / "global-ignore", "node_modules/\n")
        (root / "node_modules" / "dep").mkdir(parents=True)
        settings = WalkSettings(global_ignore_file=global_file)
        assert_equal(_walk([root], settings), [root])

    def test_ignored_root_inside_repository_is_skipped(self, tmp_path):
        """A root excluded by its repository yields nothing."""
        repo = make_git_repo(tmp_path.resolve())
        write_file(repo / ".gitignore", "vendor/\n")
        (repo / "vendor" / "lib").mkdir(parents=True)
        assert_equal(_walk([repo / "vendor"]), [])

    def test_repository_root_is_always_walked(self, tmp_path):
        """A repository root itself is never considered ignored."""
        repo = make_git_repo(tmp_path.resolve())
        assert_equal(_walk([repo]), [repo])

    def test_overlapping_roots_are_deduplicated(self, tmp_path):
        """Directories reachable from several roots are yielded once."""
        root = tmp_path.resolve()
        (root / "a").mkdir()
        assert_equal(_walk([root, root / "a"]), [root, root / "a"])
        assert_equal(_walk([root / "a", root]), [root / "a", root])

    def test_symlink_cycles_terminate(self, tmp_path):
        """A symlink back to an ancestor is not followed twice."""
        root = tmp_path.resolve()
        (root / "a").mkdir()
        (root / "a" / "loop").symlink_to(root)
        assert_equal(_walk([root]), [root, root / "a"])

    def test_special_directories_are_skipped(self, tmp_path):
        """Configured special directories are not searched."""
        root = tmp_path.resolve()
        (root / "Library" / "Caches").mkdir(parents=True)
        (root / "code").mkdir()
        settings = WalkSettings(special_dirs=frozenset({root / "Library"}))
        assert_equal(_walk([root], settings), [root, root / "code"])

    def test_candidate_rules_include_nested_ignore_files(self, tmp_path):
        """Each candidate carries the rules in force inside it."""
        root = tmp_path.resolve()
        write_file(root / "app" / ".gitignore", "build/\n")
        candidates = {candidate.path: candidate for candidate in walk_candidates([root])}
        assert candidates[root / "app"].ignore_rules.is_ignored(root / "app" / "build", True)
        assert not candidates[root].ignore_rules.is_ignored(root / "build", True)

    def test_symlink_to_ignored_directory_is_skipped(self, tmp_path):
        """An alias does not smuggle an ignored directory back into the walk."""
        root = tmp_path.resolve()
        write_file(root / ".gitignore", "vendor/\n")
        (root / "vendor" / "dep").mkdir(parents=True)
        (root / "alias").symlink_to(root / "vendor")
        assert_equal(_walk([root]), [root])

    def test_symlink_to_ignored_directory_elsewhere(self, tmp_path):
        """Targets outside the walked tree are checked against their own rules."""
        root = tmp_path.resolve() / "work"
        other = tmp_path.resolve() / "other"
        write_file(other / ".ignore", "cache/\n")
        (other / "cache").mkdir()
        root.mkdir()
        (root / "alias").symlink_to(other / "cache")
        assert_equal(_walk([root]), [root])
