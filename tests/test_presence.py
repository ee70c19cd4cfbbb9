"""Tests for classifying a file across HEAD and HEAD^."""

from __future__ import annotations

import unittest

from git_revert_file.locator import locate
from git_revert_file.models import PresenceState
from git_revert_file.presence import classify

from support import GitRepoTestCase


class FromProbesTests(unittest.TestCase):
    def test_all_combinations(self) -> None:
        cases = {
            (True, True): PresenceState.PRESENT_IN_BOTH,
            (False, True): PresenceState.PRESENT_ONLY_IN_PREVIOUS,
            (True, False): PresenceState.PRESENT_ONLY_IN_CURRENT,
            (False, False): PresenceState.PRESENT_IN_NEITHER,
        }
        for (in_current, in_previous), expected in cases.items():
            with self.subTest(in_current=in_current, in_previous=in_previous):
                state = PresenceState.from_probes(in_current, in_previous)
                self.assertIs(state, expected)
                self.assertEqual(state.in_current, in_current)
                self.assertEqual(state.in_previous, in_previous)


class ClassifyTests(GitRepoTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.commit_file("base.txt", "base")

    def test_present_in_both(self) -> None:
        path = self.commit_file("file.txt", "Initial content")
        self.commit_file("file.txt", "Modified content")

        self.assertIs(classify(locate(path)), PresenceState.PRESENT_IN_BOTH)

    def test_present_only_in_current(self) -> None:
        path = self.commit_file("new.txt", "New file content")

        self.assertIs(classify(locate(path)), PresenceState.PRESENT_ONLY_IN_CURRENT)

    def test_present_only_in_previous(self) -> None:
        path = self.commit_file("doomed.txt", "File to be deleted")
        path.unlink()
        self.add("doomed.txt")
        self.commit("Deleted the file")

        self.assertIs(classify(locate(path)), PresenceState.PRESENT_ONLY_IN_PREVIOUS)

    def test_present_in_neither_for_untracked_file(self) -> None:
        path = self.write("scratch.txt", "untracked")

        self.assertIs(classify(locate(path)), PresenceState.PRESENT_IN_NEITHER)

    def test_directory_at_path_counts_as_absent(self) -> None:
        self.commit_file("thing/inner.txt", "x")
        self.commit_file("other.txt", "y")

        state = classify(locate(self.repo / "thing" / "missing.txt"))

        self.assertIs(state, PresenceState.PRESENT_IN_NEITHER)


class RootCommitTests(GitRepoTestCase):
    def test_file_in_root_commit_is_only_in_current(self) -> None:
        path = self.commit_file("first.txt", "first")

        self.assertIs(classify(locate(path)), PresenceState.PRESENT_ONLY_IN_CURRENT)

    def test_absent_file_in_root_commit_is_in_neither(self) -> None:
        self.commit_file("first.txt", "first")
        path = self.write("later.txt", "later")

        self.assertIs(classify(locate(path)), PresenceState.PRESENT_IN_NEITHER)

    def test_unborn_branch_is_in_neither(self) -> None:
        path = self.write("draft.txt", "draft")

        self.assertIs(classify(locate(path)), PresenceState.PRESENT_IN_NEITHER)


if __name__ == "__main__":
    unittest.main()
