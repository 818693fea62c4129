"""Tests for visible-list construction and disclosure bookkeeping."""

from __future__ import annotations

import unittest

from glossview.entries import Entry
from glossview.tree_model import (
    CategoryHeader,
    DisclosureState,
    GroupHeader,
    Item,
    SearchState,
    build_visible_nodes,
    categories_for_group,
    make_matcher,
)


def _entries() -> tuple[Entry, ...]:
    return (
        Entry("Chemistry", "Acids", "Acid", "Proton donor.", frozenset({"ph"})),
        Entry("Chemistry", "Acids", "Acidity", "Strength of an acid."),
        Entry("Chemistry", "Bonds", "Covalent", "Shared electrons."),
        Entry("Physics", "Mechanics", "Force", "Push or pull.", frozenset({"newton"})),
    )


def _labels(nodes) -> list[str]:
    return [node.label for node in nodes]


class BuildVisibleNodesTests(unittest.TestCase):
    def test_all_collapsed_shows_only_group_headers(self) -> None:
        nodes = build_visible_nodes(_entries(), SearchState(), DisclosureState())

        self.assertEqual(nodes, [GroupHeader("Chemistry"), GroupHeader("Physics")])

    def test_open_group_lists_categories_in_dataset_order(self) -> None:
        disclosure = DisclosureState()
        disclosure.set_group_open("Chemistry", True)

        nodes = build_visible_nodes(_entries(), SearchState(), disclosure)

        self.assertEqual(
            nodes,
            [
                GroupHeader("Chemistry"),
                CategoryHeader("Chemistry", "Acids"),
                CategoryHeader("Chemistry", "Bonds"),
                GroupHeader("Physics"),
            ],
        )

    def test_closed_group_hides_open_categories(self) -> None:
        disclosure = DisclosureState()
        disclosure.set_category_open("Chemistry", "Acids", True)

        nodes = build_visible_nodes(_entries(), SearchState(), disclosure)

        self.assertEqual(_labels(nodes), ["Chemistry", "Physics"])

    def test_reopening_group_restores_category_flags(self) -> None:
        disclosure = DisclosureState()
        disclosure.set_group_open("Chemistry", True)
        disclosure.set_category_open("Chemistry", "Acids", True)
        disclosure.toggle_group("Chemistry")
        disclosure.toggle_group("Chemistry")

        nodes = build_visible_nodes(_entries(), SearchState(), disclosure)

        self.assertEqual(
            _labels(nodes),
            ["Chemistry", "Acids", "Acid", "Acidity", "Bonds", "Physics"],
        )

    def test_search_mode_flattens_matches_without_headers(self) -> None:
        nodes = build_visible_nodes(_entries(), SearchState("  ACID "), DisclosureState())

        self.assertEqual(_labels(nodes), ["Acid", "Acidity"])
        self.assertTrue(all(isinstance(node, Item) for node in nodes))

    def test_search_ignores_disclosure_but_keeps_it(self) -> None:
        disclosure = DisclosureState()
        disclosure.set_group_open("Physics", True)
        before = disclosure.snapshot()

        nodes = build_visible_nodes(_entries(), SearchState("force"), disclosure)

        self.assertEqual(_labels(nodes), ["Force"])
        self.assertEqual(disclosure.snapshot(), before)

    def test_whitespace_query_is_browse_mode(self) -> None:
        search = SearchState("   ")

        self.assertFalse(search.is_search_mode)
        self.assertEqual(
            _labels(build_visible_nodes(_entries(), search, DisclosureState())),
            ["Chemistry", "Physics"],
        )

    def test_no_matches_is_empty_list(self) -> None:
        self.assertEqual(build_visible_nodes(_entries(), SearchState("zzz"), DisclosureState()), [])

    def test_build_is_deterministic(self) -> None:
        disclosure = DisclosureState()
        disclosure.expand_group_fully("Chemistry", ["Acids", "Bonds"])

        first = build_visible_nodes(_entries(), SearchState(), disclosure)
        second = build_visible_nodes(_entries(), SearchState(), disclosure)

        self.assertEqual(first, second)

    def test_custom_matcher_searches_tags(self) -> None:
        matches = make_matcher(["term", "tags"])

        nodes = build_visible_nodes(_entries(), SearchState("newton"), DisclosureState(), matches)

        self.assertEqual(_labels(nodes), ["Force"])

    def test_make_matcher_rejects_unknown_field(self) -> None:
        with self.assertRaises(ValueError):
            make_matcher(["term", "author"])


class DisclosureStateTests(unittest.TestCase):
    def test_unknown_keys_are_closed(self) -> None:
        disclosure = DisclosureState()

        self.assertFalse(disclosure.is_group_open("Nope"))
        self.assertFalse(disclosure.is_category_open("Nope", "Nada"))

    def test_set_open_reports_change(self) -> None:
        disclosure = DisclosureState()

        self.assertTrue(disclosure.set_group_open("Chemistry", True))
        self.assertFalse(disclosure.set_group_open("Chemistry", True))

    def test_expand_collapse_expand_opens_every_category(self) -> None:
        disclosure = DisclosureState()
        categories = categories_for_group(_entries(), "Chemistry")

        disclosure.expand_group_fully("Chemistry", categories)
        disclosure.collapse_group_fully("Chemistry", categories)
        self.assertEqual(disclosure.snapshot(), (frozenset(), frozenset()))
        disclosure.expand_group_fully("Chemistry", categories)

        self.assertTrue(disclosure.is_group_open("Chemistry"))
        self.assertTrue(all(disclosure.is_category_open("Chemistry", name) for name in categories))

    def test_collapse_fully_then_plain_open_shows_closed_categories(self) -> None:
        disclosure = DisclosureState()
        categories = categories_for_group(_entries(), "Chemistry")
        disclosure.expand_group_fully("Chemistry", categories)
        disclosure.collapse_group_fully("Chemistry", categories)
        disclosure.toggle_group("Chemistry")

        nodes = build_visible_nodes(_entries(), SearchState(), disclosure)

        self.assertEqual(_labels(nodes), ["Chemistry", "Acids", "Bonds", "Physics"])

    def test_same_category_name_in_two_groups_is_independent(self) -> None:
        disclosure = DisclosureState()
        disclosure.set_category_open("A", "Shared", True)

        self.assertFalse(disclosure.is_category_open("B", "Shared"))


if __name__ == "__main__":
    unittest.main()
