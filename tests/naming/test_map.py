"""Tests for nrs.naming.map module."""

import pytest

from nrs.core.errors import (
    InvalidLocatorError,
    MalformedNameError,
    NotFoundError,
    UnversionedLinkError,
    ValidationError,
)
from nrs.naming.map import NrsMap
from tests._support.links import RAW_LINK, REGISTER_LINK, VERSION_HASH


class TestResolve:
    """Exact-match lookups on the three-entry scenario map."""

    @pytest.mark.parametrize(
        "full_name, expected",
        [
            ("example", "L0"),
            ("sub.example", "L1"),
            ("sub.sub.example", "L2"),
            ("safe://sub.sub.example", "L2"),
        ],
    )
    def test_resolve_for_full_name(self, scenario_map, full_name, expected):
        assert scenario_map.resolve_for_full_name(full_name).unwrap() == expected

    def test_resolve_labels(self, scenario_map):
        assert scenario_map.resolve(["sub", "sub"]).unwrap() == "L2"
        assert scenario_map.resolve(["sub"]).unwrap() == "L1"

    def test_default_equivalence(self, scenario_map):
        """resolve_default() == resolve([]) == get_link_for("")."""
        assert (
            scenario_map.resolve_default().unwrap()
            == scenario_map.resolve([]).unwrap()
            == scenario_map.get_link_for("").unwrap()
            == "L0"
        )

    def test_no_parent_fallback(self, scenario_map):
        """A missing subname does not inherit its ancestor's link."""
        result = scenario_map.resolve_for_full_name("other.sub.example")
        assert isinstance(result.error, NotFoundError)
        assert result.error.context.subname == "other.sub"

    def test_not_found_message(self, scenario_map):
        error = scenario_map.get_link_for("missing").error
        assert error.message == "Link not found in NRS Map Container for: missing"

    def test_default_missing(self):
        assert isinstance(NrsMap().resolve_default().error, NotFoundError)

    def test_not_found_is_branchable(self, fake_parser):
        """NotFound drives 'create if missing'."""
        nrs_map = NrsMap(fake_parser)
        link = nrs_map.resolve_for_full_name("sub.example").or_else(
            lambda e: nrs_map.update("sub.example", "L-new")
        )
        assert link.unwrap() == "L-new"
        assert nrs_map.get_link_for("sub").unwrap() == "L-new"


class TestUpdate:
    """update validates, derives the key and overwrites."""

    def test_round_trip(self):
        nrs_map = NrsMap()
        assert nrs_map.update("sub.example", RAW_LINK).unwrap() == RAW_LINK
        assert nrs_map.resolve_for_full_name("sub.example").unwrap() == RAW_LINK

    def test_last_writer_wins(self, scenario_map):
        scenario_map.update("sub.example", "L1-new").unwrap()
        assert scenario_map.get_link_for("sub").unwrap() == "L1-new"
        assert len(scenario_map) == 3

    def test_same_subname_any_top_name(self, scenario_map):
        """The key ignores the top name."""
        scenario_map.update("sub.another", "L9").unwrap()
        assert scenario_map.resolve_for_full_name("sub.example").unwrap() == "L9"

    def test_scheme_prefixed_name(self):
        nrs_map = NrsMap()
        nrs_map.update("safe://example", RAW_LINK).unwrap()
        assert nrs_map.resolve_default().unwrap() == RAW_LINK

    def test_unversioned_register_rejected(self):
        nrs_map = NrsMap()
        result = nrs_map.update("example", REGISTER_LINK)
        assert isinstance(result.error, UnversionedLinkError)
        assert isinstance(result.error, ValidationError)
        assert result.error.context.name == "example"
        assert len(nrs_map) == 0

    def test_versioned_register_accepted(self):
        nrs_map = NrsMap()
        link = f"{REGISTER_LINK}&v={VERSION_HASH}"
        assert nrs_map.update("example", link).unwrap() == link
        assert nrs_map.resolve_for_full_name("example").unwrap() == link

    def test_rejected_write_leaves_map_unchanged(self, scenario_map, fake_parser):
        before = scenario_map.snapshot()
        for link in ("L-files", "L-register", "L-nrs", "not-a-locator"):
            assert scenario_map.update("sub.example", link).is_err()
        assert scenario_map.snapshot() == before

    def test_invalid_locator_is_validation_error(self, fake_parser):
        result = NrsMap(fake_parser).update("example", "not-a-locator")
        assert isinstance(result.error, InvalidLocatorError)
        assert isinstance(result.error, ValidationError)

    def test_uses_injected_parser(self, fake_parser):
        NrsMap(fake_parser).update("example", "L-anything").unwrap()
        assert fake_parser.calls == ["L-anything"]

    def test_tolerant_names(self, fake_parser):
        nrs_map = NrsMap(fake_parser)
        nrs_map.update("a..example", "L").unwrap()
        assert nrs_map.subnames() == ["a."]


class TestStrictNames:
    """strict_names rejects empty labels on both update and resolve."""

    def test_update_rejected(self, fake_parser):
        nrs_map = NrsMap(fake_parser, strict_names=True)
        result = nrs_map.update("a..example", "L")
        assert isinstance(result.error, MalformedNameError)
        assert len(nrs_map) == 0

    def test_resolve_rejected(self, fake_parser):
        nrs_map = NrsMap.from_snapshot({"a.": "L"}, fake_parser, strict_names=True)
        assert isinstance(nrs_map.resolve_for_full_name("a..example").error, MalformedNameError)

    def test_well_formed_accepted(self, fake_parser):
        nrs_map = NrsMap(fake_parser, strict_names=True)
        nrs_map.update("sub.example", "L").unwrap()
        assert nrs_map.resolve_for_full_name("sub.example").unwrap() == "L"

    def test_validation_runs_first(self, fake_parser):
        """A bad link is reported even when the name is also malformed."""
        nrs_map = NrsMap(fake_parser, strict_names=True)
        assert isinstance(nrs_map.update("a..b", "L-register").error, UnversionedLinkError)


class TestRemove:
    def test_remove_returns_prior_value(self, scenario_map):
        assert scenario_map.remove("sub").unwrap() == "L1"
        assert isinstance(scenario_map.get_link_for("sub").error, NotFoundError)
        assert scenario_map.get_link_for("sub.sub").unwrap() == "L2"

    def test_remove_absent(self, scenario_map):
        result = scenario_map.remove("nope")
        assert isinstance(result.error, NotFoundError)
        assert result.error.message == "Sub name not found in NRS Map Container"
        assert len(scenario_map) == 3

    def test_remove_twice(self, scenario_map):
        assert scenario_map.remove("").is_ok()
        assert scenario_map.remove("").is_err()

    def test_remove_then_update(self, scenario_map):
        """absent -> present -> absent -> present."""
        scenario_map.remove("sub").unwrap()
        scenario_map.update("sub.example", "L1b").unwrap()
        assert scenario_map.get_link_for("sub").unwrap() == "L1b"


class TestSnapshot:
    def test_from_snapshot_does_not_validate(self, fake_parser):
        """Hydrated entries are trusted as-is."""
        nrs_map = NrsMap.from_snapshot({"": "L-register"}, fake_parser)
        assert nrs_map.resolve_default().unwrap() == "L-register"
        assert fake_parser.calls == []

    def test_snapshot_sorted_copy(self, fake_parser):
        nrs_map = NrsMap(fake_parser)
        for name in ("z.example", "a.example", "example", "m.a.example"):
            nrs_map.update(name, f"L-{name}").unwrap()
        snapshot = nrs_map.snapshot()
        assert list(snapshot) == ["", "a", "m.a", "z"]
        snapshot["a"] = "tampered"
        assert nrs_map.get_link_for("a").unwrap() == "L-a.example"

    def test_container_protocol(self, scenario_map):
        assert len(scenario_map) == 3
        assert "sub" in scenario_map
        assert "other" not in scenario_map
        assert list(scenario_map) == ["", "sub", "sub.sub"]

    def test_equality(self, scenario_map, fake_parser):
        same = NrsMap.from_snapshot({"sub.sub": "L2", "": "L0", "sub": "L1"}, fake_parser)
        assert scenario_map == same
        same.remove("")
        assert scenario_map != same
        assert scenario_map != {"": "L0"}

    def test_repr(self, fake_parser):
        assert repr(NrsMap.from_snapshot({"b": "2", "a": "1"})) == "NrsMap({'a': '1', 'b': '2'})"
