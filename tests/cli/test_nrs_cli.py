"""Tests for the nrs CLI: add/resolve/remove/show and config show."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from nrs import __version__
from nrs.cli.app import app
from nrs.naming.register import FileRegisterClient, NrsMapContainer, register_address

runner = CliRunner()

LINK = "safe://abc"
SUB_LINK = "safe://def/index.html"


def invoke(*args: str):
    return runner.invoke(app, list(args))


def current_version(store, top_name: str) -> str:
    container = NrsMapContainer(FileRegisterClient.open(store).unwrap())
    return container.version(register_address(top_name)).unwrap()


@pytest.fixture
def populated():
    """Map for 'example' with a default entry and one subname."""
    assert invoke("add", "example", LINK).exit_code == 0
    assert invoke("add", "sub.example", SUB_LINK).exit_code == 0


class TestRootApp:
    def test_no_args_shows_help(self):
        result = invoke()
        assert "add" in result.output
        assert "resolve" in result.output

    def test_version(self):
        result = invoke("--version")
        assert result.exit_code == 0
        assert f"nrs {__version__}" in result.output

    def test_invalid_settings_exit_1(self, monkeypatch):
        monkeypatch.setenv("NRS_LOG_LEVEL", "LOUD")
        result = invoke("show", "example")
        assert result.exit_code == 1
        assert "CONFIG" in result.output


class TestAddResolve:
    def test_add_then_resolve(self, isolated_settings):
        result = invoke("add", "sub.example", LINK)
        assert result.exit_code == 0, result.output
        assert "sub.example" in result.stdout
        assert "version" in result.stdout

        result = invoke("resolve", "sub.example")
        assert result.exit_code == 0
        assert result.stdout.strip() == LINK
        assert (isolated_settings / "registers.json").exists()

    def test_resolve_with_scheme(self, populated):
        assert invoke("resolve", "safe://sub.example").stdout.strip() == SUB_LINK

    def test_resolve_exact_match_only(self, populated):
        result = invoke("resolve", "other.sub.example")
        assert result.exit_code == 1
        assert "Link not found in NRS Map Container for: other.sub" in result.output

    def test_add_overwrites(self, populated):
        invoke("add", "sub.example", "safe://xyz")
        assert invoke("resolve", "sub.example").stdout.strip() == "safe://xyz"

    def test_add_unversioned_register_rejected(self):
        result = invoke("add", "example", "safe://abc?data=Register")
        assert result.exit_code == 1
        assert "VALIDATION" in result.output
        assert "requires the link to specify a hash" in result.output
        assert invoke("resolve", "example").exit_code == 1

    def test_add_versioned_register_accepted(self):
        link = "safe://abc?data=Register&v=ce56a3504c8f"
        assert invoke("add", "example", link).exit_code == 0
        assert invoke("resolve", "example").stdout.strip() == link

    def test_add_invalid_locator(self):
        result = invoke("add", "example", "https://abc")
        assert result.exit_code == 1
        assert "Invalid content locator" in result.output

    def test_strict_names_from_env(self, monkeypatch):
        monkeypatch.setenv("NRS_STRICT_NAMES", "true")
        result = invoke("add", "a..example", LINK)
        assert result.exit_code == 1
        assert "PARSE" in result.output


class TestTopNames:
    """Each top name owns a separate map."""

    def test_same_subname_under_two_top_names(self):
        assert invoke("add", "www.alice", "safe://alice").exit_code == 0
        assert invoke("add", "www.bob", "safe://bob").exit_code == 0
        assert invoke("resolve", "www.alice").stdout.strip() == "safe://alice"
        assert invoke("resolve", "www.bob").stdout.strip() == "safe://bob"

    def test_unknown_top_name(self, populated):
        result = invoke("resolve", "sub.other")
        assert result.exit_code == 1
        assert "Link not found in NRS Map Container for: sub" in result.output

    def test_remove_only_touches_its_top_name(self):
        invoke("add", "www.alice", "safe://alice")
        invoke("add", "www.bob", "safe://bob")
        assert invoke("remove", "www.alice").exit_code == 0
        assert invoke("resolve", "www.alice").exit_code == 1
        assert invoke("resolve", "www.bob").stdout.strip() == "safe://bob"


class TestReadOnlyCommands:
    """resolve and show never write the register store."""

    def test_resolve_does_not_create_store(self, isolated_settings):
        assert invoke("resolve", "example").exit_code == 1
        assert not (isolated_settings / "registers.json").exists()

    def test_show_does_not_create_store(self, isolated_settings):
        result = invoke("show", "example")
        assert result.exit_code == 0
        assert "No entries." in result.stdout
        assert not (isolated_settings / "registers.json").exists()

    def test_reads_leave_store_unchanged(self, populated, isolated_settings):
        store = isolated_settings / "registers.json"
        before = store.read_text()
        invoke("resolve", "example")
        invoke("resolve", "sub.other")
        invoke("show", "other")
        assert store.read_text() == before


class TestVersions:
    """--at reads the map as of an earlier entry hash."""

    def test_resolve_at_earlier_version(self, isolated_settings):
        store = isolated_settings / "registers.json"
        invoke("add", "example", LINK)
        pinned = current_version(store, "example")
        invoke("add", "example", "safe://newer")

        assert invoke("resolve", "example").stdout.strip() == "safe://newer"
        assert invoke("resolve", "example", "--at", pinned).stdout.strip() == LINK

    def test_show_at_earlier_version(self, isolated_settings):
        store = isolated_settings / "registers.json"
        invoke("add", "example", LINK)
        pinned = current_version(store, "example")
        invoke("add", "sub.example", SUB_LINK)

        result = invoke("show", "example", "--json", "--at", pinned)
        assert json.loads(result.stdout) == {"map": {"": LINK}}

    def test_unknown_version(self, populated):
        result = invoke("resolve", "example", "--at", "deadbeef")
        assert result.exit_code == 1
        assert "STORAGE" in result.output


class TestStoreOption:
    def test_explicit_store(self, tmp_path, isolated_settings):
        store = tmp_path / "elsewhere.json"
        assert invoke("add", "example", LINK, "--store", str(store)).exit_code == 0
        assert store.exists()
        assert not (isolated_settings / "registers.json").exists()
        assert invoke("resolve", "example", "-s", str(store)).stdout.strip() == LINK

    def test_register_file_from_env(self, monkeypatch, tmp_path):
        store = tmp_path / "env.json"
        monkeypatch.setenv("NRS_REGISTER_FILE", str(store))
        invoke("add", "example", LINK)
        assert store.exists()

    def test_corrupt_store(self, tmp_path):
        store = tmp_path / "bad.json"
        store.write_text("{")
        result = invoke("show", "example", "-s", str(store))
        assert result.exit_code == 1
        assert "PARSE" in result.output


class TestRemove:
    def test_remove(self, populated):
        result = invoke("remove", "sub.example")
        assert result.exit_code == 0
        assert SUB_LINK in result.stdout
        assert invoke("resolve", "sub.example").exit_code == 1
        assert invoke("resolve", "example").stdout.strip() == LINK

    def test_remove_default(self, populated):
        assert invoke("remove", "safe://example").exit_code == 0
        assert invoke("resolve", "example").exit_code == 1

    def test_remove_absent(self, populated):
        result = invoke("remove", "nope.example")
        assert result.exit_code == 1
        assert "Sub name not found in NRS Map Container" in result.output

    def test_remove_from_unknown_top_name(self, isolated_settings):
        result = invoke("remove", "sub.nowhere")
        assert result.exit_code == 1
        assert "No NRS map for top name 'nowhere'" in result.output
        assert not (isolated_settings / "registers.json").exists()


class TestShow:
    def test_show_json(self, populated):
        result = invoke("show", "example", "--json")
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"map": {"": LINK, "sub": SUB_LINK}}

    def test_show_table(self, populated):
        result = invoke("show", "example")
        assert result.exit_code == 0
        assert "NRS Map: example" in result.stdout
        assert "(default)" in result.stdout
        assert "sub.example" in result.stdout

    def test_show_accepts_full_name(self, populated):
        result = invoke("show", "safe://sub.example")
        assert result.exit_code == 0
        assert "NRS Map: example" in result.stdout

    def test_show_other_top_name_is_empty(self, populated):
        assert "No entries." in invoke("show", "other").stdout


class TestConfigShow:
    def test_env_format(self, isolated_settings):
        result = invoke("config", "show", "--format", "env")
        assert result.exit_code == 0
        assert "NRS_URL_SCHEME=safe" in result.stdout
        assert f"NRS_DATA_DIR={isolated_settings}" in result.stdout
        assert f"NRS_REGISTER_FILE={isolated_settings / 'registers.json'}" in result.stdout

    def test_json_format(self, monkeypatch):
        monkeypatch.setenv("NRS_LOG_LEVEL", "debug")
        result = invoke("config", "show", "--format", "json")
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["log_level"] == "DEBUG"
        assert data["strict_names"] is False

    def test_table_format(self):
        result = invoke("config", "show")
        assert result.exit_code == 0
        assert "NRS Settings" in result.stdout
