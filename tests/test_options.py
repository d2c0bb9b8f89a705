# tests/test_options.py
"""
Tests for accessor configuration.

Covers:
    - AccessorOptions defaults, immutability and replace()
    - load_options() layering: defaults, JSON/TOML file, env vars, .env, overrides
"""

import dataclasses
import json

import pytest
import toml

from dotty.exceptions import InvalidOptions
from dotty.options import AccessorOptions, load_options

# ---------------------------------------------------------------------------
# AccessorOptions
# ---------------------------------------------------------------------------


class TestAccessorOptions:
    """Tests for the options record itself."""

    def test_defaults(self):
        opts = AccessorOptions()
        assert opts.is_immutable is False
        assert opts.is_expandable is True
        assert opts.throw_errors is True

    def test_frozen(self):
        opts = AccessorOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            opts.throw_errors = False

    def test_replace_returns_copy(self):
        opts = AccessorOptions()
        changed = opts.replace(throw_errors="off")
        assert changed.throw_errors is False
        assert opts.throw_errors is True

    def test_replace_unknown_flag(self):
        with pytest.raises(InvalidOptions, match="unknown option"):
            AccessorOptions().replace(isImmutable=True)

    def test_as_dict(self):
        assert AccessorOptions(is_immutable=True).as_dict() == {
            "is_immutable": True,
            "is_expandable": True,
            "throw_errors": True,
        }


# ---------------------------------------------------------------------------
# load_options
# ---------------------------------------------------------------------------


class TestLoadOptions:
    """Tests for layered option loading."""

    def test_no_sources(self):
        assert load_options() == AccessorOptions()

    def test_defaults_mapping(self):
        opts = load_options(defaults={"is_expandable": False})
        assert opts == AccessorOptions(is_expandable=False)

    def test_json_file(self, tmp_path):
        f = tmp_path / "opts.json"
        f.write_text(json.dumps({"throw_errors": False, "unrelated": 1}))
        assert load_options(file_path=str(f)).throw_errors is False

    def test_toml_file_section(self, tmp_path):
        f = tmp_path / "app.toml"
        f.write_text(toml.dumps({"is_immutable": False, "dotty": {"is_immutable": True}}))
        assert load_options(file_path=str(f)).is_immutable is True

    def test_toml_file_root(self, tmp_path):
        f = tmp_path / "opts.toml"
        f.write_text("is_expandable = false\n")
        assert load_options(file_path=str(f)).is_expandable is False

    def test_file_path_expansion(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPTS_DIR", str(tmp_path))
        (tmp_path / "opts.json").write_text('{"is_immutable": true}')
        assert load_options(file_path="$OPTS_DIR/opts.json").is_immutable is True

    def test_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            load_options(file_path="/nonexistent/opts.toml")

    def test_invalid_toml(self, tmp_path):
        f = tmp_path / "bad.toml"
        f.write_text('[dotty\nthrow_errors = "broken')
        with pytest.raises(RuntimeError):
            load_options(file_path=str(f))

    def test_unsupported_format(self, tmp_path):
        f = tmp_path / "opts.yaml"
        f.write_text("throw_errors: false")
        with pytest.raises(RuntimeError, match="Unsupported"):
            load_options(file_path=str(f))

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("MYAPP_THROW_ERRORS", "false")
        monkeypatch.setenv("MYAPP_IS_IMMUTABLE", "yes")
        opts = load_options(prefix="MYAPP_")
        assert opts == AccessorOptions(is_immutable=True, throw_errors=False)

    def test_env_ignored_without_prefix(self, monkeypatch):
        monkeypatch.setenv("THROW_ERRORS", "false")
        assert load_options().throw_errors is True

    def test_env_invalid_value(self, monkeypatch):
        monkeypatch.setenv("MYAPP_IS_EXPANDABLE", "maybe")
        with pytest.raises(InvalidOptions, match="expected a boolean"):
            load_options(prefix="MYAPP")

    def test_dotenv_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DOTENVAPP_IS_EXPANDABLE", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("DOTENVAPP_IS_EXPANDABLE=0\n")
        opts = load_options(prefix="DOTENVAPP", load_dotenv_file=True, dotenv_path=str(env_file))
        monkeypatch.delenv("DOTENVAPP_IS_EXPANDABLE", raising=False)
        assert opts.is_expandable is False

    def test_precedence(self, tmp_path, monkeypatch):
        f = tmp_path / "opts.json"
        f.write_text(json.dumps({"is_immutable": True, "throw_errors": False}))
        monkeypatch.setenv("PREC_THROW_ERRORS", "true")
        opts = load_options(
            defaults={"is_immutable": False, "is_expandable": False},
            file_path=str(f),
            prefix="PREC",
            overrides_dict={"is_immutable": "false"},
        )
        assert opts == AccessorOptions(is_immutable=False, is_expandable=False, throw_errors=True)

    def test_unknown_override(self):
        with pytest.raises(InvalidOptions) as excinfo:
            load_options(overrides_dict={"throwErrors": False})
        assert excinfo.value.key == "throwErrors"
