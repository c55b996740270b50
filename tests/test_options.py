"""
Unit tests for configuration handling.
"""
import os
import tempfile

import pytest

from sfc.options import CompilerOptions, apply_config, load_config


class TestApplyConfig:
    """Tests for apply_config()."""

    def test_sets_known_options(self, options, registry):
        apply_config({"scope_template": True, "autoprefixer": False}, options, registry)
        assert options.scope_template is True
        assert options.autoprefixer is False
        assert options.autoprefixer_options() is None

    def test_registers_custom_compilers(self, options, registry):
        fn = lambda source, deps, path: source
        apply_config({"custom_compilers": {"coffee": fn}}, options, registry)
        assert registry.get("coffee") is fn

    def test_invalid_custom_compiler_rejected(self, options, registry):
        with pytest.raises(TypeError):
            apply_config({"custom_compilers": {"coffee": lambda source: source}}, options, registry)

    def test_html_minifier_merged_in_production(self, registry):
        options = CompilerOptions(production=True)
        apply_config({"html_minifier": {"remove_comments": False, "keep_closing_slash": True}}, options, registry)
        assert options.html_minifier["remove_comments"] is False
        assert options.html_minifier["keep_closing_slash"] is True
        # defaults are kept
        assert options.html_minifier["collapse_whitespace"] is True

    def test_html_minifier_ignored_in_development(self, options, registry):
        apply_config({"html_minifier": {"remove_comments": False}}, options, registry)
        assert options.html_minifier["remove_comments"] is True

    def test_unknown_keys_become_compiler_settings(self, options, registry):
        apply_config({"sass": {"include_paths": ["lib"]}}, options, registry)
        assert options.compiler_settings["sass"] == {"include_paths": ["lib"]}

    def test_invalid_value_rejected(self, options, registry):
        with pytest.raises(ValueError):
            apply_config({"style_cache_size": 0}, options, registry)


class TestProductionMode:
    """Tests for the environment-driven production flag."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("VUEIFY_ENV", "production")
        assert CompilerOptions().production is True

    def test_node_env_fallback(self, monkeypatch):
        monkeypatch.delenv("VUEIFY_ENV", raising=False)
        monkeypatch.setenv("NODE_ENV", "production")
        assert CompilerOptions().production is True

    def test_default_development(self, monkeypatch):
        monkeypatch.delenv("VUEIFY_ENV", raising=False)
        monkeypatch.delenv("NODE_ENV", raising=False)
        assert CompilerOptions().production is False


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file(self, options, registry):
        with tempfile.TemporaryDirectory() as tmpdir:
            assert load_config(os.path.join(tmpdir, "vue.config.py"), options, registry) is False

    def test_loads_config_dict(self, options, registry):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "vue.config.py")
            with open(path, "w") as f:
                f.write(
                    "def upper(source, deps, path):\n"
                    "    return source.upper()\n"
                    "\n"
                    "config = {\n"
                    "    'scope_template': True,\n"
                    "    'custom_compilers': {'upper': upper},\n"
                    "}\n"
                )
            assert load_config(path, options, registry) is True
        assert options.scope_template is True
        assert registry.get("upper")("a", None, None) == "A"

    def test_defaults_to_working_directory(self, options, registry, monkeypatch):
        with tempfile.TemporaryDirectory() as tmpdir:
            with open(os.path.join(tmpdir, "vue.config.py"), "w") as f:
                f.write("config = {'scope_template': True}\n")
            monkeypatch.chdir(tmpdir)
            assert load_config(target=options, registry=registry) is True
        assert options.scope_template is True

    def test_config_must_be_dict(self, options, registry):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "vue.config.py")
            with open(path, "w") as f:
                f.write("config = 3\n")
            with pytest.raises(ValueError):
                load_config(path, options, registry)
