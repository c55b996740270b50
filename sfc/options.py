"""
Compiler configuration.

Options are process-wide by default: ``options`` is the instance the compiler
reads when a call does not pass its own. User configuration is merged into it
with ``apply_config`` (or loaded from ``vue.config.py`` with ``load_config``)
before any compile call.
"""
import os
import runpy
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from sfc.log import debug_log

CONFIG_FILE = "vue.config.py"

# Mirrors the html-minifier settings the JavaScript tooling uses for Vue
# templates. Only consulted in production mode.
DEFAULT_HTML_MINIFIER = {
    "collapse_whitespace": True,
    "remove_comments": True,
    "collapse_boolean_attributes": True,
    "remove_attribute_quotes": True,
    # keeps "type" on <input type="text">
    "remove_redundant_attributes": False,
    "use_short_doctype": True,
    "remove_empty_attributes": True,
    "remove_optional_tags": True,
}

# property -> vendor prefixes still needed by commonly targeted browsers
DEFAULT_PREFIXED_PROPERTIES = {
    "appearance": ["-webkit-", "-moz-"],
    "backdrop-filter": ["-webkit-"],
    "box-decoration-break": ["-webkit-"],
    "hyphens": ["-webkit-", "-ms-"],
    "mask": ["-webkit-"],
    "mask-image": ["-webkit-"],
    "mask-size": ["-webkit-"],
    "print-color-adjust": ["-webkit-"],
    "tab-size": ["-moz-"],
    "text-size-adjust": ["-webkit-", "-moz-", "-ms-"],
    "user-select": ["-webkit-", "-moz-", "-ms-"],
}


def _production_from_env():
    env = os.environ.get("VUEIFY_ENV") or os.environ.get("NODE_ENV")
    return env == "production"


class AutoprefixerOptions(BaseModel):
    """Which properties get vendor-prefixed copies."""
    properties: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_PREFIXED_PROPERTIES.items()}
    )


class CompilerOptions(BaseModel):
    """
    Settings for a compile.

    Settings for custom language compilers (for example ``sass``) live in
    ``compiler_settings``, keyed by the name the compiler looks them up with.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    # extra CSS stages, run before the scope and autoprefixer stages
    style_stages: List[Callable[..., Any]] = Field(default_factory=list)
    autoprefixer: Union[bool, AutoprefixerOptions] = True
    html_minifier: Dict[str, Any] = Field(default_factory=lambda: dict(DEFAULT_HTML_MINIFIER))
    minify_html: Optional[Callable[[str, Dict[str, Any]], str]] = None
    template_validator: Optional[Callable[..., Any]] = None
    scope_template: bool = False
    production: bool = Field(default_factory=_production_from_env)
    style_cache_size: int = Field(default=100, ge=1)
    compiler_settings: Dict[str, Any] = Field(default_factory=dict)

    def autoprefixer_options(self):
        """The autoprefixer settings, or None when autoprefixing is disabled."""
        if self.autoprefixer is False:
            return None
        if self.autoprefixer is True:
            return AutoprefixerOptions()
        return self.autoprefixer


options = CompilerOptions()


def apply_config(config, target=None, registry=None):
    """
    Merge a user configuration dict into the compiler options.

    Args:
        config: Mapping of option names to values. ``custom_compilers`` maps
            language tags to compile functions and registers them.
            ``html_minifier`` is merged into the defaults, and only in
            production mode. Keys that are not options are stored in
            ``compiler_settings`` for language compilers.
        target: CompilerOptions to update (defaults to the process-wide options)
        registry: CompilerRegistry for custom compilers (defaults to the
            process-wide registry)

    Returns:
        The updated CompilerOptions
    """
    if target is None:
        target = options
    if registry is None:
        from sfc.dispatcher import compilers
        registry = compilers

    for key, value in config.items():
        if key == "html_minifier":
            if target.production:
                merged = dict(target.html_minifier)
                merged.update(value)
                target.html_minifier = merged
        elif key == "custom_compilers":
            for lang, compile_fn in value.items():
                registry.register(lang, compile_fn)
                debug_log(f"Registered compiler for lang=\"{lang}\"")
        elif key in CompilerOptions.model_fields:
            setattr(target, key, value)
        else:
            settings = dict(target.compiler_settings)
            settings[key] = value
            target.compiler_settings = settings
    return target


def load_config(path=None, target=None, registry=None):
    """
    Load ``vue.config.py`` (from the working directory unless a path is given).

    The file is executed as a Python module and must define a ``config`` dict.

    Returns:
        True if a config file was found and applied
    """
    config_path = os.path.abspath(path or os.path.join(os.getcwd(), CONFIG_FILE))
    if not os.path.exists(config_path):
        return False
    namespace = runpy.run_path(config_path)
    config = namespace.get("config")
    if not isinstance(config, dict):
        raise ValueError(f"{config_path} must define a 'config' dict")
    debug_log(f"Loading config from {config_path}")
    apply_config(config, target=target, registry=registry)
    return True
