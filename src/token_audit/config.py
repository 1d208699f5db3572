"""Configuration loading and management for token-audit.

Configuration sources are merged in priority order:
    1. Defaults (defined in AuditConfig)
    2. Global config (~/.token-audit.toml)
    3. Project config (./token-audit.toml)
    4. Explicit config file
    5. Environment variables (TOKEN_AUDIT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, top_n=20)
    >>> config.verbosity
    'verbose'
    >>> config.top_n
    20
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, TokenAuditError

Verbosity = Literal["quiet", "normal", "verbose"]

# Environment variable consulted for the model identifier handed to LLM tooling
MODEL_ENV_VAR = "CARGO_SYNTAX_MODEL"
DEFAULT_MODEL = "deepseek/deepseek-chat"

GRADE_LETTERS = ("A+", "A", "B", "C", "D")


@dataclass(frozen=True)
class DeepThresholds:
    """Tuning parameters for duplicate and near-duplicate detection.

    Attributes:
        Duplicate blocks:
            window_size: Consecutive non-blank normalized lines per window
            min_window_chars: Windows shorter than this are never fingerprinted
            cluster_recovery_pct: Share of duplicated tokens recovered by extraction

        Near-duplicate functions:
            min_function_chars: Normalized bodies shorter than this are skipped
            similarity_threshold: Pairs must score strictly above this
            min_near_dup_savings: Pairs saving fewer tokens are dropped
            near_dup_recovery_pct: Share of the smaller body recovered by merging
    """

    window_size: int = 3
    min_window_chars: int = 20
    cluster_recovery_pct: int = 80

    min_function_chars: int = 30
    similarity_threshold: float = 0.75
    min_near_dup_savings: int = 5
    near_dup_recovery_pct: int = 60

    def __post_init__(self) -> None:
        if self.window_size < 1:
            raise ValueError("window_size must be at least 1")
        if self.min_window_chars < 0:
            raise ValueError("min_window_chars must be non-negative")
        if self.min_function_chars < 0:
            raise ValueError("min_function_chars must be non-negative")
        if not 0.0 <= self.similarity_threshold < 1.0:
            raise ValueError("similarity_threshold must be in [0.0, 1.0)")
        for name in ("cluster_recovery_pct", "near_dup_recovery_pct"):
            if not 0 <= getattr(self, name) <= 100:
                raise ValueError(f"{name} must be between 0 and 100")
        if self.min_near_dup_savings < 0:
            raise ValueError("min_near_dup_savings must be non-negative")


DEFAULT_THRESHOLDS = DeepThresholds()


@dataclass(frozen=True)
class AuditConfig:
    """Configuration for a token-audit run.

    Attributes:
        source_root: Directory scanned for source files
        build_dir: Directory name never descended into
        top_n: Default row count for `top`
        history_commits: Default commit count for `history`
        ci_max_tokens: Default token budget for `ci`
        ci_max_tl: Default maximum T/L ratio for `ci`
        ci_min_grade: Default minimum grade for `ci`
        verbosity: Logging verbosity level
        model: Model identifier passed on to LLM tooling
        thresholds: Deep analysis tuning
    """

    source_root: str = "."
    build_dir: str = "target"

    top_n: int = 10
    history_commits: int = 10

    ci_max_tokens: Optional[int] = None
    ci_max_tl: Optional[float] = None
    ci_min_grade: Optional[str] = None

    verbosity: Verbosity = "normal"
    model: str = field(default_factory=lambda: default_model())

    thresholds: DeepThresholds = field(default_factory=DeepThresholds)

    def __post_init__(self) -> None:
        if not self.build_dir or "/" in self.build_dir:
            raise ValueError("build_dir must be a single directory name")
        if self.top_n < 1:
            raise ValueError("top_n must be at least 1")
        if self.history_commits < 1:
            raise ValueError("history_commits must be at least 1")
        if self.ci_max_tokens is not None and self.ci_max_tokens < 0:
            raise ValueError("ci_max_tokens must be non-negative")
        if self.ci_max_tl is not None and self.ci_max_tl <= 0:
            raise ValueError("ci_max_tl must be positive")
        if self.ci_min_grade is not None and self.ci_min_grade not in GRADE_LETTERS:
            raise ValueError(f"ci_min_grade must be one of {', '.join(GRADE_LETTERS)}")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be quiet, normal or verbose")


def default_model() -> str:
    """Model identifier from CARGO_SYNTAX_MODEL, or the built-in default."""
    return os.environ.get(MODEL_ENV_VAR) or DEFAULT_MODEL


def load_config(config_file: Optional[Path] = None, **overrides) -> AuditConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options never mask file values.

    Returns:
        Validated AuditConfig instance

    Raises:
        TokenAuditError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".token-audit.toml"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global config"))

    project_config = Path.cwd() / "token-audit.toml"
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise TokenAuditError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "config file"))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    thresholds = merged.pop("thresholds", None)
    if isinstance(thresholds, dict):
        try:
            merged["thresholds"] = DeepThresholds(**thresholds)
        except (TypeError, ValueError) as e:
            raise TokenAuditError(f"Invalid [thresholds] config: {e}")
    elif isinstance(thresholds, DeepThresholds):
        merged["thresholds"] = thresholds

    try:
        return AuditConfig(**merged)
    except (TypeError, ValueError) as e:
        raise TokenAuditError(f"Invalid configuration: {e}")


def _read_config_file(path: Path, label: str) -> dict:
    try:
        return _load_toml_file(path)
    except TokenAuditError:
        raise
    except Exception as e:
        raise TokenAuditError(f"Invalid {label} '{path}': {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from TOKEN_AUDIT_* environment variables.

    Supported environment variables:
        TOKEN_AUDIT_SOURCE_ROOT: str
        TOKEN_AUDIT_BUILD_DIR: str
        TOKEN_AUDIT_TOP_N: int
        TOKEN_AUDIT_HISTORY_COMMITS: int
        TOKEN_AUDIT_CI_MAX_TOKENS: int
        TOKEN_AUDIT_CI_MAX_TL: float
        TOKEN_AUDIT_CI_MIN_GRADE: str
        TOKEN_AUDIT_VERBOSITY: quiet/normal/verbose
        TOKEN_AUDIT_MODEL: str
    """
    type_hints = get_type_hints(AuditConfig)
    result: dict[str, Any] = {}

    for field_name in AuditConfig.__dataclass_fields__:
        env_key = f"TOKEN_AUDIT_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Returns None for types that cannot be expressed as a single string.
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            # Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise TokenAuditError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
