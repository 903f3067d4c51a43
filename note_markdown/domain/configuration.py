"""Domain models for configuration management."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import ConfigError


CONFIG_VERSION = "1.0.0"


@dataclass(frozen=True)
class SourceOptions:
    """Rules controlling which note files are rendered."""

    include: List[str] = field(default_factory=list)
    ignore: List[str] = field(default_factory=list)
    extensions: Tuple[str, ...] = (".md", ".markdown", ".txt")
    ignore_file: Optional[Path] = None


@dataclass(frozen=True)
class OutputOptions:
    """Where rendered HTML is written and how it is wrapped."""

    output_dir: Optional[Path] = None
    suffix: str = ".html"
    standalone: bool = False
    encoding: str = "utf-8"


@dataclass(frozen=True)
class LoggingOptions:
    """Logger level, format and optional log file."""

    level: str = "INFO"
    log_file: Optional[Path] = None
    fmt: str = "%(asctime)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class WatchOptions:
    """Settings for re-rendering notes as they change."""

    enabled: bool = False
    recursive: bool = True
    debounce_seconds: float = 0.5


@dataclass(frozen=True)
class RenderConfig:
    """Aggregated configuration for a render run."""

    version: str = CONFIG_VERSION
    sources: SourceOptions = field(default_factory=SourceOptions)
    output: OutputOptions = field(default_factory=OutputOptions)
    logging: LoggingOptions = field(default_factory=LoggingOptions)
    watch: WatchOptions = field(default_factory=WatchOptions)

    def to_dict(self) -> Dict[str, object]:
        """Convert the configuration into a JSON serialisable structure."""
        return asdict(self, dict_factory=lambda items: {key: _plain(value) for key, value in items})


def _plain(value: object) -> object:
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, tuple):
        return list(value)
    return value


def _optional_path(value: object) -> Optional[Path]:
    if value is None:
        return None
    return Path(str(value))


def load_config(path: Optional[Path]) -> RenderConfig:
    """Load a JSON configuration file; missing sections keep their defaults."""
    if not path:
        return RenderConfig()
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration: {exc}", str(path)) from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON: {exc}", str(path)) from exc
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object", str(path))

    config = RenderConfig()
    if "sources" in data:
        sources = data["sources"]
        config = replace(
            config,
            sources=SourceOptions(
                include=list(sources.get("include", config.sources.include)),
                ignore=list(sources.get("ignore", config.sources.ignore)),
                extensions=tuple(sources.get("extensions", config.sources.extensions)),
                ignore_file=_optional_path(sources.get("ignore_file")),
            ),
        )
    if "output" in data:
        output = data["output"]
        config = replace(
            config,
            output=OutputOptions(
                output_dir=_optional_path(output.get("output_dir")),
                suffix=output.get("suffix", config.output.suffix),
                standalone=bool(output.get("standalone", config.output.standalone)),
                encoding=output.get("encoding", config.output.encoding),
            ),
        )
    if "logging" in data:
        logging_data = data["logging"]
        config = replace(
            config,
            logging=LoggingOptions(
                level=str(logging_data.get("level", config.logging.level)).upper(),
                log_file=_optional_path(logging_data.get("log_file")),
                fmt=logging_data.get("fmt", config.logging.fmt),
            ),
        )
    if "watch" in data:
        watch = data["watch"]
        config = replace(
            config,
            watch=WatchOptions(
                enabled=bool(watch.get("enabled", config.watch.enabled)),
                recursive=bool(watch.get("recursive", config.watch.recursive)),
                debounce_seconds=float(
                    watch.get("debounce_seconds", config.watch.debounce_seconds)
                ),
            ),
        )
    return config


def with_cli_overrides(base_config: RenderConfig, overrides: Dict[str, object]) -> RenderConfig:
    """Create a new configuration with CLI overrides applied."""

    sources = base_config.sources
    if overrides.get("ignore") or overrides.get("extensions"):
        extensions = overrides.get("extensions") or sources.extensions
        sources = SourceOptions(
            include=sources.include,
            ignore=sources.ignore + list(overrides.get("ignore") or []),
            extensions=tuple(
                ext if ext.startswith(".") else f".{ext}" for ext in extensions
            ),
            ignore_file=sources.ignore_file,
        )

    output = base_config.output
    if overrides.get("output_dir") is not None or overrides.get("standalone"):
        out_dir = overrides.get("output_dir") or output.output_dir
        if isinstance(out_dir, str):
            out_dir = Path(out_dir)
        output = OutputOptions(
            output_dir=out_dir,
            suffix=output.suffix,
            standalone=bool(overrides.get("standalone")) or output.standalone,
            encoding=output.encoding,
        )

    logging_options = base_config.logging
    if overrides.get("log_level") is not None or overrides.get("log_file") is not None:
        log_file = overrides.get("log_file") or logging_options.log_file
        if isinstance(log_file, str):
            log_file = Path(log_file)
        logging_options = LoggingOptions(
            level=str(overrides.get("log_level") or logging_options.level).upper(),
            log_file=log_file,
            fmt=logging_options.fmt,
        )

    watch = base_config.watch
    if overrides.get("watch"):
        watch = WatchOptions(
            enabled=True,
            recursive=watch.recursive,
            debounce_seconds=watch.debounce_seconds,
        )

    return RenderConfig(
        version=base_config.version,
        sources=sources,
        output=output,
        logging=logging_options,
        watch=watch,
    )
