"""Configuration management for opticaldup."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Dict, Any
import yaml
from opticaldup.constants import (
    DEFAULT_OPTICAL_DUPLICATE_DISTANCE,
    DEFAULT_READ_NAME_REGEX,
)
from opticaldup.core.optical_duplicates import compile_read_name_regex
from opticaldup.exceptions import ConfigurationError


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class DetectionConfig:
    """Optical duplicate detection parameters."""

    # None disables location extraction (no read is ever an optical duplicate)
    read_name_regex: Optional[str] = DEFAULT_READ_NAME_REGEX
    pixel_distance: int = DEFAULT_OPTICAL_DUPLICATE_DISTANCE


@dataclass
class RuntimeConfig:
    """Runtime configuration."""

    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    # Enable tqdm progress where available
    enable_progress: bool = True


@dataclass
class PerformanceConfig:
    """Performance-related configuration."""

    threads: int = 1


@dataclass
class Config:
    """Main configuration class."""

    # Required parameters (set via CLI or config file)
    input_file: Optional[Path] = None
    output_file: Optional[Path] = None

    # Sub-configurations
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)

    # Convenience properties
    @property
    def threads(self) -> int:
        return self.performance.threads

    @threads.setter
    def threads(self, value: int):
        self.performance.threads = value

    @property
    def pixel_distance(self) -> int:
        return self.detection.pixel_distance

    @pixel_distance.setter
    def pixel_distance(self, value: int):
        self.detection.pixel_distance = value

    @property
    def read_name_regex(self) -> Optional[str]:
        return self.detection.read_name_regex

    @read_name_regex.setter
    def read_name_regex(self, value: Optional[str]):
        self.detection.read_name_regex = value

    def validate(self, require_io: bool = True) -> None:
        """Validate configuration."""
        if require_io:
            if not self.input_file:
                raise ConfigurationError("Input file is required")
            if not self.output_file:
                raise ConfigurationError("Output file is required")
            if not Path(self.input_file).exists():
                raise ConfigurationError(f"Input file not found: {self.input_file}")

        # Validate numeric ranges
        if not isinstance(self.detection.pixel_distance, int) or isinstance(
            self.detection.pixel_distance, bool
        ):
            raise ConfigurationError("Pixel distance must be an integer")
        if self.detection.pixel_distance < 0:
            raise ConfigurationError("Pixel distance must be >= 0")
        if not isinstance(self.performance.threads, int) or isinstance(
            self.performance.threads, bool
        ):
            raise ConfigurationError("Threads must be an integer")
        if self.performance.threads < 1:
            raise ConfigurationError("Threads must be >= 1")

        regex = self.detection.read_name_regex
        if regex is not None and regex != DEFAULT_READ_NAME_REGEX:
            compile_read_name_regex(regex)

        if str(self.runtime.log_level).upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid runtime.log_level '{self.runtime.log_level}'. "
                f"Choose from: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""

        def path_to_str(obj):
            if isinstance(obj, Path):
                return str(obj)
            elif isinstance(obj, dict):
                return {k: path_to_str(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [path_to_str(item) for item in obj]
            return obj

        return path_to_str(asdict(self))


def load_config(path: Path) -> Config:
    """Load configuration from YAML file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse configuration file {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")

    def build_config(data: Dict[str, Any]) -> Config:
        cfg = Config()

        # Direct attributes
        if "input_file" in data and data["input_file"] is not None:
            cfg.input_file = Path(data["input_file"])
        if "output_file" in data and data["output_file"] is not None:
            cfg.output_file = Path(data["output_file"])
        if "threads" in data and data["threads"] is not None:
            cfg.performance.threads = data["threads"]

        unknown = sorted(
            set(data) - {"input_file", "output_file", "threads", "detection", "runtime", "performance"}
        )
        if unknown:
            raise ConfigurationError("Unsupported config option(s): " + ", ".join(unknown))

        # Detection config; an explicit null regex disables extraction
        if "detection" in data and data["detection"]:
            for key, value in data["detection"].items():
                if not hasattr(cfg.detection, key):
                    raise ConfigurationError(f"Unsupported detection option: {key}")
                setattr(cfg.detection, key, value)

        # Runtime config
        if "runtime" in data and data["runtime"]:
            for key, value in data["runtime"].items():
                if hasattr(cfg.runtime, key):
                    if key == "log_file" and value:
                        value = Path(value)
                    setattr(cfg.runtime, key, value)

        # Performance config
        if "performance" in data and data["performance"]:
            for key, value in data["performance"].items():
                if hasattr(cfg.performance, key):
                    setattr(cfg.performance, key, value)

        return cfg

    return build_config(data)


def save_config(cfg: Config, path: Path) -> None:
    """Save configuration to YAML file."""
    data = cfg.to_dict()
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
