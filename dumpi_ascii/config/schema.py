"""
Configuration schema for dumpi-ascii.

Supports:
- YAML file loading
- Environment variable substitution (${VAR_NAME})
- Validation with error messages
- Extra symbol names per category

Example config (dumpi-ascii.yml):
    version: 1

    input:
      address_table: ${DUMPI_ADDRESS_TABLE}
      skip_unknown: false

    symbols:
      comm:
        4: solver_comm
        5: io_comm

    logging:
      level: INFO
"""

import logging
import os
import re
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Dict, Optional, List, Any

import yaml

from ..core.errors import ConfigError, ConversionError, ErrorCode
from ..symbols.categories import Category
from ..symbols.registry import SymbolResolver

logger = logging.getLogger(__name__)

_ENV_PATTERN = r'\$\{([^}]+)\}'

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _substitute_env_vars(value: Any) -> Any:
    """
    Substitute ${VAR_NAME} with environment variable values.

    Example:
        ${DUMPI_ADDRESS_TABLE} → os.environ.get('DUMPI_ADDRESS_TABLE')
    """
    if isinstance(value, str):
        def replace(match):
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                return match.group(0)  # Keep original if not found
            return env_value

        return re.sub(_ENV_PATTERN, replace, value)

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]

    return value


@dataclass
class InputConfig:
    """Input settings."""
    address_table: Optional[str] = None
    skip_unknown: bool = False

    def address_table_path(self) -> Optional[Path]:
        """Configured table path, or None if unset or still an unresolved ${VAR}."""
        if not self.address_table or re.search(_ENV_PATTERN, self.address_table):
            return None
        return Path(self.address_table).expanduser()


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = 'WARNING'


@dataclass
class DumpiConfig:
    """Root configuration."""

    version: int = 1
    input: InputConfig = field(default_factory=InputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    symbols: Dict[str, Dict[int, str]] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> 'DumpiConfig':
        """Load from YAML file with env var substitution."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(ConversionError(
                code=ErrorCode.E3001_INVALID_CONFIG,
                context={'path': str(path), 'reason': str(e)},
            ))

        if not isinstance(data, dict):
            raise ConfigError(ConversionError(
                code=ErrorCode.E3001_INVALID_CONFIG,
                context={'path': str(path), 'reason': 'top level must be a mapping'},
            ))

        data = _substitute_env_vars(data)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'DumpiConfig':
        """Create from dictionary."""
        known = {'version', 'input', 'logging', 'symbols'}
        for key in sorted(set(data) - known):
            logger.warning(f"Ignoring unknown config section: {key}")

        try:
            return cls(
                version=data.get('version', 1),
                input=InputConfig(**(data.get('input') or {})),
                logging=LoggingConfig(**(data.get('logging') or {})),
                symbols={
                    str(category): {int(k): str(v) for k, v in (names or {}).items()}
                    for category, names in (data.get('symbols') or {}).items()
                },
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigError(ConversionError(
                code=ErrorCode.E3001_INVALID_CONFIG,
                context={'reason': str(e)},
            ))

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Convert to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def validate(self) -> List[str]:
        """Validate config. Returns list of errors (empty if valid)."""
        errors = []

        if self.version != 1:
            errors.append(f"Unsupported config version: {self.version}")

        if self.logging.level.upper() not in LOG_LEVELS:
            errors.append(f"Invalid logging level: {self.logging.level}")

        for name in self.symbols:
            try:
                Category.parse(name)
            except ValueError:
                errors.append(f"Unknown symbol category: {name}")

        if self.input.address_table and re.search(_ENV_PATTERN, self.input.address_table):
            errors.append(f"Environment variable not set in address_table: {self.input.address_table}")
        elif self.input.address_table and not Path(self.input.address_table).expanduser().exists():
            errors.append(f"Address table not found: {self.input.address_table}")

        return errors

    def symbol_overrides(self) -> Dict[Category, Dict[int, str]]:
        """Symbol names keyed by Category (unknown categories are skipped)."""
        overrides = {}
        for name, names in self.symbols.items():
            try:
                overrides[Category.parse(name)] = names
            except ValueError:
                logger.warning(f"Skipping symbols for unknown category: {name}")
        return overrides

    def build_resolver(self) -> SymbolResolver:
        """Default resolvers extended with the configured names."""
        resolver = SymbolResolver.default()
        overrides = self.symbol_overrides()
        if overrides:
            resolver = resolver.with_overrides(overrides)
        return resolver


def load_config(path: Optional[Path] = None) -> DumpiConfig:
    """Load config from file or return defaults."""
    if path and Path(path).exists():
        return DumpiConfig.load(path)

    search_paths = [
        Path('./dumpi-ascii.yml'),
        Path('./dumpi-ascii.yaml'),
        Path.home() / '.dumpi-ascii' / 'config.yml',
    ]

    for p in search_paths:
        if p.exists():
            return DumpiConfig.load(p)

    return DumpiConfig()


def generate_default_config() -> str:
    """Generate default config as YAML."""
    return """# dumpi-ascii configuration
version: 1

input:
  # Function address table: one "<address> <name>" per line
  # address_table: ${DUMPI_ADDRESS_TABLE}
  skip_unknown: false

logging:
  level: WARNING

# Extra names for tracer-assigned handle ids, per category
symbols:
  comm: {}
"""
