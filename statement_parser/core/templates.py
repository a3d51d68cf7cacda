"""
Loading of the static issuer registry and field rules from YAML.
"""
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional, Union
import logging

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from ..models.schema import FieldRule, FieldSpec, IssuerEntry, IssuerRegistry

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
ISSUERS_FILE = "issuers.yaml"
FIELDS_FILE = "fields.yaml"
CONFIG_DIR_ENV = "STATEMENT_PARSER_CONFIG_DIR"


class ParserConfig(NamedTuple):
    registry: IssuerRegistry
    field_spec: FieldSpec


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}", str(path))

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path.name}: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a mapping at the top of {path.name}", str(path))
    return data


def load_registry(path: Optional[Union[Path, str]] = None) -> IssuerRegistry:
    """
    Load the issuer registry.

    Args:
        path: YAML file to read, defaults to the bundled issuers.yaml

    Returns:
        IssuerRegistry with entries in file order
    """
    path = Path(path) if path else TEMPLATES_DIR / ISSUERS_FILE
    data = _read_yaml(path)

    try:
        entries = tuple(IssuerEntry(**item) for item in data.get('issuers') or [])
        unknown = data.get('unknown')
        if unknown:
            registry = IssuerRegistry(
                entries=entries,
                unknown=IssuerEntry(key="unknown", **unknown)
            )
        else:
            registry = IssuerRegistry(entries=entries)
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid issuer registry {path.name}: {e}", str(path)) from e

    if not registry.entries:
        logger.warning(f"Issuer registry {path} has no entries")
    logger.debug(f"Loaded {len(registry)} issuers from {path}")
    return registry


def load_field_spec(path: Optional[Union[Path, str]] = None) -> FieldSpec:
    """
    Load the field extraction rules.

    Args:
        path: YAML file to read, defaults to the bundled fields.yaml

    Returns:
        FieldSpec with rules in file order
    """
    path = Path(path) if path else TEMPLATES_DIR / FIELDS_FILE
    data = _read_yaml(path)
    fields = data.get('fields')

    if not isinstance(fields, dict) or not fields:
        raise ConfigurationError(f"No fields defined in {path.name}", str(path))

    try:
        spec = FieldSpec(rules=tuple(
            FieldRule(name=name, **(rule or {})) for name, rule in fields.items()
        ))
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid field rules {path.name}: {e}", str(path)) from e

    logger.debug(f"Loaded {len(spec)} field rules from {path}")
    return spec


def load_config(config_dir: Optional[Union[Path, str]] = None) -> ParserConfig:
    """Load both configuration tables from a directory."""
    config_dir = Path(config_dir) if config_dir else TEMPLATES_DIR
    return ParserConfig(
        registry=load_registry(config_dir / ISSUERS_FILE),
        field_spec=load_field_spec(config_dir / FIELDS_FILE)
    )


@lru_cache(maxsize=None)
def default_config() -> ParserConfig:
    """Process-wide configuration, honouring STATEMENT_PARSER_CONFIG_DIR."""
    config_dir = os.environ.get(CONFIG_DIR_ENV)
    if config_dir:
        logger.info(f"Using configuration from {config_dir}")
    return load_config(config_dir)
