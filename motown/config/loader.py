"""
Schema-driven configuration loader.

This module provides a ConfigLoader that uses the configuration schema
to load, merge, and validate configuration from the config files, the
process environment, and the hosting platform.
"""

import copy
import logging
import os
import typing
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Type, Union

import json5
from dotenv import load_dotenv
from pydantic import ValidationError

from .errors import ConfigFileError, ConfigValidationError
from .schema import ConfigSchema, env_bindings, is_section
from .vcap import VCAP_SERVICES_VAR, platform_overrides


logger = logging.getLogger(__name__)

APP_ROOT_VAR = "APP_ROOT"
ENV_SELECTOR_VAR = "APP_ENV"
DOTENV_FILENAME = ".env.local"

# motown/config/loader.py -> repository root, when running from a checkout
CHECKOUT_ROOT = Path(__file__).resolve().parents[2]


class ConfigLoader:
    """Loads and validates configuration using a schema-driven approach."""

    @staticmethod
    def resolve_root(root: Optional[Union[str, Path]] = None) -> Path:
        """
        Resolve the application root and publish it as ``APP_ROOT``.

        Args:
            root: Explicit root directory. Without one, an ``APP_ROOT`` already
                set in the environment wins, then the source checkout (if it
                holds ``config/``), then the current working directory

        Returns:
            Absolute path of the application root
        """
        if root:
            root_dir = Path(root).resolve()
        elif os.getenv(APP_ROOT_VAR):
            root_dir = Path(os.environ[APP_ROOT_VAR]).resolve()
        elif (CHECKOUT_ROOT / "config").is_dir():
            root_dir = CHECKOUT_ROOT
        else:
            root_dir = Path.cwd().resolve()
        os.environ[APP_ROOT_VAR] = str(root_dir)
        return root_dir

    @staticmethod
    def load(
        schema: Type[ConfigSchema] = ConfigSchema,
        root: Optional[Union[str, Path]] = None,
    ) -> ConfigSchema:
        """
        Load configuration from all sources with precedence handling.

        Loading order (lowest to highest priority):
        1. Schema defaults
        2. config/base.json
        3. config/environments/<env>.json
        4. OS environment variables (including those from .env.local)
        5. VCAP_SERVICES platform bindings (applied after validation)

        Args:
            schema: The configuration schema class to use
            root: Application root directory holding ``config/``

        Returns:
            Validated configuration instance

        Raises:
            ConfigFileError: If a config file is missing or malformed
            ConfigValidationError: If configuration validation fails
            PlatformOverlayError: If VCAP_SERVICES is malformed
        """
        root_dir = ConfigLoader.resolve_root(root)

        # Step 1: Load from .env.local file if present
        _load_from_dotenv_file(root_dir / DOTENV_FILENAME)

        # Step 2: Pick the environment before any file is read
        env_name = ConfigLoader.resolve_environment(schema)
        os.environ[ENV_SELECTOR_VAR] = env_name
        logger.info(f"Initializing MoTown. Environment: {env_name}")

        # Step 3: Overlay base and environment files on top of the defaults
        config_dict = _empty_sections(schema)
        sources: List[str] = []
        for path in (
            root_dir / "config" / "base.json",
            root_dir / "config" / "environments" / f"{env_name}.json",
        ):
            file_config = ConfigLoader.read_config_file(path)
            _deep_merge_dicts(config_dict, _canonical_keys(file_config, schema))
            sources.append(str(path))
            logger.debug(f"Loaded configuration from {path}")

        # Step 4: Environment variables win over files
        _deep_merge_dicts(config_dict, ConfigLoader.env_overrides(schema))

        # Step 5: Validate the merged configuration
        config = ConfigLoader.validate(config_dict, schema=schema, sources=sources)

        # Step 6: Platform-provided bindings replace the validated values
        overrides = platform_overrides(config)
        if overrides:
            merged = config.to_dict()
            _deep_merge_dicts(merged, overrides)
            config = ConfigLoader.validate(merged, schema=schema, sources=sources + [VCAP_SERVICES_VAR])

        logger.debug("Configuration loaded and validated successfully")
        return config

    @staticmethod
    def resolve_environment(schema: Type[ConfigSchema] = ConfigSchema) -> str:
        """
        Determine the deployment environment name.

        ``APP_ENV`` takes precedence over the schema default.

        Raises:
            ConfigValidationError: If the name is not a known environment
        """
        field_info = schema.model_fields["env"]
        allowed = typing.get_args(field_info.annotation)
        env_name = (os.getenv(ENV_SELECTOR_VAR) or "").strip() or field_info.default
        if env_name not in allowed:
            raise ConfigValidationError(
                [("env", f"{ENV_SELECTOR_VAR}={env_name!r} is not one of {', '.join(allowed)}")],
                sources=[ENV_SELECTOR_VAR],
            )
        return env_name

    @staticmethod
    def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read a JSON-with-comments configuration file.

        Raises:
            ConfigFileError: If the file is missing, unparsable, or not an object
        """
        path = Path(path)
        if not path.exists():
            raise ConfigFileError(str(path), "config file not found")

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileError(str(path), f"cannot read config file: {e}") from e

        try:
            data = json5.loads(text)
        except ValueError as e:
            raise ConfigFileError(str(path), f"invalid JSON: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigFileError(str(path), f"top-level value must be an object, got: {type(data).__name__}")
        return data

    @staticmethod
    def env_overrides(schema: Type[ConfigSchema] = ConfigSchema) -> Dict[str, Any]:
        """
        Collect overrides from environment variables bound in the schema.

        Values are stripped; blank values are ignored so the file or default
        value is kept. Type coercion is left to validation.
        """
        overrides: Dict[str, Any] = {}
        for field_path, env_var in env_bindings(schema).items():
            env_value = os.getenv(env_var)
            if env_value is None:
                continue
            stripped = env_value.strip()
            if not stripped:
                continue

            *parents, leaf = field_path.split(".")
            section = overrides
            for segment in parents:
                section = section.setdefault(segment, {})
            section[leaf] = stripped
            logger.debug(f"Overriding {field_path} from {env_var}")
        return overrides

    @staticmethod
    def validate(
        config_dict: Mapping[str, Any],
        schema: Type[ConfigSchema] = ConfigSchema,
        sources: Optional[List[str]] = None,
    ) -> ConfigSchema:
        """
        Validate a merged configuration mapping against the schema.

        Raises:
            ConfigValidationError: Listing every violated constraint
        """
        try:
            return schema.model_validate(config_dict)
        except ValidationError as e:
            # Convert Pydantic validation errors to more user-friendly messages
            bindings = env_bindings(schema)
            errors = []
            for error in e.errors():
                field_path = ".".join(str(part) for part in error["loc"])
                env_var = bindings.get(field_path)
                label = f"{field_path} ({env_var})" if env_var else field_path
                errors.append((label, error["msg"]))
            raise ConfigValidationError(errors, sources=sources) from e


def _deep_merge_dicts(base: MutableMapping[str, Any], override: Mapping[str, Any]) -> None:
    for k, v in override.items():
        if isinstance(v, Mapping) and isinstance(base.get(k), Mapping):
            _deep_merge_dicts(base[k], v)
            continue
        base[k] = copy.deepcopy(v)


def _empty_sections(schema: Type[ConfigSchema]) -> Dict[str, Any]:
    """Build a dict with an empty mapping per section so nested required fields report by path."""
    return {
        field_name: _empty_sections(field_info.annotation)
        for field_name, field_info in schema.model_fields.items()
        if is_section(field_info.annotation)
    }


def _canonical_keys(data: Mapping[str, Any], schema: Type[Any]) -> Dict[str, Any]:
    """Rename aliased keys (e.g. ``retryDelay``) to field names so later sources merge cleanly."""
    aliases = {
        field_info.alias: field_name
        for field_name, field_info in schema.model_fields.items()
        if field_info.alias
    }
    result: Dict[str, Any] = {}
    for key, value in data.items():
        field_name = aliases.get(key, key)
        field_info = schema.model_fields.get(field_name)
        if field_info is not None and is_section(field_info.annotation) and isinstance(value, Mapping):
            value = _canonical_keys(value, field_info.annotation)
        result[field_name] = value
    return result


def _load_from_dotenv_file(dotenv_path: Path) -> None:
    """Load values from a .env.local file without overriding variables already set."""
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)
        logger.debug(f"Loaded environment from {dotenv_path}")
    else:
        logger.debug(f"{dotenv_path} not found, skipping")
