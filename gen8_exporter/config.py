import os
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, Mapping
import yaml
from gen8_exporter.errors import ConfigError

DEFAULT_PORT: int = 8080
DEFAULT_CHASSIS: str = "1"
DEFAULT_TIMEOUT: float = 10

# environment variable -> config key
ENV_KEYS: Dict[str, str] = {
    "URL": "url",
    "LOGIN": "login",
    "PASSWD": "password",
    "INSECURE": "insecure",
    "VERIFY_SSL": "verify_ssl",
    "PORT": "port",
    "CHASSIS": "chassis",
    "TIMEOUT": "timeout",
}

REQUIRED_KEYS = ("url", "login", "password")

# file key -> config key
KEY_ALIASES: Dict[str, str] = {"passwd": "password"}

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class ExporterConfig:
    """Static configuration for the exporter.

    Attributes:
        url: Base URL of the Redfish service, e.g. https://ilo.example.com.
        login: Username for the Redfish session.
        password: Password for the Redfish session.
        verify_ssl: If True, verify SSL certificates. Defaults to True.
        port: Port of the /metrics endpoint. Defaults to 8080.
        chassis: Chassis ID holding the Thermal resource. Defaults to "1".
        timeout: Timeout in seconds for Redfish requests. Defaults to 10.
    """
    url: str
    login: str
    password: str
    verify_ssl: bool = True
    port: int = DEFAULT_PORT
    chassis: str = DEFAULT_CHASSIS
    timeout: float = DEFAULT_TIMEOUT


def parse_bool(value: Any, key: str) -> bool:
    """Interpret YAML booleans and environment strings alike."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


def read_config_file(path: str) -> Dict[str, Any]:
    """
    Read the YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Dict[str, Any]: Raw settings, empty if the file does not exist.

    Raises:
        ConfigError: If the file cannot be parsed or is not a mapping.
    """
    if not os.path.exists(path):
        logging.info("Config file %s not found, reading environment", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as file:
            data = yaml.safe_load(file)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def read_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect settings from environment variables."""
    return {key: environ[name] for name, key in ENV_KEYS.items() if name in environ}


def validate_config(raw: Dict[str, Any]) -> ExporterConfig:
    """
    Validate raw settings and build an ExporterConfig.

    Args:
        raw: Merged settings from file, environment and command line.

    Returns:
        ExporterConfig: Validated configuration with defaults.

    Raises:
        ConfigError: If required fields are missing or values are malformed.
    """
    raw = dict(raw)
    for alias, key in KEY_ALIASES.items():
        if alias in raw and key not in raw:
            raw[key] = raw.pop(alias)

    for key in REQUIRED_KEYS:
        if not raw.get(key):
            raise ConfigError(f"Missing required field in config: {key}")

    verify_ssl = True
    if raw.get("insecure") is not None:
        verify_ssl = not parse_bool(raw["insecure"], "insecure")
    if raw.get("verify_ssl") is not None:
        verify_ssl = parse_bool(raw["verify_ssl"], "verify_ssl")

    try:
        port = int(raw.get("port", DEFAULT_PORT))
        timeout = float(raw.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid numeric value in config: {e}") from e

    return ExporterConfig(
        url=str(raw["url"]).rstrip("/"),
        login=str(raw["login"]),
        password=str(raw["password"]),
        verify_ssl=verify_ssl,
        port=port,
        chassis=str(raw.get("chassis", DEFAULT_CHASSIS)),
        timeout=timeout,
    )


def load_config(
    path: str,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ExporterConfig:
    """
    Load the configuration. Environment variables override the file,
    command line overrides override both.

    Args:
        path: Path to the YAML file.
        overrides: Values given on the command line; None entries are ignored.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        ExporterConfig: Validated configuration.
    """
    raw = read_config_file(path)
    raw.update(read_env(os.environ if environ is None else environ))
    if overrides:
        raw.update({k: v for k, v in overrides.items() if v is not None})
    return validate_config(raw)
