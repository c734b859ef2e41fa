"""Configuration loading and vault registry."""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml

from vault_query.constants import CONFIG_ENV_VAR, CONFIG_PATH, DEFAULT_API_KEY_ENV
from vault_query.data_models import VaultConfiguration, VaultMetadata

logger = logging.getLogger(__name__)


def _parse_vault_entry(name: str, entry: object) -> VaultMetadata:
    """Validate one entry of the ``vaults`` mapping."""
    if not isinstance(entry, dict):
        raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

    raw_path = entry.get("path")
    raw_url = entry.get("url")
    if (raw_path is None) == (raw_url is None):
        raise ValueError(f"Vault '{name}' must define exactly one of 'path' or 'url'")

    description = str(entry.get("description", "")).strip()

    if raw_path is not None:
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")
        resolved_path = Path(raw_path).expanduser()
        try:
            resolved_path = resolved_path.resolve(strict=False)
        except RuntimeError:
            # resolve can raise if underlying filesystem is inaccessible; fall back to expanded path
            pass
        return VaultMetadata(name=name, description=description, path=resolved_path)

    if not isinstance(raw_url, str) or not raw_url.strip():
        raise ValueError(f"Vault '{name}' is missing a valid 'url' string")

    api_key_env = entry.get("api_key_env", DEFAULT_API_KEY_ENV)
    if not isinstance(api_key_env, str) or not api_key_env.strip():
        raise ValueError(f"Vault '{name}' has an invalid 'api_key_env' value")

    verify_tls = entry.get("verify_tls", True)
    if not isinstance(verify_tls, bool):
        raise ValueError(f"Vault '{name}' must use a boolean for 'verify_tls'")

    return VaultMetadata(
        name=name,
        description=description,
        url=raw_url.strip().rstrip("/"),
        api_key_env=api_key_env.strip(),
        verify_tls=verify_tls,
    )


def load_vault_configuration(config_path: Path = CONFIG_PATH) -> VaultConfiguration:
    """Load and validate the vault configuration file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to ``vaults.yaml``
            at the repository root.

    Returns:
        A fully populated :class:`VaultConfiguration` containing normalized vault
        metadata and the configured default vault name.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file exists but does not provide the expected structure
            (missing default, empty mapping, entries with neither path nor url, etc.).
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Vault configuration must be a YAML mapping")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed = {
        str(name): _parse_vault_entry(str(name), entry) for name, entry in vaults_section.items()
    }

    default_vault = raw_config.get("default")
    if not isinstance(default_vault, str) or default_vault not in processed:
        raise ValueError("Vault configuration must specify a 'default' vault present in the mapping")

    logger.debug("Loaded %d vault(s) from %s", len(processed), config_path)
    return VaultConfiguration(default_vault=default_vault, vaults=processed)


def resolve_config_path(explicit: Optional[str] = None) -> Path:
    """Return the configuration path, honouring ``$VAULT_QUERY_CONFIG``."""
    candidate = explicit or os.environ.get(CONFIG_ENV_VAR)
    return Path(candidate).expanduser() if candidate else CONFIG_PATH


@lru_cache(maxsize=1)
def get_vault_configuration() -> VaultConfiguration:
    """Load the vault registry once per process."""
    return load_vault_configuration(resolve_config_path())


def resolve_api_key(vault: VaultMetadata) -> str:
    """Read the REST API key for ``vault`` from its configured environment variable.

    Raises:
        ValueError: If the environment variable is unset or empty.
    """
    env_name = vault.api_key_env or DEFAULT_API_KEY_ENV
    api_key = os.environ.get(env_name, "").strip()
    if not api_key:
        raise ValueError(
            f"Vault '{vault.name}' requires an API key in the {env_name} environment variable. "
            "Copy it from Obsidian: Settings -> Local REST API."
        )
    return api_key
