"""
Process configuration.

.env is loaded first (it may name the vault), then Azure Key Vault fills
the remaining variables when KEYVAULT_NAME is set, with optional per-user overrides.
Existing os.environ values are never overwritten, so CLI/env overrides win.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from azure.identity import DefaultAzureCredential
from azure.keyvault.secrets import SecretClient
from dotenv import load_dotenv

from .emitters.mapping import DEFAULT_CONNECTION_NAME, DEFAULT_CONTEXT_NAME
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Known env vars to fetch from Key Vault (in lookup order for per-user)
ENV_VARS = (
    "ORACLE_URL",
    "SCHEMA",
    "OUTPUT_DIR",
    "DB_CONTEXT_NAME",
    "CONNECTION_NAME",
    "TYPE_RULES",
)

DEFAULT_OUTPUT_DIR = "output"


def _env_to_secret_name(env_key: str) -> str:
    """Convert env var name to Key Vault secret name (underscores -> hyphens)."""
    return env_key.replace("_", "-")


def _load_from_dotenv() -> None:
    """Load vars from the first .env found in the cwd or the project root."""
    for base in (Path.cwd(), Path(__file__).resolve().parent.parent):
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)
            return


def _secret_client(vault_name: str) -> Optional[SecretClient]:
    try:
        credential = DefaultAzureCredential()
        return SecretClient(vault_url=f"https://{vault_name}.vault.azure.net/", credential=credential)
    except Exception as e:
        logger.warning(f"Key Vault '{vault_name}' unavailable, falling back to .env: {e}")
        return None


def load_env() -> None:
    """
    Load env vars from Azure Key Vault (or .env fallback).
    - KEYVAULT_NAME: vault name (required for Key Vault)
    - AZURE_USER_NAME: optional; use {VAR}-{USER} secrets first, then {VAR}
    - Does not overwrite existing os.environ values (allows CLI overrides)
    """
    # .env may be what provides KEYVAULT_NAME and AZURE_USER_NAME
    _load_from_dotenv()
    vault_name = os.environ.get("KEYVAULT_NAME", "").strip()
    user_name = os.environ.get("AZURE_USER_NAME", "").strip().upper()

    client = _secret_client(vault_name) if vault_name else None
    if client is not None:
        for var in ENV_VARS:
            if var in os.environ:
                continue
            base_name = _env_to_secret_name(var)
            secret_names = [f"{base_name}-{user_name}", base_name] if user_name else [base_name]
            for name in secret_names:
                try:
                    secret = client.get_secret(name)
                except Exception as e:
                    logger.debug(f"Secret '{name}' not read: {e}")
                    continue
                if secret and secret.value:
                    os.environ[var] = secret.value
                    break


@dataclass(frozen=True)
class TranslatorConfig:
    database_url: str
    schema: str
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    context_name: str = DEFAULT_CONTEXT_NAME
    connection_name: str = DEFAULT_CONNECTION_NAME
    type_rules_path: Optional[Path] = None


def _pick(explicit: Optional[str], env_key: str, default: Optional[str] = None) -> Optional[str]:
    if explicit and explicit.strip():
        return explicit.strip()
    value = os.environ.get(env_key, "").strip()
    return value or default


def load_config(
    database_url: Optional[str] = None,
    schema: Optional[str] = None,
    output_dir: Optional[str] = None,
    context_name: Optional[str] = None,
    connection_name: Optional[str] = None,
    type_rules_path: Optional[str] = None,
) -> TranslatorConfig:
    """Resolve configuration: explicit arguments first, then environment, then defaults."""
    url = _pick(database_url, "ORACLE_URL")
    if not url:
        raise ConfigurationError("ORACLE_URL must be set (argument, .env or Key Vault)")
    schema_name = _pick(schema, "SCHEMA")
    if not schema_name:
        raise ConfigurationError("SCHEMA must be set (argument, .env or Key Vault)")
    rules = _pick(type_rules_path, "TYPE_RULES")
    return TranslatorConfig(
        database_url=url,
        schema=schema_name,
        output_dir=Path(_pick(output_dir, "OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
        context_name=_pick(context_name, "DB_CONTEXT_NAME", DEFAULT_CONTEXT_NAME),
        connection_name=_pick(connection_name, "CONNECTION_NAME", DEFAULT_CONNECTION_NAME),
        type_rules_path=Path(rules) if rules else None,
    )
