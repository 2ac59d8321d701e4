"""
API Key authentication for the REST API.
Simple header-based authentication using X-API-Key header.
"""

import json
import logging
import os
import secrets

from fastapi import Header, HTTPException, status

import config

logger = logging.getLogger(__name__)

MAX_ENV_KEYS = 10


def _read_keys_file() -> list[str]:
    if not config.API_KEYS_FILE.exists():
        return []
    try:
        with open(config.API_KEYS_FILE, "r") as f:
            file_keys = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable API keys file %s: %s", config.API_KEYS_FILE, e)
        return []
    if not isinstance(file_keys, list):
        logger.warning("Ignoring API keys file %s: expected a JSON list", config.API_KEYS_FILE)
        return []
    return [k for k in file_keys if isinstance(k, str)]


def load_api_keys() -> set[str]:
    """
    Load valid API keys from environment variables and the keys file.

    Environment variables API_KEY_1 .. API_KEY_10 are read first. When no key
    is configured anywhere, one is generated and saved for first-time setup.

    Returns:
        Set of valid API keys
    """
    keys = set()

    for i in range(1, MAX_ENV_KEYS + 1):
        key = os.getenv(f"API_KEY_{i}")
        if key:
            keys.add(key)

    keys.update(_read_keys_file())

    if not keys:
        default_key = generate_api_key()
        keys.add(default_key)
        save_api_key(default_key)
        print(f"\n{'='*60}")
        print("🔑 FIRST-TIME SETUP: Generated default API key")
        print(f"{'='*60}")
        print(f"API Key: {default_key}")
        print(f"Saved to: {config.API_KEYS_FILE}")
        print(f"{'='*60}\n")

    return keys


def generate_api_key() -> str:
    """Generate a secure random API key."""
    return f"{config.API_KEY_PREFIX}{secrets.token_urlsafe(32)}"


def save_api_key(api_key: str) -> None:
    """Append an API key to the keys file if it is not already there."""
    existing_keys = _read_keys_file()
    if api_key not in existing_keys:
        existing_keys.append(api_key)
        with open(config.API_KEYS_FILE, "w") as f:
            json.dump(existing_keys, f, indent=2)


# Load valid API keys at module import
VALID_API_KEYS = load_api_keys()


async def verify_api_key(x_api_key: str | None = Header(None, alias="X-API-Key")) -> str:
    """
    FastAPI dependency to verify API key from request header.

    Raises:
        HTTPException: 401 if the key is missing or invalid
    """
    if not x_api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key. Include 'X-API-Key' header in your request.",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    if x_api_key not in VALID_API_KEYS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key. Please check your credentials.",
            headers={"WWW-Authenticate": "ApiKey"},
        )

    return x_api_key
