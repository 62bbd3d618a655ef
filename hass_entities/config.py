import os

from hass_entities.errors import ConfigurationError

# Home Assistant configuration
HASS_TOKEN: str = os.environ.get("HASS_TOKEN", "")
HASS_ENDPOINT: str = os.environ.get("HASS_ENDPOINT", "")
HASS_PORT: int = int(os.environ.get("HASS_PORT", "8123"))
HASS_TIMEOUT: float = float(os.environ.get("HASS_TIMEOUT", "10.0"))

LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

def get_hass_token() -> str:
    """Return the access token, failing if it has not been configured"""
    if not HASS_TOKEN:
        raise ConfigurationError("HASS_TOKEN environment variable has not been set")
    return HASS_TOKEN

def get_hass_url() -> str:
    """Return the base URL of the Home Assistant API host"""
    if not HASS_ENDPOINT:
        raise ConfigurationError("HASS_ENDPOINT environment variable has not been set")
    return f"http://{HASS_ENDPOINT}:{HASS_PORT}"

def get_ha_headers() -> dict:
    """Return the headers needed for Home Assistant API requests"""
    return {
        "Authorization": f"Bearer {get_hass_token()}",
        "Content-Type": "application/json",
    }
