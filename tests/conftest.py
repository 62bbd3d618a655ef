import os
import sys
import pytest
from unittest.mock import MagicMock, patch, AsyncMock
import httpx

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hass_entities.cache import EntityCache
from hass_entities.hass import HassClient
from hass_entities.prompts import default_registry
from hass_entities.server import ToolServer

# Mock environment variables before imports
@pytest.fixture(autouse=True)
def mock_env_vars():
    """Mock configuration to prevent tests from using real credentials."""
    with patch.dict(os.environ, {
        "HASS_ENDPOINT": "homeassistant.local",
        "HASS_TOKEN": "mock_token_for_tests"
    }):
        with patch('hass_entities.config.HASS_ENDPOINT', "homeassistant.local"):
            with patch('hass_entities.config.HASS_TOKEN', "mock_token_for_tests"):
                yield

# Mock config
@pytest.fixture
def mock_config():
    """Create a mock configuration."""
    return {
        "hass_endpoint": "homeassistant.local",
        "hass_token": "mock_token_for_tests",
        "hass_url": "http://homeassistant.local:8123",
    }

@pytest.fixture
def sample_states():
    """Raw /api/states payload with a mix of domains."""
    return [
        {
            "entity_id": "light.kitchen",
            "state": "on",
            "last_changed": "2025-03-15T07:00:00+00:00",
            "last_updated": "2025-03-15T07:00:00+00:00",
            "attributes": {"friendly_name": "Kitchen Light", "brightness": 255},
            "context": {"id": "01H", "parent_id": None, "user_id": None},
        },
        {
            "entity_id": "climate.living_room",
            "state": "heat",
            "last_changed": "2025-03-15T06:00:00+00:00",
            "attributes": {"temperature": 21.5},
        },
        {
            "entity_id": "sensor.outdoor_temperature",
            "state": "12.3",
            "last_changed": "2025-03-15T06:30:00+00:00",
            "attributes": {"unit_of_measurement": "°C"},
        },
        {
            "entity_id": "switch.garden_pump",
            "state": "off",
            "last_changed": "2025-03-14T20:00:00+00:00",
            "attributes": {},
        },
        {
            "entity_id": "binary_sensor.front_door",
            "state": "off",
            "last_changed": "2025-03-14T21:00:00+00:00",
            "attributes": {"device_class": "door"},
        },
    ]

# Mock httpx client
@pytest.fixture
def mock_httpx_client():
    """Create a mock httpx client for testing."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)

    # Create a mock response
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json = MagicMock(return_value=[])
    mock_response.raise_for_status = MagicMock()
    mock_response.text = ""

    # Set up methods to return the mock response
    mock_client.get = AsyncMock(return_value=mock_response)
    mock_client.post = AsyncMock(return_value=mock_response)

    return mock_client

@pytest.fixture
def mock_transport_client():
    """Build an HassClient whose requests are answered by a handler function."""
    def factory(handler):
        return HassClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    return factory

@pytest.fixture
def entity_cache():
    return EntityCache()

@pytest.fixture
def mock_hass_client():
    """A HassClient with its API calls replaced by mocks."""
    client = MagicMock(spec=HassClient)
    client.get_states = AsyncMock(return_value=[])
    client.call_service = AsyncMock(return_value=None)
    return client

@pytest.fixture
def tool_server(entity_cache, mock_hass_client):
    return ToolServer(entity_cache, mock_hass_client, default_registry())
