import json
import pytest
import httpx

from hass_entities.errors import BackendError, ParseError
from hass_entities.models import Entity
from hass_entities.tools import ENTITY_PREFIXES, filter_entities, get_entities, turn_off_entity, turn_on_entity


def entity(entity_id: str) -> Entity:
    return Entity(entity_id=entity_id, state="on", last_changed="2025-03-15T07:00:00+00:00")


class TestFilterEntities:

    def test_keeps_prefixed_entities_in_order(self):
        entities = [
            entity("sensor.b"),
            entity("climate.x"),
            entity("light.a"),
            entity("binary_sensor.door"),
            entity("switch.c"),
            entity("lightning.strike"),
        ]

        assert [e.entity_id for e in filter_entities(entities)] == ["sensor.b", "light.a", "switch.c"]

    def test_prefixes(self):
        assert ENTITY_PREFIXES == ("light.", "switch.", "sensor.")


class TestEntityTools:
    """Test the entity tool handlers."""

    @pytest.mark.asyncio
    async def test_get_entities(self, mock_hass_client, entity_cache):
        mock_hass_client.get_states.return_value = [entity("light.a"), entity("climate.b")]

        result = await get_entities(mock_hass_client, entity_cache)

        assert len(result) == 1
        payload = json.loads(result[0].text)
        assert [item["entity_id"] for item in payload] == ["light.a"]
        assert payload[0] == {
            "entity_id": "light.a",
            "state": "on",
            "last_changed": "2025-03-15T07:00:00+00:00",
            "attributes": {},
        }
        assert [e.entity_id for e in entity_cache.snapshot()] == ["light.a"]

    @pytest.mark.asyncio
    async def test_get_entities_against_backend(self, mock_transport_client, entity_cache, sample_states):
        """Test the full fetch, filter and cache path with a fake backend."""
        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/api/states"
            return httpx.Response(200, json=sample_states)

        client = mock_transport_client(handler)
        result = await get_entities(client, entity_cache)

        expected = ["light.kitchen", "sensor.outdoor_temperature", "switch.garden_pump"]
        assert [item["entity_id"] for item in json.loads(result[0].text)] == expected
        assert [e.entity_id for e in entity_cache.snapshot()] == expected

    @pytest.mark.asyncio
    async def test_get_entities_failure_keeps_cache(self, mock_hass_client, entity_cache):
        entity_cache.replace([entity("light.previous")])
        mock_hass_client.get_states.side_effect = ParseError("Failed to parse entities: bad")

        with pytest.raises(ParseError):
            await get_entities(mock_hass_client, entity_cache)

        assert [e.entity_id for e in entity_cache.snapshot()] == ["light.previous"]

    @pytest.mark.asyncio
    async def test_turn_on_entity(self, mock_hass_client):
        result = await turn_on_entity(mock_hass_client, "light.kitchen")

        mock_hass_client.call_service.assert_awaited_once_with("light", "turn_on", {"entity_id": "light.kitchen"})
        assert result[0].text == "Successfully turned on entity: light.kitchen"

    @pytest.mark.asyncio
    async def test_turn_off_entity(self, mock_hass_client):
        result = await turn_off_entity(mock_hass_client, "switch.garden_pump")

        mock_hass_client.call_service.assert_awaited_once_with("light", "turn_off", {"entity_id": "switch.garden_pump"})
        assert result[0].text == "Successfully turned off entity: switch.garden_pump"

    @pytest.mark.asyncio
    async def test_unknown_entity_is_forwarded(self, mock_hass_client):
        """Test that any entity id is forwarded to the backend as-is."""
        await turn_on_entity(mock_hass_client, "anything at all")

        mock_hass_client.call_service.assert_awaited_once_with("light", "turn_on", {"entity_id": "anything at all"})

    @pytest.mark.asyncio
    async def test_turn_on_backend_error(self, mock_transport_client):
        """Test that a 500 from the backend is surfaced with its status."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(500)

        client = mock_transport_client(handler)

        with pytest.raises(BackendError) as excinfo:
            await turn_on_entity(client, "light.kitchen")

        assert excinfo.value.status == 500
        assert requests[0].url.path == "/api/services/light/turn_on"
        assert json.loads(requests[0].content) == {"entity_id": "light.kitchen"}
        assert requests[0].headers["Authorization"] == "Bearer mock_token_for_tests"
