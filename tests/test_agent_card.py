"""Tests for the typed AgentCard view."""

import pytest
from pydantic import ValidationError

from a2a_testcontainers import AgentCard


@pytest.mark.fast
class TestAgentCard:
    def test_parses_reference_card(self, hello_world_card):
        card = AgentCard.from_json(hello_world_card)

        assert card.name == "Hello World Agent"
        assert card.description == "Just a hello world agent"
        assert card.version == "1.0.0"
        assert card.protocol_version == "0.3.0"
        assert card.capabilities.streaming is True
        assert card.capabilities.push_notifications is True
        assert card.capabilities.state_transition_history is True
        assert len(card.skills) == 1
        assert card.skills[0].id == "hello_world"

    def test_unknown_fields_are_kept(self, hello_world_card):
        card = AgentCard.from_json(hello_world_card)

        assert card.model_extra["defaultInputModes"] == ["text"]
        assert card.skills[0].model_extra["tags"] == ["hello world"]

    def test_get_skill(self, hello_world_card):
        card = AgentCard.from_json(hello_world_card)

        assert card.get_skill("hello_world").description == "just returns hello world"
        assert card.get_skill("missing") is None

    def test_minimal_card_uses_defaults(self):
        card = AgentCard.from_json({"name": "Bare", "version": "0.1"})

        assert card.skills == []
        assert card.capabilities.streaming is False
        assert card.protocol_version is None

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            AgentCard.from_json({"description": "no name or version"})

    def test_card_is_immutable(self, hello_world_card):
        card = AgentCard.from_json(hello_world_card)
        with pytest.raises(ValidationError):
            card.name = "changed"
