"""Typed view of the public agent card served at /a2a/agent-card/public."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AgentCapabilities(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    streaming: bool = False
    push_notifications: bool = Field(False, alias="pushNotifications")
    state_transition_history: bool = Field(False, alias="stateTransitionHistory")


class AgentSkill(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    name: str
    description: str = ""


class AgentCard(BaseModel):
    """
    Capability document of an A2A agent.

    Only the fields the harness asserts on are typed; anything else the
    server sends is kept as extra fields.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    version: str
    protocol_version: str | None = Field(None, alias="protocolVersion")
    capabilities: AgentCapabilities = Field(default_factory=AgentCapabilities)
    skills: list[AgentSkill] = Field(default_factory=list)

    @classmethod
    def from_json(cls, document: dict[str, Any]) -> "AgentCard":
        return cls.model_validate(document)

    def get_skill(self, skill_id: str) -> AgentSkill | None:
        for skill in self.skills:
            if skill.id == skill_id:
                return skill
        return None


__all__ = ["AgentCard", "AgentCapabilities", "AgentSkill"]
