"""
Models for the agent runtime boundary.

The agent runtime invokes providers with a runtime context, the message
being answered and an optional conversation state.
"""

from typing import Any, Dict, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

State = Dict[str, Any]


class Character(BaseModel):
    """The agent persona; its name is used in rendered output."""
    model_config = ConfigDict(extra="allow")
    
    name: str


class AgentRuntime(BaseModel):
    """Runtime context supplied by the agent host."""
    model_config = ConfigDict(extra="allow")
    
    character: Character


class Memory(BaseModel):
    """A conversational message."""
    model_config = ConfigDict(extra="allow")
    
    text: str = ""


@runtime_checkable
class Provider(Protocol):
    """Anything that can supply context text to the agent."""
    
    async def get(
        self,
        runtime: AgentRuntime,
        message: Memory,
        state: Optional[State] = None
    ) -> str:
        ...
