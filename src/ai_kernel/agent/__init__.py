"""
Agent integration for the AI kernel.

This module defines the interface the kernel uses to drive an agent, and a
scripted implementation that replays recorded event streams.

Usage:
    >>> from ai_kernel.agent import ScriptedAgentManager
    >>> agent = ScriptedAgentManager.from_jsonl("session.jsonl")
    >>> agent.has_valid_config()
    True
"""

from ai_kernel.agent.base import AgentManager, AgentManagerError
from ai_kernel.agent.scripted import ScriptedAgentManager

__all__ = [
    "AgentManager",
    "AgentManagerError",
    "ScriptedAgentManager",
]
