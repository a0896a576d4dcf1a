"""Tool registry for tools the kernel contributes to its agent.

Agents own tool execution; the kernel only contributes tool definitions
(such as display_data) that an agent manager registers with its model.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


class ToolError(Exception):
    """Base exception for tool-related errors."""

    pass


class ToolNotFoundError(ToolError):
    """Raised when a tool is not found in the registry."""

    pass


class ToolRegistrationError(ToolError):
    """Raised when tool registration fails."""

    pass


@dataclass(frozen=True)
class Tool:
    """A tool definition offered to the agent.

    Attributes:
        name: Unique identifier for the tool
        description: Description shown to the model
        parameters_schema: JSON schema of the tool's input
        function: The callable that implements the tool
    """

    name: str
    description: str
    parameters_schema: dict[str, Any]
    function: Callable[..., Any]

    def __post_init__(self) -> None:
        """Validate tool attributes."""
        if not self.name or not self.name.strip():
            raise ValueError("Tool name cannot be empty")
        if not self.description or not self.description.strip():
            raise ValueError("Tool description cannot be empty")
        if not callable(self.function):
            raise ValueError("Tool function must be callable")

    def to_declaration(self) -> dict[str, Any]:
        """Model-facing declaration (name, description, parameters)."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters_schema,
        }


class ToolRegistry:
    """Registry of tool definitions, keyed by name.

    Example:
        >>> registry = ToolRegistry()
        >>> register_display_data_tool(registry)
        >>> "display_data" in registry
        True
    """

    def __init__(self) -> None:
        """Initialize an empty tool registry."""
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        """Register a tool.

        Args:
            tool: The tool to register

        Raises:
            ToolRegistrationError: If a tool with the same name already exists
        """
        if tool.name in self._tools:
            raise ToolRegistrationError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool:
        """Retrieve a tool by name.

        Raises:
            ToolNotFoundError: If no tool with the given name exists
        """
        if name not in self._tools:
            raise ToolNotFoundError(
                f"Tool '{name}' not found in registry. "
                f"Available tools: {', '.join(self.list_names())}"
            )
        return self._tools[name]

    def has(self, name: str) -> bool:
        return name in self._tools

    def list_names(self) -> list[str]:
        """Registered tool names, in registration order."""
        return list(self._tools.keys())

    def declarations(self) -> list[dict[str, Any]]:
        """Declarations of all registered tools, in registration order."""
        return [tool.to_declaration() for tool in self._tools.values()]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools
