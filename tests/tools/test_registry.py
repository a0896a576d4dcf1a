"""Tests for the tool registry."""

import pytest

from ai_kernel.tools import (
    Tool,
    ToolError,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolRegistry,
)


@pytest.fixture
def sample_tool():
    """Sample tool for testing."""
    return Tool(
        name="echo",
        description="Echo the input back",
        parameters_schema={"type": "object", "properties": {"text": {"type": "string"}}},
        function=lambda text: text,
    )


@pytest.fixture
def registry():
    """Create a fresh tool registry for each test."""
    return ToolRegistry()


class TestTool:
    """Tests for the Tool dataclass."""

    def test_empty_name_rejected(self):
        """Tool names cannot be blank."""
        with pytest.raises(ValueError, match="Tool name cannot be empty"):
            Tool(name="  ", description="d", parameters_schema={}, function=print)

    def test_empty_description_rejected(self):
        """Tool descriptions cannot be blank."""
        with pytest.raises(ValueError, match="Tool description cannot be empty"):
            Tool(name="t", description="", parameters_schema={}, function=print)

    def test_function_must_be_callable(self):
        """The tool function must be callable."""
        with pytest.raises(ValueError, match="must be callable"):
            Tool(name="t", description="d", parameters_schema={}, function="nope")  # type: ignore

    def test_to_declaration(self, sample_tool):
        """Declarations expose name, description and parameters."""
        assert sample_tool.to_declaration() == {
            "name": "echo",
            "description": "Echo the input back",
            "parameters": sample_tool.parameters_schema,
        }


class TestToolRegistry:
    """Tests for ToolRegistry."""

    def test_register_and_get(self, registry, sample_tool):
        """Registered tools can be retrieved by name."""
        registry.register(sample_tool)

        assert registry.get("echo") is sample_tool
        assert registry.has("echo")
        assert "echo" in registry
        assert len(registry) == 1

    def test_duplicate_registration_raises(self, registry, sample_tool):
        """A name can only be registered once."""
        registry.register(sample_tool)

        with pytest.raises(ToolRegistrationError, match="already registered"):
            registry.register(sample_tool)

    def test_get_unknown_raises(self, registry, sample_tool):
        """Unknown names raise ToolNotFoundError listing available tools."""
        registry.register(sample_tool)

        with pytest.raises(ToolNotFoundError, match="Available tools: echo"):
            registry.get("missing")

    def test_list_names_in_registration_order(self, registry, sample_tool):
        """Names are listed in registration order."""
        other = Tool(name="alpha", description="d", parameters_schema={}, function=print)
        registry.register(sample_tool)
        registry.register(other)

        assert registry.list_names() == ["echo", "alpha"]
        assert [d["name"] for d in registry.declarations()] == ["echo", "alpha"]

    def test_errors_share_base_class(self):
        """Registry errors derive from ToolError."""
        assert issubclass(ToolNotFoundError, ToolError)
        assert issubclass(ToolRegistrationError, ToolError)
