"""Configuration management for the AI kernel.

This module handles loading and validating configuration from environment
variables. It provides type-safe configuration for the AI provider backing
a kernel, the kernel's rendering behaviour, and logging.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_AUTO_APPROVE_REASON = "Auto-approved in AI kernel"


@dataclass(frozen=True)
class ProviderConfig:
    """Configuration for the AI provider a kernel talks to.

    Attributes:
        id: Provider configuration identifier (required)
        name: Human-readable provider name (required)
        provider: Provider backend type (e.g., anthropic, openai)
        model: Model name (required)
        api_key: API key for the provider (optional; required to be usable)

    Example:
        >>> config = ProviderConfig(
        ...     id="claude",
        ...     name="Anthropic",
        ...     provider="anthropic",
        ...     model="claude-sonnet-4-5",
        ...     api_key="sk-..."
        ... )
        >>> config.kernel_name
        'ai-claude'
    """

    id: str
    name: str
    provider: str
    model: str
    api_key: str | None = None

    def __post_init__(self) -> None:
        """Validate provider configuration after initialization.

        Raises:
            ValueError: If required fields are empty
        """
        if not self.id or not self.id.strip():
            raise ValueError("Provider id cannot be empty")
        if not self.name or not self.name.strip():
            raise ValueError("Provider name cannot be empty")
        if not self.provider or not self.provider.strip():
            raise ValueError("Provider type cannot be empty")
        if not self.model or not self.model.strip():
            raise ValueError("Provider model cannot be empty")

    @property
    def kernel_name(self) -> str:
        """Kernel name registered for this provider."""
        return f"ai-{self.id}"

    @property
    def display_name(self) -> str:
        """Kernel display name shown to users."""
        return f"AI: {self.name} ({self.model})"

    @property
    def signature(self) -> str:
        """Identity of the provider metadata that affects the kernel spec."""
        return f"{self.id}::{self.name}::{self.model}"

    @property
    def is_usable(self) -> bool:
        """Whether the provider has the credentials needed for agent calls."""
        return bool(self.api_key and self.api_key.strip())


@dataclass(frozen=True)
class KernelConfig:
    """Configuration for kernel rendering behaviour.

    Attributes:
        echo_suppression: Whether to hold back text that repeats a rich
            display payload (default: True)
        auto_approve_reason: Rationale sent when auto-approving tool calls
        prompt_suffix: Whether to append the kernel context to prompts
            (default: True)

    Example:
        >>> config = KernelConfig(echo_suppression=False)
    """

    echo_suppression: bool = True
    auto_approve_reason: str = DEFAULT_AUTO_APPROVE_REASON
    prompt_suffix: bool = True

    def __post_init__(self) -> None:
        """Validate kernel configuration after initialization.

        Raises:
            ValueError: If auto_approve_reason is empty
        """
        if not self.auto_approve_reason or not self.auto_approve_reason.strip():
            raise ValueError("auto_approve_reason cannot be empty")


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for logging.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json, text)

    Example:
        >>> config = LoggingConfig(log_level="INFO", log_format="json")
    """

    log_level: str
    log_format: str

    def __post_init__(self) -> None:
        """Validate logging configuration after initialization.

        Raises:
            ValueError: If log_level or log_format is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {self.log_level}")

        valid_formats = {"json", "text"}
        if self.log_format.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of {valid_formats}, got {self.log_format}")


@dataclass(frozen=True)
class Config:
    """Complete configuration for the AI kernel.

    Attributes:
        provider: AI provider configuration, or None if no provider is configured
        kernel: Kernel rendering configuration
        logging: Logging configuration

    Example:
        >>> config = load_config()
        >>> print(config.kernel.echo_suppression)
    """

    provider: ProviderConfig | None
    kernel: KernelConfig
    logging: LoggingConfig


def load_config(env_file: str | None = None) -> Config:
    """Load configuration from environment variables.

    This function loads environment variables (optionally from a .env file)
    and constructs a complete Config object with all necessary settings.

    Args:
        env_file: Optional path to .env file to load (default: .env in current directory)

    Returns:
        Complete Config object with all sub-configurations

    Raises:
        ValueError: If environment variables are invalid

    Environment Variables:
        Provider (omitted entirely when AI_PROVIDER_ID is unset):
            - AI_PROVIDER_ID: Provider configuration id
            - AI_PROVIDER_NAME: Provider display name (default: the id)
            - AI_PROVIDER: Provider backend type (default: anthropic)
            - AI_MODEL: Model name (required when AI_PROVIDER_ID is set)
            - AI_API_KEY: API key (optional)

        Kernel:
            - AI_KERNEL_ECHO_SUPPRESSION: Suppress echoed payloads (default: true)
            - AI_KERNEL_AUTO_APPROVE_REASON: Approval rationale
            - AI_KERNEL_PROMPT_SUFFIX: Append kernel context to prompts (default: true)

        Logging:
            - LOG_LEVEL: Logging level (default: INFO)
            - LOG_FORMAT: Log format (default: json)

    Example:
        >>> config = load_config()  # Loads from .env
        >>> config = load_config(".env.test")  # Loads from custom file
    """
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    provider: ProviderConfig | None = None
    provider_id = os.getenv("AI_PROVIDER_ID")
    if provider_id is not None:
        provider = ProviderConfig(
            id=provider_id,
            name=os.getenv("AI_PROVIDER_NAME", provider_id),
            provider=os.getenv("AI_PROVIDER", "anthropic"),
            model=_get_required_env("AI_MODEL"),
            api_key=os.getenv("AI_API_KEY"),
        )

    kernel = KernelConfig(
        echo_suppression=_get_bool_env("AI_KERNEL_ECHO_SUPPRESSION", True),
        auto_approve_reason=os.getenv(
            "AI_KERNEL_AUTO_APPROVE_REASON", DEFAULT_AUTO_APPROVE_REASON
        ),
        prompt_suffix=_get_bool_env("AI_KERNEL_PROMPT_SUFFIX", True),
    )

    logging = LoggingConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_format=os.getenv("LOG_FORMAT", "json").lower(),
    )

    return Config(provider=provider, kernel=kernel, logging=logging)


def _get_required_env(var_name: str) -> str:
    """Get a required environment variable or raise an error.

    Args:
        var_name: Name of the environment variable

    Returns:
        Value of the environment variable

    Raises:
        ValueError: If the environment variable is not set
    """
    value = os.getenv(var_name)
    if value is None:
        raise ValueError(
            f"Required environment variable {var_name} is not set. "
            f"Please set it in your environment or .env file."
        )
    return value


def _get_bool_env(var_name: str, default: bool) -> bool:
    value = os.getenv(var_name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")
