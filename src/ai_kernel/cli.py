"""Command-line interface for the AI kernel.

This module provides a CLI for exercising the kernel without a notebook host:
replaying a recorded agent event stream through one execution, printing the
kernel info reply, and printing the display_data tool declaration.
"""

import argparse
import asyncio
import json
import logging
import sys

import structlog

from ai_kernel.agent import ScriptedAgentManager
from ai_kernel.config import Config, LoggingConfig, load_config
from ai_kernel.display import ConsoleSink, RecordingSink
from ai_kernel.events import AgentEventError
from ai_kernel.kernel import AIKernel
from ai_kernel.tools import create_display_data_tool

DEFAULT_REPLAY_PROMPT = "Replay recorded agent events"


def _configure_logging(config: LoggingConfig) -> None:
    """Configure structlog to write to stderr.

    Args:
        config: Logging configuration (level and json/text format)
    """
    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if config.log_format.lower() == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.log_level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured argument parser with all subcommands
    """
    parser = argparse.ArgumentParser(
        prog="ai-kernel",
        description="Render AI agent event streams as notebook cell output",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file (.env format)",
        metavar="FILE",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Replay command - run one execution against a recorded event stream
    replay_parser = subparsers.add_parser(
        "replay", help="Run one cell execution against a recorded event stream"
    )
    replay_parser.add_argument("file", type=str, help="JSONL file with one agent event per line")
    replay_parser.add_argument(
        "--prompt",
        type=str,
        default=DEFAULT_REPLAY_PROMPT,
        help="Cell text to execute (default: a fixed replay prompt)",
    )
    replay_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    # Info command - print kernel info for the configured provider
    subparsers.add_parser("info", help="Print the kernel info reply for the configured provider")

    # Tool schema command - print the display_data tool declaration
    schema_parser = subparsers.add_parser(
        "tool-schema", help="Print the display_data tool declaration as JSON"
    )
    schema_parser.add_argument(
        "--mime-type",
        dest="mime_types",
        action="append",
        metavar="TYPE",
        help="MIME type the frontend can render (repeatable)",
    )

    return parser


def cmd_replay(args: argparse.Namespace, config: Config) -> int:
    """Replay a recorded event stream through one execution.

    Args:
        args: Parsed command-line arguments
        config: Application configuration

    Returns:
        Exit code (0 if the execution reply is ok, 1 otherwise)
    """
    try:
        agent = ScriptedAgentManager.from_jsonl(args.file)
    except (OSError, AgentEventError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    provider_name = config.provider.name if config.provider else "Replay"
    model_name = config.provider.model if config.provider else args.file

    sink: RecordingSink = ConsoleSink() if args.format == "text" else RecordingSink()
    kernel = AIKernel(agent, sink, provider_name, model_name, config=config.kernel)
    reply = asyncio.run(kernel.execute_request(args.prompt))

    if isinstance(sink, ConsoleSink):
        sink.render()
        if reply.status == "error":
            print(f"{reply.ename}: {reply.evalue}", file=sys.stderr)
    else:
        output = {
            "operations": [op.model_dump(exclude_none=True) for op in sink.operations],
            "reply": reply.to_content(),
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))

    return 0 if reply.status == "ok" else 1


def cmd_info(args: argparse.Namespace, config: Config) -> int:
    """Print the kernel info reply and kernel spec names for the configured provider.

    Args:
        args: Parsed command-line arguments
        config: Application configuration

    Returns:
        Exit code (0 for success, 1 if no provider is configured)
    """
    provider = config.provider
    if provider is None:
        print("Error: No AI provider configured (set AI_PROVIDER_ID)", file=sys.stderr)
        return 1

    agent = ScriptedAgentManager([], configured=provider.is_usable)
    kernel = AIKernel(agent, RecordingSink(), provider.name, provider.model, config=config.kernel)

    output = {
        "kernel_name": provider.kernel_name,
        "display_name": provider.display_name,
        "configured": provider.is_usable,
        "kernel_info": kernel.kernel_info_request(),
    }
    print(json.dumps(output, indent=2))
    return 0


def cmd_tool_schema(args: argparse.Namespace, config: Config) -> int:
    tool = create_display_data_tool(args.mime_types)
    print(json.dumps(tool.to_declaration(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Check if a command was provided
    if not args.command:
        parser.print_help()
        return 1

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    _configure_logging(config.logging)

    # Dispatch to command handler
    if args.command == "replay":
        return cmd_replay(args, config)
    elif args.command == "info":
        return cmd_info(args, config)
    elif args.command == "tool-schema":
        return cmd_tool_schema(args, config)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
