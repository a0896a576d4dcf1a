"""
ai-kernel: Notebook kernel that renders AI agent event streams as cell output.

This package adapts the chunked, interleaved event stream of an AI agent
(text chunks, tool calls, approval requests, errors) into ordered, idempotent
display operations tagged with stable display identifiers, plus plain-text
stream output.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
