"""Prompt construction for AI kernel cells."""

AI_KERNEL_PROMPT_SUFFIX = "\n".join(
    [
        "---",
        "AI kernel context:",
        "- You are responding in a notebook AI kernel cell output.",
        "- Output appears as cell output; respond in Markdown.",
        "- Use the display_data tool to emit rich MIME outputs when helpful.",
        "- If you use display_data, do not repeat the same payload in Markdown.",
        "- Avoid chat or sidebar UI references.",
    ]
)


def build_prompt(code: str, include_suffix: bool = True) -> str:
    """Build the prompt sent to the agent for a cell.

    Args:
        code: Cell source as submitted
        include_suffix: Whether to append the kernel context block

    Returns:
        The prompt text

    Example:
        >>> build_prompt("Plot a sine wave", include_suffix=False)
        'Plot a sine wave'
    """
    if not include_suffix:
        return code
    return f"{code}\n\n{AI_KERNEL_PROMPT_SUFFIX}"
