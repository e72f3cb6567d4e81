"""
Shared CLI utilities for common command-line patterns.
"""

from __future__ import annotations

import sys


def status_stream(json_output):
    """Where human-readable messages go; stdout stays pure JSON in JSON mode."""
    return sys.stderr if json_output else sys.stdout


def confirm_action(message, skip_prompt=False, default=False, stream=None):
    """
    Prompt user to confirm an action.

    Args:
        message: Prompt message to display to the user
        skip_prompt: If True, skip confirmation and return True
        default: Answer assumed when the user just presses Enter
        stream: Where to write the prompt instead of stdout

    Returns:
        bool: True if user confirmed or prompt was skipped, False otherwise
    """
    if skip_prompt:
        return True

    try:
        if stream is None:
            response = input(message)
        else:
            print(message, end="", file=stream, flush=True)
            response = input()
    except EOFError:
        print("\nConfirmation not received.", file=stream)
        return False

    response = response.strip().lower()
    if not response:
        return default
    return response in {"y", "yes"}
