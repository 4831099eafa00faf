"""
Exit codes for Pomodoros CLI.

Semantic exit codes so wrapper scripts can tell a clean quit from a broken
terminal or a bad option.
"""

# Success (clean quit)
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or configuration file
ERROR_INVALID_ARGS = 2

# Terminal setup/teardown, input or render failure
ERROR_TERMINAL = 3


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_TERMINAL: "ERROR_TERMINAL",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Timer exited cleanly",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or configuration",
        ERROR_TERMINAL: "Terminal error - run from an interactive terminal",
    }
    return descriptions.get(code, "Unknown error")
