"""CLI output utilities and formatting."""

from colorama import Fore, Style

# Fixed user-facing messages
NOT_A_REPOSITORY = "Not in an initialized vcs directory."
ALREADY_INITIALIZED = "Already in a vcs directory."
INCORRECT_OPERANDS = "Incorrect operands."
FILE_DOES_NOT_EXIST = "File does not exist."
MISSING_MESSAGE = "Please enter a commit message."
NOTHING_TO_COMMIT = "No changes added to the commit"
NOT_TRACKED = "No reason to remove the file."
OUTSIDE_REPOSITORY = "Path is outside the repository."
NO_COMMIT_WITH_ID = "No commit with ID {} exists."

BANNER = f"""
{Fore.CYAN}{Style.BRIGHT}minivcs{Style.RESET_ALL} - {Fore.WHITE}a Git-like version control system{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"
