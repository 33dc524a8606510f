"""Console-aware logging for resolver checks."""

import logging

from rich.console import Console
from rich.logging import RichHandler


class ResolverCheckLogger(logging.Logger):
    """
    Logger that pairs standard logging levels with a few CLI formatting methods.

    The standard levels (debug, info, warning, error) go through a RichHandler.
    The extra methods (success, hint, rule, key_value, list_item) print directly
    to the console and are meant for the final report only.
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)

    def print(self, message: str) -> None:
        """
        Print a plain message (with Rich markup support).

        Args:
            message: Message to display
        """
        self.console.print(message)

    def colored(self, message: str, style: str = "bold cyan") -> None:
        """
        Print a message with a specific style/color.

        Args:
            message: Message to display
            style: Rich style string (e.g., "green", "red", "bold cyan", "dim")
        """
        self.print(f"[{style}]{message}[/{style}]")

    def success(self, message: str) -> None:
        """Print a success message in green with a checkmark icon."""
        self.print(f"[green]✓[/green] {message}")

    def hint(self, message: str) -> None:
        self.colored(message, "dim")

    def rule(self, title: str, style: str = "bold blue") -> None:
        """
        Print a horizontal rule with a title.

        Args:
            title: Title text for the rule
            style: Rich style string (default: "bold blue")
        """
        self.console.rule(f"[{style}]{title}")

    def key_value(self, key: str, value: object, key_style: str = "dim") -> None:
        """Print a formatted "key: value" pair."""
        self.print(f"[{key_style}]{key}:[/{key_style}] {value}")

    def list_item(self, text: str, prefix: str = "-", style: str = "") -> None:
        if style:
            self.colored(f"{prefix} {text}", style)
        else:
            self.print(f"{prefix} {text}")


def get_logger(name: str = "resolver_check") -> ResolverCheckLogger:
    """
    Get or create a ResolverCheckLogger instance.

    Args:
        name: Logger name (default: "resolver_check")

    Returns:
        ResolverCheckLogger instance
    """
    manager_class = logging.getLoggerClass()
    logging.setLoggerClass(ResolverCheckLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(manager_class)

    if not isinstance(logger, ResolverCheckLogger):
        raise TypeError(f"Logger '{name}' was already created as {type(logger).__name__}")

    return logger
