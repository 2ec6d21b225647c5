"""Base command classes for the privacy CLI."""

from abc import ABC, abstractmethod
from cli.core.context import Context
from cli.core.utils import EXIT_ERROR


class BaseCommand(ABC):
    """Base class for all commands."""

    def __init__(self, ctx: Context):
        self.ctx = ctx
        self.session = ctx.session
        self.console = ctx.console

    @abstractmethod
    def execute(self, **kwargs) -> int:
        """Execute command. Returns exit code."""
        pass

    def handle_exception(self, e: Exception) -> int:
        """Common error handling."""
        self.ctx.stderr_console.print(f"❌ Error: {e}", style="bold red", markup=False)
        if self.ctx.verbose:
            import traceback
            self.ctx.stderr_console.print(traceback.format_exc(), style="dim", markup=False)
        return EXIT_ERROR


class BasePrivacyCommand(BaseCommand):
    """Base for commands that read or modify raw log data."""

    def get_anonymizer(self):
        """Build the log data anonymizer for the current session."""
        from privacy.manage import LogDataAnonymizer
        if self.ctx.config is None:
            return LogDataAnonymizer(self.session)
        return LogDataAnonymizer.from_config(
            self.session, self.ctx.config, location_provider=self.ctx.config.location_provider())
