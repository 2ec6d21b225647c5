"""Context class for the privacy CLI."""

import sys
from typing import Optional
from sqlalchemy.orm import Session
from rich.console import Console

from privacy.config import PrivacyConfig


class Context:
    """Shared context for CLI commands."""

    def __init__(self):
        self.session: Optional[Session] = None
        self.config: Optional[PrivacyConfig] = None
        self.verbose: bool = False
        self.console = Console()
        self.stderr_console = Console(file=sys.stderr)
