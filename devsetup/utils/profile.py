"""Idempotent edits to a shell profile such as ~/.zshrc."""

import logging
import re
from pathlib import Path
from typing import Optional, Union

from devsetup.engine.runner import ActionRunner

logger = logging.getLogger(__name__)


class ShellProfile:
    """
    A shell profile file that may be edited repeatedly without duplicating content.

    Blocks are appended only when their marker text is absent, and
    ``KEY=value`` assignments are rewritten in place instead of appended twice.
    All reads and writes go through the ActionRunner.
    """

    def __init__(self, path: Union[str, Path], runner: ActionRunner, owner: Optional[str] = None):
        """
        Args:
            path: Profile file path
            runner: ActionRunner used for file access
            owner: User that should own the file after edits (applied when running as root)
        """
        self.path = str(path)
        self.runner = runner
        self.owner = owner

    def ensure_exists(self) -> bool:
        """Create an empty profile if missing. Returns True if it was created."""
        if self.runner.file_exists(self.path):
            return False
        self._write('')
        logger.info("Created %s", self.path)
        return True

    def read(self) -> str:
        return self.runner.read_file(self.path)

    def contains(self, marker: str) -> bool:
        """True if any line of the profile contains ``marker``."""
        return any(marker in line for line in self.read().splitlines())

    def append_block_once(self, block: str, marker: str) -> bool:
        """Append ``block`` unless ``marker`` is already present.

        Returns:
            True if the block was appended

        Raises:
            ValueError: If ``block`` doesn't contain ``marker``, which would
                append it again on every run
        """
        if not marker or marker not in block:
            raise ValueError(f"Profile block must contain its marker {marker!r}")

        if self.contains(marker):
            logger.info("%s already contains %r, skipping append", self.path, marker)
            return False

        content = self.read()
        prefix = '' if not content or content.endswith('\n') else '\n'
        text = block if block.endswith('\n') else block + '\n'
        self._write(content + prefix + text)
        logger.info("Appended block with marker %r to %s", marker, self.path)
        return True

    def set_assignment(self, key: str, value: str) -> str:
        """Set ``key=value`` at line start, replacing an existing assignment.

        Returns:
            'unchanged', 'replaced' or 'appended'
        """
        line = f"{key}={value}"
        pattern = re.compile(rf"^{re.escape(key)}=.*$", re.MULTILINE)
        content = self.read()

        if pattern.search(content):
            updated = pattern.sub(lambda _: line, content)
            if updated == content:
                return 'unchanged'
            self._write(updated)
            return 'replaced'

        prefix = '' if not content or content.endswith('\n') else '\n'
        self._write(f"{content}{prefix}{line}\n")
        return 'appended'

    def _write(self, content: str) -> None:
        self.runner.write_file(self.path, content, owner=self.owner)
