"""ActionRunner interface - all side effects go here."""

import logging
import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class ActionRunner(ABC):
    """Interface for executing side effects."""

    @abstractmethod
    def run_shell(self, command: List[str], cwd: Optional[str] = None,
                  env: Optional[Dict[str, str]] = None, input_text: Optional[str] = None) -> Dict[str, Any]:
        """Execute a command.

        Args:
            command: Argument vector (no shell interpretation)
            cwd: Working directory
            env: Extra environment variables layered over os.environ
            input_text: Text piped to the command's stdin

        Returns:
            Dict with 'stdout', 'stderr' and 'returncode'
        """
        pass

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """Check if a file or directory exists at given path."""
        pass

    @abstractmethod
    def read_file(self, path: str) -> str:
        """Return a text file's content, or '' if it doesn't exist."""
        pass

    @abstractmethod
    def write_file(self, path: str, content: str, owner: Optional[str] = None) -> None:
        """Write content to a file, creating parent directories.

        Args:
            path: Path to file to write
            content: Content to write to file
            owner: User that should own the file afterwards
        """
        pass

    @abstractmethod
    def display(self, message: str, end: str = '\n') -> None:
        """Display a message to the user.

        Args:
            message: Text to display (may contain newlines)
            end: Line terminator; '' lets the caller redraw in place
        """
        pass

    @abstractmethod
    def get_input(self, prompt: str) -> str:
        """Get one line of input from the user.

        Args:
            prompt: Text shown before the cursor

        Returns:
            User's input string, stripped
        """
        pass


class RealActionRunner(ActionRunner):
    """Real implementation - actually does things."""

    def __init__(self, verbose: bool = False):
        """Initialize with optional verbose mode.

        Args:
            verbose: If True, log full command output
        """
        self.verbose = verbose or bool(os.environ.get('DEVSETUP_VERBOSE'))

    def run_shell(self, command: List[str], cwd: Optional[str] = None,
                  env: Optional[Dict[str, str]] = None, input_text: Optional[str] = None) -> Dict[str, Any]:
        logger.info("Running command: %s (cwd=%s)", ' '.join(command), cwd or os.getcwd())

        full_env = None
        if env:
            full_env = os.environ.copy()
            full_env.update(env)

        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                env=full_env,
                input=input_text,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            logger.warning("Command not found: %s", command[0])
            return {
                'stdout': '',
                'stderr': f"ERROR: {e}",
                'returncode': 127  # Standard "command not found" exit code
            }
        except OSError as e:
            logger.exception("Failed to start command: %s", command)
            return {
                'stdout': '',
                'stderr': f"ERROR: {type(e).__name__}: {e}",
                'returncode': 1
            }

        logger.info("Command exited with %s", result.returncode)
        if self.verbose:
            if result.stdout:
                logger.debug("stdout:\n%s", result.stdout)
            if result.stderr:
                logger.debug("stderr:\n%s", result.stderr)

        return {
            'stdout': result.stdout,
            'stderr': result.stderr,
            'returncode': result.returncode
        }

    def file_exists(self, path: str) -> bool:
        return os.path.exists(path)

    def read_file(self, path: str) -> str:
        if not os.path.exists(path):
            return ''
        with open(path, 'r') as f:
            return f.read()

    def write_file(self, path: str, content: str, owner: Optional[str] = None) -> None:
        """Write content to a file."""
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, 'w') as f:
            f.write(content)
        if owner:
            try:
                shutil.chown(path, user=owner)
            except (LookupError, OSError) as e:
                logger.debug("Could not chown %s to %s: %s", path, owner, e)

    def display(self, message: str, end: str = '\n') -> None:
        """Print message to stdout."""
        print(message, end=end, flush=True)

    def get_input(self, prompt: str) -> str:
        """Read one line from stdin."""
        return input(prompt).strip()


class MockActionRunner(ActionRunner):
    """Mock for testing - records calls."""

    def __init__(self):
        self.calls = []
        self.responses = {}
        self.input_queue = []  # Pre-scripted user inputs for testing
        self.existing_paths = set()
        self.files = {}  # path -> content written through write_file

    def run_shell(self, command: List[str], cwd: Optional[str] = None,
                  env: Optional[Dict[str, str]] = None, input_text: Optional[str] = None) -> Dict[str, Any]:
        self.calls.append(('run_shell', command, cwd))

        if 'run_shell' in self.responses:
            response_dict = self.responses['run_shell']

            # Tuple keys match exact commands; anything else is a default response
            command_tuple = tuple(command)
            if isinstance(response_dict, dict) and command_tuple in response_dict:
                return response_dict[command_tuple]
            if isinstance(response_dict, dict) and 'returncode' in response_dict:
                return response_dict

        # Default empty response
        return {'stdout': '', 'stderr': '', 'returncode': 0}

    def file_exists(self, path: str) -> bool:
        self.calls.append(('file_exists', path))
        return path in self.existing_paths or path in self.files

    def read_file(self, path: str) -> str:
        self.calls.append(('read_file', path))
        return self.files.get(path, '')

    def write_file(self, path: str, content: str, owner: Optional[str] = None) -> None:
        """Record write_file call and keep the content in memory."""
        self.calls.append(('write_file', path, content))
        self.files[path] = content

    def display(self, message: str, end: str = '\n') -> None:
        """Capture display call for test verification."""
        self.calls.append(('display', message))

    def get_input(self, prompt: str) -> str:
        """Return next value from input_queue."""
        self.calls.append(('get_input', prompt))

        if not self.input_queue:
            raise EOFError(f"No scripted input left for prompt: {prompt!r}")
        return self.input_queue.pop(0).strip()

    @property
    def commands(self) -> List[List[str]]:
        """All commands passed to run_shell, in order."""
        return [call[1] for call in self.calls if call[0] == 'run_shell']

    @property
    def displayed(self) -> List[str]:
        """All messages passed to display, in order."""
        return [call[1] for call in self.calls if call[0] == 'display']
