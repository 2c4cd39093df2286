"""Diagnostic classification for action output.

Package managers write plenty of harmless text to stderr (warnings about the
unstable CLI interface, download progress, notices). Only lines that start with
an error marker count as failures. This is deliberately permissive: a real
failure that does not print such a line is reported as success.
"""

from typing import Callable, List, Tuple

Classifier = Callable[[str], bool]

ERROR_PREFIXES: Tuple[str, ...] = ('E:', 'ERROR')


def error_lines(text: str, prefixes: Tuple[str, ...] = ERROR_PREFIXES) -> List[str]:
    """Return the lines of ``text`` that start with an error marker."""
    return [line for line in text.splitlines() if line.startswith(prefixes)]


def default_classifier(text: str) -> bool:
    """True (succeeded) unless some line starts with ``E:`` or ``ERROR``."""
    return not error_lines(text)


def prefix_classifier(*prefixes: str) -> Classifier:
    """Build a classifier that fails on lines starting with any of ``prefixes``."""
    def classify(text: str) -> bool:
        return not error_lines(text, tuple(prefixes))
    return classify
