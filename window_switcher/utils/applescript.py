"""AppleScript execution utilities."""

import subprocess
from typing import List, Optional, Tuple

from ..exceptions import AppleScriptError

APPLESCRIPT = "AppleScript"
JAVASCRIPT = "JavaScript"


def escape_applescript_string(text: str) -> str:
    """
    Escape special characters for AppleScript string literals.

    Args:
        text: String to escape

    Returns:
        Escaped string safe for use in AppleScript
    """
    # Escape backslashes first (must be first)
    text = text.replace("\\", "\\\\")
    # Escape double quotes
    text = text.replace('"', '\\"')
    # Escape newlines
    text = text.replace("\n", "\\n")
    # Escape carriage returns
    text = text.replace("\r", "\\r")
    # Escape tabs
    text = text.replace("\t", "\\t")
    return text


class AppleScriptExecutor:
    """Centralized osascript execution with standardized error handling."""

    def __init__(self, timeout: Optional[float] = None):
        """
        Initialize the AppleScript executor.

        Args:
            timeout: Seconds to wait for each osascript call (None = no limit)
        """
        self.timeout = timeout

    def _command(self, script: str, language: str) -> List[str]:
        if language == APPLESCRIPT:
            return ["osascript", "-e", script]
        return ["osascript", "-l", language, "-e", script]

    def execute(self, script: str, check: bool = False, language: str = APPLESCRIPT) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Execute an AppleScript or JXA script.

        Args:
            script: Script source to execute
            check: If True, raise CalledProcessError on non-zero exit code
            language: "AppleScript" or "JavaScript"

        Returns:
            Tuple of (success, stdout, stderr)
            - success: True if return code is 0, False otherwise
            - stdout: Standard output (None if empty)
            - stderr: Standard error (None if empty)
        """
        try:
            result = subprocess.run(
                self._command(script, language),
                capture_output=True,
                text=True,
                check=check,
                timeout=self.timeout
            )

            success = result.returncode == 0
            stdout = result.stdout.strip() if result.stdout.strip() else None
            stderr = result.stderr.strip() if result.stderr.strip() else None

            return success, stdout, stderr
        except subprocess.CalledProcessError as e:
            return False, e.stdout.strip() if e.stdout else None, e.stderr.strip() if e.stderr else None
        except subprocess.TimeoutExpired:
            return False, None, f"osascript timed out after {self.timeout}s"
        except Exception as e:
            return False, None, str(e)

    def execute_javascript(self, script: str) -> Tuple[bool, Optional[str], Optional[str]]:
        """Execute a JavaScript for Automation script."""
        return self.execute(script, language=JAVASCRIPT)

    def execute_or_raise(self, script: str) -> Optional[str]:
        """
        Execute an AppleScript command, raising on failure.

        Args:
            script: AppleScript code to execute

        Returns:
            Standard output or None

        Raises:
            AppleScriptError: If osascript exits non-zero or cannot be run
        """
        success, stdout, stderr = self.execute(script)
        if not success:
            raise AppleScriptError(stderr or "osascript failed", stderr=stderr)
        return stdout
