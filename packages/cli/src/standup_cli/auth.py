"""GitHub token lookup.

One token serves both halves of a standup run: the search API queries that
collect activity, and the GitHub Models chat-completion call that writes the
report. Whatever source is used, the token must therefore be allowed to call
GitHub Models, which a `gh auth login` session is by default.

Lookup order (first non-empty value wins):
  1. GH_TOKEN      the variable the gh CLI itself honours
  2. GITHUB_TOKEN  Actions-injected or exported by hand
  3. `gh auth token` for the stored gh CLI session
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS = ("GH_TOKEN", "GITHUB_TOKEN")
_GH_TIMEOUT_SECONDS = 5


def _token_from_env() -> str | None:
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name)
        if value:
            logger.debug("Using GitHub token from $%s.", name)
            return value
    return None


def _token_from_gh_session() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=_GH_TIMEOUT_SECONDS,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("No gh CLI session available: %s", e)
        return None

    value = result.stdout.strip() if result.returncode == 0 else ""
    if not value:
        return None
    logger.debug("Using GitHub token from the gh CLI session.")
    return value


def resolve_github_token() -> str | None:
    """Return the token for both search and GitHub Models, or None.

    Absence is not an error here; the CLI reports it as a configuration error.
    """
    return _token_from_env() or _token_from_gh_session()
