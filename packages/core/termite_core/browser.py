"""External browser launching for clicked URLs."""

from __future__ import annotations

import logging
import shutil
import subprocess

logger = logging.getLogger("termite.browser")


def launch_browser(browser: str | None, url: str) -> None:
    if not browser:
        logger.warning("browser not set, can't open url", extra={"event": "browser_missing"})
        return

    executable = shutil.which(browser)
    if executable is None:
        logger.warning(f"error launching '{browser}': not found in PATH", extra={"event": "browser_failed"})
        return

    try:
        subprocess.Popen(
            [executable, url],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        logger.warning(f"error launching '{browser}': {exc}", extra={"event": "browser_failed"})
        return
    logger.info(f"opened {url} with {browser}", extra={"event": "browser_launched"})
