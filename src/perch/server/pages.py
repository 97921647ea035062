"""Built-in 404 page.

``Server.prepare()`` writes this page to ``<static_path>/404.html`` when
the project does not provide one, and the sender falls back to it if the
file disappears while the server is running.
"""

import logging
from functools import cache
from pathlib import Path

from kida import Environment

from perch.static.resolver import NOT_FOUND_FILE

logger = logging.getLogger("perch.server")

NOT_FOUND_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
  <head>
    <title>{{ title }}</title>
  </head>
  <body>{{ title }}</body>
</html>"""


@cache
def default_not_found_page(title: str = "404 Not Found") -> str:
    """Render the minimal 404 page."""
    env = Environment(autoescape=True)
    return env.from_string(NOT_FOUND_TEMPLATE).render({"title": title})


def ensure_not_found_page(static_root: str | Path) -> Path:
    """Create ``404.html`` under *static_root* unless it already exists.

    Raises:
        OSError: The page is missing and cannot be written.
    """
    page = Path(static_root) / NOT_FOUND_FILE
    if page.is_file():
        return page
    page.write_text(default_not_found_page(), encoding="utf-8")
    logger.info("Wrote default %s", page)
    return page
