"""Injection of loader markup and stylesheet link into an HTML page."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from ..registry.paths import normalize_separators


def stylesheet_url(artifact_path: Union[str, Path], root_dir: Union[str, Path], root_url: str = "/") -> str:
    """Public URL of the stylesheet with a ``?v=<mtime>`` cache buster.

    Raises:
        ValueError: If the stylesheet is not inside ``root_dir``.
    """
    artifact = Path(artifact_path).resolve()
    relative = artifact.relative_to(Path(root_dir).resolve())
    url = root_url.rstrip("/") + "/" + normalize_separators(relative.as_posix())
    if artifact.is_file():
        url += f"?v={int(os.path.getmtime(artifact))}"
    return url


def inject_assets(html: str, markup: Optional[str], stylesheet_href: Optional[str]) -> str:
    """Return ``html`` with markup before ``</body>`` and the link before ``</head>``.

    Pass None to skip either part. Only the first closing tag is used;
    documents without it are left unchanged for that part.
    """
    if markup:
        html = _insert_before(html, "</body>", markup)
    if stylesheet_href:
        link = f"<link rel='stylesheet' href='{stylesheet_href}' defer>"
        html = _insert_before(html, "</head>", link)
    return html


def _insert_before(html: str, tag: str, content: str) -> str:
    idx = html.find(tag)
    if idx == -1:
        return html
    return html[:idx] + content + html[idx:]
