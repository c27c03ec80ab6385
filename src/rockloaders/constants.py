"""Shared constants for loader registration and stylesheet builds.

Generated stylesheets carry no timestamps: the output is a pure function of
the registry and the fragment contents, so rebuilding an unchanged registry
is byte-identical.
"""

from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent

# Fragment file extensions
STYLE_EXTENSION = "less"
MARKUP_EXTENSION = "html"

# HTML attribute carrying the loader name, on <body> and on each container
LOADER_ATTRIBUTE = "rockloader"

# Well-known root marker of the host directory convention
DEFAULT_ROOT_MARKER = "site"

# Bundled assets
STUBS_DIR = PACKAGE_DIR / "stubs"
PREFIX_STUB = STUBS_DIR / "prefix.less"
DEFAULT_MARKUP_STUB = STUBS_DIR / "loader.html"
BUNDLED_LOADERS_DIR = PACKAGE_DIR / "loaders"

# Artifact and fingerprint store defaults
DEFAULT_ARTIFACT_PATH = "site/assets/rockloaders.min.css"
DEFAULT_CACHE_PATH = ".rockloaders-cache.json"
FINGERPRINT_CACHE_KEY = "rockloaders"
