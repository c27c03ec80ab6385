"""Project configuration for rockloaders.

Settings live in ``rockloaders.yml``::

    root_dir: .
    artifact: site/assets/rockloaders.min.css
    debug: true
    internal_loaders: [rocket]
    loaders:
      checkout: site/templates/loaders
    loader_dirs:
      - site/templates/loaders/extra
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from .constants import DEFAULT_ARTIFACT_PATH, DEFAULT_CACHE_PATH, DEFAULT_ROOT_MARKER
from .exceptions import ConfigError
from .registry.loader_registry import LoaderRegistry

CONFIG_FILE = "rockloaders.yml"


@dataclass
class LoadersConfig:
    """Configuration for loader registration and stylesheet builds."""
    root_dir: str = "."
    root_marker: Optional[str] = DEFAULT_ROOT_MARKER
    artifact: str = DEFAULT_ARTIFACT_PATH
    debug: bool = False  # timestamp checks instead of the stored fingerprint
    compress: bool = True
    force_recompile: bool = False
    compiler: str = "lesscpy"
    cache: str = "file"
    cache_path: str = DEFAULT_CACHE_PATH
    internal_loaders: List[str] = field(default_factory=list)
    loaders: Dict[str, str] = field(default_factory=dict)
    loader_dirs: List[str] = field(default_factory=list)

    @classmethod
    def from_yml(cls, path: Union[str, Path] = CONFIG_FILE, **overrides) -> 'LoadersConfig':
        """Create configuration from a YAML file with overrides.

        Args:
            path: Config file; a missing file means defaults.
            **overrides: Values that win over the file (None is ignored).

        Raises:
            ConfigError: If the file cannot be read or has invalid values.
        """
        config = cls()
        path = Path(path)

        if path.exists():
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Cannot read {path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"{path} must contain a mapping")

            known = {f.name for f in fields(cls)}
            for key, value in data.items():
                if key in known:
                    setattr(config, key, value)

            root = Path(str(config.root_dir))
            if not root.is_absolute():
                config.root_dir = str(path.parent / root)

        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)

        config.validate()
        return config

    def validate(self) -> None:
        """Raises ConfigError for values of the wrong shape."""
        if not isinstance(self.loaders, dict):
            raise ConfigError("'loaders' must map loader names to directories")
        for name in ('internal_loaders', 'loader_dirs'):
            if not isinstance(getattr(self, name), list):
                raise ConfigError(f"'{name}' must be a list")
        for name in ('debug', 'compress', 'force_recompile'):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"'{name}' must be true or false")

    @property
    def root_path(self) -> Path:
        return Path(self.root_dir).resolve()

    @property
    def artifact_path(self) -> Path:
        return self.root_path / self.artifact

    @property
    def cache_file(self) -> Path:
        return self.root_path / self.cache_path

    def create_registry(self) -> LoaderRegistry:
        """Registry with bundled, explicit and scanned loaders attached.

        Raises:
            InvalidPath: If a configured loader cannot be resolved.
        """
        registry = LoaderRegistry(self.root_path, root_marker=self.root_marker)
        for name in self.internal_loaders:
            registry.attach_by_name(name)
        if self.loaders:
            registry.add(self.loaders)
        for directory in self.loader_dirs:
            registry.add_all(directory)
        return registry
