"""
Platform build driver.

Runs every configured platform against the token store and writes the
resulting files.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tokensmith.config import BuildConfig, FileSpec, PlatformConfig
from tokensmith.core.errors import InvalidConfigError
from tokensmith.core.logging import LogContext, get_logger
from tokensmith.engine.filters import filter_tokens
from tokensmith.engine.formats import Dictionary, get_format
from tokensmith.engine.tokens import TokenStore, build_tree
from tokensmith.engine.transforms import TransformContext, apply_transforms, resolve_transforms

logger = get_logger(__name__)


@dataclass(frozen=True)
class BuildResult:
    """One written output file."""

    platform: str
    destination: str
    path: Path
    format: str
    token_count: int
    size: int


class TokenBuilder:
    """Build every platform of a configuration.

    Manifesto:
        One command turns the token sources into every artifact the
        consumers need. The configuration is a value handed in at
        construction; the builder keeps no state between platforms
        besides the token store it loaded once.

    Architecture:
        ```
        TokenBuilder
              │
              ├──► TokenStore.load(source globs)      (once)
              │
              └──► For each platform:
                        │
                        ├──► resolve_transforms() ──► apply_transforms()
                        │
                        └──► For each file:
                                  │
                                  ├──► filter_tokens(file.filter)
                                  ├──► format(dictionary, platform, file)
                                  └──► write build_path/destination
        ```

    Guardrails:
        - Do NOT catch engine errors here
          ✅ Malformed sources, failed transforms and formats stop the build
        - Do NOT let one platform's transforms leak into another
          ✅ Each platform transforms the untouched store

    Examples:
        >>> builder = TokenBuilder(default_build_config(Path(".")))
        >>> results = builder.build_all_platforms()
        >>> [r.destination for r in results][:2]
        ['variables.json', 'theme-light.scss']
    """

    def __init__(self, config: BuildConfig, store: TokenStore | None = None):
        self.config = config
        self._store = store

    @property
    def store(self) -> TokenStore:
        if self._store is None:
            self._store = TokenStore.load(self.config.root, self.config.source)
            logger.info("tokens_loaded", count=len(self._store))
        return self._store

    def build_platform(self, name: str) -> list[BuildResult]:
        """Transform the store for one platform and write all its files."""
        platform = self.config.platforms.get(name)
        if platform is None:
            available = ", ".join(self.config.platforms)
            raise InvalidConfigError("platform", name, f"Unknown platform '{name}'. Available: {available}")

        with LogContext(platform=name):
            transforms = resolve_transforms(platform)
            context = TransformContext(root=self.config.root, platform=platform)
            tokens = apply_transforms(self.store, transforms, context)
            tree = build_tree(tokens)

            results = [self._write_file(platform, file, tokens, tree) for file in platform.files]
            logger.info("platform_built", files=len(results))
        return results

    def build_all_platforms(self, names: list[str] | None = None) -> list[BuildResult]:
        """Build the given platforms (all, in configuration order, if None)."""
        results: list[BuildResult] = []
        for name in names or list(self.config.platforms):
            results.extend(self.build_platform(name))
        return results

    def _write_file(self, platform: PlatformConfig, file: FileSpec, tokens, tree) -> BuildResult:
        selected = tuple(filter_tokens(tokens, file.filter))
        formatter = get_format(file.format)
        content = formatter(Dictionary(tokens=selected, tree=tree), platform, file)

        output_path = self.config.root / platform.build_path / file.destination
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")

        size = len(content.encode("utf-8"))
        logger.info(
            "file_written",
            path=str(output_path),
            format=file.format,
            tokens=len(selected),
            bytes=size,
        )
        return BuildResult(
            platform=platform.name,
            destination=file.destination,
            path=output_path,
            format=file.format,
            token_count=len(selected),
            size=size,
        )
