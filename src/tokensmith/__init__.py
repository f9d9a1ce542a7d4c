"""
tokensmith - design token builds and icon tooling.

- tokensmith.engine: token loading, transforms, filters and formats
- tokensmith.icons: icon type generation and icon registry reconciliation
- tokensmith.config: build configuration (defaults plus optional YAML overrides)
"""

__version__ = "0.1.0"

from tokensmith.config import BuildConfig, default_build_config, load_build_config
from tokensmith.core.errors import TokensmithError
from tokensmith.engine import TokenBuilder
from tokensmith.icons import generate_icon_types, run_reconciliation

__all__ = [
    "__version__",
    "BuildConfig",
    "default_build_config",
    "load_build_config",
    "TokenBuilder",
    "TokensmithError",
    "generate_icon_types",
    "run_reconciliation",
]
