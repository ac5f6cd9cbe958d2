"""Settings module providing configuration management for the rotation engine.

Built on Pydantic Settings. Each settings class owns an environment
variable prefix; the ``Settings`` aggregate nests them.

Architecture:
    1. Base Layer (base.py):
       - RotationBaseSettings: shared model_config and retry fields

    2. Domain Settings:
       - source.py: SAP OData snapshot source (``SAP_`` prefix)
       - rotation.py: calculator and fan-out behavior (``ROTATION_`` prefix)

    3. Main Aggregator (main.py):
       - Settings: aggregates the domain settings plus log level
       - load_settings(): builds a fresh instance on every call

Configuration Sources (precedence order):
    1. Keyword overrides passed to the constructor
    2. Environment Variables
    3. ``.env`` file
    4. Default Values in code

Environment Variable Naming:
    - Format: [PREFIX_]SETTING_NAME
    - Case: UPPER_SNAKE_CASE (matched case-insensitively)
    - Nested: Use double underscore __ (e.g., ROTATION__MAX_CONCURRENCY
      when read through the aggregate)

Quick Start:
    >>> from workforce_rotation.settings import load_settings
    >>> settings = load_settings()
    >>> settings.rotation.max_concurrency
    4
"""

from .base import RotationBaseSettings
from .main import Settings, load_settings
from .rotation import RotationSettings
from .source import SnapshotSourceSettings

__all__ = [
    "RotationBaseSettings",
    "Settings",
    "load_settings",
    "RotationSettings",
    "SnapshotSourceSettings",
]
