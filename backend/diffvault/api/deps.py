"""
FastAPI dependency providers.

Routes receive configuration through ``SettingsDep`` so tests can swap
the settings instance with ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from diffvault.config.settings import Settings, get_settings

SettingsDep = Annotated[Settings, Depends(get_settings)]
