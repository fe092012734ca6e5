"""Agregador de settings do agente de artefatos.

Re-exporta settings e getters cacheados de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.control_plane import (
    DEFAULT_ENVIRONMENT_LABELS,
    DEFAULT_TENANT_DOMAIN,
    ControlPlaneSettings,
    get_control_plane_settings,
)

__all__ = [
    "DEFAULT_ENVIRONMENT_LABELS",
    "DEFAULT_TENANT_DOMAIN",
    "BaseSettings",
    "ControlPlaneSettings",
    "Environment",
    "get_base_settings",
    "get_control_plane_settings",
]
