"""Configurações centralizadas do therapy_engine.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente
- get_settings: função cacheada para obter instância única
- DEFAULT_SLOT_MENU: cardápio diário padrão de horários

Uso típico:
    from therapy_engine.config import get_settings
"""

from therapy_engine.config.settings import DEFAULT_SLOT_MENU, Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_SLOT_MENU",
]
