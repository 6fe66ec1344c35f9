"""
Status Use Cases

Global and group-scoped availability status.
"""

from .clear_group_status_use_case import ClearGroupStatusUseCase
from .dtos import ClearGroupStatusResponse, StatusPresetResponse, StatusResponse
from .get_effective_status_use_case import GetEffectiveStatusUseCase
from .set_group_status_use_case import SetGroupStatusUseCase
from .status_preset_use_cases import (
    CreateStatusPresetUseCase,
    DeleteStatusPresetUseCase,
    ListStatusPresetsUseCase,
)
from .update_global_status_use_case import UpdateGlobalStatusUseCase

__all__ = [
    "UpdateGlobalStatusUseCase",
    "SetGroupStatusUseCase",
    "ClearGroupStatusUseCase",
    "GetEffectiveStatusUseCase",
    "CreateStatusPresetUseCase",
    "ListStatusPresetsUseCase",
    "DeleteStatusPresetUseCase",
    "StatusResponse",
    "StatusPresetResponse",
    "ClearGroupStatusResponse",
]
