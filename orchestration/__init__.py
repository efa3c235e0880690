"""
Orchestration Package
Contains the encode/decode orchestrator and its configuration factory
"""

from .storage_orchestrator import StorageOrchestrator
from .factory import OrchestratorFactory

__all__ = [
    'StorageOrchestrator',
    'OrchestratorFactory'
]
