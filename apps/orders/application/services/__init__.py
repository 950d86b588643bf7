# Application services
from .order_orchestrator import OrderOrchestrator

__all__ = ['OrderOrchestrator']
