"""Service layer — the correction pipeline and shell hook management.

INVARIANT: All service-layer methods return ServiceResult.
"""

from theshit.services.fix import FixService
from theshit.services.hook import HookService
from theshit.services.result import ServiceError, ServiceResult

__all__ = ["FixService", "HookService", "ServiceError", "ServiceResult"]
