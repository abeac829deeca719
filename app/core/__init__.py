"""
Core application: infrastructure shared by the domain apps.

- core.models: BaseModel, UUIDPrimaryKeyMixin (import from the module; they
  need the app registry)
- core.services: BaseService (logger per service, atomic())
- core.exceptions: BaseApplicationError and its generic subclasses
- core.views: health_check
"""

from .exceptions import (
    BaseApplicationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from .services import BaseService
