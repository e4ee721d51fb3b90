"""BaseService — shared foundation for vidctl services.

Every service reads from an :class:`AspectCatalog` handed in at
construction (the process default when omitted). Services never mutate
the catalog or the records they are given.
"""

from __future__ import annotations

import logging

from vidctl.domain.aspects import AspectCatalog, AspectDescriptor, default_catalog
from vidctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

ASPECT_NOT_FOUND = "ASPECT_NOT_FOUND"
FIELD_NOT_FOUND = "FIELD_NOT_FOUND"


class BaseService:
    """Base for service-layer classes.

    Usage::

        class AspectService(BaseService):
            def aspect_fields(self, aspect_key: str) -> ServiceResult:
                aspect = self._catalog.get(aspect_key)
                ...
    """

    def __init__(self, catalog: AspectCatalog | None = None) -> None:
        self._catalog = catalog if catalog is not None else default_catalog()

    @property
    def catalog(self) -> AspectCatalog:
        return self._catalog

    def _aspect_or_error(self, op: str, aspect_key: str) -> AspectDescriptor | ServiceResult:
        """Look up an aspect, or build the ``ASPECT_NOT_FOUND`` result for *op*."""
        aspect = self._catalog.get(aspect_key)
        if aspect is not None:
            return aspect
        logger.debug("Aspect lookup failed for %r in %s", aspect_key, op)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=ASPECT_NOT_FOUND,
                message=f"Aspect not found: {aspect_key}",
                detail={
                    "aspect_key": aspect_key,
                    "valid_keys": [str(k) for k in self._catalog.keys()],
                },
            ),
        )

    def _field_not_found(self, op: str, aspect_key: str, field_key: str) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=FIELD_NOT_FOUND,
                message=f"Field not found: {aspect_key}/{field_key}",
                detail={"aspect_key": aspect_key, "field_key": field_key},
            ),
        )
