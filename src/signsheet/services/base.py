"""BaseService: shared plumbing for signsheet services.

Every service receives a :class:`SheetStore` at construction time and
owns its transaction boundaries via ``self._store.transaction()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from signsheet.services.result import ServiceResult, failure

if TYPE_CHECKING:
    from signsheet.domain.errors import SignSheetError
    from signsheet.infrastructure.store import SheetStore

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class SheetService(BaseService):
            def sign_in(self, ...) -> ServiceResult:
                with self._store.transaction() as repo:
                    ...
    """

    def __init__(self, store: SheetStore) -> None:
        self._store = store

    def _owner(self, owner: str | None) -> str:
        """Resolve *owner*, falling back to ``[sheet] default_owner``."""
        if owner is None or not owner.strip():
            return self._store.settings.sheet.default_owner
        return owner.strip()

    def _domain_failure(self, op: str, exc: SignSheetError) -> ServiceResult:
        """Report a domain rule violation as a failed result."""
        logger.debug("%s rejected: %s", op, exc)
        return failure(op, exc.code, str(exc), **_error_detail(exc))


def _error_detail(exc: SignSheetError) -> dict[str, object]:
    # Exception attributes set in errors.py become the error detail.
    return {k: v for k, v in vars(exc).items() if not k.startswith("_")}
