from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, object_session

from has_easy.core.errors import HasEasyError, StrictSaveError

from .collection import AttributeCollection, AttributeValue
from .errors import Errors
from .registry import collection_for, registered_collections

logger = logging.getLogger(__name__)

_ERRORS_ATTR = "_has_easy_errors"


class HasEasyMixin:
    """Mixin for declarative models that own attribute collections.

    Adds an ``errors`` surface and a ``save`` that type checks and validates
    every collection value set since the last save before writing it.
    """

    @property
    def errors(self) -> Errors:
        errors = self.__dict__.get(_ERRORS_ATTR)
        if errors is None:
            errors = self.__dict__[_ERRORS_ATTR] = Errors()
        return errors

    def has_easy_collections(self) -> List[AttributeCollection]:
        return [collection_for(self, schema.name) for schema in registered_collections(type(self))]

    def save(self, session: Optional[Session] = None, *, strict: bool = False) -> bool:
        """Persist the host and its checked collection values.

        Non-strict: set values that pass are written, failures are recorded in
        ``errors`` (one entry per message) and stay in memory as rejected.
        Defaults are checked too but never written.
        Returns True when nothing failed.

        Strict: the first failure is recorded and raised as StrictSaveError
        before anything is flushed.

        The transaction is left open; committing is up to the caller.
        """
        session = session or object_session(self)
        if session is None:
            raise HasEasyError(f"{type(self).__name__} is not attached to a session; pass one to save()")

        self.errors.clear()
        plan: List[Tuple[AttributeCollection, List[str], List[str]]] = []
        for collection in self.has_easy_collections():
            passed: List[str] = []
            rejected: List[str] = []
            for outcome in collection.check():
                if outcome.ok:
                    passed.append(outcome.attribute)
                    continue
                if strict:
                    first = outcome.failures[0]
                    self.errors.add(first.attribute, first.message)
                    logger.debug("Strict save of %s aborted: %s %s", type(self).__name__, first.attribute, first.message)
                    raise StrictSaveError(first) from first.to_exception()
                for failure in outcome.failures:
                    self.errors.add(failure.attribute, failure.message)
                logger.debug("%s.%s rejected: %s", collection.schema.name, outcome.attribute, outcome.messages)
                rejected.append(outcome.attribute)
            plan.append((collection, passed, rejected))

        session.add(self)
        session.flush()

        staged: List[AttributeValue] = []
        for collection, passed, rejected in plan:
            staged.extend(collection.stage(session, passed))
            for name in rejected:
                collection.reject(name)
        if staged:
            try:
                session.flush()
            except Exception:
                for entry in staged:
                    entry.unstage(session)
                raise
            for entry in staged:
                entry.state = "persisted"

        logger.info(
            "Saved %s: %d value(s) written, %d error(s)",
            type(self).__name__,
            len(staged),
            len(self.errors),
        )
        return not self.errors
