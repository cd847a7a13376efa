##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
This module defines the abstract base class `EntityManager`, which provides the
plumbing shared by the smpstore managers.

Managers translate between immutable domain records and the data models that
stores persist. Every public manager operation performs its storage work inside
a `try` block; a failure is logged, handed to the registered exception callbacks,
and turned into a sentinel return value by the subclass.
"""

import logging
from abc import ABC
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from smpstore.audit import AuditSink, LoggingAuditSink
from smpstore.backends.filter_support_mixin import FilterSupportMixin
from smpstore.backends.storage_backend import AnyStore, StorageBackend
from smpstore.common.callbacks import ExceptionCallback, ExceptionCallbacks
from smpstore.db_scripts.data_models import BaseDataModel


LOG = logging.getLogger("smpstore")


class EntityManager(ABC):
    """
    Abstract base class for the smpstore managers.

    Attributes:
        backend: The backend interface used to persist and retrieve records.
        audit_sink: Receiver of the audit events of this manager.
        exception_callbacks: Callbacks told about persistence failures.
        _entity_type: The store type this manager works on. Subclasses must set this.
        _filter_accessor_map: A dictionary mapping supported filter keys to accessor functions
            for the data model. Used when the backend cannot filter natively.
    """

    _entity_type: str = None
    _filter_accessor_map: Dict[str, Callable[[BaseDataModel], Any]] = {}

    def __init__(
        self,
        backend: StorageBackend,
        audit_sink: AuditSink = None,
        exception_callbacks: Union[ExceptionCallbacks, Iterable[ExceptionCallback]] = None,
    ):
        """
        Initialize the EntityManager with a backend.

        Args:
            backend: The backend interface used to persist and retrieve records.
            audit_sink: Receiver of audit events. Defaults to a `LoggingAuditSink`.
            exception_callbacks: An `ExceptionCallbacks` registry (shared as is) or an
                iterable of callables to register in a new one.
        """
        self.backend: StorageBackend = backend
        self.audit_sink: AuditSink = audit_sink or LoggingAuditSink()
        if isinstance(exception_callbacks, ExceptionCallbacks):
            self.exception_callbacks: ExceptionCallbacks = exception_callbacks
        else:
            self.exception_callbacks = ExceptionCallbacks(exception_callbacks)

    @property
    def store(self) -> AnyStore:
        """The store of the backend this manager works on."""
        return self.backend.get_store(self._entity_type)

    def _handle_persistence_error(self, exc: Exception, action: str):
        """
        Log a persistence failure and hand it to every exception callback.

        Args:
            exc: The exception raised by the storage layer.
            action: What the manager was trying to do, for the log message.
        """
        LOG.error(f"Failed to {action} using the {self.backend.get_name()} backend: {exc}")
        self.exception_callbacks.notify(exc)

    def _matches_filters(self, model: BaseDataModel, filters: Dict) -> bool:
        """
        Determines whether a given record matches all provided filter criteria.

        A list value matches if the record's value is any of its items.

        Args:
            model: The record to check against the filters.
            filters: A dictionary of filter keys and values. Filter keys must correspond
                to entries in `_filter_accessor_map`.

        Returns:
            True if the record matches all filter conditions, False otherwise.
        """
        for key, expected in filters.items():
            accessor = self._filter_accessor_map.get(key, None)
            if not accessor:
                LOG.warning(f"Could not obtain accessor for filter '{key}'. Skipping this filter.")
                continue

            actual = accessor(model)

            if isinstance(expected, (list, tuple, set)):
                if actual not in expected:
                    return False
            elif actual != expected:
                return False
        return True

    def _retrieve_all_models(self, filters: Optional[Dict] = None) -> List[BaseDataModel]:
        """
        Retrieve every record of this manager's store, optionally filtered.

        Filtering happens inside the backend when it supports it and in memory otherwise.

        Args:
            filters: Field-value pairs to filter on.

        Returns:
            The matching records.
        """
        if isinstance(self.backend, FilterSupportMixin) and filters:
            LOG.debug(f"Using backend filtering with filters: {filters}")
            return self.backend.retrieve_all_filtered(self._entity_type, filters)

        mode = "with in-memory filtering" if filters else "without filters"
        LOG.debug(f"Using full retrieval {mode}.")
        models = self.store.retrieve_all()
        if filters:
            models = [model for model in models if self._matches_filters(model, filters)]
            LOG.debug(f"Filtered down to {len(models)} records using in-memory filters: {filters}")
        return models
