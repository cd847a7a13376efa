##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Audit event sinks.

Managers report every create, modify, and delete they perform (or fail to
perform) to an `AuditSink`. Where the events end up is not smpstore's
concern; the `LoggingAuditSink` used by default writes them to the
`smpstore.audit` logger.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from smpstore.common.enums import AuditResult


OBJECT_TYPE_BUSINESS_CARD = "smp-business-card"
OBJECT_TYPE_PARTICIPANT_MIGRATION = "smp-participant-migration"


class AuditSink(ABC):
    """
    Receiver of audit events.

    Every method receives the outcome, the type of the audited object, its id,
    and any number of action-specific fields.
    """

    @abstractmethod
    def on_create(self, result: AuditResult, object_type: str, object_id: str, *fields: Any):
        """
        Record the creation of an object.

        Args:
            result: Whether the creation succeeded.
            object_type: The type of object created.
            object_id: The id of the object.
            *fields: Additional values describing the new object.
        """
        raise NotImplementedError("Subclasses of `AuditSink` must implement an `on_create` method.")

    @abstractmethod
    def on_modify(self, result: AuditResult, object_type: str, object_id: str, *fields: Any):
        """
        Record the modification of an object.

        Args:
            result: Whether the modification succeeded.
            object_type: The type of object modified.
            object_id: The id of the object.
            *fields: Additional values describing the modification.
        """
        raise NotImplementedError("Subclasses of `AuditSink` must implement an `on_modify` method.")

    @abstractmethod
    def on_delete(self, result: AuditResult, object_type: str, object_id: str, *fields: Any):
        """
        Record the deletion of an object.

        Args:
            result: Whether the deletion succeeded.
            object_type: The type of object deleted.
            object_id: The id of the object.
            *fields: Additional values describing the deletion.
        """
        raise NotImplementedError("Subclasses of `AuditSink` must implement an `on_delete` method.")


class LoggingAuditSink(AuditSink):
    """
    Writes audit events to a logger, one line per event.

    Successful actions are logged at INFO, failed ones at WARNING.
    """

    def __init__(self, logger: logging.Logger = None):
        """
        Args:
            logger: The logger to write to. Defaults to `smpstore.audit`.
        """
        self.logger = logger or logging.getLogger("smpstore.audit")

    def _log(self, action: str, result: AuditResult, object_type: str, object_id: str, fields: tuple):
        level = logging.INFO if result is AuditResult.SUCCESS else logging.WARNING
        details = ", ".join(str(getattr(value, "value", value)) for value in fields)
        suffix = f": {details}" if details else ""
        self.logger.log(level, f"[{action}] {result.value} {object_type} '{object_id}'{suffix}")

    def on_create(self, result: AuditResult, object_type: str, object_id: str, *fields: Any):
        self._log("create", result, object_type, object_id, fields)

    def on_modify(self, result: AuditResult, object_type: str, object_id: str, *fields: Any):
        self._log("modify", result, object_type, object_id, fields)

    def on_delete(self, result: AuditResult, object_type: str, object_id: str, *fields: Any):
        self._log("delete", result, object_type, object_id, fields)
