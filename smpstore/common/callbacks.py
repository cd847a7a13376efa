##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Registry of callbacks that are told about persistence failures.

Managers never let a storage error escape a public operation. Instead they
hand the exception to every callback registered in an `ExceptionCallbacks`
instance and return a sentinel value to the caller.
"""

import logging
from typing import Callable, Iterable, Iterator, List


LOG = logging.getLogger(__name__)

ExceptionCallback = Callable[[Exception], None]


class ExceptionCallbacks:
    """
    An ordered list of exception callbacks.

    Methods:
        add: Register a new callback.
        remove: Unregister a callback.
        notify: Invoke every registered callback with an exception.
    """

    def __init__(self, callbacks: Iterable[ExceptionCallback] = None):
        """
        Initialize the registry.

        Args:
            callbacks: Optional callbacks to register right away.
        """
        self._callbacks: List[ExceptionCallback] = []
        for callback in callbacks or []:
            self.add(callback)

    def __len__(self) -> int:
        return len(self._callbacks)

    def __iter__(self) -> Iterator[ExceptionCallback]:
        return iter(list(self._callbacks))

    def add(self, callback: ExceptionCallback):
        """
        Register a callback. Registering the same callback twice is a no-op.

        Args:
            callback: A callable accepting the exception that occurred.

        Raises:
            TypeError: If `callback` is not callable.
        """
        if not callable(callback):
            raise TypeError(f"Exception callbacks must be callable, got {type(callback)}.")
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def remove(self, callback: ExceptionCallback):
        """
        Unregister a callback if it is registered.

        Args:
            callback: The callback to remove.
        """
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def notify(self, exc: Exception):
        """
        Hand `exc` to every registered callback, in registration order.

        A callback that raises is logged and the remaining callbacks are still invoked.

        Args:
            exc: The exception to report.
        """
        for callback in self:
            try:
                callback(exc)
            except Exception as cb_exc:  # pylint: disable=broad-except
                LOG.error(f"Exception callback {callback!r} failed while handling '{exc}': {cb_exc}")
