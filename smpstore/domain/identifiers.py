##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Participant identifiers and the factory used to parse them.

A participant is identified by a scheme and a value. Its URI-encoded form,
`scheme::value`, is what smpstore persists as the participant key.
"""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


LOG = logging.getLogger(__name__)

URI_SEPARATOR = "::"


@dataclass(frozen=True)
class ParticipantIdentifier:
    """
    Immutable identifier of a participant.

    Attributes:
        scheme: The identifier scheme (e.g. `iso6523-actorid-upis`).
        value: The identifier value within the scheme.
    """

    scheme: str
    value: str

    @property
    def uri_encoded(self) -> str:
        """The `scheme::value` form used as the persisted participant key."""
        return f"{self.scheme}{URI_SEPARATOR}{self.value}"

    @classmethod
    def from_uri_encoded(cls, text: str) -> "ParticipantIdentifier":
        """
        Rebuild an identifier from its URI-encoded form without validating it.

        Only use this for values that were already accepted once; everything
        coming from a caller should go through an `IdentifierFactory`.

        Args:
            text: A `scheme::value` string.

        Returns:
            The identifier. A string without separator yields an empty scheme.
        """
        scheme, sep, value = text.partition(URI_SEPARATOR)
        if not sep:
            return cls("", text)
        return cls(scheme, value)

    def __str__(self) -> str:
        return self.uri_encoded


class IdentifierFactory(ABC):
    """
    Parses raw participant identifier strings.
    """

    @abstractmethod
    def parse_participant_identifier(self, raw: str) -> Optional[ParticipantIdentifier]:
        """
        Parse a raw participant identifier.

        Args:
            raw: The text to parse.

        Returns:
            The parsed identifier, or None if `raw` is not a valid identifier.
        """
        raise NotImplementedError("Subclasses of `IdentifierFactory` must implement `parse_participant_identifier`.")


class SimpleIdentifierFactory(IdentifierFactory):
    """
    Accepts `scheme::value` strings with a token-like scheme and a non-blank value.

    Scheme comparison is case-insensitive, so schemes are lower-cased.
    """

    SCHEME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9+\-.:]*$")
    MAX_VALUE_LENGTH = 1050

    def parse_participant_identifier(self, raw: str) -> Optional[ParticipantIdentifier]:
        if not raw or not raw.strip():
            return None

        scheme, sep, value = raw.strip().partition(URI_SEPARATOR)
        if not sep or not scheme or not value.strip():
            LOG.debug(f"'{raw}' is not a URI-encoded participant identifier.")
            return None
        if not self.SCHEME_PATTERN.match(scheme) or len(value) > self.MAX_VALUE_LENGTH:
            LOG.debug(f"'{raw}' has an invalid scheme or an overlong value.")
            return None

        return ParticipantIdentifier(scheme.lower(), value)
