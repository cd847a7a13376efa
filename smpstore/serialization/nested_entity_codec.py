##############################################################################
# Copyright (c) smpstore Project developers. See top-level LICENSE file for
# dates and other details. No copyright assignment is required to contribute
# to smpstore.
##############################################################################

"""
Text encoding of the nested collections of a business card entity.

Identifiers, website URIs, and contacts are stored in a single text column
(or hash field) each, as a compact JSON array:

    identifiers:  [{"id":"i1","scheme":"s","value":"v"}]
    website URIs: ["https://example.org"]
    contacts:     [{"id":"c1","type":"t","name":"n","phone":"p","email":"e"}]

Decoding is total. Whatever is stored, the decoder returns a list and never
raises: unparsable payloads decode to an empty list and malformed items are
skipped.
"""

import json
import logging
from typing import Any, Callable, Iterable, List, Optional, Tuple, TypeVar

from smpstore.domain.business_card import BusinessCardContact, BusinessCardIdentifier


LOG = logging.getLogger(__name__)

T = TypeVar("T")

FORMAT_VERSION = 1
"""Version of the payload shapes described in the module docstring."""

IDENTIFIER_KEYS: Tuple[str, ...] = ("id", "scheme", "value")
CONTACT_KEYS: Tuple[str, ...] = ("id", "type", "name", "phone", "email")


class MalformedItemError(ValueError):
    """Raised internally when a single decoded array item cannot be used."""


def _scalar_to_str(value: Any) -> Optional[str]:
    """
    Convert a decoded JSON scalar into the string stored on the record.

    Raises:
        MalformedItemError: If `value` is a nested array or object.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        raise MalformedItemError(f"Expected a scalar but got {type(value).__name__}.")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class NestedEntityCodec:
    """
    Encode and decode the nested collections of business card entities.

    Attributes:
        format_version (int): The version of the payload shapes this codec reads and writes.

    Methods:
        encode_identifiers: Encode business card identifiers.
        decode_identifiers: Decode business card identifiers.
        encode_website_uris: Encode website URIs.
        decode_website_uris: Decode website URIs.
        encode_contacts: Encode business card contacts.
        decode_contacts: Decode business card contacts.
    """

    format_version: int = FORMAT_VERSION

    @staticmethod
    def _dumps(items: List[Any]) -> str:
        return json.dumps(items, separators=(",", ":"), ensure_ascii=False)

    @staticmethod
    def _load_array(text: Optional[str], collection: str) -> List[Any]:
        """
        Parse `text` as a JSON array, returning an empty list for anything else.

        Args:
            text: The stored payload.
            collection: Name of the collection, for logging.

        Returns:
            The items of the array.
        """
        if text is None:
            return []
        if not isinstance(text, str):
            LOG.warning(f"Stored {collection} payload is not text ({type(text).__name__}); using no {collection}.")
            return []
        if not text.strip():
            return []

        try:
            loaded = json.loads(text)
        except (ValueError, RecursionError) as exc:
            LOG.warning(f"Stored {collection} payload is not valid JSON; using no {collection}: {exc}")
            return []

        if not isinstance(loaded, list):
            LOG.warning(f"Stored {collection} payload is not a JSON array; using no {collection}.")
            return []
        return loaded

    def _decode_records(
        self, text: Optional[str], collection: str, keys: Tuple[str, ...], factory: Callable[..., T]
    ) -> List[T]:
        records = []
        for index, item in enumerate(self._load_array(text, collection)):
            if not isinstance(item, dict):
                LOG.warning(f"Skipping {collection} item {index}: expected an object.")
                continue
            try:
                records.append(factory(**{key: _scalar_to_str(item.get(key)) for key in keys}))
            except MalformedItemError as exc:
                LOG.warning(f"Skipping {collection} item {index}: {exc}")
        return records

    def encode_identifiers(self, identifiers: Optional[Iterable[BusinessCardIdentifier]]) -> str:
        """
        Encode business card identifiers as a JSON array of objects.

        Args:
            identifiers: The identifiers to encode. None encodes as an empty array.

        Returns:
            A compact JSON array.
        """
        return self._dumps([{key: getattr(ident, key) for key in IDENTIFIER_KEYS} for ident in identifiers or ()])

    def decode_identifiers(self, text: Optional[str]) -> List[BusinessCardIdentifier]:
        """
        Decode business card identifiers.

        Args:
            text: The stored payload; may be None or malformed.

        Returns:
            The decoded identifiers (possibly empty).
        """
        return self._decode_records(text, "identifiers", IDENTIFIER_KEYS, BusinessCardIdentifier)

    def encode_website_uris(self, website_uris: Optional[Iterable[str]]) -> str:
        """
        Encode website URIs as a JSON array of strings.

        Args:
            website_uris: The URIs to encode. None encodes as an empty array.

        Returns:
            A compact JSON array.
        """
        return self._dumps([str(uri) for uri in website_uris or ()])

    def decode_website_uris(self, text: Optional[str]) -> List[str]:
        """
        Decode website URIs. Null and non-scalar items are skipped.

        Args:
            text: The stored payload; may be None or malformed.

        Returns:
            The decoded URIs (possibly empty).
        """
        uris = []
        for index, item in enumerate(self._load_array(text, "website URIs")):
            try:
                uri = _scalar_to_str(item)
            except MalformedItemError as exc:
                LOG.warning(f"Skipping website URI item {index}: {exc}")
                continue
            if uri is not None:
                uris.append(uri)
        return uris

    def encode_contacts(self, contacts: Optional[Iterable[BusinessCardContact]]) -> str:
        """
        Encode business card contacts as a JSON array of objects.

        Args:
            contacts: The contacts to encode. None encodes as an empty array.

        Returns:
            A compact JSON array.
        """
        return self._dumps([{key: getattr(contact, key) for key in CONTACT_KEYS} for contact in contacts or ()])

    def decode_contacts(self, text: Optional[str]) -> List[BusinessCardContact]:
        """
        Decode business card contacts.

        Args:
            text: The stored payload; may be None or malformed.

        Returns:
            The decoded contacts (possibly empty).
        """
        return self._decode_records(text, "contacts", CONTACT_KEYS, BusinessCardContact)
