"""Independent validated scalar parameters.

- UniqueIdentifier: random 128-bit identifier in canonical UUID text form
- SecretValue: text that can be replaced by its one-way digest
- MacAddressValue: six colon-separated hexadecimal octets
"""

import hashlib
from uuid import UUID, uuid4
from typing import Union

from ..errors import FormatError, TypeMismatchError
from .base import LeafParameter
from .validation import HEX_DIGITS, has_only

UUID_TEXT_LENGTH = 36
_UUID_GROUPS = (8, 4, 4, 4, 12)

MAC_OCTETS = 6
DEFAULT_MAC = "00:00:00:00:00:00"


class UniqueIdentifier(LeafParameter):
    """Random identifier, generated on construction.

    Renders as the 36-character lower-case hyphenated hex form
    (xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx).
    """

    def __init__(self, name: str = "uuid"):
        super().__init__(name)
        self._uuid = uuid4()

    @property
    def uuid(self) -> UUID:
        return self._uuid

    def regenerate(self) -> None:
        """Replace the identifier with a freshly generated one."""
        self._uuid = uuid4()

    def assign(self, value: Union[str, UUID]) -> None:
        """Assign a canonical UUID string or a uuid.UUID.

        Only the canonical hyphenated layout is accepted; braces, URNs and
        bare 32-digit forms are rejected.

        Raises:
            FormatError: If text is not a canonical UUID
        """
        if isinstance(value, UUID):
            self._uuid = value
            return
        if not isinstance(value, str):
            raise TypeMismatchError(
                f"Parameter {self.name} requires str or UUID, got {type(value).__name__}"
            )
        text = value.strip()
        groups = text.split("-")
        if (len(text) != UUID_TEXT_LENGTH
                or tuple(len(group) for group in groups) != _UUID_GROUPS
                or not all(has_only(group, HEX_DIGITS) for group in groups)):
            raise FormatError(f"Parameter {self.name}: {value!r} is not a canonical UUID")
        self._uuid = UUID(text)

    def render_value(self) -> str:
        return str(self._uuid)


class SecretValue(LeafParameter):
    """Text parameter holding a secret such as a password.

    apply_one_way_hash() replaces the text with its hex MD5 digest. The
    transform is irreversible and is not idempotent: a second call hashes
    the digest, not the original text. is_hashed records that a hash has
    been applied at least once.
    """

    def __init__(self, name: str = "secret", text: str = ""):
        super().__init__(name)
        self._text = text
        self.is_hashed = False

    @property
    def text(self) -> str:
        return self._text

    def assign(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeMismatchError(
                f"Parameter {self.name} requires str, got {type(value).__name__}"
            )
        self._text = value
        self.is_hashed = False

    def apply_one_way_hash(self) -> None:
        """Replace the stored text with its hex MD5 digest."""
        self._text = hashlib.md5(self._text.encode("utf-8")).hexdigest()
        self.is_hashed = True

    def render_value(self) -> str:
        return self._text

    def _copy_state(self, other: "SecretValue") -> None:
        self._text = other._text
        self.is_hashed = other.is_hashed

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, hashed={self.is_hashed})"


class MacAddressValue(LeafParameter):
    """Ethernet MAC address, default 00:00:00:00:00:00."""

    def __init__(self, name: str = "mac_address"):
        super().__init__(name)
        self._octets = (0,) * MAC_OCTETS

    @property
    def octets(self) -> tuple:
        return self._octets

    def assign(self, value: str) -> None:
        """Assign "XX:XX:XX:XX:XX:XX" text (hex digits, any case).

        Raises:
            FormatError: If text is not six colon-separated two-digit hex octets
        """
        if not isinstance(value, str):
            raise TypeMismatchError(
                f"Parameter {self.name} requires str, got {type(value).__name__}"
            )
        parts = value.strip().split(":")
        if len(parts) != MAC_OCTETS or not all(
                len(part) == 2 and has_only(part, HEX_DIGITS) for part in parts):
            raise FormatError(f"Parameter {self.name}: invalid MAC address {value!r}")
        self._octets = tuple(int(part, 16) for part in parts)

    def render_value(self) -> str:
        return ":".join(f"{octet:02x}" for octet in self._octets)
