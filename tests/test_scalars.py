"""Tests for UUID, secret and MAC address parameters."""

import hashlib
import uuid

import pytest
from hypothesis import given, strategies as st

from valueparams.errors import FormatError, TypeMismatchError
from valueparams.parameters import MacAddressValue, SecretValue, UniqueIdentifier


class TestUniqueIdentifier:
    """Tests for UniqueIdentifier."""

    def test_generated_on_construction(self):
        """Test a new identifier is a random version-4 UUID."""
        first = UniqueIdentifier()
        second = UniqueIdentifier()
        assert first.uuid.version == 4
        assert first.render_value() != second.render_value()
        assert len(first.render_value()) == 36
        assert isinstance(first.uuid, uuid.UUID)

    def test_regenerate(self):
        """Test regenerate() replaces the value."""
        identifier = UniqueIdentifier()
        before = identifier.render_value()
        identifier.regenerate()
        assert identifier.render_value() != before

    def test_assign_canonical_text(self):
        """Test upper-case input renders lower-case."""
        identifier = UniqueIdentifier("id")
        identifier.assign("123E4567-E89B-12D3-A456-426614174000")
        assert identifier.render_value() == "123e4567-e89b-12d3-a456-426614174000"

    @pytest.mark.parametrize("text", [
        "123e4567e89b12d3a456426614174000",
        "{123e4567-e89b-12d3-a456-426614174000}",
        "urn:uuid:123e4567-e89b-12d3-a456-426614174000",
        "123e4567-e89b-12d3-a456-42661417400g",
        "123e45678-e89b-12d3-a456-42661417400",
        "",
    ])
    def test_rejects_non_canonical_text(self, text):
        """Test only the hyphenated 36-character layout is accepted."""
        identifier = UniqueIdentifier()
        before = identifier.render_value()
        with pytest.raises(FormatError):
            identifier.assign(text)
        assert identifier.render_value() == before

    @given(st.uuids())
    def test_accepts_rendered_uuids(self, value):
        """Test any rendered UUID is accepted back."""
        identifier = UniqueIdentifier()
        identifier.assign(str(value))
        assert identifier.uuid == value

    def test_assign_uuid_object(self):
        """Test assignment from uuid.UUID."""
        value = uuid.uuid4()
        identifier = UniqueIdentifier()
        identifier.assign(value)
        assert identifier.render_value() == str(value)
        with pytest.raises(TypeMismatchError):
            identifier.assign(value.int)


class TestSecretValue:
    """Tests for SecretValue."""

    def test_hash_replaces_text(self):
        """Test the digest differs from the original text."""
        secret = SecretValue("password", "hunter2")
        secret.apply_one_way_hash()
        assert secret.is_hashed
        assert secret.text != "hunter2"
        assert secret.text == hashlib.md5(b"hunter2").hexdigest()

    def test_hash_is_deterministic(self):
        """Test equal inputs give equal digests."""
        first = SecretValue("password", "same")
        second = SecretValue("password", "same")
        first.apply_one_way_hash()
        second.apply_one_way_hash()
        assert first.render_value() == second.render_value()

    def test_second_hash_hashes_the_digest(self):
        """Test hashing twice is not idempotent."""
        secret = SecretValue("password", "hunter2")
        secret.apply_one_way_hash()
        once = secret.text
        secret.apply_one_way_hash()
        assert secret.text != once
        assert secret.text == hashlib.md5(once.encode()).hexdigest()

    def test_assign_resets_hashed_flag(self):
        """Test assigning new text clears is_hashed."""
        secret = SecretValue("password", "a")
        secret.apply_one_way_hash()
        secret.assign("b")
        assert not secret.is_hashed
        assert secret.render_value() == "b"
        with pytest.raises(TypeMismatchError):
            secret.assign(b"bytes")

    def test_repr_hides_text(self):
        """Test the secret never appears in repr()."""
        secret = SecretValue("password", "hunter2")
        assert "hunter2" not in repr(secret)

    def test_copy_from_keeps_hash_state(self):
        """Test copying carries the hashed flag."""
        source = SecretValue("password", "x")
        source.apply_one_way_hash()
        target = SecretValue("password")
        target.copy_from(source)
        assert target.is_hashed
        assert target.text == source.text


class TestMacAddressValue:
    """Tests for MacAddressValue."""

    def test_default(self):
        """Test the all-zero default."""
        assert MacAddressValue().render_value() == "00:00:00:00:00:00"

    def test_parse_and_render(self):
        """Test mixed-case input renders lower-case."""
        mac = MacAddressValue()
        mac.assign("00:1A:2b:3C:4d:FF")
        assert mac.octets == (0x00, 0x1A, 0x2B, 0x3C, 0x4D, 0xFF)
        assert mac.render_value() == "00:1a:2b:3c:4d:ff"

    @pytest.mark.parametrize("text", [
        "00:1a:2b:3c:4d",
        "00:1a:2b:3c:4d:ff:11",
        "00-1a-2b-3c-4d-ff",
        "0:1a:2b:3c:4d:ff",
        "00:1a:2b:3c:4d:fg",
        "",
    ])
    def test_invalid_addresses(self, text):
        """Test malformed text is rejected and the value kept."""
        mac = MacAddressValue()
        mac.assign("aa:bb:cc:dd:ee:ff")
        with pytest.raises(FormatError):
            mac.assign(text)
        assert mac.render_value() == "aa:bb:cc:dd:ee:ff"

    @given(st.binary(min_size=6, max_size=6))
    def test_rendered_text_reparses(self, raw):
        """Test every rendering is accepted back unchanged."""
        mac = MacAddressValue()
        mac.assign(":".join(f"{octet:02X}" for octet in raw))
        again = MacAddressValue()
        again.assign(mac.render_value())
        assert again.octets == tuple(raw)
