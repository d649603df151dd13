"""Tests for polymorphic addresses, address ranges and address lists."""

import pytest
from hypothesis import given, strategies as st

from valueparams.errors import FormatError, ParameterError, TypeMismatchError
from valueparams.parameters import (
    AddressList,
    AddressRange,
    IPv4Value,
    IPv6Value,
    PolymorphicAddress,
    PolymorphicAddressList,
    TextNode,
)


class TestPolymorphicAddress:
    """Tests for PolymorphicAddress."""

    def test_unassigned_defaults(self):
        """Test an unassigned address never fails."""
        address = PolymorphicAddress("gateway")
        assert not address.is_assigned()
        assert address.version is None
        assert address.concrete is None
        assert address.render_value() == ""
        assert address.address() == ""
        assert address.prefix_bits() == 32
        assert address.part(0) == 0
        assert not address.network_contains("10.0.0.1")

    def test_family_follows_assignment(self):
        """Test reassignment swaps the concrete type."""
        address = PolymorphicAddress("gateway")
        address.assign("10.0.0.1/8")
        assert isinstance(address.concrete, IPv4Value)
        assert address.version == 4
        assert address.family() == "inet"
        assert address.prefix_bits() == 8

        address.assign("fe80::1/64")
        assert isinstance(address.concrete, IPv6Value)
        assert address.version == 6
        assert address.family() == "inet6"
        assert address.render_value() == "fe80::1/64"

    def test_failed_assignment_keeps_previous_instance(self):
        """Test a malformed literal leaves the owned address alone."""
        address = PolymorphicAddress("gateway")
        address.assign("10.0.0.1")
        owned = address.concrete
        with pytest.raises(ParameterError):
            address.assign("fe80::zz")
        assert address.concrete is owned
        assert address.render_value() == "10.0.0.1"

    def test_network_contains_delegates(self):
        """Test membership queries use the owned address."""
        address = PolymorphicAddress("net")
        address.assign("2001:db8::/32")
        assert address.network_contains("2001:db8::42")
        assert not address.network_contains("192.168.0.1")

    def test_assign_concrete_address_is_copied(self):
        """Test assigning a concrete address copies it."""
        source = IPv4Value("ip")
        source.assign("10.1.1.1/16")
        address = PolymorphicAddress("net")
        address.assign(source)
        source.assign("10.2.2.2")
        assert address.render_value() == "10.1.1.1/16"

    def test_set_address_and_netmask(self):
        """Test partial setters, including a family switch."""
        address = PolymorphicAddress("net")
        with pytest.raises(FormatError, match="no address assigned"):
            address.set_netmask(24)
        address.set_address("10.0.0.1")
        address.set_netmask(24)
        address.set_address("10.0.0.9")
        assert address.render_value() == "10.0.0.9/24"
        address.set_address("::9")
        assert address.render_value() == "::9"

    def test_assign_from_node(self):
        """Test population from a markup node and name checking."""
        address = PolymorphicAddress("gateway")
        address.assign_from(TextNode("gateway", "192.168.0.254"))
        assert address.render_value() == "192.168.0.254"
        with pytest.raises(TypeMismatchError):
            address.assign_from(TextNode("router", "192.168.0.1"))


class TestAddressRange:
    """Tests for AddressRange."""

    def test_default_range(self):
        """Test a new range is empty and not negated."""
        address_range = AddressRange()
        assert not address_range.negated
        assert not address_range.has_from()
        assert not address_range.has_to()
        assert address_range.render_value() == ":"

    def test_parse_negated_ipv4_range(self):
        """Test "!" is stripped into the negation flag."""
        address_range = AddressRange()
        address_range.assign("!10.0.0.1:10.0.0.99")
        assert address_range.negated
        assert address_range.from_address.render_value() == "10.0.0.1"
        assert address_range.to_address.render_value() == "10.0.0.99"
        assert address_range.version == 4
        assert address_range.render_value() == "!10.0.0.1:10.0.0.99"

    def test_parse_ipv6_range(self):
        """Test the separating colon is found inside IPv6 text."""
        address_range = AddressRange()
        address_range.assign("fe80::1:fe80::ff")
        assert address_range.from_address.render_value() == "fe80::1"
        assert address_range.to_address.render_value() == "fe80::ff"
        assert address_range.version == 6
        assert not address_range.negated

    def test_open_sides(self):
        """Test either side may be left empty."""
        address_range = AddressRange()
        address_range.assign("10.0.0.1:")
        assert address_range.has_from()
        assert not address_range.has_to()
        address_range.assign(":")
        assert not address_range.has_from()

    @pytest.mark.parametrize("text", [
        "10.0.0.1",
        "10.0.0.1:10.0.0.300",
        "::1",
        "10.0.0.1:::1",
        "!",
    ])
    def test_invalid_ranges(self, text):
        """Test invalid and mixed-family ranges keep the previous value."""
        address_range = AddressRange()
        address_range.assign("!1.1.1.1:2.2.2.2")
        with pytest.raises(FormatError):
            address_range.assign(text)
        assert address_range.render_value() == "!1.1.1.1:2.2.2.2"

    def test_negation_toggles(self):
        """Test explicit negation setters."""
        address_range = AddressRange()
        address_range.assign("1.1.1.1:2.2.2.2")
        address_range.set_negated()
        assert address_range.render_value() == "!1.1.1.1:2.2.2.2"
        address_range.unset_negated()
        assert address_range.render_value() == "1.1.1.1:2.2.2.2"

    def test_copy_from(self):
        """Test copying between ranges of the same name."""
        source = AddressRange("allowed")
        source.assign("!::1:::2")
        target = AddressRange("allowed")
        target.copy_from(source)
        assert target.render_value() == source.render_value()
        with pytest.raises(TypeMismatchError):
            AddressRange("denied").copy_from(source)

    def test_ipv6_range_renders_expanded(self):
        """Test IPv6 sides render with all eight groups and parse back."""
        address_range = AddressRange()
        address_range.set_from("2001:db8::1")
        address_range.set_to("2001:db8::ff/120")
        text = address_range.render_value()
        assert text == (
            "2001:0db8:0000:0000:0000:0000:0000:0001:"
            "2001:0db8:0000:0000:0000:0000:0000:00ff/120"
        )
        parsed = AddressRange()
        parsed.assign(text)
        assert parsed.from_address.render_value() == "2001:db8::1"
        assert parsed.to_address.render_value() == "2001:db8::ff/120"

    def test_compressed_ipv6_range_is_ambiguous(self):
        """Test compressed text with two valid splits is rejected."""
        address_range = AddressRange()
        with pytest.raises(FormatError, match="ambiguous"):
            address_range.assign("2001:db8::1:2001:db8::ff")

    @given(
        st.booleans(),
        st.integers(min_value=0, max_value=(1 << 128) - 1),
        st.integers(min_value=0, max_value=(1 << 128) - 1),
        st.one_of(st.none(), st.integers(min_value=0, max_value=128)),
    )
    def test_ipv6_round_trip(self, negated, low, high, prefix):
        """Test every rendered IPv6 range parses back to the same range."""
        lower, upper = IPv6Value("from"), IPv6Value("to")
        lower.assign(low)
        upper.assign(high)
        if prefix is not None:
            upper.set_netmask(prefix)
        source = AddressRange()
        source.set_from(lower)
        source.set_to(upper)
        if negated:
            source.set_negated()
        parsed = AddressRange()
        parsed.assign(source.render_value())
        assert parsed.negated == negated
        assert parsed.from_address.concrete == source.from_address.concrete
        assert parsed.to_address.concrete == source.to_address.concrete
        assert parsed.render_value() == source.render_value()

    @given(
        st.integers(min_value=0, max_value=(1 << 32) - 1),
        st.integers(min_value=0, max_value=(1 << 32) - 1),
    )
    def test_ipv4_round_trip(self, low, high):
        """Test every rendered IPv4 range parses back unchanged."""
        source = AddressRange()
        source.set_from(str(low))
        source.set_to(str(high))
        parsed = AddressRange()
        parsed.assign(source.render_value())
        assert parsed.render_value() == source.render_value()


class TestAddressList:
    """Tests for AddressList rendering and membership."""

    def test_rendering_by_size(self):
        """Test empty, bare and bracketed renderings."""
        addresses = AddressList("servers")
        assert addresses.render_value() == ""
        addresses.add("10.0.0.1")
        assert addresses.render_value() == "10.0.0.1"
        addresses.add("10.0.0.2")
        assert addresses.render_value() == "[10.0.0.1,10.0.0.2]"

    def test_insertion_order_and_duplicates(self):
        """Test order is kept and re-adding a key does not duplicate it."""
        addresses = AddressList("servers")
        addresses.assign("[10.0.0.3, 10.0.0.1, ::1, 10.0.0.3]")
        assert len(addresses) == 3
        assert addresses.keys() == ["10.0.0.3", "10.0.0.1", "::1"]
        addresses.add("3232235521")
        assert addresses.render_value() == "[10.0.0.3,10.0.0.1,::1,192.168.0.1]"
        assert "192.168.0.1" in addresses
        assert "10.9.9.9" not in addresses
        assert "garbage" not in addresses

    def test_elements_are_concrete_types(self):
        """Test elements are IPv4Value / IPv6Value instances."""
        addresses = AddressList("servers")
        addresses.assign("[10.0.0.1,::1]")
        assert [type(item) for item in addresses] == [IPv4Value, IPv6Value]

    def test_remove(self):
        """Test removal by canonical key."""
        addresses = AddressList("servers")
        addresses.assign("[10.0.0.1,10.0.0.2]")
        addresses.remove("167772161")
        assert addresses.render_value() == "10.0.0.2"
        with pytest.raises(KeyError):
            addresses.remove("10.0.0.1")

    def test_assign_is_all_or_nothing(self):
        """Test one bad element rejects the whole list."""
        addresses = AddressList("servers")
        addresses.assign("10.0.0.1")
        with pytest.raises(ParameterError):
            addresses.assign("[10.0.0.2,10.0.0.256]")
        assert addresses.render_value() == "10.0.0.1"
        addresses.assign("")
        assert len(addresses) == 0
        addresses.assign("[]")
        assert len(addresses) == 0

    def test_surrounding_characters(self):
        """Test configurable brackets for rendering and parsing."""
        addresses = AddressList("servers")
        addresses.set_surrounding_characters("(", ")")
        addresses.assign("(10.0.0.1,10.0.0.2)")
        assert addresses.render_value() == "(10.0.0.1,10.0.0.2)"

    def test_network_availability(self):
        """Test OR over the listed networks."""
        networks = AddressList("trusted")
        networks.assign("[192.168.1.0/24,2001:db8::/32]")
        assert networks.network_availability("192.168.1.200")
        assert networks.network_availability("2001:db8::5")
        assert not networks.network_availability("192.168.2.1")
        assert not AddressList("empty").network_availability("10.0.0.1")


class TestPolymorphicAddressList:
    """Tests for PolymorphicAddressList."""

    def test_rendering_and_availability(self):
        """Test list of polymorphic addresses."""
        addresses = PolymorphicAddressList("peers")
        addresses.add("10.0.0.0/8")
        assert addresses.render_value() == "10.0.0.0/8"
        addresses.add("fd00::/8")
        assert addresses.render_value() == "[10.0.0.0/8,fd00::/8]"
        assert all(isinstance(item, PolymorphicAddress) for item in addresses)
        assert addresses.network_availability("10.20.30.40")
        assert addresses.network_availability("fd12::1")
        assert not addresses.network_availability("11.0.0.1")

    def test_to_node(self):
        """Test emitting the list as a markup node."""
        addresses = PolymorphicAddressList("peers")
        addresses.assign(["10.0.0.1", "10.0.0.2"])
        node = addresses.to_node()
        assert node == TextNode("peers", "[10.0.0.1,10.0.0.2]")
