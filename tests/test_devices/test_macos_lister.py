"""Tests for the macOS device lister."""

import pytest

from tests.fakes import FakeSystemProfiler
from usbvolumes.core.errors import EnumerationError
from usbvolumes.devices.macos import (
    DATA_TYPES,
    MacOSDeviceLister,
    classify_storage_node,
    classify_usb_node,
    collect_devices,
    first_media_bsd_name,
    select_section,
)
from usbvolumes.models import ContainerNode, DeviceNode, USBDevice


def usb_section(*items):
    return {"_dataType": "SPUSBDataType", "_items": list(items)}


def storage_section(*items):
    return {"_dataType": "SPStorageDataType", "_items": list(items)}


def usb_device(serial, *bsd_names, **extra):
    record = {
        "_name": f"Stick {serial}",
        "manufacturer": "Acme",
        "product_id": "0x1234",
        "vendor_id": "0x5678",
        "serial_num": serial,
        **extra,
    }
    if bsd_names:
        record["Media"] = [{"bsd_name": name} for name in bsd_names]
    return record


def volume(bsd_name, mount_point=None):
    record = {"_name": bsd_name.upper(), "bsd_name": bsd_name}
    if mount_point is not None:
        record["mount_point"] = mount_point
    return record


def bus(*items):
    return {"_name": "USB31Bus", "_items": list(items)}


def make_lister(*sections) -> MacOSDeviceLister:
    return MacOSDeviceLister(profiler=FakeSystemProfiler(list(sections)))


class TestMacOSDeviceLister:
    """Test MacOSDeviceLister.list_devices."""

    def test_nested_device_matched_to_volume(self):
        """A device inside a bus is joined to the volume with its BSD name."""
        lister = make_lister(
            usb_section(bus(usb_device("SN2", "disk2s1"))),
            storage_section(volume("disk2s1", "/Volumes/X")),
        )

        assert lister.list_devices() == [
            USBDevice(serial_number="SN2", mount_point="/Volumes/X")
        ]

    def test_single_query_for_both_data_types(self):
        """Both data types are requested in one call."""
        profiler = FakeSystemProfiler([])
        MacOSDeviceLister(profiler=profiler).list_devices()

        assert profiler.calls == [DATA_TYPES]

    def test_device_without_media_is_omitted(self):
        """A USB device with no media reference (keyboard, hub) is skipped."""
        lister = make_lister(
            usb_section(bus(usb_device("KBD"), usb_device("SN1", Media=[]))),
            storage_section(volume("disk2s1", "/Volumes/X")),
        )

        assert lister.list_devices() == []

    def test_unmounted_volume_is_omitted(self):
        """A matched volume without a mount point contributes nothing."""
        lister = make_lister(
            usb_section(usb_device("SN1", "disk3")),
            storage_section(volume("disk3"), volume("disk4", "")),
        )

        assert lister.list_devices() == []

    def test_only_first_media_reference_is_consulted(self):
        """Later media entries are ignored even if they are mounted."""
        lister = make_lister(
            usb_section(usb_device("SN1", "disk5s1", "disk5s2")),
            storage_section(volume("disk5s1"), volume("disk5s2", "/Volumes/Second")),
        )

        assert lister.list_devices() == []

    def test_first_matching_volume_wins(self):
        """Volumes sharing a BSD name resolve to the first one listed."""
        lister = make_lister(
            usb_section(usb_device("SN1", "disk2")),
            storage_section(
                volume("disk2", "/Volumes/First"), volume("disk2", "/Volumes/Second")
            ),
        )

        assert [d.mount_point for d in lister.list_devices()] == ["/Volumes/First"]

    def test_bsd_name_match_is_exact(self):
        """disk2 does not match disk2s1."""
        lister = make_lister(
            usb_section(usb_device("SN1", "disk2")),
            storage_section(volume("disk2s1", "/Volumes/X")),
        )

        assert lister.list_devices() == []

    def test_empty_serial_is_omitted(self):
        """A device must have a non-empty serial number."""
        lister = make_lister(
            usb_section(usb_device("", "disk2")),
            storage_section(volume("disk2", "/Volumes/X")),
        )

        assert lister.list_devices() == []

    def test_blank_mount_point_does_not_abort_listing(self):
        """A whitespace-only mount point drops that device only."""
        lister = make_lister(
            usb_section(usb_device("SN1", "disk2"), usb_device("SN2", "disk3")),
            storage_section(volume("disk2", "  "), volume("disk3", "/Volumes/Y")),
        )

        assert lister.list_devices() == [
            USBDevice(serial_number="SN2", mount_point="/Volumes/Y")
        ]

    def test_blank_serial_is_omitted(self):
        lister = make_lister(
            usb_section(usb_device("   ", "disk2"), usb_device("SN2", "disk3")),
            storage_section(
                volume("disk2", "/Volumes/X"), volume("disk3", "/Volumes/Y")
            ),
        )

        assert [d.serial_number for d in lister.list_devices()] == ["SN2"]

    def test_serial_reported_verbatim(self):
        lister = make_lister(
            usb_section(usb_device(" SN1", "disk2")),
            storage_section(volume("disk2", "/Volumes/X")),
        )

        assert lister.list_devices()[0].serial_number == " SN1"

    def test_missing_sections_give_empty_result(self):
        """Absent sections are treated as empty trees."""
        assert make_lister().list_devices() == []
        assert make_lister(usb_section(usb_device("SN1", "disk2"))).list_devices() == []

    def test_multiple_devices_in_tree_order(self):
        """Devices are reported in depth-first tree order."""
        lister = make_lister(
            usb_section(
                bus(usb_device("A", "disk2"), bus(usb_device("B", "disk3"))),
                bus(usb_device("C", "disk4")),
            ),
            storage_section(
                {
                    "_name": "Container",
                    "_items": [
                        volume("disk4", "/Volumes/C"),
                        volume("disk3", "/Volumes/B"),
                    ],
                },
                volume("disk2", "/Volumes/A"),
            ),
        )

        assert [(d.serial_number, d.mount_point) for d in lister.list_devices()] == [
            ("A", "/Volumes/A"),
            ("B", "/Volumes/B"),
            ("C", "/Volumes/C"),
        ]

    def test_repeated_calls_are_equal(self):
        """Listing twice with no change gives the same result."""
        lister = make_lister(
            usb_section(bus(usb_device("SN2", "disk2s1"))),
            storage_section(volume("disk2s1", "/Volumes/X")),
        )

        assert lister.list_devices() == lister.list_devices()

    def test_profiler_failure_propagates(self):
        """A failed system_profiler query fails the listing."""

        class BrokenProfiler:
            def query(self, data_types):
                raise EnumerationError("system_profiler", "query", "exit status 1")

        with pytest.raises(EnumerationError):
            MacOSDeviceLister(profiler=BrokenProfiler()).list_devices()


class TestClassification:
    """Test classify_usb_node and classify_storage_node."""

    def test_usb_device_node(self):
        """serial_num marks a USB device."""
        node = classify_usb_node({"serial_num": "SN"})

        assert node == DeviceNode(record={"serial_num": "SN"}, children=())

    def test_usb_container_node(self):
        """_items without serial_num marks a container."""
        node = classify_usb_node({"_name": "Bus", "_items": [{"serial_num": "SN"}]})

        assert isinstance(node, ContainerNode)
        assert node.children == ({"serial_num": "SN"},)

    def test_device_with_children_keeps_them(self):
        """A hub with a serial still exposes its children."""
        node = classify_usb_node({"serial_num": "HUB", "_items": [{"serial_num": "SN"}]})

        assert isinstance(node, DeviceNode)
        assert node.children == ({"serial_num": "SN"},)

    def test_uninteresting_node(self):
        """A node that is neither is classified as None."""
        assert classify_usb_node({"_name": "Built-in"}) is None
        assert classify_storage_node({"_name": "Recovery"}) is None

    def test_storage_device_node(self):
        """bsd_name marks a storage volume."""
        node = classify_storage_node({"bsd_name": "disk1s1"})

        assert isinstance(node, DeviceNode)


class TestCollectDevices:
    """Test the recursive tree walk."""

    def test_deeply_nested_device_is_collected(self):
        """A device five levels deep is found."""
        tree = [bus(bus(bus(bus(bus(usb_device("DEEP", "disk9"))))))]

        assert [d["serial_num"] for d in collect_devices(tree, classify_usb_node)] == [
            "DEEP"
        ]

    def test_devices_nested_under_devices_are_collected(self):
        """Children of a device node are walked too."""
        tree = [usb_device("HUB", _items=[usb_device("CHILD", "disk2")])]

        assert [d["serial_num"] for d in collect_devices(tree, classify_usb_node)] == [
            "HUB",
            "CHILD",
        ]

    def test_non_mapping_items_are_ignored(self):
        """Strings or numbers in an item list are skipped."""
        tree = ["junk", 42, None, volume("disk2")]

        assert collect_devices(tree, classify_storage_node) == [volume("disk2")]

    def test_empty_tree(self):
        assert collect_devices([], classify_usb_node) == []


class TestHelpers:
    """Test select_section and first_media_bsd_name."""

    def test_select_section_by_tag(self):
        sections = [storage_section(volume("disk2")), usb_section(usb_device("A"))]

        assert select_section(sections, "SPUSBDataType") == [usb_device("A")]
        assert select_section(sections, "SPStorageDataType") == [volume("disk2")]
        assert select_section(sections, "SPAudioDataType") == []

    def test_select_section_without_items(self):
        assert select_section([{"_dataType": "SPUSBDataType"}], "SPUSBDataType") == []

    @pytest.mark.parametrize(
        "device",
        [
            {},
            {"Media": []},
            {"Media": "disk2"},
            {"Media": ["disk2"]},
            {"Media": [{}]},
            {"Media": [{"bsd_name": ""}]},
        ],
    )
    def test_first_media_bsd_name_absent(self, device):
        assert first_media_bsd_name(device) is None

    def test_first_media_bsd_name(self):
        assert first_media_bsd_name(usb_device("A", "disk2", "disk3")) == "disk2"
