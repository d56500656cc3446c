"""
Unit tests for data models.
"""

import unittest
from dataclasses import FrozenInstanceError
from models import BastionTarget, Choice, ExtensionInfo, VersionMarker

VM_ID = (
    "/subscriptions/1111/resourceGroups/rg-app/providers/"
    "Microsoft.Compute/virtualMachines/vm-a"
)


class TestBastionTarget(unittest.TestCase):
    """Test BastionTarget data model."""

    def test_from_row(self):
        """Test building a target from a Resource Graph row."""
        target = BastionTarget.from_row(
            {
                "vmName": "vm-a",
                "vmId": VM_ID,
                "bastionName": "bas-hub",
                "resourceGroup": "rg-hub",
                "subscriptionName": "Prod",
                "subscriptionId": "1111",
            }
        )
        self.assertEqual(target.vm_name, "vm-a")
        self.assertEqual(target.vm_id, VM_ID)
        self.assertEqual(target.bastion_name, "bas-hub")
        self.assertEqual(target.resource_group, "rg-hub")
        self.assertEqual(target.subscription_name, "Prod")
        self.assertEqual(target.subscription_id, "1111")

    def test_from_row_missing_column(self):
        """Test a row without all columns is rejected."""
        with self.assertRaises(KeyError):
            BastionTarget.from_row({"vmName": "vm-a"})

    def test_target_is_immutable(self):
        """Test targets cannot be modified after creation."""
        target = BastionTarget("vm-a", VM_ID, "bas", "rg", "Prod", "1111")
        with self.assertRaises(FrozenInstanceError):
            target.vm_name = "other"


class TestVersionMarker(unittest.TestCase):
    """Test VersionMarker parsing and ordering."""

    def test_parse_full_version(self):
        self.assertEqual(VersionMarker.parse("1.4.2"), VersionMarker(1, 4, 2))

    def test_parse_tolerates_whitespace_and_prefix(self):
        self.assertEqual(VersionMarker.parse("  v2.0.1\n"), VersionMarker(2, 0, 1))

    def test_parse_short_versions(self):
        self.assertEqual(VersionMarker.parse("3"), VersionMarker(3, 0, 0))
        self.assertEqual(VersionMarker.parse("3.1"), VersionMarker(3, 1, 0))

    def test_parse_invalid(self):
        for text in ["", "abc", "1.2.3.4", "1.x", "<html>", None]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    VersionMarker.parse(text)

    def test_parse_ignores_prerelease_suffix(self):
        """Test pre-release extension versions compare on their numeric part."""
        cases = {
            "1.0.0b1": VersionMarker(1, 0, 0),
            "2.1.0-beta.1": VersionMarker(2, 1, 0),
            "1.3.0rc2": VersionMarker(1, 3, 0),
            "1.2.3+build.7": VersionMarker(1, 2, 3),
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                self.assertEqual(VersionMarker.parse(text), expected)
        self.assertGreaterEqual(VersionMarker.parse("1.3.0b1"), VersionMarker(1, 3, 0))

    def test_ordering_is_numeric(self):
        """Test 1.10.0 sorts after 1.9.9 (not string ordering)."""
        self.assertGreater(VersionMarker.parse("1.10.0"), VersionMarker.parse("1.9.9"))
        self.assertGreater(VersionMarker(2, 0, 0), VersionMarker(1, 99, 99))
        self.assertLess(VersionMarker(1, 0, 1), VersionMarker(1, 1, 0))
        self.assertEqual(VersionMarker(1, 2, 3), VersionMarker.parse("1.2.3"))

    def test_str(self):
        self.assertEqual(str(VersionMarker(1, 3, 0)), "1.3.0")


class TestExtensionInfo(unittest.TestCase):
    """Test ExtensionInfo data model."""

    def test_extension_info_creation(self):
        info = ExtensionInfo(name="bastion", version=VersionMarker(1, 3, 1))
        self.assertEqual(info.name, "bastion")
        self.assertGreaterEqual(info.version, VersionMarker(1, 3, 0))


class TestChoice(unittest.TestCase):
    """Test Choice display labels."""

    def test_display_strips_hotkey_marker(self):
        target = BastionTarget("vm-a", VM_ID, "bas", "rg", "Prod", "1111")
        self.assertEqual(Choice("&1 vm-a", target).display, "1 vm-a")
        self.assertEqual(Choice("Prod", target).display, "Prod")


if __name__ == "__main__":
    unittest.main()
