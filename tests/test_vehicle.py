#!/usr/bin/env python3
"""Tests for Vehicle class."""

from fleet import Vehicle


class TestVehicle:
    """Tests for Vehicle class."""

    def test_label(self):
        vehicle = Vehicle("1", "ABC-123", "Volvo", "FH16")
        assert vehicle.label == "ABC-123 - Volvo FH16"

    def test_default_status(self):
        assert Vehicle("1", "ABC-123", "Volvo", "FH16").status == "active"

    def test_stores_fields(self):
        vehicle = Vehicle("7", "XYZ-9", "Ford", "Transit", status="maintenance")
        assert vehicle.id == "7"
        assert vehicle.plate == "XYZ-9"
        assert vehicle.brand == "Ford"
        assert vehicle.model == "Transit"
        assert vehicle.status == "maintenance"
