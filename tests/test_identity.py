"""Tests for phone-keyed employee resolution."""

import pytest

from errors import ValidationFailed
from identity import find_or_create_employee


def test_creates_new_employee_with_canonical_phone(store):
    employee, created = find_or_create_employee(store, "(555) 123-4567", "jane@example.com")
    assert created is True
    assert employee["phone"] == "+15551234567"
    assert employee["email"] == "jane@example.com"


def test_finds_existing_employee_in_any_format(store):
    first, _ = find_or_create_employee(store, "+15551234567")
    again, created = find_or_create_employee(store, "555.123.4567")
    assert created is False
    assert again["id"] == first["id"]
    assert len(store.employees) == 1


def test_malformed_phone_rejected(store):
    with pytest.raises(ValidationFailed) as exc:
        find_or_create_employee(store, "12345")
    assert exc.value.errors[0]["field"] == "phone"
    assert store.employees == {}


def test_lost_insert_race_returns_winner(store):
    winner = store.insert_employee("+15551234567")
    original_fetch = store.fetch_employee_by_phone
    calls = []

    def fetch_misses_once(phone):
        calls.append(phone)
        return None if len(calls) == 1 else original_fetch(phone)

    store.fetch_employee_by_phone = fetch_misses_once
    employee, created = find_or_create_employee(store, "+15551234567")
    assert created is False
    assert employee["id"] == winner["id"]
