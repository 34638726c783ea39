"""Shared test fixtures for advanced-datatable."""

import datetime as dt

import pytest


@pytest.fixture
def twenty_rows():
    """20 account rows with ids R1..R20."""
    return [
        {
            "Id": f"R{i}",
            "Name": f"Account {21 - i:02d}",
            "Phone": f"555-{1200 + i}",
            "AccountNumber": f"{i:03d}",
        }
        for i in range(1, 21)
    ]


@pytest.fixture
def ten_new_rows():
    """Replacement dataset that shares no ids with twenty_rows."""
    return [{"Id": f"N{i}", "Name": f"New {i}"} for i in range(1, 11)]


@pytest.fixture
def account_rows():
    """Small mixed-type dataset with nested owners."""
    return [
        {"Id": "a1", "Name": "acme", "Phone": "555-1234", "Revenue": 300,
         "Active": True, "Created": dt.date(2024, 3, 1),
         "Owner": {"Name": "Zoe"}},
        {"Id": "a2", "Name": "Beta Corp", "Phone": "555-9999", "Revenue": 100,
         "Active": False, "Created": dt.date(2023, 1, 15),
         "Owner": {"Name": "adam"}},
        {"Id": "a3", "Name": "Cobalt", "Phone": None, "Revenue": None,
         "Active": True, "Created": None, "Owner": None},
        {"Id": "a4", "Name": "delta", "Phone": "555-0000", "Revenue": 200,
         "Active": False, "Created": dt.date(2025, 7, 9),
         "Owner": {"Name": "Mia"}},
    ]
