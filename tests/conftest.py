"""
Pytest configuration for local imports and shared order fixtures.
"""

# Standard Library
import datetime
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

SUBMITTED_AT = datetime.datetime(2024, 3, 5, 14, 30, tzinfo=datetime.timezone.utc)


#============================================
@pytest.fixture
def submitted_at() -> datetime.datetime:
	"""
	Fixed submission time so documents are reproducible.
	"""
	return SUBMITTED_AT


#============================================
@pytest.fixture
def acme_payload() -> dict:
	"""
	One standard green/white label with var1 only, quantity 3.
	"""
	return {
		"refId": "ORD-1001",
		"contactName": "Jane Doe",
		"contactEmail": "jane@example.com",
		"labels": [
			{
				"size": "30mm-standard",
				"color": "green-white",
				"corners": "rounded",
				"notch": "none",
				"var1": "ACME",
				"quantity": 3,
			}
		],
	}


#============================================
@pytest.fixture
def mixed_payload() -> dict:
	"""
	Several labels covering small, short and high-contrast variants.
	"""
	return {
		"refId": "ORD-2002",
		"contactName": "Sam Lee",
		"labels": [
			{
				"size": "22mm",
				"color": "white-black",
				"notch": "all",
				"font": "Arial",
				"var1": "TOP",
				"var2": "MIDDLE",
				"var3": "HIDDEN",
				"var5": "L",
				"var6": "R",
				"quantity": 2,
			},
			{
				"size": "30mm-short",
				"color": "red-white",
				"var1": "SHORT",
				"var2": "GONE",
				"var4": "ABOVE",
				"var4Size": 12,
			},
			{
				"size": "30mm-standard",
				"color": "blue-white",
				"corners": "rounded",
				"notch": "top",
				"var1": "ONE",
				"var2": "TWO",
				"var3": "THREE",
				"positions": {"var1": {"x": 70, "y": 24}},
				"quantity": 4,
			},
		],
	}
