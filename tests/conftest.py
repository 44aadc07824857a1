"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest

from catalog_merger.config import get_settings
from catalog_merger.storage import SlotStore


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are re-read from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store(tmp_path):
    """Slot store in a temporary directory."""
    return SlotStore(str(tmp_path / "slots"))


@pytest.fixture
def primary_records():
    """Primary listing: one shared SKU, one listing-only SKU, one unkeyed row."""
    return [
        {
            "SKU": "B34X1V1",
            "EAN": "4000000000011",
            "Category": "Garden",
            "Title": "Listing title X1",
            "Brand": "Acme",
            "Price": "10",
            "Stock": "5",
            "Description 1": "Listing text",
            "image1": "https://img.example.com/x1-a.jpg",
            "image2": "",
        },
        {
            "SKU": "B34P2V1",
            "EAN": "4000000000028",
            "Category": "Kitchen",
            "Title": "Pan P2",
            "Brand": "Cookco",
            "Price": "25",
            "Stock": "0",
            "Description 1": "",
            "image1": "",
            "image2": "",
        },
        {
            "SKU": "",
            "EAN": "",
            "Category": "Orphans",
            "Title": "No SKU",
            "Brand": "",
            "Price": "1",
            "Stock": "1",
            "Description 1": "",
            "image1": "",
            "image2": "",
        },
    ]


@pytest.fixture
def secondary_records():
    """Product information: the shared SKU plus one information-only SKU."""
    return [
        {
            "SKU": "X1",
            "EAN": "4000000000011",
            "Name": "Acme X1 Widget",
            "Title": "Widgets for gardens",
            "Brand": "Acme",
            "Category": "Widgets",
            "Material": "Steel",
            "Product size/cm": "10x10",
            "Package size/cm L": "12",
            "Package size/cm W": "12",
            "Package size/cm H": "3",
            "Net weight/kg": "0.5",
            "Gross weight/kg": "0.7",
            "Volume/CBM": "0.0004",
            "Color": "Grey",
            "Description 1": "d1",
            "Description 2": "",
            "Specifications": "",
            "image1": "https://img.example.com/info-x1.jpg",
        },
        {
            "SKU": "S9",
            "EAN": "4000000000097",
            "Name": "Bolt S9 Lamp",
            "Title": "Lamps",
            "Brand": "Bolt",
            "Category": "Lighting",
            "Material": "Glass",
            "Product size/cm": "20",
            "Package size/cm L": "22",
            "Package size/cm W": "22",
            "Package size/cm H": "30",
            "Net weight/kg": "1",
            "Gross weight/kg": "1.3",
            "Volume/CBM": "0.015",
            "Color": "White",
            "Description 1": "Bright",
            "Description 2": "Warm",
            "Specifications": "E27, 60W",
            "image1": "https://img.example.com/s9.jpg",
        },
    ]
