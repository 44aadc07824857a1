"""
Test data factories.
"""


def make_unified(count, column="description"):
    """Unified-like records with SKU and every translatable column."""
    return [
        {
            "SKU": f"SKU{i}",
            "Title": f"Title {i}",
            "Category": f"Category {i}",
            "Subcategory": f"Subcategory {i}",
            column: f"Text {i}",
        }
        for i in range(count)
    ]
