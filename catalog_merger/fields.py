"""Field composition rules for unified catalog records.

Each unified record comes from exactly one of three rules, chosen by the
joiner:

- both datasets carry the SKU: descriptive and physical attributes come from
  the secondary (product information) record, commercial attributes and
  images from the primary record
- primary only: the primary record's own listing fields
- secondary only: the product information fields

The precedence of sources is a business policy; keep it as is.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Tuple

from .records import Record, cell
from .sku import SKU_FIELD, raw_sku

DESCRIPTION_COUNT = 5
IMAGE_COUNT = 12

DESCRIPTION_FIELDS: Tuple[str, ...] = tuple(f"Description {i}" for i in range(1, DESCRIPTION_COUNT + 1))
IMAGE_FIELDS: Tuple[str, ...] = tuple(f"image{i}" for i in range(1, IMAGE_COUNT + 1))
SPECIFICATIONS_FIELD = 'Specifications'
DESCRIPTION_SEPARATOR = '\n\n'

# Output column -> secondary (product information) column.
PHYSICAL_FIELDS: Tuple[Tuple[str, str], ...] = (
    ('Product size', 'Product size/cm'),
    ('Package size Length', 'Package size/cm L'),
    ('Package size Width', 'Package size/cm W'),
    ('Package size Height', 'Package size/cm H'),
    ('Net weight', 'Net weight/kg'),
    ('Gross weight', 'Gross weight/kg'),
    ('Volume/CBM', 'Volume/CBM'),
    ('Color', 'Color'),
)


def numbered_values(record: Mapping[str, Any], family: Iterable[str]) -> List[str]:
    """Non-empty values of a numbered field family, in family order."""
    return [v for v in (cell(record, key) for key in family) if v]


def image_fields(record: Mapping[str, Any]) -> Dict[str, str]:
    return {key: cell(record, key) for key in IMAGE_FIELDS if cell(record, key)}


def join_description(segments: Iterable[str]) -> str:
    return DESCRIPTION_SEPARATOR.join(s for s in segments if s)


def clean_title(name: str, brand: str, sku_candidates: Iterable[str]) -> str:
    """Strip a leading brand and the first SKU occurrence from a product name.

    'Acme X1 Widget', brand 'Acme', SKUs ['X1'] -> 'Widget'
    """
    title = name or ''
    if not title:
        return ''

    if brand and title.startswith(brand):
        title = title[len(brand):].strip()

    for sku in sku_candidates:
        if sku and sku in title:
            title = title.replace(sku, '', 1).strip()
            break
    return title


def _physical_fields(secondary: Mapping[str, Any]) -> Record:
    return {out: cell(secondary, src) for out, src in PHYSICAL_FIELDS}


def compose_both(normalized: str, primary: Mapping[str, Any], secondary: Mapping[str, Any]) -> Record:
    title = clean_title(
        cell(secondary, 'Name'),
        cell(secondary, 'Brand'),
        (raw_sku(primary), raw_sku(secondary), normalized),
    )
    description = join_description(
        numbered_values(secondary, DESCRIPTION_FIELDS) + [cell(primary, DESCRIPTION_FIELDS[0])]
    )

    record: Record = {
        SKU_FIELD: normalized,
        'EAN': cell(primary, 'EAN'),
        'Subcategory': cell(primary, 'Category'),
        'Category': cell(secondary, 'Category'),
        'Price': cell(primary, 'Price'),
        'Stock': cell(primary, 'Stock'),
        'Material': cell(secondary, 'Material'),
        'Title': title,
        'Brand': cell(secondary, 'Brand'),
    }
    record.update(_physical_fields(secondary))
    record['description'] = description
    record.update(image_fields(primary))
    return record


def compose_primary_only(normalized: str, primary: Mapping[str, Any]) -> Record:
    record: Record = {
        SKU_FIELD: normalized,
        'EAN': cell(primary, 'EAN'),
        'Brand': cell(primary, 'Brand'),
        'Category': cell(primary, 'Category'),
        'Title': cell(primary, 'Title'),
        'Price': cell(primary, 'Price'),
        'Stock': cell(primary, 'Stock'),
        'description': cell(primary, DESCRIPTION_FIELDS[0]),
    }
    record.update(image_fields(primary))
    return record


def compose_secondary_only(normalized: str, secondary: Mapping[str, Any]) -> Record:
    title = clean_title(cell(secondary, 'Name'), cell(secondary, 'Brand'), (raw_sku(secondary),))
    description = join_description(
        numbered_values(secondary, DESCRIPTION_FIELDS) + [cell(secondary, SPECIFICATIONS_FIELD)]
    )

    record: Record = {
        SKU_FIELD: normalized,
        'EAN': cell(secondary, 'EAN'),
        'Material': cell(secondary, 'Material'),
        'Title': title,
        'Subcategory': cell(secondary, 'Title'),
        'Category': cell(secondary, 'Category'),
        'Brand': cell(secondary, 'Brand'),
    }
    record.update(_physical_fields(secondary))
    record['description'] = description
    record.update(image_fields(secondary))
    return record
