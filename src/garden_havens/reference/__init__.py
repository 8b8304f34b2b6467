"""Static reference data.

Data that doesn't change with API calls: the default species catalog and
IUCN Red List category styling.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from garden_havens.reference.catalog import DEFAULT_SPECIES as DEFAULT_SPECIES
from garden_havens.reference.iucn import CATEGORIES as CATEGORIES
from garden_havens.reference.iucn import VALID_CATEGORIES as VALID_CATEGORIES
from garden_havens.reference.iucn import IucnCategory as IucnCategory
from garden_havens.reference.iucn import category_info as category_info
