"""Operating-mode enums selecting between pipeline strategies."""

from enum import Enum


class PricingMode(str, Enum):
    """How the identifier column of a record is interpreted."""

    DIRECT = "direct"  # identifier is already the catalog item id
    REFERENCE_LOOKUP = "reference_lookup"  # identifier is a RefId resolved remotely


class PriceUnits(str, Enum):
    """Price text conversion policy."""

    MINOR_UNIT_ROUNDED = "minor_unit_rounded"
    MAJOR_UNIT_INTEGER = "major_unit_integer"


class EndpointLayout(str, Enum):
    """Base URL layout of the catalog account."""

    SINGLE = "single"  # {account}.vtexcommercestable.com.br/api for everything
    SPLIT = "split"  # pricing served from api.vtex.com/{account}
