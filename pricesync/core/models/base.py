"""Record models flowing through the synchronization pipeline."""

from pydantic import BaseModel, Field
from pydantic import ConfigDict as PydanticConfigDict


class RawRecord(BaseModel):
    """单行原始记录 (标识符, 价格文本)."""

    reference_code: str
    price_text: str
    line_number: int | None = None


class ParsedUpdate(BaseModel):
    """价格解析后的更新意图."""

    reference_code: str
    amount_minor_units: int = Field(ge=0)

    model_config = PydanticConfigDict(frozen=True)


class ResolvedUpdate(BaseModel):
    """已解析出内部 SKU 标识的更新."""

    item_id: str
    reference_code: str
    amount_minor_units: int = Field(ge=0)

    model_config = PydanticConfigDict(frozen=True)

    @classmethod
    def direct(cls, update: ParsedUpdate) -> "ResolvedUpdate":
        """Build an update whose reference code already is the item id."""
        return cls(
            item_id=update.reference_code,
            reference_code=update.reference_code,
            amount_minor_units=update.amount_minor_units,
        )
