"""Pydantic schemas for dataset export/import."""

from pydantic import BaseModel


class ImportSummaryResponse(BaseModel):
    """Summary of a dataset import."""

    model_config = {"from_attributes": True}

    accounts_imported: int
    categories_imported: int
    transactions_imported: int
    accounts_replaced: int
    categories_replaced: int
    transactions_replaced: int
