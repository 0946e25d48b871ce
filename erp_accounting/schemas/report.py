"""
Pydantic schemas for the financial reports.

Serialized keys are camelCase (totalAsset, netIncome, ...) to
match the report payload consumers already read.
"""

from decimal import Decimal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from erp_accounting.schemas.common import Amount


class ReportLine(BaseModel):
    """One account's row in a report."""
    id: int
    code: str
    name: str
    balance: Amount


class BalanceSheet(BaseModel):
    asset: list[ReportLine] = Field(default_factory=list)
    liability: list[ReportLine] = Field(default_factory=list)
    capital: list[ReportLine] = Field(default_factory=list)
    total_asset: Amount = Decimal("0")
    total_liability: Amount = Decimal("0")
    total_capital: Amount = Decimal("0")

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class IncomeStatement(BaseModel):
    income: list[ReportLine] = Field(default_factory=list)
    expense: list[ReportLine] = Field(default_factory=list)
    total_income: Amount = Decimal("0")
    total_expense: Amount = Decimal("0")
    net_income: Amount = Decimal("0")

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
