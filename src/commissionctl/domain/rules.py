"""Fee rule models.

Field aliases follow the JSON served by the fee schedule API, e.g.::

    {"percents": 0.03, "max": {"amount": 5, "currency": "EUR"}}
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Money(BaseModel):
    """An amount in a named currency."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(ge=0)
    currency: str = "EUR"


class DepositRule(BaseModel):
    """Cash-in rule: a percentage, optionally capped."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    percent_rate: Decimal = Field(alias="percents", ge=0)
    cap: Money | None = Field(default=None, alias="max")

    @property
    def bound_amount(self) -> Decimal | None:
        return self.cap.amount if self.cap else None

    @property
    def currency(self) -> str | None:
        return self.cap.currency if self.cap else None


class OrganizationWithdrawalRule(BaseModel):
    """Cash-out rule for juridical persons: a percentage with a minimum fee."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    percent_rate: Decimal = Field(alias="percents", ge=0)
    floor: Money | None = Field(default=None, alias="min")

    @property
    def bound_amount(self) -> Decimal | None:
        return self.floor.amount if self.floor else None

    @property
    def currency(self) -> str | None:
        return self.floor.currency if self.floor else None


class IndividualWithdrawalRule(BaseModel):
    """Cash-out rule for natural persons: a percentage above a weekly free volume."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    percent_rate: Decimal = Field(alias="percents", ge=0)
    week_limit: Money

    @property
    def weekly_free_allowance(self) -> Decimal:
        return self.week_limit.amount

    @property
    def currency(self) -> str:
        return self.week_limit.currency


class FeeSchedule(BaseModel):
    """The three rules a run is priced with."""

    model_config = ConfigDict(frozen=True)

    cash_in: DepositRule
    cash_out_juridical: OrganizationWithdrawalRule
    cash_out_natural: IndividualWithdrawalRule
