from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

# South African income tax brackets for 2024/25 as (upper bound, rate).
TAX_BRACKETS = [
    (237_100, 0.18),
    (370_500, 0.26),
    (512_800, 0.31),
    (673_000, 0.36),
    (857_900, 0.39),
    (1_817_000, 0.41),
]
TOP_TAX_RATE = 0.45

DEFAULT_ALLOCATION = {
    'investecFixedDeposit': 60.0,
    'houses': 25.0,
    'cars': 10.0,
    'otherExpenses': 5.0,
}
DEFAULT_JACKPOT_EUR = 74_000_000.0
DEFAULT_INTEREST_RATE = 10.5


@dataclass
class TaxCalculation:
    monthly_interest: float
    annual_interest: float
    taxable_amount: float
    tax_rate: float
    tax_owed: float
    net_monthly_income: float


@dataclass
class BudgetResult:
    jackpot_eur: float
    jackpot_zar: float
    exchange_rate: float
    interest_rate: float
    allocation: Dict[str, float]
    amounts: Dict[str, float]
    tax: TaxCalculation
    total_allocation: float = 0.0

    @property
    def allocation_valid(self) -> bool:
        return abs(self.total_allocation - 100) < 1e-9

    def to_dict(self) -> dict:
        return {
            'jackpotEUR': self.jackpot_eur,
            'jackpotZAR': self.jackpot_zar,
            'exchangeRate': self.exchange_rate,
            'interestRate': self.interest_rate,
            'allocation': dict(self.allocation),
            'amounts': dict(self.amounts),
            'totalAllocation': self.total_allocation,
            'allocationValid': self.allocation_valid,
            'tax': {
                'monthlyInterest': self.tax.monthly_interest,
                'annualInterest': self.tax.annual_interest,
                'taxableAmount': self.tax.taxable_amount,
                'taxRate': self.tax.tax_rate,
                'taxOwed': self.tax.tax_owed,
                'netMonthlyIncome': self.tax.net_monthly_income,
            },
        }


def convert_currency(amount: float, rate: float) -> float:
    return round(amount * rate, 2)


def tax_rate_for(annual_income: float) -> float:
    for upper, rate in TAX_BRACKETS:
        if annual_income <= upper:
            return rate
    return TOP_TAX_RATE


def calculate_tax(deposit_amount: float, interest_rate: float) -> TaxCalculation:
    monthly_interest = deposit_amount * interest_rate / 100 / 12
    annual_interest = monthly_interest * 12
    rate = tax_rate_for(annual_interest)
    tax_owed = annual_interest * rate
    return TaxCalculation(
        monthly_interest=monthly_interest,
        annual_interest=annual_interest,
        taxable_amount=annual_interest,
        tax_rate=rate,
        tax_owed=tax_owed,
        net_monthly_income=monthly_interest - tax_owed / 12,
    )


def calculate_budget(
    jackpot_eur: float,
    exchange_rate: float,
    interest_rate: float,
    allocation: Mapping[str, float] | None = None,
) -> BudgetResult:
    shares = dict(DEFAULT_ALLOCATION)
    if allocation:
        shares.update({key: float(value) for key, value in allocation.items() if key in DEFAULT_ALLOCATION})

    jackpot_zar = jackpot_eur * exchange_rate
    amounts = {key: jackpot_zar * pct / 100 for key, pct in shares.items()}
    tax = calculate_tax(amounts['investecFixedDeposit'], interest_rate)

    return BudgetResult(
        jackpot_eur=jackpot_eur,
        jackpot_zar=jackpot_zar,
        exchange_rate=exchange_rate,
        interest_rate=interest_rate,
        allocation=shares,
        amounts=amounts,
        tax=tax,
        total_allocation=sum(shares.values()),
    )
