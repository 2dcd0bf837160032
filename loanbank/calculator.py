"""Loan eligibility rules and EMI arithmetic."""

from __future__ import annotations

import enum
from dataclasses import dataclass

MONTHLY_RATE = 0.005833

HOME_LOAN_YEARS = (10, 15, 20, 25)


class Profession(enum.IntEnum):
    JOB_HOLDER = 1
    BUSINESS = 2


class EligibilityError(ValueError):
    """The applicant does not meet the requirements for a loan."""


@dataclass(frozen=True)
class LoanQuote:
    amount: float
    months: int
    emi: float
    repayment: float
    interest: float


def calculate_emi(amount: float, months: int) -> float:
    """Equated monthly instalment for ``amount`` over ``months`` months."""
    if months <= 0:
        raise ValueError("the repayment period must be at least one month")
    growth = (1 + MONTHLY_RATE) ** months
    return amount * MONTHLY_RATE * growth / (growth - 1)


def quote(amount: float, months: int) -> LoanQuote:
    """EMI, total repayment and total interest for a loan."""
    emi = calculate_emi(amount, months)
    repayment = emi * months
    return LoanQuote(amount, months, emi, repayment, repayment - amount)


_PERSONAL_TERMS = {
    Profession.JOB_HOLDER: (
        30000.0,
        ((40000.0, 500000.0, 36), (60000.0, 1000000.0, 60)),
        (2000000.0, 84),
    ),
    Profession.BUSINESS: (
        40000.0,
        ((50000.0, 300000.0, 24), (60000.0, 1000000.0, 36)),
        (2000000.0, 60),
    ),
}


def personal_loan_terms(profession, monthly_income: float) -> tuple[float, int]:
    """Loan limit in BDT and repayment months for a personal loan."""
    minimum, bands, top = _PERSONAL_TERMS[Profession(profession)]
    if monthly_income < minimum:
        raise EligibilityError(
            "Sorry !! You don't fullfill the minimum requirment of monthly income"
        )
    for ceiling, limit, months in bands:
        if monthly_income <= ceiling:
            return limit, months
    return top


_HOME_RULES = {
    Profession.JOB_HOLDER: (
        40000.0,
        2,
        0.4,
        "Minimum salary requirment is 40,000 BDT and minimum job exprience 2 years",
    ),
    Profession.BUSINESS: (
        50000.0,
        3,
        0.5,
        "Per month minimum profit requirment is 50,000 BDT and minimum 3 years "
        "of business operation",
    ),
}


def home_loan_limit(profession, monthly_income: float, experience: int, years: int) -> float:
    """Largest home loan in BDT for the given income, experience and term."""
    min_income, min_experience, share, message = _HOME_RULES[Profession(profession)]
    if monthly_income < min_income or experience < min_experience:
        raise EligibilityError(f"Sorry !! {message}")
    if years not in HOME_LOAN_YEARS:
        raise ValueError(f"return time must be one of {HOME_LOAN_YEARS} years")
    return monthly_income * share * years * 12


def amount_within_limit(amount: float, limit: float) -> bool:
    """Whether a requested amount is non-negative and within the limit."""
    return 0 <= amount <= limit