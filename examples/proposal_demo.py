#!/usr/bin/env python3
"""
Proposal and Financial Report Demonstration

This script walks through the advisory workflow:
1. Project a strategy proposal's account value
2. Build a client's financial report from their analysis record
3. Render both as text, Markdown, HTML and PDF

Run: python examples/proposal_demo.py
"""

from datetime import date

from prosperity_core import FinancialEngine
from prosperity_core.formatting import format_currency, format_percentage


def sample_client() -> dict:
    """A client record as stored by the portal."""
    return {
        "id": "3b9f6c2e-41d7-4a8e-9c55-1f2e3d4c5b6a",
        "name": "Maria Alvarez",
        "email": "maria.alvarez@example.com",
        "phone": "(555) 010-2233",
        "dateOfBirth": "1982-04-19",
        "spouseInfo": {"name": "Daniel Alvarez"},
        "children": [{"name": "Sofia"}, {"name": "Lucas"}],
    }


def sample_advisor() -> dict:
    return {"fullName": "Jordan Lee", "email": "jordan.lee@prosperityfin.com"}


def sample_proposal() -> dict:
    """A proposal record, keyed the way the proposal form saves it."""
    return {
        "id": "7d2a91c4-0b6e-4f3a-8e21-9a8b7c6d5e4f",
        "clientId": "3b9f6c2e-41d7-4a8e-9c55-1f2e3d4c5b6a",
        "title": "Tax-Free Retirement Income",
        "description": "An indexed universal life policy funded for twenty years to supplement retirement income.",
        "strategy": "lirp",
        "productType": "indexed_universal_life",
        "carrier": "ameritas",
        "initialLumpSum": "25000",
        "monthlyContribution": "750",
        "annualCOI": "1800",
        "yearsToPay": "20",
        "averageReturnPercentage": "6.5",
        "firstYearBonus": "2500",
        "deathBenefitAmount": "1250000",
        "livingBenefits": "750000",
        "terminalIllnessBenefit": "500000",
        "chronicIllnessBenefit": "250000",
        "criticalIllnessBenefit": "250000",
        "averageMonthlyCost": "750",
        "tenYearIncome": "320000",
        "lifetimeIncome": "1100000",
    }


def sample_analysis() -> dict:
    """A financial analysis record, including suffixed table keys."""
    return {
        "id": "a1",
        "clientId": "3b9f6c2e-41d7-4a8e-9c55-1f2e3d4c5b6a",
        "income_sources_fa7": [
            {"category": "salary", "description": "Primary Salary", "amount": "9500", "frequency": "monthly"},
            {"category": "salary", "description": "Spouse Salary", "amount": "6200", "frequency": "monthly"},
        ],
        "expenses_fa7": [
            {"category": "housing", "description": "Mortgage", "amount": "3400"},
            {"category": "transportation", "description": "Auto Loans & Fuel", "amount": "1100"},
            {"category": "food", "description": "Groceries & Dining", "amount": "1500"},
            {"category": "childcare", "description": "Activities & Tutoring", "amount": "800"},
            {"category": "other", "description": "Subscriptions", "amount": "n/a"},
        ],
        "assets": [
            {"category": "real_estate", "description": "Primary Residence", "amount": "720000"},
            {"category": "retirement", "description": "401(k)", "amount": "265000"},
            {"category": "cash", "description": "Savings", "amount": "42000"},
        ],
        "liabilities": [
            {"category": "mortgage", "description": "Mortgage", "amount": "410000", "interestRate": "3.25"},
            {"category": "auto", "description": "Auto Loans", "amount": "28000", "interestRate": "5.9"},
        ],
        "insuranceCalculator": {
            "annualIncome": "114000",
            "yearsToReplace": "15",
            "finalExpenses": "20000",
            "educationFund": "180000",
            "existingCoverage": "250000",
            "liquidAssets": "42000",
            "retirementAccounts": "265000",
        },
        "insurancePolicies": [
            {"carrier": "Mutual of Omaha", "policyType": "term_life", "coverageAmount": "500000",
             "annualPremium": "640"},
        ],
        "financialGoals": [
            {"title": "College Fund", "targetAmount": "240000", "currentAmount": "61000",
             "targetDate": "2032-08-15", "priority": "high", "category": "Education"},
            {"title": "Kitchen Remodel", "targetAmount": "45000", "currentAmount": "12000",
             "targetDate": "2026-05-01", "priority": "low"},
        ],
        "estateChecklist": {
            "will": {"completed": True, "lastUpdated": "2023-02-10"},
            "powerOfAttorney": {"completed": True},
            "healthcareDirective": {"completed": False, "notes": "Scheduled with attorney"},
            "beneficiaryDesignations": {"completed": True},
            "emergencyFund": {"completed": True},
        },
        "legacyWishes": "Provide for the children's education and support the local library.",
    }


def main():
    """Run the proposal and report demonstration."""
    today = date.today()
    engine = FinancialEngine()

    print("=" * 70)
    print("PROSPERITY CORE - Proposal & Financial Report Demo")
    print("=" * 70)
    print()

    # Step 1: Proposal projection
    print("Step 1: Projecting the proposal...")
    proposal = sample_proposal()
    projection = engine.project(proposal)
    print(f"  - Payment period: {projection.years_to_pay} years")
    print(f"  - Expected return: {format_percentage(projection.average_return_percentage)}")
    print(f"  - Total contributions: {format_currency(projection.total_contributions)}")
    print(f"  - Total COI / fees: {format_currency(projection.total_coi)}")
    print(f"  - Projected growth: {format_currency(projection.growth)}")
    print(f"  - Total accumulation: {format_currency(projection.final_value)}")
    print()

    # Step 2: Financial report
    print("Step 2: Building the client's financial report...")
    report = engine.build_report(sample_client(), sample_analysis(), advisor=sample_advisor(), today=today)
    print(f"  - Net worth: {format_currency(report.balance_sheet.net_worth)}")
    print(f"  - Monthly net cash flow: {format_currency(report.cashflow.net_income)}")
    print(f"  - Financial Independence Number: {format_currency(report.financial_independence_number)}")
    print(f"  - Coverage gap: {format_currency(max(report.insurance.coverage_gap, 0))}")
    print(f"  - Estate checklist: {report.estate.completed}/{report.estate.total} complete")
    for rec in report.recommendations:
        print(f"  - Recommendation: {rec.title}")
    print()

    # Step 3: Render
    print("Step 3: Rendering documents...")
    proposal_text = engine.render_proposal(proposal, sample_client(), sample_advisor(), format="text", today=today)
    print()
    print(proposal_text)

    print()
    print("-" * 70)
    print("Saving documents...")

    outputs = {
        "proposal.md": engine.render_proposal(proposal, sample_client(), sample_advisor(), format="markdown"),
        "proposal.html": engine.render_proposal(proposal, sample_client(), sample_advisor(), format="html"),
        "financial_report.txt": engine.render_report(report, format="text"),
        "financial_report.md": engine.render_report(report, format="markdown"),
        "financial_report.html": engine.render_report(report, format="html"),
    }
    for name, content in outputs.items():
        with open(name, "w", encoding="utf-8") as f:
            f.write(content)
        print(f"  - Saved: {name}")

    for name, content in {
        "proposal.pdf": engine.render_proposal(proposal, sample_client(), sample_advisor(), format="pdf"),
        "financial_report.pdf": engine.render_report(report, format="pdf"),
    }.items():
        with open(name, "wb") as f:
            f.write(content)
        print(f"  - Saved: {name}")

    print()
    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
