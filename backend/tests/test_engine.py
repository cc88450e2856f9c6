"""Tests for the month simulator: cash flow netting, transfers, growth, provenance."""
from datetime import date, datetime, timezone

from planner.models.account import Account
from planner.models.cashflow import Cashflow, PercentageOf, Recurrence
from planner.models.scenario import Scenario
from planner.projection.engine import project_finances

NOW = datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)


def _make_account(acc_id, kind="reserve", balance=0, **overrides) -> Account:
    return Account(id=acc_id, name=overrides.pop("name", acc_id), kind=kind,
                   opening_balance_cents=balance, **overrides)


def _make_cashflow(cf_id, account_id, amount, frequency="monthly", start=date(2025, 1, 1), **overrides) -> Cashflow:
    recurrence = Recurrence(
        frequency=frequency,
        start_date=start,
        annual_indexation_pct=overrides.pop("indexation", None),
        end_date=overrides.pop("end", None),
    )
    return Cashflow(id=cf_id, account_id=account_id, amount_cents=amount,
                    description=overrides.pop("description", cf_id), recurrence=recurrence, **overrides)


def _project(accounts, cashflows, months=1, scenario=None):
    return project_finances(accounts, cashflows, months, scenario, now=NOW)


# --- Month labels and horizon ---


def test_months_anchored_to_now():
    result = _project([_make_account("a")], [], months=3)
    assert [m.month for m in result.months] == ["2025-01", "2025-02", "2025-03"]
    assert [m.month_index for m in result.months] == [0, 1, 2]
    assert result.summary.projection_date == NOW


def test_zero_horizon():
    result = _project([_make_account("a", balance=123)], [], months=0)
    assert result.months == []
    assert result.summary.start_net_worth == 123
    assert result.summary.end_net_worth == 123
    assert result.summary.total_return == 0
    assert result.summary.average_savings_rate == 0.0
    assert result.payoff_projections == []


# --- Cash flow direction ---


def test_income_account_accumulates_income():
    accounts = [_make_account("acc-income", kind="income", balance=100_000_000)]
    flows = [_make_cashflow("cf-salary", "acc-income", 5_000_000)]
    month = _project(accounts, flows).months[0]
    data = month.accounts["acc-income"]
    assert data.income == 5_000_000
    assert data.expenses == 0
    assert data.net_cashflow == 5_000_000
    assert data.closing_balance == 105_000_000
    assert month.total_income == 5_000_000
    assert month.total_expenses == 0
    assert month.savings_rate == 1.0


def test_expense_account_accumulates_expenses():
    accounts = [
        _make_account("acc-income", kind="income"),
        _make_account("acc-expense", kind="expense"),
    ]
    flows = [
        _make_cashflow("cf-salary", "acc-income", 5_000_000),
        _make_cashflow("cf-rent", "acc-expense", 1_500_000),
    ]
    month = _project(accounts, flows).months[0]
    assert month.accounts["acc-expense"].expenses == 1_500_000
    assert month.accounts["acc-expense"].closing_balance == -1_500_000
    assert month.total_expenses == 1_500_000
    assert month.savings_rate == (5_000_000 - 1_500_000) / 5_000_000


def test_percentage_of_salary_in_same_month():
    accounts = [
        _make_account("acc-income", kind="income", balance=100_000_000),
        _make_account("acc-expense", kind="expense"),
    ]
    flows = [
        _make_cashflow("cf-salary", "acc-income", 5_000_000),
        _make_cashflow("cf-tax", "acc-expense", 850_000, percentage_of=PercentageOf(
            source_type="cashflow", source_id="cf-salary", percentage=0.17)),
    ]
    month = _project(accounts, flows).months[0]
    assert month.accounts["acc-income"].income == 5_000_000
    assert month.accounts["acc-expense"].expenses == 850_000


def test_percentage_of_account_reads_opening_balance():
    accounts = [
        _make_account("acc-expense", kind="expense"),
        _make_account("acc-loan", kind="liability", balance=-200_000_000, name="Home Loan"),
    ]
    flows = [
        _make_cashflow("cf-interest", "acc-expense", 0, percentage_of=PercentageOf(
            source_type="account", source_id="acc-loan", percentage=0.01)),
    ]
    month = _project(accounts, flows).months[0]
    assert month.accounts["acc-expense"].expenses == 2_000_000
    assert month.accounts["acc-loan"].opening_balance == -200_000_000


def test_percentage_of_account_independent_of_account_order():
    loan = _make_account("acc-loan", kind="liability", balance=-1_000_000)
    checking = _make_account("acc-checking", balance=10_000_000)
    flows = [
        _make_cashflow("cf-pay", "acc-checking", 100_000, target_account_id="acc-loan"),
        _make_cashflow("cf-extra", "acc-checking", 0, target_account_id="acc-loan",
                       percentage_of=PercentageOf(source_type="account", source_id="acc-loan", percentage=0.10)),
    ]
    first = _project([loan, checking], flows, months=3)
    second = _project([checking, loan], flows, months=3)
    for a, b in zip(first.months, second.months):
        assert a.accounts["acc-loan"].closing_balance == b.accounts["acc-loan"].closing_balance


def test_indexed_amount_at_month_twelve():
    accounts = [_make_account("acc-income", kind="income")]
    flows = [_make_cashflow("cf-salary", "acc-income", 5_000_000, start=date(2024, 1, 1), indexation=0.05)]
    month = _project(accounts, flows).months[0]
    assert month.accounts["acc-income"].income == round(5_000_000 * 1.05)


def test_inactive_flows_contribute_nothing():
    accounts = [_make_account("acc-expense", kind="expense")]
    flows = [
        _make_cashflow("cf-future", "acc-expense", 100, start=date(2025, 6, 1)),
        _make_cashflow("cf-ended", "acc-expense", 100, start=date(2024, 1, 1), end=date(2024, 12, 31)),
        _make_cashflow("cf-quarterly", "acc-expense", 300, frequency="quarterly", start=date(2024, 12, 1)),
    ]
    result = _project(accounts, flows, months=4)
    expenses = [m.accounts["acc-expense"].expenses for m in result.months]
    assert expenses == [0, 0, 300, 0]


def test_unresolvable_reference_does_not_raise():
    accounts = [_make_account("acc-expense", kind="expense")]
    flows = [_make_cashflow("cf-ghost", "acc-expense", 999, percentage_of=PercentageOf(
        source_type="cashflow", source_id="missing", percentage=0.5))]
    month = _project(accounts, flows).months[0]
    assert month.accounts["acc-expense"].expenses == 0


def test_flow_for_unknown_account_ignored():
    accounts = [_make_account("acc-a", balance=500)]
    flows = [_make_cashflow("cf-x", "acc-missing", 100)]
    month = _project(accounts, flows).months[0]
    assert month.accounts["acc-a"].closing_balance == 500
    assert month.total_expenses == 0


# --- Transfers ---


def test_transfer_debits_owner_and_credits_target():
    accounts = [
        _make_account("acc-checking", balance=1_000_000),
        _make_account("acc-savings", kind="investment", balance=0),
    ]
    flows = [_make_cashflow("cf-save", "acc-checking", 250_000, target_account_id="acc-savings")]
    month = _project(accounts, flows).months[0]
    assert month.accounts["acc-checking"].closing_balance == 750_000
    savings = month.accounts["acc-savings"]
    assert savings.transfers_in == 250_000
    assert savings.net_cashflow == 250_000
    assert savings.income == 0 and savings.expenses == 0
    assert savings.closing_balance == 250_000


def test_transfer_credit_not_counted_as_income():
    accounts = [
        _make_account("acc-checking", balance=1_000_000),
        _make_account("acc-savings", kind="investment"),
    ]
    flows = [_make_cashflow("cf-save", "acc-checking", 250_000, target_account_id="acc-savings")]
    month = _project(accounts, flows).months[0]
    assert month.total_income == 0
    assert month.total_expenses == 250_000


def test_transfer_from_income_account_debits_owner():
    accounts = [
        _make_account("acc-income", kind="income", balance=1_000_000),
        _make_account("acc-savings", kind="investment"),
    ]
    flows = [_make_cashflow("cf-sweep", "acc-income", 400_000, target_account_id="acc-savings")]
    month = _project(accounts, flows).months[0]
    assert month.accounts["acc-income"].closing_balance == 600_000
    assert month.accounts["acc-savings"].closing_balance == 400_000
    assert month.total_income == 0


# --- Interest and appreciation ---


def test_interest_uses_average_balance():
    accounts = [
        _make_account("acc-checking", balance=10_000_000),
        _make_account("acc-inv", kind="investment", balance=1_000_000, annual_interest_rate=0.12),
    ]
    flows = [_make_cashflow("cf-invest", "acc-checking", 200_000, target_account_id="acc-inv")]
    data = _project(accounts, flows).months[0].accounts["acc-inv"]
    calc = data.calculation_details.interest_calculation
    assert calc.values["Principal (P)"] == 1_100_000
    assert data.interest_earned == 11_000
    assert data.closing_balance == 1_000_000 + 200_000 + 11_000


def test_property_appreciates_on_opening_balance():
    accounts = [_make_account("acc-home", kind="investment", balance=280_000_000,
                              is_property=True, property_appreciation_rate=0.06)]
    data = _project(accounts, []).months[0].accounts["acc-home"]
    assert abs(data.interest_earned - 1_400_000) <= 1
    assert data.calculation_details.appreciation_calculation is not None
    assert data.calculation_details.interest_calculation is None


def test_interest_and_appreciation_both_applied():
    accounts = [_make_account("acc-x", kind="investment", balance=12_000_000, annual_interest_rate=0.12,
                              is_property=True, property_appreciation_rate=0.12)]
    data = _project(accounts, []).months[0].accounts["acc-x"]
    details = data.calculation_details
    assert data.interest_earned == details.interest_calculation.result + details.appreciation_calculation.result
    assert data.closing_balance == 12_000_000 + data.interest_earned


def test_zero_rate_still_emits_interest_provenance():
    accounts = [_make_account("acc-x", balance=1_000, annual_interest_rate=0.0)]
    data = _project(accounts, []).months[0].accounts["acc-x"]
    assert data.interest_earned == 0
    assert data.calculation_details.interest_calculation.formula == "No rate set"


def test_no_rate_no_details():
    data = _project([_make_account("acc-x", balance=1_000)], []).months[0].accounts["acc-x"]
    assert data.calculation_details is None


def test_liability_interest_increases_debt():
    accounts = [_make_account("acc-card", kind="liability", balance=-1_000_000, annual_interest_rate=0.24)]
    data = _project(accounts, []).months[0].accounts["acc-card"]
    assert data.interest_earned == -20_000
    assert data.closing_balance == -1_020_000


# --- Scenario ---


def test_scenario_applied_before_simulation():
    accounts = [_make_account("acc-card", kind="liability")]
    flows = [
        _make_cashflow("cf-rent", "acc-card", 1_000_000, description="Rent"),
        _make_cashflow("cf-fun", "acc-card", 200_000, description="Entertainment"),
    ]
    scenario = Scenario(id="s", name="Cut back", spend_adjustment_pct=-0.5, scope="discretionary")
    month = _project(accounts, flows, scenario=scenario).months[0]
    assert month.total_expenses == 1_000_000 + 100_000
    # Caller's flows untouched
    assert flows[1].amount_cents == 200_000


# --- Provenance ---


def _transparency_inputs():
    accounts = [
        _make_account("savings", kind="investment", balance=100_000_000, name="Savings Account",
                      annual_interest_rate=0.06, compounds_per_year=12),
        _make_account("homeloan", kind="liability", balance=-200_000_000, name="Home Loan",
                      annual_interest_rate=0.08, compounds_per_year=12),
    ]
    flows = [
        _make_cashflow("salary", "savings", 5_000_000, start=date(2024, 1, 1), indexation=0.05,
                       description="Monthly Salary"),
        _make_cashflow("loan-payment", "homeloan", 0, description="Home Loan Payment",
                       percentage_of=PercentageOf(source_type="account", source_id="homeloan", percentage=0.01)),
    ]
    return accounts, flows


def test_interest_provenance_present():
    accounts, flows = _transparency_inputs()
    calc = _project(accounts, flows).months[0].accounts["savings"].calculation_details.interest_calculation
    assert calc.description == "Compound Interest Calculation"
    assert calc.values["Annual Rate (r)"] == "6.00%"
    assert calc.result > 0


def test_percentage_provenance_present():
    accounts, flows = _transparency_inputs()
    steps = _project(accounts, flows).months[0].accounts["homeloan"].calculation_details.cashflow_calculations
    assert len(steps) == 1
    assert steps[0].formula == "Amount = Account Balance × Percentage"
    assert "Home Loan" in steps[0].description
    assert steps[0].values["Account Type"] == "liability"
    assert steps[0].result == 2_000_000


def test_indexation_provenance_present():
    accounts, flows = _transparency_inputs()
    steps = _project(accounts, flows, months=6).months[5].accounts["savings"].calculation_details.cashflow_calculations
    indexation = [s for s in steps if s.description.startswith("Annual Indexation")]
    assert len(indexation) == 1
    assert indexation[0].values["Indexation Rate"] == "5.00%"


def test_calculation_summary_matches_totals():
    accounts, flows = _transparency_inputs()
    accounts.append(_make_account("acc-income", kind="income"))
    flows.append(_make_cashflow("cf-pay", "acc-income", 3_000_000))
    for month in _project(accounts, flows, months=3).months:
        summary = month.calculation_summary
        assert summary.total_income_calculation.result == month.total_income
        assert summary.total_expenses_calculation.result == month.total_expenses
        assert summary.net_worth_calculation.result == month.total_net_worth
        assert summary.net_worth_calculation.formula == "Sum of assets minus liabilities"
        assert abs(summary.savings_rate_calculation.result - month.savings_rate) < 1e-12
        for key in ("Total Income", "Total Expenses", "Net Savings"):
            assert key in summary.savings_rate_calculation.values
