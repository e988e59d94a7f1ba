import pytest

from partner_comp.config.models import EngineSettings
from partner_comp.engines.proration import (
    NO_DELAYED_W2,
    default_trailing_md_amount,
    delayed_w2_payment,
    employee_portion_of_year,
    partner_fte_weight,
    partner_portion_of_year,
    trailing_md_amount,
)


@pytest.mark.parametrize(
    "ptype, fields, expected",
    [
        ("employee", {}, 1.0),
        ("employee", {"employee_portion_of_year": 0.3}, 1.0),
        ("newEmployee", {"start_portion_of_year": 0.25}, 0.75),
        ("newEmployee", {}, 1.0),
        ("employeeToTerminate", {"terminate_portion_of_year": 0.4}, 0.4),
        ("employeeToTerminate", {}, 1.0),
        ("employeeToPartner", {"employee_portion_of_year": 0.5}, 0.5),
        ("employeeToPartner", {}, 0.0),
        ("partner", {}, 0.0),
        ("partnerToRetire", {"partner_portion_of_year": 0.5}, 0.0),
    ],
)
def test_employee_portion_of_year(physician, ptype, fields, expected):
    assert employee_portion_of_year(physician("x", ptype, **fields)) == pytest.approx(expected)


@pytest.mark.parametrize(
    "ptype, fields, expected",
    [
        ("partner", {}, 1.0),
        ("employeeToPartner", {"employee_portion_of_year": 0.25}, 0.75),
        ("employeeToPartner", {}, 1.0),
        ("partnerToRetire", {"partner_portion_of_year": 0.6}, 0.6),
        ("partnerToRetire", {}, 0.0),
        ("employee", {}, 0.0),
        ("newEmployee", {"start_portion_of_year": 0.5}, 0.0),
    ],
)
def test_partner_portion_of_year(physician, ptype, fields, expected):
    assert partner_portion_of_year(physician("x", ptype, **fields)) == pytest.approx(expected)


def test_fte_weight_full_year_partner(physician):
    assert partner_fte_weight(physician("a", "partner")) == 1.0
    assert partner_fte_weight(physician("a", "partner", weeks_off=4)) == pytest.approx(48 / 52)


def test_fte_weight_clamps_weeks_off(physician):
    assert partner_fte_weight(physician("a", "partner", weeks_off=30)) == pytest.approx(28 / 52)

    settings = EngineSettings(max_weeks_off=10)
    assert partner_fte_weight(physician("a", "partner", weeks_off=30), settings) == pytest.approx(
        42 / 52
    )


def test_fte_weight_subtracts_weeks_off_from_partner_period(physician):
    retiring = physician("r", "partnerToRetire", partner_portion_of_year=0.5, weeks_off=4)
    assert partner_fte_weight(retiring) == pytest.approx(22 / 52)

    short = physician("r", "partnerToRetire", partner_portion_of_year=0.25, weeks_off=20)
    assert partner_fte_weight(short) == 0


def test_fte_weight_zero_for_non_partners(physician):
    assert partner_fte_weight(physician("e", "employee", weeks_off=2)) == 0
    assert partner_fte_weight(physician("r", "partnerToRetire")) == 0


def test_delayed_w2_only_for_transitions(physician):
    assert delayed_w2_payment(physician("a", "partner", salary=300_000), 2025) is NO_DELAYED_W2
    assert delayed_w2_payment(physician("e", "employee", salary=300_000), 2025) is NO_DELAYED_W2


def test_delayed_w2_transition_on_jan_1_2025(physician):
    # $100/hour; Dec 16-20, Dec 23-27 paid Jan 3 and Dec 30-31 paid Jan 17
    p = physician("d", "employeeToPartner", salary=208_000, employee_portion_of_year=0)
    payment = delayed_w2_payment(p, 2025)

    assert payment.amount == 9_600
    assert payment.taxes == 953
    assert payment.period_details == (
        "12/14-12/27 (paid 1/3, 10 work days), 12/28-12/31 (paid 1/17, 2 work days)"
    )


def test_delayed_w2_transition_on_jan_1_2026(physician):
    p = physician("d", "employeeToPartner", salary=208_000, employee_portion_of_year=0)
    payment = delayed_w2_payment(p, 2026)

    assert payment.amount == 10_400
    assert payment.taxes == 1_029


def test_delayed_w2_skips_periods_paid_before_transition(physician):
    # Transition Jan 8, 2026: the Jan 2 paycheck was still an employee paycheck
    p = physician("d", "employeeToPartner", salary=208_000, employee_portion_of_year=0.02)
    assert delayed_w2_payment(p, 2026).amount == 2_400

    # Transition in July: nothing from the prior year is left to pay
    p = physician("d", "employeeToPartner", salary=208_000, employee_portion_of_year=0.5)
    payment = delayed_w2_payment(p, 2026)
    assert payment.amount == 0
    assert payment.taxes == 0
    assert payment.period_details == ""


def test_delayed_w2_override(physician):
    settings = EngineSettings(
        delayed_w2_overrides=[
            {"name": "Connor", "year": 2025, "amount": 15_289.23, "taxes": 1_493.36},
        ]
    )
    p = physician("c", "employeeToPartner", name="Connor", salary=1, employee_portion_of_year=0)

    payment = delayed_w2_payment(p, 2025, settings)
    assert payment.amount == 15_289.23
    assert payment.taxes == 1_493.36
    assert payment.period_details == "manual override"

    # Other years are computed normally
    assert delayed_w2_payment(p, 2026, settings).amount == 0


def test_trailing_md_amount_lookup(physician):
    settings = EngineSettings(default_trailing_md_amount=2_500, trailing_md_amounts={"HW": 8_302.5})
    hw = physician("hw", "partnerToRetire", name="HW")
    other = physician("o", "partnerToRetire", name="Other")
    explicit = physician("x", "partnerToRetire", name="HW", trailing_shared_md_amount=1_000)
    explicit_zero = physician("z", "partnerToRetire", name="HW", trailing_shared_md_amount=0)

    assert default_trailing_md_amount(hw, settings) == 8_302.5
    assert default_trailing_md_amount(other, settings) == 2_500
    assert trailing_md_amount(explicit, settings) == 1_000
    assert trailing_md_amount(explicit_zero, settings) == 0
    assert trailing_md_amount(hw) == 0
