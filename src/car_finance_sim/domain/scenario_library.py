"""The car finance what-if story: seven decisions played in order."""

from __future__ import annotations

from decimal import Decimal

from car_finance_sim.domain.scenario import (
    ScenarioChoice,
    ScenarioGraph,
    ScenarioNode,
    Transition,
    TransitionKind,
)

KEEP = Transition(TransitionKind.KEEP)

INTEREST_RATE_INCREASE = ScenarioNode(
    id=0,
    title="Interest Rate Increase",
    description=(
        "After one year, your lender increases the interest rate on your finance by 1%. "
        "How would you like to respond?"
    ),
    choices=(
        ScenarioChoice(
            id="rate-up-keep-term",
            label="Accept higher monthly repayment (keep the same term)",
            transition=Transition(
                TransitionKind.CHANGE_RATE,
                rate_delta=Decimal("0.01"),
                months_elapsed=12,
            ),
            explanation=(
                "You kept the same term, but your monthly repayment increases immediately. "
                "This avoids extending the loan but costs more each month."
            ),
            next_node_id=1,
        ),
        ScenarioChoice(
            id="rate-up-extend-term",
            label="Extend the term by 12 months to reduce the monthly cost",
            transition=Transition(
                TransitionKind.CHANGE_RATE,
                rate_delta=Decimal("0.01"),
                term_delta=12,
                months_elapsed=12,
            ),
            explanation=(
                "You reduced your monthly repayment by extending the term, but you'll pay "
                "interest for longer and increase the total cost."
            ),
            next_node_id=1,
        ),
    ),
)

MISSED_PAYMENT = ScenarioNode(
    id=1,
    title="Missed Payment",
    description=(
        "You miss one monthly repayment due to an unexpected expense. "
        "Your lender gives you two options to get back on track."
    ),
    choices=(
        ScenarioChoice(
            id="catch-up-fee",
            label="Catch up next month and pay a €50 late fee",
            transition=Transition(TransitionKind.ADD_TO_PRINCIPAL, amount=Decimal("50")),
            explanation=(
                "You pay a small fee and stay close to your original schedule, "
                "but the cost of the loan increases slightly."
            ),
            next_node_id=2,
        ),
        ScenarioChoice(
            id="add-payment-end",
            label="Add the missed payment to the end of the loan (extend by 1 month)",
            transition=Transition(TransitionKind.CHANGE_TERM, term_delta=1),
            explanation=(
                "You avoid the fee, but extending the loan increases the overall interest paid."
            ),
            next_node_id=2,
        ),
    ),
)

UNEXPECTED_REPAIR_BILL = ScenarioNode(
    id=2,
    title="Unexpected Repair Bill",
    description=(
        "Your car needs an unexpected €1,200 repair. You don’t have the cash available. "
        "How do you handle it?"
    ),
    choices=(
        ScenarioChoice(
            id="repair-add-finance",
            label="Add the €1,200 repair cost to the finance",
            transition=Transition(TransitionKind.ADD_TO_PRINCIPAL, amount=Decimal("1200")),
            explanation=(
                "You financed the repair. This spreads the cost but increases your "
                "total interest paid."
            ),
            next_node_id=3,
        ),
        ScenarioChoice(
            id="repair-pay-cash",
            label="Pay the repair using savings",
            transition=KEEP,
            explanation=(
                "You used savings to cover the repair. No change to the loan, "
                "but your emergency fund is reduced."
            ),
            next_node_id=3,
        ),
    ),
)

RUNNING_COSTS_INCREASE = ScenarioNode(
    id=3,
    title="Insurance & Running Costs Increase",
    description=(
        "Insurance prices and fuel costs have increased. Your monthly car-related expenses "
        "rise by €45. You need more room in your budget."
    ),
    choices=(
        ScenarioChoice(
            id="extend-term-running-costs",
            label="Extend the finance term by 12 months to lower monthly repayments",
            transition=Transition(TransitionKind.CHANGE_TERM, term_delta=12),
            explanation=(
                "You reduced monthly repayments to help cover rising costs, but extending "
                "the term increases the total interest paid."
            ),
            next_node_id=4,
        ),
        ScenarioChoice(
            id="keep-term-running-costs",
            label="Keep the same loan term and adjust your budget elsewhere",
            transition=KEEP,
            explanation=(
                "You chose not to adjust the loan. Your repayments remain the same, "
                "but your budget becomes tighter."
            ),
            next_node_id=4,
        ),
    ),
)

BONUS_LUMP_SUM = ScenarioNode(
    id=4,
    title="Bonus Lump Sum",
    description=(
        "You receive a €2,000 bonus from work. You’re considering using it to reduce "
        "your finance balance."
    ),
    choices=(
        ScenarioChoice(
            id="bonus-repay-2000",
            label="Pay €2,000 off the finance balance",
            transition=Transition(TransitionKind.PAY_DOWN_PRINCIPAL, amount=Decimal("2000")),
            explanation=(
                "Paying down your principal early saves interest and may reduce the term "
                "or monthly repayments."
            ),
            next_node_id=5,
        ),
        ScenarioChoice(
            id="bonus-keep-cash",
            label="Keep the bonus in savings",
            transition=KEEP,
            explanation=(
                "The loan stays the same, but keeping savings gives you a larger emergency fund."
            ),
            next_node_id=5,
        ),
    ),
)

EARLY_SETTLEMENT_OFFER = ScenarioNode(
    id=5,
    title="Early Settlement Offer",
    description=(
        "Your lender offers a discounted settlement figure if you clear the finance now. "
        "You could use savings or borrow from family."
    ),
    choices=(
        ScenarioChoice(
            id="settle-now",
            label="Use savings to settle the loan now",
            transition=Transition(TransitionKind.SETTLE),
            explanation="You cleared the loan and saved interest, but used a large amount of savings.",
            next_node_id=6,
        ),
        ScenarioChoice(
            id="continue-loan",
            label="Continue with the current loan",
            transition=KEEP,
            explanation="You kept your savings for flexibility but will pay more interest over time.",
            next_node_id=6,
        ),
    ),
)

NEGATIVE_EQUITY_WARNING = ScenarioNode(
    id=6,
    title="Negative Equity Warning",
    description=(
        "Car values have fallen. You may soon owe more than the car is worth. "
        "What do you want to do?"
    ),
    choices=(
        ScenarioChoice(
            id="reduce-term",
            label="Reduce the term by 6 months to lower negative equity risk",
            transition=Transition(TransitionKind.CHANGE_TERM, term_delta=-6, min_term=1),
            explanation=(
                "You will clear the loan faster and reduce the time spent in negative equity, "
                "but monthly repayments increase."
            ),
        ),
        ScenarioChoice(
            id="keep-term",
            label="Keep the same repayment schedule",
            transition=KEEP,
            explanation=(
                "Your monthly payments stay affordable, but you may remain in negative equity "
                "for longer."
            ),
        ),
    ),
)

CAR_FINANCE_SCENARIOS = ScenarioGraph(
    nodes=(
        INTEREST_RATE_INCREASE,
        MISSED_PAYMENT,
        UNEXPECTED_REPAIR_BILL,
        RUNNING_COSTS_INCREASE,
        BONUS_LUMP_SUM,
        EARLY_SETTLEMENT_OFFER,
        NEGATIVE_EQUITY_WARNING,
    )
)
