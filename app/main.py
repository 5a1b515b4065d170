"""
Streamlit Frontend for Finance Calculator

The calculators page of the budgeting app: a basic calculator with
memory and history, plus expense-split, savings and EMI calculators.

DESIGN PRINCIPLES:
1. The UI renders state; it never does arithmetic itself
2. Buttons and typed keys go through the same dispatcher
3. Financial tabs recompute on every widget change
4. Leaving the basic calculator discards its state
"""

from typing import Optional

import streamlit as st

from finance_calculator.audit import AuditLogger, configure_logging
from finance_calculator.config import get_settings, validate_all_settings
from finance_calculator.engine import (
    BUTTON_LAYOUT,
    KEYBOARD_SHORTCUTS,
    amortization_schedule,
    render_display,
    render_pending,
)
from finance_calculator.formatting import format_amount, format_number
from finance_calculator.models import CalculatorMode, LoanInputs
from finance_calculator.services import (
    LocalKeyboardHost,
    NotificationLevel,
    NotifierInterface,
)
from finance_calculator.session import CalculatorSession, create_calculator_session


# Page configuration
st.set_page_config(
    page_title="Financial Calculators",
    page_icon="🧮",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        height: 3.2em;
        font-size: 1.1em;
    }
    .display-box {
        padding: 16px;
        background-color: #f1f3f5;
        border-radius: 10px;
        text-align: right;
        margin-bottom: 10px;
    }
    .display-pending {
        font-size: 0.9em;
        color: #6c757d;
        min-height: 1.4em;
    }
    .display-value {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
        overflow-x: auto;
        white-space: nowrap;
    }
    .display-error {
        color: #dc3545;
    }
    .result-box {
        padding: 20px;
        background-color: #cce5ff;
        border-radius: 10px;
        text-align: center;
        margin: 10px 0;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


TABS = {
    "🧮 Basic Calculator": CalculatorMode.BASIC,
    "👥 Expense Split": CalculatorMode.SPLIT,
    "🎯 Savings Calculator": CalculatorMode.SAVINGS,
    "💳 EMI Calculator": CalculatorMode.EMI,
}


class StreamlitNotifier(NotifierInterface):
    """Shows calculator notifications as Streamlit toasts."""

    _ICONS = {
        NotificationLevel.SUCCESS: "✅",
        NotificationLevel.INFO: "ℹ️",
        NotificationLevel.ERROR: "⚠️",
    }

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> None:
        st.toast(message, icon=self._ICONS.get(level))


@st.cache_resource
def get_audit_logger() -> AuditLogger:
    """Shared local-only audit logger (cached)."""
    configure_logging(get_settings().app.log_level)
    return AuditLogger()


def get_session() -> CalculatorSession:
    """The basic calculator session for this browser tab, mounted on first use."""
    if "calculator_session" not in st.session_state:
        session = create_calculator_session(
            notifier=StreamlitNotifier(),
            audit_logger=get_audit_logger(),
        )
        host = LocalKeyboardHost()
        session.mount(host)
        st.session_state.calculator_session = session
        st.session_state.keyboard_host = host
    return st.session_state.calculator_session


def release_session() -> None:
    """Unmount and discard the basic calculator session, if any."""
    session: Optional[CalculatorSession] = st.session_state.pop("calculator_session", None)
    st.session_state.pop("keyboard_host", None)
    if session is not None:
        session.unmount()


def main():
    """Main application entry point."""
    st.sidebar.title("🧮 Financial Calculators")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Calculator:",
        list(TABS),
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        """
        **Basic Calculator**
        Full-featured calculator with memory, history and keyboard input.

        **Expense Split**
        Split bills among friends with tax and tip.

        **Savings Calculator**
        Plan savings goals with compound interest.

        **EMI Calculator**
        Monthly installments for loans, with a full breakdown.
        """
    )

    status = validate_all_settings()
    for section in ("calculator", "finance", "app"):
        if not status.get(section, False):
            st.sidebar.error(f"❌ {section} settings - {status.get(f'{section}_error')}")

    mode = TABS[page]
    if mode != CalculatorMode.BASIC:
        release_session()

    try:
        if mode == CalculatorMode.BASIC:
            render_basic_page(get_session())
        elif mode == CalculatorMode.SPLIT:
            render_split_page()
        elif mode == CalculatorMode.SAVINGS:
            render_savings_page()
        elif mode == CalculatorMode.EMI:
            render_emi_page()
    except Exception as e:
        get_audit_logger().log_error(
            error_type="page_render_failed",
            error_message=str(e),
            details={"mode": mode.value},
        )
        st.error(f"Error: {str(e)}")


def _on_keys_typed():
    """Feed the typed characters through the keyboard path, then clear the box."""
    host: LocalKeyboardHost = st.session_state.keyboard_host
    host.type_text(st.session_state.typed_keys)
    st.session_state.typed_keys = ""


def render_basic_page(session: CalculatorSession):
    """Render the basic calculator."""
    st.title("🧮 Basic Calculator")

    col_main, col_history = st.columns([2, 1])

    with col_main:
        state = session.state
        value_class = "display-value display-error" if state.is_error else "display-value"
        st.markdown(f"""
        <div class="display-box">
            <div class="display-pending">{render_pending(state)}</div>
            <div class="{value_class}">{render_display(state)}</div>
        </div>
        """, unsafe_allow_html=True)

        st.markdown(f"**Memory:** {format_number(state.memory)}")

        for row_index, row in enumerate(BUTTON_LAYOUT):
            columns = st.columns(4)
            for column, label in zip(columns, row):
                with column:
                    st.button(
                        label,
                        key=f"btn-{row_index}-{label}",
                        on_click=session.press,
                        args=(label,),
                        type="primary" if label == "=" else "secondary",
                    )

        st.text_input(
            "⌨️ Type keys",
            key="typed_keys",
            on_change=_on_keys_typed,
            placeholder="e.g. 12*3= then press Enter",
            help="Characters are sent one by one, exactly like key presses",
        )

        with st.expander("Keyboard Shortcuts"):
            for keys, action in KEYBOARD_SHORTCUTS:
                st.markdown(f"`{keys}` {action}")

    with col_history:
        st.subheader("📜 Calculation History")
        history = session.state.history
        if history:
            for entry in history:
                st.code(entry, language=None)
            st.button("Clear History", on_click=session.clear_history)
        else:
            st.info("No calculations yet. Start calculating to see history here.")


def render_split_page():
    """Render the expense split calculator."""
    defaults = get_settings().finance
    st.title("👥 Expense Split")

    total_amount = st.text_input("Total Amount", placeholder="100.00")
    num_people = st.number_input("Number of People", min_value=1, value=defaults.split_num_people, step=1)
    tip = st.slider("Tip Percentage", 0.0, 50.0, defaults.split_tip_percentage, step=1.0)
    tax = st.slider("Tax Percentage", 0.0, 20.0, defaults.split_tax_percentage, step=0.5)
    round_up = st.checkbox("Round up to nearest whole amount")

    result = _evaluate(CalculatorMode.SPLIT, {
        "total_amount": total_amount,
        "num_people": num_people,
        "tip_percentage": tip,
        "tax_percentage": tax,
        "round_up": round_up,
    })

    per_person = format_number(result.per_person) if result.rounded else format_amount(result.per_person)
    st.markdown(f"""
    <div class="result-box">
        <p>Each person pays</p>
        <p class="big-number">{per_person}</p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)
    col1.metric("Total", format_amount(result.total))
    col2.metric("Tip", format_amount(result.tip_amount))
    col3.metric("Tax", format_amount(result.tax_amount))


def render_savings_page():
    """Render the savings calculator."""
    defaults = get_settings().finance
    st.title("🎯 Savings Calculator")

    col1, col2 = st.columns(2)
    with col1:
        principal = st.text_input("Initial Amount", value=format_number(defaults.savings_principal))
        annual_rate = st.text_input("Annual Interest Rate (%)", value=format_number(defaults.savings_annual_rate))
    with col2:
        contribution = st.text_input(
            "Monthly Contribution",
            value=format_number(defaults.savings_monthly_contribution),
        )
        years = st.text_input("Years to Save", value=format_number(defaults.savings_years))

    result = _evaluate(CalculatorMode.SAVINGS, {
        "principal": principal,
        "monthly_contribution": contribution,
        "annual_rate": annual_rate,
        "years": years,
    })

    st.markdown(f"""
    <div class="result-box">
        <p>Future Value</p>
        <p class="big-number">{format_amount(result.future_value)}</p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Invested", format_amount(result.total_invested))
    col2.metric("Interest Earned", format_amount(result.interest_earned))
    col3.metric("Return", f"{format_amount(result.roi_percent, 1)}%")


def render_emi_page():
    """Render the EMI calculator."""
    defaults = get_settings().finance
    st.title("💳 EMI Calculator")

    loan_amount = st.text_input("Loan Amount", value=format_number(defaults.emi_loan_amount))
    col1, col2 = st.columns(2)
    with col1:
        interest_rate = st.text_input("Interest Rate (%)", value=format_number(defaults.emi_interest_rate))
    with col2:
        loan_term = st.text_input("Loan Term (Years)", value=format_number(defaults.emi_loan_term))

    fields = {
        "loan_amount": loan_amount,
        "interest_rate": interest_rate,
        "loan_term": loan_term,
    }
    result = _evaluate(CalculatorMode.EMI, fields)

    st.markdown(f"""
    <div class="result-box">
        <p>Monthly EMI</p>
        <p class="big-number">{format_amount(result.emi)}</p>
    </div>
    """, unsafe_allow_html=True)

    col1, col2 = st.columns(2)
    col1.metric("Total Payment", format_amount(result.total_payment))
    col2.metric("Total Interest", format_amount(result.total_interest))

    with st.expander("📅 Amortization Schedule"):
        schedule = amortization_schedule(
            LoanInputs(**fields),
            max_months=defaults.max_schedule_months,
        )
        if schedule:
            st.dataframe(
                [row.model_dump() for row in schedule],
                hide_index=True,
                use_container_width=True,
            )
        else:
            st.info("Enter a loan amount and term to see the breakdown.")


def get_formula_session() -> CalculatorSession:
    """
    Session for the financial tabs of this browser tab.

    Never mounted: it only evaluates formulas, so their audit events
    share one session ID for as long as the tab lives.
    """
    if "formula_session" not in st.session_state:
        st.session_state.formula_session = CalculatorSession(audit_logger=get_audit_logger())
    return st.session_state.formula_session


def _evaluate(mode: CalculatorMode, fields: dict):
    """Recompute a financial tab (logs the evaluation)."""
    return get_formula_session().evaluate(mode, fields)


if __name__ == "__main__":
    main()
