import json
import os
from typing import Optional

from flask import Flask, Response, render_template, request

from fincalc.data_models import (
    CURRENCY,
    Frequency,
    INVESTMENT_DEFAULTS,
    LOAN_CATEGORIES,
    LOAN_DEFAULTS,
    LoanType,
    clamp_tenure,
)
from fincalc.engine import calculate_growth, calculate_loan
from fincalc.exceptions import ValidationError
from fincalc.formatter import (
    growth_report_filename,
    loan_report_filename,
    render_growth_report,
    render_growth_share_text,
    render_loan_report,
    render_loan_share_text,
)
from fincalc.insights import (
    balance_chart_points,
    break_even_month,
    growth_chart_points,
    interest_to_principal_percent,
    loan_breakdown,
    real_return_percent,
    recommended_monthly_income,
    total_return_percent,
    yearly_snapshot,
)

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")

LOAN_TYPE_VALUES = {t.value for t in LoanType}
SCHEDULE_PREVIEW_ROWS = 24
BREAKDOWN_PREVIEW_ROWS = 10


def _loan_fields(form) -> dict:
    """Collect the raw loan fields, applying the loan-type switch rules.

    When the loan type changed since the last submit, the rate is reset to the
    new type's default and the tenure is pulled into its range.
    """
    fields = {name: form.get(name, default).strip() for name, default in LOAN_DEFAULTS.items()}
    previous = form.get("previous_loan_type", fields["loan_type"])
    if fields["loan_type"] != previous and fields["loan_type"] in LOAN_TYPE_VALUES:
        loan_type = LoanType(fields["loan_type"])
        fields["interest_rate"] = f"{LOAN_CATEGORIES[loan_type].default_rate:g}"
        try:
            fields["tenure_years"] = str(clamp_tenure(loan_type, int(fields["tenure_years"])))
        except ValueError:
            pass  # left for the validator to report
    return fields


def _investment_fields(form) -> dict:
    return {name: form.get(name, default).strip() for name, default in INVESTMENT_DEFAULTS.items()}


def _is_reset(form) -> bool:
    return form.get("action") == "reset"


@app.route("/")
def index():
    return render_template(
        "index.html",
        loan_categories=LOAN_CATEGORIES,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.route("/emi", methods=["GET", "POST"])
def emi():
    fields = dict(LOAN_DEFAULTS)
    if request.method == "POST" and not _is_reset(request.form):
        fields = _loan_fields(request.form)
    elif request.method == "POST":
        # Reset keeps the selected loan type but restores its defaults.
        loan_type = request.form.get("loan_type", fields["loan_type"])
        if loan_type in LOAN_TYPE_VALUES:
            fields["loan_type"] = loan_type
            fields["interest_rate"] = f"{LOAN_CATEGORIES[LoanType(loan_type)].default_rate:g}"
            fields["tenure_years"] = str(clamp_tenure(LoanType(loan_type), int(fields["tenure_years"])))

    context = {"errors": {}, "loan": None, "result": None}
    try:
        loan, result, schedule = calculate_loan(**fields)
    except ValidationError as exc:
        context["errors"] = exc.messages()
    else:
        context.update(
            loan=loan,
            result=result,
            schedule=schedule[:SCHEDULE_PREVIEW_ROWS],
            truncated=max(0, len(schedule) - SCHEDULE_PREVIEW_ROWS),
            interest_share=interest_to_principal_percent(result, loan.principal),
            break_even=break_even_month(schedule),
            recommended_income=recommended_monthly_income(result),
            breakdown_payload=json.dumps(loan_breakdown(result, loan.principal)),
            balance_payload=json.dumps(balance_chart_points(schedule)),
            share_text=render_loan_share_text(loan, result),
        )

    return render_template(
        "emi.html",
        fields=fields,
        loan_categories=LOAN_CATEGORIES,
        currency=CURRENCY,
        asset_version=app.config["ASSET_VERSION"],
        **context,
    )


@app.route("/sip", methods=["GET", "POST"])
def sip():
    fields = dict(INVESTMENT_DEFAULTS)
    if request.method == "POST" and not _is_reset(request.form):
        fields = _investment_fields(request.form)
    # Display toggles only; they never reach the calculation.
    show_real = request.form.get("show_real", "1") == "1"
    by_year = request.form.get("chart_view", "year") == "year"

    context = {"errors": {}, "investment": None, "result": None}
    try:
        investment, result, breakdown = calculate_growth(**fields)
    except ValidationError as exc:
        context["errors"] = exc.messages()
    else:
        table_rows = yearly_snapshot(breakdown) if by_year else breakdown[:BREAKDOWN_PREVIEW_ROWS]
        context.update(
            investment=investment,
            result=result,
            table_rows=table_rows,
            truncated=0 if by_year else max(0, len(breakdown) - BREAKDOWN_PREVIEW_ROWS),
            total_return=total_return_percent(result),
            real_return=real_return_percent(result),
            chart_payload=json.dumps(growth_chart_points(breakdown, by_year)),
            share_text=render_growth_share_text(investment, result),
        )

    return render_template(
        "sip.html",
        fields=fields,
        frequencies=list(Frequency),
        show_real=show_real,
        by_year=by_year,
        currency=CURRENCY,
        asset_version=app.config["ASSET_VERSION"],
        **context,
    )


def _text_response(text: str, status: int = 200, filename: Optional[str] = None) -> Response:
    headers = {"Content-Disposition": f"attachment; filename={filename}"} if filename else {}
    return Response(text, status=status, mimetype="text/plain", headers=headers)


@app.post("/emi/report")
def emi_report():
    try:
        loan, result, schedule = calculate_loan(**_loan_fields(request.form))
    except ValidationError as exc:
        return _text_response("\n".join(exc.messages().values()), status=400)
    return _text_response(render_loan_report(loan, result, schedule), filename=loan_report_filename(loan))


@app.post("/sip/report")
def sip_report():
    try:
        investment, result, breakdown = calculate_growth(**_investment_fields(request.form))
    except ValidationError as exc:
        return _text_response("\n".join(exc.messages().values()), status=400)
    return _text_response(render_growth_report(investment, result, breakdown), filename=growth_report_filename())


if __name__ == "__main__":
    print("Starting financial calculators web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
