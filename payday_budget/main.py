import logging
from datetime import date
from decimal import Decimal

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import create_engine

from payday_budget.expenses import ExpenseCollection, PaydayConfig
from payday_budget.payday_projection import resolve_payday_date
from payday_budget.persistence import BudgetStateStore, decode_budget_state, encode_budget_state
from payday_budget.settings import configure_logging, load_settings
from payday_budget.snapshot import format_currency, on_expense_collection_changed, quantize_money

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.database_url, connect_args=connect_args)
state_store = BudgetStateStore(engine, default_pay_day=settings.default_pay_day)


@app.on_event("startup")
def init_db() -> None:
    state_store.create_schema()


def get_state_store() -> BudgetStateStore:
    return state_store


class ExpensePayload(BaseModel):
    name: str | None = ""
    amount: str | int | float | None = ""
    day: str | int | None = None


class BudgetStatePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    monthly_expenses: list[ExpensePayload] = Field(default_factory=list, alias="monthlyExpenses")
    weekly_expenses: list[ExpensePayload] = Field(default_factory=list, alias="weeklyExpenses")
    daily_expenses: list[ExpensePayload] = Field(default_factory=list, alias="dailyExpenses")
    pay_day: str | int | None = Field(default=None, alias="payDay")


class BudgetTotalsResponse(BaseModel):
    today: date
    payday_date: date
    monthly_total: Decimal
    payday_total: Decimal
    monthly_total_display: str
    payday_total_display: str


class BudgetResponse(BaseModel):
    state: BudgetStatePayload
    totals: BudgetTotalsResponse
    saved: bool | None = None


def parse_today(value: str | None) -> date:
    if value is None or not value.strip():
        return date.today()
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="today must be in YYYY-MM-DD format.") from exc


def decode_payload(payload: BudgetStatePayload, default_pay_day: int) -> tuple[ExpenseCollection, PaydayConfig]:
    return decode_budget_state(payload.model_dump(by_alias=True), default_pay_day=default_pay_day)


def build_totals(collection: ExpenseCollection, config: PaydayConfig, today: date) -> BudgetTotalsResponse:
    snapshot = on_expense_collection_changed(collection, config, today)
    return BudgetTotalsResponse(
        today=today,
        payday_date=resolve_payday_date(today, config.pay_day_of_month),
        monthly_total=quantize_money(snapshot.monthly_total),
        payday_total=quantize_money(snapshot.payday_total),
        monthly_total_display=format_currency(snapshot.monthly_total),
        payday_total_display=format_currency(snapshot.payday_total),
    )


def build_response(
    collection: ExpenseCollection,
    config: PaydayConfig,
    today: date,
    saved: bool | None = None,
) -> BudgetResponse:
    return BudgetResponse(
        state=BudgetStatePayload.model_validate(encode_budget_state(collection, config)),
        totals=build_totals(collection, config, today),
        saved=saved,
    )


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/budget", response_model=BudgetResponse, response_model_exclude_none=True)
def get_budget(
    today: str | None = Query(None),
    store: BudgetStateStore = Depends(get_state_store),
) -> BudgetResponse:
    resolved_today = parse_today(today)
    loaded = store.load()
    if loaded is None:
        collection, config = ExpenseCollection(), PaydayConfig(store.default_pay_day)
    else:
        collection, config = loaded
    return build_response(collection, config, resolved_today)


@app.put("/budget", response_model=BudgetResponse, response_model_exclude_none=True)
def save_budget(
    payload: BudgetStatePayload,
    today: str | None = Query(None),
    store: BudgetStateStore = Depends(get_state_store),
) -> BudgetResponse:
    resolved_today = parse_today(today)
    collection, config = decode_payload(payload, store.default_pay_day)
    saved = store.save(collection, config)
    if not saved:
        logger.warning("Budget state not saved; returning computed totals only")
    return build_response(collection, config, resolved_today, saved=saved)


@app.post("/budget/totals", response_model=BudgetTotalsResponse)
def budget_totals(
    payload: BudgetStatePayload,
    today: str | None = Query(None),
    store: BudgetStateStore = Depends(get_state_store),
) -> BudgetTotalsResponse:
    resolved_today = parse_today(today)
    collection, config = decode_payload(payload, store.default_pay_day)
    return build_totals(collection, config, resolved_today)
