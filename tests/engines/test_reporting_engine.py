"""
POS Reporting Engine Tests
==========================
Pure aggregations over a small fixed data set:
- Sales analysis, top products, breakdowns
- Date windows and timezones
- Tax, profit & loss, expenses
- Stock valuation and the adjustment ledger
- Report registry
"""

from datetime import datetime, timezone

import pytest
import pytz

from core.entities import Discount, DiscountType, LineItem, PartyRef, Sale
from core.store import DomainStore, EntityKind
from core.time.temporal import DateRange
from engines.reporting.calculations import (
    COST_BASE,
    line_tax,
    sale_net_subtotal,
    safe_ratio,
    top_n,
)
from engines.reporting.registry import REPORT_REGISTRY, run_report
from engines.reporting.reports import (
    UNCATEGORIZED,
    UNKNOWN_CATEGORY,
    StockStatus,
    classify_stock,
    dashboard_summary,
    expense_report,
    profit_loss_report,
    purchase_sale_summary,
    sales_analysis,
    stock_adjustment_report,
    stock_report,
    tax_report,
    trending_products,
)

UTC = pytz.utc
FIVE_PERCENT = {"amount": 5, "type": "percentage"}


def _line(pid, qty, price, cost=0.0, tax=None, category=""):
    line = {"product_id": pid, "name": f"Product {pid}", "quantity": qty,
            "price": price, "cost_price": cost, "category_id": category}
    if tax:
        line["tax"] = tax
    return line


def _store() -> DomainStore:
    store = DomainStore()
    store.load(EntityKind.CATEGORY, [
        {"id": "C01", "name": "Coffee"},
        {"id": "C02", "name": "Pastry"},
    ])
    store.load(EntityKind.PAYMENT_METHOD, [
        {"id": "pay_cash", "name": "Cash"},
        {"id": "pay_card", "name": "Card"},
    ])
    store.load(EntityKind.PRODUCT, [
        {"id": "A", "name": "Product A", "category_id": "C01",
         "business_location_id": "LOC01", "price": 10.0, "cost_price": 4.0,
         "stock": 5, "reorder_point": 2, "tax": FIVE_PERCENT},
        {"id": "B", "name": "Product B", "category_id": "C02",
         "business_location_id": "LOC02", "price": 5.0, "cost_price": 2.0,
         "stock": 2, "reorder_point": 2},
        {"id": "C", "name": "Product C", "category_id": "C02",
         "business_location_id": "LOC01", "price": 3.0, "cost_price": 1.0,
         "stock": 0, "reorder_point": 1},
    ])
    walk_in = {"id": "CUST003", "name": "Walk-in Customer"}
    store.load(EntityKind.SALE, [
        {"id": "S1", "date": "2024-03-01T09:00:00Z", "customer": walk_in,
         "items": [_line("A", 1, 10.0, 4.0, FIVE_PERCENT, "C01"),
                   _line("B", 2, 5.0, 2.0, category="C02")],
         "payments": [{"method_id": "pay_cash", "amount": 20.0}], "total": 20.0},
        {"id": "S2", "date": "2024-03-02T23:59:59.500Z", "customer": walk_in,
         "items": [_line("A", 2, 10.0, 4.0, FIVE_PERCENT, "C01")],
         "payments": [{"method_id": "pay_card", "amount": 20.0}], "total": 20.0},
        {"id": "S3", "date": "2024-03-03T00:00:00Z", "customer": walk_in,
         "items": [_line("B", 10, 5.0, 2.0, category="C02")],
         "payments": [{"method_id": "pay_cash", "amount": 50.0}], "total": 50.0,
         "status": "voided"},
        {"id": "S4", "date": "2024-03-03T10:00:00Z", "customer": walk_in,
         "items": [dict(_line("X", 1, 4.0, 1.5, category="C09"), name="Old Mug")],
         "payments": [{"method_id": "pay_cash", "amount": 4.0}], "total": 4.0},
    ])
    store.load(EntityKind.CUSTOMER_RETURN, [
        {"id": "R1", "date": "2024-03-04T08:00:00Z", "original_sale_id": "S2",
         "customer": walk_in, "items": [_line("A", 1, 10.0, 4.0, FIVE_PERCENT)],
         "reason": "Cold", "total": 10.0},
    ])
    supplier = {"id": "SUP001", "name": "Global Coffee Beans"}
    store.load(EntityKind.PURCHASE, [
        {"id": "P1", "date": "2024-02-28T08:00:00Z", "supplier": supplier,
         "items": [_line("A", 10, 4.0, 4.0, FIVE_PERCENT)], "total": 40.0},
    ])
    store.load(EntityKind.PURCHASE_RETURN, [
        {"id": "PR1", "date": "2024-03-01T08:00:00Z", "supplier": supplier,
         "items": [_line("A", 2, 4.0, 4.0, FIVE_PERCENT)], "total": 8.0},
    ])
    store.load(EntityKind.EXPENSE_CATEGORY, [
        {"id": "EC01", "name": "Rent"},
        {"id": "EC02", "name": "Utilities"},
    ])
    store.load(EntityKind.EXPENSE, [
        {"id": "E1", "date": "2024-03-01T00:00:00Z", "category_id": "EC01", "amount": 100.0},
        {"id": "E2", "date": "2024-03-02T00:00:00Z", "category_id": "EC02", "amount": 30.5},
        {"id": "E3", "date": "2024-03-02T12:00:00Z", "category_id": "EC99", "amount": 10.0},
    ])
    store.load(EntityKind.STOCK_ADJUSTMENT, [
        {"id": "SA1", "date": "2024-03-01T10:00:00Z", "product_id": "A",
         "type": "addition", "quantity": 10, "reason": "Delivery"},
        {"id": "SA2", "date": "2024-03-02T10:00:00Z", "product_id": "A",
         "type": "subtraction", "quantity": 3, "reason": "Damaged goods"},
        {"id": "SA3", "date": "2024-03-05T10:00:00Z", "product_id": "B",
         "type": "addition", "quantity": 4, "reason": "Stock take"},
    ])
    return store


def _day(day: str, tz=UTC) -> DateRange:
    return DateRange(start=day, end=day, tz=tz)


# ══════════════════════════════════════════════════════════════
# CALCULATIONS
# ══════════════════════════════════════════════════════════════

class TestCalculations:
    def test_line_tax_on_cost_base(self):
        item = LineItem.from_dict(_line("A", 10, 10.0, 4.0, FIVE_PERCENT))
        assert line_tax(item) == pytest.approx(5.0)
        assert line_tax(item, COST_BASE) == pytest.approx(2.0)

    def test_fixed_tax_per_unit(self):
        item = LineItem.from_dict(_line("W", 3, 1.5, 0.5, {"amount": 0.25, "type": "fixed"}))
        assert line_tax(item) == pytest.approx(0.75)

    def test_unknown_base_rejected(self):
        item = LineItem.from_dict(_line("A", 1, 10.0))
        with pytest.raises(ValueError):
            line_tax(item, "msrp")

    def test_sale_net_subtotal_applies_discount(self):
        sale = Sale(
            id="S9",
            date=datetime(2024, 3, 1, tzinfo=timezone.utc),
            customer=PartyRef(id="CUST003"),
            items=(LineItem.from_dict(_line("A", 2, 10.0)),),
            discount=Discount(DiscountType.PERCENTAGE, 10),
        )
        assert sale_net_subtotal(sale) == pytest.approx(18.0)

    def test_safe_ratio(self):
        assert safe_ratio(10, 0) == 0.0
        assert safe_ratio(10, 4) == 2.5

    def test_top_n_is_stable(self):
        rows = [("first", 2), ("second", 5), ("third", 2), ("fourth", 5)]
        assert top_n(rows, lambda r: r[1], 3) == [
            ("second", 5), ("fourth", 5), ("first", 2),
        ]

    def test_top_n_rejects_negative(self):
        with pytest.raises(ValueError):
            top_n([], lambda r: r, -1)


# ══════════════════════════════════════════════════════════════
# SALES
# ══════════════════════════════════════════════════════════════

class TestSalesAnalysis:
    def test_totals_exclude_voided(self):
        result = sales_analysis(_store())
        assert result.total_revenue == pytest.approx(44.0)
        assert result.sale_count == 3
        assert result.avg_sale_value == pytest.approx(44.0 / 3)
        assert result.total_items_sold == 6

    def test_top_products(self):
        result = sales_analysis(_store())
        assert [p.product_id for p in result.top_products_by_quantity] == ["A", "B", "X"]
        assert result.top_products_by_revenue[0].revenue == pytest.approx(30.0)

    def test_deleted_product_keeps_line_name(self):
        result = sales_analysis(_store())
        by_id = {p.product_id: p for p in result.top_products_by_quantity}
        assert by_id["X"].name == "Old Mug"
        assert by_id["A"].name == "Product A"

    def test_top_limit(self):
        result = sales_analysis(_store(), top=1)
        assert len(result.top_products_by_quantity) == 1

    def test_revenue_by_category(self):
        rows = sales_analysis(_store()).revenue_by_category
        assert [(r.name, r.revenue) for r in rows] == [
            ("Coffee", 30.0), ("Pastry", 10.0), (UNKNOWN_CATEGORY, 4.0),
        ]

    def test_revenue_by_payment_method(self):
        rows = sales_analysis(_store()).revenue_by_payment_method
        assert [(r.id, r.name, r.revenue) for r in rows] == [
            ("pay_cash", "Cash", 24.0), ("pay_card", "Card", 20.0),
        ]

    def test_to_dict_nests_rows(self):
        data = sales_analysis(_store()).to_dict()
        assert data["top_products_by_quantity"][0]["product_id"] == "A"
        assert data["revenue_by_category"][0]["id"] == "C01"


class TestDateWindows:
    def test_end_of_day_is_inclusive(self):
        result = sales_analysis(_store(), _day("2024-03-02"))
        assert result.sale_count == 1
        assert result.total_revenue == pytest.approx(20.0)

    def test_next_midnight_excluded(self):
        # S3 sits at 00:00 on the 3rd and is voided; S4 is the only sale
        result = sales_analysis(_store(), _day("2024-03-03"))
        assert result.sale_count == 1

    def test_window_follows_timezone(self):
        result = sales_analysis(_store(), _day("2024-03-02", pytz.timezone("Africa/Blantyre")))
        assert result.sale_count == 0

    def test_empty_period_average_is_zero(self):
        result = sales_analysis(_store(), _day("2020-01-01"))
        assert result.total_revenue == 0
        assert result.avg_sale_value == 0
        assert result.top_products_by_quantity == ()

    def test_open_ended_range(self):
        result = sales_analysis(_store(), DateRange(start="2024-03-02", tz=UTC))
        assert result.sale_count == 2


class TestOtherSalesReports:
    def test_trending(self):
        rows = trending_products(_store(), top=2)
        assert [p.product_id for p in rows] == ["A", "B"]
        assert rows[0].quantity == 3

    def test_purchase_sale_summary(self):
        result = purchase_sale_summary(_store())
        assert result.gross_sales == pytest.approx(44.0)
        assert result.sales_returns == pytest.approx(10.0)
        assert result.net_sales == pytest.approx(34.0)
        assert result.gross_purchases == pytest.approx(40.0)
        assert result.net_purchases == pytest.approx(32.0)

    def test_dashboard(self):
        result = dashboard_summary(_store())
        assert result.total_revenue == pytest.approx(44.0)
        assert result.product_count == 3
        assert result.low_stock_count == 1
        assert result.customer_count == 0


# ══════════════════════════════════════════════════════════════
# FINANCE
# ══════════════════════════════════════════════════════════════

class TestTaxReport:
    def test_output_and_input_tax(self):
        result = tax_report(_store())
        assert result.output_tax == pytest.approx(1.0)
        assert result.input_tax == pytest.approx(1.6)
        assert result.net_tax_payable == pytest.approx(-0.6)

    def test_windowed(self):
        result = tax_report(_store(), _day("2024-03-01"))
        assert result.output_tax == pytest.approx(0.5)
        assert result.input_tax == pytest.approx(-0.4)


class TestProfitLoss:
    def test_statement(self):
        result = profit_loss_report(_store())
        assert result.gross_sales == pytest.approx(44.0)
        assert result.sales_returns == pytest.approx(10.0)
        assert result.net_sales == pytest.approx(34.0)
        assert result.cost_of_goods_sold == pytest.approx(13.5)
        assert result.gross_profit == pytest.approx(20.5)
        assert result.total_expenses == pytest.approx(140.5)
        assert result.net_profit == pytest.approx(-120.0)

    def test_expense_breakdown(self):
        rows = profit_loss_report(_store()).expenses_by_category
        assert [(r.name, r.total) for r in rows] == [
            ("Rent", 100.0), ("Utilities", 30.5), (UNCATEGORIZED, 10.0),
        ]


class TestExpenseReport:
    def test_newest_first(self):
        result = expense_report(_store())
        assert [e.id for e in result.entries] == ["E3", "E2", "E1"]
        assert result.total == pytest.approx(140.5)

    def test_category_filter(self):
        result = expense_report(_store(), category_id="EC01")
        assert [e.id for e in result.entries] == ["E1"]
        assert result.total == pytest.approx(100.0)

    def test_naive_update_date_sorts_with_aware_dates(self):
        store = _store()
        expense = store.get(EntityKind.EXPENSE, "E1").to_dict()
        expense["date"] = "2024-03-03T10:00:00"
        store.update_entity(EntityKind.EXPENSE, "E1", expense)
        result = expense_report(store)
        assert [e.id for e in result.entries] == ["E1", "E3", "E2"]
        assert result.entries[0].date == datetime(2024, 3, 3, 10, 0, tzinfo=timezone.utc)

    def test_naive_loaded_date_in_window(self):
        store = _store()
        store.load(EntityKind.EXPENSE, [
            {"id": "E9", "date": "2024-03-04T23:30:00", "category_id": "EC01", "amount": 5.0},
        ])
        window = DateRange("2024-03-04", "2024-03-04", tz=pytz.utc)
        assert [e.id for e in expense_report(store, date_range=window).entries] == ["E9"]


# ══════════════════════════════════════════════════════════════
# STOCK
# ══════════════════════════════════════════════════════════════

class TestStockReport:
    def test_classification(self):
        assert classify_stock(0, 5) == StockStatus.OUT_OF_STOCK
        assert classify_stock(-2, 0) == StockStatus.OUT_OF_STOCK
        assert classify_stock(5, 5) == StockStatus.LOW_STOCK
        assert classify_stock(6, 5) == StockStatus.IN_STOCK

    def test_valuation(self):
        result = stock_report(_store())
        assert [r.product_id for r in result.rows] == ["A", "B", "C"]
        assert result.total_units == 7
        assert result.total_cost_value == pytest.approx(24.0)
        assert result.total_price_value == pytest.approx(60.0)
        assert result.low_stock_count == 1
        assert result.out_of_stock_count == 1
        assert result.to_dict()["rows"][2]["status"] == "out_of_stock"

    def test_filters(self):
        assert [r.product_id for r in stock_report(_store(), location_id="LOC01").rows] == [
            "A", "C",
        ]
        assert [r.product_id for r in stock_report(_store(), category_id="C02").rows] == [
            "B", "C",
        ]

    def test_sort(self):
        rows = stock_report(_store(), sort_by="stock").rows
        assert [r.product_id for r in rows] == ["C", "B", "A"]
        rows = stock_report(_store(), sort_by="stock", descending=True).rows
        assert [r.product_id for r in rows] == ["A", "B", "C"]

    def test_sort_ties_keep_catalog_order(self):
        rows = stock_report(_store(), sort_by="category_id", descending=True).rows
        assert [r.product_id for r in rows] == ["B", "C", "A"]

    def test_unknown_column(self):
        with pytest.raises(ValueError, match="Unknown stock report column"):
            stock_report(_store(), sort_by="colour")


class TestStockAdjustmentReport:
    def test_totals(self):
        result = stock_adjustment_report(_store())
        assert (result.total_added, result.total_subtracted, result.net) == (14, 3, 11)

    def test_filters(self):
        result = stock_adjustment_report(_store(), product_id="A")
        assert result.net == 7
        result = stock_adjustment_report(_store(), adjustment_type="subtraction")
        assert [e.id for e in result.entries] == ["SA2"]

    def test_window(self):
        window = DateRange(start="2024-03-01", end="2024-03-02", tz=UTC)
        result = stock_adjustment_report(_store(), window)
        assert [e.id for e in result.entries] == ["SA1", "SA2"]


# ══════════════════════════════════════════════════════════════
# REGISTRY
# ══════════════════════════════════════════════════════════════

class TestReportRegistry:
    def test_names(self):
        assert set(REPORT_REGISTRY) == {
            "purchase-sale", "sales-analysis", "stock", "stock-adjustment", "tax",
            "profit-loss", "expenses", "trending-products", "dashboard",
        }

    def test_run_returns_dict(self):
        data = run_report("sales-analysis", _store(), DateRange.unbounded(UTC), {"top": "1"})
        assert data["sale_count"] == 3
        assert len(data["top_products_by_revenue"]) == 1

    def test_string_params_coerced(self):
        data = run_report(
            "stock", _store(), DateRange.unbounded(UTC),
            {"sort_by": "stock", "descending": "true"},
        )
        assert [r["product_id"] for r in data["rows"]] == ["A", "B", "C"]

    def test_trending_wraps_rows(self):
        data = run_report("trending-products", _store(), DateRange.unbounded(UTC))
        assert [p["product_id"] for p in data["products"]] == ["A", "B", "X"]

    def test_unknown_report(self):
        with pytest.raises(LookupError):
            run_report("weather", _store(), DateRange.unbounded(UTC))

    def test_unknown_param(self):
        with pytest.raises(ValueError, match="does not accept"):
            run_report("tax", _store(), DateRange.unbounded(UTC), {"top": 3})

    def test_bad_top(self):
        with pytest.raises(ValueError, match="top must be an integer"):
            run_report("sales-analysis", _store(), DateRange.unbounded(UTC), {"top": "lots"})
