"""
POS Reporting — Report Functions
==================================
Read-only aggregations over any ReportSource.
"""

from engines.reporting.reports.finance import (
    UNCATEGORIZED,
    CategoryTotal,
    ExpenseReport,
    ProfitLossReport,
    TaxReport,
    expense_report,
    profit_loss_report,
    tax_report,
)
from engines.reporting.reports.sales import (
    UNKNOWN_CATEGORY,
    UNKNOWN_PRODUCT,
    DashboardSummary,
    GroupRevenue,
    ProductPerformance,
    PurchaseSaleSummary,
    SalesAnalysis,
    dashboard_summary,
    purchase_sale_summary,
    sales_analysis,
    trending_products,
)
from engines.reporting.reports.stock import (
    StockAdjustmentReport,
    StockReport,
    StockRow,
    StockStatus,
    classify_stock,
    stock_adjustment_report,
    stock_report,
)

__all__ = [
    "UNCATEGORIZED",
    "UNKNOWN_CATEGORY",
    "UNKNOWN_PRODUCT",
    "CategoryTotal",
    "DashboardSummary",
    "ExpenseReport",
    "GroupRevenue",
    "ProductPerformance",
    "ProfitLossReport",
    "PurchaseSaleSummary",
    "SalesAnalysis",
    "StockAdjustmentReport",
    "StockReport",
    "StockRow",
    "StockStatus",
    "TaxReport",
    "classify_stock",
    "dashboard_summary",
    "expense_report",
    "profit_loss_report",
    "purchase_sale_summary",
    "sales_analysis",
    "stock_adjustment_report",
    "stock_report",
    "tax_report",
    "trending_products",
]
