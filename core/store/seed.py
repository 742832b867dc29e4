"""
POS Domain Store — Demo Seed Data
===================================
The demo data set: a small cafe with three locations, thirteen
products, four sales and the admin / manager / cashier roles.

build_demo_store() returns a fresh, fully loaded store signed in as
the demo administrator (USER001).
"""

from __future__ import annotations

from typing import Dict, List, Optional

from core.entities import LineItem, Product
from core.permissions.constants import ALL_PERMISSIONS
from core.store.domain_store import DomainStore
from core.store.ids import IdProvider
from core.store.kinds import EntityKind
from core.time.clock import Clock

DEMO_ADMIN_USER_ID = "USER001"


BUSINESS_LOCATIONS = [
    {"id": "LOC01", "name": "Main Warehouse"},
    {"id": "LOC02", "name": "Downtown Branch"},
    {"id": "LOC03", "name": "Westside Kiosk"},
]

PAYMENT_METHODS = [
    {"id": "pay_cash", "name": "Cash"},
    {"id": "pay_card", "name": "Card"},
    {"id": "pay_qr", "name": "QR Code"},
    {"id": "pay_nfc", "name": "NFC / Tap to Pay"},
    {"id": "pay_airtel", "name": "Airtel Money"},
    {"id": "pay_changu", "name": "PayChangu"},
    {"id": "pay_tnm", "name": "TNM Mpamba"},
    {"id": "pay_stripe", "name": "Stripe"},
    {"id": "pay_mo626", "name": "Mo626"},
]

CUSTOMER_GROUPS = [
    {"id": "CG001", "name": "Standard", "discount_percentage": 0},
    {"id": "CG002", "name": "Wholesale", "discount_percentage": 15},
    {"id": "CG003", "name": "VIP", "discount_percentage": 25},
]

CUSTOMERS = [
    {"id": "CUST001", "name": "John Doe", "email": "john.doe@example.com",
     "phone": "555-1234", "address": "123 Main St, Anytown", "customer_group_id": "CG003"},
    {"id": "CUST002", "name": "Jane Smith", "email": "jane.smith@example.com",
     "phone": "555-5678", "address": "456 Oak Ave, Anytown", "customer_group_id": "CG001"},
    {"id": "CUST003", "name": "Walk-in Customer", "customer_group_id": "CG001"},
    {"id": "CUST004", "name": "Bob Johnson", "email": "bob.j@example.com",
     "phone": "555-8765", "address": "789 Pine Ln, Anytown", "customer_group_id": "CG002"},
]

SUPPLIERS = [
    {"id": "SUP001", "name": "Global Coffee Beans", "company_name": "Global Coffee Inc.",
     "email": "sales@globalcoffee.com", "phone": "800-555-BEAN",
     "address": "1 Coffee Plaza, Beanville"},
    {"id": "SUP002", "name": "Premium Pastries Co.", "company_name": "Premium Pastries Co.",
     "email": "orders@premiumpastries.com", "phone": "800-555-CAKE",
     "address": "25 Pastry Path, Sweetville"},
    {"id": "SUP003", "name": "Beverage World", "company_name": "Beverage World LLC",
     "email": "contact@bevworld.com", "phone": "800-555-DRNK",
     "address": "500 Drink Dr, Thirston"},
]

BRANDS = [
    {"id": "B01", "name": "Morning Dew"},
    {"id": "B02", "name": "Sweet Treats"},
    {"id": "B03", "name": "AquaPure"},
    {"id": "B04", "name": "Fresh Fare"},
    {"id": "B05", "name": "VapeNation"},
    {"id": "B06", "name": "Hops & Barley"},
]

CATEGORIES = [
    {"id": "C01", "name": "Coffee"},
    {"id": "C02", "name": "Pastry"},
    {"id": "C03", "name": "Beverage"},
    {"id": "C04", "name": "Food"},
    {"id": "C05", "name": "Alcohol"},
    {"id": "C06", "name": "Tobacco"},
    {"id": "C07", "name": "CBD"},
]

_UNIT_NAMES = [
    ("Piece", "pc(s)"), ("Kilogram", "kg"), ("Gram", "g"), ("Liter", "l"),
    ("Milliliter", "ml"), ("Meter", "m"), ("Centimeter", "cm"), ("Millimeter", "mm"),
    ("Inch", "in"), ("Foot", "ft"), ("Ounce", "oz"), ("Pound", "lb"),
    ("Dozen", "dz"), ("Pack", "pk"), ("Box", "bx"), ("Carton", "ctn"),
    ("Bottle", "btl"), ("Can", "can"), ("Jar", "jar"), ("Roll", "roll"),
    ("Bag", "bag"), ("Pair", "pr"), ("Set", "set"), ("Sheet", "sht"),
    ("Bundle", "bndl"), ("Tray", "tray"), ("Tube", "tube"), ("Strip", "strip"),
    ("Tablet", "tab"), ("Serving", "serv"), ("Unit", "unit"),
]

UNITS = [
    {"id": f"U{i:02d}", "name": name, "short_name": short}
    for i, (name, short) in enumerate(_UNIT_NAMES, start=1)
]

VARIATIONS = [
    {"id": "V01", "name": "Size"},
    {"id": "V02", "name": "Color"},
    {"id": "V03", "name": "Material"},
]

VARIATION_VALUES = [
    {"id": "VV01", "variation_id": "V01", "name": "Small"},
    {"id": "VV02", "variation_id": "V01", "name": "Medium"},
    {"id": "VV03", "variation_id": "V01", "name": "Large"},
    {"id": "VV04", "variation_id": "V02", "name": "Red"},
    {"id": "VV05", "variation_id": "V02", "name": "Green"},
    {"id": "VV06", "variation_id": "V02", "name": "Blue"},
    {"id": "VV07", "variation_id": "V03", "name": "Cotton"},
    {"id": "VV08", "variation_id": "V03", "name": "Polyester"},
]


def _product(pid, name, category, brand, location, cost, price, stock, reorder,
             tax_amount=0, tax_type="percentage", description="", barcode="CODE128",
             age_restricted=False, not_for_sale=False) -> dict:
    n = pid[-3:]
    return {
        "id": pid, "name": name, "sku": f"SKU{n}",
        "category_id": category, "brand_id": brand, "unit_id": "U01",
        "business_location_id": location,
        "cost_price": cost, "price": price, "stock": stock, "reorder_point": reorder,
        "tax": {"amount": tax_amount, "type": tax_type},
        "is_age_restricted": age_restricted, "is_not_for_sale": not_for_sale,
        "product_type": "single", "description": description,
        "barcode_type": barcode,
        "image_url": f"https://picsum.photos/seed/{name.lower().replace(' ', '')}/400",
    }


PRODUCTS = [
    _product("PROD001", "Espresso", "C01", "B01", "LOC02", 1.20, 2.50, 115, 20, 5,
             description="A rich and aromatic shot of pure coffee."),
    _product("PROD002", "Latte", "C01", "B01", "LOC02", 1.50, 3.50, 80, 20, 5,
             description="Smooth espresso with steamed milk."),
    _product("PROD003", "Cappuccino", "C01", "B01", "LOC02", 1.50, 3.50, 75, 20,
             description="Espresso, steamed milk, and a deep layer of foam."),
    _product("PROD004", "Croissant", "C02", "B02", "LOC02", 1.10, 2.75, 50, 15,
             description="Buttery, flaky, and delicious."),
    _product("PROD005", "Muffin", "C02", "B02", "LOC01", 0.90, 2.25, 28, 10,
             description="A delightful baked treat."),
    _product("PROD006", "Iced Tea", "C03", "B03", "LOC01", 0.75, 2.00, 90, 25,
             description="Refreshing and cool."),
    _product("PROD007", "Mineral Water", "C03", "B03", "LOC03", 0.50, 1.50, 120, 30,
             0.25, "fixed", description="Pure and simple hydration.", barcode="EAN13"),
    _product("PROD008", "Sandwich", "C04", "B04", "LOC01", 2.50, 5.50, 30, 10,
             description="Freshly made sandwich.", barcode="UPC"),
    _product("PROD009", "Salad", "C04", "B04", "LOC01", 3.00, 6.50, 0, 5,
             description="Healthy and crisp salad.", not_for_sale=True),
    _product("PROD010", "Americano", "C01", "B01", "LOC02", 1.30, 3.00, 85, 20, 5,
             description="Espresso shots topped with hot water."),
    _product("PROD011", "Craft Beer", "C05", "B06", "LOC02", 2.80, 6.50, 48, 12, 10,
             description="Locally brewed IPA.", age_restricted=True),
    _product("PROD012", "Cigarettes", "C06", "B05", "LOC03", 5.00, 9.00, 30, 10,
             1.50, "fixed", description="Pack of 20.", barcode="UPC",
             age_restricted=True),
    _product("PROD013", "CBD Oil", "C07", "B05", "LOC01", 15.00, 35.00, 15, 5,
             description="500mg full spectrum oil.", age_restricted=True),
]

STOCK_ADJUSTMENTS = [
    {"id": "SA004", "date": "2023-10-30T10:00:00Z", "product_id": "PROD001",
     "type": "addition", "quantity": 15, "reason": "Stock correction"},
    {"id": "SA003", "date": "2023-10-29T11:00:00Z", "product_id": "PROD005",
     "type": "addition", "quantity": 20, "reason": "New shipment received"},
    {"id": "SA001", "date": "2023-10-28T09:00:00Z", "product_id": "PROD001",
     "type": "subtraction", "quantity": 2, "reason": "Damaged goods"},
    {"id": "SA002", "date": "2023-10-27T15:30:00Z", "product_id": "PROD008",
     "type": "addition", "quantity": 10, "reason": "Stock take correction"},
]

EXPENSE_CATEGORIES = [
    {"id": "EC01", "name": "Rent"},
    {"id": "EC02", "name": "Utilities"},
    {"id": "EC03", "name": "Supplies"},
    {"id": "EC04", "name": "Marketing"},
    {"id": "EC05", "name": "Salaries"},
]

EXPENSES = [
    {"id": "EXP01", "date": "2023-10-01T00:00:00Z", "category_id": "EC01",
     "amount": 2000, "description": "October Rent"},
    {"id": "EXP02", "date": "2023-10-15T00:00:00Z", "category_id": "EC02",
     "amount": 350, "description": "Electricity and Water"},
    {"id": "EXP03", "date": "2023-10-20T00:00:00Z", "category_id": "EC03",
     "amount": 150.75, "description": "Napkins, cups, and cleaning supplies"},
]

SHIPMENTS = [
    {"id": "SHIP001", "sale_id": "SALE001", "customer_name": "John Doe",
     "shipping_address": "123 Main St, Anytown",
     "tracking_number": "1Z999AA10123456784", "status": "shipped"},
    {"id": "SHIP002", "sale_id": "SALE004", "customer_name": "John Doe",
     "shipping_address": "123 Main St, Anytown",
     "tracking_number": "1Z999AA10123456785", "status": "processing"},
]

CUSTOMER_REQUESTS = [
    {"id": "CR001", "text": "A customer asked for gluten-free muffins.",
     "cashier_id": "USER003", "cashier_name": "Casey Cashier",
     "date": "2023-10-30T14:00:00Z"},
    {"id": "CR002", "text": "Several people wanted oat milk for their lattes today.",
     "cashier_id": "USER003", "cashier_name": "Casey Cashier",
     "date": "2023-10-30T14:00:00Z"},
    {"id": "CR003", "text": "Someone was looking for cold brew coffee.",
     "cashier_id": "USER004", "cashier_name": "David Jones",
     "date": "2023-10-29T18:00:00Z"},
]

PRODUCT_DOCUMENTS = [
    {"id": "DOC001", "name": "CBD Oil - Certificate of Analysis",
     "description": "3rd party lab results for batch #481516",
     "product_ids": ["PROD013"], "file_name": "COA_Batch_481516.pdf",
     "file_type": "coa"},
    {"id": "DOC002", "name": "Standard 1-Year Warranty",
     "description": "Limited 1-year warranty for electronic parts.",
     "product_ids": [], "file_name": "Standard_Warranty.pdf",
     "file_type": "warranty"},
]

_MANAGER_PERMISSIONS = [
    "dashboard:view",
    "products:view", "products:manage", "products:delete", "products:variations",
    "products:import", "products:import_stock", "products:import_units",
    "products:update_price", "products:documents",
    "contacts:view", "contacts:manage",
    "purchases:view", "purchases:manage",
    "sell:pos", "sell:sales", "sell:manage",
    "pos:apply_discount", "pos:change_price", "pos:process_return", "pos:void_sale",
    "shipping:view", "shipping:manage",
    "stock_adjustment:view", "stock_adjustment:manage",
    "reports:view", "reports:customer_demand",
    "users:view",
    "settings:view", "settings:tax", "settings:product", "settings:contact",
    "settings:sale", "settings:pos", "settings:purchases", "settings:payment",
    "settings:dashboard", "settings:system", "settings:prefixes", "settings:email",
    "settings:sms", "settings:reward_points", "settings:modules",
    "settings:custom_labels", "settings:locations",
]

ROLES = [
    {"id": "admin", "name": "Administrator",
     "description": "Has full access to all system features.",
     "permissions": sorted(ALL_PERMISSIONS - {"returns:view", "returns:manage",
                                              "reports:return_analysis"})},
    {"id": "manager", "name": "Manager (Supervisor)",
     "description": "Can manage products, sales, and contacts, and view reports.",
     "permissions": _MANAGER_PERMISSIONS},
    {"id": "cashier", "name": "Cashier",
     "description": "Limited to processing sales via POS and viewing products.",
     "permissions": ["products:view", "purchases:view", "sell:pos", "shipping:view"]},
]

USERS = [
    {"id": "USER001", "name": "Alice Admin", "email": "alice.admin@example.com",
     "role_id": "admin"},
    {"id": "USER002", "name": "Mike Supervisor", "email": "mike.manager@example.com",
     "role_id": "manager"},
    {"id": "USER003", "name": "Casey Cashier", "email": "casey.cashier@example.com",
     "role_id": "cashier"},
    {"id": "USER004", "name": "David Jones", "email": "david.jones@example.com",
     "role_id": "manager"},
]


# ══════════════════════════════════════════════════════════════
# TRANSACTIONS (built from product snapshots)
# ══════════════════════════════════════════════════════════════

def _line(products: Dict[str, Product], pid: str, quantity: int,
          price: Optional[float] = None) -> dict:
    return LineItem.from_product(products[pid], quantity, price).to_dict()


def _party(rows: List[dict], index: int) -> dict:
    return {"id": rows[index]["id"], "name": rows[index]["name"]}


def _transactions(products: Dict[str, Product]) -> Dict[EntityKind, List[dict]]:
    sales = [
        {"id": "SALE001", "date": "2023-10-27T10:00:00Z",
         "customer": _party(CUSTOMERS, 0),
         "items": [_line(products, "PROD001", 2), _line(products, "PROD004", 1)],
         "total": 7.75, "payments": [{"method_id": "pay_card", "amount": 7.75}],
         "passport_number": "AB123456", "nationality": "American",
         "status": "completed"},
        {"id": "SALE002", "date": "2023-10-27T10:15:00Z",
         "customer": _party(CUSTOMERS, 1),
         "items": [_line(products, "PROD002", 1)],
         "total": 3.50, "payments": [{"method_id": "pay_cash", "amount": 3.50}],
         "status": "completed"},
        {"id": "SALE003", "date": "2023-10-27T10:30:00Z",
         "customer": _party(CUSTOMERS, 2),
         "items": [_line(products, "PROD003", 1), _line(products, "PROD005", 2)],
         "total": 8.00, "payments": [{"method_id": "pay_airtel", "amount": 8.00}],
         "status": "completed"},
        {"id": "SALE004", "date": "2023-10-26T14:00:00Z",
         "customer": _party(CUSTOMERS, 0),
         "items": [_line(products, "PROD009", 2)],
         "total": 13.00, "payments": [{"method_id": "pay_cash", "amount": 13.00}],
         "status": "completed"},
    ]
    purchases = [
        {"id": "PO-001", "date": "2023-10-25T09:00:00Z",
         "supplier": _party(SUPPLIERS, 0),
         "items": [_line(products, "PROD001", 50, 1.25),
                   _line(products, "PROD002", 50, 1.50)],
         "total": 137.5},
        {"id": "PO-002", "date": "2023-10-26T11:00:00Z",
         "supplier": _party(SUPPLIERS, 1),
         "items": [_line(products, "PROD004", 100, 1.00)],
         "total": 100.0},
    ]
    purchase_returns = [
        {"id": "PR-001", "date": "2023-10-28T14:00:00Z",
         "supplier": _party(SUPPLIERS, 0),
         "items": [_line(products, "PROD001", 5, 1.25)],
         "total": 6.25},
    ]
    drafts = [
        {"id": "DRAFT001", "date": "2023-10-28T11:00:00Z",
         "customer": _party(CUSTOMERS, 3),
         "items": [_line(products, "PROD006", 5)], "total": 10.00},
    ]
    quotations = [
        {"id": "QUOT001", "date": "2023-10-25T16:00:00Z",
         "customer": _party(CUSTOMERS, 3),
         "items": [_line(products, "PROD001", 10), _line(products, "PROD002", 10)],
         "total": 60.00, "expiry_date": "2023-11-25T16:00:00Z"},
    ]
    stock_transfers = [
        {"id": "ST-001", "date": "2023-10-29T10:00:00Z",
         "from_location_id": "LOC01", "to_location_id": "LOC02",
         "items": [_line(products, "PROD001", 20)], "status": "in_transit"},
        {"id": "ST-002", "date": "2023-10-28T14:30:00Z",
         "from_location_id": "LOC01", "to_location_id": "LOC03",
         "items": [_line(products, "PROD007", 50)], "status": "completed"},
    ]
    return {
        EntityKind.SALE: sales,
        EntityKind.PURCHASE: purchases,
        EntityKind.PURCHASE_RETURN: purchase_returns,
        EntityKind.DRAFT: drafts,
        EntityKind.QUOTATION: quotations,
        EntityKind.STOCK_TRANSFER: stock_transfers,
    }


def build_demo_store(
    *,
    clock: Optional[Clock] = None,
    id_provider: Optional[IdProvider] = None,
    admin_role_id: str = "admin",
    current_user_id: Optional[str] = DEMO_ADMIN_USER_ID,
) -> DomainStore:
    """Fresh DomainStore loaded with the demo data set."""
    store = DomainStore(
        clock=clock, id_provider=id_provider, admin_role_id=admin_role_id
    )
    store.load(EntityKind.BUSINESS_LOCATION, BUSINESS_LOCATIONS)
    store.load(EntityKind.PAYMENT_METHOD, PAYMENT_METHODS)
    store.load(EntityKind.CUSTOMER_GROUP, CUSTOMER_GROUPS)
    store.load(EntityKind.CUSTOMER, CUSTOMERS)
    store.load(EntityKind.SUPPLIER, SUPPLIERS)
    store.load(EntityKind.BRAND, BRANDS)
    store.load(EntityKind.CATEGORY, CATEGORIES)
    store.load(EntityKind.UNIT, UNITS)
    store.load(EntityKind.VARIATION, VARIATIONS)
    store.load(EntityKind.VARIATION_VALUE, VARIATION_VALUES)
    store.load(EntityKind.PRODUCT, PRODUCTS)
    store.load(EntityKind.PRODUCT_DOCUMENT, PRODUCT_DOCUMENTS)
    store.load(EntityKind.STOCK_ADJUSTMENT, STOCK_ADJUSTMENTS)
    store.load(EntityKind.EXPENSE_CATEGORY, EXPENSE_CATEGORIES)
    store.load(EntityKind.EXPENSE, EXPENSES)
    store.load(EntityKind.SHIPMENT, SHIPMENTS)
    store.load(EntityKind.CUSTOMER_REQUEST, CUSTOMER_REQUESTS)
    store.load(EntityKind.ROLE, ROLES)
    store.load(EntityKind.USER, USERS)

    products = {p.id: p for p in store.list(EntityKind.PRODUCT)}
    for kind, rows in _transactions(products).items():
        store.load(kind, rows)

    if current_user_id is not None:
        store.set_current_user(current_user_id)
    return store
