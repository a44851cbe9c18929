# receipt.py
# turning bill results (pence) into text for the page and the csv download

import csv
import io

CURRENCIES = {
    "GBP": "£",
    "EUR": "€",
    "USD": "$",
}
DEFAULT_CURRENCY = "GBP"

RECEIPT_FIELDS = ["Qty", "Item", "Line"]


def format_price(pence, currency=DEFAULT_CURRENCY):
    """194 -> '£1.94'. Integer maths so there's no float rounding."""
    symbol = CURRENCIES[currency]
    sign = "-" if pence < 0 else ""
    pounds, rest = divmod(abs(pence), 100)
    return f"{sign}{symbol}{pounds}.{rest:02d}"


def discount_text(discount, quantity, currency=DEFAULT_CURRENCY):
    # e.g. " (£2.50 off for buying 3)", nothing when no offer applied
    if discount > 0:
        return f" ({format_price(discount, currency)} off for buying {quantity})"
    return ""


def receipt_rows(result, currency=DEFAULT_CURRENCY):
    '''
    build rows for the receipt table (simple dicts), one per bill line

    Example: {"Qty": 3, "Item": "Dry Sherry, 1lt (£2.50 off for buying 3)", "Line": "£27.80"}
    '''
    return [
        {
            "Qty": line["quantity"],
            "Item": line["description"] + discount_text(line["discount_amount"], line["quantity"], currency),
            "Line": format_price(line["line_total"], currency),
        }
        for line in result["item_lines"]
    ]


def receipt_csv(rows):
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=RECEIPT_FIELDS)
    writer.writeheader()
    for r in rows:
        writer.writerow(r)
    return buf.getvalue()
