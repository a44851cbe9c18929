# app.py
# streamlit ui for the shopping bill calculator

from datetime import datetime
import logging
import streamlit as st

# bring in data, pricing and receipt helpers
from billing import compute, read_item
from receipt import CURRENCIES, DEFAULT_CURRENCY, format_price, receipt_csv, receipt_rows
from stockdata import DEFAULT_BASKET, basket_as_text, discount_registry, parse_basket, stock_catalog

logging.basicConfig(level=logging.INFO)
log = logging.getLogger("shopping_bill")

# registries are built once per run and only read afterwards
catalog = stock_catalog()
discounts = discount_registry()

# page header
st.set_page_config(page_title="Shopping Bill", layout="wide")
st.title("Shopping Bill")
st.caption("Multi-buy offers are applied automatically")

# markdown treats $ as maths, escape it so prices show literally
def md(text):
    return text.replace("$", "\\$")

# sidebar options
with st.sidebar:
    st.header("Options")
    currency = st.selectbox(
        "Currency",
        list(CURRENCIES.keys()),
        index=list(CURRENCIES.keys()).index(DEFAULT_CURRENCY),
        key="currency",
    )
    st.subheader("Offers")
    for sku, rule in discounts.items():
        desc = read_item(catalog, sku).description
        st.write(md(f"{desc}: {format_price(rule.amount_per_threshold, currency)} off every {rule.threshold_qty}"))

# stock list
with st.expander("Stock list", expanded=False):
    st.table(
        [
            {"SKU": item.sku, "Item": item.description, "Price": format_price(item.unit_price, currency)}
            for item in catalog.values()
        ]
    )

# basket
st.subheader("Basket")
if "basket_text" not in st.session_state:
    st.session_state["basket_text"] = basket_as_text(DEFAULT_BASKET)

st.text_area(
    "SKUs in the basket (comma separated, repeat a SKU to buy more)",
    key="basket_text",
    help="Unknown SKUs are left off the bill.",
)

basket, rejected = parse_basket(st.session_state["basket_text"])
if rejected:
    st.warning("Ignored, not a SKU: " + ", ".join(rejected))

# run the calculator
result = compute(basket, catalog, discounts)
log.info("bill for %d scanned items: %d lines, total %d", len(basket), len(result["item_lines"]), result["grand_total"])

rows = receipt_rows(result, currency)

# bill
st.subheader("Bill")

if not rows:
    # friendly hint when nothing on the basket is in stock
    st.info("Nothing to bill yet. Try adding 670 (apples) twice.")
else:
    st.table(rows)

st.success(md(f"Total: {format_price(result['grand_total'], currency)}"))

saved = sum(line["discount_amount"] for line in result["item_lines"])
if saved > 0:
    st.caption(md(f"Multi-buy savings: {format_price(saved, currency)}"))

# CSV download
if rows:
    today = datetime.now().strftime("%Y%m%d")
    st.download_button(
        label="Download bill (CSV)",
        data=receipt_csv(rows),
        file_name=f"bill_{today}.csv",
        mime="text/csv",
    )

# reset button
def _reset_basket():
    st.session_state["basket_text"] = basket_as_text(DEFAULT_BASKET)

st.button("Reset basket", on_click=_reset_basket)
