# stockdata.py
# the shop's stock list, multi-buy offers and a demo basket
# All prices are stored in pence; decimal formatting only happens on the receipt.

from billing import make_catalog, make_discounts

# Stock: (sku, description, unit price in pence)
STOCK = [
    (670, "Apples (pack of 5)", 194),
    (5243, "Bananas (1kg)", 268),
    (3317, "Oranges (pack of 5)", 150),
    (5712, "Pineapple", 259),
    (8903, "Mango", 75),
    (643, "Potatoes (2.5kg)", 198),
    (57, "Tomatoes (1kg)", 199),
    (56, "Onions (pack of 4)", 83),
    (1094, "Lettuce", 49),
    (2275, "Rice (1kg)", 148),
    (6034, "Pasta (1kg)", 120),
    (5907, "Bread (800g loaf)", 145),
    (3111, "Pizza (350g)", 260),
    (554, "Beef Mince (500g)", 199),
    (1373, "Chicken Breast (pack of 2)", 300),
    (6564, "Salmon Fillets (pack of 2)", 323),
    (7102, "Pasta Sauce (500g jar)", 184),
    (5079, "Curry Sauce (500g jar)", 184),
    (6386, "Cheese (250g)", 174),
    (347, "Butter (250g)", 152),
    (1019, "Plain Yoghurt (500g)", 94),
    (9190, "Milk (568ml / 1 pint)", 68),
    (6487, "Milk (2.27L / 4 pints)", 219),
    (4705, "Fresh Orange Juice (1L)", 169),
    (3263, "Cola (2L)", 99),
    (6469, "Beer (pack of 4 bottles)", 400),
    (5671, "Red wine (70cl bottle)", 750),
    (4719, "Fish Fingers (500g)", 335),
    (5643, "Soap Powder", 500),
    (1234, "Dry Sherry, 1lt", 1010),
]

# Multi-buy offers: (sku, buy this many, pence off each time)
DISCOUNTS = [
    (1234, 2, 250),
    (5671, 2, 125),
    (7102, 3, 50),
]

DEFAULT_BASKET = [670, 3317, 643, 1234, 5907, 6034, 670, 1234, 5671, 7102, 7102, 1094, 1373, 7102, 5671, 6469]


def stock_catalog():
    return make_catalog(STOCK)


def discount_registry():
    return make_discounts(DISCOUNTS)


def parse_basket(text):
    """
    read a basket typed as comma separated SKUs, e.g. "670, 670, 1234"

    returns (basket, rejected) where rejected holds the tokens that are not whole numbers
    """
    basket = []
    rejected = []
    for token in text.replace("\n", ",").split(","):
        token = token.strip()
        if not token:
            continue
        try:
            basket.append(int(token))
        except ValueError:
            rejected.append(token)
    return basket, rejected


def basket_as_text(basket):
    return ", ".join(str(sku) for sku in basket)
