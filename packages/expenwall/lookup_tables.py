"""Static emoji and keyword tables plus their containment lookups.

Declaration order is significant: substring lookups walk the tables in
insertion order and the first hit wins (``"uber eats"`` is declared before
``"uber"`` so food delivery does not resolve to a cab).
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import NamedTuple

from .models import Category

DEFAULT_EMOJI = "📄"


class KeywordMapping(NamedTuple):
    category: Category
    subcategory: str
    emoji: str


CATEGORY_EMOJIS: Mapping[Category, str] = MappingProxyType(
    {
        Category.FOOD: "🍔",
        Category.TRANSPORT: "🚗",
        Category.UTILITIES: "💡",
        Category.ENTERTAINMENT: "🎬",
        Category.SHOPPING: "🛍️",
        Category.HEALTH: "💪",
        Category.GROCERIES: "🛒",
        Category.INCOME: "💰",
        Category.EDUCATION: "📚",
        Category.PERSONAL_CARE: "💇",
        Category.GOVERNMENT: "🏛️",
        Category.BANKING: "🏦",
        Category.OTHER: "📄",
    }
)

# Category -> ordered (subcategory, emoji) choices offered by pickers.
SUBCATEGORIES: Mapping[Category, tuple[tuple[str, str], ...]] = MappingProxyType(
    {
        Category.FOOD: (
            ("Restaurants", "🍽️"),
            ("Fast Food", "🍔"),
            ("Cafes", "☕"),
            ("Home Delivery", "🚚"),
            ("Bakery", "🥐"),
            ("Street Food", "🌮"),
            ("Fine Dining", "🍾"),
            ("Desserts", "🍰"),
            ("Beverages", "🧃"),
            ("Biryani", "🍛"),
            ("Pizza", "🍕"),
            ("Burger", "🍔"),
            ("Chinese Food", "🥡"),
            ("South Indian", "🥘"),
            ("North Indian", "🍛"),
        ),
        Category.TRANSPORT: (
            ("Fuel", "⛽"),
            ("Public Transport", "🚌"),
            ("Cab/Taxi", "🚕"),
            ("Bike Taxi", "🏍️"),
            ("Auto Rickshaw", "🛺"),
            ("Metro", "🚇"),
            ("Train", "🚂"),
            ("Flight", "✈️"),
            ("Bus", "🚌"),
            ("Tolls/FASTag", "🛣️"),
            ("Parking", "🅿️"),
            ("Vehicle Maintenance", "🔧"),
            ("Vehicle Insurance", "🛡️"),
            ("Bike Rental", "🚲"),
            ("Car Rental", "🚗"),
        ),
        Category.SHOPPING: (
            ("Clothing", "👕"),
            ("Electronics", "📱"),
            ("Home & Furniture", "🛋️"),
            ("Books", "📚"),
            ("Online Shopping", "📦"),
            ("Footwear", "👟"),
            ("Accessories", "👜"),
            ("Jewelry", "💍"),
            ("Toys", "🧸"),
            ("Sports Equipment", "⚽"),
            ("Stationery", "✏️"),
            ("Gifts", "🎁"),
        ),
        Category.GROCERIES: (
            ("Supermarket", "🛒"),
            ("Vegetables", "🥬"),
            ("Fruits", "🍎"),
            ("Dairy", "🥛"),
            ("Meat & Fish", "🍖"),
            ("Snacks", "🍿"),
            ("Beverages", "🧃"),
            ("Bakery Items", "🍞"),
            ("Household Items", "🧹"),
            ("Personal Care Products", "🧴"),
        ),
        Category.UTILITIES: (
            ("Electricity", "⚡"),
            ("Water", "💧"),
            ("Gas/LPG", "🔥"),
            ("Internet/Broadband", "🌐"),
            ("Mobile Recharge", "📱"),
            ("DTH/Cable TV", "📺"),
            ("Property Tax", "🏠"),
            ("Maintenance", "🔧"),
            ("Security", "🔒"),
            ("Cleaning Services", "🧹"),
        ),
        Category.ENTERTAINMENT: (
            ("Movies", "🎬"),
            ("OTT Subscriptions", "📺"),
            ("Events/Concerts", "🎫"),
            ("Gaming", "🎮"),
            ("Music Streaming", "🎵"),
            ("Sports Events", "🏟️"),
            ("Theatre", "🎭"),
            ("Amusement Parks", "🎡"),
            ("Books/Magazines", "📖"),
        ),
        Category.HEALTH: (
            ("Medicines", "💊"),
            ("Doctor Visits", "👨‍⚕️"),
            ("Hospital", "🏥"),
            ("Lab Tests", "🧪"),
            ("Gym/Fitness", "💪"),
            ("Yoga", "🧘"),
            ("Health Insurance", "🛡️"),
            ("Dental", "🦷"),
            ("Eye Care", "👓"),
            ("Supplements", "💊"),
        ),
        Category.EDUCATION: (
            ("School Fees", "🏫"),
            ("Tuition", "📚"),
            ("Online Courses", "💻"),
            ("Books", "📖"),
            ("Stationery", "✏️"),
            ("Exam Fees", "📝"),
            ("Educational Apps", "📱"),
            ("Study Materials", "📄"),
        ),
        Category.PERSONAL_CARE: (
            ("Salon/Spa", "💇"),
            ("Cosmetics", "💄"),
            ("Skincare", "🧴"),
            ("Grooming", "💈"),
            ("Massage", "💆"),
            ("Haircare", "🧴"),
        ),
        Category.GOVERNMENT: (
            ("Aadhaar", "🪪"),
            ("PAN Card", "📇"),
            ("Passport", "🛂"),
            ("Driving License", "🚗"),
            ("Vehicle Registration", "🚙"),
            ("Court Fees", "⚖️"),
            ("Postal Services", "📮"),
            ("Government Taxes", "💰"),
        ),
        Category.BANKING: (
            ("Credit Card Payment", "💳"),
            ("Loan EMI", "🏦"),
            ("Insurance Premium", "🛡️"),
            ("Mutual Funds", "📈"),
            ("Fixed Deposit", "💰"),
            ("Stocks", "📊"),
            ("Bank Charges", "🏦"),
        ),
    }
)

# Lowercase merchant substring -> emoji.
MERCHANT_EMOJI_MAP: Mapping[str, str] = MappingProxyType(
    {
        # Food delivery & restaurants
        "zomato": "🍔",
        "swiggy": "🍽️",
        "uber eats": "🍕",
        "dunzo": "🚚",
        "mcdonald": "🍔",
        "burger king": "🍔",
        "kfc": "🍗",
        "dominos": "🍕",
        "pizza hut": "🍕",
        "subway": "🥪",
        "starbucks": "☕",
        "cafe coffee day": "☕",
        "chaayos": "☕",
        "biryani": "🍛",
        "restaurant": "🍽️",
        # Transportation
        "uber": "🚕",
        "ola": "🚕",
        "rapido": "🏍️",
        "auto": "🛺",
        "taxi": "🚕",
        "metro": "🚇",
        "fuel": "⛽",
        "petrol": "⛽",
        "diesel": "⛽",
        "shell": "⛽",
        "hp petrol": "⛽",
        # Shopping
        "amazon": "📦",
        "flipkart": "🛒",
        "myntra": "👕",
        "ajio": "👗",
        "meesho": "🛍️",
        "d mart": "🛒",
        "dmart": "🛒",
        "big bazaar": "🛒",
        "reliance": "🛒",
        # Groceries
        "bigbasket": "🥬",
        "blinkit": "🚴",
        "zepto": "🚴",
        "instamart": "🛒",
        "milk": "🥛",
        "vegetables": "🥬",
        "fruits": "🍎",
        # Utilities
        "electricity": "⚡",
        "bescom": "⚡",
        "water": "💧",
        "gas": "🔥",
        "lpg": "🔥",
        "internet": "🌐",
        "jio": "📱",
        "airtel": "📱",
        "vi": "📱",
        # Entertainment
        "netflix": "🎬",
        "prime video": "📺",
        "hotstar": "📺",
        "spotify": "🎵",
        "bookmyshow": "🎫",
        # Person-to-person / transfers
        "transfer": "💸",
        "sent": "💸",
        "received": "💰",
        "upi": "💳",
        "gpay": "💳",
        "phonepe": "💳",
    }
)

# Lowercase keyword -> subcategory suggestion.
SUBCATEGORY_KEYWORDS: Mapping[str, KeywordMapping] = MappingProxyType(
    {
        "rapido": KeywordMapping(Category.TRANSPORT, "Bike Taxi", "🏍️"),
        "ola": KeywordMapping(Category.TRANSPORT, "Cab/Taxi", "🚕"),
        "uber": KeywordMapping(Category.TRANSPORT, "Cab/Taxi", "🚕"),
        "auto": KeywordMapping(Category.TRANSPORT, "Auto Rickshaw", "🛺"),
        "metro": KeywordMapping(Category.TRANSPORT, "Metro", "🚇"),
        "fuel": KeywordMapping(Category.TRANSPORT, "Fuel", "⛽"),
        "petrol": KeywordMapping(Category.TRANSPORT, "Fuel", "⛽"),
        "electricity": KeywordMapping(Category.UTILITIES, "Electricity", "⚡"),
        "bescom": KeywordMapping(Category.UTILITIES, "Electricity", "⚡"),
        "water": KeywordMapping(Category.UTILITIES, "Water", "💧"),
        "gas": KeywordMapping(Category.UTILITIES, "Gas/LPG", "🔥"),
        "internet": KeywordMapping(Category.UTILITIES, "Internet/Broadband", "🌐"),
        "biryani": KeywordMapping(Category.FOOD, "Biryani", "🍛"),
        "pizza": KeywordMapping(Category.FOOD, "Pizza", "🍕"),
        "burger": KeywordMapping(Category.FOOD, "Burger", "🍔"),
    }
)


def _clean(text: str | None) -> str:
    return (text or "").lower().strip()


def get_merchant_emoji(merchant: str | None) -> str:
    """Resolve a merchant string to an emoji.

    Exact key first, then the first declared key contained in the merchant,
    else :data:`DEFAULT_EMOJI`.
    """

    clean = _clean(merchant)
    if not clean:
        return DEFAULT_EMOJI
    exact = MERCHANT_EMOJI_MAP.get(clean)
    if exact is not None:
        return exact
    for key, emoji in MERCHANT_EMOJI_MAP.items():
        if key in clean:
            return emoji
    return DEFAULT_EMOJI


def get_category_emoji(category: Category | str | None) -> str:
    if not isinstance(category, str):
        return DEFAULT_EMOJI
    try:
        return CATEGORY_EMOJIS.get(Category(category), DEFAULT_EMOJI)
    except ValueError:
        return DEFAULT_EMOJI


def get_subcategory_emoji(subcategory: str | None) -> str:
    """Emoji of the first keyword related to ``subcategory`` by containment."""

    clean = _clean(subcategory)
    if not clean:
        return DEFAULT_EMOJI
    for keyword, mapping in SUBCATEGORY_KEYWORDS.items():
        if keyword in clean or clean in keyword:
            return mapping.emoji
    return DEFAULT_EMOJI


def subcategories_for(category: Category) -> tuple[str, ...]:
    return tuple(name for name, _emoji in SUBCATEGORIES.get(category, ()))


__all__ = [
    "DEFAULT_EMOJI",
    "KeywordMapping",
    "CATEGORY_EMOJIS",
    "SUBCATEGORIES",
    "MERCHANT_EMOJI_MAP",
    "SUBCATEGORY_KEYWORDS",
    "get_merchant_emoji",
    "get_category_emoji",
    "get_subcategory_emoji",
    "subcategories_for",
]
