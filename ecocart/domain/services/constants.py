# Constants for the eco-score engine.

# Rule scorer
BASELINE_SCORE = 50
SCORE_MIN = 0
SCORE_MAX = 100

# Rule adjustments: (field, keyword, points)
# List fields (materials, eco_tags) match by substring on the lower-cased joined list,
# descriptor fields (packaging, shipping_type) by case-insensitive equality.
RULE_RECYCLED = ("materials", "recycled", 15)
RULE_ORGANIC = ("materials", "organic", 10)
RULE_PLASTIC_PACKAGING = ("packaging", "plastic", -10)
RULE_AIR_SHIPPING = ("shipping_type", "air", -20)
RULE_REPAIRABLE = ("eco_tags", "repairable", 10)
RULE_FAIR_TRADE = ("eco_tags", "fair-trade", 15)

ALL_RULES = (
    RULE_RECYCLED,
    RULE_ORGANIC,
    RULE_PLASTIC_PACKAGING,
    RULE_AIR_SHIPPING,
    RULE_REPAIRABLE,
    RULE_FAIR_TRADE,
)

LIST_FIELDS = {"materials", "eco_tags"}

# Breakdown: every component starts at BREAKDOWN_BASE (5 x 10 = BASELINE_SCORE)
BREAKDOWN_BASE = 10
BREAKDOWN_MAX = 30  # per-component ceiling, tunable
BREAKDOWN_COMPONENT = {
    RULE_RECYCLED: "materials",
    RULE_ORGANIC: "materials",
    RULE_FAIR_TRADE: "ethics",
    RULE_PLASTIC_PACKAGING: "packaging",
    RULE_AIR_SHIPPING: "shipping",
    RULE_REPAIRABLE: "lifespan",
}

# Labels
LABEL_HIGH = "high"
LABEL_MEDIUM = "medium"
LABEL_LOW = "low"
ALL_LABELS = (LABEL_HIGH, LABEL_MEDIUM, LABEL_LOW)

# Best-effort classification when the model is missing or fails
DEFAULT_LABEL = LABEL_MEDIUM
DEFAULT_CONFIDENCE = 0.0

# Alternatives: candidate price within [base * PRICE_BAND_LOW, base * PRICE_BAND_HIGH] (+/-20%)
PRICE_BAND_LOW = 0.8
PRICE_BAND_HIGH = 1.2
PRICE_DECIMALS = 2  # band bounds are rounded to cents
