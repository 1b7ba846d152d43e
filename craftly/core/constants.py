"""Core constants: cache key prefixes, collection defaults and shared literals.

Single source of truth for cache key structure and the profile defaults
written for every new account.
"""

# Cache key prefixes
CACHE_PREFIX_BUYER_ORDERS = "orders:buyer"
CACHE_PREFIX_SELLER_ORDERS = "orders:seller"
CACHE_PREFIX_PRODUCT_STATS = "product_stats"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Profile defaults (Dagupan City, Pangasinan)
DEFAULT_CITY = "Dagupan"
DEFAULT_POSTAL_CODE = "2400"
DEFAULT_COUNTRY = "Philippines"

# Recovery codes issued at sign-up
RECOVERY_CODES_PER_USER = 10

# Seller delivery defaults when the seller document has no explicit setting
DEFAULT_ALLOW_SHIPPING = True
DEFAULT_ALLOW_PICKUP = False

# Dashboard
LOW_STOCK_THRESHOLD = 5
RECENT_SALES_LIMIT = 5
