"""Application-wide constants for the MiniBnB platform."""

BRAND_NAME = "MiniBnB"
API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = "Booking marketplace API for short-term rental listings"
API_VERSION = "1.0.0"

# Response cache key namespace
CACHE_KEY_PREFIX = "cache:"

# Availability query window when no end date is supplied
DEFAULT_AVAILABILITY_MONTHS = 3

# Pagination
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Listing defaults
DEFAULT_PROPERTY_TYPE = "Rental unit"

# Amenity catalogue: (slug, label, category)
AMENITY_CATEGORIES = {
    "essentials": "Essentials",
    "comfort": "Comfort",
    "outdoor": "Outdoor",
    "safety": "Safety",
    "services": "Services",
}

AMENITIES = [
    ("wifi", "Wifi", "essentials"),
    ("kitchen", "Kitchen", "essentials"),
    ("heating", "Heating", "essentials"),
    ("washer", "Washer", "essentials"),
    ("dryer", "Dryer", "essentials"),
    ("air_conditioning", "Air conditioning", "comfort"),
    ("tv", "TV", "comfort"),
    ("iron", "Iron", "comfort"),
    ("pool", "Pool", "outdoor"),
    ("garden", "Garden", "outdoor"),
    ("barbecue", "Barbecue", "outdoor"),
    ("parking", "Parking", "outdoor"),
    ("smoke_detector", "Smoke detector", "safety"),
    ("fire_extinguisher", "Fire extinguisher", "safety"),
    ("first_aid_kit", "First aid kit", "safety"),
    ("elevator", "Elevator", "services"),
    ("gym", "Gym", "services"),
    ("pet_friendly", "Pet friendly", "services"),
]
