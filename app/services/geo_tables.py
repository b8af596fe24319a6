"""Static lookup tables for coarse US location resolution.

These are deliberately small: enough to attribute a visitor to a state and
a nearby city, not a geocoder.
"""

STATE_NAMES = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas",
    "CA": "California", "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware",
    "FL": "Florida", "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho",
    "IL": "Illinois", "IN": "Indiana", "IA": "Iowa", "KS": "Kansas",
    "KY": "Kentucky", "LA": "Louisiana", "ME": "Maine", "MD": "Maryland",
    "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota", "MS": "Mississippi",
    "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma",
    "OR": "Oregon", "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina",
    "SD": "South Dakota", "TN": "Tennessee", "TX": "Texas", "UT": "Utah",
    "VT": "Vermont", "VA": "Virginia", "WA": "Washington", "WV": "West Virginia",
    "WI": "Wisconsin", "WY": "Wyoming", "DC": "District of Columbia",
}

STATE_CODES = {name.lower(): code for code, name in STATE_NAMES.items()}

# (city, lat, lng)
STATE_CAPITALS = {
    "AL": ("Montgomery", 32.3668, -86.2999),
    "AK": ("Juneau", 58.2014, -134.4197),
    "AZ": ("Phoenix", 33.4484, -112.0740),
    "AR": ("Little Rock", 34.7465, -92.2896),
    "CA": ("Sacramento", 38.5767, -121.4934),
    "CO": ("Denver", 39.7392, -104.9903),
    "CT": ("Hartford", 41.7658, -72.6734),
    "DE": ("Dover", 39.1612, -75.5264),
    "FL": ("Tallahassee", 30.4518, -84.27277),
    "GA": ("Atlanta", 33.7490, -84.3880),
    "HI": ("Honolulu", 21.30895, -157.826182),
    "ID": ("Boise", 43.6150, -116.2023),
    "IL": ("Springfield", 39.78325, -89.650373),
    "IN": ("Indianapolis", 39.790942, -86.147685),
    "IA": ("Des Moines", 41.590939, -93.620866),
    "KS": ("Topeka", 39.04, -95.69),
    "KY": ("Frankfort", 38.194, -84.86),
    "LA": ("Baton Rouge", 30.45809, -91.140229),
    "ME": ("Augusta", 44.323535, -69.765261),
    "MD": ("Annapolis", 38.972945, -76.501157),
    "MA": ("Boston", 42.2352, -71.0275),
    "MI": ("Lansing", 42.354558, -84.955255),
    "MN": ("St. Paul", 44.95, -93.094),
    "MS": ("Jackson", 32.320, -90.207),
    "MO": ("Jefferson City", 38.572954, -92.189283),
    "MT": ("Helena", 46.595805, -112.027031),
    "NE": ("Lincoln", 40.809868, -96.675345),
    "NV": ("Carson City", 39.161921, -119.767409),
    "NH": ("Concord", 43.220093, -71.549896),
    "NJ": ("Trenton", 40.221741, -74.756138),
    "NM": ("Santa Fe", 35.667231, -105.964575),
    "NY": ("Albany", 42.659829, -73.781339),
    "NC": ("Raleigh", 35.771, -78.638),
    "ND": ("Bismarck", 46.813343, -100.779004),
    "OH": ("Columbus", 39.961176, -82.998794),
    "OK": ("Oklahoma City", 35.482309, -97.534994),
    "OR": ("Salem", 44.931109, -123.029159),
    "PA": ("Harrisburg", 40.269789, -76.875613),
    "RI": ("Providence", 41.82355, -71.422132),
    "SC": ("Columbia", 34.000, -81.035),
    "SD": ("Pierre", 44.367966, -100.336378),
    "TN": ("Nashville", 36.165, -86.784),
    "TX": ("Austin", 30.266667, -97.75),
    "UT": ("Salt Lake City", 40.777477, -111.888237),
    "VT": ("Montpelier", 44.26639, -72.580536),
    "VA": ("Richmond", 37.54, -77.46),
    "WA": ("Olympia", 47.042418, -122.893077),
    "WV": ("Charleston", 38.349497, -81.633294),
    "WI": ("Madison", 43.074722, -89.384444),
    "WY": ("Cheyenne", 41.145548, -104.802042),
    "DC": ("Washington", 38.9072, -77.0369),
}

# Reverse-geocoding targets for browser coordinates: (city, state code, lat, lng)
REFERENCE_CITIES = [
    ("Washington", "DC", 38.9072, -77.0369),
    ("New York", "NY", 40.7128, -74.0060),
    ("Los Angeles", "CA", 34.0522, -118.2437),
    ("Chicago", "IL", 41.8781, -87.6298),
    ("Houston", "TX", 29.7604, -95.3698),
    ("Phoenix", "AZ", 33.4484, -112.0740),
    ("Denver", "CO", 39.7392, -104.9903),
    ("Seattle", "WA", 47.6062, -122.3321),
    ("Miami", "FL", 25.7617, -80.1918),
    ("Boston", "MA", 42.3601, -71.0589),
]

# Approximate coordinates for header-reported cities, keyed by (city, state code)
CITY_COORDINATES = {
    ("washington", "DC"): (38.9072, -77.0369),
    ("new york", "NY"): (40.7128, -74.0060),
    ("los angeles", "CA"): (34.0522, -118.2437),
    ("chicago", "IL"): (41.8781, -87.6298),
    ("houston", "TX"): (29.7604, -95.3698),
    ("phoenix", "AZ"): (33.4484, -112.0740),
    ("denver", "CO"): (39.7392, -104.9903),
    ("seattle", "WA"): (47.6062, -122.3321),
    ("miami", "FL"): (25.7617, -80.1918),
    ("boston", "MA"): (42.3601, -71.0589),
    ("atlanta", "GA"): (33.7490, -84.3880),
    ("dallas", "TX"): (32.7767, -96.7970),
    ("san francisco", "CA"): (37.7749, -122.4194),
    ("philadelphia", "PA"): (39.9526, -75.1652),
    ("san diego", "CA"): (32.7157, -117.1611),
}

# Population centres used to pick a state for officials lookups by coordinates
STATE_CENTROIDS = {
    "DC": (38.9, -77.0),
    "CA": (36.7, -119.7),
    "TX": (31.9, -99.9),
    "FL": (27.8, -81.7),
    "NY": (42.2, -74.9),
    "PA": (40.3, -76.9),
    "IL": (40.3, -89.0),
    "OH": (40.4, -82.8),
    "GA": (33.0, -83.6),
    "NC": (35.6, -79.8),
    "MI": (43.3, -84.5),
    "NJ": (40.3, -74.5),
    "VA": (37.8, -78.2),
    "WA": (47.4, -121.5),
}

# Known ZIP codes: zip -> (state code, city, lat, lng)
ZIP_LOCATIONS = {
    "27713": ("NC", "Durham", 35.9119, -78.9182),
    "35801": ("AL", "Huntsville", 34.7304, -86.5861),
    "80301": ("CO", "Boulder", 40.0150, -105.2705),
    "73301": ("OK", "Oklahoma City", 35.4676, -97.5164),
    "48104": ("MI", "Ann Arbor", 42.2808, -83.7430),
    "19103": ("PA", "Philadelphia", 39.9526, -75.1652),
    "99501": ("AK", "Anchorage", 61.2181, -149.9003),
    "10001": ("NY", "New York", 40.7506, -73.9972),
    "20500": ("DC", "Washington", 38.8977, -77.0365),
    "60601": ("IL", "Chicago", 41.8857, -87.6225),
    "90012": ("CA", "Los Angeles", 34.0614, -118.2385),
    "98101": ("WA", "Seattle", 47.6101, -122.3344),
}

# Inclusive five-digit ZIP ranges per state. Ranges don't overlap; gaps
# (territories, unassigned prefixes) fall through to the default.
ZIP_RANGES = [
    (1001, 2791, "MA"),
    (2801, 2940, "RI"),
    (3031, 3897, "NH"),
    (3901, 4992, "ME"),
    (5001, 5907, "VT"),
    (6001, 6928, "CT"),
    (7001, 8989, "NJ"),
    (10001, 14975, "NY"),
    (15001, 19640, "PA"),
    (19701, 19980, "DE"),
    (20001, 20099, "DC"),
    (20100, 20199, "VA"),
    (20200, 20599, "DC"),
    (20600, 21999, "MD"),
    (22001, 24658, "VA"),
    (24701, 26886, "WV"),
    (27006, 28909, "NC"),
    (29001, 29948, "SC"),
    (30001, 31999, "GA"),
    (32004, 34997, "FL"),
    (35004, 36925, "AL"),
    (37010, 38589, "TN"),
    (38601, 39776, "MS"),
    (39800, 39999, "GA"),
    (40003, 42788, "KY"),
    (43001, 45999, "OH"),
    (46001, 47997, "IN"),
    (48001, 49971, "MI"),
    (50001, 52809, "IA"),
    (53001, 54990, "WI"),
    (55001, 56763, "MN"),
    (57001, 57799, "SD"),
    (58001, 58856, "ND"),
    (59001, 59937, "MT"),
    (60001, 62999, "IL"),
    (63001, 65899, "MO"),
    (66002, 67954, "KS"),
    (68001, 69367, "NE"),
    (70001, 71497, "LA"),
    (71601, 72959, "AR"),
    (73001, 74966, "OK"),
    (75001, 79999, "TX"),
    (80001, 81658, "CO"),
    (82001, 83128, "WY"),
    (83201, 83876, "ID"),
    (84001, 84784, "UT"),
    (85001, 86556, "AZ"),
    (87001, 88441, "NM"),
    (88510, 88589, "TX"),
    (88901, 89883, "NV"),
    (90001, 96162, "CA"),
    (96701, 96898, "HI"),
    (97001, 97920, "OR"),
    (98001, 99403, "WA"),
    (99501, 99950, "AK"),
]
