"""Approximate coordinates for San Francisco zip codes.

Used to resolve a zip code to a point for the Open States geo lookup.
"""

ZIP_COORDINATES: dict[str, tuple[float, float]] = {
    "94102": (37.7786, -122.4193),  # Civic Center
    "94103": (37.7726, -122.4110),  # SoMa
    "94104": (37.7915, -122.4018),  # Financial District
    "94105": (37.7893, -122.3951),  # Rincon Hill
    "94107": (37.7621, -122.3971),  # Potrero Hill
    "94108": (37.7929, -122.4080),  # Chinatown
    "94109": (37.7941, -122.4211),  # Nob Hill/Russian Hill
    "94110": (37.7486, -122.4154),  # Mission
    "94111": (37.7989, -122.4001),  # Embarcadero
    "94112": (37.7209, -122.4423),  # Ingleside
    "94114": (37.7585, -122.4352),  # Castro
    "94115": (37.7857, -122.4370),  # Western Addition
    "94116": (37.7436, -122.4862),  # Parkside
    "94117": (37.7702, -122.4447),  # Haight-Ashbury
    "94118": (37.7816, -122.4618),  # Inner Richmond
    "94121": (37.7768, -122.4941),  # Outer Richmond
    "94122": (37.7585, -122.4843),  # Sunset
    "94123": (37.8003, -122.4368),  # Marina
    "94124": (37.7318, -122.3877),  # Bayview
    "94127": (37.7359, -122.4570),  # St. Francis Wood
    "94129": (37.7996, -122.4662),  # Presidio
    "94130": (37.8235, -122.3707),  # Treasure Island
    "94131": (37.7416, -122.4378),  # Twin Peaks
    "94132": (37.7241, -122.4834),  # Lake Merced
    "94133": (37.8008, -122.4117),  # North Beach
    "94134": (37.7192, -122.4130),  # Visitacion Valley
    "94158": (37.7695, -122.3870),  # Mission Bay
}

# City Hall
DEFAULT_COORDINATES: tuple[float, float] = (37.7793, -122.4193)


def coordinates_for_zip(zip_code: str) -> tuple[float, float]:
    """Return (lat, lng) for a zip code, or City Hall when it's unknown."""
    return ZIP_COORDINATES.get(zip_code, DEFAULT_COORDINATES)
