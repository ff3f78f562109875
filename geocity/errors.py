class GeocityError(Exception):
    """Base class for generator errors"""


class InvalidCustomParameters(GeocityError):
    """Custom terrain overrides could not be applied"""


class UnknownProfile(GeocityError):
    """Terrain profile name is not in the catalog"""


class InvalidZonePlan(GeocityError, ValueError):
    """Zone plan has negative counts or non-positive sizes"""
