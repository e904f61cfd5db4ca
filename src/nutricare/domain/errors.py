"""Domain exception hierarchy."""


class NutriCareError(Exception):
    """Base class for expected application errors."""
