"""A fixed-layout device database stored in a simulated paged EEPROM."""

__version__ = "0.1.0"
__all__ = ["database", "demo", "eeprom", "errors", "factory", "layout", "sensors"]