"""Calendar-based task manager: date-keyed task store and category aggregation."""

__version__ = "0.1.0"
