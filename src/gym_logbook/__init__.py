"""gym-logbook: rolling workout sequences, check-ins and analytics."""

__version__ = "0.1.0"
