"""SQLAlchemy models for StayQuote.

All models are imported here so that ``Base.metadata`` knows every table
before ``create_all`` runs. If you add a new model, import it in this file.
"""

from stayquote.models.addon import Addon
from stayquote.models.booking import Booking
from stayquote.models.room import Room
from stayquote.models.seasonal_rate import SeasonalRate

__all__ = [
    "Addon",
    "Booking",
    "Room",
    "SeasonalRate",
]
