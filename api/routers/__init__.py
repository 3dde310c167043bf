"""API routers."""

from . import chart
from . import forecast
from . import health
from . import reference
from . import selection
from . import sessions

__all__ = ['chart', 'forecast', 'health', 'reference', 'selection', 'sessions']
