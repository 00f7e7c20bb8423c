"""Settings for the venueops project.

Each concern lives in its own module; they are aggregated here.
"""

from .base import *  # noqa: F403
from .celery import *  # noqa: F403
from .ninja import *  # noqa: F403
from .observability import *  # noqa: F403
