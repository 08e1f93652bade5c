"""CivicPulse: match state bills to a citizen's policy positions and help them call about it."""

__version__ = "0.1.0"
