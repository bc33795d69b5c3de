"""Daily time-segment allocation engine."""
