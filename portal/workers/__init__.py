"""Background timers driving time-dependent views."""
