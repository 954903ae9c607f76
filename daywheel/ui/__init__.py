from .timeline_dial import TimelineDial
