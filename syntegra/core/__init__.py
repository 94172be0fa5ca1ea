"""Core portal logic: exceptions, notifications, form shaping and workflows."""
