"""Users server: lists the users kept in a local SQLite file."""
