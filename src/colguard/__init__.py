"""ColGuard - column-level permissions for shared project spreadsheets."""

__version__ = "0.1.0"
