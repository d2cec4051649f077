"""winrestore: restore Windows configuration from machine or shared backups."""

__version__ = "0.1.0"
