"""devtmpl: compiles device configuration templates into Go registrations and a catalog."""

__version__ = "0.1.0"
