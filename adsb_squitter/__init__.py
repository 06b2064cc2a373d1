"""adsb-squitter: Mode S extended squitter decoding and WGS84 positions."""

__version__ = "0.1.0"
