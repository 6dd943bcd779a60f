"""WX150 module for logging an Airmar WX150 weather station.

This module provides:
- Byte-level line framing of the serial NMEA stream
- Parsing of $WIMDA weather, $GPGGA fix and $GPZDA date sentences
- Hourly rotating, semicolon-separated weather logs

Main components:
- wx150_core: Core functionality (framing, parsers, transports, handlers)
- main_wx150: Command-line entry point
"""
