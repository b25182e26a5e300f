"""Polling and extraction engine for Epson EcoTank printers.

Nothing in this package imports Home Assistant. The integration layer
provides the state sink, scheduler and executor the engine runs against.
"""
