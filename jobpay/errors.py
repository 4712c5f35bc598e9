"""Exception types raised by jobpay."""

from __future__ import annotations


class JobpayError(Exception):
    """Base class for errors the CLI reports and exits on."""


class ConfigError(JobpayError):
    """The configuration file or environment could not be used."""


class StoreError(JobpayError):
    """A job store read or write failed."""
