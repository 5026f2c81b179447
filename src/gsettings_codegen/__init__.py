"""Typed accessor generation for GSettings schemas."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
