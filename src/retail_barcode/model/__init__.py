"""Domain model: symbology enum and barcode request/result dataclasses."""
