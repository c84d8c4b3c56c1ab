"""Parcel ownership, pricing, improvement and taxation."""
